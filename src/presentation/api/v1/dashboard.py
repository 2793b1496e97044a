"""Dashboard resource router.

Endpoints:
    GET /api/v1/dashboard/stats - Rule counters
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.application.errors import to_application_error
from src.application.services.dashboard_service import DashboardService
from src.core.container import get_dashboard_service
from src.core.result import Failure, Success
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.dashboard_schemas import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    responses={
        503: {"description": "Rule storage unavailable", "model": ProblemDetails}
    },
    summary="Dashboard statistics",
)
async def get_dashboard_stats(
    request: Request,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse | JSONResponse:
    """GET /api/v1/dashboard/stats → 200 OK"""
    result = await service.get_stats()

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=to_application_error(error),
                request=request,
                trace_id=get_trace_id() or "",
            )
        case Success(value=stats):
            return DashboardStatsResponse.from_dto(stats)
