"""Rules resource router.

RESTful endpoints for rate limit rule administration. Every successful
mutation is broadcast to enforcement nodes by RuleChangePublisher after the
write is committed.

Endpoints:
    GET    /api/v1/rules                    - List rules (optionally by rule set)
    POST   /api/v1/rules                    - Create rule
    DELETE /api/v1/rules?rule_set_id=...    - Delete every rule of a rule set
    GET    /api/v1/rules/{id}               - Get rule
    PUT    /api/v1/rules/{id}               - Replace rule
    DELETE /api/v1/rules/{id}               - Delete rule
    PATCH  /api/v1/rules/{id}/toggle        - Toggle enabled flag
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.errors import to_application_error
from src.application.services.rule_change_publisher import RuleChangePublisher
from src.core.container import get_rule_change_publisher
from src.core.result import Failure, Success
from src.domain.errors.rule_error import RuleError
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.rule_schemas import (
    RuleCreateRequest,
    RuleListResponse,
    RuleResponse,
    RuleSetDeleteResponse,
    RuleUpdateRequest,
)

router = APIRouter(prefix="/rules", tags=["Rules"])

RuleIdPath = Annotated[str, Path(description="Rule identifier")]

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"description": "Validation failed", "model": ProblemDetails},
    404: {"description": "Rule not found", "model": ProblemDetails},
    409: {"description": "Rule already exists", "model": ProblemDetails},
    503: {"description": "Rule storage unavailable (retryable)", "model": ProblemDetails},
}


def _error_response(request: Request, error: RuleError) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=to_application_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


@router.get(
    "",
    response_model=RuleListResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="List rules",
)
async def list_rules(
    request: Request,
    rule_set_id: Annotated[
        str | None, Query(description="Only return members of this rule set")
    ] = None,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleListResponse | JSONResponse:
    """List all rules, or the members of one rule set.

    An empty ``rule_set_id`` lists every rule, the same as omitting it.

    GET /api/v1/rules → 200 OK
    """
    if rule_set_id:
        result = await publisher.list_by_rule_set(rule_set_id)
    else:
        result = await publisher.list_all()

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=rules):
            return RuleListResponse.from_entities(rules)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RuleResponse,
    responses={
        400: _ERROR_RESPONSES[400],
        409: _ERROR_RESPONSES[409],
        503: _ERROR_RESPONSES[503],
    },
    summary="Create rule",
)
async def create_rule(
    request: Request,
    data: RuleCreateRequest,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleResponse | JSONResponse:
    """Create a new rule.

    POST /api/v1/rules → 201 Created

    Args:
        request: FastAPI request object.
        data: Complete rule description including its id.
        publisher: Rule change publisher (injected).

    Returns:
        RuleResponse on success (201 Created).
        JSONResponse with RFC 7807 error on failure (400/409/503).
    """
    result = await publisher.create(data.to_spec(data.id))

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=rule):
            return RuleResponse.from_entity(rule)


@router.delete(
    "",
    response_model=RuleSetDeleteResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="Delete rule set",
)
async def delete_rule_set(
    request: Request,
    rule_set_id: Annotated[str, Query(description="Rule set to delete")],
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleSetDeleteResponse | JSONResponse:
    """Delete every rule of a rule set. An unknown set deletes 0 rules.

    DELETE /api/v1/rules?rule_set_id=... → 200 OK
    """
    result = await publisher.delete_by_rule_set(rule_set_id)

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=deleted_count):
            return RuleSetDeleteResponse(
                rule_set_id=rule_set_id,
                deleted_count=deleted_count,
                message=f"Deleted {deleted_count} rule(s) from rule set '{rule_set_id}'",
            )


@router.get(
    "/{rule_id}",
    response_model=RuleResponse,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Get rule",
)
async def get_rule(
    request: Request,
    rule_id: RuleIdPath,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleResponse | JSONResponse:
    """GET /api/v1/rules/{id} → 200 OK"""
    result = await publisher.get_by_id(rule_id)

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=rule):
            return RuleResponse.from_entity(rule)


@router.put(
    "/{rule_id}",
    response_model=RuleResponse,
    responses={
        400: _ERROR_RESPONSES[400],
        404: _ERROR_RESPONSES[404],
        503: _ERROR_RESPONSES[503],
    },
    summary="Replace rule",
)
async def update_rule(
    request: Request,
    rule_id: RuleIdPath,
    data: RuleUpdateRequest,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleResponse | JSONResponse:
    """Replace every field of a rule except its id.

    PUT /api/v1/rules/{id} → 200 OK

    Fields omitted from the body take their defaults; nothing is merged with
    the stored rule.
    """
    result = await publisher.update(rule_id, data.to_spec(rule_id))

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=rule):
            return RuleResponse.from_entity(rule)


@router.delete(
    "/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Delete rule",
)
async def delete_rule(
    request: Request,
    rule_id: RuleIdPath,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> Response:
    """DELETE /api/v1/rules/{id} → 204 No Content"""
    result = await publisher.delete(rule_id)

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{rule_id}/toggle",
    response_model=RuleResponse,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Toggle rule",
)
async def toggle_rule(
    request: Request,
    rule_id: RuleIdPath,
    publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
) -> RuleResponse | JSONResponse:
    """Flip the enabled flag, keeping every other field.

    PATCH /api/v1/rules/{id}/toggle → 200 OK
    """
    result = await publisher.toggle_enabled(rule_id)

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case Success(value=rule):
            return RuleResponse.from_entity(rule)
