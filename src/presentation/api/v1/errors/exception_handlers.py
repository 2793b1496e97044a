"""Global exception handlers for FastAPI application.

Converts request validation failures and unhandled exceptions to RFC 7807
Problem Details responses.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationErrorCode
from src.core.config import settings
from src.core.container import get_logger
from src.presentation.api.v1.errors.problem_details import ErrorDetail, ProblemDetails


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 Validation Failed.

    Args:
        request: FastAPI Request object
        exc: Pydantic validation failure raised by FastAPI

    Returns:
        JSONResponse with RFC 7807 ProblemDetails (400 Bad Request)
    """
    errors = [
        ErrorDetail(
            field=".".join(str(part) for part in err.get("loc", ()) if part != "body")
            or "body",
            code=str(err.get("type", "invalid")),
            message=str(err.get("msg", "Invalid value")),
        )
        for err in exc.errors()
    ]

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/"
        f"{ApplicationErrorCode.COMMAND_VALIDATION_FAILED.value}",
        title="Validation Failed",
        status=status.HTTP_400_BAD_REQUEST,
        detail="Request body or parameters are invalid",
        instance=str(request.url.path),
        errors=errors,
        retryable=False,
        trace_id=getattr(request.state, "trace_id", None),
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=problem.model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Prevents leaking stack traces or internal details to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse with RFC 7807 ProblemDetails (500 Internal Server Error)
    """
    trace_id = getattr(request.state, "trace_id", None)

    get_logger().error(
        "unhandled_exception",
        error=exc,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        errors=None,
        trace_id=trace_id,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(
        RequestValidationError,
        request_validation_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, generic_exception_handler)
