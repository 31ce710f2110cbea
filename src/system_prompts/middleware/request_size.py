"""
Request size validation middleware.

Rejects request bodies larger than ``settings.max_request_body_size`` before
they reach a handler.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from system_prompts.utils.errors import RequestSizeError
from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)


async def request_size_validator(request: Request, call_next):  # type: ignore
    """Middleware to validate request body size.

    Checks the Content-Length header against the configured maximum and
    returns 413 Payload Too Large when it is exceeded. GET requests and health
    endpoints are not checked. A missing or unparsable Content-Length lets the
    request through.

    Args:
        request: FastAPI Request object
        call_next: Next middleware/route handler

    Returns:
        Response from next middleware/route handler or 413 error response
    """
    if request.method == "GET" or request.url.path.startswith("/health"):
        return await call_next(request)

    settings = request.app.state.settings

    content_length_header = request.headers.get("content-length")
    if content_length_header is None:
        return await call_next(request)

    try:
        content_length = int(content_length_header)
    except ValueError:
        return await call_next(request)

    if content_length > settings.max_request_body_size:
        error = RequestSizeError(content_length, settings.max_request_body_size)
        logger.warning(
            "Request body too large",
            extra={
                "actual_size": content_length,
                "max_size": settings.max_request_body_size,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=error.status_code,
            content={
                "error": error.error_code,
                "message": error.message,
                "actual_size_bytes": error.actual_size,
                "max_size_bytes": error.max_size,
            },
        )

    logger.debug(
        "Request size validation passed",
        extra={
            "content_length": content_length,
            "max_size": settings.max_request_body_size,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return await call_next(request)
