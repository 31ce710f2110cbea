"""
Security headers middleware.

Adds defensive HTTP headers to every API response.
"""

from fastapi import Request

from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)


def _is_https(request: Request) -> bool:
    # Reverse proxies report the original scheme in X-Forwarded-Proto
    return (
        request.url.scheme == "https"
        or request.headers.get("X-Forwarded-Proto", "").lower() == "https"
    )


async def security_headers_middleware(request: Request, call_next):  # type: ignore
    """Middleware to add security headers to all responses.

    Always sets X-Content-Type-Options, X-Frame-Options and X-XSS-Protection.
    Strict-Transport-Security is only sent for HTTPS requests.

    Args:
        request: FastAPI Request object
        call_next: Next middleware/route handler

    Returns:
        Response with security headers added
    """
    response = await call_next(request)

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"

    if _is_https(request):
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    logger.debug(
        "Security headers applied",
        extra={"path": str(request.url.path), "hsts": _is_https(request)},
    )
    return response
