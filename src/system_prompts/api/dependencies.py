"""Dependencies shared by the system prompt endpoints.

Provides secret key verification and access to the application's prompt
manager.
"""

import secrets

from fastapi import HTTPException, Request

from system_prompts.config import Settings
from system_prompts.store.manager import SystemPromptManager
from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def verify_secret_key(request: Request) -> None:
    """
    Check the shared secret header against the configured key.

    The header name comes from ``settings.secret_key_header`` (``X-Secret-Key``
    by default).

    Args:
        request: FastAPI request object

    Raises:
        HTTPException: 500 if the server has no secret key configured
        HTTPException: 401 if the header is missing or does not match
    """
    settings = get_settings(request)

    if not settings.api_secret_key:
        logger.critical("API_SECRET_KEY is not configured - refusing authenticated requests")
        raise HTTPException(
            status_code=500,
            detail="Authentication system misconfigured",
        )

    provided = request.headers.get(settings.secret_key_header)
    if not provided:
        logger.warning(
            "Secret key header missing",
            extra={"path": str(request.url.path), "header": settings.secret_key_header},
        )
        raise HTTPException(status_code=401, detail="Missing secret key")

    if not secrets.compare_digest(provided.encode("utf-8"), settings.api_secret_key.encode("utf-8")):
        logger.warning("Secret key mismatch", extra={"path": str(request.url.path)})
        raise HTTPException(status_code=401, detail="Invalid secret key")

    logger.debug("Secret key verified", extra={"path": str(request.url.path)})


def get_prompt_manager(request: Request) -> SystemPromptManager:
    """
    Return the app's prompt manager, initialized for this request.

    ``initialize()`` is idempotent; calling it per request recreates the
    built-in prompts if the prompts file was removed while the server runs.
    """
    manager: SystemPromptManager = request.app.state.prompt_manager
    manager.initialize()
    return manager
