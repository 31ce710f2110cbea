"""Health check endpoints for the system prompts API."""

from fastapi import APIRouter, Request

from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status response indicating API is healthy
    """
    logger.debug("Health check (liveness) request received")
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """
    Readiness check endpoint.

    Reports ready once the prompts file can be read.

    Returns:
        Status response indicating API readiness
    """
    logger.debug("Readiness check request received")
    manager = request.app.state.prompt_manager
    manager.load_prompts()
    return {"status": "ready"}
