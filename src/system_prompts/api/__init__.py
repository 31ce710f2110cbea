"""
API endpoints for the system prompt store.

This module contains FastAPI routers for health checks and v1 API endpoints.
"""

from system_prompts.api.health import router as health_router
from system_prompts.api.v1.system_prompts import router as system_prompts_router

__all__ = ["health_router", "system_prompts_router"]
