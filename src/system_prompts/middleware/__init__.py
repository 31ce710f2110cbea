"""
Middleware components for the system prompts API.

Provides request validation and security middleware for the FastAPI application.
"""

from system_prompts.middleware.request_size import request_size_validator
from system_prompts.middleware.security_headers import security_headers_middleware

__all__ = ["request_size_validator", "security_headers_middleware"]
