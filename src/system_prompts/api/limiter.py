"""
Rate limiting configuration using SlowAPI.

All clients share one secret key, so limits are keyed by client address.
"""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)

READ_LIMIT = os.getenv("RATE_LIMIT_READ", "120/minute")
WRITE_LIMIT = os.getenv("RATE_LIMIT_WRITE", "30/minute")

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[os.getenv("RATE_LIMIT_DEFAULT", "1000/hour")],
    headers_enabled=True,  # Include X-RateLimit-* headers in responses
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true",  # Disable in tests
)


def get_limiter_status() -> dict[str, str | bool]:
    """
    Get a structured dump of the rate limiter's configuration.

    Returns:
        Dictionary containing:
        - enabled: Whether rate limiting is active (bool)
        - read_limit: Limit applied to read endpoints
        - write_limit: Limit applied to mutating endpoints
        - key_function_type: How clients are identified
    """
    return {
        "enabled": limiter.enabled,
        "read_limit": READ_LIMIT,
        "write_limit": WRITE_LIMIT,
        "key_function_type": "remote-address",
    }
