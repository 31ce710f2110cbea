"""
Utility modules for the system prompt store.

This module provides error handling, logging, and helper utilities.
"""

from system_prompts.utils.errors import (
    ConfigurationError,
    DefaultPromptDeletionError,
    DeserializeError,
    DirectoryError,
    NotFoundError,
    PromptFileError,
    RequestSizeError,
    SystemPromptError,
    ValidationError,
)
from system_prompts.utils.logging import get_logger, setup_logging
from system_prompts.utils.prompts import load_prompt

__all__ = [
    # Errors
    "SystemPromptError",
    "ConfigurationError",
    "DirectoryError",
    "PromptFileError",
    "DeserializeError",
    "ValidationError",
    "DefaultPromptDeletionError",
    "RequestSizeError",
    "NotFoundError",
    # Logging
    "get_logger",
    "setup_logging",
    # Prompts
    "load_prompt",
]
