"""Data models for system prompts and the HTTP API."""

from system_prompts.models.api import (
    CreateSystemPromptRequest,
    MessageResponse,
    SearchPromptsRequest,
    SystemPromptResponse,
    SystemPromptsResponse,
    UpdateSystemPromptRequest,
)
from system_prompts.models.prompt import SystemPrompt, utc_now

__all__ = [
    "SystemPrompt",
    "utc_now",
    "CreateSystemPromptRequest",
    "UpdateSystemPromptRequest",
    "SearchPromptsRequest",
    "SystemPromptResponse",
    "SystemPromptsResponse",
    "MessageResponse",
]
