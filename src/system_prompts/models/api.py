"""Request and response bodies for the system prompts HTTP API."""

from pydantic import BaseModel, Field

from system_prompts.models.prompt import SystemPrompt


class SystemPromptsResponse(BaseModel):
    """List of prompts."""

    prompts: list[SystemPrompt]


class SystemPromptResponse(BaseModel):
    """Single prompt."""

    prompt: SystemPrompt


class MessageResponse(BaseModel):
    """Confirmation message for operations that return no prompt."""

    message: str


class CreateSystemPromptRequest(BaseModel):
    """Body of ``POST /system-prompts``."""

    name: str = Field(min_length=1, description="Prompt label")
    content: str = Field(description="Prompt body")
    description: str | None = Field(default=None, description="Optional description")
    tags: list[str] | None = Field(default=None, description="Tags to attach")
    model_specific: str | None = Field(default=None, description="Target model family")
    is_default: bool | None = Field(default=None, description="Make this the default prompt")


class UpdateSystemPromptRequest(BaseModel):
    """
    Body of ``PUT /system-prompts/{id}``.

    Omitted fields keep their stored values. ``tags`` replaces the whole list.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    model_specific: str | None = None


class SearchPromptsRequest(BaseModel):
    """Body of ``POST /system-prompts/search``."""

    tags: list[str] = Field(description="Return prompts carrying any of these tags")
