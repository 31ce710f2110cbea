"""System prompt management endpoints.

Handlers are plain functions: every store call is blocking disk I/O, so
FastAPI runs them in its threadpool. Store errors propagate to the exception
handlers registered in ``system_prompts.main``, which map them to status codes.
"""

from fastapi import APIRouter, Depends, Query, Request, Response

from system_prompts.api.dependencies import get_prompt_manager, verify_secret_key
from system_prompts.api.limiter import READ_LIMIT, WRITE_LIMIT, limiter
from system_prompts.models.api import (
    CreateSystemPromptRequest,
    MessageResponse,
    SearchPromptsRequest,
    SystemPromptResponse,
    SystemPromptsResponse,
    UpdateSystemPromptRequest,
)
from system_prompts.models.prompt import SystemPrompt
from system_prompts.store.manager import SystemPromptManager
from system_prompts.utils.errors import NotFoundError
from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/system-prompts",
    tags=["system-prompts"],
    dependencies=[Depends(verify_secret_key)],
)


@router.get("", response_model=SystemPromptsResponse)
@limiter.limit(READ_LIMIT)
def list_system_prompts(
    request: Request,
    response: Response,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptsResponse:
    """List all system prompts sorted by name."""
    prompts = manager.list_prompts()
    logger.debug("System prompts listed", extra={"prompt_count": len(prompts)})
    return SystemPromptsResponse(prompts=prompts)


@router.post("", response_model=SystemPromptResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_system_prompt(
    request: Request,
    response: Response,
    body: CreateSystemPromptRequest,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptResponse:
    """
    Create a system prompt.

    Setting ``is_default`` demotes the current default prompt.

    Returns:
        The stored prompt (HTTP 201)
    """
    prompt = SystemPrompt.new(body.name, body.content)
    if body.description is not None:
        prompt = prompt.with_description(body.description)
    if body.tags is not None:
        prompt = prompt.with_tags(body.tags)
    if body.model_specific is not None:
        prompt = prompt.with_model_specific(body.model_specific)
    if body.is_default:
        prompt = prompt.set_as_default()

    created = manager.create_prompt(prompt)
    return SystemPromptResponse(prompt=created)


@router.post("/search", response_model=SystemPromptsResponse)
@limiter.limit(READ_LIMIT)
def search_system_prompts(
    request: Request,
    response: Response,
    body: SearchPromptsRequest,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptsResponse:
    """Return prompts carrying any of the requested tags."""
    prompts = manager.search_by_tags(body.tags)
    logger.debug(
        "System prompts searched by tags",
        extra={"tags": body.tags, "prompt_count": len(prompts)},
    )
    return SystemPromptsResponse(prompts=prompts)


@router.get("/default", response_model=SystemPromptResponse)
@limiter.limit(READ_LIMIT)
def get_default_system_prompt(
    request: Request,
    response: Response,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptResponse:
    prompt = manager.get_default_prompt()
    if prompt is None:
        raise NotFoundError("default", "No default system prompt found")
    return SystemPromptResponse(prompt=prompt)


@router.get("/resolve", response_model=SystemPromptResponse)
@limiter.limit(READ_LIMIT)
def resolve_system_prompt(
    request: Request,
    response: Response,
    model: str = Query(min_length=1, description="Model name, e.g. 'gpt-4o'"),
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptResponse:
    """
    Pick the prompt for a model.

    Exact ``model_specific`` match first, then partial match, then the
    default prompt.
    """
    prompt = manager.get_prompt_for_model(model)
    if prompt is None:
        raise NotFoundError(model, f"No system prompt found for model '{model}'")
    return SystemPromptResponse(prompt=prompt)


@router.get("/{prompt_id}", response_model=SystemPromptResponse)
@limiter.limit(READ_LIMIT)
def get_system_prompt(
    prompt_id: str,
    request: Request,
    response: Response,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptResponse:
    """Fetch a prompt by ID, falling back to a lookup by name."""
    return SystemPromptResponse(prompt=manager.find_prompt(prompt_id))


@router.put("/{prompt_id}", response_model=SystemPromptResponse)
@limiter.limit(WRITE_LIMIT)
def update_system_prompt(
    prompt_id: str,
    request: Request,
    response: Response,
    body: UpdateSystemPromptRequest,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> SystemPromptResponse:
    """
    Update selected fields of a prompt.

    Only fields present in the body change. A new ``content`` refreshes
    ``updated_at``.
    """

    def apply_changes(prompt: SystemPrompt) -> None:
        if body.name is not None:
            prompt.name = body.name
        if body.description is not None:
            prompt.description = body.description
        if body.content is not None:
            prompt.update_content(body.content)
        if body.tags is not None:
            prompt.tags = list(body.tags)
        if body.model_specific is not None:
            prompt.model_specific = body.model_specific

    updated = manager.modify_prompt(prompt_id, apply_changes)
    return SystemPromptResponse(prompt=updated)


@router.delete("/{prompt_id}", response_model=MessageResponse)
@limiter.limit(WRITE_LIMIT)
def delete_system_prompt(
    prompt_id: str,
    request: Request,
    response: Response,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> MessageResponse:
    """Delete a prompt. The default prompt cannot be deleted (HTTP 400)."""
    manager.delete_prompt(prompt_id)
    return MessageResponse(message="System prompt deleted successfully")


@router.post("/{prompt_id}/set-default", response_model=MessageResponse)
@limiter.limit(WRITE_LIMIT)
def set_default_system_prompt(
    prompt_id: str,
    request: Request,
    response: Response,
    manager: SystemPromptManager = Depends(get_prompt_manager),
) -> MessageResponse:
    manager.set_default_prompt(prompt_id)
    return MessageResponse(message="Default system prompt set successfully")
