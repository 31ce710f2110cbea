"""
Pure operations on a prompts collection.

A collection is a ``dict`` mapping prompt ID to ``SystemPrompt``. Functions
here never touch the filesystem and never mutate their input: mutating
operations return a new collection, queries return copies. The manager wraps
each of them in a load/save cycle.

Whenever several entries could match, they are visited in ``(name, id)``
order so results do not depend on file order.
"""

from collections.abc import Callable, Iterable

from system_prompts.models.prompt import SystemPrompt
from system_prompts.utils.errors import DefaultPromptDeletionError, NotFoundError
from system_prompts.utils.prompts import load_prompt

Collection = dict[str, SystemPrompt]

DEFAULT_PROMPT_NAME = "Default"
GPT_4_1_PROMPT_NAME = "GPT-4.1 Optimized"
GPT_4_1_MODEL = "gpt-4.1"


def ordered(collection: Collection) -> list[SystemPrompt]:
    """Entries sorted by name, ties broken by ID."""
    return sorted(collection.values(), key=lambda p: (p.name, p.id))


def copy_collection(collection: Collection) -> Collection:
    return {pid: prompt.model_copy(deep=True) for pid, prompt in collection.items()}


def _without_default(collection: Collection) -> Collection:
    updated = copy_collection(collection)
    for prompt in updated.values():
        prompt.is_default = False
    return updated


def seed_collection() -> Collection:
    """Build the two built-in prompts written on first initialization."""
    default_prompt = (
        SystemPrompt.new(DEFAULT_PROMPT_NAME, load_prompt("default_system"))
        .with_description("Default system prompt")
        .with_tags(["default"])
        .set_as_default()
    )
    gpt_prompt = (
        SystemPrompt.new(GPT_4_1_PROMPT_NAME, load_prompt("gpt_4_1_system"))
        .with_description("System prompt optimized for GPT-4.1 models")
        .with_model_specific(GPT_4_1_MODEL)
        .with_tags(["gpt-4", "optimized"])
    )
    return {default_prompt.id: default_prompt, gpt_prompt.id: gpt_prompt}


def insert_prompt(collection: Collection, prompt: SystemPrompt) -> Collection:
    """
    Add (or overwrite) ``prompt`` under its own ID.

    A default prompt demotes every existing entry first.
    """
    updated = _without_default(collection) if prompt.is_default else copy_collection(collection)
    updated[prompt.id] = prompt.model_copy(deep=True)
    return updated


def replace_prompt(collection: Collection, prompt_id: str, prompt: SystemPrompt) -> Collection:
    """
    Replace the entry at ``prompt_id`` wholesale.

    The stored value always keeps ``prompt_id`` as its ID.

    Raises:
        NotFoundError: If ``prompt_id`` is absent
    """
    if prompt_id not in collection:
        raise NotFoundError(prompt_id)

    updated = _without_default(collection) if prompt.is_default else copy_collection(collection)
    stored = prompt.model_copy(deep=True)
    stored.id = prompt_id
    updated[prompt_id] = stored
    return updated


def edit_prompt(
    collection: Collection, prompt_id: str, edit: Callable[[SystemPrompt], None]
) -> Collection:
    """
    Apply ``edit`` to a copy of the entry at ``prompt_id`` and store the result.

    ``edit`` sees the entry as currently stored, so fields it leaves alone keep
    their stored values.

    Raises:
        NotFoundError: If ``prompt_id`` is absent
    """
    if prompt_id not in collection:
        raise NotFoundError(prompt_id)

    prompt = collection[prompt_id].model_copy(deep=True)
    edit(prompt)
    return replace_prompt(collection, prompt_id, prompt)


def remove_prompt(collection: Collection, prompt_id: str) -> Collection:
    """
    Drop the entry at ``prompt_id``.

    Raises:
        NotFoundError: If ``prompt_id`` is absent
        DefaultPromptDeletionError: If the entry is the default prompt
    """
    prompt = collection.get(prompt_id)
    if prompt is None:
        raise NotFoundError(prompt_id)
    if prompt.is_default:
        raise DefaultPromptDeletionError(prompt_id)

    updated = copy_collection(collection)
    del updated[prompt_id]
    return updated


def assign_default(collection: Collection, prompt_id: str) -> Collection:
    """
    Make ``prompt_id`` the only default prompt.

    Raises:
        NotFoundError: If ``prompt_id`` is absent
    """
    if prompt_id not in collection:
        raise NotFoundError(prompt_id)

    updated = _without_default(collection)
    updated[prompt_id].is_default = True
    return updated


def find_by_name(collection: Collection, name: str) -> SystemPrompt | None:
    for prompt in ordered(collection):
        if prompt.name == name:
            return prompt.model_copy(deep=True)
    return None


def find_default(collection: Collection) -> SystemPrompt | None:
    for prompt in ordered(collection):
        if prompt.is_default:
            return prompt.model_copy(deep=True)
    return None


def find_for_model(collection: Collection, model: str) -> SystemPrompt | None:
    """
    Pick the prompt to use for ``model``.

    1. An entry whose ``model_specific`` equals ``model``.
    2. An entry whose ``model_specific`` contains ``model`` or is contained in
       it ("gpt-4" matches "gpt-4o" and the other way round).
    3. The default prompt.

    Matching is plain substring containment: an empty ``model_specific``
    matches every query and an empty query matches every entry that has a
    ``model_specific``. Entries with ``model_specific`` unset never match.
    """
    candidates = [p for p in ordered(collection) if p.model_specific is not None]

    for prompt in candidates:
        if prompt.model_specific == model:
            return prompt.model_copy(deep=True)

    for prompt in candidates:
        target = prompt.model_specific
        if target in model or model in target:
            return prompt.model_copy(deep=True)

    return find_default(collection)


def matching_tags(collection: Collection, tags: Iterable[str]) -> list[SystemPrompt]:
    """Entries carrying at least one of ``tags``; no tags means no matches."""
    wanted = set(tags)
    if not wanted:
        return []
    return [p.model_copy(deep=True) for p in ordered(collection) if wanted.intersection(p.tags)]
