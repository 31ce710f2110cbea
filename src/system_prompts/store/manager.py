"""
System prompt manager.

Every operation re-reads the whole collection, applies one of the pure
functions from ``system_prompts.store.collection`` and, for mutations, writes
the whole collection back. Nothing is cached between calls.

A single process-wide lock serializes these load/modify/save cycles for
callers in the same process. Separate processes sharing one file can still
overwrite each other's changes (last writer wins).
"""

import threading
from collections.abc import Callable
from pathlib import Path

from system_prompts.config import Settings
from system_prompts.models.prompt import SystemPrompt
from system_prompts.store import collection as ops
from system_prompts.store.backends import CollectionBackend, YamlFileBackend
from system_prompts.store.collection import Collection
from system_prompts.store.paths import DEFAULT_FILE_NAME, default_config_dir
from system_prompts.utils.errors import NotFoundError, PromptFileError
from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)

_STORE_LOCK = threading.RLock()


class SystemPromptManager:
    """
    File-backed store of system prompts.

    Args:
        config_dir: Directory holding the prompts file (platform default when None)
        file_name: Name of the prompts file inside ``config_dir``
        backend: Storage override; defaults to a YAML file at ``prompts_file``
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        file_name: str = DEFAULT_FILE_NAME,
        backend: CollectionBackend | None = None,
    ) -> None:
        self.config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        self.prompts_file = self.config_dir / file_name
        self.backend = backend or YamlFileBackend(self.prompts_file)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SystemPromptManager":
        return cls(config_dir=settings.prompts_config_dir, file_name=settings.prompts_file_name)

    # -- persistence primitives ------------------------------------------------

    def initialize(self) -> bool:
        """
        Make sure the store is usable, seeding built-in prompts on first use.

        Creates the config directory if needed. When no collection has been
        saved yet, writes the "Default" and "GPT-4.1 Optimized" prompts.
        Calling again once the file exists changes nothing.

        Returns:
            True if the built-in prompts were written by this call

        Raises:
            DirectoryError: If the config directory cannot be created
        """
        with _STORE_LOCK:
            self.backend.ensure_location()
            if self.backend.exists():
                return False

            seeds = ops.seed_collection()
            self.backend.save(seeds)
            logger.info(
                "Seeded built-in system prompts",
                extra={"path": str(self.prompts_file), "prompt_count": len(seeds)},
            )
            return True

    def load_prompts(self) -> Collection:
        """Read the full collection (empty if nothing was saved yet)."""
        return self.backend.load()

    def save_prompts(self, prompts: Collection) -> None:
        """Overwrite the stored collection with ``prompts``."""
        with _STORE_LOCK:
            self.backend.save(prompts)

    def _apply(self, operation: Callable[[Collection], Collection]) -> Collection:
        with _STORE_LOCK:
            updated = operation(self.load_prompts())
            self.backend.save(updated)
            return updated

    # -- mutations ----------------------------------------------------------------

    def create_prompt(self, prompt: SystemPrompt) -> SystemPrompt:
        """
        Store a new prompt under its ID.

        Names are not checked for uniqueness. A default prompt demotes the
        previous default in the same save.
        """
        updated = self._apply(lambda prompts: ops.insert_prompt(prompts, prompt))
        logger.info(
            "System prompt created",
            extra={"prompt_id": prompt.id, "prompt_name": prompt.name, "is_default": prompt.is_default},
        )
        return updated[prompt.id].model_copy(deep=True)

    def update_prompt(self, prompt_id: str, updated_prompt: SystemPrompt) -> SystemPrompt:
        """
        Replace the prompt at ``prompt_id`` with ``updated_prompt``.

        Callers merge fields themselves; no partial update happens here.

        Raises:
            NotFoundError: If ``prompt_id`` does not exist
        """
        updated = self._apply(lambda prompts: ops.replace_prompt(prompts, prompt_id, updated_prompt))
        logger.info("System prompt updated", extra={"prompt_id": prompt_id})
        return updated[prompt_id].model_copy(deep=True)

    def modify_prompt(
        self, prompt_id: str, edit: Callable[[SystemPrompt], None]
    ) -> SystemPrompt:
        """
        Change selected fields of a stored prompt in one load/save cycle.

        ``edit`` receives a copy of the stored prompt and mutates it; the
        result replaces the entry as in ``update_prompt``. Nothing can change
        the prompt between reading and writing it.

        Raises:
            NotFoundError: If ``prompt_id`` does not exist
        """
        updated = self._apply(lambda prompts: ops.edit_prompt(prompts, prompt_id, edit))
        logger.info("System prompt updated", extra={"prompt_id": prompt_id})
        return updated[prompt_id].model_copy(deep=True)

    def delete_prompt(self, prompt_id: str) -> None:
        """
        Remove a prompt.

        Raises:
            NotFoundError: If ``prompt_id`` does not exist
            DefaultPromptDeletionError: If the prompt is the current default
        """
        self._apply(lambda prompts: ops.remove_prompt(prompts, prompt_id))
        logger.info("System prompt deleted", extra={"prompt_id": prompt_id})

    def set_default_prompt(self, prompt_id: str) -> None:
        """
        Make ``prompt_id`` the default, clearing the flag everywhere else.

        Raises:
            NotFoundError: If ``prompt_id`` does not exist
        """
        self._apply(lambda prompts: ops.assign_default(prompts, prompt_id))
        logger.info("Default system prompt changed", extra={"prompt_id": prompt_id})

    # -- queries ------------------------------------------------------------------

    def get_prompt(self, prompt_id: str) -> SystemPrompt | None:
        prompt = self.load_prompts().get(prompt_id)
        return prompt.model_copy(deep=True) if prompt else None

    def get_prompt_by_name(self, name: str) -> SystemPrompt | None:
        return ops.find_by_name(self.load_prompts(), name)

    def get_default_prompt(self) -> SystemPrompt | None:
        return ops.find_default(self.load_prompts())

    def get_prompt_for_model(self, model: str) -> SystemPrompt | None:
        """Exact model match, then partial match, then the default prompt."""
        prompt = ops.find_for_model(self.load_prompts(), model)
        logger.debug(
            "Resolved system prompt for model",
            extra={"model": model, "prompt_id": prompt.id if prompt else None},
        )
        return prompt

    def list_prompts(self) -> list[SystemPrompt]:
        """All prompts sorted by name."""
        return [p.model_copy(deep=True) for p in ops.ordered(self.load_prompts())]

    def search_by_tags(self, tags: list[str]) -> list[SystemPrompt]:
        """Prompts carrying any of ``tags``."""
        return ops.matching_tags(self.load_prompts(), tags)

    def find_prompt(self, identifier: str) -> SystemPrompt:
        """
        Look a prompt up by ID, then by name.

        Raises:
            NotFoundError: If neither matches
        """
        prompts = self.load_prompts()
        prompt = prompts.get(identifier)
        if prompt is not None:
            return prompt.model_copy(deep=True)
        by_name = ops.find_by_name(prompts, identifier)
        if by_name is None:
            raise NotFoundError(identifier, f"System prompt '{identifier}' not found")
        return by_name

    # -- files --------------------------------------------------------------------

    def import_from_file(self, file_path: Path, name: str) -> SystemPrompt:
        """
        Create a prompt whose content is the text of ``file_path``.

        Raises:
            PromptFileError: If the file cannot be read
        """
        file_path = Path(file_path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PromptFileError(str(file_path), "read", str(exc)) from exc

        prompt = SystemPrompt.new(name, content).with_description(f"Imported from {file_path}")
        return self.create_prompt(prompt)

    def export_to_file(self, prompt_id: str, file_path: Path) -> None:
        """
        Write the content of ``prompt_id`` to ``file_path``, overwriting it.

        Raises:
            NotFoundError: If ``prompt_id`` does not exist
            PromptFileError: If the file cannot be written
        """
        prompt = self.get_prompt(prompt_id)
        if prompt is None:
            raise NotFoundError(prompt_id)

        file_path = Path(file_path)
        try:
            file_path.write_text(prompt.content, encoding="utf-8")
        except OSError as exc:
            raise PromptFileError(str(file_path), "write", str(exc)) from exc
        logger.info(
            "System prompt exported",
            extra={"prompt_id": prompt_id, "path": str(file_path)},
        )
