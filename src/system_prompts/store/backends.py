"""
Persistence backends for a prompts collection.

A backend only knows how to read and write a whole collection. The YAML
backend is used in production; the in-memory backend lets store logic be
tested without a filesystem.
"""

import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from system_prompts.models.prompt import SystemPrompt
from system_prompts.store.collection import Collection, copy_collection
from system_prompts.utils.errors import DeserializeError, DirectoryError, PromptFileError
from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)


class CollectionBackend(ABC):
    """
    Abstract storage for a whole prompts collection.

    Implementations load and save the full collection at once; there is no
    partial update.
    """

    @abstractmethod
    def ensure_location(self) -> None:
        """Create whatever container the collection lives in."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether a collection has been saved before."""

    @abstractmethod
    def load(self) -> Collection:
        """Return the stored collection, or an empty one if nothing is stored."""

    @abstractmethod
    def save(self, collection: Collection) -> None:
        """Overwrite the stored collection."""


class InMemoryBackend(CollectionBackend):
    """Collection held in a dict; loads and saves hand out copies."""

    def __init__(self, collection: Collection | None = None) -> None:
        self._collection: Collection | None = (
            copy_collection(collection) if collection is not None else None
        )

    def ensure_location(self) -> None:
        return None

    def exists(self) -> bool:
        return self._collection is not None

    def load(self) -> Collection:
        if self._collection is None:
            return {}
        return copy_collection(self._collection)

    def save(self, collection: Collection) -> None:
        self._collection = copy_collection(collection)


def dump_collection(collection: Collection) -> str:
    """Serialize a collection to YAML text (ID -> record mapping)."""
    data = {pid: prompt.model_dump(mode="json") for pid, prompt in collection.items()}
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def parse_collection(text: str, source: str = "<string>") -> Collection:
    """
    Parse YAML text produced by ``dump_collection``.

    An empty document is an empty collection.

    Raises:
        DeserializeError: On invalid YAML, a non-mapping document, or records
            that fail validation
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DeserializeError(source, str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DeserializeError(source, f"expected a mapping, got {type(data).__name__}")

    collection: Collection = {}
    for key, record in data.items():
        prompt_id = str(key)
        if not isinstance(record, dict):
            raise DeserializeError(source, f"entry {prompt_id} is not a mapping")
        record = dict(record)
        record.setdefault("id", prompt_id)
        try:
            collection[prompt_id] = SystemPrompt.model_validate(record)
        except PydanticValidationError as exc:
            raise DeserializeError(source, f"entry {prompt_id}: {exc}") from exc
    return collection


class YamlFileBackend(CollectionBackend):
    """
    Collection stored as one YAML file.

    Saves write a temporary file next to the target and rename it into place,
    so readers never see a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def ensure_location(self) -> None:
        directory = self.path.parent
        if directory.is_dir():
            return
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error(
                "Failed to create config directory",
                extra={"path": str(directory), "error": str(exc)},
            )
            raise DirectoryError(str(directory), str(exc)) from exc
        logger.info("Created config directory", extra={"path": str(directory)})

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Collection:
        if not self.path.exists():
            return {}

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializeError(str(self.path), f"not valid UTF-8 ({exc})") from exc
        except OSError as exc:
            logger.error(
                "Failed to read prompts file",
                extra={"path": str(self.path), "error": str(exc)},
            )
            raise PromptFileError(str(self.path), "read", str(exc)) from exc

        collection = parse_collection(text, source=str(self.path))
        logger.debug(
            "Loaded prompts collection",
            extra={"path": str(self.path), "prompt_count": len(collection)},
        )
        return collection

    def _target_mode(self) -> int:
        # Keep the existing file's permissions; new files get the umask default
        if self.path.exists():
            return stat.S_IMODE(self.path.stat().st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def save(self, collection: Collection) -> None:
        text = dump_collection(collection)
        tmp_name: str | None = None
        try:
            mode = self._target_mode()
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(
                "Failed to write prompts file",
                extra={"path": str(self.path), "error": str(exc)},
            )
            raise PromptFileError(str(self.path), "write", str(exc)) from exc

        logger.debug(
            "Saved prompts collection",
            extra={"path": str(self.path), "prompt_count": len(collection)},
        )
