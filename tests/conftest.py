"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path

import pytest

TEST_SECRET_KEY = "test-secret-key-for-system-prompts"

# Set at import time: system_prompts.main builds an app and
# system_prompts.api.limiter reads its switches when first imported.
os.environ.setdefault("API_SECRET_KEY", TEST_SECRET_KEY)
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("PROMPTS_CONFIG_DIR", tempfile.mkdtemp(prefix="system-prompts-tests-"))

from system_prompts.config import Settings  # noqa: E402
from system_prompts.models.prompt import SystemPrompt  # noqa: E402
from system_prompts.store.backends import InMemoryBackend  # noqa: E402
from system_prompts.store.manager import SystemPromptManager  # noqa: E402


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Config directory that does not exist yet."""
    return tmp_path / "config"


@pytest.fixture
def manager(config_dir: Path) -> SystemPromptManager:
    """File-backed manager rooted in a temporary directory (not initialized)."""
    return SystemPromptManager(config_dir=config_dir)


@pytest.fixture
def memory_manager(tmp_path: Path) -> SystemPromptManager:
    """Manager backed by an in-memory collection."""
    return SystemPromptManager(config_dir=tmp_path, backend=InMemoryBackend())


@pytest.fixture
def api_settings(config_dir: Path) -> Settings:
    """Settings for an API app storing prompts in a temporary directory."""
    return Settings(
        api_secret_key=TEST_SECRET_KEY,
        prompts_config_dir=config_dir,
        environment="test",
        log_format="standard",
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Secret-Key": TEST_SECRET_KEY}


@pytest.fixture
def make_prompt():
    """Factory building prompts the way callers of the store do."""

    def _make(
        name: str,
        content: str = "content",
        *,
        tags: list[str] | None = None,
        model: str | None = None,
        default: bool = False,
    ) -> SystemPrompt:
        prompt = SystemPrompt.new(name, content)
        if tags is not None:
            prompt = prompt.with_tags(tags)
        if model is not None:
            prompt = prompt.with_model_specific(model)
        if default:
            prompt = prompt.set_as_default()
        return prompt

    return _make
