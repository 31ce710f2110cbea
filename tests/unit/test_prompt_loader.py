"""Tests for loading the built-in prompt texts."""

import pytest

from system_prompts.utils.prompts import load_prompt


class TestLoadPrompt:
    """Test load_prompt."""

    @pytest.mark.parametrize("name", ["default_system", "gpt_4_1_system"])
    def test_builtin_prompts_are_packaged(self, name: str) -> None:
        content = load_prompt(name)

        assert content
        assert content == content.strip()

    def test_missing_prompt_uses_fallback(self) -> None:
        assert load_prompt("no_such_prompt", fallback="fallback text") == "fallback text"

    def test_missing_prompt_without_fallback_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_prompt("no_such_prompt")
