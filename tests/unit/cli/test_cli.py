"""
Tests for the system-prompts command-line interface.

Commands run through ``main(argv)`` against a temporary config directory;
output is checked with capsys.
"""

import io
from pathlib import Path

import pytest

from system_prompts.cli import main
from system_prompts.cli.main import parse_tags
from system_prompts.store.manager import SystemPromptManager


@pytest.fixture
def run(config_dir: Path):
    """Run a CLI command against the test config directory."""

    def _run(*args: str) -> int:
        return main(["--config-dir", str(config_dir), *args])

    return _run


@pytest.fixture
def store(config_dir: Path) -> SystemPromptManager:
    """Manager over the same directory, for checking CLI side effects."""
    return SystemPromptManager(config_dir=config_dir)


class TestParseTags:
    """Test comma-separated tag parsing."""

    def test_parse_tags(self) -> None:
        assert parse_tags("a, b,,c ") == ["a", "b", "c"]
        assert parse_tags("") == []


class TestList:
    """Test the list command."""

    def test_list_seeds_and_prints_table(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("list") == 0

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["ID", "Name", "Default", "Model", "Tags", "Updated"]
        assert "Default" in lines[2] and "Yes" in lines[2] and "Any" in lines[2]
        assert "GPT-4.1 Optimized" in lines[3] and "gpt-4.1" in lines[3]

    def test_list_detailed(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("list", "--detailed") == 0

        out = capsys.readouterr().out
        assert out.count("-" * 80) == 2
        assert "Name: Default" in out
        assert "Content:" in out

    def test_list_by_tags(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("list", "--tags", "optimized") == 0

        out = capsys.readouterr().out
        assert "GPT-4.1 Optimized" in out
        assert "Yes" not in out

    def test_list_no_match(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("list", "--tags", "nothing") == 0
        assert capsys.readouterr().out.strip() == "No system prompts found."


class TestCreate:
    """Test the create command."""

    def test_create_with_content(
        self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run(
            "create", "Reviewer", "-c", "Review code.", "-d", "Code review",
            "--tags", "review,code", "--model", "claude-3",
        )

        assert code == 0
        prompt = store.get_prompt_by_name("Reviewer")
        assert capsys.readouterr().out.strip() == f"Created system prompt: Reviewer (ID: {prompt.id})"
        assert prompt.content == "Review code."
        assert prompt.description == "Code review"
        assert prompt.tags == ["review", "code"]
        assert prompt.model_specific == "claude-3"
        assert prompt.is_default is False

    def test_create_from_file_is_stripped(self, run, store: SystemPromptManager, tmp_path: Path) -> None:
        source = tmp_path / "body.txt"
        source.write_text("\n  From file.  \n\n", encoding="utf-8")

        assert run("create", "FromFile", "--file", str(source)) == 0

        assert store.get_prompt_by_name("FromFile").content == "From file."

    def test_create_from_stdin(
        self, run, store: SystemPromptManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("piped content\n"))

        assert run("create", "Piped", "--content", "-") == 0

        assert store.get_prompt_by_name("Piped").content == "piped content"

    def test_create_default(self, run, store: SystemPromptManager) -> None:
        assert run("create", "New default", "-c", "x", "--default") == 0

        assert store.get_default_prompt().name == "New default"

    def test_create_without_content_fails(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("create", "Empty") == 1
        assert "Content is required" in capsys.readouterr().err

    def test_create_with_content_and_file_fails(
        self, run, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "body.txt"
        source.write_text("x", encoding="utf-8")

        assert run("create", "Both", "-c", "x", "-f", str(source)) == 1
        assert "Cannot specify both" in capsys.readouterr().err

    def test_create_missing_file_fails(self, run, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("create", "Missing", "-f", str(tmp_path / "nope.txt")) == 1
        assert capsys.readouterr().err.startswith("Error: ")


class TestShowAndResolve:
    """Test show and resolve."""

    def test_show_by_name_raw(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        run("create", "Shown", "-c", "Body text")
        capsys.readouterr()

        assert run("show", "Shown", "--raw") == 0
        assert capsys.readouterr().out == "Body text\n"

    def test_show_by_id(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        store.initialize()
        default = store.get_default_prompt()

        assert run("show", default.id) == 0

        out = capsys.readouterr().out
        assert f"ID: {default.id}" in out
        assert "Default: Yes" in out

    def test_show_missing(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("show", "missing") == 1
        assert capsys.readouterr().err.strip() == "Error: System prompt 'missing' not found"

    def test_resolve(self, run, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("resolve", "gpt-4.1-mini") == 0
        assert "Name: GPT-4.1 Optimized" in capsys.readouterr().out

        assert run("resolve", "llama-3", "--raw") == 0
        assert capsys.readouterr().out.strip()


class TestUpdate:
    """Test the update command."""

    def test_update_fields(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        run("create", "Old", "-c", "old body", "--tags", "a")
        before = store.get_prompt_by_name("Old")

        code = run(
            "update", "Old", "--name", "New", "--content", "new body",
            "--tags", "b,c", "--model", "gpt-4",
        )

        assert code == 0
        assert capsys.readouterr().out.strip().endswith("Updated system prompt: Old")
        after = store.get_prompt(before.id)
        assert after.name == "New"
        assert after.content == "new body"
        assert after.tags == ["b", "c"]
        assert after.model_specific == "gpt-4"
        assert after.updated_at >= before.updated_at

    def test_update_missing(self, run) -> None:
        assert run("update", "missing", "--name", "x") == 1


class TestDelete:
    """Test delete confirmation and the default guard."""

    def test_delete_with_yes(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        run("create", "Doomed", "-c", "x")

        assert run("delete", "Doomed", "--yes") == 0

        assert "Deleted system prompt: Doomed" in capsys.readouterr().out
        assert store.get_prompt_by_name("Doomed") is None

    def test_delete_confirmed(
        self, run, store: SystemPromptManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run("create", "Doomed", "-c", "x")
        monkeypatch.setattr("sys.stdin", io.StringIO("yes\n"))

        assert run("delete", "Doomed") == 0

        assert store.get_prompt_by_name("Doomed") is None

    @pytest.mark.parametrize("answer", ["n\n", "\n", ""])
    def test_delete_cancelled(
        self,
        run,
        store: SystemPromptManager,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        answer: str,
    ) -> None:
        run("create", "Kept", "-c", "x")
        capsys.readouterr()
        monkeypatch.setattr("sys.stdin", io.StringIO(answer))

        assert run("delete", "Kept") == 0

        out = capsys.readouterr().out
        assert "Are you sure you want to delete the system prompt 'Kept'? (y/N)" in out
        assert out.strip().endswith("Cancelled.")
        assert store.get_prompt_by_name("Kept") is not None

    def test_delete_default_fails(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("delete", "Default", "--yes") == 1

        assert "Cannot delete the default system prompt" in capsys.readouterr().err
        assert store.get_prompt_by_name("Default") is not None


class TestSetDefault:
    """Test set-default."""

    def test_set_default_by_name(self, run, store: SystemPromptManager, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("set-default", "GPT-4.1 Optimized") == 0

        assert "Set 'GPT-4.1 Optimized' as the default system prompt" in capsys.readouterr().out
        assert store.get_default_prompt().name == "GPT-4.1 Optimized"


class TestImportExport:
    """Test import and export."""

    def test_import_with_metadata(self, run, store: SystemPromptManager, tmp_path: Path) -> None:
        source = tmp_path / "imported.md"
        source.write_text("Imported text", encoding="utf-8")

        assert run("import", str(source), "Imported", "--tags", "x", "--model", "gpt-4o") == 0

        prompt = store.get_prompt_by_name("Imported")
        assert prompt.content == "Imported text"
        assert prompt.description == f"Imported from {source}"
        assert prompt.tags == ["x"]
        assert prompt.model_specific == "gpt-4o"

    def test_export(self, run, store: SystemPromptManager, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        target = tmp_path / "default.md"

        assert run("export", "Default", str(target)) == 0

        assert target.read_text(encoding="utf-8") == store.get_default_prompt().content
        assert f"Exported system prompt 'Default' to {target}" in capsys.readouterr().out


class TestArguments:
    """Test argparse handling."""

    def test_missing_command_exits_with_2(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2

    def test_config_dir_is_created(self, run, config_dir: Path) -> None:
        assert not config_dir.exists()

        run("list")

        assert (config_dir / "system_prompts.yaml").is_file()
