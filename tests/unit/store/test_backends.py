"""Tests for the YAML codec and the storage backends."""

from pathlib import Path

import pytest
import yaml

from system_prompts.store.backends import (
    InMemoryBackend,
    YamlFileBackend,
    dump_collection,
    parse_collection,
)
from system_prompts.utils.errors import DeserializeError, PromptFileError


class TestYamlCodec:
    """Test dump_collection / parse_collection."""

    def test_dump_is_mapping_of_id_to_record(self, make_prompt) -> None:
        prompt = make_prompt("Coder", "Write code.", tags=["code"], model="gpt-4")

        data = yaml.safe_load(dump_collection({prompt.id: prompt}))

        record = data[prompt.id]
        assert record["id"] == prompt.id
        assert record["name"] == "Coder"
        assert record["description"] is None
        assert record["content"] == "Write code."
        assert record["is_default"] is False
        assert record["tags"] == ["code"]
        assert record["model_specific"] == "gpt-4"
        assert isinstance(record["created_at"], str)
        assert isinstance(record["updated_at"], str)

    def test_hand_written_file(self) -> None:
        text = """
abc:
  id: abc
  name: Hand written
  description: null
  content: |
    Line one
    Line two
  is_default: true
  created_at: "2024-05-01T10:00:00Z"
  updated_at: "2024-05-02T10:00:00Z"
  tags: [a, b]
  model_specific: null
"""
        collection = parse_collection(text)

        prompt = collection["abc"]
        assert prompt.name == "Hand written"
        assert prompt.content == "Line one\nLine two\n"
        assert prompt.is_default is True
        assert prompt.tags == ["a", "b"]
        assert prompt.created_at.year == 2024

    def test_missing_id_defaults_to_key(self) -> None:
        text = """
key-1:
  name: No id
  content: body
  created_at: "2024-05-01T10:00:00Z"
  updated_at: "2024-05-01T10:00:00Z"
"""
        assert parse_collection(text)["key-1"].id == "key-1"

    def test_empty_document_is_empty_collection(self) -> None:
        assert parse_collection("") == {}
        assert parse_collection("# just a comment\n") == {}

    def test_non_mapping_document_raises(self) -> None:
        with pytest.raises(DeserializeError):
            parse_collection("- a\n- b\n")

    def test_non_mapping_entry_raises(self) -> None:
        with pytest.raises(DeserializeError):
            parse_collection("abc: just a string\n")

    def test_invalid_record_raises(self) -> None:
        with pytest.raises(DeserializeError) as exc_info:
            parse_collection("abc:\n  name: missing content\n", source="prompts.yaml")

        assert "prompts.yaml" in exc_info.value.message

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(DeserializeError):
            parse_collection("abc: [unclosed\n")


class TestInMemoryBackend:
    """Test InMemoryBackend."""

    def test_starts_empty(self) -> None:
        backend = InMemoryBackend()

        assert backend.exists() is False
        assert backend.load() == {}

    def test_save_then_load_copies(self, make_prompt) -> None:
        backend = InMemoryBackend()
        prompt = make_prompt("A")
        collection = {prompt.id: prompt}

        backend.save(collection)
        prompt.name = "changed after save"
        loaded = backend.load()
        loaded[prompt.id].name = "changed after load"

        assert backend.exists() is True
        assert backend.load()[prompt.id].name == "A"


class TestYamlFileBackend:
    """Test YamlFileBackend against a temporary directory."""

    def test_missing_file(self, tmp_path: Path) -> None:
        backend = YamlFileBackend(tmp_path / "prompts.yaml")

        assert backend.exists() is False
        assert backend.load() == {}

    def test_ensure_location_creates_parents(self, tmp_path: Path) -> None:
        backend = YamlFileBackend(tmp_path / "a" / "b" / "prompts.yaml")

        backend.ensure_location()
        backend.ensure_location()

        assert (tmp_path / "a" / "b").is_dir()

    def test_save_and_load(self, tmp_path: Path, make_prompt) -> None:
        backend = YamlFileBackend(tmp_path / "prompts.yaml")
        prompt = make_prompt("A", "multi\nline", tags=["t"])

        backend.save({prompt.id: prompt})

        assert backend.exists() is True
        assert backend.load() == {prompt.id: prompt}
        assert list(tmp_path.iterdir()) == [tmp_path / "prompts.yaml"]

    def test_invalid_utf8_raises_deserialize_error(self, tmp_path: Path) -> None:
        path = tmp_path / "prompts.yaml"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(DeserializeError):
            YamlFileBackend(path).load()

    def test_unreadable_path_raises_file_error(self, tmp_path: Path) -> None:
        path = tmp_path / "prompts.yaml"
        path.mkdir()

        with pytest.raises(PromptFileError) as exc_info:
            YamlFileBackend(path).load()

        assert exc_info.value.operation == "read"
