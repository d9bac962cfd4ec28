from __future__ import annotations

import json

import pytest

from homehub.infrastructure.repositories.json_document_repository import (
    JsonDocumentRepository,
)


def test_missing_or_empty_file_is_empty_document(tmp_path) -> None:
    repository = JsonDocumentRepository(tmp_path / "slugs.json")
    assert repository.load() == {}

    (tmp_path / "slugs.json").write_text("  \n", encoding="utf-8")
    assert repository.load() == {}


def test_save_creates_directories_and_round_trips(tmp_path) -> None:
    path = tmp_path / "nested" / "data" / "rooms.json"
    repository = JsonDocumentRepository(path)

    repository.save({"rooms": {"home-office": {"name": "Office"}}})

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "rooms": {"home-office": {"name": "Office"}}
    }
    assert JsonDocumentRepository(str(path)).load()["rooms"]["home-office"]["name"] == (
        "Office"
    )
    assert [p.name for p in path.parent.iterdir()] == ["rooms.json"]


def test_save_replaces_previous_document(tmp_path) -> None:
    repository = JsonDocumentRepository(tmp_path / "doc.json")
    repository.save({"a": 1})
    repository.save({"b": 2})
    assert repository.load() == {"b": 2}


def test_non_object_document_is_rejected(tmp_path) -> None:
    path = tmp_path / "doc.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonDocumentRepository(path).load()


def test_failed_write_leaves_no_temporary_file(tmp_path) -> None:
    repository = JsonDocumentRepository(tmp_path / "doc.json")
    repository.save({"a": 1})

    with pytest.raises(TypeError):
        repository.save({"a": object()})

    assert repository.load() == {"a": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]
