from __future__ import annotations

import logging
import os

import pytest

from homehub.shared.env import load_secret_file_variables


def _unset(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.delenv(key, raising=False)


def test_secret_file_content_becomes_variable(tmp_path, monkeypatch):
    secret_file = tmp_path / "hue_app_key"
    secret_file.write_text("k3y\n", encoding="utf-8")

    monkeypatch.setenv("HUE_APP_KEY_FILE", str(secret_file))
    _unset(monkeypatch, "HUE_APP_KEY")

    load_secret_file_variables()

    assert os.environ["HUE_APP_KEY"] == "k3y"
    monkeypatch.delenv("HUE_APP_KEY")


def test_unknown_variables_are_ignored(tmp_path, monkeypatch):
    secret_file = tmp_path / "other"
    secret_file.write_text("value", encoding="utf-8")

    monkeypatch.setenv("OTHER_SECRET_FILE", str(secret_file))
    _unset(monkeypatch, "OTHER_SECRET")

    load_secret_file_variables()

    assert "OTHER_SECRET" not in os.environ


def test_unreadable_file_is_logged(monkeypatch, caplog):
    monkeypatch.setenv("HIVE_ACCESS_TOKEN_FILE", "/tmp/does-not-exist-homehub")
    _unset(monkeypatch, "HIVE_ACCESS_TOKEN")

    with caplog.at_level(logging.WARNING):
        load_secret_file_variables()

    assert "HIVE_ACCESS_TOKEN" not in os.environ
    assert any(
        record.message == "env.secret_file.load_failed" for record in caplog.records
    )


def test_undecodable_file_is_logged(tmp_path, monkeypatch, caplog):
    binary_file = tmp_path / "token.bin"
    binary_file.write_bytes(b"\xff\xfe\xfd")

    monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN_FILE", str(binary_file))
    _unset(monkeypatch, "SPOTIFY_ACCESS_TOKEN")

    with caplog.at_level(logging.WARNING):
        load_secret_file_variables()

    assert any(
        record.message == "env.secret_file.load_failed" for record in caplog.records
    )


def test_explicit_variable_wins(monkeypatch):
    monkeypatch.setenv("STORAGE_MONGO_URI", "mongodb://explicit")
    monkeypatch.setenv("STORAGE_MONGO_URI_FILE", "/tmp/ignored")

    load_secret_file_variables()

    assert os.environ["STORAGE_MONGO_URI"] == "mongodb://explicit"
