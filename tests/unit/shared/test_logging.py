from __future__ import annotations

import logging
from dataclasses import dataclass

from homehub.shared.consts import EnumEnvironment, EnumLogLevel
from homehub.shared.logging import (
    NOISY_LOGGERS,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "homehub.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    get_logger(__name__).info("logging.test", value=1)


def test_noisy_libraries_stay_at_warning() -> None:
    configure_logging(level="DEBUG")

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


@dataclass
class _LoggingSettings:
    level: EnumLogLevel = EnumLogLevel.WARNING
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: EnumEnvironment = EnumEnvironment.PRODUCTION


def test_update_logging_from_settings_applies_configuration() -> None:
    update_logging_from_settings(_Settings(logging=_LoggingSettings(EnumLogLevel.ERROR)))

    assert logging.getLogger().level == logging.ERROR

    configure_logging(level="INFO")


def test_update_logging_from_broken_settings_does_not_raise() -> None:
    update_logging_from_settings(object())
