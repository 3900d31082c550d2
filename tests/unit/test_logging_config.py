"""Tests for structlog configuration."""

import logging

import pytest
import structlog

from stockledger.config import Settings, configure_logging
from stockledger.config.logging import service_context


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_service_context_does_not_override(tmp_path):
    settings = Settings(app_name="Ledger", storage={"data_dir": tmp_path})
    processor = service_context(settings)

    event = processor(None, "info", {"event": "x", "app": "custom"})

    assert event["app"] == "custom"
    assert event["version"] == settings.app_version
    assert event["environment"] == "development"


@pytest.mark.parametrize(
    ("environment", "renderer"),
    [
        ("development", structlog.dev.ConsoleRenderer),
        ("production", structlog.processors.JSONRenderer),
    ],
)
def test_root_handler_uses_processor_formatter(
    tmp_path, restore_logging, environment, renderer
):
    settings = Settings(
        environment=environment,
        log_level="WARNING",
        storage={"data_dir": tmp_path},
    )

    configure_logging(settings)

    root = logging.getLogger()
    [handler] = root.handlers
    assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
    assert isinstance(handler.formatter.processors[-1], renderer)
    assert root.level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING
