"""Unit tests for the logging configuration."""

import logging

import pytest
import structlog

from fund_variation.logging import APP_NAME, bind_run_context, configure_logging


def test_configure_logging(mocker):
    """Test that the logging is configured correctly."""
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging(level="debug")
    mock_basic_config.assert_called_with(
        level=logging.DEBUG, format="%(message)s", stream=mocker.ANY
    )

    configure_logging(level="INFO", json_output=True)
    mock_basic_config.assert_called_with(
        level=logging.INFO, format="%(message)s", stream=mocker.ANY
    )

    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging(level="invalid")

    structlog.reset_defaults()


def test_configure_logging_quiets_http_loggers(mocker):
    """Third-party loggers stay at warning even when debugging."""
    mocker.patch("logging.basicConfig")
    configure_logging(level="debug")
    assert logging.getLogger("urllib3").level == logging.WARNING
    structlog.reset_defaults()


def test_configure_logging_binds_run_context(mocker):
    """Every event carries the app name plus the context given at setup."""
    mocker.patch("logging.basicConfig")
    configure_logging(level="info", context={"base_url": "http://api.test/", "fund": None})
    assert structlog.contextvars.get_contextvars() == {
        "app": APP_NAME,
        "base_url": "http://api.test/",
    }

    bind_run_context(asset_id=186)
    assert structlog.contextvars.get_contextvars() == {"app": APP_NAME, "asset_id": 186}

    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
