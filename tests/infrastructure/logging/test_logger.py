"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from src.infrastructure.logging import logger as logger_module


def test_builder_writes_dated_file_under_project_logs(tmp_path, monkeypatch):
    """Built loggers log to logs/<subdir>/<stamp>_<prefix>.log."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240315"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("finance_control.test_builder")
        .subdir("imports")
        .prefix("import_logs")
        .console(False)
        .level(logging.DEBUG)
    )
    built = builder.build()

    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert len(built.handlers) == 1
    handler = built.handlers[0]
    assert isinstance(handler, logging.FileHandler)
    expected = tmp_path / "logs" / "imports" / "20240315_import_logs.log"
    assert handler.baseFilename == str(expected)
    assert builder.build() is built

    for existing in list(built.handlers):
        existing.close()
        built.removeHandler(existing)


def test_builder_uses_injected_handler_factories(tmp_path, monkeypatch):
    """Custom factories replace the default handlers."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()
    seen_paths = []

    def _file_factory(path, formatter):
        seen_paths.append(path)
        assert formatter is fmt
        return file_handler

    built = (
        logger_module.LoggerBuilder()
        .name("finance_control.test_factories")
        .formatter(lambda: fmt)
        .file_handler(_file_factory)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]
    assert seen_paths[0].parent == tmp_path / "logs" / "app"

    built.handlers.clear()


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers log at INFO with the shared formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "expenses.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert isinstance(file_handler, logging.FileHandler)
    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt

    file_handler.close()


def test_app_logger_delegates_with_arguments(monkeypatch):
    """Wrapper methods forward messages and arguments unchanged."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    app_logger.info("Inserted %s expenses", 3)
    app_logger.warning("warn")
    app_logger.error("err", exc_info=True)
    app_logger.debug("dbg")
    app_logger.critical("crit")

    fake_logger.info.assert_called_with("Inserted %s expenses", 3)
    fake_logger.warning.assert_called_with("warn")
    fake_logger.error.assert_called_with("err", exc_info=True)
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    """Each logger class keeps its own singleton instance."""
    built_names = []

    def _fake_build(self):
        built_names.append((self._name, self._subdir))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built_names == [
        ("finance_control", "app"),
        ("finance_control.usage", "usage"),
    ]
