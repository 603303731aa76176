"""
Общие фикстуры для всех тестов.

Содержит приемники, готовые цепочки и тестовые сообщения.
"""

import io
from pathlib import Path
from typing import List, Optional

import pytest

from src.domain.log_message import LogMessage, Severity
from src.domain.outcome import Outcome
from src.handlers.concrete_handlers import (
    ErrorHandler,
    FatalErrorHandler,
    UnknownHandler,
    WarningHandler,
)
from src.handlers.log_handler_chain import HandlerConfig, LogHandler, build_chain
from src.infrastructure.log_sink import ConsoleSink


class RecordingHandler(LogHandler):
    """Тестовый обработчик: запоминает все сообщения, которые до него дошли."""

    def __init__(self, severity: Severity, config: Optional[HandlerConfig] = None):
        super().__init__(config)
        self.severity = severity
        self.seen: List[LogMessage] = []
        self.processed: List[LogMessage] = []

    def handle(self, message: LogMessage) -> Outcome:
        self.seen.append(message)
        return super().handle(message)

    def _process(self, message: LogMessage) -> Outcome:
        self.processed.append(message)
        return Outcome.CONSUMED


# ============================================================================
# Фикстуры для приемников
# ============================================================================


@pytest.fixture
def console_stream() -> io.StringIO:
    """Поток, в который пишет консольный приемник в тестах."""
    return io.StringIO()


@pytest.fixture
def console_sink(console_stream: io.StringIO) -> ConsoleSink:
    return ConsoleSink(console_stream)


@pytest.fixture
def error_log_path(tmp_path: Path) -> Path:
    """
    Путь к файлу журнала ошибок во временной директории.

    Args:
        tmp_path: Фикстура pytest для временной директории

    Returns:
        Path к еще не созданному файлу
    """
    return tmp_path / "log.txt"


@pytest.fixture
def unwritable_path(tmp_path: Path) -> Path:
    """Путь, который нельзя открыть на запись (нет родительской директории)."""
    return tmp_path / "missing" / "log.txt"


# ============================================================================
# Фикстуры для цепочек
# ============================================================================


@pytest.fixture
def recording_handler_cls():
    return RecordingHandler


@pytest.fixture
def default_chain(console_sink: ConsoleSink, error_log_path: Path) -> LogHandler:
    """
    Цепочка в стандартном порядке: Warning -> Error -> Fatal -> Unknown.

    Returns:
        Первый обработчик цепочки
    """
    return build_chain(
        [
            WarningHandler(console_sink),
            ErrorHandler(error_log_path),
            FatalErrorHandler(),
            UnknownHandler(),
        ]
    )


# ============================================================================
# Фикстуры для тестовых данных
# ============================================================================


@pytest.fixture
def warning_message() -> LogMessage:
    return LogMessage(severity=Severity.WARNING, text="Low disk space.")


@pytest.fixture
def error_message() -> LogMessage:
    return LogMessage(severity=Severity.ERROR, text="Failed to open file.")


@pytest.fixture
def fatal_message() -> LogMessage:
    return LogMessage(severity=Severity.FATAL_ERROR, text="Memory corruption detected.")


@pytest.fixture
def unknown_message() -> LogMessage:
    return LogMessage(severity=Severity.UNKNOWN, text="Unrecognized format.")
