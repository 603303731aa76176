"""
Конкретные реализации обработчиков лог-сообщений.

WarningHandler и ErrorHandler выполняют побочный эффект и возвращают
управление. FatalErrorHandler и UnknownHandler прерывают цепочку ошибкой,
которая доходит до вызывающего кода.
"""

import logging
from pathlib import Path
from typing import Optional

from src.domain.errors import (
    FatalConditionError,
    SinkUnavailableError,
    UnrecognizedClassificationError,
)
from src.domain.log_message import LogMessage, Severity
from src.domain.outcome import Outcome
from src.handlers.log_handler_chain import HandlerConfig, LogHandler
from src.infrastructure.log_sink import ConsoleSink, FileSink, LogSink

logger = logging.getLogger(__name__)


class WarningHandler(LogHandler):
    """Обработчик предупреждений: пишет в консоль."""

    severity = Severity.WARNING

    def __init__(
        self,
        sink: Optional[LogSink] = None,
        config: Optional[HandlerConfig] = None,
    ):
        """
        Создает обработчик предупреждений.

        Args:
            sink: Приемник строк (по умолчанию stdout)
            config: Конфигурация обработчика
        """
        super().__init__(config)
        self.sink = sink or ConsoleSink()

    def _process(self, message: LogMessage) -> Outcome:
        self.sink.write_line(message.format_line("Warning"))
        return Outcome.CONSUMED


class ErrorHandler(LogHandler):
    """Обработчик ошибок: дописывает строку в файл журнала."""

    severity = Severity.ERROR

    def __init__(
        self,
        sink: LogSink | str | Path,
        config: Optional[HandlerConfig] = None,
    ):
        """
        Создает обработчик ошибок.

        Args:
            sink: Файловый приемник или путь к файлу журнала
            config: Конфигурация обработчика
        """
        super().__init__(config)
        if isinstance(sink, (str, Path)):
            sink = FileSink(sink)
        self.sink = sink

    def _process(self, message: LogMessage) -> Outcome:
        """
        Записывает сообщение в файл.

        Args:
            message: Сообщение уровня Error

        Returns:
            Outcome.CONSUMED

        Raises:
            SinkUnavailableError: Если файл не удалось открыть или записать
        """
        try:
            self.sink.write_line(message.format_line("Error"))
        except (OSError, UnicodeError) as e:
            target = getattr(self.sink, "file_path", self.sink)
            raise SinkUnavailableError(str(target), message) from e
        return Outcome.CONSUMED


class FatalErrorHandler(LogHandler):
    """Обработчик фатальных ошибок: прерывает обработку."""

    severity = Severity.FATAL_ERROR

    def _process(self, message: LogMessage) -> Outcome:
        logger.debug(f"Фатальное сообщение, цепочка прерывается: {message.text}")
        raise FatalConditionError(message)


class UnknownHandler(LogHandler):
    """
    Терминальный обработчик для сообщений неизвестного типа.

    Обычно стоит последним в цепочке.
    """

    severity = Severity.UNKNOWN

    def _process(self, message: LogMessage) -> Outcome:
        raise UnrecognizedClassificationError(message)
