"""
Иерархия ошибок маршрутизации лог-сообщений.

SinkUnavailableError - восстанавливаемая ошибка (приемник недоступен),
остальные - терминальные: обработка сообщения прекращается, решение
о продолжении принимает вызывающий код.
"""

from typing import Optional

from src.domain.log_message import LogMessage
from src.domain.outcome import Outcome


class LogRoutingError(Exception):
    """Базовая ошибка обработки лог-сообщения."""

    outcome: Optional[Outcome] = None
    recoverable: bool = False

    def __init__(self, description: str, log_message: LogMessage):
        """
        Создает ошибку.

        Args:
            description: Текст ошибки
            log_message: Сообщение, при обработке которого возникла ошибка
        """
        super().__init__(description)
        self.log_message = log_message


class SinkUnavailableError(LogRoutingError):
    """Приемник (файл) недоступен для записи."""

    recoverable = True

    def __init__(self, path: str, log_message: LogMessage):
        super().__init__(f"Unable to open log file: {path}", log_message)
        self.path = path


class FatalConditionError(LogRoutingError):
    """Сообщение уровня FatalError - нормальная обработка невозможна."""

    outcome = Outcome.FATAL

    def __init__(self, log_message: LogMessage):
        super().__init__(f"Fatal error: {log_message.text}", log_message)


class UnrecognizedClassificationError(LogRoutingError):
    """Сообщение неизвестного типа дошло до терминального обработчика."""

    outcome = Outcome.FATAL

    def __init__(self, log_message: LogMessage):
        super().__init__(f"Unknown log message: {log_message.text}", log_message)


class UnhandledMessageError(LogRoutingError):
    """Ни один обработчик цепочки не взял сообщение."""

    outcome = Outcome.UNHANDLED

    def __init__(self, log_message: LogMessage):
        super().__init__(
            f"Unhandled log message: {log_message.severity.value}", log_message
        )
