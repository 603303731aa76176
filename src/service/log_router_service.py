"""
Сервис отправки лог-сообщений в цепочку обработчиков.

Отправка синхронная: вызов блокируется, пока цепочка не дойдет до
терминального исхода. Ошибки обработчиков не перехватываются при
одиночной отправке; пакетная отправка изолирует ошибки по сообщениям.
"""

import logging
from typing import Iterable, List

from src.domain.errors import LogRoutingError, UnhandledMessageError
from src.domain.log_message import LogMessage
from src.domain.outcome import DispatchResult, Outcome
from src.handlers.log_handler_chain import LogHandler

logger = logging.getLogger(__name__)


def submit(entry_handler: LogHandler, message: LogMessage) -> Outcome:
    """
    Отправляет сообщение в цепочку.

    Args:
        entry_handler: Первый обработчик цепочки
        message: Лог-сообщение

    Returns:
        Outcome.CONSUMED

    Raises:
        UnhandledMessageError: Если ни один обработчик не взял сообщение
        SinkUnavailableError: Если приемник обработчика недоступен
        FatalConditionError: Если сообщение фатального уровня
        UnrecognizedClassificationError: Если сообщение неизвестного типа
    """
    outcome = entry_handler.handle(message)
    if outcome == Outcome.UNHANDLED:
        raise UnhandledMessageError(message)
    return outcome


class LogRouterService:
    """Сервис маршрутизации лог-сообщений через цепочку обработчиков."""

    def __init__(self, entry_handler: LogHandler):
        """
        Создает сервис.

        Args:
            entry_handler: Первый обработчик собранной цепочки
        """
        self.entry_handler = entry_handler

    def submit(self, message: LogMessage) -> Outcome:
        """Отправляет одно сообщение; ошибки доходят до вызывающего кода."""
        return submit(self.entry_handler, message)

    def submit_batch(self, messages: Iterable[LogMessage]) -> List[DispatchResult]:
        """
        Отправляет сообщения по очереди.

        Ошибка одного сообщения не прерывает обработку следующих.

        Args:
            messages: Лог-сообщения

        Returns:
            Результаты в порядке отправки
        """
        results = []
        for message in messages:
            try:
                outcome = self.submit(message)
                results.append(DispatchResult(message=message, outcome=outcome))
            except LogRoutingError as e:
                logger.error(f"Exception caught: {e}")
                results.append(DispatchResult(message=message, outcome=e.outcome, error=e))
        return results
