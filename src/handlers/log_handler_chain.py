"""
Цепочка обработчиков лог-сообщений (Chain of Responsibility Pattern).

Каждый обработчик отвечает за один уровень серьезности: если уровень
совпадает, обработчик выполняет свое действие и цепочка завершается,
иначе сообщение передается следующему обработчику. Порядок значим:
при совпадении уровней у двух обработчиков побеждает тот, что раньше.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Iterator, List, Optional, Sequence

from src.domain.log_message import LogMessage, Severity
from src.domain.outcome import Outcome

logger = logging.getLogger(__name__)


@dataclass
class HandlerConfig:
    """Конфигурация обработчика."""

    enabled: bool = True
    priority: int = 0  # Порядок в цепочке (меньше = раньше)


class LogHandler(ABC):
    """Базовый класс для обработчиков лог-сообщений."""

    # Уровень, за который отвечает обработчик
    severity: ClassVar[Severity]

    def __init__(self, config: Optional[HandlerConfig] = None):
        """
        Инициализирует обработчик.

        Args:
            config: Конфигурация обработчика
        """
        self.config = config or HandlerConfig()
        self._next_handler: Optional["LogHandler"] = None
        self._sealed = False

    @property
    def next_handler(self) -> Optional["LogHandler"]:
        return self._next_handler

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def set_next(self, handler: "LogHandler") -> "LogHandler":
        """
        Устанавливает следующий обработчик в цепочке.

        Args:
            handler: Следующий обработчик

        Returns:
            Установленный обработчик (для цепочки вызовов)

        Raises:
            RuntimeError: Если цепочка уже собрана и запечатана
            ValueError: Если связывание образует цикл
        """
        if self._sealed:
            raise RuntimeError(f"Handler {self.name} is sealed, chain is immutable")
        if any(h is self for h in handler.chain()):
            raise ValueError(f"Linking {self.name} -> {handler.name} creates a cycle")
        self._next_handler = handler
        return handler

    def chain(self) -> Iterator["LogHandler"]:
        """Перебирает обработчики от текущего до конца цепочки."""
        handler: Optional[LogHandler] = self
        while handler is not None:
            yield handler
            handler = handler._next_handler

    def can_handle(self, message: LogMessage) -> bool:
        """
        Проверяет, отвечает ли обработчик за уровень сообщения.

        Args:
            message: Лог-сообщение

        Returns:
            True, если обработчик включен и уровень совпадает
        """
        return self.config.enabled and message.severity == self.severity

    def handle(self, message: LogMessage) -> Outcome:
        """
        Обрабатывает сообщение или передает его следующему обработчику.

        Ошибки обработчиков не перехватываются и доходят до вызывающего кода.

        Args:
            message: Лог-сообщение

        Returns:
            CONSUMED, если сообщение обработано; UNHANDLED, если цепочка
            закончилась и никто не взял сообщение
        """
        outcome = Outcome.FORWARDED
        if self.can_handle(message):
            outcome = self._process(message)

        if outcome != Outcome.FORWARDED:
            return outcome

        # Читаем ссылку один раз: цепочка не меняется во время обработки
        next_handler = self._next_handler
        if next_handler is None:
            logger.debug(f"Конец цепочки на {self.name}, сообщение не обработано: {message}")
            return Outcome.UNHANDLED

        logger.debug(f"{self.name}: сообщение передано в {next_handler.name}")
        return next_handler.handle(message)

    @abstractmethod
    def _process(self, message: LogMessage) -> Outcome:
        """
        Реализуется в наследниках - здесь основная логика обработки.

        Args:
            message: Лог-сообщение уровня self.severity

        Returns:
            Исход обработки
        """
        pass

    def __repr__(self) -> str:
        return f"{self.name}(severity={self.severity.value})"


def build_chain(
    handlers: Sequence[LogHandler], order: Optional[Sequence[int]] = None
) -> LogHandler:
    """
    Связывает обработчики в цепочку и запечатывает ее.

    Args:
        handlers: Обработчики
        order: Порядок обработчиков (индексы в handlers). По умолчанию - порядок списка

    Returns:
        Первый обработчик цепочки (точка входа)

    Raises:
        ValueError: Если обработчиков нет, порядок некорректен или
            один и тот же обработчик встречается дважды
    """
    if not handlers:
        raise ValueError("No handlers to build a chain from")

    if order is None:
        ordered: List[LogHandler] = list(handlers)
    else:
        if sorted(order) != list(range(len(handlers))):
            raise ValueError(f"Order {list(order)} is not a permutation of handlers")
        ordered = [handlers[i] for i in order]

    if len({id(h) for h in ordered}) != len(ordered):
        raise ValueError("The same handler instance appears twice in the chain")

    for handler in ordered:
        if handler._sealed:
            raise RuntimeError(f"Handler {handler.name} already belongs to a chain")

    # Старые связи сбрасываем: цепочка определяется только порядком ordered
    for handler in ordered:
        handler._next_handler = None
    for current, following in zip(ordered, ordered[1:]):
        current.set_next(following)

    claimed = {}
    for position, handler in enumerate(ordered):
        handler._sealed = True
        if handler.severity in claimed:
            logger.warning(
                f"{handler.name} (позиция {position}) никогда не получит "
                f"{handler.severity.value}: раньше стоит {claimed[handler.severity]}"
            )
        else:
            claimed[handler.severity] = handler.name

    logger.info(
        f"Создана цепочка обработчиков из {len(ordered)} элементов: "
        f"{' -> '.join(h.name for h in ordered)}"
    )
    return ordered[0]
