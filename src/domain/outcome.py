"""
Результаты обработки лог-сообщения цепочкой.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

from src.domain.log_message import LogMessage

if TYPE_CHECKING:
    from src.domain.errors import LogRoutingError


class Outcome(str, Enum):
    """Исход обработки сообщения."""

    CONSUMED = "consumed"  # Сообщение обработано, побочный эффект выполнен
    FORWARDED = "forwarded"  # Передано следующему обработчику (наружу не выходит)
    UNHANDLED = "unhandled"  # Цепочка закончилась, никто не взял сообщение
    FATAL = "fatal"  # Обработчик сигнализирует о фатальном состоянии


@dataclass
class DispatchResult:
    """Результат отправки одного сообщения в пакетном режиме."""

    message: LogMessage
    outcome: Optional[Outcome] = None
    error: Optional["LogRoutingError"] = None

    @property
    def ok(self) -> bool:
        """True, если сообщение обработано без ошибок."""
        return self.error is None and self.outcome == Outcome.CONSUMED
