"""
Доменная модель лог-сообщения.

Неизменяемая запись: уровень серьезности и текст сообщения.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Уровни серьезности лог-сообщения (закрытый набор)."""

    WARNING = "Warning"
    ERROR = "Error"
    FATAL_ERROR = "FatalError"
    UNKNOWN = "Unknown"


class LogMessage(BaseModel):
    """Лог-сообщение, проходящее через цепочку обработчиков."""

    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(description="Уровень серьезности сообщения")
    text: str = Field(description="Текст сообщения")

    def format_line(self, kind: str) -> str:
        """
        Формирует строку для вывода в приемник.

        Args:
            kind: Префикс строки (например, "Warning" или "Error")

        Returns:
            Строка вида "{kind}: {text}"
        """
        return f"{kind}: {self.text}"

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.text}"
