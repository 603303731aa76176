"""
Приемники лог-строк (консоль и файл).

Абстракция над выводом для обеспечения тестируемости и взаимозаменяемости
приемников: обработчик знает только о методе write_line.
"""

import logging
import sys
import threading
import weakref
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class LogSink(ABC):
    """Абстрактный интерфейс приемника лог-строк."""

    @abstractmethod
    def write_line(self, line: str) -> None:
        """
        Записывает одну строку в приемник.

        Args:
            line: Строка без завершающего перевода строки

        Raises:
            OSError: Если приемник недоступен
        """
        pass


class ConsoleSink(LogSink):
    """Приемник, пишущий в поток вывода (по умолчанию stdout)."""

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Создает консольный приемник.

        Args:
            stream: Поток вывода. Если не указан, используется текущий sys.stdout
        """
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # sys.stdout берется в момент записи, а не при создании
        return self._stream or sys.stdout

    def write_line(self, line: str) -> None:
        stream = self.stream
        stream.write(f"{line}\n")
        stream.flush()


class FileSink(LogSink):
    """
    Приемник, дописывающий строки в текстовый файл.

    Файл открывается в режиме добавления на каждый вызов и сразу закрывается.
    Записи в один и тот же путь сериализуются общей блокировкой, поэтому
    строки из разных потоков не перемешиваются. Блокировка живет, пока ею
    кто-то пользуется.

    Непредставимые в UTF-8 символы (например, одиночные суррогаты)
    записываются как escape-последовательности.
    """

    _locks: "weakref.WeakValueDictionary[Path, threading.Lock]" = weakref.WeakValueDictionary()
    _locks_guard = threading.Lock()

    def __init__(self, file_path: str | Path):
        """
        Создает файловый приемник.

        Args:
            file_path: Путь к файлу журнала
        """
        self.file_path = Path(file_path)

    @classmethod
    def _lock_for(cls, file_path: Path) -> threading.Lock:
        key = file_path.resolve()
        with cls._locks_guard:
            lock = cls._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                cls._locks[key] = lock
            return lock

    def write_line(self, line: str) -> None:
        """
        Дописывает строку в файл.

        Args:
            line: Строка без завершающего перевода строки

        Raises:
            OSError: Если файл не удалось открыть или записать
        """
        with self._lock_for(self.file_path):
            try:
                with open(
                    self.file_path, "a", encoding="utf-8", errors="backslashreplace"
                ) as f:
                    f.write(f"{line}\n")
            except OSError as e:
                logger.error(f"Ошибка записи в файл {self.file_path}: {e}")
                raise
        logger.debug(f"Записана строка в файл: {self.file_path}")

    def __repr__(self) -> str:
        return f"FileSink({str(self.file_path)!r})"
