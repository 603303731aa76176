"""
Инфраструктурный слой приложения.

Содержит приемники лог-строк:
- консольный приемник
- файловый приемник с построчной блокировкой
"""

from src.infrastructure.log_sink import ConsoleSink, FileSink, LogSink

__all__ = [
    "LogSink",
    "ConsoleSink",
    "FileSink",
]
