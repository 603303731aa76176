"""Обработчики лог-сообщений и сборка цепочки."""

from .log_handler_chain import HandlerConfig, LogHandler, build_chain
from .concrete_handlers import (
    ErrorHandler,
    FatalErrorHandler,
    UnknownHandler,
    WarningHandler,
)

__all__ = [
    "HandlerConfig",
    "LogHandler",
    "build_chain",
    "WarningHandler",
    "ErrorHandler",
    "FatalErrorHandler",
    "UnknownHandler",
]
