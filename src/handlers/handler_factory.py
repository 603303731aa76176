"""
Фабрика для создания цепочки обработчиков (Factory Pattern).

Имена в конфигурации соответствуют закрытому набору уровней серьезности.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from src.handlers.concrete_handlers import (
    ErrorHandler,
    FatalErrorHandler,
    UnknownHandler,
    WarningHandler,
)
from src.handlers.log_handler_chain import HandlerConfig, LogHandler, build_chain

logger = logging.getLogger(__name__)

# Имя в конфигурации -> (класс, приоритет по умолчанию)
STANDARD_HANDLERS: Dict[str, Tuple[Type[LogHandler], int]] = {
    "warning": (WarningHandler, 0),
    "error": (ErrorHandler, 1),
    "fatal": (FatalErrorHandler, 2),
    "unknown": (UnknownHandler, 3),
}


class HandlerChainFactory:
    """Фабрика для создания цепочки обработчиков."""

    @staticmethod
    def create_handler(
        name: str,
        config: Optional[HandlerConfig] = None,
        handlers: Optional[Mapping[str, Tuple[Type[LogHandler], int]]] = None,
        **kwargs,
    ) -> LogHandler:
        """
        Создает обработчик по имени.

        Args:
            name: Имя обработчика
            config: Конфигурация (по умолчанию - приоритет из таблицы обработчиков)
            handlers: Таблица обработчиков (по умолчанию STANDARD_HANDLERS)
            **kwargs: Дополнительные параметры конструктора (например, sink)

        Returns:
            Созданный обработчик

        Raises:
            ValueError: Если имя неизвестно
        """
        handlers = STANDARD_HANDLERS if handlers is None else handlers
        if name not in handlers:
            raise ValueError(
                f"Unknown handler '{name}', expected one of {sorted(handlers)}"
            )

        handler_class, default_priority = handlers[name]
        return handler_class(
            config=config or HandlerConfig(priority=default_priority), **kwargs
        )

    @staticmethod
    def create_chain(
        handlers_config: Dict[str, Dict[str, Any]],
        dependencies: Optional[Dict[str, Dict[str, Any]]] = None,
        handlers: Optional[Mapping[str, Tuple[Type[LogHandler], int]]] = None,
    ) -> LogHandler:
        """
        Создает цепочку обработчиков по конфигурации.

        Порядок цепочки задается приоритетом (меньше = раньше); при равных
        приоритетах сохраняется порядок конфигурации.

        Args:
            handlers_config: Конфигурация обработчиков
                Формат: {"handler_name": {"enabled": True, "priority": 0}}
            dependencies: Зависимости для обработчиков
                Формат: {"handler_name": {"param1": value1, ...}}
            handlers: Таблица обработчиков (по умолчанию STANDARD_HANDLERS)

        Returns:
            Первый обработчик цепочки

        Raises:
            ValueError: Если имя обработчика неизвестно или нет включенных обработчиков
        """
        handlers = STANDARD_HANDLERS if handlers is None else handlers
        dependencies = dependencies or {}

        def priority_of(item: Tuple[str, Dict[str, Any]]) -> int:
            name, settings = item
            default = handlers[name][1] if name in handlers else 0
            return settings.get("priority", default)

        created = []
        for handler_name, handler_config in sorted(handlers_config.items(), key=priority_of):
            if not handler_config.get("enabled", True):
                logger.debug(f"Обработчик {handler_name} отключен, пропускаем")
                continue

            handler = HandlerChainFactory.create_handler(
                handler_name,
                HandlerConfig(enabled=True, priority=priority_of((handler_name, handler_config))),
                handlers,
                **dependencies.get(handler_name, {}),
            )
            created.append(handler)
            logger.debug(f"Создан обработчик: {handler_name}")

        if not created:
            raise ValueError("No enabled handlers found")

        return build_chain(created)
