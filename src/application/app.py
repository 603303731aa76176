"""
Главное приложение.

Собирает цепочку обработчиков по конфигурации и прогоняет через нее
демонстрационный набор сообщений.
"""

import logging
from typing import List, Optional

from src.config import AppConfig
from src.domain.log_message import LogMessage, Severity
from src.domain.outcome import DispatchResult
from src.handlers.handler_factory import HandlerChainFactory
from src.infrastructure.log_sink import ConsoleSink, FileSink, LogSink
from src.service.log_router_service import LogRouterService

logger = logging.getLogger(__name__)


# Первая фаза: смешанные уровни одним пакетом
DEMO_BATCH = [
    LogMessage(severity=Severity.WARNING, text="Low disk space."),
    LogMessage(severity=Severity.ERROR, text="Failed to open file."),
    LogMessage(severity=Severity.FATAL_ERROR, text="Memory corruption detected."),
]

# Вторая фаза: сообщение неизвестного типа отдельно
DEMO_UNKNOWN = LogMessage(severity=Severity.UNKNOWN, text="Unrecognized format.")


class LogChainApp:
    """Главный класс приложения - создает приемники, цепочку и сервис."""

    def __init__(self, config: AppConfig, console_sink: Optional[LogSink] = None):
        """
        Создает все необходимые компоненты.

        Args:
            config: Конфигурация приложения
            console_sink: Приемник для предупреждений (по умолчанию stdout)
        """
        self.config = config
        self.console_sink = console_sink or ConsoleSink()
        self.error_sink = FileSink(config.chain.error_log_path)

        handler_dependencies = {
            "warning": {"sink": self.console_sink},
            "error": {"sink": self.error_sink},
        }

        entry_handler = HandlerChainFactory.create_chain(
            handlers_config=config.chain.handlers,
            dependencies=handler_dependencies,
        )
        self.router = LogRouterService(entry_handler)

    def run_demo(self) -> List[DispatchResult]:
        """
        Прогоняет демонстрационные сообщения в две фазы.

        Returns:
            Результаты обработки всех сообщений
        """
        logger.info("Фаза 1: пакет сообщений разных уровней")
        results = self.router.submit_batch(DEMO_BATCH)

        logger.info("Фаза 2: сообщение неизвестного типа")
        results.extend(self.router.submit_batch([DEMO_UNKNOWN]))

        failed = sum(1 for r in results if not r.ok)
        logger.info(f"Обработано сообщений: {len(results)}, с ошибками: {failed}")
        return results
