"""
Точка входа демонстрации цепочки обработчиков лог-сообщений.

Загружает конфигурацию, собирает цепочку и прогоняет демонстрационные сообщения.
"""
import argparse
import logging
import sys
from typing import List, Optional

from src.config import DEFAULT_YAML_PATH, AppConfig, setup_basic_logging
from src.application.app import LogChainApp

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Log chain of responsibility demo")
    parser.add_argument(
        "--config",
        default=DEFAULT_YAML_PATH,
        help=f"Путь к YAML конфигу (default: {DEFAULT_YAML_PATH})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Уровень логирования (переопределяет конфигурацию)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция приложения."""
    # Базовое логирование для отображения ошибок конфигурации
    setup_basic_logging()
    args = parse_args(argv)

    try:
        config = AppConfig.load_from_yaml(args.config)
        if args.log_level:
            config = config.model_copy(update={"log_level": args.log_level.upper()})
    except ValueError as e:
        logger.error(f"Ошибка конфигурации: {e}")
        return 1

    config.setup_logging()
    logger.info("Инициализация цепочки обработчиков")

    try:
        app = LogChainApp(config)
    except ValueError as e:
        logger.error(f"Ошибка сборки цепочки: {e}")
        return 1

    app.run_demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())
