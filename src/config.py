"""
Конфигурация приложения.

Загружает настройки из .env и/или YAML файла.
Использует Pydantic для валидации.
"""
import os
import sys
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.handlers.handler_factory import STANDARD_HANDLERS

# Загружаем переменные окружения из .env
load_dotenv()

DEFAULT_YAML_PATH = "chain_config.yaml"


def setup_logging(
    level: Optional[str] = None, format_string: Optional[str] = None
) -> None:
    """Настраивает логирование (уровень из LOG_LEVEL или INFO по умолчанию)."""
    log_level = level or os.getenv("LOG_LEVEL", "INFO").upper()
    log_format = format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    numeric_level = getattr(logging, log_level, logging.INFO)

    # stdout занят консольным приемником, журнал приложения пишется в stderr
    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )


def setup_basic_logging() -> None:
    """Базовое логирование для отображения ошибок до загрузки полной конфигурации."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def default_handlers() -> Dict[str, Dict[str, Any]]:
    """Стандартный порядок цепочки: Warning -> Error -> Fatal -> Unknown."""
    return {
        name: {"enabled": True, "priority": priority}
        for name, (_, priority) in STANDARD_HANDLERS.items()
    }


class ChainConfig(BaseSettings):
    """Конфигурация цепочки обработчиков."""

    model_config = SettingsConfigDict(env_prefix="LOG_CHAIN_")

    error_log_path: str = Field(
        default="log.txt", description="Файл, в который ErrorHandler дописывает ошибки"
    )
    handlers: Dict[str, Dict[str, Any]] = Field(
        default_factory=default_handlers,
        description="Обработчики цепочки: {name: {enabled, priority}}",
    )

    @field_validator("error_log_path")
    @classmethod
    def validate_error_log_path(cls, v: str) -> str:
        """Путь к файлу не может быть пустым."""
        value = v.strip()
        if not value:
            raise ValueError("error_log_path не может быть пустым")
        return value

    @field_validator("handlers")
    @classmethod
    def validate_handlers(
        cls, v: Dict[str, Dict[str, Any]]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Нормализует настройки обработчиков.

        Имена проверяются по таблице стандартных обработчиков, приоритет
        по умолчанию берется из нее же.

        Args:
            v: Словарь {имя: {"enabled": bool, "priority": int}}

        Returns:
            Словарь с приведенными типами

        Raises:
            ValueError: Если имя обработчика неизвестно или параметры некорректны
        """
        normalized = {}
        for raw_name, settings in v.items():
            name = raw_name.strip().lower()
            if name not in STANDARD_HANDLERS:
                raise ValueError(
                    f"Неизвестный обработчик {raw_name}, ожидается один из {sorted(STANDARD_HANDLERS)}"
                )
            settings = settings or {}
            unknown_keys = set(settings) - {"enabled", "priority"}
            if unknown_keys:
                raise ValueError(
                    f"Неизвестные параметры обработчика {name}: {sorted(unknown_keys)}"
                )
            try:
                priority = int(settings.get("priority", STANDARD_HANDLERS[name][1]))
            except (TypeError, ValueError):
                raise ValueError(
                    f"Некорректный priority обработчика {name}: {settings.get('priority')}"
                )
            normalized[name] = {
                "enabled": bool(settings.get("enabled", True)),
                "priority": priority,
            }
        return normalized


class AppConfig(BaseSettings):
    """Основная конфигурация приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    chain: ChainConfig = Field(default_factory=ChainConfig)

    # Логирование
    log_level: str = Field(default="INFO", description="Уровень логирования")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Валидация уровня логирования."""
        value = v.upper().strip()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Некорректный уровень логирования: {v}")
        return value

    @classmethod
    def load_from_yaml(cls, yaml_path: Optional[str] = None) -> "AppConfig":
        """
        Загружает конфигурацию из YAML файла поверх переменных окружения.

        Переменные окружения имеют приоритет над значениями из YAML.
        Если YAML файл не найден или не читается, используется конфигурация
        из переменных окружения (.env).

        Args:
            yaml_path: Путь к YAML файлу. По умолчанию 'chain_config.yaml' в текущей директории.

        Returns:
            Экземпляр AppConfig с загруженными настройками.

        Raises:
            ValueError: Если значения в YAML не проходят валидацию
        """
        path = Path(yaml_path or DEFAULT_YAML_PATH)

        if not path.exists():
            logging.info(
                f"YAML файл {path} не найден. Используется конфигурация из .env"
            )
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logging.error(f"Ошибка при парсинге YAML файла {path}: {e}")
            logging.info("Используется конфигурация из .env")
            return cls()
        except OSError as e:
            logging.error(f"Ошибка при чтении YAML файла {path}: {e}")
            logging.info("Используется конфигурация из .env")
            return cls()

        if not yaml_data:
            logging.warning(f"YAML файл {path} пуст. Используется конфигурация из .env")
            return cls()

        if not isinstance(yaml_data, dict):
            raise ValueError(f"YAML файл {path} должен содержать словарь настроек")

        overrides: Dict[str, Any] = {}

        chain_data = yaml_data.get("chain") or {}
        chain_overrides = {
            key: value
            for key, value in chain_data.items()
            if not os.getenv(f"LOG_CHAIN_{key.upper()}")
        }
        if chain_overrides:
            overrides["chain"] = ChainConfig(**chain_overrides)
            logging.info("Загружена конфигурация цепочки из YAML")

        if "log_level" in yaml_data and not os.getenv("LOG_LEVEL"):
            overrides["log_level"] = yaml_data["log_level"]

        return cls(**overrides)

    def setup_logging(self) -> None:
        """Настраивает логирование на основе конфигурации."""
        setup_logging(level=self.log_level)
