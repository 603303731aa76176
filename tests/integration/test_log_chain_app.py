"""
Интеграционные тесты: сборка цепочки из конфигурации и демонстрационный прогон.
"""

import logging
import os

import pytest

import main
from src.application.app import LogChainApp
from src.config import AppConfig, ChainConfig
from src.domain.errors import FatalConditionError, UnrecognizedClassificationError
from src.domain.outcome import Outcome


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Чистое окружение и восстановление корневого логгера после теста."""
    for key in list(os.environ):
        if key.startswith("LOG_CHAIN_") or key == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def app_config(error_log_path) -> AppConfig:
    return AppConfig(chain=ChainConfig(error_log_path=str(error_log_path)))


class TestLogChainApp:
    """Тесты для LogChainApp."""

    def test_chain_built_in_default_order(self, app_config, console_sink):
        app = LogChainApp(app_config, console_sink)

        names = [h.name for h in app.router.entry_handler.chain()]

        assert names == ["WarningHandler", "ErrorHandler", "FatalErrorHandler", "UnknownHandler"]

    def test_run_demo(self, app_config, console_sink, console_stream, error_log_path):
        """Тест: две фазы демонстрации, ошибки не прерывают прогон."""
        app = LogChainApp(app_config, console_sink)

        results = app.run_demo()

        assert len(results) == 4
        assert [r.outcome for r in results] == [
            Outcome.CONSUMED,
            Outcome.CONSUMED,
            Outcome.FATAL,
            Outcome.FATAL,
        ]
        assert isinstance(results[2].error, FatalConditionError)
        assert isinstance(results[3].error, UnrecognizedClassificationError)
        assert console_stream.getvalue() == "Warning: Low disk space.\n"
        assert error_log_path.read_text(encoding="utf-8") == "Error: Failed to open file.\n"

    def test_run_demo_twice_appends(self, app_config, console_sink, error_log_path):
        app = LogChainApp(app_config, console_sink)

        app.run_demo()
        app.run_demo()

        assert error_log_path.read_text(encoding="utf-8").count("Error: Failed to open file.") == 2

    def test_chain_without_unknown_handler(self, error_log_path, console_sink):
        """Тест: без терминатора сообщение Unknown доходит до конца цепочки."""
        config = AppConfig(
            chain=ChainConfig(
                error_log_path=str(error_log_path),
                handlers={"warning": {"priority": 0}, "error": {"priority": 1}},
            )
        )
        app = LogChainApp(config, console_sink)

        results = app.run_demo()

        assert results[2].outcome == Outcome.UNHANDLED
        assert results[3].outcome == Outcome.UNHANDLED


class TestMain:
    """Тесты для точки входа main."""

    def test_main_runs_demo(self, tmp_path, capsys):
        yaml_path = tmp_path / "chain.yaml"
        yaml_path.write_text(
            f"chain:\n  error_log_path: {tmp_path / 'errors.txt'}\n", encoding="utf-8"
        )

        exit_code = main.main(["--config", str(yaml_path), "--log-level", "debug"])

        assert exit_code == 0
        assert capsys.readouterr().out == "Warning: Low disk space.\n"
        assert (tmp_path / "errors.txt").read_text(encoding="utf-8") == "Error: Failed to open file.\n"

    def test_main_without_config_file_uses_defaults(self, tmp_path, capsys):
        exit_code = main.main([])

        assert exit_code == 0
        assert (tmp_path / "log.txt").exists()

    def test_main_invalid_config_returns_error(self, tmp_path):
        yaml_path = tmp_path / "chain.yaml"
        yaml_path.write_text("log_level: loud\n", encoding="utf-8")

        assert main.main(["--config", str(yaml_path)]) == 1

    def test_main_unknown_handler_returns_error(self, tmp_path):
        yaml_path = tmp_path / "chain.yaml"
        yaml_path.write_text("chain:\n  handlers:\n    critical: {priority: 0}\n", encoding="utf-8")

        assert main.main(["--config", str(yaml_path)]) == 1
