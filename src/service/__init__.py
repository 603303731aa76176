"""Сервисы маршрутизации лог-сообщений."""

from .log_router_service import LogRouterService, submit

__all__ = ["LogRouterService", "submit"]
