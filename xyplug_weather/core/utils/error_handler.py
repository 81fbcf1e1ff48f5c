# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок плагина.

Иерархия:
- JobError: завершает задачу с кодом input / params / http / api
- FetchError: сетевой сбой при запросе к API
  - RequestTimeoutError: истёк таймаут запроса
  - HttpStatusError: ответ со статусом вне 2xx
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")

# === КОДЫ ОШИБОК ЗАДАЧИ ===
ERROR_INPUT = "input"
ERROR_PARAMS = "params"
ERROR_HTTP = "http"
ERROR_API = "api"
ERROR_INTERNAL = "internal"


class PluginError(Exception):
    """Базовое исключение плагина."""


class JobError(PluginError):
    """Терминальная ошибка задачи: превращается в документ {xy, code, description}."""

    def __init__(self, code: str, description: str):
        super().__init__(description)
        self.code = code
        self.description = description

    def to_document(self) -> dict:
        return {"xy": 1, "code": self.code, "description": self.description}


class FetchError(PluginError):
    """Сетевой сбой при обращении к API."""


class RequestTimeoutError(FetchError):
    """Запрос не уложился в таймаут."""


class HttpStatusError(FetchError):
    """API ответил статусом вне диапазона 2xx."""

    def __init__(self, status_code: int):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


def describe_fetch_error(exception: Exception, prefix: str = "Request") -> str:
    """
    Человекочитаемое описание сетевой ошибки.

    Args:
        exception (Exception): Исключение из fetch_json
        prefix (str): "Request" или "Air quality request"

    Returns:
        str: "Request timed out." или "Request failed: HTTP 503"
    """
    if isinstance(exception, RequestTimeoutError):
        return f"{prefix} timed out."
    return f"{prefix} failed: {exception}"


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (job_id, lat, lon и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
