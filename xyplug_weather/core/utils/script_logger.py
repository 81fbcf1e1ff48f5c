# -*- coding: utf-8 -*-
"""
Логгер для скрипта задачи.

Использует общую конфигурацию логирования из logging_config.py,
но добавляет контекст: job_id, script_name.
"""

import logging

from xyplug_weather.config.logging_config import LOG_DATEFMT

PLUGIN_HANDLERS = ("console", "file")


# === КОНТЕКСТНЫЙ ФОРМАТТЕР ===
class ContextFormatter(logging.Formatter):
    def format(self, record):
        # Добавляем контекст, если он есть
        record.job_id = getattr(record, "job_id", "N/A")
        record.script_name = getattr(record, "script_name", "N/A")
        return super().format(record)


class ContextFilter(logging.Filter):
    """Вставляет job_id и script_name в каждую запись."""

    def __init__(self, job_id: str, script_name: str):
        super().__init__()
        self.job_id = job_id
        self.script_name = script_name

    def filter(self, record):
        record.job_id = self.job_id
        record.script_name = self.script_name
        return True


CONTEXT_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-20s | "
    "[JOB:%(job_id)s | SCRIPT:%(script_name)s] | %(message)s"
)


def get_script_logger(job_id: str = "N/A", script_name: str = "unknown") -> logging.Logger:
    """
    Возвращает логгер с контекстом для скрипта.

    Пример:
        logger = get_script_logger(job.get("id", "N/A"), "weather_forecast_script")
        logger.info("Начинаю обработку...")
    """
    child_logger = logging.getLogger(f"script_logger.{script_name}")

    # Контекст меняется от задачи к задаче, старый фильтр заменяем
    for old_filter in list(child_logger.filters):
        if isinstance(old_filter, ContextFilter):
            child_logger.removeFilter(old_filter)
    child_logger.addFilter(ContextFilter(str(job_id), script_name))

    # Форматтер с контекстом для обработчиков из logging_config
    for handler in logging.getLogger().handlers:
        if handler.get_name() in PLUGIN_HANDLERS and not isinstance(handler.formatter, ContextFormatter):
            handler.setFormatter(ContextFormatter(CONTEXT_FORMAT, datefmt=LOG_DATEFMT))

    return child_logger
