# xyplug_weather/config/logging_config.py
import copy
import logging
import logging.config
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-15s | %(funcName)-20s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# stdout занят строкой результата, поэтому консольный вывод только в stderr
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": LOG_FORMAT,
            "datefmt": LOG_DATEFMT
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stderr"
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"]
    },
    "loggers": {
        "urllib3": {"level": "WARNING"},
        "requests": {"level": "WARNING"}
    }
}

def build_logging_config(log_level: str = "WARNING", log_dir: Optional[str] = None) -> dict:
    """Собирает dictConfig: консоль (stderr) + опционально файл с ротацией."""
    config = copy.deepcopy(LOGGING_CONFIG)
    level = log_level.upper() if isinstance(log_level, str) else "WARNING"
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    config["root"]["level"] = level

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        # Обработчик для файла (с ротацией 10 МБ, 5 файлов)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(log_path / "xyplug_weather.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8"
        }
        config["root"]["handlers"].append("file")

    return config

def setup_logging(log_level: str = "WARNING", log_dir: Optional[str] = None):
    """Настраивает глобальное логирование плагина."""
    logging.config.dictConfig(build_logging_config(log_level, log_dir))
    logging.getLogger("logging_config").debug("🔧 Логирование инициализировано (уровень %s)", log_level)
