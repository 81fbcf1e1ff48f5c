# -*- coding: utf-8 -*-
"""
Файловый кэш геокодирования.

Один JSON-файл на почтовый индекс: `{tmp}/{safe_code}.json`.
Запись содержит сырой ответ геокодера с числовыми latitude/longitude.
Срока жизни нет: файл живёт, пока его не удалят снаружи.
Любые ошибки чтения и записи считаются промахом и наружу не выходят.
"""

import json
import logging
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from xyplug_weather.core.utils.validator import is_finite_number

logger = logging.getLogger("cache_manager")

# Всё, кроме [A-Za-z0-9_.-], заменяется на "_"
UNSAFE_CHARS = re.compile(r"[^\w.-]", re.ASCII)
DETAIL_FIELDS = ("name", "admin1", "admin2", "admin3", "admin4")


def sanitize_cache_key(postal_code: str) -> str:
    """'SW1A 1AA' → 'SW1A_1AA'"""
    return UNSAFE_CHARS.sub("_", str(postal_code).strip())


def get_postal_cache_path(postal_code: str, cache_dir: Optional[str] = None) -> Path:
    """
    Путь к файлу кэша для почтового индекса.

    Args:
        postal_code (str): Почтовый индекс как его ввёл пользователь
        cache_dir (str): Каталог кэша (если None: системный temp)

    Returns:
        Path: Путь к JSON-файлу
    """
    base = Path(cache_dir) if cache_dir else Path(tempfile.gettempdir())
    return base / f"{sanitize_cache_key(postal_code)}.json"


def is_valid_geocode_entry(entry: Any) -> bool:
    """Запись годна, если есть конечные координаты и хотя бы одно название."""
    if not isinstance(entry, dict):
        return False
    has_coords = is_finite_number(entry.get("latitude")) and is_finite_number(entry.get("longitude"))
    has_details = any(entry.get(key) for key in DETAIL_FIELDS)
    return has_coords and has_details


def load_geocode_cache(path: Path) -> Optional[Dict[str, Any]]:
    """
    Читает запись из кэша.

    Returns:
        dict: Запись или None (нет файла, битый JSON, неполная запись)
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            cached = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"💨 Промах кэша {path.name}: {e}")
        return None

    if not is_valid_geocode_entry(cached):
        logger.debug(f"💨 Неполная запись в кэше: {path.name}")
        return None

    logger.info(f"💾 Кэш найден: {path.name}")
    return cached


def save_geocode_cache(path: Path, record: Dict[str, Any]) -> bool:
    """
    Записывает запись в кэш. Ошибки записи не фатальны.

    Returns:
        bool: True, если файл записан
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        logger.debug(f"⚠️  Не удалось записать кэш {path}: {e}")
        return False

    logger.info(f"💾 Геокодинг закэширован: {path.name}")
    return True
