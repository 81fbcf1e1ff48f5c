# -*- coding: utf-8 -*-
"""
Менеджер координат: почтовый индекс → координаты + административные названия.

Функции:
- Проверка файлового кэша (core/utils/cache_manager.py)
- Живой запрос к геокодеру Open-Meteo при промахе
- Запись результата в кэш (ошибки записи игнорируются)

Использование:
>>> from xyplug_weather.core.utils.coordinate_manager import resolve_postal_code
>>> place = resolve_postal_code("90210", 15000, "")
>>> place.name
'Beverly Hills'
"""

import logging
import math
from typing import Optional

from xyplug_weather.core.models.weather_response import GeoPlace
from xyplug_weather.core.utils.api_client import OpenMeteoClient
from xyplug_weather.core.utils.cache_manager import (
    get_postal_cache_path,
    load_geocode_cache,
    save_geocode_cache,
)

logger = logging.getLogger("coordinate_manager")


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def resolve_postal_code(
    postal_code: str,
    timeout_ms: float,
    api_key: str = "",
    client: Optional[OpenMeteoClient] = None,
    cache_dir: Optional[str] = None
) -> Optional[GeoPlace]:
    """
    Возвращает координаты для почтового индекса (с кэшированием).

    Args:
        postal_code (str): Почтовый индекс
        timeout_ms (float): Таймаут запроса к геокодеру
        api_key (str): Ключ Open-Meteo (если клиент не передан)
        client (OpenMeteoClient): Готовый клиент
        cache_dir (str): Каталог кэша

    Returns:
        Optional[GeoPlace]: Место или None, если индекс не найден

    Raises:
        FetchError: сетевой сбой геокодера
    """
    postal_code = str(postal_code or "").strip()
    if not postal_code:
        return None

    if client is None:
        client = OpenMeteoClient()
        if api_key:
            client.config.api_key = api_key
    if cache_dir is None:
        cache_dir = client.config.cache_dir or None

    # === ПРОВЕРКА КЭША ===
    cache_path = get_postal_cache_path(postal_code, cache_dir)
    cached = load_geocode_cache(cache_path)
    if cached:
        return GeoPlace.from_record(cached)

    # === ЗАПРОС К API ===
    geo_data = client.geocode(postal_code, timeout_ms)
    results = geo_data.get("results") if isinstance(geo_data, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        logger.warning(f"🌍 Индекс не найден: {postal_code}")
        return None

    first = results[0]
    latitude = _to_float(first.get("latitude"))
    longitude = _to_float(first.get("longitude"))
    if not math.isfinite(latitude) or not math.isfinite(longitude):
        logger.warning(f"🌍 Геокодер вернул некорректные координаты для {postal_code}")
        return None

    record = {**first, "latitude": latitude, "longitude": longitude}

    # === КЭШИРОВАНИЕ ===
    save_geocode_cache(cache_path, record)

    place = GeoPlace.from_record(record)
    logger.info(f"🌍 {postal_code} → {place.name} ({latitude}, {longitude})")
    return place
