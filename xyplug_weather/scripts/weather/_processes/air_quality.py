# -*- coding: utf-8 -*-
"""
Качество воздуха: первый час ответа Open-Meteo как «текущее» значение.
"""

import logging
from typing import Any, Dict, Optional

from xyplug_weather.core.utils.validator import is_finite_number

logger = logging.getLogger("air_quality")

# Поля качества воздуха, запрашиваемые всегда.
DEFAULT_AIR_QUALITY_HOURLY = [
    "pm10",
    "pm2_5",
    "carbon_monoxide",
    "nitrogen_dioxide",
    "sulphur_dioxide",
    "ozone",
    "uv_index",
    "uv_index_clear_sky",
    "european_aqi"
]

# Верхние границы включительно
EUROPEAN_AQI_BANDS = [
    (20, "Good"),
    (40, "Fair"),
    (60, "Moderate"),
    (80, "Poor"),
    (100, "Very Poor"),
]


def classify_european_aqi(value: Any) -> Optional[str]:
    """
    Европейский AQI → словесная оценка.

    >>> classify_european_aqi(20)
    'Good'
    >>> classify_european_aqi(100.1)
    'Extremely Poor'
    """
    if not is_finite_number(value):
        return None
    for upper, label in EUROPEAN_AQI_BANDS:
        if value <= upper:
            return label
    return "Extremely Poor"


def build_air_quality_current(air_quality_data: Any) -> Optional[Dict[str, Any]]:
    """
    Извлекает первую запись hourly как текущее качество воздуха.

    Returns:
        dict: {"time", <поле>: значение, ..., "aqi_label"?} или None
    """
    hourly = air_quality_data.get("hourly") if isinstance(air_quality_data, dict) else None
    if not isinstance(hourly, dict):
        return None
    times = hourly.get("time")
    if not isinstance(times, list) or not times:
        return None

    current = {"time": times[0]}
    for key, series in hourly.items():
        if key == "time":
            continue
        if isinstance(series, list) and series:
            current[key] = series[0]

    label = classify_european_aqi(current.get("european_aqi"))
    if label:
        current["aqi_label"] = label

    logger.debug(f"🌫️  Качество воздуха: {current}")
    return current
