# -*- coding: utf-8 -*-
"""
Нормализация параметров задачи.

Все правила приведения типов собраны здесь и применяются один раз,
до любой бизнес-логики:
- числа: None / "" / bool → значение по умолчанию, строки через float()
- булевы: true|yes|1 и false|no|0, числа != 0
- списки: строка через запятую, пустые элементы отбрасываются
"""

import math
import logging
from typing import Any, Iterable, List, Optional

from xyplug_weather.core.models.weather_response import JobParams, DEFAULT_TIMEOUT_MS

logger = logging.getLogger("validator")

# Поля daily, запрашиваемые по умолчанию.
DEFAULT_DAILY = [
    "temperature_2m_max",
    "temperature_2m_min",
    "rain_sum",
    "showers_sum",
    "snowfall_sum",
    "precipitation_hours",
    "weathercode",
    "windspeed_10m_max",
    "winddirection_10m_dominant",
    "shortwave_radiation_sum"
]

# Поля hourly, запрашиваемые по умолчанию.
DEFAULT_HOURLY = [
    "temperature_2m",
    "relativehumidity_2m",
    "precipitation",
    "weathercode",
    "windspeed_10m",
    "winddirection_10m"
]

TRUE_TOKENS = {"true", "yes", "1"}
FALSE_TOKENS = {"false", "no", "0"}


def is_finite_number(value: Any) -> bool:
    """True для int/float (не bool), которые конечны."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_number(value: Any, fallback: Optional[float]) -> Optional[float]:
    """
    Безопасно приводит параметр к числу.

    Args:
        value: Значение из params (число, строка, что угодно)
        fallback: Значение по умолчанию

    Returns:
        float или fallback, если значение пустое, нечисловое или бесконечное
    """
    if value is None or value == "" or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return fallback
    else:
        return fallback
    return number if math.isfinite(number) else fallback


def parse_boolean(value: Any, fallback: bool) -> bool:
    """Приводит параметр к bool; нераспознанные значения дают fallback."""
    if value is None or value == "":
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in TRUE_TOKENS:
        return True
    if text in FALSE_TOKENS:
        return False
    return fallback


def normalize_list(value: Any, fallback_list: Optional[Iterable[str]]) -> List[str]:
    """
    Список полей из строки через запятую или массива.

    Пустой список сохраняется намеренно: daily="" означает «без daily».
    """
    if value is None:
        return list(fallback_list) if fallback_list is not None else []
    if isinstance(value, (list, tuple)):
        return [str(entry) for entry in value]
    if isinstance(value, str):
        return [entry.strip() for entry in value.split(",") if entry.strip()]
    text = str(value).strip()
    return [text] if text else []


def _normalize_unit(value: Any, default: str) -> str:
    return str(value or default).strip().lower()


def normalize_params(raw: Any) -> JobParams:
    """
    Превращает params задачи в строго типизированный JobParams.

    Args:
        raw: Значение job["params"]; не-словарь считается пустым

    Returns:
        JobParams
    """
    params = raw if isinstance(raw, dict) else {}

    # === ТАЙМАУТ ===
    timeout_ms = parse_number(params.get("timeout_ms"), DEFAULT_TIMEOUT_MS)
    if timeout_ms <= 0:
        logger.warning(f"⚠️  Неположительный timeout_ms={timeout_ms}, используем {DEFAULT_TIMEOUT_MS}")
        timeout_ms = DEFAULT_TIMEOUT_MS

    # === ЛОКАЦИЯ ===
    postal_code = str(params["postal_code"]).strip() if params.get("postal_code") else ""
    timezone_raw = params.get("timezone")

    normalized = JobParams(
        postal_code=postal_code,
        latitude=parse_number(params.get("latitude"), None),
        longitude=parse_number(params.get("longitude"), None),
        temperature_unit=_normalize_unit(params.get("temperature_unit"), "fahrenheit"),
        windspeed_unit=_normalize_unit(params.get("windspeed_unit"), "mph"),
        precipitation_unit=_normalize_unit(params.get("precipitation_unit"), "inch"),
        timezone=str(timezone_raw or "auto").strip(),
        timezone_explicit=bool(timezone_raw),
        daily=normalize_list(params.get("daily"), DEFAULT_DAILY),
        hourly=normalize_list(params.get("hourly"), DEFAULT_HOURLY),
        air_quality=parse_boolean(params.get("air_quality"), True),
        forecast_days=parse_number(params.get("forecast_days"), 7.0),
        forecast_hours=parse_number(params.get("forecast_hours"), 24.0),
        timeout_ms=timeout_ms
    )
    logger.debug(f"🧾 Нормализованные параметры: {normalized}")
    return normalized
