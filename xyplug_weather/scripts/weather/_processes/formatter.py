# -*- coding: utf-8 -*-
"""
Форматирование погодного отчёта: подписи дат и текстовые сводки.

- Подписи: "Sat, Jan 6" (день) и "Sat, Jan 6, 3 PM" (час)
- Сводки: текущая погода, по дням, по часам
Порядок фрагментов в строке сводки фиксирован.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from xyplug_weather.core.models.weather_response import JobParams
from xyplug_weather.core.utils.validator import is_finite_number
from xyplug_weather.scripts.weather._processes.weather_codes import (
    PRECIP_UNITS,
    TEMP_UNITS,
    WIND_UNITS,
    build_unit_label,
    pick_unit,
    summary_for_code,
)

logger = logging.getLogger("formatter")

# Ошибки разбора даты или часового пояса в pandas / zoneinfo
LABEL_ERRORS = (ValueError, KeyError, TypeError, OverflowError)


def format_number(value: Any) -> str:
    """Число так, как его печатает JSON: 72.0 → '72', 0.5 → '0.5'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _with_unit(value: Any, unit: str) -> str:
    return f"{format_number(value)} {unit}" if unit else format_number(value)


def _safe_zone(timezone: Optional[str]) -> str:
    return timezone if timezone and timezone != "auto" else "UTC"


def _to_zone(date_str: str, timezone: Optional[str]) -> pd.Timestamp:
    """
    Разбирает дату и переводит её в нужный часовой пояс.

    Время без смещения (как его отдаёт Open-Meteo) считается
    местным временем в этом поясе.
    """
    ts = pd.Timestamp(date_str)
    if pd.isna(ts):
        raise ValueError(f"not a date: {date_str!r}")
    zone = _safe_zone(timezone)
    if ts.tzinfo is None:
        return ts.tz_localize(zone, ambiguous=False, nonexistent="shift_forward")
    return ts.tz_convert(zone)


def format_day_label(date_str: Any, timezone: Optional[str]) -> str:
    """
    Короткая подпись дня: "Sat, Jan 6".

    Args:
        date_str: Дата "YYYY-MM-DD"
        timezone: Часовой пояс; "auto" или пусто → UTC

    Returns:
        str: Подпись или исходная строка, если разобрать не удалось
    """
    if not date_str:
        return ""
    try:
        ts = _to_zone(date_str, timezone)
        return f"{ts.strftime('%a, %b')} {ts.day}"
    except LABEL_ERRORS as e:
        logger.debug(f"📅 Не удалось отформатировать дату {date_str!r} ({timezone}): {e}")
        return str(date_str)


def format_hour_label(date_str: Any, timezone: Optional[str]) -> str:
    """Подпись часа: "Sat, Jan 6, 3 PM"; при ошибке исходная строка."""
    if not date_str:
        return ""
    try:
        ts = _to_zone(date_str, timezone)
        hour = ts.hour % 12 or 12
        return f"{ts.strftime('%a, %b')} {ts.day}, {hour} {ts.strftime('%p')}"
    except LABEL_ERRORS as e:
        logger.debug(f"🕒 Не удалось отформатировать время {date_str!r} ({timezone}): {e}")
        return str(date_str)


def _label_timezone(data: Dict[str, Any], params: JobParams) -> str:
    if params.timezone_explicit and params.timezone:
        return params.timezone
    return data.get("timezone") or "auto"


def _value_at(block: Dict[str, Any], key: str, idx: int) -> Any:
    series = block.get(key)
    if isinstance(series, list) and idx < len(series):
        return series[idx]
    return None


def _is_positive(value: Any) -> bool:
    return is_finite_number(value) and value > 0


def build_current_summary(data: Dict[str, Any], params: JobParams) -> Optional[Dict[str, str]]:
    """
    Сводка текущей погоды: "Overcast, 54 F, Wind 5 mph".

    Влажность и качество воздуха добавляет оркестратор.
    """
    if not isinstance(data, dict) or not isinstance(data.get("current_weather"), dict):
        return None
    current = data["current_weather"]
    units = data.get("current_weather_units") or {}
    summary = summary_for_code(current.get("weathercode"))

    temp_unit = pick_unit(units.get("temperature"), build_unit_label(params.temperature_unit, TEMP_UNITS))
    wind_unit = pick_unit(units.get("windspeed"), build_unit_label(params.windspeed_unit, WIND_UNITS))

    line = summary["text"]
    if current.get("temperature") is not None:
        line += f", {_with_unit(current['temperature'], temp_unit)}"
    if current.get("windspeed") is not None:
        line += f", Wind {_with_unit(current['windspeed'], wind_unit)}"

    return {**summary, "line": line}


def get_current_humidity(data: Dict[str, Any]) -> Any:
    """Влажность первого часа из hourly (если запрошена)."""
    hourly = data.get("hourly") if isinstance(data, dict) else None
    if not isinstance(hourly, dict):
        return None
    return _value_at(hourly, "relativehumidity_2m", 0)


def build_daily_summaries(data: Dict[str, Any], params: JobParams) -> List[Dict[str, Any]]:
    """Сводки по дням: "Sat, Jan 6: Slight rain, High 60 F, Low 48 F, Rain 0.2 in, Wind 9 mph"."""
    daily = data.get("daily") if isinstance(data, dict) else None
    if not isinstance(daily, dict) or not isinstance(daily.get("time"), list):
        return []

    units = data.get("daily_units") or {}
    timezone = _label_timezone(data, params)
    temp_unit = pick_unit(units.get("temperature_2m_max"), build_unit_label(params.temperature_unit, TEMP_UNITS))
    precip_unit = pick_unit(units.get("rain_sum"), build_unit_label(params.precipitation_unit, PRECIP_UNITS))
    wind_unit = pick_unit(units.get("windspeed_10m_max"), build_unit_label(params.windspeed_unit, WIND_UNITS))

    summaries = []
    for idx, date_str in enumerate(daily["time"]):
        label = format_day_label(date_str, timezone)
        summary = summary_for_code(_value_at(daily, "weathercode", idx))

        line = f"{label}: {summary['description']}"

        high = _value_at(daily, "temperature_2m_max", idx)
        if high is not None:
            line += f", High {_with_unit(high, temp_unit)}"
        low = _value_at(daily, "temperature_2m_min", idx)
        if low is not None:
            line += f", Low {_with_unit(low, temp_unit)}"

        # Только одна категория осадков: снег > ливни > дождь
        for key, title in (("snowfall_sum", "Snow"), ("showers_sum", "Showers"), ("rain_sum", "Rain")):
            amount = _value_at(daily, key, idx)
            if _is_positive(amount):
                line += f", {title} {_with_unit(amount, precip_unit)}"
                break

        wind = _value_at(daily, "windspeed_10m_max", idx)
        if wind is not None:
            line += f", Wind {_with_unit(wind, wind_unit)}"

        summaries.append({
            "date": date_str,
            "label": label,
            "emoji": summary["emoji"],
            "description": summary["description"],
            "line": line
        })

    return summaries


def hour_limit(available: int, limit: Optional[float]) -> int:
    """Сколько первых часов брать: limit, зажатый в [0, available]."""
    if limit is None or not is_finite_number(limit):
        return available
    return max(0, min(available, int(limit)))


def build_hourly_summaries(data: Dict[str, Any], params: JobParams, limit: Optional[float]) -> List[Dict[str, Any]]:
    """Сводки по часам для первых limit записей."""
    hourly = data.get("hourly") if isinstance(data, dict) else None
    if not isinstance(hourly, dict) or not isinstance(hourly.get("time"), list):
        return []

    units = data.get("hourly_units") or {}
    timezone = _label_timezone(data, params)
    temp_unit = pick_unit(units.get("temperature_2m"), build_unit_label(params.temperature_unit, TEMP_UNITS))
    precip_unit = pick_unit(units.get("precipitation"), build_unit_label(params.precipitation_unit, PRECIP_UNITS))
    wind_unit = pick_unit(units.get("windspeed_10m"), build_unit_label(params.windspeed_unit, WIND_UNITS))

    times = hourly["time"]
    summaries = []
    for idx in range(hour_limit(len(times), limit)):
        date_str = times[idx]
        label = format_hour_label(date_str, timezone)
        summary = summary_for_code(_value_at(hourly, "weathercode", idx))

        line = f"{label}: {summary['description']}"

        temperature = _value_at(hourly, "temperature_2m", idx)
        if temperature is not None:
            line += f", {_with_unit(temperature, temp_unit)}"
        precipitation = _value_at(hourly, "precipitation", idx)
        if _is_positive(precipitation):
            line += f", Precip {_with_unit(precipitation, precip_unit)}"
        wind = _value_at(hourly, "windspeed_10m", idx)
        if wind is not None:
            line += f", Wind {_with_unit(wind, wind_unit)}"
        humidity = _value_at(hourly, "relativehumidity_2m", idx)
        if humidity is not None:
            line += f", Humidity {format_number(humidity)}%"

        summaries.append({
            "time": date_str,
            "label": label,
            "emoji": summary["emoji"],
            "description": summary["description"],
            "line": line
        })

    return summaries


def trim_hourly_data(hourly: Any, limit: Optional[float]) -> Any:
    """Обрезает все массивы hourly до первых limit элементов."""
    if not isinstance(hourly, dict) or not isinstance(hourly.get("time"), list):
        return hourly
    if limit is None or not is_finite_number(limit):
        return dict(hourly)
    count = max(0, int(limit))
    return {key: (value[:count] if isinstance(value, list) else value) for key, value in hourly.items()}
