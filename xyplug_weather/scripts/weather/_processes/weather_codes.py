# -*- coding: utf-8 -*-
"""
Коды погоды Open-Meteo (WMO) → эмодзи + описание, и таблицы единиц измерения.

- `WEATHER_CODES`: фиксированная таблица известных кодов
- `get_weather_summary(code)`: 🌪️ для кодов вне таблицы
- `summary_for_code(code)`: ❓ для отсутствующего кода (None)
Таблица кодов: https://open-meteo.com/en/docs
"""

from typing import Any, Dict, Optional, Tuple

WEATHER_CODES: Dict[int, Tuple[str, str]] = {
    0: ("☀️", "clear skies"),
    1: ("🌤️", "mostly clear"),
    2: ("🌥️", "mostly cloudy"),
    3: ("☁️", "overcast"),
    45: ("🌫️", "fog"),
    48: ("🌫️", "depositing rime fog"),
    51: ("🌦️", "light drizzle"),
    53: ("🌦️", "moderate drizzle"),
    55: ("🌧️", "dense drizzle"),
    56: ("🌨️", "light freezing drizzle"),
    57: ("🌨️", "dense freezing drizzle"),
    61: ("🌧️", "slight rain"),
    63: ("🌧️", "moderate rain"),
    65: ("🌧️", "heavy rain"),
    66: ("🌨️", "light freezing rain"),
    67: ("🌨️", "heavy freezing rain"),
    71: ("🌨️", "light snow fall"),
    73: ("🌨️", "moderate snow fall"),
    75: ("❄️", "heavy snow fall"),
    77: ("❄️", "snow grains"),
    80: ("🌦️", "light rain showers"),
    81: ("🌧️", "moderate rain showers"),
    82: ("🌧️", "violent rain showers"),
    85: ("🌨️", "light snow showers"),
    86: ("🌨️", "heavy snow showers"),
    95: ("⛈️", "thunderstorm"),
    96: ("⛈️", "thunderstorm with light hail"),
    99: ("⛈️", "thunderstorm with heavy hail"),
}

UNRECOGNIZED_CODE = ("🌪️", "unknown conditions")
MISSING_CODE = ("❓", "Unknown conditions")

# Единицы измерения для подписей в сводках
TEMP_UNITS = {
    "fahrenheit": "F",
    "celsius": "C"
}

WIND_UNITS = {
    "mph": "mph",
    "kmh": "km/h",
    "ms": "m/s",
    "kn": "kn"
}

PRECIP_UNITS = {
    "inch": "in",
    "mm": "mm"
}


def uc_first(text: str) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:]


def _summary(emoji: str, summary: str) -> Dict[str, str]:
    description = uc_first(summary)
    return {"emoji": emoji, "description": description, "text": description}


def get_weather_summary(code: Any) -> Dict[str, str]:
    """
    Эмодзи и описание для кода погоды.

    Args:
        code: Код WMO из ответа Open-Meteo

    Returns:
        dict: {"emoji", "description", "text"}; для неизвестного кода 🌪️
    """
    if isinstance(code, bool):
        return _summary(*UNRECOGNIZED_CODE)
    try:
        emoji, summary = WEATHER_CODES[code]
    except (KeyError, TypeError):
        emoji, summary = UNRECOGNIZED_CODE
    return _summary(emoji, summary)


def summary_for_code(code: Any) -> Dict[str, str]:
    """Как get_weather_summary, но отсутствующий код даёт ❓, а не 🌪️."""
    if code is None:
        return _summary(*MISSING_CODE)
    return get_weather_summary(code)


def build_unit_label(param_value: Optional[str], units: Dict[str, str]) -> str:
    """'kmh' → 'km/h'; неизвестное значение возвращается как есть."""
    if not param_value:
        return ""
    key = str(param_value).strip().lower()
    return units.get(key) or param_value


def pick_unit(candidate: Any, fallback: str) -> str:
    """Единица из ответа API важнее единицы из параметров запроса."""
    if candidate is not None and candidate != "":
        return str(candidate)
    return fallback
