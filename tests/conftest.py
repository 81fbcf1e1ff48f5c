# -*- coding: utf-8 -*-
"""
Общие фикстуры для тестов.
"""

import pytest

from fakes import AIR_QUALITY_URL, FORECAST_URL, GEOCODING_URL
from xyplug_weather.config.plugin_config import PluginConfig


@pytest.fixture
def plugin_config(tmp_path):
    return PluginConfig(
        api_key="",
        cache_dir=str(tmp_path),
        log_level="WARNING",
        log_dir="",
        forecast_url=FORECAST_URL,
        air_quality_url=AIR_QUALITY_URL,
        geocoding_url=GEOCODING_URL
    )


@pytest.fixture
def forecast_payload():
    """Ответ прогноза в формате Open-Meteo (Лос-Анджелес, 2 дня, 3 часа)."""
    return {
        "latitude": 34.05,
        "longitude": -118.25,
        "timezone": "America/Los_Angeles",
        "elevation": 93.0,
        "current_weather": {
            "temperature": 68.4,
            "windspeed": 5.1,
            "winddirection": 250,
            "weathercode": 1,
            "time": "2024-01-06T15:00"
        },
        "current_weather_units": {"temperature": "°F", "windspeed": "mp/h"},
        "daily": {
            "time": ["2024-01-06", "2024-01-07"],
            "weathercode": [61, 3],
            "temperature_2m_max": [70.2, 66.0],
            "temperature_2m_min": [52.1, 50.0],
            "rain_sum": [0.12, 0.0],
            "showers_sum": [0.0, 0.0],
            "snowfall_sum": [0.0, 0.0],
            "windspeed_10m_max": [9.8, 7.0]
        },
        "daily_units": {
            "temperature_2m_max": "°F",
            "rain_sum": "inch",
            "windspeed_10m_max": "mp/h"
        },
        "hourly": {
            "time": ["2024-01-06T15:00", "2024-01-06T16:00", "2024-01-06T17:00"],
            "temperature_2m": [68.4, 67.0, 65.3],
            "relativehumidity_2m": [40, 42, 45],
            "precipitation": [0.0, 0.02, 0.0],
            "weathercode": [1, 61, 2],
            "windspeed_10m": [5.1, 6.0, 4.2]
        },
        "hourly_units": {
            "temperature_2m": "°F",
            "precipitation": "inch",
            "windspeed_10m": "mp/h",
            "relativehumidity_2m": "%"
        }
    }


@pytest.fixture
def air_quality_payload():
    return {
        "hourly": {
            "time": ["2024-01-06T15:00"],
            "pm10": [12.5],
            "pm2_5": [7.1],
            "european_aqi": [35],
            "uv_index": []
        },
        "hourly_units": {"pm10": "μg/m³", "pm2_5": "μg/m³", "european_aqi": "EAQI"}
    }
