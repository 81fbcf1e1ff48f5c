# -*- coding: utf-8 -*-
"""
Получение данных погоды через api_client.

Прогноз обязателен: сбой → FetchResult.fatal("http" | "api").
Качество воздуха необязательно: сбой → FetchResult.degraded(описание).
"""

import logging
from typing import Any, Dict

from xyplug_weather.core.models.weather_response import FetchResult, JobParams
from xyplug_weather.core.utils.api_client import OpenMeteoClient
from xyplug_weather.core.utils.error_handler import ERROR_API, ERROR_HTTP, FetchError, describe_fetch_error
from xyplug_weather.core.utils.validator import is_finite_number
from xyplug_weather.scripts.weather._processes.air_quality import DEFAULT_AIR_QUALITY_HOURLY
from xyplug_weather.scripts.weather._processes.formatter import format_number

logger = logging.getLogger("data_fetcher")


def build_forecast_query(params: JobParams, lat: float, lon: float) -> Dict[str, str]:
    """Query string прогноза из нормализованных параметров."""
    query = {
        "latitude": format_number(lat),
        "longitude": format_number(lon),
    }
    if params.daily:
        query["daily"] = ",".join(params.daily)
    if params.hourly:
        query["hourly"] = ",".join(params.hourly)
    query["current_weather"] = "true"
    if params.temperature_unit:
        query["temperature_unit"] = params.temperature_unit
    if params.windspeed_unit:
        query["windspeed_unit"] = params.windspeed_unit
    if params.precipitation_unit:
        query["precipitation_unit"] = params.precipitation_unit
    if params.timezone:
        query["timezone"] = params.timezone
    if is_finite_number(params.forecast_days):
        query["forecast_days"] = format_number(params.forecast_days)
    if is_finite_number(params.forecast_hours):
        query["forecast_hours"] = format_number(params.forecast_hours)
    return query


def build_air_quality_query(params: JobParams, lat: float, lon: float) -> Dict[str, str]:
    return {
        "latitude": format_number(lat),
        "longitude": format_number(lon),
        "hourly": ",".join(DEFAULT_AIR_QUALITY_HOURLY),
        "timezone": params.timezone or "auto",
        "forecast_hours": "1",
    }


def _provider_error(data: Any) -> bool:
    return isinstance(data, dict) and bool(data.get("error"))


def fetch_forecast(client: OpenMeteoClient, params: JobParams, lat: float, lon: float) -> FetchResult:
    """
    Получает прогноз.

    Returns:
        FetchResult: ok(данные) или fatal("http" | "api", описание)
    """
    query = build_forecast_query(params, lat, lon)
    try:
        data = client.get_forecast(query, params.timeout_ms)
    except FetchError as e:
        logger.error(f"❌ Не удалось получить прогноз для ({lat}, {lon}): {e}")
        return FetchResult.fatal(ERROR_HTTP, describe_fetch_error(e))

    if _provider_error(data):
        reason = data.get("reason") or "Open-Meteo returned an error."
        logger.error(f"❌ Open-Meteo вернул ошибку: {reason}")
        return FetchResult.fatal(ERROR_API, reason)

    logger.info(f"✅ Прогноз получен для ({lat}, {lon})")
    return FetchResult.ok(data if isinstance(data, dict) else {})


def fetch_air_quality(client: OpenMeteoClient, params: JobParams, lat: float, lon: float) -> FetchResult:
    """
    Получает качество воздуха (best-effort).

    Returns:
        FetchResult: ok(данные) или degraded(описание ошибки)
    """
    query = build_air_quality_query(params, lat, lon)
    try:
        data = client.get_air_quality(query, params.timeout_ms)
    except FetchError as e:
        logger.warning(f"⚠️  Качество воздуха недоступно: {e}")
        return FetchResult.degraded(describe_fetch_error(e, "Air quality request"))

    if _provider_error(data):
        reason = data.get("reason") or "Open-Meteo returned an air quality error."
        logger.warning(f"⚠️  Open-Meteo вернул ошибку качества воздуха: {reason}")
        return FetchResult.degraded(reason)

    return FetchResult.ok(data)
