# -*- coding: utf-8 -*-
"""
Скрипт прогноза погоды для xyOps.

Читает задачу (JSON) из STDIN, получает прогноз Open-Meteo и пишет
в STDOUT ровно одну строку JSON:
    {"xy": 1, "code": 0, "data": {...}}
    {"xy": 1, "code": "input" | "params" | "http" | "api", "description": "..."}
Код завершения процесса всегда 0.

Этапы: чтение задачи → проверка параметров → [геокодинг] → прогноз →
[качество воздуха] → сводки → вывод.
"""

import json
import sys
from typing import Any, Dict, Optional, TextIO, Tuple

import requests

from xyplug_weather.config.logging_config import setup_logging
from xyplug_weather.config.plugin_config import PluginConfig
from xyplug_weather.core.models.weather_response import (
    AirQualityBlock,
    CurrentBlock,
    FetchResult,
    GeoPlace,
    JobParams,
    LocationInfo,
    OutputPayload,
    SeriesBlock,
    UnitsBlock,
)
from xyplug_weather.core.utils.api_client import OpenMeteoClient
from xyplug_weather.core.utils.coordinate_manager import resolve_postal_code
from xyplug_weather.core.utils.error_handler import (
    ERROR_HTTP,
    ERROR_INPUT,
    ERROR_INTERNAL,
    ERROR_PARAMS,
    FetchError,
    JobError,
    describe_fetch_error,
    log_exception,
)
from xyplug_weather.core.utils.script_logger import get_script_logger
from xyplug_weather.core.utils.validator import normalize_params
from xyplug_weather.scripts.weather._processes.air_quality import build_air_quality_current
from xyplug_weather.scripts.weather._processes.data_fetcher import fetch_air_quality, fetch_forecast
from xyplug_weather.scripts.weather._processes.formatter import (
    build_current_summary,
    build_daily_summaries,
    build_hourly_summaries,
    format_number,
    get_current_humidity,
    trim_hourly_data,
)

SCRIPT_NAME = "weather_forecast_script"


def read_job(raw: Optional[str]) -> Dict[str, Any]:
    """
    Разбирает документ задачи.

    Raises:
        JobError("input"): пустой ввод, битый JSON или не объект
    """
    text = (raw or "").strip()
    if not text:
        raise JobError(ERROR_INPUT, "No JSON input received on STDIN.")
    try:
        job = json.loads(text)
    except ValueError as e:
        raise JobError(ERROR_INPUT, f"Failed to parse JSON input: {e}") from e
    if not isinstance(job, dict):
        raise JobError(ERROR_INPUT, "Job input must be a JSON object.")
    return job


def resolve_location(params: JobParams, client: OpenMeteoClient, logger) -> Tuple[float, float, Optional[GeoPlace]]:
    """
    Координаты из параметров или по почтовому индексу.

    Raises:
        JobError("params"): индекс не найден
        JobError("http"): геокодер недоступен
    """
    if not params.postal_code:
        return params.latitude, params.longitude, None

    try:
        place = resolve_postal_code(params.postal_code, params.timeout_ms, client=client)
    except FetchError as e:
        raise JobError(ERROR_HTTP, describe_fetch_error(e, "Geocoding request")) from e

    if place is None:
        raise JobError(ERROR_PARAMS, "Failed to resolve postal code to coordinates.")

    logger.info(f"🌍 Индекс {params.postal_code} → ({place.latitude}, {place.longitude})")
    return place.latitude, place.longitude, place


def validate_params(params: JobParams):
    """Проверки, которые не требуют сети."""
    if not params.postal_code and (params.latitude is None or params.longitude is None):
        raise JobError(ERROR_PARAMS, "Provide a postal code or a numeric latitude/longitude pair.")
    if not params.daily and not params.hourly:
        raise JobError(ERROR_PARAMS, "No data blocks selected. Add daily and/or hourly fields.")


def build_payload(
    data: Dict[str, Any],
    params: JobParams,
    lat: float,
    lon: float,
    place: Optional[GeoPlace],
    air_result: Optional[FetchResult]
) -> OutputPayload:
    """Собирает итоговый результат из прогноза, локации и качества воздуха."""
    current_summary = build_current_summary(data, params)
    daily_summaries = build_daily_summaries(data, params)
    hourly_summaries = build_hourly_summaries(data, params, params.forecast_hours)
    air_current = None
    if air_result is not None and air_result.is_ok:
        air_current = build_air_quality_current(air_result.value)
    humidity = get_current_humidity(data)

    # === ДОПОЛНЯЕМ СТРОКУ ТЕКУЩЕЙ ПОГОДЫ ===
    if current_summary and air_current:
        if air_current.get("european_aqi") is not None:
            label = f" ({air_current['aqi_label']})" if air_current.get("aqi_label") else ""
            current_summary["line"] += f", Air Quality AQI {format_number(air_current['european_aqi'])}{label}"
        elif air_current.get("pm2_5") is not None:
            current_summary["line"] += f", Air Quality PM2.5 {format_number(air_current['pm2_5'])}"

    if current_summary and humidity is not None:
        current_summary["line"] += f", Humidity {format_number(humidity)}%"

    # === ЛОКАЦИЯ ===
    location = LocationInfo(
        latitude=data.get("latitude") if data.get("latitude") is not None else lat,
        longitude=data.get("longitude") if data.get("longitude") is not None else lon,
        timezone=data.get("timezone") or params.timezone,
        elevation=data.get("elevation"),
        postal_code=params.postal_code or None,
        name=place.name if place else None,
        admin1=place.admin1 if place else None,
        admin2=place.admin2 if place else None,
        admin3=place.admin3 if place else None,
        admin4=place.admin4 if place else None
    )

    # === БЛОКИ ДАННЫХ ===
    current = None
    if isinstance(data.get("current_weather"), dict):
        current = CurrentBlock(
            weather=data["current_weather"],
            summary=current_summary["line"] if current_summary else None,
            emoji=current_summary["emoji"] if current_summary else None,
            humidity=humidity,
            aqi=air_current.get("european_aqi") if air_current else None
        )

    daily = SeriesBlock(data["daily"], daily_summaries) if isinstance(data.get("daily"), dict) else None

    hourly = None
    if isinstance(data.get("hourly"), dict):
        hourly = SeriesBlock(trim_hourly_data(data["hourly"], params.forecast_hours), hourly_summaries)

    air_quality = None
    if params.air_quality and air_result is not None:
        if air_current:
            air_units = air_result.value.get("hourly_units") if isinstance(air_result.value, dict) else None
            air_quality = AirQualityBlock(current=air_current, units=air_units or None)
        elif air_result.error:
            air_quality = AirQualityBlock(error=air_result.error)

    units = UnitsBlock(
        current=data.get("current_weather_units") or None,
        daily=data.get("daily_units") or None,
        hourly=data.get("hourly_units") or None
    )

    return OutputPayload(
        location=location,
        units=units,
        current=current,
        daily=daily,
        hourly=hourly,
        air_quality=air_quality
    )


def run_job(
    raw_input: Optional[str],
    config: Optional[PluginConfig] = None,
    session: Optional[requests.Session] = None
) -> Dict[str, Any]:
    """
    Выполняет одну задачу и возвращает документ для вывода.

    Args:
        raw_input: Содержимое STDIN
        config: Конфигурация (если None: из окружения)
        session: HTTP-сессия (если None: создаётся и закрывается здесь)

    Returns:
        dict: {"xy": 1, "code": 0, "data": ...} или документ ошибки
    """
    config = config or PluginConfig.load()

    try:
        job = read_job(raw_input)
    except JobError as e:
        get_script_logger(script_name=SCRIPT_NAME).error(f"❌ Некорректная задача: {e.description}")
        return e.to_document()

    logger = get_script_logger(job_id=job.get("id", "N/A"), script_name=SCRIPT_NAME)
    logger.info("🚀 Запуск скрипта прогноза погоды")

    params = normalize_params(job.get("params"))
    owns_session = session is None
    if owns_session:
        session = requests.Session()
    client = OpenMeteoClient(config, session)

    try:
        validate_params(params)
        lat, lon, place = resolve_location(params, client, logger)

        forecast = fetch_forecast(client, params, lat, lon)
        if not forecast.is_ok:
            raise JobError(forecast.code, forecast.error)

        air_result = fetch_air_quality(client, params, lat, lon) if params.air_quality else None

        payload = build_payload(forecast.value, params, lat, lon, place, air_result)
    except JobError as e:
        logger.error(f"❌ Задача завершена с ошибкой [{e.code}]: {e.description}")
        return e.to_document()
    finally:
        if owns_session:
            session.close()

    logger.info("✅ Обработка завершена")
    return {"xy": 1, "code": 0, "data": payload.to_dict()}


def emit(document: Dict[str, Any], stream: Optional[TextIO] = None):
    """
    Пишет документ одной строкой JSON.

    Если кодировка потока (например cp1252) не вмещает эмодзи,
    не-ASCII символы экранируются как \\uXXXX.
    """
    stream = stream or sys.stdout
    line = json.dumps(document, ensure_ascii=False)
    try:
        line.encode(getattr(stream, "encoding", None) or "utf-8")
    except (UnicodeEncodeError, LookupError):
        line = json.dumps(document)
    stream.write(line + "\n")
    stream.flush()


def main() -> int:
    config = PluginConfig.load()
    try:
        setup_logging(config.log_level, config.log_dir or None)
        document = run_job(sys.stdin.read(), config)
    except Exception as e:
        log_exception(e, "💥 Ошибка в скрипте")
        document = {"xy": 1, "code": ERROR_INTERNAL, "description": f"Unexpected error: {e}"}

    emit(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
