# -*- coding: utf-8 -*-
"""
Обёртка для API Open-Meteo (геокодинг, прогноз, качество воздуха).
Поддерживает:
- Один GET-запрос с общим сроком: fetch_json(url, timeout_ms, params)
- Отдельные исключения для таймаута и HTTP-статуса
- Необязательный apikey для коммерческого доступа
Повторов нет: одна попытка на запрос.
"""
import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from xyplug_weather.config.plugin_config import PluginConfig
from xyplug_weather.core.utils.error_handler import FetchError, HttpStatusError, RequestTimeoutError

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
USER_AGENT = "xyplug-weather/1.0"
CHUNK_SIZE = 8192


def fetch_json(
    url: str,
    timeout_ms: float,
    params: Optional[Dict[str, Any]] = None,
    session: Optional[requests.Session] = None
) -> Any:
    """
    Выполняет один GET-запрос и возвращает разобранный JSON.

    Args:
        url: Адрес API
        timeout_ms: Таймаут в миллисекундах
        params: Параметры query string
        session: Общая requests.Session (если None: requests.get)

    Raises:
        RequestTimeoutError: запрос не уложился в таймаут
        HttpStatusError: статус ответа вне 2xx
        FetchError: прочие сетевые сбои и некорректный JSON
    """
    getter = session.get if session is not None else requests.get
    timeout = timeout_ms / 1000.0
    # timeout у requests действует на каждую операцию сокета,
    # общий срок запроса контролируем сами
    deadline = time.monotonic() + timeout

    try:
        response = getter(url, params=params, timeout=timeout, headers={"User-Agent": USER_AGENT}, stream=True)
    except requests.Timeout as e:
        logger.warning(f"⏱️  Таймаут запроса ({timeout_ms:.0f} мс): {url}")
        raise RequestTimeoutError("Request timed out") from e
    except requests.RequestException as e:
        logger.error(f"❌ Сетевая ошибка: {url}: {e}")
        raise FetchError(str(e)) from e

    try:
        if not 200 <= response.status_code < 300:
            logger.error(f"❌ HTTP {response.status_code}: {url}")
            raise HttpStatusError(response.status_code)
        body = _read_body(response, deadline, url, timeout_ms)
    finally:
        response.close()

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error(f"❌ Некорректный JSON от {url}: {e}")
        raise FetchError(f"Invalid JSON response: {e}") from e

    logger.debug(f"✅ Ответ получен: {url}")
    return data


def _read_body(response, deadline: float, url: str, timeout_ms: float) -> bytes:
    """Читает тело ответа по частям, пока не истёк общий срок запроса."""
    chunks = []
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
            if time.monotonic() > deadline:
                break
    except requests.Timeout as e:
        logger.warning(f"⏱️  Таймаут чтения ответа ({timeout_ms:.0f} мс): {url}")
        raise RequestTimeoutError("Request timed out") from e
    except requests.RequestException as e:
        logger.error(f"❌ Обрыв при чтении ответа {url}: {e}")
        raise FetchError(str(e)) from e

    if time.monotonic() > deadline:
        logger.warning(f"⏱️  Ответ не получен за {timeout_ms:.0f} мс: {url}")
        raise RequestTimeoutError("Request timed out")
    return b"".join(chunks)


class OpenMeteoClient:
    """Клиент для трёх эндпоинтов Open-Meteo."""

    def __init__(self, config: Optional[PluginConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or PluginConfig.load()
        self.session = session

    def _with_key(self, query: Dict[str, Any]) -> Dict[str, Any]:
        if self.config.api_key:
            query["apikey"] = self.config.api_key
        return query

    def geocode(self, name: str, timeout_ms: float) -> Any:
        """Поиск места по названию или почтовому индексу (первый результат)."""
        query = self._with_key({
            "name": name,
            "count": "1",
            "language": "en",
            "format": "json"
        })
        logger.info(f"🌍 Геокодинг: {name}")
        return fetch_json(self.config.geocoding_url, timeout_ms, query, self.session)

    def get_forecast(self, query: Dict[str, Any], timeout_ms: float) -> Any:
        """Прогноз: current_weather + daily + hourly."""
        logger.info(f"🌦️  Запрос прогноза для ({query.get('latitude')}, {query.get('longitude')})")
        return fetch_json(self.config.forecast_url, timeout_ms, self._with_key(dict(query)), self.session)

    def get_air_quality(self, query: Dict[str, Any], timeout_ms: float) -> Any:
        """Качество воздуха (hourly, первый час)."""
        logger.info(f"🌫️  Запрос качества воздуха для ({query.get('latitude')}, {query.get('longitude')})")
        return fetch_json(self.config.air_quality_url, timeout_ms, self._with_key(dict(query)), self.session)
