# -*- coding: utf-8 -*-
"""
Тесты для core/utils/api_client.py
Тестирует:
- Успешный GET и разбор JSON
- Таймаут, HTTP-статус, сетевые ошибки, битый JSON
- apikey в запросах OpenMeteoClient
"""
import pytest
import requests

from fakes import AIR_QUALITY_URL, FORECAST_URL, GEOCODING_URL, FakeResponse, FakeSession
from xyplug_weather.core.utils.api_client import OpenMeteoClient, fetch_json
from xyplug_weather.core.utils.error_handler import FetchError, HttpStatusError, RequestTimeoutError


def test_fetch_json_success():
    session = FakeSession({"https://x.test/a": {"ok": True}})
    data = fetch_json("https://x.test/a", 2500, {"q": "1"}, session)
    assert data == {"ok": True}
    assert session.calls[0]["params"] == {"q": "1"}
    assert session.calls[0]["timeout"] == 2.5


def test_fetch_json_timeout():
    session = FakeSession({"https://x.test/a": requests.Timeout("read timed out")})
    with pytest.raises(RequestTimeoutError):
        fetch_json("https://x.test/a", 10, session=session)


def test_fetch_json_http_status():
    session = FakeSession({"https://x.test/a": FakeResponse({"error": True}, status_code=503)})
    with pytest.raises(HttpStatusError) as excinfo:
        fetch_json("https://x.test/a", 1000, session=session)
    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "HTTP 503"


def test_fetch_json_connection_error_is_generic_failure():
    session = FakeSession()
    with pytest.raises(FetchError) as excinfo:
        fetch_json("https://nowhere.test/", 1000, session=session)
    assert not isinstance(excinfo.value, (RequestTimeoutError, HttpStatusError))


def test_fetch_json_bad_body():
    session = FakeSession({"https://x.test/a": FakeResponse(bad_json=True)})
    with pytest.raises(FetchError):
        fetch_json("https://x.test/a", 1000, session=session)


def test_fetch_json_streams_and_closes_response():
    response = FakeResponse({"hourly": {"time": ["2024-01-06T15:00"]}}, chunk_size=4)
    session = FakeSession({"https://x.test/a": response})
    assert fetch_json("https://x.test/a", 1000, session=session) == {"hourly": {"time": ["2024-01-06T15:00"]}}
    assert session.calls[0]["stream"] is True
    assert response.closed


def test_fetch_json_slow_body_times_out():
    print("🧪 Тест: сервер отдаёт тело слишком медленно")
    # Каждая часть приходит быстрее таймаута сокета, но не всё тело целиком
    response = FakeResponse({"a": 1}, chunk_size=1, chunk_delay=0.02)
    session = FakeSession({"https://x.test/slow": response})
    with pytest.raises(RequestTimeoutError):
        fetch_json("https://x.test/slow", 50, session=session)
    assert response.closed
    print("✅ OK: общий срок запроса соблюдён")


def test_fetch_json_error_status_closes_response():
    response = FakeResponse(status_code=500)
    with pytest.raises(HttpStatusError):
        fetch_json("https://x.test/a", 1000, session=FakeSession({"https://x.test/a": response}))
    assert response.closed


def test_fetch_json_broken_body():
    class BrokenResponse(FakeResponse):
        def iter_content(self, chunk_size=1):
            yield b'{"a"'
            raise requests.exceptions.ChunkedEncodingError("connection reset")

    session = FakeSession({"https://x.test/a": BrokenResponse()})
    with pytest.raises(FetchError) as excinfo:
        fetch_json("https://x.test/a", 1000, session=session)
    assert not isinstance(excinfo.value, RequestTimeoutError)


def test_fetch_json_without_session_uses_requests_get(monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None, headers=None, stream=False):
        calls.append(url)
        return FakeResponse([1, 2, 3])

    monkeypatch.setattr(requests, "get", fake_get)
    assert fetch_json("https://x.test/list", 1000) == [1, 2, 3]
    assert calls == ["https://x.test/list"]


def test_client_adds_api_key(plugin_config):
    plugin_config.api_key = "secret"
    session = FakeSession({
        GEOCODING_URL: {"results": []},
        FORECAST_URL: {},
        AIR_QUALITY_URL: {}
    })
    client = OpenMeteoClient(plugin_config, session)
    client.geocode("10001", 1000)
    client.get_forecast({"latitude": "1", "longitude": "2"}, 1000)
    client.get_air_quality({"latitude": "1", "longitude": "2"}, 1000)

    assert [call["params"]["apikey"] for call in session.calls] == ["secret"] * 3
    assert session.calls[0]["params"] == {
        "name": "10001", "count": "1", "language": "en", "format": "json", "apikey": "secret"
    }


def test_client_without_api_key(plugin_config):
    session = FakeSession({FORECAST_URL: {}})
    query = {"latitude": "1", "longitude": "2"}
    OpenMeteoClient(plugin_config, session).get_forecast(query, 1000)
    assert "apikey" not in session.calls[0]["params"]
    # Исходный словарь не меняется
    assert query == {"latitude": "1", "longitude": "2"}
