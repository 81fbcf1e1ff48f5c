# -*- coding: utf-8 -*-
"""
Заглушки сети для тестов: FakeSession отдаёт заранее заданные ответы.
"""

import json
import time

import requests

FORECAST_URL = "https://api.test/v1/forecast"
AIR_QUALITY_URL = "https://air.test/v1/air-quality"
GEOCODING_URL = "https://geo.test/v1/search"


class FakeResponse:
    """
    Ответ с телом JSON; body отдаётся по частям через iter_content.

    chunk_delay: пауза (сек) перед каждой частью, имитирует медленный сервер
    """

    def __init__(self, payload=None, status_code=200, bad_json=False, chunk_size=None, chunk_delay=0.0):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay
        self.closed = False

    def body(self):
        if self.bad_json:
            return b"<html>not json</html>"
        return json.dumps(self.payload, ensure_ascii=False).encode("utf-8")

    def iter_content(self, chunk_size=1):
        body = self.body()
        size = self.chunk_size or len(body) or 1
        for start in range(0, len(body), size):
            if self.chunk_delay:
                time.sleep(self.chunk_delay)
            yield body[start:start + size]

    def close(self):
        self.closed = True


class FakeSession:
    """Отдаёт заранее заданные ответы по URL и запоминает вызовы."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None, headers=None, stream=False):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout, "stream": stream})
        if url not in self.routes:
            raise requests.ConnectionError(f"no route for {url}")
        outcome = self.routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, FakeResponse):
            return outcome
        return FakeResponse(outcome)

    def urls(self):
        return [call["url"] for call in self.calls]

    def close(self):
        self.closed = True
