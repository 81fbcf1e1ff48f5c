# -*- coding: utf-8 -*-
"""
Тесты для core/utils/validator.py
"""
import math

from xyplug_weather.core.utils.validator import (
    DEFAULT_DAILY,
    DEFAULT_HOURLY,
    is_finite_number,
    normalize_list,
    normalize_params,
    parse_boolean,
    parse_number,
)


def test_parse_number():
    assert parse_number(12, None) == 12.0
    assert parse_number("  34.5 ", None) == 34.5
    assert parse_number("-118.243683", None) == -118.243683
    assert parse_number("", 7.0) == 7.0
    assert parse_number(None, 7.0) == 7.0
    assert parse_number("abc", 7.0) == 7.0
    assert parse_number("inf", 7.0) == 7.0
    assert parse_number(math.nan, None) is None
    assert parse_number(True, 3.0) == 3.0
    assert parse_number([1], 3.0) == 3.0
    print("✅ test_parse_number passed")


def test_parse_boolean():
    for token in (True, 1, 2.5, "true", "YES", " 1 "):
        assert parse_boolean(token, False) is True
    for token in (False, 0, "false", "No", "0"):
        assert parse_boolean(token, True) is False
    assert parse_boolean(None, True) is True
    assert parse_boolean("", False) is False
    assert parse_boolean("maybe", True) is True
    print("✅ test_parse_boolean passed")


def test_normalize_list():
    assert normalize_list(None, ["a", "b"]) == ["a", "b"]
    assert normalize_list("temperature_2m, weathercode ,,", []) == ["temperature_2m", "weathercode"]
    assert normalize_list("", ["a"]) == []
    assert normalize_list("  ", ["a"]) == []
    assert normalize_list(["x", 5], []) == ["x", "5"]
    assert normalize_list(42, []) == ["42"]
    assert normalize_list(None, None) == []
    print("✅ test_normalize_list passed")


def test_normalize_list_copies_defaults():
    result = normalize_list(None, DEFAULT_DAILY)
    result.append("extra")
    assert "extra" not in DEFAULT_DAILY


def test_is_finite_number():
    assert is_finite_number(1)
    assert is_finite_number(-2.5)
    assert not is_finite_number(math.inf)
    assert not is_finite_number(math.nan)
    assert not is_finite_number("1")
    assert not is_finite_number(True)
    assert not is_finite_number(None)


def test_normalize_params_defaults():
    params = normalize_params({})
    assert params.postal_code == ""
    assert params.latitude is None and params.longitude is None
    assert params.temperature_unit == "fahrenheit"
    assert params.windspeed_unit == "mph"
    assert params.precipitation_unit == "inch"
    assert params.timezone == "auto"
    assert params.timezone_explicit is False
    assert params.daily == DEFAULT_DAILY
    assert params.hourly == DEFAULT_HOURLY
    assert params.air_quality is True
    assert params.forecast_days == 7.0
    assert params.forecast_hours == 24.0
    assert params.timeout_ms == 15000.0


def test_normalize_params_coercions():
    params = normalize_params({
        "postal_code": "  90210 ",
        "latitude": "34.05",
        "longitude": -118.25,
        "temperature_unit": " Celsius ",
        "windspeed_unit": "KMH",
        "precipitation_unit": "",
        "timezone": " Europe/Berlin ",
        "daily": "",
        "hourly": ["temperature_2m"],
        "air_quality": "no",
        "forecast_days": "3",
        "forecast_hours": "abc",
        "timeout_ms": "2500"
    })
    assert params.postal_code == "90210"
    assert params.latitude == 34.05
    assert params.longitude == -118.25
    assert params.temperature_unit == "celsius"
    assert params.windspeed_unit == "kmh"
    assert params.precipitation_unit == "inch"
    assert params.timezone == "Europe/Berlin"
    assert params.timezone_explicit is True
    assert params.daily == []
    assert params.hourly == ["temperature_2m"]
    assert params.air_quality is False
    assert params.forecast_days == 3.0
    assert params.forecast_hours == 24.0
    assert params.timeout_ms == 2500.0


def test_normalize_params_rejects_bad_timeout_and_shapes():
    assert normalize_params({"timeout_ms": -10}).timeout_ms == 15000.0
    assert normalize_params({"timeout_ms": 0}).timeout_ms == 15000.0
    assert normalize_params(None).daily == DEFAULT_DAILY
    assert normalize_params("latitude=1").latitude is None
    assert normalize_params({"postal_code": 0}).postal_code == ""
    assert normalize_params({"postal_code": 10001}).postal_code == "10001"


if __name__ == "__main__":
    test_parse_number()
    test_parse_boolean()
    test_normalize_list()
