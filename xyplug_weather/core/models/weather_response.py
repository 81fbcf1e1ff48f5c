# xyplug_weather/core/models/weather_response.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

DEFAULT_TIMEOUT_MS = 15000.0


def _merge(raw: Optional[Dict[str, Any]], **named) -> Dict[str, Any]:
    """Сырые поля ответа API + именованные поля; None удаляет ключ."""
    result = dict(raw or {})
    for key, value in named.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = value
    return result


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class JobParams:
    """Нормализованные параметры задачи (см. core/utils/validator.py)."""
    postal_code: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    temperature_unit: str = "fahrenheit"
    windspeed_unit: str = "mph"
    precipitation_unit: str = "inch"
    timezone: str = "auto"
    timezone_explicit: bool = False
    daily: List[str] = field(default_factory=list)
    hourly: List[str] = field(default_factory=list)
    air_quality: bool = True
    forecast_days: Optional[float] = 7.0
    forecast_hours: Optional[float] = 24.0
    timeout_ms: float = DEFAULT_TIMEOUT_MS


@dataclass
class GeoPlace:
    """Результат геокодирования почтового индекса."""
    latitude: float
    longitude: float
    name: Optional[str] = None
    admin1: Optional[str] = None
    admin2: Optional[str] = None
    admin3: Optional[str] = None
    admin4: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GeoPlace":
        return cls(
            latitude=record["latitude"],
            longitude=record["longitude"],
            name=record.get("name"),
            admin1=record.get("admin1"),
            admin2=record.get("admin2"),
            admin3=record.get("admin3"),
            admin4=record.get("admin4"),
            raw=dict(record)
        )


@dataclass
class LocationInfo:
    latitude: float
    longitude: float
    timezone: Optional[str] = None
    elevation: Optional[float] = None
    postal_code: Optional[str] = None
    name: Optional[str] = None
    admin1: Optional[str] = None
    admin2: Optional[str] = None
    admin3: Optional[str] = None
    admin4: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self.__dict__)


@dataclass
class CurrentBlock:
    """Текущая погода: поля current_weather + сводка."""
    weather: Dict[str, Any]
    summary: Optional[str] = None
    emoji: Optional[str] = None
    humidity: Optional[float] = None
    aqi: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _merge(self.weather, summary=self.summary, emoji=self.emoji,
                      humidity=self.humidity, aqi=self.aqi)


@dataclass
class SeriesBlock:
    """Блок daily/hourly: параллельные массивы + summaries."""
    series: Dict[str, Any]
    summaries: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _merge(self.series, summaries=self.summaries)


@dataclass
class AirQualityBlock:
    current: Optional[Dict[str, Any]] = None
    units: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"current": self.current, "units": self.units, "error": self.error})


@dataclass
class UnitsBlock:
    current: Optional[Dict[str, Any]] = None
    daily: Optional[Dict[str, Any]] = None
    hourly: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"current": self.current, "daily": self.daily, "hourly": self.hourly})


@dataclass
class OutputPayload:
    """Итоговый результат задачи; собирается один раз и не меняется."""
    location: LocationInfo
    units: UnitsBlock
    current: Optional[CurrentBlock] = None
    daily: Optional[SeriesBlock] = None
    hourly: Optional[SeriesBlock] = None
    air_quality: Optional[AirQualityBlock] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "location": self.location.to_dict(),
            "current": self.current.to_dict() if self.current else None,
            "daily": self.daily.to_dict() if self.daily else None,
            "hourly": self.hourly.to_dict() if self.hourly else None,
            "air_quality": self.air_quality.to_dict() if self.air_quality else None,
            "units": self.units.to_dict()
        })


class ResultStatus(Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FATAL = "fatal"


@dataclass
class FetchResult:
    """
    Результат запроса к API.

    OK: value содержит JSON ответа.
    DEGRADED: необязательный запрос не удался, error описывает причину.
    FATAL: обязательный запрос не удался, code = "http" / "api".
    """
    status: ResultStatus
    value: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def ok(cls, value: Optional[Dict[str, Any]]) -> "FetchResult":
        return cls(ResultStatus.OK, value=value)

    @classmethod
    def degraded(cls, error: str) -> "FetchResult":
        return cls(ResultStatus.DEGRADED, error=error)

    @classmethod
    def fatal(cls, code: str, error: str) -> "FetchResult":
        return cls(ResultStatus.FATAL, error=error, code=code)

    @property
    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK
