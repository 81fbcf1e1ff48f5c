# xyplug_weather/config/plugin_config.py
import os
import tempfile
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"

@dataclass
class PluginConfig:
    api_key: str = ""
    cache_dir: str = ""
    log_level: str = "WARNING"
    log_dir: str = ""
    forecast_url: str = FORECAST_URL
    air_quality_url: str = AIR_QUALITY_URL
    geocoding_url: str = GEOCODING_URL

    @classmethod
    def load(cls):
        return cls(
            api_key=os.getenv("METEO_API_KEY", "").strip(),
            cache_dir=os.getenv("XYPLUG_WEATHER_CACHE_DIR", "").strip() or tempfile.gettempdir(),
            log_level=os.getenv("XYPLUG_WEATHER_LOG_LEVEL", "WARNING"),
            log_dir=os.getenv("XYPLUG_WEATHER_LOG_DIR", "").strip(),
            forecast_url=os.getenv("METEO_FORECAST_URL", FORECAST_URL),
            air_quality_url=os.getenv("METEO_AIR_QUALITY_URL", AIR_QUALITY_URL),
            geocoding_url=os.getenv("METEO_GEOCODING_URL", GEOCODING_URL)
        )
