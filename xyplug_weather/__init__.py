"""xyplug-weather: плагин прогноза погоды Open-Meteo для xyOps."""

__version__ = "1.0.0"
