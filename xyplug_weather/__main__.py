# -*- coding: utf-8 -*-
"""Точка входа: python -m xyplug_weather < job.json"""

import sys

from xyplug_weather.scripts.weather.weather_forecast_script import main

if __name__ == "__main__":
    sys.exit(main())
