# weathercal/weather_service.py
from __future__ import annotations

import logging
import requests
from typing import Tuple, Dict, Any, Optional

from weathercal.settings import settings

log = logging.getLogger(__name__)


# WMO code → readable description
WEATHER_CODE_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

_CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "wind_speed_10m",
    "weather_code",
    "uv_index",
    "is_day",
)

_DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
    "uv_index_max",
    "sunrise",
    "sunset",
)


def weather_code_to_text(code: Optional[int]) -> str:
    return WEATHER_CODE_DESCRIPTIONS.get(code, "Unknown conditions")


def geocode_place(place: str, language: str = "en"):
    try:
        r = requests.get(
            settings.openmeteo_geocode_url,
            params={"name": place, "count": 1, "language": language, "format": "json"},
            timeout=5,
        )
        r.raise_for_status()
        data = r.json() or {}
    except (requests.RequestException, ValueError) as e:
        return None, str(e)

    results = data.get("results") or []
    if not results:
        # place is user-controlled; keep it out of the error text
        return None, "No geocoding results."

    loc = results[0]
    return {
        "name": loc.get("name"),
        "country": loc.get("country"),
        "latitude": loc.get("latitude"),
        "longitude": loc.get("longitude"),
        "timezone": loc.get("timezone") or "auto",
    }, None


def fetch_openmeteo_forecast(lat: float, lon: float, timezone: str = "auto", days: int = 3):
    try:
        r = requests.get(
            settings.openmeteo_forecast_url,
            params={
                "latitude": lat,
                "longitude": lon,
                "timezone": timezone,
                "current": ",".join(_CURRENT_FIELDS),
                "hourly": "temperature_2m,precipitation_probability,weather_code",
                "daily": ",".join(_DAILY_FIELDS),
                "forecast_days": days,
                "forecast_hours": 12,
            },
            timeout=8,
        )
        r.raise_for_status()
        return r.json(), None
    except (requests.RequestException, ValueError) as e:
        return None, str(e)


def _pick(series: Dict[str, Any], key: str, idx: int):
    arr = series.get(key) or []
    if isinstance(arr, list) and 0 <= idx < len(arr):
        return arr[idx]
    return None


def _daily_entry(daily: Dict[str, Any], idx: int) -> Dict[str, Any]:
    code = _pick(daily, "weather_code", idx)
    return {
        "date": _pick(daily, "time", idx),
        "weather_text": weather_code_to_text(code),
        "tmin_c": _pick(daily, "temperature_2m_min", idx),
        "tmax_c": _pick(daily, "temperature_2m_max", idx),
        "precip_probability_pct": _pick(daily, "precipitation_probability_max", idx),
        "uv_index_max": _pick(daily, "uv_index_max", idx),
    }


def _hourly_entries(hourly: Dict[str, Any]) -> list:
    out = []
    for idx, ts in enumerate(hourly.get("time") or []):
        out.append(
            {
                "time": ts,
                "temp_c": _pick(hourly, "temperature_2m", idx),
                "precip_probability_pct": _pick(hourly, "precipitation_probability", idx),
                "weather_text": weather_code_to_text(_pick(hourly, "weather_code", idx)),
            }
        )
    return out


def get_weather_summary(place: str, language: str = "en") -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Geocode the place and pull an Open-Meteo forecast.

    Returns (summary, None) or (None, error). The summary carries
    "location", "current", "hourly", "daily" and "sun" sections.
    """
    loc, err = geocode_place(place, language)
    if err or not loc:
        return None, err

    raw, werr = fetch_openmeteo_forecast(
        lat=loc["latitude"], lon=loc["longitude"], timezone=loc["timezone"]
    )
    if werr or not raw:
        return None, werr

    current = raw.get("current") or {}
    daily = raw.get("daily") or {}
    hourly = raw.get("hourly") or {}

    return {
        "location": {**loc, "label": f"{loc['name']}, {loc['country']}"},
        "current": {
            "temp_c": current.get("temperature_2m"),
            "feels_like_c": current.get("apparent_temperature"),
            "humidity_pct": current.get("relative_humidity_2m"),
            "precip_mm": current.get("precipitation"),
            "wind_speed_kmh": current.get("wind_speed_10m"),
            "uv_index": current.get("uv_index"),
            "is_day": bool(current.get("is_day")),
            "weather_code": current.get("weather_code"),
            "weather_text": weather_code_to_text(current.get("weather_code")),
        },
        "hourly": _hourly_entries(hourly),
        "daily": [_daily_entry(daily, i) for i in range(len(daily.get("time") or []))],
        "sun": {
            "sunrise": _pick(daily, "sunrise", 0),
            "sunset": _pick(daily, "sunset", 0),
        },
    }, None
