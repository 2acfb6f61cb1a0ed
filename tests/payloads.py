# ABOUTME: OpenWeatherMap payload builders shared by the weather and app tests.
# ABOUTME: Produces /weather and /forecast JSON shaped like the real provider responses.

from datetime import datetime, timedelta, timezone

import httpx

NOW = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


def epoch(*args: int) -> int:
    """UTC epoch seconds for datetime(*args)."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def owm_sample(
    dt: int,
    temp: float = 10.0,
    *,
    temp_min: float | None = None,
    temp_max: float | None = None,
    humidity: float = 70,
    wind_speed: float = 2.0,
    description: str = "clear sky",
    code: int = 800,
    icon: str = "01d",
    rain_3h: float | None = None,
) -> dict:
    """One 3-hour step in /forecast format."""
    sample = {
        "dt": dt,
        "main": {
            "temp": temp,
            "feels_like": temp,
            "temp_min": temp if temp_min is None else temp_min,
            "temp_max": temp if temp_max is None else temp_max,
            "pressure": 1012,
            "humidity": humidity,
        },
        "weather": [{"id": code, "main": "Clear", "description": description, "icon": icon}],
        "clouds": {"all": 0},
        "wind": {"speed": wind_speed, "deg": 90},
        "dt_txt": datetime.fromtimestamp(dt, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
    }
    if rain_3h is not None:
        sample["rain"] = {"3h": rain_3h}
    return sample


def owm_forecast(samples: list[dict], *, tz_offset: int = 0) -> dict:
    """A /forecast payload wrapping ``samples`` for a fictional city."""
    return {
        "cod": "200",
        "cnt": len(samples),
        "list": samples,
        "city": {
            "id": 2618425,
            "name": "Copenhagen",
            "coord": {"lat": 55.6761, "lon": 12.5683},
            "country": "DK",
            "timezone": tz_offset,
            "sunrise": epoch(2025, 1, 15, 7, 30),
            "sunset": epoch(2025, 1, 15, 15, 55),
        },
    }


def owm_current(**overrides) -> dict:
    """A /weather payload for Copenhagen at noon UTC on 2025-01-15."""
    payload = {
        "coord": {"lon": 12.5683, "lat": 55.6761},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {
            "temp": 21.6,
            "feels_like": 20.4,
            "temp_min": 20.0,
            "temp_max": 23.0,
            "pressure": 1015,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 5.0, "deg": 200},
        "clouds": {"all": 75},
        "rain": {"1h": 0.5},
        "dt": epoch(2025, 1, 15, 12, 0),
        "sys": {"country": "DK", "sunrise": epoch(2025, 1, 15, 7, 30), "sunset": epoch(2025, 1, 15, 15, 55)},
        "timezone": 7200,
        "name": "Copenhagen",
    }
    payload.update(overrides)
    return payload


def three_hourly(start: datetime, days: int, **sample_kwargs) -> list[dict]:
    """Samples every 3 hours from ``start`` for ``days`` days."""
    steps = days * 8
    return [owm_sample(int((start + timedelta(hours=3 * i)).timestamp()), **sample_kwargs) for i in range(steps)]


def response(json_data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))
