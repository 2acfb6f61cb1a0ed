# ABOUTME: Service layer for OpenWeatherMap API calls and response normalization.
# ABOUTME: Handles current weather, 5-day forecast aggregation, hourly samples and geocoding search.

import asyncio
import logging
import math
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from weather_chat.config import OPENWEATHER_BASE_URL, OPENWEATHER_GEO_URL
from weather_chat.errors import (
    MalformedResponseError,
    ProviderError,
    TransportError,
    WeatherChatError,
    WeatherFetchError,
)
from weather_chat.models import (
    Condition,
    CurrentConditions,
    CurrentWeather,
    DailyForecast,
    HourlySample,
    Location,
    SearchLocation,
    WeatherBundle,
    WeatherForecast,
)
from weather_chat.provider_models import (
    OwmCity,
    OwmCurrentResponse,
    OwmForecastResponse,
    OwmForecastSample,
    OwmGeocodeResult,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MS_TO_KMH = 3.6
FORECAST_DAYS = 5
HOURLY_SAMPLES = 8
SEARCH_LIMIT = 5

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

DEFAULT_GLYPH = "🌤️"

# OpenWeatherMap condition code -> glyph, by condition group
_GLYPHS_BY_CODES: tuple[tuple[Iterable[int], str], ...] = (
    ((200, 201, 202, 210, 211, 212, 221, 230, 231, 232), "⚡"),
    ((300, 301, 302, 310, 311, 312, 313, 314, 321), "🌦️"),
    ((500, 501, 502, 503, 504, 520, 521, 522, 531), "🌧️"),
    ((511, 600, 601, 602, 611, 612, 613, 615, 616, 620, 621, 622), "🌨️"),
    ((701, 711, 721, 731, 741, 751, 761, 762, 771, 781), "🌫️"),
    ((800,), "☀️"),
    ((801,), "⛅"),
    ((802, 803, 804), "☁️"),
)
WEATHER_GLYPHS: dict[int, str] = {code: glyph for codes, glyph in _GLYPHS_BY_CODES for code in codes}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def wind_direction(degrees: float) -> str:
    """Map a bearing in degrees to one of 16 compass points, each a 22.5° arc centred on its bearing."""
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def weather_glyph(code: int) -> str:
    return WEATHER_GLYPHS.get(code, DEFAULT_GLYPH)


def icon_url(icon: str) -> str:
    return f"https://openweathermap.org/img/wn/{icon}@2x.png"


def location_tz(utc_offset_seconds: int) -> timezone:
    return timezone(timedelta(seconds=utc_offset_seconds))


def local_datetime(epoch: int, tz: timezone) -> datetime:
    return datetime.fromtimestamp(epoch, tz=tz)


def format_clock(epoch: int, tz: timezone) -> str:
    """Format an epoch timestamp as a 12-hour clock label in the given zone, e.g. '06:45 AM'."""
    return local_datetime(epoch, tz).strftime("%I:%M %p")


def format_offset(utc_offset_seconds: int) -> str:
    sign = "+" if utc_offset_seconds >= 0 else "-"
    hours, remainder = divmod(abs(utc_offset_seconds), 3600)
    return f"UTC{sign}{hours:02d}:{remainder // 60:02d}"


def kmh(speed_ms: float) -> float:
    return speed_ms * MS_TO_KMH


def group_samples_by_day(samples: Iterable[OwmForecastSample], tz: timezone) -> dict[date, list[OwmForecastSample]]:
    """Bucket forecast samples by their location-local calendar date, keeping first-seen order."""
    grouped: dict[date, list[OwmForecastSample]] = {}
    for sample in samples:
        grouped.setdefault(local_datetime(sample.dt, tz).date(), []).append(sample)
    return grouped


def dominant_condition(descriptions: Iterable[str]) -> str:
    """Return the most frequent description; ties go to the one seen first."""
    counts = Counter(descriptions)
    if not counts:
        raise ValueError("dominant_condition() needs at least one description")
    # Counter keeps insertion order and max() keeps the first maximum
    return max(counts, key=counts.__getitem__)


def aggregate_day(day: date, samples: list[OwmForecastSample], sunrise: str, sunset: str) -> DailyForecast:
    """Collapse one day's 3-hour samples into a DailyForecast."""
    count = len(samples)
    description = dominant_condition(s.weather[0].description for s in samples)
    representative = next(s.weather[0] for s in samples if s.weather[0].description == description)

    return DailyForecast(
        date=day,
        max_temp=round_half_up(max(s.main.temp_max for s in samples)),
        min_temp=round_half_up(min(s.main.temp_min for s in samples)),
        avg_temp=round_half_up(sum(s.main.temp for s in samples) / count),
        max_wind_kph=round_half_up(max(kmh(s.wind.speed) for s in samples)),
        total_precip_mm=round_half_up(sum(s.rain.three_hour if s.rain else 0.0 for s in samples)),
        avg_humidity=round_half_up(sum(s.main.humidity for s in samples) / count),
        condition=Condition(text=description, icon=icon_url(representative.icon), code=representative.id),
        sunrise=sunrise,
        sunset=sunset,
    )


def build_daily_forecast(payload: OwmForecastResponse, today: date) -> list[DailyForecast]:
    """Aggregate the next FORECAST_DAYS local calendar days strictly after ``today``."""
    tz = location_tz(payload.city.timezone)
    grouped = group_samples_by_day(payload.samples, tz)
    upcoming = sorted(day for day in grouped if day > today)[:FORECAST_DAYS]

    sunrise = format_clock(payload.city.sunrise, tz)
    sunset = format_clock(payload.city.sunset, tz)
    return [aggregate_day(day, grouped[day], sunrise, sunset) for day in upcoming]


def build_hourly(payload: OwmForecastResponse) -> list[HourlySample]:
    tz = location_tz(payload.city.timezone)
    return [
        HourlySample(
            time=format_clock(s.dt, tz),
            temp=round_half_up(s.main.temp),
            icon=weather_glyph(s.weather[0].id),
            condition=s.weather[0].description,
            humidity=s.main.humidity,
            wind_speed=round_half_up(kmh(s.wind.speed)),
        )
        for s in payload.samples[:HOURLY_SAMPLES]
    ]


def build_current_weather(payload: OwmCurrentResponse) -> CurrentWeather:
    """Normalize a current-weather payload into Location + CurrentConditions."""
    tz = location_tz(payload.timezone)
    observed = local_datetime(payload.dt, tz)
    condition = payload.weather[0]

    location = Location(
        name=payload.name,
        country=payload.sys.country,
        region=payload.name,
        lat=payload.coord.lat,
        lon=payload.coord.lon,
        timezone_id=format_offset(payload.timezone),
        localtime=observed.isoformat(),
    )
    current = CurrentConditions(
        observation_time=format_clock(payload.dt, tz),
        temperature=round_half_up(payload.main.temp),
        weather_code=condition.id,
        weather_icons=[icon_url(condition.icon)],
        weather_descriptions=[condition.description],
        wind_speed=round_half_up(kmh(payload.wind.speed)),
        wind_degree=payload.wind.deg,
        wind_dir=wind_direction(payload.wind.deg),
        pressure=payload.main.pressure,
        precip=payload.rain.one_hour if payload.rain else 0.0,
        humidity=payload.main.humidity,
        cloudcover=payload.clouds.all,
        feelslike=round_half_up(payload.main.feels_like),
        uv_index=0,
        visibility=payload.visibility / 1000 if payload.visibility is not None else None,
        is_day=payload.sys.sunrise < payload.dt < payload.sys.sunset,
    )
    return CurrentWeather(location=location, current=current)


def build_city_location(city: OwmCity, now: datetime) -> Location:
    tz = location_tz(city.timezone)
    return Location(
        name=city.name,
        country=city.country,
        region=city.name,
        lat=city.coord.lat,
        lon=city.coord.lon,
        timezone_id=format_offset(city.timezone),
        localtime=now.astimezone(tz).isoformat(),
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeatherClient:
    """OpenWeatherMap client returning normalized, metric weather data.

    Every public operation either returns a complete result or raises
    WeatherFetchError with a generic message; the classified cause
    (TransportError, ProviderError or MalformedResponseError) is chained.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        base_url: str = OPENWEATHER_BASE_URL,
        geo_url: str = OPENWEATHER_GEO_URL,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._geo_url = geo_url
        self._now = now

    async def fetch_current(self, query: str) -> CurrentWeather:
        """Current conditions for a free-text place name."""
        with _fetch_errors("Failed to fetch weather data"):
            payload = await self._get(f"{self._base_url}/weather", {"q": query}, OwmCurrentResponse)
            return build_current_weather(payload)

    async def fetch_current_by_coords(self, lat: float, lon: float) -> CurrentWeather:
        """Current conditions for a coordinate pair."""
        with _fetch_errors("Failed to fetch weather data"):
            payload = await self._get(f"{self._base_url}/weather", {"lat": lat, "lon": lon}, OwmCurrentResponse)
            return build_current_weather(payload)

    async def fetch_forecast(self, query: str) -> WeatherForecast:
        """Daily aggregates for up to five days after the location's current local date."""
        with _fetch_errors("Failed to fetch forecast data"):
            payload = await self._get(f"{self._base_url}/forecast", {"q": query}, OwmForecastResponse)
            now = self._now()
            today = now.astimezone(location_tz(payload.city.timezone)).date()
            return WeatherForecast(
                location=build_city_location(payload.city, now),
                days=build_daily_forecast(payload, today),
            )

    async def fetch_hourly(self, query: str) -> list[HourlySample]:
        """The first eight 3-hour samples of the forecast feed."""
        with _fetch_errors("Failed to fetch hourly forecast data"):
            payload = await self._get(f"{self._base_url}/forecast", {"q": query}, OwmForecastResponse)
            return build_hourly(payload)

    async def search_locations(self, query: str, limit: int = SEARCH_LIMIT) -> list[SearchLocation]:
        """Geocode a free-text query into up to ``limit`` ranked matches."""
        with _fetch_errors("Failed to search location"):
            data = await self._get_json(self._geo_url, {"q": query, "limit": limit})
            if not isinstance(data, list):
                raise MalformedResponseError("Geocoding response is not a list")
            results = [_validate(OwmGeocodeResult, item) for item in data]
            return [
                SearchLocation(
                    id=rank,
                    name=r.name,
                    region=r.state or "",
                    country=r.country,
                    lat=r.lat,
                    lon=r.lon,
                )
                for rank, r in enumerate(results, start=1)
            ]

    async def fetch_all(self, query: str) -> WeatherBundle:
        """Fetch current, daily and hourly data concurrently.

        All three requests are in flight together; if any fails, its
        WeatherFetchError propagates and no partial result is returned.
        """
        current, forecast, hourly = await asyncio.gather(
            self.fetch_current(query),
            self.fetch_forecast(query),
            self.fetch_hourly(query),
        )
        return WeatherBundle(current=current, forecast=forecast, hourly=hourly)

    async def _get(self, url: str, params: dict[str, Any], model: type[ModelT]) -> ModelT:
        return _validate(model, await self._get_json(url, params))

    async def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        """GET with key and metric units, classifying every failure."""
        query = {**params, "appid": self._api_key, "units": "metric"}
        try:
            resp = await self._http.get(url, params=query)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ProviderError(f"OpenWeatherMap returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise TransportError(f"OpenWeatherMap request failed: {type(e).__name__}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError("OpenWeatherMap response is not valid JSON") from e


def _validate(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected {model.__name__} payload: {e.error_count()} error(s)") from e


@contextmanager
def _fetch_errors(message: str) -> Iterator[None]:
    """Collapse classified failures into one WeatherFetchError carrying a generic message."""
    try:
        yield
    except WeatherFetchError:
        raise
    except WeatherChatError as e:
        logger.warning("%s: %s", message, e)
        raise WeatherFetchError(message) from e
