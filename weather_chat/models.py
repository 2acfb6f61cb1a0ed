# ABOUTME: Pydantic BaseModels for the normalized weather and chat data.
# ABOUTME: Defines the stable internal schema returned by the weather and chat clients.

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Location(_Frozen):
    """Resolved place with coordinates and location-local time."""

    name: str
    country: str
    region: str
    lat: float
    lon: float
    timezone_id: str
    localtime: str


class CurrentConditions(_Frozen):
    """Current observation in metric units (°C, km/h, km)."""

    observation_time: str
    temperature: int
    weather_code: int
    weather_icons: list[str]
    weather_descriptions: list[str]
    wind_speed: int
    wind_degree: float
    wind_dir: str
    pressure: float
    precip: float
    humidity: float
    cloudcover: float
    feelslike: int
    uv_index: int = 0
    visibility: float | None = None
    is_day: bool


class CurrentWeather(_Frozen):
    location: Location
    current: CurrentConditions


class Condition(_Frozen):
    text: str
    icon: str
    code: int


class DailyForecast(_Frozen):
    """Aggregates over one calendar day of 3-hour samples."""

    date: date
    max_temp: int
    min_temp: int
    avg_temp: int
    max_wind_kph: int
    total_precip_mm: int
    avg_humidity: int
    condition: Condition
    sunrise: str
    sunset: str


class WeatherForecast(_Frozen):
    location: Location
    days: list[DailyForecast] = []


class HourlySample(_Frozen):
    """One 3-hour step for the hourly strip."""

    time: str
    temp: int
    icon: str
    condition: str
    humidity: float
    wind_speed: int


class SearchLocation(_Frozen):
    """Geocoding match, ranked from 1."""

    id: int
    name: str
    region: str
    country: str
    lat: float
    lon: float


class WeatherBundle(_Frozen):
    """Everything the weather screen needs from one lookup."""

    current: CurrentWeather
    forecast: WeatherForecast
    hourly: list[HourlySample]


class ChatMessage(_Frozen):
    id: str
    text: str
    is_user: bool
    timestamp: datetime


class AssistantReply(_Frozen):
    """Text to show the user, plus diagnostic details when the model call failed."""

    text: str
    error: str | None = None
    status_code: int | None = None
