# ABOUTME: Pydantic models describing the raw OpenWeatherMap JSON payloads.
# ABOUTME: Payloads are validated against these before normalization so shape errors fail fast.

from pydantic import BaseModel, Field


class OwmCoord(BaseModel):
    lat: float
    lon: float


class OwmCondition(BaseModel):
    """One entry of the provider's ``weather`` array."""

    id: int
    main: str = ""
    description: str
    icon: str


class OwmMain(BaseModel):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: float
    humidity: float


class OwmWind(BaseModel):
    speed: float
    deg: float = 0.0


class OwmClouds(BaseModel):
    all: float = 0.0


class OwmPrecip(BaseModel):
    """Rain volume keyed by accumulation window ("1h" or "3h")."""

    one_hour: float = Field(default=0.0, alias="1h")
    three_hour: float = Field(default=0.0, alias="3h")


class OwmSys(BaseModel):
    country: str = ""
    sunrise: int
    sunset: int


class OwmCurrentResponse(BaseModel):
    """Payload of ``/data/2.5/weather``."""

    coord: OwmCoord
    weather: list[OwmCondition] = Field(min_length=1)
    main: OwmMain
    visibility: float | None = None
    wind: OwmWind
    clouds: OwmClouds = OwmClouds()
    rain: OwmPrecip | None = None
    dt: int
    sys: OwmSys
    timezone: int = 0
    name: str


class OwmForecastSample(BaseModel):
    """One 3-hour step of ``/data/2.5/forecast``."""

    dt: int
    main: OwmMain
    weather: list[OwmCondition] = Field(min_length=1)
    wind: OwmWind
    rain: OwmPrecip | None = None


class OwmCity(BaseModel):
    name: str
    coord: OwmCoord
    country: str = ""
    timezone: int = 0
    sunrise: int
    sunset: int


class OwmForecastResponse(BaseModel):
    """Payload of ``/data/2.5/forecast``."""

    samples: list[OwmForecastSample] = Field(alias="list")
    city: OwmCity


class OwmGeocodeResult(BaseModel):
    """One match from the direct geocoding endpoint."""

    name: str
    lat: float
    lon: float
    country: str = ""
    state: str | None = None
