# ABOUTME: Environment-backed settings for provider credentials and endpoints.
# ABOUTME: Loads .env via python-dotenv and validates values with a Pydantic model.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weather_chat.errors import ConfigError

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_GEO_URL = "https://api.openweathermap.org/geo/1.0/direct"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class Settings(BaseModel):
    """Provider credentials and endpoints. Keys never appear in repr()."""

    model_config = ConfigDict(frozen=True)

    openweather_api_key: str = Field(min_length=1, repr=False)
    gemini_api_key: str = Field(min_length=1, repr=False)
    gemini_model: str = DEFAULT_GEMINI_MODEL
    openweather_base_url: str = OPENWEATHER_BASE_URL
    openweather_geo_url: str = OPENWEATHER_GEO_URL
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from the process environment (after loading .env).

        Raises ConfigError naming the offending variables when a required key
        is missing or a value fails validation.
        """
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        missing = [name for name in ("OPENWEATHER_API_KEY", "GEMINI_API_KEY") if not environ.get(name)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        values = {
            "openweather_api_key": environ["OPENWEATHER_API_KEY"],
            "gemini_api_key": environ["GEMINI_API_KEY"],
            "gemini_model": environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            "openweather_base_url": environ.get("OPENWEATHER_BASE_URL", OPENWEATHER_BASE_URL),
            "openweather_geo_url": environ.get("OPENWEATHER_GEO_URL", OPENWEATHER_GEO_URL),
        }
        if environ.get("HTTP_TIMEOUT_SECONDS"):
            values["http_timeout_seconds"] = environ["HTTP_TIMEOUT_SECONDS"]

        try:
            return cls(**values)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise ConfigError(f"Invalid settings: {fields}") from e
