# ABOUTME: Explicitly owned facade wiring settings, the HTTP client, WeatherClient and ChatClient.
# ABOUTME: A presentation layer holds one instance instead of reaching for module-level singletons.

import logging

import httpx

from weather_chat.agent import build_chat_agent, create_chat_model
from weather_chat.chat_service import ChatClient
from weather_chat.config import Settings
from weather_chat.deps import create_http_client
from weather_chat.models import AssistantReply, WeatherBundle
from weather_chat.weather_service import WeatherClient

logger = logging.getLogger(__name__)


class WeatherChatApp:
    """Weather lookups and one chat conversation sharing a single HTTP client."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        weather: WeatherClient,
        chat: ChatClient,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self.weather = weather
        self.chat = chat

    @classmethod
    def create(cls, settings: Settings | None = None) -> "WeatherChatApp":
        """Build the app from ``settings`` (or the environment) with a Gemini-backed chat agent."""
        settings = settings or Settings.from_env()
        http_client = create_http_client(settings)
        weather = WeatherClient(
            http_client,
            settings.openweather_api_key,
            base_url=settings.openweather_base_url,
            geo_url=settings.openweather_geo_url,
        )
        chat = ChatClient(build_chat_agent(create_chat_model(settings)))
        logger.info("Weather chat app ready (model=%s)", settings.gemini_model)
        return cls(settings, http_client, weather, chat)

    async def lookup(self, query: str) -> WeatherBundle:
        return await self.weather.fetch_all(query.strip())

    async def send(self, text: str) -> AssistantReply:
        return await self.chat.send_user_message(text)

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "WeatherChatApp":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
