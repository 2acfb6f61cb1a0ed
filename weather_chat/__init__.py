# ABOUTME: Weather lookup and chat client library.
# ABOUTME: Re-exports the clients, the app facade and the error types.

from weather_chat.app import WeatherChatApp
from weather_chat.chat_service import ChatClient
from weather_chat.errors import (
    ChatBusyError,
    ConfigError,
    MalformedResponseError,
    ProviderError,
    TransportError,
    WeatherChatError,
    WeatherFetchError,
)
from weather_chat.weather_service import WeatherClient

__all__ = [
    "ChatBusyError",
    "ChatClient",
    "ConfigError",
    "MalformedResponseError",
    "ProviderError",
    "TransportError",
    "WeatherChatApp",
    "WeatherChatError",
    "WeatherClient",
    "WeatherFetchError",
]
