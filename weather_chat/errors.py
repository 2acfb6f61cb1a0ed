# ABOUTME: Exception hierarchy shared by the weather and chat clients.
# ABOUTME: Classifies transport, provider-status and payload-shape failures under one base class.


class WeatherChatError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(WeatherChatError):
    """Raised when required settings are missing or invalid."""


class TransportError(WeatherChatError):
    """Raised when the provider could not be reached (DNS, connect, timeout)."""


class ProviderError(WeatherChatError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(WeatherChatError):
    """Raised when a provider payload does not have the expected shape."""


class WeatherFetchError(WeatherChatError):
    """Raised by WeatherClient operations with a generic, user-safe message.

    The classified cause is chained as ``__cause__`` for logging.
    """


class ChatBusyError(WeatherChatError):
    """Raised when a second message is sent while a reply is still pending."""
