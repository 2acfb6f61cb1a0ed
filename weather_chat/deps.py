# ABOUTME: Construction of the shared httpx.AsyncClient used by both provider clients.
# ABOUTME: One client per app instance; no retry transport, failures surface on the first attempt.

import httpx

from weather_chat.config import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the async HTTP client with the configured timeout and JSON accept header."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        headers={"Accept": "application/json"},
    )
