# ABOUTME: Pydantic AI agent definition for the chat overlay.
# ABOUTME: Configures the Gemini model, the assistant system prompt and the current-date instructions.

from datetime import datetime, timezone

from pydantic_ai import Agent, RunContext
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from weather_chat.config import Settings

SYSTEM_PROMPT = (
    "You are a helpful and friendly AI assistant. You can help with various topics including weather, "
    "general knowledge, and casual conversation.\n\n"
    "Instructions:\n"
    "1. Respond naturally and conversationally as if you're a helpful friend.\n"
    "2. Keep responses concise but informative (2-4 sentences).\n"
    "3. Be enthusiastic and helpful.\n"
    "4. If the user asks about weather, you can provide general advice but suggest they use the weather "
    "screen for specific forecasts.\n"
    "5. If the user asks general questions, be conversational and helpful.\n"
    "6. IMPORTANT: Respond with ONLY natural text, no JSON format.\n"
)


def create_chat_model(settings: Settings) -> GoogleModel:
    """Build the Gemini model from settings; the API key never leaves the provider object."""
    return GoogleModel(settings.gemini_model, provider=GoogleProvider(api_key=settings.gemini_api_key))


def build_chat_agent(model: Model | str) -> Agent[None, str]:
    """Create the chat agent around ``model`` (a Model instance or a pydantic-ai model string)."""
    agent = Agent(model, output_type=str, system_prompt=SYSTEM_PROMPT)

    @agent.instructions
    def add_current_date(ctx: RunContext[None]) -> str:
        """Inject the current UTC date so the model knows what 'today' and 'tomorrow' mean."""
        today = datetime.now(timezone.utc).date()
        return f"Today's date is {today.isoformat()} ({today.strftime('%A')})."

    return agent
