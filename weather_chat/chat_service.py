# ABOUTME: Conversation client for the chat overlay: transcript, prompt context and reply normalization.
# ABOUTME: Wraps the Pydantic AI agent and maps model failures to friendly canned replies.

import logging
from datetime import datetime, timezone
from uuid import uuid4

import httpx
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError, ModelHTTPError, UserError

from weather_chat.errors import ChatBusyError
from weather_chat.models import AssistantReply, ChatMessage

logger = logging.getLogger(__name__)

CONTEXT_WINDOW = 10

GENERIC_FAILURE_REPLY = "I'm having trouble connecting right now. Please try again!"

# HTTP status of a failed model call -> reply shown instead of the model's answer
FAILURE_REPLIES: dict[int, str] = {
    404: "I'm having trouble connecting to my brain right now. Let me try a different approach!",
    429: "I'm getting a bit overwhelmed with requests. Give me a moment and try again!",
    400: "I didn't understand that. Could you rephrase your question?",
}


def failure_reply(status_code: int | None) -> str:
    """Pick the canned reply for a failed model call."""
    if status_code is None:
        return GENERIC_FAILURE_REPLY
    return FAILURE_REPLIES.get(status_code, GENERIC_FAILURE_REPLY)


def render_context(messages: list[ChatMessage]) -> str:
    """Render messages oldest-first as 'User: ...' / 'Assistant: ...' lines."""
    return "\n".join(f"{'User' if m.is_user else 'Assistant'}: {m.text}" for m in messages)


def build_prompt(context: list[ChatMessage], user_input: str) -> str:
    """Build the user prompt: earlier messages (if any) followed by the new input.

    ``context`` holds only messages sent before ``user_input``; the caller sizes
    it so that together with the new input it fits the context window.
    """
    if not context:
        return f"User: {user_input}"
    return f"Recent conversation:\n{render_context(context)}\n\nUser: {user_input}"


class ChatClient:
    """Owns one conversation with the chat agent.

    History is append-only and only mutated here. At most one send may be in
    flight; an overlapping send or clear() raises ChatBusyError and leaves
    history as is. The prompt carries at most ``context_window`` messages,
    the new input included.
    """

    def __init__(self, agent: Agent[None, str], context_window: int = CONTEXT_WINDOW) -> None:
        self._agent = agent
        self._context_window = context_window
        self._history: list[ChatMessage] = []
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def get_history(self) -> tuple[ChatMessage, ...]:
        """Snapshot of the conversation, oldest first."""
        return tuple(self._history)

    def clear(self) -> None:
        """Empty the conversation. Refused while a reply is pending so it cannot land in a fresh history."""
        if self._in_flight:
            raise ChatBusyError("Cannot clear the conversation while a reply is pending")
        self._history.clear()

    async def send_user_message(self, text: str) -> AssistantReply:
        """Record ``text``, ask the model with recent context, and record its reply.

        On a failed model call the user's message stays in history, no
        assistant message is added, and a canned reply carrying the error is
        returned.
        """
        if self._in_flight:
            raise ChatBusyError("A reply is still pending for this conversation")

        self._in_flight = True
        try:
            # the new message counts towards the window
            earlier = self._context_window - 1
            context = self._history[-earlier:] if earlier > 0 else []
            self._append(text, is_user=True)
            prompt = build_prompt(context, text)

            try:
                result = await self._agent.run(prompt)
            except ModelHTTPError as e:
                logger.warning("Chat model returned HTTP %s: %s", e.status_code, e.message)
                return AssistantReply(text=failure_reply(e.status_code), error=str(e), status_code=e.status_code)
            except (AgentRunError, UserError, httpx.HTTPError) as e:
                logger.warning("Chat model call failed: %s", e, exc_info=e)
                return AssistantReply(text=failure_reply(None), error=str(e))

            reply = result.output.strip()
            self._append(reply, is_user=False)
            return AssistantReply(text=reply)
        finally:
            self._in_flight = False

    def _append(self, text: str, *, is_user: bool) -> ChatMessage:
        message = ChatMessage(id=uuid4().hex, text=text, is_user=is_user, timestamp=datetime.now(timezone.utc))
        self._history.append(message)
        return message
