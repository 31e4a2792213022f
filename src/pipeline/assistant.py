"""Conversation assembler for the AI chat assistant."""

import logging

from src.core.config import AssistantConfig
from src.core.schemas import ConversationTurn, Message
from src.oracle import OracleProvider
from src.pipeline.fallback import FALLBACK_REPLY, with_fallback
from src.pipeline.parser import parse_reply_text
from src.pipeline.prompts import ASSISTANT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def build_window(messages: list[Message], size: int = 10) -> list[ConversationTurn]:
    """Convert stored messages into the most recent ``size`` turns, oldest first."""
    turns = [
        ConversationTurn(
            role="assistant" if m.is_ai_assistant else "user",
            content=m.content,
        )
        for m in messages
    ]
    return turns[-size:]


class Assistant:
    """Produces assistant replies. Never raises on oracle failure."""

    def __init__(self, provider: OracleProvider, config: AssistantConfig) -> None:
        self._provider = provider
        self._config = config

    def respond(self, history: list[ConversationTurn]) -> str:
        """Return the oracle's reply to ``history``, or FALLBACK_REPLY on failure."""
        if not history:
            logger.warning("Assistant called with empty history - returning fallback reply")
            return FALLBACK_REPLY
        return with_fallback(
            lambda: self._ask(history),
            fallback=FALLBACK_REPLY,
            label="Assistant reply",
        )

    def reply_to(self, messages: list[Message]) -> str:
        """Build the conversation window from stored messages and respond."""
        return self.respond(build_window(messages, self._config.window_size))

    def _ask(self, history: list[ConversationTurn]) -> str:
        raw = self._provider.complete(
            history,
            system=ASSISTANT_SYSTEM_PROMPT,
            max_tokens=self._config.max_tokens,
            model=self._config.model,
        )
        return parse_reply_text(raw)
