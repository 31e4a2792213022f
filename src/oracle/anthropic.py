"""Anthropic Claude oracle provider."""

import logging

from src.core.schemas import ConversationTurn
from src.oracle.base import OracleError, OracleProvider, to_message_dicts

logger = logging.getLogger(__name__)


class AnthropicProvider(OracleProvider):
    """Oracle provider using the Anthropic Messages API."""

    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str:
        return "ANTHROPIC_API_KEY"

    def _load_sdk(self):  # type: ignore[no-untyped-def]
        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for the Anthropic oracle. "
                "Install with: pip install 'marketplace-matchmaker[anthropic]'"
            )
            raise ImportError(msg) from None
        return anthropic

    def complete(
        self,
        turns: list[ConversationTurn],
        *,
        system: str,
        max_tokens: int,
        model: str | None = None,
    ) -> str:
        anthropic = self._load_sdk()
        client = anthropic.Anthropic(
            api_key=self._api_key(), timeout=self.timeout, max_retries=0
        )
        use_model = model or self.default_model

        logger.info("Sending %d turn(s) to Anthropic API (%s)...", len(turns), use_model)
        try:
            message = client.messages.create(
                model=use_model,
                max_tokens=max_tokens,
                system=system,
                messages=to_message_dicts(turns),
            )
        except anthropic.APIError as e:
            msg = f"Anthropic request failed: {e}"
            raise OracleError(msg) from e

        text = next(
            (block.text for block in message.content if getattr(block, "type", None) == "text"),
            None,
        )
        if text is None:
            msg = "Anthropic response has no text content"
            raise OracleError(msg)
        return text  # type: ignore[no-any-return]
