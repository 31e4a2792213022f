"""OpenAI oracle provider."""

import logging

from src.core.schemas import ConversationTurn
from src.oracle.base import OracleError, OracleProvider, to_message_dicts

logger = logging.getLogger(__name__)


class OpenAIProvider(OracleProvider):
    """Oracle provider using the OpenAI Chat Completions API."""

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o"

    @property
    def env_var(self) -> str | None:
        return "OPENAI_API_KEY"

    def _load_sdk(self):  # type: ignore[no-untyped-def]
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for the OpenAI oracle. "
                "Install with: pip install 'marketplace-matchmaker[openai]'"
            )
            raise ImportError(msg) from None
        return openai

    def _client(self, openai):  # type: ignore[no-untyped-def]
        return openai.OpenAI(api_key=self._api_key(), timeout=self.timeout, max_retries=0)

    def complete(
        self,
        turns: list[ConversationTurn],
        *,
        system: str,
        max_tokens: int,
        model: str | None = None,
    ) -> str:
        openai = self._load_sdk()
        client = self._client(openai)
        use_model = model or self.default_model

        logger.info("Sending %d turn(s) to %s (%s)...", len(turns), self.provider_id, use_model)
        try:
            response = client.chat.completions.create(
                model=use_model,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system},
                    *to_message_dicts(turns),
                ],
            )
        except openai.OpenAIError as e:
            msg = f"{self.provider_id} request failed: {e}"
            raise OracleError(msg) from e

        if not response.choices or response.choices[0].message.content is None:
            msg = f"{self.provider_id} response has no text content"
            raise OracleError(msg)
        return response.choices[0].message.content  # type: ignore[no-any-return]
