"""Google Gemini oracle provider (google-genai SDK)."""

import logging

from src.core.schemas import ConversationTurn
from src.oracle.base import OracleError, OracleProvider

logger = logging.getLogger(__name__)

# Gemini names the assistant role "model".
_ROLES = {"user": "user", "assistant": "model"}


class GeminiProvider(OracleProvider):
    """Oracle provider using the Google Gemini API (google-genai SDK)."""

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    @property
    def env_var(self) -> str:
        return "GOOGLE_API_KEY"

    def _load_sdk(self):  # type: ignore[no-untyped-def]
        try:
            from google import genai
        except ImportError:
            msg = (
                "google-genai is required for the Gemini oracle. "
                "Install with: pip install 'marketplace-matchmaker[gemini]'"
            )
            raise ImportError(msg) from None
        return genai

    def complete(
        self,
        turns: list[ConversationTurn],
        *,
        system: str,
        max_tokens: int,
        model: str | None = None,
    ) -> str:
        genai = self._load_sdk()
        import httpx
        from google.genai import errors as genai_errors
        from google.genai import types as genai_types

        use_model = model or self.default_model
        client = genai.Client(
            api_key=self._api_key(),
            http_options=genai_types.HttpOptions(timeout=int(self.timeout * 1000)),
        )
        contents = [
            genai_types.Content(role=_ROLES[t.role], parts=[genai_types.Part(text=t.content)])
            for t in turns
        ]

        logger.info("Sending %d turn(s) to Gemini API (%s)...", len(turns), use_model)
        try:
            response = client.models.generate_content(
                model=use_model,
                contents=contents,
                config=genai_types.GenerateContentConfig(
                    system_instruction=system,
                    max_output_tokens=max_tokens,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            msg = f"Gemini request failed: {e}"
            raise OracleError(msg) from e

        if response.text is None:
            msg = "Gemini response has no text content"
            raise OracleError(msg)
        return response.text  # type: ignore[no-any-return]
