"""Ollama local oracle provider (OpenAI-compatible API)."""

from src.oracle.openai import OpenAIProvider

_OLLAMA_BASE_URL = "http://localhost:11434/v1"


class OllamaProvider(OpenAIProvider):
    """Oracle provider using a local Ollama instance via OpenAI-compatible API."""

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> None:
        return None

    def _load_sdk(self):  # type: ignore[no-untyped-def]
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for Ollama (OpenAI-compatible API). "
                "Install with: pip install 'marketplace-matchmaker[openai]'"
            )
            raise ImportError(msg) from None
        return openai

    def _client(self, openai):  # type: ignore[no-untyped-def]
        return openai.OpenAI(
            base_url=_OLLAMA_BASE_URL, api_key="ollama", timeout=self.timeout, max_retries=0
        )
