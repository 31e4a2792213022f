"""Abstract base class for reasoning oracle providers and their error types."""

import os
from abc import ABC, abstractmethod

from src.core.schemas import ConversationTurn


class OracleError(Exception):
    """The oracle call failed: transport, auth, rate limit, timeout, or bad reply shape."""


class ParseError(OracleError):
    """The oracle replied, but its content could not be interpreted."""


def to_message_dicts(turns: list[ConversationTurn]) -> list[dict[str, str]]:
    """Convert turns to the ``{"role", "content"}`` dicts most chat SDKs accept."""
    return [{"role": t.role, "content": t.content} for t in turns]


class OracleProvider(ABC):
    """Base class that every oracle provider must implement.

    Providers are stateless apart from their timeout and may be shared across
    concurrent requests.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'anthropic')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""

    @abstractmethod
    def complete(
        self,
        turns: list[ConversationTurn],
        *,
        system: str,
        max_tokens: int,
        model: str | None = None,
    ) -> str:
        """Send role-tagged turns to the oracle and return its raw reply text.

        Args:
            turns: Conversation so far, oldest first. Matching sends a single user turn.
            system: System instruction establishing the oracle's task.
            max_tokens: Upper bound on the reply length.
            model: Override the provider's default model. None uses default.

        Returns:
            Raw, untrusted text from the oracle.

        Raises:
            OracleError: On any transport or provider failure, including a reply
                without text content.
        """

    @abstractmethod
    def _load_sdk(self):  # type: ignore[no-untyped-def]
        """Import and return the provider's SDK module.

        Raises:
            ImportError: With an install hint if the SDK is missing.
        """

    def ensure_ready(self) -> None:
        """Fail fast at startup if the SDK or the API key is missing.

        Raises:
            ImportError: If the provider SDK is not installed.
            ValueError: If the API key environment variable is not set.
        """
        self._load_sdk()
        if self.env_var and not os.environ.get(self.env_var):
            msg = f"{self.env_var} environment variable is required"
            raise ValueError(msg)

    def _api_key(self) -> str:
        if self.env_var is None:
            return ""
        api_key = os.environ.get(self.env_var)
        if not api_key:
            msg = f"{self.env_var} environment variable is required"
            raise OracleError(msg)
        return api_key
