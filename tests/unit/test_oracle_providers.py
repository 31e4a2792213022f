"""Tests for oracle provider registry and adapters (SDKs replaced with fakes)."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from src.core.schemas import ConversationTurn
from src.oracle import OracleError, OracleProvider, available_providers, get_provider

TURNS = [
    ConversationTurn(role="user", content="Is a leaking pipe urgent?"),
    ConversationTurn(role="assistant", content="PRIZM here. Yes."),
    ConversationTurn(role="user", content="Who do I call?"),
]


class _FakeAPIError(Exception):
    pass


def _fake_anthropic(*, content: list[object] | None = None, raises: Exception | None = None):  # type: ignore[no-untyped-def]
    module = MagicMock()
    module.APIError = _FakeAPIError
    create = module.Anthropic.return_value.messages.create
    if raises is not None:
        create.side_effect = raises
    else:
        if content is None:
            content = [SimpleNamespace(type="text", text="3, 1")]
        create.return_value = SimpleNamespace(content=content)
    return module


def _fake_openai(*, text: str | None = "2", raises: Exception | None = None):  # type: ignore[no-untyped-def]
    module = MagicMock()
    module.OpenAIError = _FakeAPIError
    create = module.OpenAI.return_value.chat.completions.create
    if raises is not None:
        create.side_effect = raises
    else:
        create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
        )
    return module


def _fake_google(*, text: str | None = "1", raises: Exception | None = None):  # type: ignore[no-untyped-def]
    genai = MagicMock()
    genai.errors.APIError = _FakeAPIError
    generate = genai.Client.return_value.models.generate_content
    if raises is not None:
        generate.side_effect = raises
    else:
        generate.return_value = SimpleNamespace(text=text)
    google = MagicMock()
    google.genai = genai
    return {
        "google": google,
        "google.genai": genai,
        "google.genai.errors": genai.errors,
        "google.genai.types": genai.types,
    }


# ---------------------------------------------------------------------------
# Registry tests
# ---------------------------------------------------------------------------
class TestProviderRegistry:
    @pytest.mark.parametrize("name", ["anthropic", "openai", "gemini", "ollama"])
    def test_get_provider(self, name: str) -> None:
        provider = get_provider(name)
        assert isinstance(provider, OracleProvider)
        assert provider.provider_id == name

    def test_timeout_passed_through(self) -> None:
        assert get_provider("anthropic", timeout=7.5).timeout == 7.5

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown oracle provider 'nope'"):
            get_provider("nope")

    def test_available_providers_sorted(self) -> None:
        assert available_providers() == ["anthropic", "gemini", "ollama", "openai"]


# ---------------------------------------------------------------------------
# Anthropic provider tests
# ---------------------------------------------------------------------------
class TestAnthropicProvider:
    def test_metadata(self) -> None:
        provider = get_provider("anthropic")
        assert provider.default_model == "claude-sonnet-4-20250514"
        assert provider.env_var == "ANTHROPIC_API_KEY"

    def test_returns_text_and_sends_turns(self) -> None:
        fake = _fake_anthropic()
        provider = get_provider("anthropic", timeout=12)
        with (
            patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"anthropic": fake}),
        ):
            text = provider.complete(TURNS, system="be brief", max_tokens=300)

        assert text == "3, 1"
        fake.Anthropic.assert_called_once_with(api_key="test-key", timeout=12, max_retries=0)
        kwargs = fake.Anthropic.return_value.messages.create.call_args.kwargs
        assert kwargs["system"] == "be brief"
        assert kwargs["max_tokens"] == 300
        assert kwargs["model"] == "claude-sonnet-4-20250514"
        assert [m["role"] for m in kwargs["messages"]] == ["user", "assistant", "user"]

    def test_model_override(self) -> None:
        fake = _fake_anthropic()
        with (
            patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"anthropic": fake}),
        ):
            get_provider("anthropic").complete(TURNS, system="s", max_tokens=1, model="claude-x")

        assert fake.Anthropic.return_value.messages.create.call_args.kwargs["model"] == "claude-x"

    def test_sdk_error_wrapped(self) -> None:
        fake = _fake_anthropic(raises=_FakeAPIError("rate limited"))
        with (
            patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"anthropic": fake}),
            pytest.raises(OracleError, match="rate limited"),
        ):
            get_provider("anthropic").complete(TURNS, system="s", max_tokens=1)

    def test_no_text_block_raises(self) -> None:
        fake = _fake_anthropic(content=[SimpleNamespace(type="tool_use", id="x")])
        with (
            patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"anthropic": fake}),
            pytest.raises(OracleError, match="no text content"),
        ):
            get_provider("anthropic").complete(TURNS, system="s", max_tokens=1)

    def test_missing_api_key_at_call(self) -> None:
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.dict("sys.modules", {"anthropic": _fake_anthropic()}),
            pytest.raises(OracleError, match="ANTHROPIC_API_KEY"),
        ):
            get_provider("anthropic").complete(TURNS, system="s", max_tokens=1)

    def test_ensure_ready_missing_api_key(self) -> None:
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.dict("sys.modules", {"anthropic": _fake_anthropic()}),
            pytest.raises(ValueError, match="ANTHROPIC_API_KEY"),
        ):
            get_provider("anthropic").ensure_ready()

    def test_ensure_ready_missing_sdk(self) -> None:
        with (
            patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"anthropic": None}),
            pytest.raises(ImportError, match="anthropic is required"),
        ):
            get_provider("anthropic").ensure_ready()


# ---------------------------------------------------------------------------
# OpenAI provider tests
# ---------------------------------------------------------------------------
class TestOpenAIProvider:
    def test_metadata(self) -> None:
        provider = get_provider("openai")
        assert provider.default_model == "gpt-4o"
        assert provider.env_var == "OPENAI_API_KEY"

    def test_system_prompt_prepended(self) -> None:
        fake = _fake_openai()
        with (
            patch.dict("os.environ", {"OPENAI_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"openai": fake}),
        ):
            text = get_provider("openai").complete(TURNS, system="rank", max_tokens=50)

        assert text == "2"
        messages = fake.OpenAI.return_value.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "rank"}
        assert len(messages) == 4

    def test_none_content_raises(self) -> None:
        with (
            patch.dict("os.environ", {"OPENAI_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"openai": _fake_openai(text=None)}),
            pytest.raises(OracleError, match="no text content"),
        ):
            get_provider("openai").complete(TURNS, system="s", max_tokens=1)

    def test_sdk_error_wrapped(self) -> None:
        with (
            patch.dict("os.environ", {"OPENAI_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"openai": _fake_openai(raises=_FakeAPIError("timeout"))}),
            pytest.raises(OracleError, match="timeout"),
        ):
            get_provider("openai").complete(TURNS, system="s", max_tokens=1)

    def test_ensure_ready_missing_sdk(self) -> None:
        with (
            patch.dict("os.environ", {"OPENAI_API_KEY": "test-key"}),
            patch.dict("sys.modules", {"openai": None}),
            pytest.raises(ImportError, match="openai is required"),
        ):
            get_provider("openai").ensure_ready()


# ---------------------------------------------------------------------------
# Ollama provider tests
# ---------------------------------------------------------------------------
class TestOllamaProvider:
    def test_no_api_key_needed(self) -> None:
        fake = _fake_openai()
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.dict("sys.modules", {"openai": fake}),
        ):
            provider = get_provider("ollama", timeout=5)
            provider.ensure_ready()
            text = provider.complete(TURNS, system="s", max_tokens=10)

        assert text == "2"
        assert provider.env_var is None
        fake.OpenAI.assert_called_once_with(
            base_url="http://localhost:11434/v1", api_key="ollama", timeout=5, max_retries=0
        )
        assert fake.OpenAI.return_value.chat.completions.create.call_args.kwargs["model"] == "llama3"


# ---------------------------------------------------------------------------
# Gemini provider tests
# ---------------------------------------------------------------------------
class TestGeminiProvider:
    def test_metadata(self) -> None:
        provider = get_provider("gemini")
        assert provider.default_model == "gemini-2.5-flash"
        assert provider.env_var == "GOOGLE_API_KEY"

    def test_returns_text_and_maps_roles(self) -> None:
        modules = _fake_google()
        with (
            patch.dict("os.environ", {"GOOGLE_API_KEY": "test-key"}),
            patch.dict("sys.modules", modules),
        ):
            text = get_provider("gemini").complete(TURNS, system="s", max_tokens=10)

        assert text == "1"
        roles = [c.kwargs["role"] for c in modules["google.genai.types"].Content.call_args_list]
        assert roles == ["user", "model", "user"]

    def test_none_text_raises(self) -> None:
        with (
            patch.dict("os.environ", {"GOOGLE_API_KEY": "test-key"}),
            patch.dict("sys.modules", _fake_google(text=None)),
            pytest.raises(OracleError, match="no text content"),
        ):
            get_provider("gemini").complete(TURNS, system="s", max_tokens=10)

    def test_sdk_error_wrapped(self) -> None:
        with (
            patch.dict("os.environ", {"GOOGLE_API_KEY": "test-key"}),
            patch.dict("sys.modules", _fake_google(raises=_FakeAPIError("quota"))),
            pytest.raises(OracleError, match="quota"),
        ):
            get_provider("gemini").complete(TURNS, system="s", max_tokens=10)

    def test_ensure_ready_missing_api_key(self) -> None:
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.dict("sys.modules", _fake_google()),
            pytest.raises(ValueError, match="GOOGLE_API_KEY"),
        ):
            get_provider("gemini").ensure_ready()
