"""Reasoning oracle provider registry with lazy loading.

Usage:
    from src.oracle import get_provider

    provider = get_provider("anthropic", timeout=20)
    raw = provider.complete(turns, system=SYSTEM, max_tokens=300)
"""

from __future__ import annotations

import importlib

from src.oracle.base import OracleError, OracleProvider, ParseError

__all__ = [
    "OracleError",
    "OracleProvider",
    "ParseError",
    "available_providers",
    "get_provider",
]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("src.oracle.anthropic", "AnthropicProvider"),
    "openai": ("src.oracle.openai", "OpenAIProvider"),
    "gemini": ("src.oracle.gemini", "GeminiProvider"),
    "ollama": ("src.oracle.ollama", "OllamaProvider"),
}


def get_provider(name: str, *, timeout: float = 30.0) -> OracleProvider:
    """Instantiate and return an oracle provider by name.

    Args:
        name: Provider identifier (anthropic, openai, gemini, ollama).
        timeout: Network timeout in seconds for every call the provider makes.

    Returns:
        An OracleProvider instance.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown oracle provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(timeout=timeout)  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
