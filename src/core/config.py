"""Configuration models and YAML loader for the marketplace backend."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.oracle import available_providers


class OracleConfig(BaseModel):
    """Which reasoning provider to call and how long to wait for it."""

    provider: str = "anthropic"
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("provider")
    @classmethod
    def provider_registered(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in available_providers():
            msg = f"provider must be one of {available_providers()}, got '{v}'"
            raise ValueError(msg)
        return v


class MatchingConfig(BaseModel):
    """Oracle parameters for business search matching."""

    model: str | None = None
    max_tokens: int = Field(default=300, ge=1)


class AssistantConfig(BaseModel):
    """Oracle parameters for the chat assistant."""

    model: str | None = None
    max_tokens: int = Field(default=1024, ge=1)
    window_size: int = Field(default=10, ge=1)


class ServerConfig(BaseModel):
    """HTTP server binding."""

    host: str = "127.0.0.1"
    port: int = Field(default=5000, ge=1, le=65535)


class StoreConfig(BaseModel):
    """In-memory data store options."""

    seed_sample_data: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML. Every section is optional."""

    oracle: OracleConfig = Field(default_factory=OracleConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
