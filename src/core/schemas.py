"""Core data models for the marketplace backend.

Wire format is camelCase (``industryRules``, ``fromId``); Python code uses
snake_case attribute names.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Reserved user id of the AI assistant. Never issued to a real user.
ASSISTANT_USER_ID = 0


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(_WireModel):
    """Fields accepted when registering a user or business account."""

    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
    type: Literal["user", "business"]
    name: str | None = None


class User(UserCreate):
    """A stored account."""

    id: int


class UserProfile(_WireModel):
    """Public view of a user; what the API returns."""

    id: int
    username: str
    type: Literal["user", "business"]
    name: str | None = None


class IndustryRules(_WireModel):
    """Optional matching hints attached to a business profile."""

    keywords: list[str] = Field(default_factory=list)
    priority: float | None = None
    requirements: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)


class BusinessCreate(_WireModel):
    """Business profile fields supplied by the owner."""

    description: str
    category: str
    location: str
    services: list[str] | None = None
    industry_rules: IndustryRules | None = None


class BusinessRegistration(BusinessCreate):
    """Request body for creating a business: the profile plus its owner."""

    user_id: int


class Business(BusinessCreate):
    """A stored business profile, the candidate unit of search matching.

    Frozen: ``id`` is the correlation key between oracle output and candidates.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int


class MessageCreate(_WireModel):
    """Fields accepted when sending a message."""

    from_id: int
    to_id: int
    content: str
    is_ai_assistant: bool = False


class Message(MessageCreate):
    """A persisted message."""

    model_config = ConfigDict(frozen=True)

    id: int
    timestamp: datetime = Field(default_factory=datetime.now)


class AssistantMessageRequest(_WireModel):
    """Request body for ``POST /api/messages/ai``."""

    from_id: int
    content: str = Field(min_length=1)


class ConversationTurn(BaseModel):
    """One role-tagged turn sent to the reasoning oracle."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
