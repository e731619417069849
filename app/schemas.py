from typing import Any, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.core.config import settings


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)


# === MESSAGES ===

class MessageIn(CamelModel):
    message: str

    @field_validator("message", mode="before")
    @classmethod
    def check_message(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("Message must be a string.")
        if len(value) < 1:
            raise ValueError("Message must be at least 1 character long.")
        if len(value) > settings.MESSAGE_MAX_LENGTH:
            raise ValueError(f"Message must be {settings.MESSAGE_MAX_LENGTH} characters or less.")
        return value


class MessageOut(CamelModel):
    id: int
    body: str
    created_at: datetime
    updated_at: datetime


class MessageListOut(CamelModel):
    cache_date: str
    total_count: int
    items: List[MessageOut]


class MessageItemOut(CamelModel):
    item: MessageOut


class MessageDeletedOut(CamelModel):
    message: str
    total_count: int
    items: List[MessageOut]


class StatusMessageOut(CamelModel):
    message: str


# === BLOG VIEWS ===

class ViewIn(CamelModel):
    visitor_id: str

    @field_validator("visitor_id", mode="before")
    @classmethod
    def check_visitor_id(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value:
            raise ValueError("Visitor ID must be a non-empty string.")
        if len(value) > settings.VISITOR_ID_MAX_LENGTH:
            raise ValueError(f"Visitor ID must be {settings.VISITOR_ID_MAX_LENGTH} characters or less.")
        return value


class BlogViewOut(CamelModel):
    slug: str
    count: int
    last_viewed: datetime
    unique_visitors: int = 0  # Size of the visitor set, ids are never exposed
