"""
Pydantic models for feedback submissions and stored feedback records.
"""

import re
from datetime import datetime, timezone

from pydantic import (AliasChoices, BaseModel, ConfigDict, Field,
                      ValidationError, field_validator)

from ..services.errors import FeedbackValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MESSAGE_MIN_LENGTH = 10

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_EMAIL_MESSAGE = "Invalid email format"
SHORT_MESSAGE_MESSAGE = f"Message must be at least {MESSAGE_MIN_LENGTH} characters long"

# Messages reported when a record fails the write-time schema
SCHEMA_MESSAGES = {
    "name": "Name is required",
    "email": "Please enter a valid email address",
    "message": SHORT_MESSAGE_MESSAGE,
    "createdAt": "Invalid creation time",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackSubmission(BaseModel):
    """
    Request body for a new feedback entry.
    Surrounding whitespace is stripped before any check runs.
    """

    model_config = ConfigDict(str_strip_whitespace=True, strict=True)

    name: str
    email: str
    message: str

    @field_validator("name", "email", "message")
    @classmethod
    def not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError(MISSING_FIELDS_MESSAGE)
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError(INVALID_EMAIL_MESSAGE)
        return value

    @field_validator("message")
    @classmethod
    def long_enough(cls, value: str) -> str:
        if len(value) < MESSAGE_MIN_LENGTH:
            raise ValueError(SHORT_MESSAGE_MESSAGE)
        return value


class FeedbackRecord(BaseModel):
    """Document schema enforced right before a record is written."""

    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^\S+@\S+\.\S+$")
    message: str = Field(min_length=MESSAGE_MIN_LENGTH)
    createdAt: datetime = Field(default_factory=utcnow)

    @classmethod
    def build(cls, **fields) -> "FeedbackRecord":
        try:
            return cls(**fields)
        except ValidationError as e:
            field = e.errors()[0]["loc"][0]
            raise FeedbackValidationError(SCHEMA_MESSAGES.get(field, "Invalid feedback record")) from e

    def to_document(self) -> dict:
        return self.model_dump()


class Feedback(BaseModel):
    """A stored feedback entry as returned by the API."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    email: str
    message: str
    createdAt: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value) -> str:
        return str(value)
