"""Request payload schemas for the HTTP API."""

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from notepad.exc import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class LoginRequest(BaseModel):
    """``POST /api/login`` body."""

    username: str
    password: str


class AttachmentIn(BaseModel):
    """An attachment inside a note creation body."""

    name: str
    url: str
    type: str


class NoteCreate(BaseModel):
    """``POST /api/notes`` body: a note minus its id and timestamp."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    folder: str | None = None
    attachments: list[AttachmentIn] | None = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_blank(cls, value: Any) -> Any:
        # Whitespace-only counts as empty
        if isinstance(value, str) and not value.strip():
            return ""
        return value


class FolderCreate(BaseModel):
    """``POST /api/folders`` body."""

    name: str = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


#: Messages reported for missing or empty required fields.
REQUIRED_MESSAGES: dict[str, str] = {
    "title": "Title is required",
    "content": "Content is required",
    "name": "Folder name is required",
    "username": "Username is required",
    "password": "Password is required",
}


def to_validation_error(error: pydantic.ValidationError) -> ValidationError:
    """
    Convert the first pydantic error into a :class:`~notepad.exc.ValidationError`.

    Args:
        error: The pydantic error

    Returns:
        An error carrying a message and the dotted field path

    """
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    message = first["msg"]
    if first["type"] in ("missing", "string_too_short") and field in REQUIRED_MESSAGES:
        message = REQUIRED_MESSAGES[field]
    return ValidationError(message, field or None)


def parse(schema: type[SchemaT], data: Any) -> SchemaT:
    """
    Validate a request body against a schema.

    Args:
        schema: The schema class
        data: The decoded JSON body (may be ``None``)

    Returns:
        The validated schema instance

    Raises:
        ValidationError: If the body does not match

    """
    if not isinstance(data, dict):
        msg = "Request body must be a JSON object"
        raise ValidationError(msg)
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise to_validation_error(e) from e
