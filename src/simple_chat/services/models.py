from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from simple_chat.core.exceptions import ValidationError

class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        # Passwords are taken verbatim
        return value.strip() if isinstance(value, str) else value

class MessageSendRequest(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        return value.strip() if isinstance(value, str) else value


def _is_blank(error: PydanticValidationError) -> bool:
    return all(err["type"] in ("missing", "string_too_short") for err in error.errors())


def parse_credentials(username: str, password: str) -> CredentialsRequest:
    try:
        return CredentialsRequest(username=username, password=password)
    except PydanticValidationError as e:
        if _is_blank(e):
            raise ValidationError("Enter username & password.") from e
        raise ValidationError("Username or password contains invalid characters.") from e


def parse_message(content: str) -> MessageSendRequest:
    try:
        return MessageSendRequest(content=content)
    except PydanticValidationError as e:
        if _is_blank(e):
            raise ValidationError("Message is empty.") from e
        raise ValidationError("Message contains invalid characters.") from e
