"""Pydantic parameter models for Gmail GPT operations.

The same models back the HTTP routes and the MCP tools.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

MAX_UNREAD_RESULTS = 10


class SendEmailParams(BaseModel):
    """Parameters for sending a plain-text email.

    The body may be supplied as ``message`` or ``body``. An empty
    ``message`` does not hide a non-empty ``body``.
    """

    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(..., min_length=1, description="Recipient email address")
    subject: str = Field(..., min_length=1, description="Email subject line")
    message: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("message", "body"),
        description="Plain-text email body",
    )

    @model_validator(mode="before")
    @classmethod
    def _body_when_message_empty(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("message") and data.get("body"):
            return {key: value for key, value in data.items() if key != "message"}
        return data


class ListUnreadParams(BaseModel):
    """Parameters for listing unread messages."""

    max_results: int = Field(
        default=MAX_UNREAD_RESULTS,
        ge=1,
        le=MAX_UNREAD_RESULTS,
        description="Maximum unread messages to return",
    )


class GetEmailParams(BaseModel):
    """Parameters for fetching one message."""

    id: str = Field(..., min_length=1, description="Gmail message ID")
