"""Input validation utilities.

Validation always runs before any Gmail API call, so a rejected request
never reaches the provider.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from gmail_gpt.schemas.tools import GetEmailParams, SendEmailParams
from gmail_gpt.utils.errors import ValidationError

logger = logging.getLogger(__name__)

MESSAGE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

SEND_FIELDS_MESSAGE = "Missing to, subject, or message field"


def _failed_fields(error: PydanticValidationError) -> list[str]:
    return [str(err["loc"][0]) for err in error.errors() if err.get("loc")]


def validate_send_request(payload: Any) -> SendEmailParams:
    """Validate a send request body.

    Args:
        payload: Decoded JSON body (or keyword arguments from a tool call).

    Returns:
        Validated send parameters.

    Raises:
        ValidationError: If the body is not an object or a field is
            missing or empty.
    """
    if not isinstance(payload, dict):
        raise ValidationError(SEND_FIELDS_MESSAGE, details={"reason": "body is not an object"})

    try:
        return SendEmailParams.model_validate(payload)
    except PydanticValidationError as e:
        fields = _failed_fields(e)
        logger.debug("Send request rejected, invalid fields: %s", fields)
        raise ValidationError(
            SEND_FIELDS_MESSAGE,
            field=fields[0] if fields else None,
            details={"fields": fields},
        ) from e


def validate_message_id(message_id: str | None) -> str:
    """Validate Gmail message ID format.

    Args:
        message_id: Message ID to validate.

    Returns:
        Validated message ID (stripped).

    Raises:
        ValidationError: If message ID is missing or malformed.
    """
    if message_id is None or not message_id.strip():
        raise ValidationError("Missing id query parameter", field="id")

    message_id = message_id.strip()
    if len(message_id) > 64:
        raise ValidationError("Message ID too long", field="id")

    if not MESSAGE_ID_PATTERN.match(message_id):
        raise ValidationError(f"Invalid message ID format: {message_id}", field="id")

    return GetEmailParams(id=message_id).id


__all__ = [
    "validate_send_request",
    "validate_message_id",
    "SEND_FIELDS_MESSAGE",
]
