"""Gmail message operations."""

from __future__ import annotations

import base64
import binascii
import logging
from email.header import Header
from typing import Any

from googleapiclient.errors import HttpError

from gmail_gpt.schemas.tools import MAX_UNREAD_RESULTS
from gmail_gpt.utils.errors import UpstreamError

logger = logging.getLogger(__name__)

UNREAD_QUERY = "is:unread"
SUMMARY_HEADERS = ["From", "Subject", "Date"]


def _upstream_error(message: str, error: Exception) -> UpstreamError:
    """Wrap a Gmail API failure, keeping the provider status code."""
    status_code: int | None = None
    if isinstance(error, HttpError):
        status_code = getattr(error, "status_code", None) or int(error.resp.status)
    return UpstreamError(
        message,
        cause=error,
        status_code=status_code,
        details={"error_type": type(error).__name__},
    )


def _malformed(message: str, detail: str) -> UpstreamError:
    """Report a Gmail response that does not have the expected shape."""
    logger.error("%s: %s", message, detail)
    return UpstreamError(message, details={"error_type": "MalformedResponse", "detail": detail})


def _single_line(value: str) -> str:
    """Collapse CR/LF so a header value cannot start a new header."""
    return " ".join(value.splitlines())


def build_raw_message(to: str, subject: str, body: str) -> str:
    """Build a plain-text message in the base64url form Gmail expects.

    The message is laid out as ``To``, ``Content-Type`` and ``Subject``
    headers, a blank line and the body, joined with CRLF, then UTF-8
    encoded and base64url-encoded without padding.
    """
    subject = _single_line(subject)
    if not subject.isascii():
        subject = Header(subject, "utf-8").encode(linesep="\r\n")

    lines = [
        f"To: {_single_line(to)}",
        "Content-Type: text/plain; charset=utf-8",
        f"Subject: {subject}",
        "",
        body,
    ]
    email = "\r\n".join(lines)
    return base64.urlsafe_b64encode(email.encode("utf-8")).rstrip(b"=").decode("ascii")


def send_message(service: Any, raw: str) -> dict[str, Any]:
    """Send an already encoded message. Returns the Gmail message resource."""
    try:
        sent = (
            service.users().messages().send(userId="me", body={"raw": raw}).execute()
        )
        logger.info("Sent message %s", sent.get("id"))
        return sent
    except Exception as e:
        logger.error("Failed to send message: %s", e)
        raise _upstream_error("Failed to send email", e) from e


def list_messages(
    service: Any, query: str = "", max_results: int = MAX_UNREAD_RESULTS
) -> list[dict[str, Any]]:
    """List message references matching ``query``, at most ``max_results``."""
    try:
        response = (
            service.users()
            .messages()
            .list(userId="me", q=query, maxResults=max_results)
            .execute()
        )
    except Exception as e:
        logger.error("Failed to list messages: %s", e)
        raise _upstream_error("Failed to list messages", e) from e

    if not isinstance(response, dict):
        raise _malformed("Failed to list messages", "response is not an object")
    messages: list[dict[str, Any]] = response.get("messages") or []
    logger.debug("Listed %d messages", len(messages))
    return messages[:max_results]


def get_message(
    service: Any,
    message_id: str,
    format: str = "full",
    metadata_headers: list[str] | None = None,
) -> dict[str, Any]:
    """Get a specific message by ID."""
    kwargs: dict[str, Any] = {"userId": "me", "id": message_id, "format": format}
    if metadata_headers:
        kwargs["metadataHeaders"] = metadata_headers

    try:
        message = service.users().messages().get(**kwargs).execute()
    except Exception as e:
        logger.error("Failed to get message %s: %s", message_id, e)
        raise _upstream_error(f"Failed to get message {message_id}", e) from e

    if not isinstance(message, dict):
        raise _malformed(f"Failed to get message {message_id}", "response is not an object")
    logger.debug("Retrieved message %s", message_id)
    return message


def get_header(message: dict[str, Any], name: str) -> str:
    """Return the first header called ``name`` (case-insensitive), or ''."""
    payload = message.get("payload")
    if not isinstance(payload, dict):
        return ""
    wanted = name.lower()
    for header in payload.get("headers") or []:
        if isinstance(header, dict) and str(header.get("name", "")).lower() == wanted:
            return header.get("value", "")
    return ""


def list_unread(
    service: Any, max_results: int = MAX_UNREAD_RESULTS
) -> list[dict[str, str]]:
    """Summarize up to ``max_results`` unread messages.

    Details are fetched one message at a time in the order Gmail listed
    them. The first failed fetch aborts the whole listing.
    """
    summaries: list[dict[str, str]] = []
    for ref in list_messages(service, query=UNREAD_QUERY, max_results=max_results):
        message_id = ref.get("id") if isinstance(ref, dict) else None
        if not message_id:
            raise _malformed("Failed to list messages", "message reference without id")
        message = get_message(
            service,
            message_id,
            format="metadata",
            metadata_headers=SUMMARY_HEADERS,
        )
        summaries.append(
            {
                "id": message_id,
                "from": get_header(message, "From"),
                "subject": get_header(message, "Subject"),
                "date": get_header(message, "Date"),
                "snippet": message.get("snippet") or "",
            }
        )
    return summaries


def find_text_part(payload: dict[str, Any] | None) -> dict[str, Any] | None:
    """Depth-first search for the first ``text/plain`` part in document order."""
    if not payload:
        return None
    if payload.get("mimeType") == "text/plain":
        return payload
    for part in payload.get("parts") or []:
        found = find_text_part(part)
        if found is not None:
            return found
    return None


def decode_part_data(data: str) -> str:
    """Decode a part body from base64 (URL-safe or standard, padding optional)."""
    normalized = data.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized).decode("utf-8", errors="replace")
    except (ValueError, binascii.Error) as e:
        logger.warning("Failed to decode base64 body data: %s", e)
        return ""


def extract_body(message: dict[str, Any]) -> str:
    """Return the plain-text body of a full-format message.

    Uses the first ``text/plain`` part, or the root payload when the
    message has none. Returns '' when that part carries no data.
    """
    payload = message.get("payload") or {}
    try:
        part = find_text_part(payload) or payload
        data = (part.get("body") or {}).get("data")
    except (AttributeError, TypeError) as e:
        raise _malformed("Failed to read message body", str(e)) from e
    if not data:
        return ""
    if not isinstance(data, str):
        raise _malformed("Failed to read message body", "body data is not a string")
    return decode_part_data(data)


__all__ = [
    "MAX_UNREAD_RESULTS",
    "UNREAD_QUERY",
    "build_raw_message",
    "send_message",
    "list_messages",
    "get_message",
    "get_header",
    "list_unread",
    "find_text_part",
    "decode_part_data",
    "extract_body",
]
