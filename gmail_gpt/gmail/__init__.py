"""Gmail API operations module."""

from gmail_gpt.gmail.client import GmailClient
from gmail_gpt.gmail.messages import (
    MAX_UNREAD_RESULTS,
    build_raw_message,
    decode_part_data,
    extract_body,
    find_text_part,
    get_header,
    get_message,
    list_messages,
    list_unread,
    send_message,
)

__all__ = [
    "GmailClient",
    "MAX_UNREAD_RESULTS",
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
