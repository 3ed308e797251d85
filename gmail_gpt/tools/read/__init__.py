"""Gmail GPT read operations package."""

from gmail_gpt.tools.read.get_email import gmail_get_email
from gmail_gpt.tools.read.list_unread import gmail_list_unread

__all__ = [
    "gmail_list_unread",
    "gmail_get_email",
]
