"""Gmail GPT write operations package."""

from gmail_gpt.tools.write.send import gmail_send_email

__all__ = [
    "gmail_send_email",
]
