"""Gmail GPT authentication operations package.

- gmail_auth_url: Build the consent page URL
- gmail_complete_login: Exchange the callback code and store credentials
- gmail_logout: Clear held credentials
- gmail_get_auth_status: Report authentication state
"""

from gmail_gpt.tools.auth.login import gmail_auth_url, gmail_complete_login
from gmail_gpt.tools.auth.logout import gmail_logout
from gmail_gpt.tools.auth.status import gmail_get_auth_status

__all__ = [
    "gmail_auth_url",
    "gmail_complete_login",
    "gmail_logout",
    "gmail_get_auth_status",
]
