"""Authentication module for the Gmail GPT server.

This module provides the OAuth token lifecycle for the one connected mailbox:

- CredentialSet and the Unauthenticated/Authenticated state variant
- TokenStore, an in-memory single-slot holder (no persistence)
- AuthGate, the admission check in front of every Gmail operation
- OAuthManager, the consent redirect and authorization-code exchange

Usage:
    >>> from gmail_gpt.auth import AuthGate, OAuthManager, TokenStore
    >>>
    >>> store = TokenStore()
    >>> manager = OAuthManager()
    >>> url = manager.create_auth_url()          # send the operator here
    >>> store.set(manager.exchange_code(code))   # on callback
    >>> credentials = AuthGate(store).admit()    # before each Gmail call
"""

from gmail_gpt.auth.gate import AuthGate
from gmail_gpt.auth.oauth import (
    GMAIL_SCOPES,
    GOOGLE_AUTH_URI,
    GOOGLE_TOKEN_URI,
    AuthorizationRequest,
    OAuthManager,
    credential_set_from_google,
)
from gmail_gpt.auth.storage import TokenStore
from gmail_gpt.auth.tokens import (
    Authenticated,
    AuthState,
    CredentialSet,
    Unauthenticated,
)

__all__ = [
    # OAuth
    "OAuthManager",
    "AuthorizationRequest",
    "credential_set_from_google",
    "GMAIL_SCOPES",
    "GOOGLE_AUTH_URI",
    "GOOGLE_TOKEN_URI",
    # Token state
    "CredentialSet",
    "AuthState",
    "Authenticated",
    "Unauthenticated",
    "TokenStore",
    # Admission
    "AuthGate",
]
