"""Authenticated Gmail API client factory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build

from gmail_gpt.auth.oauth import OAuthManager, credential_set_from_google
from gmail_gpt.auth.storage import TokenStore
from gmail_gpt.auth.tokens import CredentialSet
from gmail_gpt.middleware.audit_logger import audit_logger
from gmail_gpt.utils.errors import TokenError

logger = logging.getLogger(__name__)


class GmailClient:
    """Factory for Gmail API services bound to admitted credentials.

    The Google transport refreshes an expired access token during a call when
    a refresh token is available. When that happens the new credential set
    is written back to the token store, replacing the old one wholesale.
    """

    def __init__(self, oauth_manager: OAuthManager, store: TokenStore) -> None:
        self._oauth = oauth_manager
        self._store = store

    @contextmanager
    def session(self, credentials: CredentialSet) -> Iterator[Resource]:
        """Yield a Gmail API service authenticated with ``credentials``.

        Args:
            credentials: Credential set returned by the auth gate.

        Yields:
            Gmail API Resource object.
        """
        google_creds = self._oauth.get_credentials(credentials)
        service = build("gmail", "v1", credentials=google_creds, cache_discovery=False)
        try:
            yield service
        finally:
            self._write_back(credentials, google_creds)

    def _write_back(self, original: CredentialSet, google_creds: Credentials) -> None:
        """Store refreshed credentials if the transport refreshed the token."""
        if not google_creds.token or google_creds.token == original.access_token:
            return

        try:
            refreshed = credential_set_from_google(google_creds, sorted(original.scopes))
        except TokenError as e:
            logger.warning("Ignoring refreshed credentials: %s", e)
            return

        # Refresh responses usually omit the refresh token
        if refreshed.refresh_token is None and original.refresh_token:
            refreshed = replace(refreshed, refresh_token=original.refresh_token)

        stored = self._store.replace(original, refreshed)
        audit_logger.log_auth_event("refresh", details={"stored": stored})
        if stored:
            logger.info("Access token refreshed and stored")
        else:
            logger.info("Discarded refreshed token: stored credentials changed")


__all__ = [
    "GmailClient",
]
