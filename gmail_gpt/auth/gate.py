"""Admission check for credential-requiring operations."""

from __future__ import annotations

import logging

from gmail_gpt.auth.storage import TokenStore
from gmail_gpt.auth.tokens import Authenticated, CredentialSet
from gmail_gpt.utils.errors import AdmissionError

logger = logging.getLogger(__name__)


class AuthGate:
    """Gate operations behind the presence of stored credentials.

    The gate does not look at token expiry. The Gmail API call is the
    authority on whether the access token still works, and a rejected token
    comes back as an ordinary upstream error.

    Example:
        >>> gate = AuthGate(TokenStore())
        >>> gate.admit()
        Traceback (most recent call last):
        ...
        gmail_gpt.utils.errors.AdmissionError: Not authenticated. Open /auth in a browser and connect Gmail first.
    """

    def __init__(self, store: TokenStore) -> None:
        self._store = store

    def admit(self) -> CredentialSet:
        """Return the stored credentials for the downstream call.

        Returns:
            The current credential set.

        Raises:
            AdmissionError: If the store holds no credentials.
        """
        state = self._store.state
        if isinstance(state, Authenticated):
            return state.credentials

        logger.info("Rejected request: no stored credentials")
        raise AdmissionError(
            "Not authenticated. Open /auth in a browser and connect Gmail first.",
        )


__all__ = [
    "AuthGate",
]
