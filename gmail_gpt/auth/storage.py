"""In-memory, single-slot token storage.

The server connects exactly one mailbox at a time and keeps its credentials
only for the lifetime of the process. Nothing is written to disk; a restart
returns the server to the unauthenticated state.

Concurrent ``set`` calls race and the last writer wins.
"""

from __future__ import annotations

import logging
import threading

from gmail_gpt.auth.tokens import AuthState, Authenticated, CredentialSet, Unauthenticated

logger = logging.getLogger(__name__)


class TokenStore:
    """Holder of the current :class:`CredentialSet`, or nothing.

    Each instance owns its own slot, so tests and servers can build
    independent stores.

    Example:
        >>> store = TokenStore()
        >>> store.set(CredentialSet(access_token="ya29..."))
        >>> store.get().access_token
        'ya29...'
        >>> store.clear()
        >>> store.get() is None
        True
    """

    def __init__(self) -> None:
        self._credentials: CredentialSet | None = None
        self._lock = threading.Lock()

    def set(self, credentials: CredentialSet) -> None:
        """Replace the held credentials unconditionally.

        Any previously held credential set is discarded.

        Args:
            credentials: The new credential set.
        """
        with self._lock:
            replaced = self._credentials is not None
            self._credentials = credentials
        logger.info(
            "Stored credentials (scopes=%d, replaced=%s)",
            len(credentials.scopes),
            replaced,
        )

    def get(self) -> CredentialSet | None:
        """Return the held credentials, or None when unauthenticated."""
        with self._lock:
            return self._credentials

    def clear(self) -> None:
        """Drop the held credentials. Clearing an empty store is a no-op."""
        with self._lock:
            had_credentials = self._credentials is not None
            self._credentials = None
        if had_credentials:
            logger.info("Cleared stored credentials")
        else:
            logger.debug("Clear called on an empty token store")

    def replace(self, expected: CredentialSet, credentials: CredentialSet) -> bool:
        """Swap in ``credentials`` only if ``expected`` is still held.

        Used to write back refreshed tokens without undoing a logout or
        a newer code exchange that happened during the API call.

        Args:
            expected: The credential set the caller started from.
            credentials: The replacement credential set.

        Returns:
            True if the store was updated, False if it had changed.
        """
        with self._lock:
            if self._credentials is not expected:
                return False
            self._credentials = credentials
        logger.debug("Replaced credentials after refresh")
        return True

    @property
    def state(self) -> AuthState:
        """Current authentication state as a tagged variant."""
        credentials = self.get()
        if credentials is None:
            return Unauthenticated()
        return Authenticated(credentials)

    @property
    def is_authenticated(self) -> bool:
        """Whether credentials are currently held."""
        return self.get() is not None


__all__ = [
    "TokenStore",
]
