"""Credential data model for the single connected mailbox.

A :class:`CredentialSet` is the access/refresh token bundle returned by the
identity provider. The authentication state of the server is the tagged
variant :data:`AuthState`, either :class:`Unauthenticated` or
:class:`Authenticated`; a half-populated credential set cannot be built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Union

from gmail_gpt.utils.errors import TokenError


@dataclass(frozen=True)
class CredentialSet:
    """One authorized identity's access grant.

    Attributes:
        access_token: Short-lived bearer token. Never empty.
        refresh_token: Long-lived token, absent when offline access
            was not granted.
        expiry: Point in time after which access_token is invalid.
        scopes: Capability strings granted by the user.

    Raises:
        TokenError: If access_token is empty.

    Example:
        >>> creds = CredentialSet(access_token="ya29...")
        >>> creds.refresh_token is None
        True
    """

    access_token: str
    refresh_token: str | None = None
    expiry: datetime | None = None
    scopes: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.access_token, str) or not self.access_token:
            raise TokenError(
                "Credential set requires a non-empty access token",
                field="access_token",
            )
        # Accept any iterable of scopes but store them immutably
        if not isinstance(self.scopes, frozenset):
            object.__setattr__(self, "scopes", frozenset(self.scopes))

    @property
    def has_refresh_token(self) -> bool:
        """Whether the provider granted offline access."""
        return bool(self.refresh_token)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check the expiry timestamp against ``now`` (UTC).

        Informational only; admission never consults it.
        """
        if self.expiry is None:
            return False
        now = now or datetime.now(UTC)
        expiry = self.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return now >= expiry

    def describe(self) -> dict[str, Any]:
        """Return a token-free summary safe to show to callers."""
        return {
            "scopes": sorted(self.scopes),
            "expiry": self.expiry.isoformat() if self.expiry else None,
            "has_refresh_token": self.has_refresh_token,
        }


@dataclass(frozen=True)
class Unauthenticated:
    """No credentials held."""

    authenticated = False


@dataclass(frozen=True)
class Authenticated:
    """Credentials held for the connected mailbox."""

    credentials: CredentialSet
    authenticated = True


AuthState = Union[Unauthenticated, Authenticated]


__all__ = [
    "CredentialSet",
    "Unauthenticated",
    "Authenticated",
    "AuthState",
]
