"""Google OAuth 2.0 web-server flow for Gmail API access.

The server sends the operator to Google's consent page and receives the
authorization code on its own ``/oauth2callback`` route. No state is kept
between the redirect and the callback: any callback carrying a code is
exchanged.

Configuration is read from the environment:

- GOOGLE_CLIENT_ID (or CLIENT_ID)
- GOOGLE_CLIENT_SECRET (or CLIENT_SECRET)
- GOOGLE_REDIRECT_URI (or REDIRECT_URI), e.g. https://host/oauth2callback
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlencode

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from gmail_gpt.auth.tokens import CredentialSet
from gmail_gpt.utils.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

# Send mail and read the mailbox, nothing else
GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.readonly",
]

# Google OAuth endpoints
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _env(*names: str) -> str | None:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class AuthorizationRequest:
    """Parameters of one consent-page redirect.

    Attributes:
        redirect_uri: Where Google sends the operator back with a code.
        scopes: Requested capability strings.
        force_consent: Show the consent screen even if the user already
            granted these scopes. Google only issues a new refresh token
            when consent is shown.
        offline: Ask for a refresh token.
    """

    redirect_uri: str
    scopes: tuple[str, ...]
    force_consent: bool = True
    offline: bool = True

    def to_params(self, client_id: str) -> dict[str, str]:
        """Render the query parameters for the authorization endpoint."""
        params = {
            "client_id": client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "include_granted_scopes": "false",
        }
        if self.offline:
            params["access_type"] = "offline"
        if self.force_consent:
            params["prompt"] = "consent"
        return params


def credential_set_from_google(
    credentials: Credentials, default_scopes: list[str] | None = None
) -> CredentialSet:
    """Convert google-auth credentials into a :class:`CredentialSet`.

    google-auth keeps expiry as a naive UTC datetime; the result carries an
    aware one.

    Raises:
        TokenError: If the credentials carry no access token.
    """
    expiry = credentials.expiry
    if expiry is not None and expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=UTC)

    scopes = (
        getattr(credentials, "granted_scopes", None)
        or credentials.scopes
        or default_scopes
        or []
    )

    return CredentialSet(
        access_token=credentials.token,
        refresh_token=credentials.refresh_token,
        expiry=expiry,
        scopes=frozenset(scopes),
    )


class OAuthManager:
    """Builds consent URLs and exchanges authorization codes.

    Attributes:
        _client_id: Google OAuth client ID.
        _client_secret: Google OAuth client secret.
        _redirect_uri: Public URL of the ``/oauth2callback`` route.

    Example:
        >>> manager = OAuthManager()
        >>> if manager.is_configured:
        ...     url = manager.create_auth_url()
        ...     # operator visits url, Google redirects back with ?code=...
        ...     credentials = manager.exchange_code(code)
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize with explicit settings, falling back to the environment."""
        self._client_id = client_id or _env("GOOGLE_CLIENT_ID", "CLIENT_ID")
        self._client_secret = client_secret or _env(
            "GOOGLE_CLIENT_SECRET", "CLIENT_SECRET"
        )
        self._redirect_uri = redirect_uri or _env(
            "GOOGLE_REDIRECT_URI", "REDIRECT_URI"
        )
        self._scopes = list(scopes or GMAIL_SCOPES)

        if not self.is_configured:
            logger.warning(
                "OAuth not fully configured, missing: %s",
                ", ".join(self.missing_settings()),
            )

    @property
    def is_configured(self) -> bool:
        """True when client ID, client secret and redirect URI are all set."""
        return not self.missing_settings()

    @property
    def scopes(self) -> list[str]:
        """Scopes requested during authorization."""
        return list(self._scopes)

    @property
    def redirect_uri(self) -> str | None:
        """Configured callback URL."""
        return self._redirect_uri

    def missing_settings(self) -> list[str]:
        """Names of the configuration values that are not set."""
        missing = []
        if not self._client_id:
            missing.append("GOOGLE_CLIENT_ID")
        if not self._client_secret:
            missing.append("GOOGLE_CLIENT_SECRET")
        if not self._redirect_uri:
            missing.append("GOOGLE_REDIRECT_URI")
        return missing

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(
                "OAuth not configured",
                details={"missing": self.missing_settings()},
            )

    def _get_client_config(self) -> dict[str, Any]:
        """Build OAuth client configuration for google-auth-oauthlib."""
        return {
            "web": {
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [self._redirect_uri],
            }
        }

    def build_authorization_request(
        self, force_consent: bool = True
    ) -> AuthorizationRequest:
        """Describe the redirect for the consent page.

        Raises:
            ConfigurationError: If OAuth is not configured.
        """
        self._require_configured()
        assert self._redirect_uri is not None
        return AuthorizationRequest(
            redirect_uri=self._redirect_uri,
            scopes=tuple(self._scopes),
            force_consent=force_consent,
        )

    def create_auth_url(self, force_consent: bool = True) -> str:
        """Create the Google consent page URL.

        Args:
            force_consent: Re-prompt for consent (needed to obtain a new
                refresh token) instead of reusing a prior grant.

        Returns:
            Full authorization URL.

        Raises:
            ConfigurationError: If OAuth is not configured.
        """
        request = self.build_authorization_request(force_consent=force_consent)
        assert self._client_id is not None
        auth_url = f"{GOOGLE_AUTH_URI}?{urlencode(request.to_params(self._client_id))}"
        logger.debug("Created auth URL (force_consent=%s)", force_consent)
        return auth_url

    def exchange_code(self, code: str) -> CredentialSet:
        """Exchange an authorization code for a credential set.

        Does not touch any token store; the caller stores the result.

        Args:
            code: Authorization code from the OAuth callback.

        Returns:
            The new credential set.

        Raises:
            ConfigurationError: If OAuth is not configured.
            UpstreamError: If Google rejects the code or cannot be reached.
        """
        self._require_configured()

        flow = Flow.from_client_config(
            self._get_client_config(),
            scopes=self._scopes,
            redirect_uri=self._redirect_uri,
        )

        try:
            flow.fetch_token(code=code)
            credentials = credential_set_from_google(flow.credentials, self._scopes)
        except Exception as e:
            logger.error("Failed to exchange authorization code: %s", e)
            raise UpstreamError(
                "Failed to exchange authorization code",
                cause=e,
                details={"error_type": type(e).__name__},
            ) from e

        logger.info("Successfully exchanged authorization code for tokens")
        return credentials

    def get_credentials(self, credentials: CredentialSet) -> Credentials:
        """Build google-auth credentials for an API client.

        The client ID and secret are included so the Google transport can
        refresh an expired access token on its own.
        """
        expiry: datetime | None = credentials.expiry
        if expiry is not None and expiry.tzinfo is not None:
            # google-auth compares against naive UTC timestamps
            expiry = expiry.astimezone(UTC).replace(tzinfo=None)

        return Credentials(  # type: ignore[no-untyped-call]
            token=credentials.access_token,
            refresh_token=credentials.refresh_token,
            token_uri=GOOGLE_TOKEN_URI,
            client_id=self._client_id,
            client_secret=self._client_secret,
            scopes=sorted(credentials.scopes) or self._scopes,
            expiry=expiry,
        )


__all__ = [
    "AuthorizationRequest",
    "OAuthManager",
    "credential_set_from_google",
    "GMAIL_SCOPES",
    "GOOGLE_AUTH_URI",
    "GOOGLE_TOKEN_URI",
]
