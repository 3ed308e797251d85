"""Pytest configuration and fixtures for Gmail GPT server tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from gmail_gpt.auth.oauth import GMAIL_SCOPES, OAuthManager
from gmail_gpt.auth.storage import TokenStore
from gmail_gpt.auth.tokens import CredentialSet
from gmail_gpt.middleware.audit_logger import audit_logger
from gmail_gpt.tools.base import ServiceContext

OAUTH_ENV_VARS = [
    "GOOGLE_CLIENT_ID",
    "CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "REDIRECT_URI",
]


@pytest.fixture(autouse=True)
def quiet_audit_log(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep audit JSON lines out of test output."""
    monkeypatch.setattr(audit_logger, "_enabled", False)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove OAuth settings from the environment."""
    for name in OAUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_credentials() -> dict[str, str]:
    """Fixture providing mock Google OAuth client settings."""
    return {
        "client_id": "test-client-id.apps.googleusercontent.com",
        "client_secret": "test-client-secret",
        "redirect_uri": "http://localhost:3000/oauth2callback",
    }


@pytest.fixture
def oauth_manager(mock_credentials: dict[str, str]) -> OAuthManager:
    """A fully configured OAuth manager."""
    return OAuthManager(**mock_credentials)


@pytest.fixture
def credential_set() -> CredentialSet:
    """A valid credential set with an hour left."""
    return CredentialSet(
        access_token="tok1",
        refresh_token="refresh-1",
        expiry=datetime.now(UTC) + timedelta(hours=1),
        scopes=frozenset(GMAIL_SCOPES),
    )


@pytest.fixture
def token_store() -> TokenStore:
    """A fresh, empty token store."""
    return TokenStore()


@pytest.fixture
def ctx(oauth_manager: OAuthManager, token_store: TokenStore) -> ServiceContext:
    """Service context with an empty store."""
    return ServiceContext(oauth_manager=oauth_manager, token_store=token_store)


@pytest.fixture
def authed_ctx(ctx: ServiceContext, credential_set: CredentialSet) -> ServiceContext:
    """Service context holding credentials."""
    ctx.token_store.set(credential_set)
    return ctx


@pytest.fixture
def mock_gmail_service(mocker) -> MagicMock:
    """Mocked Gmail API service."""
    return mocker.MagicMock()


@pytest.fixture
def mock_build(mock_gmail_service: MagicMock):
    """Patch googleapiclient's build() used by GmailClient."""
    with patch("gmail_gpt.gmail.client.build") as mock:
        mock.return_value = mock_gmail_service
        yield mock


@pytest.fixture
def sample_email() -> dict[str, Any]:
    """Fixture providing sample email data for testing."""
    return {
        "id": "18abc123def",
        "threadId": "18abc123def",
        "labelIds": ["INBOX", "UNREAD"],
        "snippet": "This is a test email snippet...",
        "payload": {
            "headers": [
                {"name": "From", "value": "sender@example.com"},
                {"name": "To", "value": "recipient@example.com"},
                {"name": "Subject", "value": "Test Email Subject"},
                {"name": "Date", "value": "Mon, 20 Jan 2026 10:00:00 -0500"},
            ],
            "mimeType": "text/plain",
            "body": {
                "data": "VGhpcyBpcyB0aGUgZW1haWwgYm9keSBjb250ZW50Lg==",
            },
        },
    }


@pytest.fixture
def multipart_email() -> dict[str, Any]:
    """Message whose only text/plain part sits under multipart/alternative."""
    return {
        "id": "msg42",
        "threadId": "thread42",
        "snippet": "Hello there",
        "payload": {
            "mimeType": "multipart/mixed",
            "body": {"size": 0},
            "parts": [
                {
                    "mimeType": "multipart/alternative",
                    "body": {"size": 0},
                    "parts": [
                        {
                            "mimeType": "text/plain",
                            # "Hello there\n" in base64url without padding
                            "body": {"data": "SGVsbG8gdGhlcmUK"},
                        },
                        {
                            "mimeType": "text/html",
                            "body": {"data": "PHA-SGVsbG8gdGhlcmU8L3A-"},
                        },
                    ],
                },
                {
                    "mimeType": "application/pdf",
                    "filename": "invoice.pdf",
                    "body": {"attachmentId": "att1"},
                },
            ],
        },
    }


@pytest.fixture
def http_error():
    """Factory for googleapiclient HttpError with a given status."""

    def _make(status: int) -> HttpError:
        return HttpError(MagicMock(status=status, reason="Error"), b"")

    return _make
