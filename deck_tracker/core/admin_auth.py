"""
deck_tracker/core/admin_auth.py
Admin credential checks.

The service has one configured secret (ADMIN_SECRET). Two credentials are
accepted on admin endpoints:

- a session token issued by login(), sent back in the `admin_token` cookie.
  Tokens are itsdangerous URL-safe timed signatures keyed by the secret; each
  login signs a fresh random nonce and the token stops verifying once it is
  older than the configured TTL.
- the raw secret itself in the `X-Admin-Secret` header (scripts, curl).

Nothing is stored server-side; logout only clears the cookie, so a copied
token stays valid until it expires. Rotating ADMIN_SECRET invalidates every
token at once.
"""

import hmac
import logging
import secrets
import time
from typing import Optional

from fastapi import Depends, Request
from itsdangerous import BadData, TimestampSigner, URLSafeTimedSerializer

from deck_tracker.core.config import Settings, get_settings
from deck_tracker.core.errors import AuthorizationError, ConfigurationError

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = "admin_token"
ADMIN_SECRET_HEADER = "X-Admin-Secret"
ADMIN_TOKEN_SALT = "deck-tracker-admin-session"


class ClockedTimestampSigner(TimestampSigner):
    """TimestampSigner reading time from an injectable clock."""

    def __init__(self, *args, clock=time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self._clock = clock

    def get_timestamp(self) -> int:
        return int(self._clock())


class AdminSessionAuthenticator:
    """Issues and verifies admin possession credentials for one configured secret."""

    def __init__(self, settings: Settings, clock=time.time):
        self._secret = settings.admin_secret
        self._ttl = settings.admin_token_ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def ensure_configured(self) -> None:
        self._require_secret()

    def _require_secret(self) -> bytes:
        if not self._secret:
            raise ConfigurationError("Admin access is not configured (ADMIN_SECRET is not set).")
        return self._secret.encode("utf-8")

    def _serializer(self) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(
            self._require_secret(),
            salt=ADMIN_TOKEN_SALT,
            signer=ClockedTimestampSigner,
            signer_kwargs={"clock": self._clock},
        )

    def issue_token(self) -> str:
        return self._serializer().dumps({"nonce": secrets.token_hex(16)})

    def login(self, password: Optional[str]) -> str:
        """Exchange the admin secret for a session token."""
        key = self._require_secret()
        if not password or not hmac.compare_digest(password.encode("utf-8"), key):
            logger.warning("Rejected admin login attempt")
            raise AuthorizationError("Invalid password.")
        logger.info("Admin logged in")
        return self.issue_token()

    def _token_valid(self, token: str) -> bool:
        try:
            self._serializer().loads(token, max_age=self._ttl)
        except BadData:
            # BadSignature, SignatureExpired and malformed payloads
            return False
        return True

    def verify(self, credential: Optional[str]) -> bool:
        """True for a valid, unexpired session token or the raw secret."""
        key = self._require_secret()
        if not credential:
            return False
        if hmac.compare_digest(credential.encode("utf-8"), key):
            return True
        return self._token_valid(credential)


def get_authenticator(settings: Settings = Depends(get_settings)) -> AdminSessionAuthenticator:
    return AdminSessionAuthenticator(settings)


def require_admin(
    request: Request,
    authenticator: AdminSessionAuthenticator = Depends(get_authenticator),
) -> None:
    """Dependency guarding every admin mutation/listing endpoint."""
    authenticator.ensure_configured()
    for credential in (request.cookies.get(ADMIN_COOKIE_NAME), request.headers.get(ADMIN_SECRET_HEADER)):
        if credential and authenticator.verify(credential):
            return
    raise AuthorizationError("Admin authentication required.")
