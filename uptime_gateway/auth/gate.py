from __future__ import annotations

import hmac
import logging
from datetime import timedelta

from uptime_gateway.auth.tokens import JwtTokenService, TokenVerifier
from uptime_gateway.config.settings import Settings
from uptime_gateway.utils.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL = "Please log in first"
INVALID_CREDENTIAL = "Invalid or expired token"


class AuthGate:
    """Binary login check in front of the monitor data.

    The gate is open unless both a site password and a secret key are
    configured.
    """

    def __init__(self, settings: Settings, verifier: TokenVerifier | None = None):
        self.settings = settings
        self.tokens = JwtTokenService(
            settings.site_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.auth_token_ttl_days),
        )
        self.verifier = verifier or self.tokens

    @property
    def enabled(self) -> bool:
        return self.settings.auth_enabled

    def authorize(self, credential: str | None) -> Result[None]:
        if not self.enabled:
            return Ok(None)
        if not credential:
            return Err(ErrorKind.AUTH_REQUIRED, MISSING_CREDENTIAL)
        try:
            verified = self.verifier.verify(credential)
        except Exception as exc:
            logger.warning(f"Token verification failed: {exc}")
            verified = False
        if not verified:
            return Err(ErrorKind.AUTH_INVALID, INVALID_CREDENTIAL)
        return Ok(None)

    def issue_token(self, password: str) -> str | None:
        if not self.enabled:
            return None
        if not hmac.compare_digest(password.encode("utf-8"), self.settings.site_password.encode("utf-8")):
            return None
        return self.tokens.create_token()
