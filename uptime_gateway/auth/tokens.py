from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

TOKEN_SUBJECT = "site-visitor"


class TokenVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> bool:
        raise NotImplementedError


class JwtTokenService(TokenVerifier):
    """Signs and verifies login tokens with the site secret key."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def create_token(self, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {"sub": TOKEN_SUBJECT, "iat": issued_at, "exp": issued_at + self.ttl}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> bool:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info(f"Rejected auth token: {exc}")
            return False
        return payload.get("sub") == TOKEN_SUBJECT
