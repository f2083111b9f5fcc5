"""Stateless session tokens.

Tokens are HS256 JWTs carrying ``{userId, iat, exp}``. Verification never
raises: anything malformed, tampered, expired or carrying the wrong claim
types yields ``None`` so callers can map it to a single 401.
"""

import binascii
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from jwt.utils import base64url_decode, base64url_encode

from storefront.config import AuthConfig
from storefront.logging_config import get_logger

logger = get_logger(__name__)

USER_ID_CLAIM = "userId"


@dataclass(frozen=True)
class TokenPayload:
    """Claims of a verified token."""

    user_id: UUID
    issued_at: datetime
    expires_at: datetime


def _has_canonical_signature(token: str) -> bool:
    """Reject signatures that decode fine but are not in canonical form.

    The last base64url character of a 32-byte signature carries spare bits,
    so several spellings decode to the same bytes. Re-encoding must give back
    exactly what was sent, otherwise a one-character edit could still verify.
    """
    signature = token.rsplit(".", 1)[-1]
    try:
        decoded = base64url_decode(signature.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError):
        return False
    return base64url_encode(decoded).decode("ascii") == signature


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_config(cls, config: AuthConfig) -> "TokenService":
        return cls(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            ttl=timedelta(days=config.token_ttl_days),
        )

    def issue(self, user_id: UUID, now: Optional[datetime] = None) -> str:
        """Sign a token for user_id, valid for the configured window."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            USER_ID_CLAIM: str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: object) -> Optional[TokenPayload]:
        """Return the token's payload, or None if it must not be trusted."""
        if not isinstance(token, str) or token.count(".") != 2:
            return None
        if not _has_canonical_signature(token):
            logger.info("Rejected token with non-canonical signature")
            return None

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", USER_ID_CLAIM]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except jwt.PyJWTError as e:
            logger.info(f"Rejected invalid token: {type(e).__name__}")
            return None

        raw_user_id = claims.get(USER_ID_CLAIM)
        if not isinstance(raw_user_id, str):
            return None
        try:
            user_id = UUID(raw_user_id)
        except ValueError:
            return None

        iat, exp = claims.get("iat"), claims.get("exp")
        if not isinstance(iat, (int, float)) or not isinstance(exp, (int, float)):
            return None

        return TokenPayload(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(iat, timezone.utc),
            expires_at=datetime.fromtimestamp(exp, timezone.utc),
        )
