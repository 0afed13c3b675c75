import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from .config import Settings
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

_UNIT_MILLISECONDS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}
DEFAULT_DURATION_MS = 24 * 60 * 60 * 1000


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Hash not recognised by any configured scheme
        logger.warning("Stored password hash has an unknown format")
        return False


def parse_duration(text: str) -> int:
    """
    Convert a duration string such as "30m" or "7d" into milliseconds.

    Accepted units are s, m, h and d. An empty string, an unknown unit or a
    prefix that is not a plain non-negative integer yields the 24 hour default.
    """
    if not text:
        return DEFAULT_DURATION_MS

    unit, value = text[-1], text[:-1]
    if unit not in _UNIT_MILLISECONDS:
        return DEFAULT_DURATION_MS

    if not (value.isascii() and value.isdigit()):
        logger.warning("Invalid duration %r, falling back to 24h", text)
        return DEFAULT_DURATION_MS

    return int(value) * _UNIT_MILLISECONDS[unit]


def isoformat_z(moment: datetime) -> str:
    """Render an aware datetime as ISO 8601 UTC with millisecond precision."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: str
    expires_at: datetime
    refresh_expires_in: str
    refresh_expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "token": self.access_token,
            "refreshToken": self.refresh_token,
            "expiresIn": self.expires_in,
            "expiresAt": isoformat_z(self.expires_at),
            "refreshExpiresIn": self.refresh_expires_in,
            "refreshExpiresAt": isoformat_z(self.refresh_expires_at),
        }


@dataclass
class TokenCheck:
    """Outcome of inspecting a token: a payload, or the reason it was rejected."""

    payload: Optional[TokenPayload] = None
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


class TokenService:
    """Issues and verifies signed access and refresh tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_expires_in: str = "24h",
        refresh_expires_in: str = "7d",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.access_expires_in = access_expires_in
        self.refresh_expires_in = refresh_expires_in
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], datetime] = utc_now) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            access_expires_in=settings.JWT_EXPIRES_IN,
            refresh_expires_in=settings.REFRESH_TOKEN_EXPIRES_IN,
            clock=clock,
        )

    def _now(self) -> datetime:
        # exp is stored in whole seconds, so issue from a whole-second instant
        return self._clock().replace(microsecond=0)

    def _encode(self, payload: TokenPayload, token_type: str, issued_at: datetime, expires_in: str) -> tuple[str, datetime]:
        expires_at = issued_at + timedelta(milliseconds=parse_duration(expires_in))
        claims = payload.claims()
        claims.update(
            type=token_type,
            iat=int(issued_at.timestamp()),
            exp=int(expires_at.timestamp()),
        )
        return jwt.encode(claims, self.secret, algorithm=self.algorithm), expires_at

    def issue_access_token(self, payload: TokenPayload) -> str:
        token, _ = self._encode(payload, ACCESS_TOKEN, self._now(), self.access_expires_in)
        return token

    def issue_refresh_token(self, payload: TokenPayload) -> str:
        token, _ = self._encode(payload, REFRESH_TOKEN, self._now(), self.refresh_expires_in)
        return token

    def issue_pair(self, payload: TokenPayload) -> TokenPair:
        now = self._now()
        access_token, expires_at = self._encode(payload, ACCESS_TOKEN, now, self.access_expires_in)
        refresh_token, refresh_expires_at = self._encode(payload, REFRESH_TOKEN, now, self.refresh_expires_in)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.access_expires_in,
            expires_at=expires_at,
            refresh_expires_in=self.refresh_expires_in,
            refresh_expires_at=refresh_expires_at,
        )

    def inspect(self, token: str, token_type: Optional[str] = None) -> TokenCheck:
        """
        Decode a token without raising.

        Returns a TokenCheck whose failure is one of "malformed",
        "invalid_signature", "expired" or "wrong_type" when the token is rejected.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp", "iat"]},
            )
        except jwt.InvalidSignatureError:
            return TokenCheck(failure="invalid_signature")
        except jwt.InvalidTokenError:
            return TokenCheck(failure="malformed")

        # Expiry is checked against our clock rather than PyJWT's
        if self._clock().timestamp() >= claims["exp"]:
            return TokenCheck(failure="expired")

        if token_type is not None and claims.get("type") != token_type:
            return TokenCheck(failure="wrong_type")

        try:
            payload = TokenPayload.model_validate(claims)
        except ValidationError:
            return TokenCheck(failure="malformed")
        return TokenCheck(payload=payload)

    def verify(self, token: str, token_type: Optional[str] = ACCESS_TOKEN) -> Optional[TokenPayload]:
        """Verify and decode a token, returning None when it is rejected."""
        check = self.inspect(token, token_type)
        if not check.ok:
            logger.info("Token rejected: %s", check.failure)
        return check.payload
