"""Bearer credentials and password hashing.

``AccessVerifier`` is the only place tokens are minted or checked. A
verified token yields an ``Identity``; anything else raises
``AuthenticationError``.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from eventhub.config import settings
from eventhub.errors import AuthenticationError
from eventhub.models.user import Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Who is acting: the token subject, its email and role."""

    subject: str
    email: str
    role: Role


class AccessVerifier:
    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        """Mint a signed token for ``user``."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": user.id,
            "email": user.email,
            "role": Role(user.role).value,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise AuthenticationError("Invalid token")

        try:
            role = Role(claims.get("role"))
        except ValueError:
            raise AuthenticationError("Invalid token")
        return Identity(subject=str(claims["sub"]), email=claims.get("email", ""), role=role)


def default_verifier() -> AccessVerifier:
    return AccessVerifier(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(days=settings.TOKEN_TTL_DAYS),
    )


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        return False
