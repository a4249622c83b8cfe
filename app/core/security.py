"""Security related functions.

Password hashing and access-token handling. The rest of the application
only consumes the verified ``{"user_id": ...}`` principal returned by
:meth:`TokenVerifier.verify`.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from app.core.config import settings
from app.exceptions.base import AuthenticationError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: int, username: str, expires_delta: timedelta | None = None) -> str:
    """Issue a signed access token for a user."""
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "username": username, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


class TokenVerifier:
    """
    Resolves an opaque bearer credential into a trusted principal.

    :ivar secret_key: The key used to verify token signatures.
    :type secret_key: str
    :ivar algorithm: The signing algorithm accepted.
    :type algorithm: str
    """

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None):
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm

    def verify(self, token: str) -> dict[str, Any]:
        """
        Verifies the signature and expiry of a token and returns the principal.

        :param token: The encoded JWT presented by the client.
        :return: ``{"user_id": int, "username": str}`` for a valid token.
        :raises AuthenticationError: If the token is expired, malformed or forged.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise AuthenticationError("Authentication token has expired") from e
        except InvalidTokenError as e:
            raise AuthenticationError("Invalid authentication token") from e

        subject = payload.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError) as e:
            raise AuthenticationError("Invalid token payload - missing user ID") from e

        return {"user_id": user_id, "username": payload.get("username")}
