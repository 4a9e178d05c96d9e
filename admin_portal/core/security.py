# admin_portal/core/security.py
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt, JWTError

from admin_portal.core.config import Settings, get_settings
from admin_portal.core.errors import Unauthorized

CODE_MIN = 100000
CODE_MAX = 999999

# bcrypt ignores everything past 72 bytes
_BCRYPT_MAX_BYTES = 72


def _pwd_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def get_password_hash(password: str, settings: Settings | None = None) -> str:
    """Salted bcrypt hash, cost factor from BCRYPT_ROUNDS."""
    settings = settings or get_settings()
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_pwd_bytes(password), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return False for an empty or malformed hash instead of raising."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


def validate_new_password(password: str | None, settings: Settings | None = None) -> str:
    """
    Enforce the minimum password length.

    Raises:
        Unauthorized(401): if the password is missing or too short.
    """
    settings = settings or get_settings()
    if not password or len(password) < settings.MIN_PASSWORD_LENGTH:
        raise Unauthorized(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    return password


def generate_otp_code() -> str:
    """Six-digit code, uniform in [100000, 999999], from the OS CSPRNG."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def create_token(
    subject_id: uuid.UUID,
    email: str,
    role: str,
    group_id: uuid.UUID | None,
    issued_at: datetime,
    expires_delta: timedelta,
    settings: Settings | None = None,
) -> str:
    """
    Mint a signed session token.

    Claims:
      - sub: user id
      - email, role, group_id
      - iat / exp: issue and expiry time
    """
    settings = settings or get_settings()
    payload = {
        "sub": str(subject_id),
        "email": email,
        "role": role,
        "group_id": str(group_id) if group_id else None,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """
    Decode and verify a session token (signature + exp).

    Raises:
        Unauthorized(401): if the token is invalid or expired.
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise Unauthorized("Invalid or expired token")
