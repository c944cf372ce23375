"""
Password hashing and signed tokens.

Three token types share one signing key and are told apart by the ``type``
claim: ``access`` (API sessions), ``invite`` (employee onboarding),
``reset`` (password reset).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from reviewhub.core.config import settings

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _encode(data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({
        "type": token_type,
        "exp": datetime.now(timezone.utc) + expires_delta,
    })
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    return _encode(
        data, "access",
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )


def create_invite_token(data: Dict[str, Any]) -> str:
    return _encode(data, "invite", timedelta(hours=settings.invite_token_expire_hours))


def create_reset_token(email: str) -> str:
    return _encode({"sub": email}, "reset", timedelta(minutes=settings.reset_token_expire_minutes))


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode any token issued by this service.
    Returns the claims, ``{"error": "TOKEN_EXPIRED"}`` for an expired token,
    or None when the token is invalid.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except jwt.InvalidTokenError:
        return None
