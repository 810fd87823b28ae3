"""
Password hashing, access tokens and Basic credential parsing.

Passwords are stored as bcrypt hashes. Sessions are stateless HS256 JWTs
carrying the user id and role; the role in a token is a hint only, callers
re-read the account before trusting it.
"""

from __future__ import annotations

import base64
import binascii
import time
from typing import Any

import bcrypt
import jwt

from core import config

TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Development fallback; deployments must set JWT_SECRET.
    return config.env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return config.env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return config.env_int("ACCESS_TOKEN_EXPIRE_MIN", 720)


def basic_auth_allowed() -> bool:
    return config.env_bool("AUTH_ALLOW_BASIC", True)


def now_epoch_s() -> int:
    return int(time.time())


def _utf8(value: str | None) -> bytes:
    return (value or "").encode("utf-8")


def hash_password(plain_password: str) -> str:
    secret = _utf8(plain_password)
    if not secret:
        raise AuthSecurityError("Cannot hash an empty password.")
    return bcrypt.hashpw(secret, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    secret, stored = _utf8(plain_password), _utf8(password_hash)
    if not (secret and stored):
        return False
    try:
        return bcrypt.checkpw(secret, stored)
    except ValueError:
        # Not a bcrypt hash (e.g. a legacy plaintext column).
        return False


def build_access_token(*, user_id: int, username: str, role: str) -> str:
    issued_at = now_epoch_s()
    claims = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + access_token_expire_minutes() * 60,
    }
    return jwt.encode(claims, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.
    """
    token = (token or "").strip()
    if not token:
        raise AuthSecurityError("Missing access token.")

    try:
        claims = jwt.decode(token, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Access token rejected.") from exc

    if str(claims.get("type") or "").lower() != TOKEN_TYPE:
        raise AuthSecurityError("Wrong token type.")
    return claims


def decode_basic_credentials(encoded: str) -> tuple[str, str]:
    """
    Decode the payload of `Authorization: Basic <base64(username:password)>`.
    """
    try:
        decoded = base64.b64decode((encoded or "").strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthSecurityError("Invalid basic credentials.") from exc

    username, sep, password = decoded.partition(":")
    if not sep or not username:
        raise AuthSecurityError("Invalid basic credentials.")
    return username, password
