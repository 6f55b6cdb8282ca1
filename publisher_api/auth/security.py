"""
Auth security helpers (JWT access tokens).

Token issuance belongs to an external identity service; `build_access_token`
exists for operators and tests that need a token signed with the same secret.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from publisher_api.core import config


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(
    *,
    user_id: int,
    email: str,
    is_active: bool = True,
    expires_in_s: int | None = None,
) -> str:
    issued_at = now_epoch_s()
    if expires_in_s is None:
        expires_in_s = config.access_token_expire_minutes() * 60

    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "is_active": is_active,
        "iat": issued_at,
        "exp": issued_at + expires_in_s,
    }
    return jwt.encode(payload, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, config.jwt_secret(), algorithms=[config.jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthSecurityError("Invalid access token subject.")

    return payload
