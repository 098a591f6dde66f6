"""Bearer-token identity for the admin API.

The identity provider is consumed as ``current_user_id() -> str | None``:
the ``sub`` claim of an HS256 token signed with ``AUTH_SECRET``. Anything
missing or unverifiable resolves to ``None``; handlers decide whether that
is an ``Unauthorized``.
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from .errors import Unauthorized

load_dotenv()

AUTH_ALGORITHM = os.getenv("AUTH_ALGORITHM", "HS256")
ACCESS_TOKEN_MINUTES = int(os.getenv("ACCESS_TOKEN_MINUTES", "60"))

bearer_scheme = HTTPBearer(auto_error=False)


def _secret() -> str:
    secret = os.getenv("AUTH_SECRET")
    if not secret:
        raise RuntimeError("AUTH_SECRET environment variable not set.")
    return secret


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or ACCESS_TOKEN_MINUTES)
    return jwt.encode({"sub": user_id, "exp": expire}, _secret(), algorithm=AUTH_ALGORITHM)


def decode_user_id(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, _secret(), algorithms=[AUTH_ALGORITHM])
    except JWTError as e:
        logging.info(f"Rejected bearer token: {e}")
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


def current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return decode_user_id(credentials.credentials)


def require_user_id(user_id: Optional[str] = Depends(current_user_id)) -> str:
    if not user_id:
        raise Unauthorized()
    return user_id
