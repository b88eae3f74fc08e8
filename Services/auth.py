# Services/auth.py
"""Bearer-token auth: issuing a JWT at login and checking it on protected routes."""
import hmac
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import AUTH_PASSWORD, AUTH_USERNAME, JWT_ALGORITHM, JWT_EXPIRE, JWT_SECRET
from errors import Unauthorized

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)

_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expiry(value: str) -> timedelta:
    """Turn a duration such as "1h", "30m" or "3600" into a timedelta."""
    match = re.fullmatch(r"\s*(\d+)\s*([smhd]?)\s*", value or "")
    if not match:
        raise ValueError(f"Invalid token expiry: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNITS[unit or "s"])


def check_credentials(username: Optional[str], password: Optional[str]) -> bool:
    if not username or not password:
        return False
    return (hmac.compare_digest(username, AUTH_USERNAME)
            and hmac.compare_digest(password, AUTH_PASSWORD))


def issue_token(username: str, secret: str = JWT_SECRET, expires_in: str = JWT_EXPIRE) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "username": username,
        "iat": now,
        "exp": now + parse_expiry(expires_in),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str = JWT_SECRET) -> dict:
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise Unauthorized("Authentication failed. Please provide a valid token", errors=str(e))


def require_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> dict:
    """FastAPI dependency guarding the inventory and customer routers."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access Denied. No token provided")
    return verify_token(credentials.credentials)
