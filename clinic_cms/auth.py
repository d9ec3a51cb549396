"""
Admin authentication: bcrypt password hashes and HS256 JWT bearer tokens.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from clinic_cms.config import Settings, get_settings
from clinic_cms.db import DbClient, utc_now
from clinic_cms.dependencies import get_db_client
from clinic_cms.errors import APIError

logger = logging.getLogger(__name__)

USERS = "users"
JWT_ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False, description="Admin JWT")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def _secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise APIError(500, "JWT_SECRET is not configured")
    return settings.jwt_secret


def create_access_token(user_id: str, settings: Settings) -> str:
    now = utc_now()
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expire_seconds),
    }
    return jwt.encode(payload, _secret(settings), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, _secret(settings), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise APIError(401, "Token is not valid") from exc


def public_user(user: dict) -> dict:
    """User document without its password hash."""
    return {key: value for key, value in user.items() if key != "password"}


def create_user(db: DbClient, *, username: str, email: str, password: str) -> dict:
    user = db.insert(
        USERS,
        {
            "username": username,
            "email": email,
            "password": hash_password(password),
            "role": "admin",
            "isActive": True,
        },
    )
    logger.info("Created admin user %s", email)
    return user


def authenticate(db: DbClient, email: str, password: str) -> Optional[dict]:
    user = db.find_one(USERS, {"email": email})
    if not user or not user.get("isActive", True):
        return None
    if not verify_password(password, user.get("password")):
        return None
    return user


def bootstrap_admin(db: DbClient, settings: Settings) -> Optional[dict]:
    """Create the configured admin account when the users collection is empty."""
    if not (settings.admin_email and settings.admin_password):
        return None
    if db.count(USERS) > 0:
        return None
    return create_user(
        db,
        username=settings.admin_username,
        email=settings.admin_email.strip().lower(),
        password=settings.admin_password,
    )


def resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: DbClient,
    settings: Settings,
) -> dict:
    if credentials is None or not credentials.credentials:
        raise APIError(401, "No token, authorization denied")
    payload = decode_access_token(credentials.credentials, settings)
    user = db.get(USERS, str(payload.get("id", "")))
    if not user or not user.get("isActive", True):
        raise APIError(401, "Token is not valid")
    return public_user(user)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """FastAPI dependency guarding every mutating content route."""
    return resolve_user(credentials, db, settings)
