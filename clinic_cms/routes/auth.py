"""
Admin sign-up, login and user management.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from clinic_cms.auth import (
    USERS,
    authenticate,
    bearer_scheme,
    create_access_token,
    create_user,
    public_user,
    require_admin,
    resolve_user,
)
from clinic_cms.config import Settings, get_settings
from clinic_cms.content import (
    item_response,
    list_response,
    message_response,
    require_found,
    serialize,
)
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client
from clinic_cms.errors import APIError
from clinic_cms.schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
users_router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_admin)]
)


def _token_response(user: dict, settings: Settings) -> dict:
    return {
        "success": True,
        "token": create_access_token(str(user["_id"]), settings),
        "user": serialize(public_user(user)),
    }


@router.post("/register", status_code=201)
def register(
    payload: RegisterRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    """
    The first account can be created without a token; after that only an
    existing admin may add accounts.
    """
    if db.count(USERS) > 0:
        resolve_user(credentials, db, settings)

    if db.find_one(USERS, {"email": payload.email}) or db.find_one(
        USERS, {"username": payload.username}
    ):
        raise APIError(400, "User already exists")

    user = create_user(
        db, username=payload.username, email=payload.email, password=payload.password
    )
    return _token_response(user, settings)


@router.post("/login")
def login(
    payload: LoginRequest,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    user = authenticate(db, payload.email, payload.password)
    if user is None:
        logger.warning("Failed login for %s", payload.email)
        raise APIError(401, "Invalid credentials")
    return _token_response(user, settings)


@router.get("/me")
def me(user: dict = Depends(require_admin)):
    return item_response(user)


@users_router.get("")
def list_users(db: DbClient = Depends(get_db_client)):
    return list_response([public_user(user) for user in db.find(USERS)])


@users_router.get("/{user_id}")
def get_user(user_id: str, db: DbClient = Depends(get_db_client)):
    user = require_found(db.get(USERS, user_id), "User not found")
    return item_response(public_user(user))


@users_router.delete("/{user_id}")
def delete_user(
    user_id: str,
    current: dict = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    require_found(db.get(USERS, user_id), "User not found")
    if str(current["_id"]) == user_id:
        raise APIError(400, "You cannot delete your own account")
    db.delete(USERS, user_id)
    return message_response("User deleted successfully")
