import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from visacenter.config import Settings
from visacenter.dependencies import get_admin_repository, get_settings, get_token_repository
from visacenter.errors import NotAuthenticated
from visacenter.repositories import AdminRepository, TokenRepository

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# auto_error=False: a missing header is "no session", handled below
security = HTTPBearer(auto_error=False)


def create_access_token(settings: Settings, admin: dict):
    """Sign a token for ``admin``; returns the token, its id and its expiry."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    jti = uuid.uuid4().hex
    to_encode = {
        "sub": admin["username"],
        "uid": admin["id"],
        "role": admin["role"],
        "jti": jti,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt, jti, expire


async def resolve_admin(
    token: Optional[str],
    settings: Settings,
    admins: AdminRepository,
    tokens: TokenRepository,
) -> Optional[dict]:
    """Admin behind ``token``, or None when there is no valid admin session.

    Malformed, expired and revoked tokens all count as "no session".
    """
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.info("Rejected admin token: %s", e)
        return None

    username = payload.get("sub")
    jti = payload.get("jti")
    if not username or not jti or payload.get("role") != ADMIN_ROLE:
        return None

    if await tokens.is_revoked(jti):
        return None

    admin = await admins.find_by_username(username)
    if admin is None or admin.get("role") != ADMIN_ROLE:
        return None

    return {
        "id": admin["id"],
        "username": admin["username"],
        "role": admin["role"],
        "jti": jti,
        "exp": datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    }


async def get_optional_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
    admins: AdminRepository = Depends(get_admin_repository),
    tokens: TokenRepository = Depends(get_token_repository),
) -> Optional[dict]:
    token = credentials.credentials if credentials else None
    return await resolve_admin(token, settings, admins, tokens)


async def require_admin(admin: Optional[dict] = Depends(get_optional_admin)) -> dict:
    """Guard for admin-only routes."""
    if admin is None:
        raise NotAuthenticated("Could not validate credentials")
    return admin
