# ========================================
# visacenter/routes/admin_auth.py - ADMIN LOGIN / LOGOUT / SESSION
# ========================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from visacenter.config import Settings
from visacenter.dependencies import get_admin_repository, get_settings, get_token_repository
from visacenter.repositories import AdminRepository, TokenRepository
from visacenter.schemas.admin import AdminLogin, LoginResponse, LogoutResponse, SessionResponse
from visacenter.utils.auth import ADMIN_ROLE, create_access_token, get_optional_admin, require_admin
from visacenter.utils.security import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Auth"])


def public_admin(admin: dict) -> dict:
    return {"id": admin["id"], "username": admin["username"], "role": admin["role"]}


# ✅ 1. LOGIN
@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: AdminLogin,
    settings: Settings = Depends(get_settings),
    admins: AdminRepository = Depends(get_admin_repository),
):
    """Login and get a bearer token carrying the admin role."""

    admin = await admins.find_by_username(credentials.username)
    if not admin or admin.get("role") != ADMIN_ROLE:
        logger.warning("Failed admin login for '%s'", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not verify_password(credentials.password, admin["password"]):
        logger.warning("Failed admin login for '%s'", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token, _, _ = create_access_token(settings, admin)
    logger.info("Admin '%s' logged in", admin["username"])

    return {
        "success": True,
        "access_token": access_token,
        "token_type": "bearer",
        "admin": public_admin(admin),
    }


# ✅ 2. LOGOUT
@router.post("/logout", response_model=LogoutResponse)
async def logout(
    admin: dict = Depends(require_admin),
    tokens: TokenRepository = Depends(get_token_repository),
):
    await tokens.revoke(admin["jti"], admin["exp"])
    logger.info("Admin '%s' logged out", admin["username"])
    return {"success": True}


# ✅ 3. RESTORE SESSION
@router.get("/session", response_model=SessionResponse)
async def get_session(admin: Optional[dict] = Depends(get_optional_admin)):
    """Whether the caller's token is a live admin session. Never fails on a bad token."""

    if admin is None:
        return {"is_authenticated": False, "admin": None}
    return {"is_authenticated": True, "admin": public_admin(admin)}
