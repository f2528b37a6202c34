# ========================================
# visacenter/schemas/admin.py
# ========================================

from pydantic import BaseModel
from typing import Optional


# 1. Input: Login form
class AdminLogin(BaseModel):
    username: str
    password: str


# 2. Output: Admin identity attached to a session
class AdminUser(BaseModel):
    id: str
    username: str
    role: str


# 3. Output: Successful login
class LoginResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    admin: AdminUser


# 4. Output: Session restoration
class SessionResponse(BaseModel):
    is_authenticated: bool
    admin: Optional[AdminUser] = None


class LogoutResponse(BaseModel):
    success: bool = True
