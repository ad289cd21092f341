"""Credential exchange models"""

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Username and password submitted by the login form"""
    username: str
    password: str


class LoginResult(BaseModel):
    """Outcome of a credential exchange"""
    success: bool
    status_code: int
    jwt_token: Optional[str] = None
    error_msg: Optional[str] = None


class LoginResponse(BaseModel):
    """Login API response"""
    success: bool
    redirect_to: Optional[str] = None
    error_msg: Optional[str] = None
