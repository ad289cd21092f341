"""Shared route dependencies"""

from typing import Optional

from fastapi import Request, HTTPException

from ..core.config import settings
from ..core.session import session_manager, ClientSession
from ..services.restaurant_client import RestaurantClient

# Initialized lazily, closed on app shutdown
restaurant_client: Optional[RestaurantClient] = None


def get_restaurant_client() -> RestaurantClient:
    """Get or create restaurant client"""
    global restaurant_client
    if restaurant_client is None:
        restaurant_client = RestaurantClient(
            menu_url=settings.menu_url,
            login_url=settings.login_url,
            timeout=settings.http_timeout,
        )
    return restaurant_client


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, if present"""
    return request.cookies.get(settings.token_cookie_name) or None


def get_current_session(request: Request) -> Optional[ClientSession]:
    """Session for the request's token, or None when missing or expired"""
    token = get_session_token(request)
    if token is None:
        return None
    return session_manager.get_active_session(token)


def require_session(request: Request) -> ClientSession:
    """
    Gate for the menu and cart views.

    Requests without a session token, or whose token is unknown or
    expired, are sent to the login form.
    """
    token = get_session_token(request)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail="Login required",
            headers={"Location": "/login"},
        )
    session = session_manager.get_active_session(token)
    if session is None:
        raise HTTPException(
            status_code=401,
            detail="Session expired",
            headers={"Location": "/login"},
        )
    session.touch()
    return session
