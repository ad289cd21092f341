"""Login and logout routes"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.session import session_manager, TokenStore
from ..models.auth import LoginRequest, LoginResponse
from ..services.auth import Authenticator
from ..services.restaurant_client import RestaurantClient, AuthenticationError
from .dependencies import get_restaurant_client, get_current_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    client: RestaurantClient = Depends(get_restaurant_client),
):
    """
    Exchange credentials for a session token.

    On success the token is stored in a cookie and the caller is sent to the
    menu. On failure the server's error message is returned with its status
    and the existing cookie is left alone.
    """
    if get_current_session(http_request) is not None:
        return LoginResponse(success=True, redirect_to="/")

    authenticator = Authenticator(client, TokenStore(settings.token_expiry_days))
    try:
        result = await authenticator.login(request.username, request.password)
    except AuthenticationError as e:
        logger.error(f"Login failed: {e}")
        raise HTTPException(status_code=502, detail="Something went wrong")

    token = authenticator.token
    if not result.success or token is None:
        return JSONResponse(
            status_code=result.status_code,
            content=LoginResponse(success=False, error_msg=authenticator.error_msg).model_dump(),
        )

    session_manager.cleanup_expired_sessions()
    session_manager.start_session(authenticator.token_store)

    response = JSONResponse(content=LoginResponse(success=True, redirect_to="/").model_dump())
    response.set_cookie(
        key=settings.token_cookie_name,
        value=token.value,
        max_age=settings.token_max_age_seconds,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout", response_model=LoginResponse)
async def logout(http_request: Request):
    """Clear the session token and drop the session state"""
    session = get_current_session(http_request)
    if session is not None:
        session.token_store.clear()
        session_manager.delete_session(session.session_id)

    response = JSONResponse(content=LoginResponse(success=True, redirect_to="/login").model_dump())
    response.delete_cookie(settings.token_cookie_name)
    return response


@router.get("/status")
async def get_auth_status(http_request: Request):
    """Check whether the request carries a valid session token"""
    return {"authenticated": get_current_session(http_request) is not None}
