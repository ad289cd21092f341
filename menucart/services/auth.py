"""Credential exchange against the restaurant login endpoint"""

import logging
from typing import Optional

from ..core.session import SessionToken, TokenStore
from ..models.auth import LoginResult
from .restaurant_client import RestaurantClient

logger = logging.getLogger(__name__)


class Authenticator:
    """
    Signs a user in and keeps the resulting token.

    A rejected login leaves the token store untouched and keeps the server's
    error message for display.
    """

    def __init__(self, client: RestaurantClient, token_store: TokenStore):
        self.client = client
        self.token_store = token_store
        self.error_msg: Optional[str] = None

    @property
    def token(self) -> Optional[SessionToken]:
        return self.token_store.get()

    @property
    def is_authenticated(self) -> bool:
        return self.token_store.is_authenticated()

    async def login(self, username: str, password: str) -> LoginResult:
        result = await self.client.login(username, password)

        if result.success and result.jwt_token:
            self.token_store.save(result.jwt_token)
            self.error_msg = None
            logger.info(f"User {username} signed in")
        else:
            self.error_msg = result.error_msg

        return result

    def logout(self) -> None:
        self.token_store.clear()
        self.error_msg = None
