"""
Restaurant API Client

HTTP client for the restaurant menu and login endpoints.
"""

import json
import logging
from typing import Optional, Any

import httpx

from ..models.auth import LoginResult
from ..models.menu import Restaurant, restaurant_from_payload

logger = logging.getLogger(__name__)


class RestaurantClientError(Exception):
    """Base exception for restaurant API errors"""
    pass


class CatalogError(RestaurantClientError):
    """Menu could not be fetched or parsed"""
    pass


class AuthenticationError(RestaurantClientError):
    """Credential exchange could not be completed"""
    pass


class RestaurantClient:
    """
    Client for the restaurant APIs.

    Both calls are single requests with no retry. Failures are reported to
    the caller, which decides how to surface them.
    """

    def __init__(
        self,
        menu_url: str,
        login_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize restaurant client.

        Args:
            menu_url: Catalog endpoint
            login_url: Credential exchange endpoint
            timeout: Request timeout in seconds
            http_client: Pre-built client, mainly for tests
        """
        self.menu_url = menu_url
        self.login_url = login_url
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        body: Optional[dict] = None,
    ) -> httpx.Response:
        """Send a request with a JSON body"""
        body_str = json.dumps(body) if body is not None else None
        headers = {"Accept": "application/json"}
        if body_str is not None:
            headers["Content-Type"] = "application/json"

        return await self._http_client.request(
            method=method,
            url=url,
            headers=headers,
            content=body_str,
        )

    # ==================== Menu ====================

    async def fetch_menu(self) -> Restaurant:
        """
        Fetch the restaurant catalog.

        Raises:
            CatalogError: request failed, non-success status, or bad payload
        """
        try:
            response = await self._request("GET", self.menu_url)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Menu request failed: {e.response.status_code} - {e.response.text}")
            raise CatalogError(f"Menu request failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Menu request error: {e}")
            raise CatalogError(f"Menu request error: {e}") from e
        except ValueError as e:
            raise CatalogError(f"Menu response is not JSON: {e}") from e

        try:
            restaurant = restaurant_from_payload(payload)
        except ValueError as e:
            logger.error(f"Menu payload rejected: {e}")
            raise CatalogError(f"Invalid menu payload: {e}") from e

        logger.info(
            f"Loaded menu for {restaurant.restaurant_name}: "
            f"{len(restaurant.table_menu_list)} categories"
        )
        return restaurant

    # ==================== Login ====================

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Exchange credentials for a session token.

        A rejected login is a normal result carrying the server's error_msg.

        Raises:
            AuthenticationError: request failed or the response is not JSON
        """
        try:
            response = await self._request(
                "POST",
                self.login_url,
                body={"username": username, "password": password},
            )
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Login request error: {e}")
            raise AuthenticationError(f"Login request error: {e}") from e
        except ValueError as e:
            raise AuthenticationError(f"Login response is not JSON: {e}") from e

        if response.is_success:
            token = data.get("jwt_token") if isinstance(data, dict) else None
            if not token:
                raise AuthenticationError("Login response has no jwt_token")
            return LoginResult(success=True, status_code=response.status_code, jwt_token=token)

        error_msg = data.get("error_msg") if isinstance(data, dict) else None
        logger.warning(f"Login rejected: {response.status_code} - {error_msg}")
        return LoginResult(
            success=False,
            status_code=response.status_code,
            error_msg=error_msg,
        )
