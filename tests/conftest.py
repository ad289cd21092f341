import json
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from menucart.core.session import session_manager
from menucart.main import app
from menucart.models.menu import Dish
from menucart.routes.dependencies import get_restaurant_client
from menucart.services.restaurant_client import RestaurantClient

MENU_URL = "https://menu.test/restaurant-menu-list-details"
LOGIN_URL = "https://auth.test/login"


def make_dish(dish_id, price, name=None, currency="₹", available=True, **extra):
    return Dish(
        dish_id=dish_id,
        dish_name=name or f"Dish {dish_id}",
        dish_price=Decimal(str(price)),
        dish_currency=currency,
        dish_image=f"https://img.test/{dish_id}.png",
        available=available,
        **extra,
    )


@pytest.fixture
def menu_payload():
    """Menu endpoint payload in its list-wrapped form"""
    return [
        {
            "restaurant_id": "210000",
            "restaurant_name": "UNI Resto Cafe",
            "branch_name": "Bengaluru",
            "table_menu_list": [
                {
                    "menu_category": "Salads and Soup",
                    "menu_category_id": "11",
                    "category_dishes": [
                        {
                            "dish_id": "A",
                            "dish_name": "Spinach Salad",
                            "dish_price": 100,
                            "dish_image": "https://img.test/a.png",
                            "dish_currency": "₹",
                            "dish_calories": 15,
                            "dish_description": "Fresh spinach",
                            "dish_Availability": True,
                            "dish_Type": 2,
                            "addonCat": [
                                {
                                    "addon_category": "Spicy/Non-Spicy",
                                    "addon_category_id": "104",
                                    "addon_selection": 0,
                                    "addons": [
                                        {
                                            "dish_id": "A1",
                                            "dish_name": "Spicy",
                                            "dish_price": 25,
                                            "dish_currency": "₹",
                                            "dish_Availability": True,
                                        }
                                    ],
                                }
                            ],
                        },
                        {
                            "dish_id": "B",
                            "dish_name": "Tomato Soup",
                            "dish_price": 50,
                            "dish_image": "https://img.test/b.png",
                            "dish_currency": "₹",
                            "dish_calories": 40,
                            "dish_description": "Hot soup",
                            "dish_Availability": True,
                            "addonCat": [],
                        },
                    ],
                },
                {
                    "menu_category": "Desserts",
                    "menu_category_id": "12",
                    "category_dishes": [
                        {
                            "dish_id": "C",
                            "dish_name": "Ice Cream",
                            "dish_price": 30.5,
                            "dish_image": "https://img.test/c.png",
                            "dish_currency": "₹",
                            "dish_calories": 120,
                            "dish_description": "Vanilla",
                            "dish_Availability": True,
                            "addonCat": [],
                        },
                        {
                            "dish_id": "D",
                            "dish_name": "Brownie",
                            "dish_price": 80,
                            "dish_image": "https://img.test/d.png",
                            "dish_currency": "₹",
                            "dish_calories": 300,
                            "dish_description": "Sold out today",
                            "dish_Availability": False,
                            "addonCat": [],
                        },
                    ],
                },
            ],
        }
    ]


class FakeRestaurantApi:
    """Serves the menu and login endpoints through httpx.MockTransport"""

    def __init__(self, menu_payload):
        self.menu_payload = menu_payload
        self.menu_status = 200
        self.menu_error = None
        self.users = {"rahul": "rahul@2021"}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url == MENU_URL:
            if self.menu_error:
                raise self.menu_error
            return httpx.Response(self.menu_status, json=self.menu_payload)

        if request.url == LOGIN_URL:
            body = json.loads(request.content)
            if self.users.get(body.get("username")) == body.get("password"):
                return httpx.Response(200, json={"jwt_token": f"token-{body['username']}"})
            return httpx.Response(400, json={"status_code": 400, "error_msg": "Invalid credentials"})

        return httpx.Response(404, json={"detail": "Not found"})

    def client(self) -> RestaurantClient:
        return RestaurantClient(
            menu_url=MENU_URL,
            login_url=LOGIN_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


@pytest.fixture
def fake_api(menu_payload):
    return FakeRestaurantApi(menu_payload)


@pytest.fixture
def restaurant_client(fake_api):
    return fake_api.client()


@pytest.fixture
def api_client(restaurant_client):
    """TestClient with the restaurant API faked and sessions reset"""
    session_manager.sessions.clear()
    app.dependency_overrides[get_restaurant_client] = lambda: restaurant_client
    with_client = TestClient(app)
    yield with_client
    app.dependency_overrides.clear()
    session_manager.sessions.clear()
