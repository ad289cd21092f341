from datetime import datetime, timedelta

from menucart.core.config import settings
from menucart.core.session import session_manager
from menucart.services.menu_browser import LoadStatus


def login(api_client, username="rahul", password="rahul@2021"):
    return api_client.post("/api/auth/login", json={"username": username, "password": password})


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_menu_requires_token(api_client):
    response = api_client.get("/api/menu")

    assert response.status_code == 401
    assert response.headers["location"] == "/login"


def test_cart_requires_token(api_client):
    assert api_client.get("/api/cart").status_code == 401


def test_login_sets_cookie(api_client):
    response = login(api_client)

    assert response.status_code == 200
    assert response.json() == {"success": True, "redirect_to": "/", "error_msg": None}
    assert api_client.cookies.get(settings.token_cookie_name) == "token-rahul"
    assert f"Max-Age={30 * 24 * 3600}" in response.headers["set-cookie"]
    assert session_manager.get_session("token-rahul") is not None


def test_failed_login_returns_error_message(api_client):
    response = login(api_client, password="wrong")

    assert response.status_code == 400
    assert response.json()["error_msg"] == "Invalid credentials"
    assert api_client.cookies.get(settings.token_cookie_name) is None
    assert api_client.get("/api/menu").status_code == 401


def test_login_when_signed_in_redirects_home(api_client):
    login(api_client)

    response = login(api_client, password="wrong")

    assert response.status_code == 200
    assert response.json()["redirect_to"] == "/"


def test_logout_clears_session(api_client):
    login(api_client)

    response = api_client.post("/api/auth/logout")

    assert response.json()["redirect_to"] == "/login"
    assert api_client.cookies.get(settings.token_cookie_name) is None
    assert session_manager.get_session("token-rahul") is None
    assert api_client.get("/api/menu").status_code == 401


def test_auth_status(api_client):
    assert api_client.get("/api/auth/status").json() == {"authenticated": False}
    login(api_client)
    assert api_client.get("/api/auth/status").json() == {"authenticated": True}


def test_menu_view(api_client):
    login(api_client)

    menu = api_client.get("/api/menu").json()

    assert menu["restaurant_name"] == "UNI Resto Cafe"
    assert menu["active_category_id"] == "11"
    assert [c["active"] for c in menu["categories"]] == [True, False]
    assert [d["dish_id"] for d in menu["dishes"]] == ["A", "B"]
    assert all(d["staged_quantity"] == 0 for d in menu["dishes"])
    assert not any(d["can_add_to_cart"] for d in menu["dishes"])
    assert menu["dishes"][0]["has_customizations"]
    assert menu["cart_count"] == 0


def test_menu_failure(api_client, fake_api):
    fake_api.menu_status = 500
    login(api_client)

    response = api_client.get("/api/menu")

    assert response.status_code == 502
    assert response.json()["detail"] == "Something went wrong"

    fake_api.menu_status = 200
    assert api_client.post("/api/menu/reload").status_code == 200


def test_staging_and_commit_flow(api_client):
    login(api_client)
    api_client.get("/api/menu")

    api_client.post("/api/menu/dishes/A/increment")
    menu = api_client.post("/api/menu/dishes/A/increment").json()
    dish_a = menu["dishes"][0]
    assert dish_a["staged_quantity"] == 2
    assert dish_a["can_add_to_cart"]

    menu = api_client.post("/api/menu/dishes/A/add-to-cart").json()
    assert menu["cart_count"] == 1
    assert menu["message"] == "Spinach Salad x2 in cart"
    assert menu["dishes"][0]["staged_quantity"] == 2

    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")

    cart = api_client.get("/api/cart").json()
    assert [(i["dish_id"], i["quantity"]) for i in cart["items"]] == [("A", 5)]
    assert cart["items"][0]["line_total"] == "500.00"
    assert cart["total"] == "500.00"
    assert cart["restaurant_name"] == "UNI Resto Cafe"


def test_add_to_cart_with_zero_staged_is_noop(api_client):
    login(api_client)
    api_client.get("/api/menu")

    menu = api_client.post("/api/menu/dishes/B/add-to-cart").json()

    assert menu["cart_count"] == 0
    assert menu["message"] is None


def test_category_switch_keeps_staging(api_client):
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/B/increment")

    menu = api_client.put("/api/menu/category/12").json()
    assert [d["dish_id"] for d in menu["dishes"]] == ["C", "D"]
    assert not menu["dishes"][1]["available"]

    menu = api_client.put("/api/menu/category/11").json()
    assert menu["dishes"][1]["staged_quantity"] == 1


def test_staging_before_menu_load(api_client):
    login(api_client)

    assert api_client.post("/api/menu/dishes/A/increment").status_code == 409


def test_leaving_menu_discards_staging_but_keeps_cart(api_client):
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")
    api_client.post("/api/menu/dishes/B/increment")

    api_client.get("/api/cart")
    menu = api_client.get("/api/menu").json()

    assert all(d["staged_quantity"] == 0 for d in menu["dishes"])
    assert menu["cart_count"] == 1


def test_cart_line_editing(api_client):
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")
    api_client.post("/api/menu/dishes/B/increment")
    api_client.post("/api/menu/dishes/B/add-to-cart")

    cart = api_client.post("/api/cart/items/B/increment").json()
    assert [(i["dish_id"], i["quantity"]) for i in cart["items"]] == [("A", 1), ("B", 2)]
    assert cart["total"] == "200.00"

    cart = api_client.post("/api/cart/items/A/decrement").json()
    assert [i["dish_id"] for i in cart["items"]] == ["B"]
    assert cart["cart_count"] == 1

    cart = api_client.delete("/api/cart/items/nonexistent").json()
    assert cart["cart_count"] == 1

    cart = api_client.post("/api/cart/items/nonexistent/decrement").json()
    assert cart["cart_count"] == 1

    cart = api_client.delete("/api/cart/items/B").json()
    assert cart["is_empty"]
    assert cart["message"] == "Your cart is empty"


def test_clear_cart(api_client):
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")

    cart = api_client.delete("/api/cart").json()

    assert cart["items"] == []
    assert cart["total"] == "0.00"
    assert cart["message"] == "Cart cleared"


def test_unknown_token_is_rejected(api_client):
    api_client.cookies.set(settings.token_cookie_name, "forged-token")

    response = api_client.get("/api/cart")

    assert response.status_code == 401
    assert response.headers["location"] == "/login"
    assert session_manager.get_session("forged-token") is None


def test_expired_token_is_rejected(api_client):
    login(api_client)
    session = session_manager.get_session("token-rahul")
    session.token_store.save("token-rahul", now=datetime.utcnow() - timedelta(days=31))

    response = api_client.get("/api/menu")

    assert response.status_code == 401
    assert response.headers["location"] == "/login"
    assert session_manager.get_session("token-rahul") is None
    assert api_client.get("/api/auth/status").json() == {"authenticated": False}


def test_idle_cart_survives_other_logins(api_client, fake_api):
    fake_api.users["asha"] = "asha@2021"
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")
    api_client.post("/api/cart/items/A/increment")
    session_manager.get_session("token-rahul").updated_at -= timedelta(hours=25)

    rahul_cookie = api_client.cookies.get(settings.token_cookie_name)
    api_client.cookies.clear()
    assert login(api_client, "asha", "asha@2021").status_code == 200

    api_client.cookies.clear()
    api_client.cookies.set(settings.token_cookie_name, rahul_cookie)
    cart = api_client.get("/api/cart").json()

    assert [(i["dish_id"], i["quantity"]) for i in cart["items"]] == [("A", 2)]


def test_cart_edits_refresh_session_activity(api_client):
    login(api_client)
    api_client.get("/api/menu")
    api_client.post("/api/menu/dishes/A/increment")
    api_client.post("/api/menu/dishes/A/add-to-cart")
    session = session_manager.get_session("token-rahul")

    stale = datetime(2020, 1, 1)
    session.updated_at = stale
    api_client.post("/api/cart/items/A/increment")
    assert session.updated_at > stale

    session.updated_at = stale
    api_client.delete("/api/cart")
    assert session.updated_at > stale


def test_menu_request_while_loading(api_client):
    login(api_client)
    session = session_manager.get_session("token-rahul")
    session.open_menu().status = LoadStatus.LOADING

    response = api_client.get("/api/menu")

    assert response.status_code == 409
    assert response.json()["detail"] == "Menu is loading"
