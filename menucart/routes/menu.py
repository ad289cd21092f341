"""Menu API routes"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.session import ClientSession
from ..models.menu import CategoryTab, DishView, MenuView
from ..services.menu_browser import LoadStatus, MenuBrowser
from ..services.restaurant_client import RestaurantClient
from .dependencies import get_restaurant_client, require_session

router = APIRouter(prefix="/api/menu", tags=["Menu"])


def build_menu_view(browser: MenuBrowser, session: ClientSession) -> MenuView:
    """Render the active category with staged quantities"""
    restaurant = browser.restaurant
    categories = [
        CategoryTab(
            menu_category_id=category.menu_category_id,
            menu_category=category.menu_category,
            active=category.menu_category_id == browser.active_category_id,
        )
        for category in browser.categories
    ]

    dishes = []
    for dish in browser.active_dishes():
        staged = browser.staging.current_value(dish.dish_id) or 0
        dishes.append(
            DishView(
                dish_id=dish.dish_id,
                dish_name=dish.dish_name,
                dish_price=dish.dish_price,
                dish_currency=dish.dish_currency,
                dish_description=dish.dish_description,
                dish_calories=dish.dish_calories,
                dish_image=dish.dish_image,
                available=dish.available,
                has_customizations=dish.has_customizations,
                staged_quantity=staged,
                can_add_to_cart=dish.available and staged > 0,
            )
        )

    return MenuView(
        restaurant_name=restaurant.restaurant_name if restaurant else "",
        categories=categories,
        active_category_id=browser.active_category_id,
        dishes=dishes,
        cart_count=session.cart.count,
    )


async def _ensure_loaded(
    session: ClientSession,
    client: RestaurantClient,
    reload: bool = False,
) -> MenuBrowser:
    """Open the menu view, fetching the catalog on first entry"""
    browser = session.open_menu()
    if browser.status == LoadStatus.LOADING:
        raise HTTPException(status_code=409, detail="Menu is loading")

    if reload or browser.status == LoadStatus.INITIAL:
        await browser.load(client)

    if browser.status == LoadStatus.FAILURE:
        raise HTTPException(status_code=502, detail="Something went wrong")

    if browser.restaurant:
        session.restaurant_name = browser.restaurant.restaurant_name
    return browser


def _loaded_browser(session: ClientSession) -> MenuBrowser:
    browser = session.menu
    if browser is None or not browser.is_loaded:
        raise HTTPException(status_code=409, detail="Menu not loaded")
    return browser


@router.get("", response_model=MenuView)
async def get_menu(
    session: ClientSession = Depends(require_session),
    client: RestaurantClient = Depends(get_restaurant_client),
):
    """Menu view: categories, dishes of the active category and staged quantities"""
    browser = await _ensure_loaded(session, client)
    return build_menu_view(browser, session)


@router.post("/reload", response_model=MenuView)
async def reload_menu(
    session: ClientSession = Depends(require_session),
    client: RestaurantClient = Depends(get_restaurant_client),
):
    """Fetch the catalog again; staged quantities start over"""
    browser = await _ensure_loaded(session, client, reload=True)
    return build_menu_view(browser, session)


@router.put("/category/{category_id}", response_model=MenuView)
async def select_category(
    category_id: str,
    session: ClientSession = Depends(require_session),
):
    """Switch the active category"""
    browser = _loaded_browser(session)
    browser.select_category(category_id)
    return build_menu_view(browser, session)


@router.post("/dishes/{dish_id}/increment", response_model=MenuView)
async def increment_dish(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Stage one more of a dish"""
    browser = _loaded_browser(session)
    browser.increment(dish_id)
    return build_menu_view(browser, session)


@router.post("/dishes/{dish_id}/decrement", response_model=MenuView)
async def decrement_dish(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Stage one less of a dish"""
    browser = _loaded_browser(session)
    browser.decrement(dish_id)
    return build_menu_view(browser, session)


@router.post("/dishes/{dish_id}/add-to-cart", response_model=MenuView)
async def add_dish_to_cart(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Add the staged quantity of a dish to the cart"""
    browser = _loaded_browser(session)
    added = browser.add_to_cart(dish_id, session.cart)

    view = build_menu_view(browser, session)
    if added:
        line = session.cart.get(dish_id)
        view.message = f"{line.dish_name} x{line.quantity} in cart"
    return view
