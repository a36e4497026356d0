from fastapi import APIRouter, FastAPI, Query
from fastapi.responses import FileResponse, HTMLResponse

from storefront.catalog import search_catalog
from storefront.custom_quantity import quote_custom_price
from storefront.store import Storefront
from storefront.widget import widget


def register_api_routes(app: FastAPI, storefront: Storefront):

    # ---------------------------------------------------
    # Storefront page and static catalog
    # ---------------------------------------------------
    @app.get("/", response_class=HTMLResponse)
    async def index():
        return HTMLResponse(widget.html)

    @app.get("/products.json")
    async def products_json():
        return FileResponse(storefront.settings.catalog_source, media_type="application/json")

    # ---------------------------------------------------
    # SHOP API ROUTES
    # ---------------------------------------------------
    router = APIRouter(prefix="/api", tags=["storefront"])

    # 1) Catalog
    @router.get("/products")
    async def search_products_endpoint(query: str = Query("", description="Search term")):
        results = search_catalog(storefront.products, query)
        return {
            "products": [p.model_dump(by_alias=True) for p in results],
            "count": len(results),
            "message": f"{len(results)} products found"
        }

    @router.get("/catalog")
    async def catalog_state_endpoint():
        return storefront.catalog.state.as_dict()

    @router.post("/catalog/reload")
    async def catalog_reload_endpoint():
        state = await storefront.load_catalog()
        return state.as_dict()

    # 2) Cart
    @router.get("/cart")
    async def get_cart_endpoint():
        summary = storefront.cart.summary()

        if not storefront.cart:
            return {
                "isEmpty": True,
                "message": "Your cart is empty",
                "cart": summary,
                "identity": storefront.identity,
            }

        return {
            "isEmpty": False,
            "message": f"{len(storefront.cart)} items in your cart",
            "cart": summary,
            "identity": storefront.identity,
        }

    @router.post("/cart/add")
    async def add_to_cart_endpoint(productId: int, quantity: int = 1):
        return storefront.add_to_cart(productId, quantity)

    @router.post("/cart/remove")
    async def remove_from_cart_endpoint(productId: int):
        return storefront.remove_from_cart(productId)

    @router.post("/cart/quantity")
    async def update_quantity_endpoint(productId: int, quantity: int):
        return storefront.update_quantity(productId, quantity)

    # 3) Custom quantity
    @router.get("/custom/quote")
    async def custom_quote_endpoint(quantity: int):
        price = quote_custom_price(quantity, storefront.settings)
        return {
            "quantity": quantity,
            "price": price,
            "priceFormatted": f"{price:,}",
            "minimum": storefront.settings.minimum_custom_quantity,
        }

    @router.post("/cart/custom")
    async def add_custom_quantity_endpoint(quantity: int):
        return storefront.add_custom_quantity(quantity)

    # 4) Identity and checkout
    @router.post("/identity")
    async def set_identity_endpoint(value: str = ""):
        storefront.set_identity(value)
        return {"identity": storefront.identity}

    @router.post("/checkout")
    async def checkout_endpoint(identity: str | None = None):
        return await storefront.checkout(identity)

    # 5) Notices
    @router.get("/notices")
    async def notices_endpoint():
        return {
            "notices": [{"level": n.level, "message": n.message} for n in storefront.drain_notices()]
        }

    app.include_router(router)
