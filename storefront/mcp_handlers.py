from mcp.server.fastmcp import FastMCP

from .catalog import search_catalog
from .config import MIME_TYPE
from .store import Storefront
from .widget import widget


def register_mcp(mcp: FastMCP, storefront: Storefront):
    """MCP tool registration"""

    @mcp.resource(widget.template_uri, name=widget.identifier, mime_type=MIME_TYPE)
    def storefront_widget() -> str:
        return widget.html

    @mcp.tool()
    async def search_products(query: str = "") -> dict:
        """Search the coin catalog"""
        results = search_catalog(storefront.products, query)
        return {
            "products": [p.model_dump(by_alias=True) for p in results],
            "count": len(results),
            "message": f"{len(results)} products found"
        }

    @mcp.tool()
    async def add_to_cart(productId: int, quantity: int = 1) -> dict:
        """Add a coin pack to the cart"""
        return storefront.add_to_cart(productId, quantity)

    @mcp.tool()
    async def remove_from_cart(productId: int) -> dict:
        """Remove a line from the cart"""
        return storefront.remove_from_cart(productId)

    @mcp.tool()
    async def update_quantity(productId: int, quantity: int) -> dict:
        """Change the quantity of a cart line; zero or less removes it"""
        return storefront.update_quantity(productId, quantity)

    @mcp.tool()
    async def add_custom_quantity(quantity: int) -> dict:
        """Add a custom amount of coins (minimum applies)"""
        return storefront.add_custom_quantity(quantity)

    @mcp.tool()
    async def get_cart() -> dict:
        """Show the cart"""
        summary = storefront.cart.summary()

        if not storefront.cart:
            return {
                "isEmpty": True,
                "message": "Your cart is empty",
                "cart": summary
            }

        return {
            "isEmpty": False,
            "message": f"{len(storefront.cart)} items in your cart",
            "cart": summary
        }

    @mcp.tool()
    async def checkout(identity: str) -> dict:
        """Send the order with the player's Discord username or ID"""
        return await storefront.checkout(identity)
