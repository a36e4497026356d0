import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from .cart import CartStore
from .catalog import CatalogLoader, CatalogState, CatalogStatus, find_item
from .checkout import CheckoutPhase, WebhookClient, WebhookError, build_order_payload, format_timestamp
from .config import Settings
from .custom_quantity import CustomQuantityRejected, build_custom_item

logger = logging.getLogger(__name__)

MAX_NOTICES = 50


@dataclass(frozen=True)
class Notice:
    level: str  # "success" | "error"
    message: str


class Storefront:
    """
    Session state of the shop: catalog, cart, the player's identity and the
    notices shown to them. The HTTP routes and MCP tools both act on one
    instance of this class.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.catalog = CatalogLoader(settings.catalog_source, transport=transport)
        self.webhook = WebhookClient(settings.endpoint_url, timeout=settings.webhook_timeout, transport=transport)
        self.cart = CartStore()
        self.identity = ""
        self.phase = CheckoutPhase.IDLE
        self.notices: deque[Notice] = deque(maxlen=MAX_NOTICES)
        self._clock = clock
        self._in_flight = 0

    # -------------------------------------------------
    # notices
    # -------------------------------------------------
    def notify(self, level: str, message: str) -> None:
        self.notices.append(Notice(level, message))

    def drain_notices(self) -> list[Notice]:
        out = list(self.notices)
        self.notices.clear()
        return out

    def _ok(self, message: str, **extra: Any) -> dict:
        self.notify("success", message)
        return {"success": True, "message": message, **extra}

    def _fail(self, message: str, **extra: Any) -> dict:
        self.notify("error", message)
        return {"success": False, "message": message, **extra}

    # -------------------------------------------------
    # catalog
    # -------------------------------------------------
    @property
    def products(self):
        return self.catalog.state.items

    async def load_catalog(self) -> CatalogState:
        state = await self.catalog.load()
        if state.status is CatalogStatus.FAILED:
            self.notify("error", "Failed to load products")
        return state

    # -------------------------------------------------
    # cart
    # -------------------------------------------------
    def add_to_cart(self, item_id: int, quantity: int = 1) -> dict:
        product = find_item(self.products, item_id)
        if not product:
            return self._fail("Product not found")
        if quantity < 1:
            return self._fail("Quantity must be at least 1")

        self.cart.add(product, quantity)
        return self._ok(f"Added {product.name} to cart!", cart=self.cart.summary())

    def remove_from_cart(self, item_id: int) -> dict:
        self.cart.remove(item_id)
        return self._ok("Removed from cart", cart=self.cart.summary())

    def update_quantity(self, item_id: int, quantity: int) -> dict:
        if quantity <= 0:
            return self.remove_from_cart(item_id)
        if item_id not in self.cart:
            return {"success": False, "message": "Product is not in your cart", "cart": self.cart.summary()}
        self.cart.set_quantity(item_id, quantity)
        return {"success": True, "message": "Quantity updated", "cart": self.cart.summary()}

    def add_custom_quantity(self, quantity: int) -> dict:
        try:
            item = build_custom_item(quantity, self.settings)
        except CustomQuantityRejected as e:
            return self._fail(str(e))

        self.cart.add(item)
        return self._ok(f"Added {item.name} to cart!", cart=self.cart.summary())

    def set_identity(self, value: str) -> None:
        self.identity = value

    # -------------------------------------------------
    # checkout
    # -------------------------------------------------
    def _settle_phase(self) -> None:
        self.phase = CheckoutPhase.SUBMITTING if self._in_flight else CheckoutPhase.IDLE

    async def checkout(self, identity: Optional[str] = None) -> dict:
        if identity is not None:
            self.set_identity(identity)

        self.phase = CheckoutPhase.VALIDATING
        if not self.identity.strip():
            self._settle_phase()
            return self._fail("Please enter your Discord username or ID")
        if not self.cart:
            self._settle_phase()
            return self._fail("Your cart is empty")

        payload = build_order_payload(
            self.cart,
            self.identity,
            format_timestamp(self._clock()),
            shop_name=self.settings.shop_name,
        )
        # What was posted; the cart may change while the request is pending.
        summary = self.cart.summary()
        order = {
            "identity": self.identity,
            "totalCoins": summary["totalCoins"],
            "totalPrice": summary["totalPrice"],
            "items": summary["items"],
        }

        # No in-flight guard: a second submission is let through.
        if self._in_flight:
            logger.warning("Checkout started while %d submission(s) still in flight", self._in_flight)

        self._in_flight += 1
        self.phase = CheckoutPhase.SUBMITTING
        try:
            await self.webhook.post(payload)
        except WebhookError as e:
            logger.error("Webhook error: %s", e)
            return self._fail("Something went wrong while sending your order. Please try again.")
        finally:
            self._in_flight -= 1
            self._settle_phase()

        logger.info("Order sent for %s: %s", order["identity"], payload["embeds"][0]["fields"][4]["value"])
        self.cart.discard({it["id"]: it["quantity"] for it in order["items"]})
        self.identity = ""
        return self._ok("Your order has been recorded. The admins will contact you soon.", order=order)
