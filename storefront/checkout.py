"""
Order submission to the fulfillment webhook.

The payload follows the Discord webhook shape: a `content` line and one
embed whose five fields are, in order, total coins, total price, the
player's identity, the order time and the cart lines.
"""
import enum
import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from .cart import CartStore, format_amount

logger = logging.getLogger(__name__)

EMBED_COLOR = 0xFF0000


class CheckoutPhase(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class WebhookError(Exception):
    """The order could not be delivered to the webhook."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def format_timestamp(dt: datetime) -> str:
    # 10/19/2026, 03:04:05 PM
    return dt.strftime("%m/%d/%Y, %I:%M:%S %p")


def build_order_payload(cart: CartStore, identity: str, timestamp: str, shop_name: str = "MTcoins") -> dict[str, Any]:
    return {
        "content": f"🎮 **New {shop_name} Purchase Order**",
        "embeds": [
            {
                "title": f"New coin purchase order - {shop_name}",
                "color": EMBED_COLOR,
                "fields": [
                    {
                        "name": "Total Coins",
                        "value": f"{format_amount(cart.total_coins())} Coins",
                        "inline": True,
                    },
                    {
                        "name": "Total Price",
                        "value": f"{format_amount(cart.total_price())} Credits",
                        "inline": True,
                    },
                    {
                        "name": "Player (Discord)",
                        "value": identity,
                        "inline": False,
                    },
                    {
                        "name": "Order Time",
                        "value": timestamp,
                        "inline": False,
                    },
                    {
                        "name": "Order Details",
                        "value": "\n".join(f"{line.item.name} x{line.quantity}" for line in cart),
                        "inline": False,
                    },
                ],
            }
        ],
    }


class WebhookClient:
    """Posts order payloads to a single fixed URL. One attempt, no retry."""

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def post(self, payload: dict[str, Any]) -> httpx.Response:
        if not self.url:
            raise WebhookError("webhook URL is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise WebhookError(f"webhook request failed: {e}") from e

        if not r.is_success:
            raise WebhookError(f"Webhook failed with status {r.status_code}", status_code=r.status_code)
        return r
