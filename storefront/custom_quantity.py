from .catalog import CatalogItem
from .config import Settings

# Reserved id of the bulk item; catalog ids are never negative
CUSTOM_ITEM_ID = -1


class CustomQuantityRejected(ValueError):
    """Raised when a bulk quantity is below the configured minimum."""


def quote_custom_price(quantity: int, settings: Settings) -> int:
    return quantity * settings.custom_quantity_price_multiplier


def build_custom_item(quantity: int, settings: Settings) -> CatalogItem:
    if quantity < settings.minimum_custom_quantity:
        raise CustomQuantityRejected(
            f"Minimum quantity is {settings.minimum_custom_quantity} coins"
        )

    return CatalogItem(
        id=CUSTOM_ITEM_ID,
        coins=quantity,
        price=quote_custom_price(quantity, settings),
        image_url=settings.custom_item_image_url,
        name=f"{quantity:,} Coins (Custom)",
    )
