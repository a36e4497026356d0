# storefront/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# MIME type of the MCP widget
MIME_TYPE = "text/html+skybridge"

DEFAULT_CATALOG_SOURCE = str(BASE_DIR / "static" / "products.json")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    # Orders are posted here. Empty means every checkout fails.
    endpoint_url: str = ""
    custom_quantity_price_multiplier: int = 2
    minimum_custom_quantity: int = 1000
    catalog_source: str = DEFAULT_CATALOG_SOURCE
    custom_item_image_url: str = "/images/coins_custom.png"
    # None: the webhook request may hang forever
    webhook_timeout: float | None = None
    shop_name: str = "MTcoins"
    base_url: str = "http://localhost:8000"
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        endpoint_url=_get_env("WEBHOOK_URL", "DISCORD_WEBHOOK_URL", default="") or "",
        custom_quantity_price_multiplier=_get_int("CUSTOM_PRICE_MULTIPLIER", default=2),
        minimum_custom_quantity=_get_int("MIN_CUSTOM_QUANTITY", default=1000),
        catalog_source=_get_env("CATALOG_SOURCE", default=DEFAULT_CATALOG_SOURCE) or DEFAULT_CATALOG_SOURCE,
        custom_item_image_url=_get_env("CUSTOM_ITEM_IMAGE_URL", default="/images/coins_custom.png")
        or "/images/coins_custom.png",
        webhook_timeout=_get_float("WEBHOOK_TIMEOUT", default=None),
        shop_name=_get_env("SHOP_NAME", default="MTcoins") or "MTcoins",
        base_url=_get_env("BASE_URL", default="http://localhost:8000") or "http://localhost:8000",
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )


settings = load_settings()
