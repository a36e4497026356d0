"""Tests for bulk custom-quantity items."""

import pytest

from storefront.config import Settings
from storefront.custom_quantity import (
    CUSTOM_ITEM_ID,
    CustomQuantityRejected,
    build_custom_item,
    quote_custom_price,
)


class TestBuildCustomItem:
    def test_below_minimum_is_rejected(self):
        with pytest.raises(CustomQuantityRejected, match="Minimum quantity is 1000"):
            build_custom_item(999, Settings())

    def test_minimum_builds_item(self):
        item = build_custom_item(1000, Settings())

        assert item.id == CUSTOM_ITEM_ID
        assert item.coins == 1000
        assert item.price == 2000
        assert item.name == "1,000 Coins (Custom)"
        assert item.image_url == "/images/coins_custom.png"

    def test_configured_multiplier_and_minimum(self):
        settings = Settings(custom_quantity_price_multiplier=3, minimum_custom_quantity=50)

        assert build_custom_item(50, settings).price == 150
        with pytest.raises(CustomQuantityRejected):
            build_custom_item(49, settings)

    def test_quote(self):
        assert quote_custom_price(2500, Settings()) == 5000


class TestStorefrontCustomQuantity:
    def test_rejected_request_leaves_cart_unchanged(self, shop):
        result = shop.add_custom_quantity(999)

        assert result["success"] is False
        assert not shop.cart
        assert shop.drain_notices()[-1].level == "error"

    def test_accepted_request_adds_synthetic_line(self, shop):
        result = shop.add_custom_quantity(1000)

        assert result["success"] is True
        line = shop.cart.get(CUSTOM_ITEM_ID)
        assert line.item.coins == 1000
        assert line.item.price == 2000
        assert line.quantity == 1

    def test_synthetic_line_mixes_with_catalog_lines(self, shop):
        shop.add_to_cart(1)
        shop.add_custom_quantity(1500)

        assert shop.cart.total_coins() == 500 + 1500
        assert shop.cart.total_price() == 1000 + 3000
