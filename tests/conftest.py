"""Shared pytest fixtures for storefront tests."""

import json
from datetime import datetime

import anyio
import httpx
import pytest

from storefront.catalog import CatalogItem, CatalogState, CatalogStatus
from storefront.config import Settings
from storefront.store import Storefront

WEBHOOK_URL = "https://hooks.example.test/api/webhooks/1/token"

PRODUCTS = [
    {"id": 1, "coins": 500, "price_credits": 1000, "image_url": "/images/coins_500.png", "name": "500 Coins"},
    {"id": 2, "coins": 1000, "price_credits": 2000, "image_url": "/images/coins_1000.png", "name": "1,000 Coins"},
    {"id": 3, "coins": 5000, "price_credits": 10000, "image_url": "/images/coins_5000.png", "name": "5,000 Coins"},
]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def catalog_file(tmp_path):
    """Write the test catalog to disk."""
    path = tmp_path / "products.json"
    path.write_text(json.dumps(PRODUCTS), encoding="utf-8")
    return path


@pytest.fixture
def settings(catalog_file):
    return Settings(endpoint_url=WEBHOOK_URL, catalog_source=str(catalog_file))


@pytest.fixture
def items():
    return [CatalogItem.model_validate(p) for p in PRODUCTS]


class Webhook:
    """Fake webhook endpoint recording every request it receives."""

    def __init__(self, status_code=204):
        self.status_code = status_code
        self.requests = []
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(self.status_code)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def webhook():
    return Webhook()


@pytest.fixture
def transport(webhook):
    return httpx.MockTransport(webhook)


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 15, 4, 5)


@pytest.fixture
def storefront(settings, transport, fixed_now):
    return Storefront(settings, transport=transport, clock=lambda: fixed_now)


@pytest.fixture
def shop(storefront, items):
    """Storefront with the test catalog already loaded."""
    storefront.catalog.state = CatalogState(CatalogStatus.LOADED, items=tuple(items))
    return storefront


class GatedWebhook(Webhook):
    """Webhook that holds each request until the test lets it through."""

    def __init__(self, status_code=204):
        super().__init__(status_code)
        self.gate = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.gate is None:
            self.gate = anyio.Semaphore(0)
        self.requests.append(request)
        await self.gate.acquire()
        return httpx.Response(self.status_code)

    def release(self):
        self.gate.release()

    async def wait_for_requests(self, count):
        with anyio.fail_after(5):
            while len(self.requests) < count:
                await anyio.sleep(0.01)


@pytest.fixture
def gated_webhook():
    return GatedWebhook()


@pytest.fixture
def gated_shop(shop, gated_webhook):
    """Loaded storefront whose webhook blocks until released."""
    shop.webhook.transport = httpx.MockTransport(gated_webhook)
    return shop
