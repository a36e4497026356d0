import enum
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)


class CatalogItem(BaseModel):
    """A purchasable coin pack. Wire records name the price `price_credits`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    coins: int
    price: int = Field(alias="price_credits")
    image_url: str
    name: str


_ITEMS = TypeAdapter(list[CatalogItem])


class CatalogStatus(str, enum.Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class CatalogState:
    status: CatalogStatus
    items: tuple[CatalogItem, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "status": self.status.value,
            "products": [item.model_dump(by_alias=True) for item in self.items],
            "count": len(self.items),
            "error": self.error,
        }


def parse_catalog(data: Any) -> list[CatalogItem]:
    items = _ITEMS.validate_python(data)
    seen: set[int] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate catalog id {item.id}")
        seen.add(item.id)
    return items


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class CatalogLoader:
    """
    Loads the static product list.

    Every call to load() starts over from LOADING and ends in LOADED or
    FAILED; errors are logged and kept on the state, never raised.
    """

    def __init__(self, source: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.source = source
        self.transport = transport
        self.state = CatalogState(CatalogStatus.LOADING)

    async def _fetch(self) -> Any:
        if _is_url(self.source):
            async with httpx.AsyncClient(transport=self.transport) as client:
                r = await client.get(self.source)
                r.raise_for_status()
                return r.json()
        return json.loads(Path(self.source).read_text(encoding="utf-8"))

    async def load(self) -> CatalogState:
        self.state = CatalogState(CatalogStatus.LOADING)
        try:
            items = parse_catalog(await self._fetch())
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.error("Failed to load products from %s: %s", self.source, e)
            self.state = CatalogState(CatalogStatus.FAILED, error=str(e))
            return self.state

        logger.info("Loaded %d products from %s", len(items), self.source)
        self.state = CatalogState(CatalogStatus.LOADED, items=tuple(items))
        return self.state


def search_catalog(items: Iterable[CatalogItem], query: str | None) -> list[CatalogItem]:
    if not query:
        return list(items)
    q = query.lower()
    return [p for p in items if q in p.name.lower()]


def find_item(items: Iterable[CatalogItem], item_id: int) -> Optional[CatalogItem]:
    return next((p for p in items if p.id == item_id), None)
