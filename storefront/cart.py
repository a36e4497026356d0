from dataclasses import dataclass
from typing import Iterator

from .catalog import CatalogItem


def format_amount(amount: int) -> str:
    return f"{amount:,}"


@dataclass
class CartLine:
    item: CatalogItem
    quantity: int

    @property
    def coins(self) -> int:
        return self.item.coins * self.quantity

    @property
    def price(self) -> int:
        return self.item.price * self.quantity


class CartStore:
    """
    In-memory cart, one line per item id, in insertion order.

    A line never holds a quantity below 1: setting it to zero or less
    removes the line.
    """

    def __init__(self):
        self._lines: dict[int, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._lines

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def get(self, item_id: int) -> CartLine | None:
        return self._lines.get(item_id)

    def add(self, item: CatalogItem, quantity: int = 1) -> CartLine | None:
        line = self._lines.get(item.id)
        new_quantity = (line.quantity if line else 0) + quantity
        if new_quantity <= 0:
            self.remove(item.id)
            return None
        if line:
            line.quantity = new_quantity
        else:
            line = self._lines[item.id] = CartLine(item=item, quantity=new_quantity)
        return line

    def discard(self, ordered: dict[int, int]) -> None:
        """Take away the given quantities per item id, dropping emptied lines."""
        for item_id, quantity in ordered.items():
            line = self._lines.get(item_id)
            if line:
                self.set_quantity(item_id, line.quantity - quantity)

    def remove(self, item_id: int) -> None:
        self._lines.pop(item_id, None)

    def set_quantity(self, item_id: int, new_quantity: int) -> None:
        if new_quantity <= 0:
            self.remove(item_id)
            return
        line = self._lines.get(item_id)
        if line:
            line.quantity = new_quantity

    def clear(self) -> None:
        self._lines.clear()

    def total_coins(self) -> int:
        return sum(line.coins for line in self._lines.values())

    def total_price(self) -> int:
        return sum(line.price for line in self._lines.values())

    def summary(self) -> dict:
        items = []
        total_qty = 0

        for line in self._lines.values():
            items.append({
                "id": line.item.id,
                "name": line.item.name,
                "quantity": line.quantity,
                "coins": line.item.coins,
                "unitPrice": line.item.price,
                "unitPriceFormatted": format_amount(line.item.price),
                "subtotal": line.price,
                "subtotalFormatted": format_amount(line.price),
            })
            total_qty += line.quantity

        total_coins = self.total_coins()
        total_price = self.total_price()
        return {
            "items": items,
            "totalCoins": total_coins,
            "totalCoinsFormatted": format_amount(total_coins),
            "totalPrice": total_price,
            "totalPriceFormatted": format_amount(total_price),
            "totalQuantity": total_qty,
        }
