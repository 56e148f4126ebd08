"""
Bakery Pre-Order Service — Stock-aware cart

Rules:
  - stock-constrained items can never be held in a quantity above their stock
  - made-to-order items have no upper bound
  - a failed mutation leaves the cart untouched and raises a CartError whose
    notice is shown to the customer as a warning
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from bakery.models.menu import MenuItem
from bakery.models.order import CartLine, Notice
from bakery.services.catalog import Catalog

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class CartError(Exception):
    """A rejected cart mutation. The cart is unchanged."""

    title = "Unable to update cart"

    def __init__(self, item: MenuItem, description: str):
        super().__init__(description)
        self.item = item
        self.description = description

    @property
    def notice(self) -> Notice:
        return Notice(title=self.title, description=self.description, variant="warning")


class ItemUnavailableError(CartError):
    title = "Item unavailable"


class OutOfStockError(CartError):
    title = "Out of stock"


class StockLimitError(CartError):
    title = "Stock limit reached"


@dataclass
class CartPartition:
    in_stock: list[CartLine] = field(default_factory=list)
    made_to_order: list[CartLine] = field(default_factory=list)


class Cart:
    """
    Session-local cart. Lines keep insertion order and there is at most one
    line per item id.
    """

    def __init__(self, catalog: Catalog, lines: Iterable[CartLine] = ()):
        self.catalog = catalog
        self._lines: dict[str, CartLine] = {}
        for line in lines:
            self._lines[line.item_id] = line

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._lines

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, item_id: str) -> CartLine | None:
        return self._lines.get(item_id)

    # ── Mutations ─────────────────────────────────────────────

    def add_item(self, item: MenuItem) -> Notice:
        """Add one unit of item. Raises CartError when stock or availability forbids it."""
        if not item.available:
            self._reject(ItemUnavailableError(item, f"{item.name} is not available for order right now."))

        if not item.made_to_order and item.stock <= 0:
            self._reject(OutOfStockError(item, f"{item.name} is currently out of stock."))

        existing = self._lines.get(item.id)
        if existing is not None:
            new_quantity = existing.quantity + 1
            if not item.made_to_order and new_quantity > item.stock:
                self._reject(StockLimitError(
                    item, f"Only {item.stock} of {item.name} available. You already have {existing.quantity} in your cart."
                ))
            self._lines[item.id] = existing.model_copy(update={"quantity": new_quantity})
        else:
            self._lines[item.id] = CartLine(item_id=item.id, name=item.name, price=item.price, quantity=1)

        return Notice(title="Item added to cart", description=f"{item.name} has been added to your order.")

    def remove_item(self, item_id: str) -> None:
        self._lines.pop(item_id, None)

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity exactly; below 1 removes the line. No-op for absent lines."""
        if quantity < 1:
            self.remove_item(item_id)
            return

        line = self._lines.get(item_id)
        if line is None:
            return

        item = self.catalog.get(item_id)
        if item is not None and not item.made_to_order and quantity > item.stock:
            self._reject(StockLimitError(item, f"Only {item.stock} of {item.name} available."))

        self._lines[item_id] = line.model_copy(update={"quantity": quantity})

    def clear(self) -> None:
        self._lines.clear()

    # ── Queries ───────────────────────────────────────────────

    def total(self) -> Decimal:
        """Sum of price * quantity over lines whose item still resolves in the catalog."""
        total = Decimal("0.00")
        for line in self._lines.values():
            if line.item_id in self.catalog:
                total += line.subtotal
        return total.quantize(CENTS)

    def partition(self) -> CartPartition:
        parts = CartPartition()
        for line in self._lines.values():
            item = self.catalog.get(line.item_id)
            if item is None:
                logger.warning("Cart line '%s' no longer resolves in the catalog; skipping", line.item_id)
                continue
            if item.made_to_order:
                parts.made_to_order.append(line)
            else:
                parts.in_stock.append(line)
        return parts

    @staticmethod
    def _reject(error: CartError):
        logger.info("Cart mutation rejected for %s: %s", error.item.id, error.description)
        raise error
