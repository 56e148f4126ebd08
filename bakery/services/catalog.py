"""
Bakery Pre-Order Service — Read-only catalog lookup
"""
from functools import lru_cache
from typing import Iterable

from bakery.data.menu_items import MENU_ITEMS
from bakery.models.menu import MenuItem


class Catalog:
    """Immutable index of menu items by id, in menu order."""

    def __init__(self, items: Iterable[MenuItem]):
        self._items: dict[str, MenuItem] = {}
        for item in items:
            if item.id in self._items:
                raise ValueError(f"Duplicate menu item id '{item.id}'.")
            self._items[item.id] = item

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self):
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> MenuItem | None:
        return self._items.get(item_id)

    def require(self, item_id: str) -> MenuItem:
        """Like get(), but raises KeyError for unknown ids."""
        item = self._items.get(item_id)
        if item is None:
            raise KeyError(item_id)
        return item

    def categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for item in self._items.values():
            seen.setdefault(item.category, None)
        return list(seen)

    def filter(
        self,
        category: str | None = None,
        vegan: bool = False,
        gluten_free: bool = False,
        dairy_free: bool = False,
        nut_free: bool = False,
    ) -> list[MenuItem]:
        out = []
        for item in self._items.values():
            if category and item.category.lower() != category.lower():
                continue
            info = item.dietary_info
            if (vegan and not info.vegan) or (gluten_free and not info.gluten_free):
                continue
            if (dairy_free and not info.dairy_free) or (nut_free and not info.nut_free):
                continue
            out.append(item)
        return out


@lru_cache()
def get_catalog() -> Catalog:
    return Catalog(MENU_ITEMS)
