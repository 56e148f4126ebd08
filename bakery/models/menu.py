"""
Bakery Pre-Order Service — Catalog models

[CONFIG DATA] — the catalog is static and read-only at runtime.
"""
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict, Field


class Fulfillment(str, PyEnum):
    IN_STOCK = "in_stock"
    MADE_TO_ORDER = "made_to_order"


class DietaryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    vegan: bool = False
    gluten_free: bool = False
    dairy_free: bool = False
    nut_free: bool = False


class MenuItem(BaseModel):
    """
    A purchasable item.
    stock only constrains purchases when made_to_order is False.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    description: str = ""
    price: Decimal = Field(..., ge=0, decimal_places=2)
    dietary_info: DietaryInfo = Field(default_factory=DietaryInfo)
    available: bool = True
    stock: int = Field(0, ge=0)
    made_to_order: bool = False

    @property
    def fulfillment(self) -> Fulfillment:
        return Fulfillment.MADE_TO_ORDER if self.made_to_order else Fulfillment.IN_STOCK


class FaqEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
