"""
Bakery Pre-Order Service — Menu and FAQ (static content)
"""
from fastapi import APIRouter, HTTPException, Query

from bakery.data.menu_items import FAQ_ENTRIES
from bakery.models.menu import FaqEntry, MenuItem
from bakery.services.catalog import get_catalog

router = APIRouter(tags=["menu"])


@router.get("/menu", response_model=list[MenuItem])
async def list_menu(
    category: str | None = Query(None, description="Only items in this category"),
    vegan: bool = False,
    gluten_free: bool = False,
    dairy_free: bool = False,
    nut_free: bool = False,
):
    """Menu items in display order, optionally filtered by category and dietary flags."""
    return get_catalog().filter(
        category=category,
        vegan=vegan,
        gluten_free=gluten_free,
        dairy_free=dairy_free,
        nut_free=nut_free,
    )


@router.get("/menu/categories", response_model=list[str])
async def list_categories():
    return get_catalog().categories()


@router.get("/menu/{item_id}", response_model=MenuItem)
async def get_menu_item(item_id: str):
    item = get_catalog().get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{item_id}' not found.")
    return item


@router.get("/faq", response_model=list[FaqEntry])
async def list_faq():
    return FAQ_ENTRIES
