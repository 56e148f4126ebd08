"""
Bakery Pre-Order Service — Cart API

Stock and availability rejections come back as 409 with a warning notice;
the stored cart is left exactly as it was.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from bakery.core.session import SessionStore, get_session
from bakery.schemas.cart import AddItemRequest, CartResponse, CartView, SetQuantityRequest
from bakery.services.cart import CartError

router = APIRouter(prefix="/cart", tags=["cart"])


def _conflict(error: CartError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.notice.model_dump())


@router.get("", response_model=CartResponse)
async def get_cart(session: SessionStore = Depends(get_session)):
    cart = await session.load_cart()
    return CartResponse(cart=CartView.from_cart(cart))


@router.post("/items", response_model=CartResponse)
async def add_item(payload: AddItemRequest, session: SessionStore = Depends(get_session)):
    """Add one unit of a menu item."""
    item = session.catalog.get(payload.item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{payload.item_id}' not found.")

    cart = await session.load_cart()
    try:
        notice = cart.add_item(item)
    except CartError as exc:
        raise _conflict(exc)

    await session.save_cart(cart)
    return CartResponse(cart=CartView.from_cart(cart), notice=notice)


@router.patch("/items/{item_id}", response_model=CartResponse)
async def set_quantity(item_id: str, payload: SetQuantityRequest, session: SessionStore = Depends(get_session)):
    """Set a line's quantity exactly. A quantity below 1 removes the line."""
    cart = await session.load_cart()
    if payload.quantity >= 1 and item_id not in cart:
        raise HTTPException(status_code=404, detail=f"'{item_id}' is not in your cart.")

    try:
        cart.set_quantity(item_id, payload.quantity)
    except CartError as exc:
        raise _conflict(exc)

    await session.save_cart(cart)
    return CartResponse(cart=CartView.from_cart(cart))


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_item(item_id: str, session: SessionStore = Depends(get_session)):
    cart = await session.load_cart()
    cart.remove_item(item_id)
    await session.save_cart(cart)
    return CartResponse(cart=CartView.from_cart(cart))
