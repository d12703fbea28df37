"""
Cart Routes for Coffee Club
===========================

Endpoints:
----------
- GET /cart/{cart_id}: Cart lines and totals
- POST /cart/{cart_id}/items: Add a product without customization
- PATCH /cart/{cart_id}/items/{line_id}: Change a line's quantity
- DELETE /cart/{cart_id}/items/{line_id}: Remove a line
- GET /cart/{cart_id}/checkout: Payload for the checkout collaborator

Customized lines are added by confirming a dialog (see customize.py). Plain
items added here merge with an existing plain line for the same product and
size. A quantity of 0 or less removes the line. Every change to a cart
runs through `StateStore.update`, under the store lock.

Carts are in memory only (`app.state.carts`). Placing the order, charging
the buyer and recording the transaction belong to the checkout service that
consumes the /checkout payload.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..customizer.cart import Cart, plain_line
from ..db import get_db
from ..schemas.cart import (
    CartItemAdd,
    CartLineOut,
    CartOut,
    CartQuantityUpdate,
    CheckoutOut,
)
from ..services.catalog import ProductNotFoundError, get_product, get_product_sizes
from ..services.checkout import build_checkout_payload


logger = logging.getLogger(__name__)

# Router definition
cart_router = APIRouter(prefix="/cart", tags=["Cart"])


def cart_out(cart: Cart) -> CartOut:
    totals = cart.totals()
    return CartOut(
        cart_id=cart.cart_id,
        lines=[CartLineOut.model_validate(line) for line in cart.lines],
        subtotal=totals.subtotal,
        tax=totals.tax,
        total=totals.total,
    )


def _cart_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Cart not found")


@cart_router.get("/{cart_id}", response_model=CartOut)
def get_cart(request: Request, cart_id: str) -> CartOut:
    cart, out = request.app.state.carts.update(cart_id, cart_out)
    if cart is None:
        raise _cart_not_found()
    return out


@cart_router.post("/{cart_id}/items", response_model=CartOut, status_code=201)
def add_plain_item(
    request: Request,
    cart_id: str,
    payload: CartItemAdd,
    db: Session = Depends(get_db),
) -> CartOut:
    """
    Add a product at its base price, creating the cart if needed.

    Sized products default to their first size when size_id is omitted.
    """
    try:
        product = get_product(db, payload.product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")

    sizes = get_product_sizes(db, product.id)
    size = None
    if sizes:
        if payload.size_id is None:
            size = sizes[0]
        else:
            size = next((s for s in sizes if s.id == payload.size_id), None)
            if size is None:
                raise HTTPException(status_code=400, detail="Size not available for this product")
    elif payload.size_id is not None:
        raise HTTPException(status_code=400, detail="Product is not sold in sizes")
    elif product.price is None:
        raise HTTPException(status_code=400, detail="Product has no price")

    line = plain_line(product, size, payload.quantity)

    def add(cart: Cart) -> CartOut:
        cart.add_line(line)
        return cart_out(cart)

    _, out = request.app.state.carts.update(cart_id, add, default=lambda: Cart(cart_id))

    logger.info("Added %s x%d to cart %s", line.product_name, payload.quantity, cart_id)
    return out


@cart_router.patch("/{cart_id}/items/{line_id}", response_model=CartOut)
def update_line_quantity(
    request: Request,
    cart_id: str,
    line_id: str,
    payload: CartQuantityUpdate,
) -> CartOut:
    """Set a line's quantity; 0 or less removes it."""
    def change(cart: Cart) -> Optional[CartOut]:
        if not cart.update_quantity(line_id, payload.quantity):
            return None
        return cart_out(cart)

    cart, out = request.app.state.carts.update(cart_id, change)
    if cart is None:
        raise _cart_not_found()
    if out is None:
        raise HTTPException(status_code=404, detail="Cart line not found")
    return out


@cart_router.delete("/{cart_id}/items/{line_id}", response_model=CartOut)
def remove_line(request: Request, cart_id: str, line_id: str) -> CartOut:
    def remove(cart: Cart) -> Optional[CartOut]:
        if not cart.remove_line(line_id):
            return None
        return cart_out(cart)

    cart, out = request.app.state.carts.update(cart_id, remove)
    if cart is None:
        raise _cart_not_found()
    if out is None:
        raise HTTPException(status_code=404, detail="Cart line not found")
    return out


@cart_router.get("/{cart_id}/checkout", response_model=CheckoutOut)
def checkout_payload(request: Request, cart_id: str) -> CheckoutOut:
    """Shape the cart for the checkout collaborator. 400 for an empty cart."""
    try:
        cart, payload = request.app.state.carts.update(cart_id, build_checkout_payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if cart is None:
        raise _cart_not_found()
    return CheckoutOut(**payload)
