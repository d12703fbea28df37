"""
Customization Dialog Routes for Coffee Club
===========================================

Buyer-facing endpoints that drive the customization engine.

Endpoints:
----------
- POST /customize/dialogs: Open a dialog for a product (and optional size)
- GET /customize/dialogs/{dialog_id}: Current dialog state
- POST /customize/dialogs/{dialog_id}/commands: Apply adjust / select_size
- POST /customize/dialogs/{dialog_id}/confirm: Freeze into a cart line
- DELETE /customize/dialogs/{dialog_id}: Cancel (discard) a dialog

Dialog Flow:
------------
1. Opening a dialog reads the product, its sizes, every recipe scope and the
   ingredient catalog concurrently, then seeds the session from the
   effective recipe.
2. Commands go through the reducer; each one returns the refreshed views and
   price quote.
3. Confirming builds a frozen CartLine, adds it to the buyer's cart and
   closes the dialog. Nothing is written to the database.

Open dialogs and carts live in the in-memory stores on `app.state`
(see app_factory.py). An expired dialog answers 404.

Rate Limiting:
--------------
Open, command and confirm endpoints are rate limited per client address
(default: 120/minute, RATE_LIMIT_DIALOG).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import sessionmaker

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_dialog
from ..customizer.cart import Cart
from ..customizer.commands import Adjust, Command, Confirm, DialogState, SelectSize, dispatch, reduce
from ..customizer.tax_utils import round_money
from ..customizer.views import available_to_add_view, current_recipe_view
from ..db import get_session_factory
from ..schemas.cart import CartLineOut
from ..schemas.catalog import ProductSizeOut
from ..schemas.customize import (
    AdjustCommandIn,
    ConfirmRequest,
    ConfirmResponse,
    DialogCommandsRequest,
    DialogOpenRequest,
    DialogOut,
    ViewGroupOut,
)
from ..services.catalog import CatalogUnavailableError, ProductNotFoundError
from ..services.dialog_loader import ProductNotPriceableError, open_customization
from .cart import cart_out


logger = logging.getLogger(__name__)

# Router definition
customize_router = APIRouter(prefix="/customize", tags=["Customize"])

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


# =============================================================================
# Helper Functions
# =============================================================================

def _get_dialog(request: Request, dialog_id: str) -> DialogState:
    state = request.app.state.dialogs.get(dialog_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Dialog not found or expired")
    return state


def _to_command(command_in) -> Command:
    if isinstance(command_in, AdjustCommandIn):
        return Adjust(ingredient_id=command_in.ingredient_id, delta=command_in.delta)
    return SelectSize(size_id=command_in.size_id)


def dialog_out(dialog_id: str, state: DialogState) -> DialogOut:
    """Serialize a dialog state with both ingredient views and the price quote."""
    context = state.context
    session = state.session
    return DialogOut(
        dialog_id=dialog_id,
        product_id=context.product.id,
        product_name=context.product.name,
        selected_size_id=session.selected_size_id,
        sizes=[ProductSizeOut.model_validate(s) for s in context.sizes],
        base_price=state.quote.base_price,
        price_adjustment=round_money(state.quote.adjustment),
        final_price=round_money(state.quote.final_price),
        current_recipe=[
            ViewGroupOut.model_validate(g) for g in current_recipe_view(session, context.unit_types)
        ],
        available_to_add=[
            ViewGroupOut.model_validate(g) for g in available_to_add_view(session, context.unit_types)
        ],
        degraded=context.degraded,
    )


# =============================================================================
# Dialog Endpoints
# =============================================================================

@customize_router.post("/dialogs", response_model=DialogOut, status_code=201)
@limiter.limit(get_rate_limit_dialog)
async def open_dialog_endpoint(
    request: Request,
    payload: DialogOpenRequest,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> DialogOut:
    """Open a customization dialog for a product."""
    try:
        state = await open_customization(session_factory, payload.product_id, payload.size_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    except ProductNotPriceableError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    dialogs = request.app.state.dialogs
    dialog_id = dialogs.new_key()
    dialogs.put(dialog_id, state)

    logger.info(
        "Opened dialog %s for %s (size %s)",
        dialog_id, state.context.product.name, state.session.selected_size_id,
    )
    return dialog_out(dialog_id, state)


@customize_router.get("/dialogs/{dialog_id}", response_model=DialogOut)
def get_dialog(request: Request, dialog_id: str) -> DialogOut:
    """Current state of an open dialog."""
    return dialog_out(dialog_id, _get_dialog(request, dialog_id))


@customize_router.post("/dialogs/{dialog_id}/commands", response_model=DialogOut)
@limiter.limit(get_rate_limit_dialog)
def apply_dialog_commands(
    request: Request,
    dialog_id: str,
    payload: DialogCommandsRequest,
) -> DialogOut:
    """Apply adjust / select_size commands in order."""
    state = _get_dialog(request, dialog_id)
    commands: List[Command] = [_to_command(c) for c in payload.commands]
    state = dispatch(state, commands)
    request.app.state.dialogs.put(dialog_id, state)
    return dialog_out(dialog_id, state)


@customize_router.post("/dialogs/{dialog_id}/confirm", response_model=ConfirmResponse)
@limiter.limit(get_rate_limit_dialog)
def confirm_dialog(
    request: Request,
    dialog_id: str,
    payload: Optional[ConfirmRequest] = None,
) -> ConfirmResponse:
    """
    Confirm a dialog into a cart.

    The line is added to `cart_id` when that cart exists, otherwise to a new
    cart under that id (or a generated one). The dialog is closed either way.
    """
    payload = payload or ConfirmRequest()
    state = _get_dialog(request, dialog_id)
    state = reduce(state, Confirm(quantity=payload.quantity))

    carts = request.app.state.carts
    cart_id = payload.cart_id or carts.new_key()

    def add(cart: Cart) -> ConfirmResponse:
        line = cart.add_line(state.confirmed_line)
        return ConfirmResponse(
            cart_id=cart.cart_id,
            line=CartLineOut.model_validate(line),
            cart=cart_out(cart),
        )

    _, response = carts.update(cart_id, add, default=lambda: Cart(cart_id))
    request.app.state.dialogs.pop(dialog_id)
    return response


@customize_router.delete("/dialogs/{dialog_id}", status_code=204)
def cancel_dialog(request: Request, dialog_id: str) -> Response:
    """Discard an open dialog. Nothing was committed, so nothing is undone."""
    if request.app.state.dialogs.pop(dialog_id) is None:
        raise HTTPException(status_code=404, detail="Dialog not found or expired")
    logger.debug("Cancelled dialog %s", dialog_id)
    return Response(status_code=204)
