"""
Tests for the checkout hand-off payload.
"""
import pytest

from coffee_club.customizer.cart import Cart, confirm, plain_line
from coffee_club.customizer.records import IngredientInfo, ProductInfo, RecipeLine
from coffee_club.customizer.session import adjust, initialize
from coffee_club.services.checkout import build_checkout_payload


ESPRESSO = IngredientInfo(id=1, name="Espresso Shot", category="base_drink", unit_type="shots", unit_cost=0.75)
VANILLA = IngredientInfo(id=2, name="Vanilla Syrup", category="sugar", unit_type="pumps", unit_cost=0.25)
DRIP = ProductInfo(id=2, name="House Drip Coffee", price=2.50, tax_rate=0.10)


def _latte_line():
    recipe = {ESPRESSO.id: RecipeLine(product_id=1, ingredient_id=ESPRESSO.id, default_amount=2)}
    session = initialize(recipe, [ESPRESSO, VANILLA], product_id=1, selected_size_id=11, base_price=4.50)
    session = adjust(session, ESPRESSO.id, -1)
    session = adjust(session, VANILLA.id, 2)
    return confirm(session, product_name="Latte", tax_rate=0.08, size_name="Medium")


def test_empty_cart_rejected():
    with pytest.raises(ValueError):
        build_checkout_payload(Cart())


def test_payload_lines_and_totals():
    cart = Cart("cart-42")
    cart.add_line(_latte_line())
    cart.add_line(plain_line(DRIP, quantity=2))

    payload = build_checkout_payload(cart)

    assert payload["cart_id"] == "cart-42"
    latte, drip = payload["items"]

    # 4.50 - 0.75 + 0.50
    assert latte["unit_price"] == pytest.approx(4.25)
    assert latte["selected_size"] == "Medium"
    assert latte["tax_amount"] == pytest.approx(0.34)
    actions = {c["ingredient_id"]: c["action"] for c in latte["customizations"]}
    assert actions == {ESPRESSO.id: "remove", VANILLA.id: "add"}
    costs = {c["ingredient_id"]: c["cost_adjustment"] for c in latte["customizations"]}
    assert costs[ESPRESSO.id] == pytest.approx(-0.75)
    assert costs[VANILLA.id] == pytest.approx(0.50)
    assert {r["ingredient_name"] for r in latte["recipe"]} == {"Espresso Shot", "Vanilla Syrup"}

    assert drip["quantity"] == 2
    assert drip["subtotal"] == pytest.approx(5.00)
    assert drip["customizations"] == []

    assert payload["subtotal"] == pytest.approx(9.25)
    assert payload["tax"] == pytest.approx(0.84)
    assert payload["total"] == pytest.approx(10.09)
