"""
Tests for confirmation (session -> CartLine) and the cart aggregator.
"""
import pytest

from coffee_club.customizer.cart import Cart, CartLine, confirm, plain_line
from coffee_club.customizer.records import IngredientInfo, ProductInfo, RecipeLine, SizeInfo
from coffee_club.customizer.session import adjust, initialize


ESPRESSO = IngredientInfo(id=1, name="Espresso Shot", category="base_drink", unit_type="shots", unit_cost=0.75)
MILK = IngredientInfo(id=2, name="Steamed Milk", category="liquid_creamer", unit_type="oz", unit_cost=0.10)
PUMPKIN = IngredientInfo(id=3, name="Pumpkin Spice Syrup", category="sugar", unit_type="pumps", unit_cost=0.30)

LATTE = ProductInfo(id=1, name="Latte", price=None, tax_rate=0.08, has_sizes=True)
DRIP = ProductInfo(id=2, name="House Drip Coffee", price=2.50, tax_rate=0.08)
MEDIUM = SizeInfo(id=11, product_id=1, size_name="Medium", price=4.50, display_order=2)


def _session():
    recipe = {
        ESPRESSO.id: RecipeLine(product_id=1, ingredient_id=ESPRESSO.id, default_amount=2),
        MILK.id: RecipeLine(product_id=1, ingredient_id=MILK.id, default_amount=10, use_default_price=False),
    }
    return initialize(
        recipe,
        [ESPRESSO, MILK, PUMPKIN],
        product_id=LATTE.id,
        selected_size_id=MEDIUM.id,
        base_price=MEDIUM.price,
    )


def _confirm(session, quantity=1):
    return confirm(session, product_name="Latte", tax_rate=0.08, size_name="Medium", quantity=quantity)


class TestConfirm:

    def test_unchanged_drink(self):
        line = _confirm(_session())

        assert line.final_price == 4.50
        assert line.price_adjustment == 0
        assert line.customizations == ()
        names = [e.ingredient_name for e in line.recipe_snapshot]
        assert names == ["Espresso Shot", "Steamed Milk"]
        assert all(e.was_in_default_recipe for e in line.recipe_snapshot)

    def test_snapshot_and_customizations(self):
        session = adjust(_session(), ESPRESSO.id, 1)
        session = adjust(session, PUMPKIN.id, 2)
        line = _confirm(session)

        assert line.final_price == pytest.approx(5.85)
        assert line.price_adjustment == pytest.approx(1.35)

        snapshot = {e.ingredient_id: e for e in line.recipe_snapshot}
        assert snapshot[ESPRESSO.id].amount == 3
        assert snapshot[ESPRESSO.id].default_amount == 2
        assert snapshot[MILK.id].amount == 10
        assert snapshot[PUMPKIN.id].was_in_default_recipe is False
        assert snapshot[PUMPKIN.id].unit_type == "pumps"

        customizations = {c.ingredient_id: c for c in line.customizations}
        assert set(customizations) == {ESPRESSO.id, PUMPKIN.id}
        assert customizations[ESPRESSO.id].action == "add"
        assert customizations[ESPRESSO.id].cost == pytest.approx(0.75)
        assert customizations[PUMPKIN.id].cost == pytest.approx(0.60)

    def test_removed_recipe_ingredient(self):
        session = adjust(_session(), ESPRESSO.id, -2)
        line = _confirm(session)

        assert ESPRESSO.id not in {e.ingredient_id for e in line.recipe_snapshot}
        assert ESPRESSO.id not in {c.ingredient_id for c in line.customizations}
        assert line.price_adjustment == pytest.approx(-1.50)
        assert line.final_price == pytest.approx(3.00)

    def test_customizations_are_part_of_snapshot(self):
        session = adjust(_session(), ESPRESSO.id, -1)
        session = adjust(session, MILK.id, -10)
        session = adjust(session, PUMPKIN.id, 1)
        line = _confirm(session)

        snapshot_ids = {e.ingredient_id for e in line.recipe_snapshot}
        customization_ids = {c.ingredient_id for c in line.customizations}
        assert customization_ids <= snapshot_ids
        assert customization_ids == {ESPRESSO.id, PUMPKIN.id}
        reduced = next(c for c in line.customizations if c.ingredient_id == ESPRESSO.id)
        assert reduced.action == "remove"
        assert reduced.difference == -1

    def test_line_keeps_no_link_to_session(self):
        session = _session()
        line = _confirm(session)
        adjust(session, ESPRESSO.id, 5)
        assert line.final_price == 4.50

    def test_line_totals(self):
        line = _confirm(adjust(_session(), ESPRESSO.id, 1), quantity=2)
        assert line.subtotal == pytest.approx(10.50)
        assert line.tax == pytest.approx(0.84)
        assert line.total == pytest.approx(11.34)


class TestPlainLine:

    def test_fixed_price_product(self):
        line = plain_line(DRIP)
        assert line.final_price == 2.50
        assert line.is_plain
        assert line.selected_size_id is None

    def test_sized_product(self):
        line = plain_line(LATTE, MEDIUM, quantity=3)
        assert line.base_price == 4.50
        assert line.selected_size_name == "Medium"
        assert line.quantity == 3


class TestCart:

    def test_plain_lines_merge(self):
        cart = Cart("cart-1")
        cart.add_line(plain_line(DRIP))
        merged = cart.add_line(plain_line(DRIP, quantity=2))

        assert len(cart) == 1
        assert merged.quantity == 3

    def test_different_sizes_do_not_merge(self):
        cart = Cart()
        cart.add_line(plain_line(LATTE, MEDIUM))
        cart.add_line(plain_line(LATTE, SizeInfo(id=12, product_id=1, size_name="Large", price=5.0)))
        assert len(cart) == 2

    def test_customized_lines_never_merge(self):
        cart = Cart()
        cart.add_line(_confirm(_session()))
        cart.add_line(_confirm(_session()))
        assert len(cart) == 2

    def test_update_quantity(self):
        cart = Cart()
        line = cart.add_line(plain_line(DRIP))

        assert cart.update_quantity(line.line_id, 4) is True
        assert cart.get_line(line.line_id).quantity == 4

    def test_zero_quantity_removes_line(self):
        cart = Cart()
        line = cart.add_line(plain_line(DRIP))

        assert cart.update_quantity(line.line_id, 0) is True
        assert len(cart) == 0

    def test_unknown_line(self):
        cart = Cart()
        assert cart.update_quantity("nope", 2) is False
        assert cart.remove_line("nope") is False

    def test_totals(self):
        cart = Cart()
        cart.add_line(plain_line(DRIP, quantity=2))
        cart.add_line(CartLine(
            product_id=3, product_name="Scone", base_price=3.00,
            price_adjustment=0.0, final_price=3.00, tax_rate=0.0,
        ))

        totals = cart.totals()
        assert totals.subtotal == pytest.approx(8.00)
        assert totals.tax == pytest.approx(0.40)
        assert totals.total == pytest.approx(8.40)

    def test_clear(self):
        cart = Cart()
        cart.add_line(plain_line(DRIP))
        cart.clear()
        assert cart.lines == []
