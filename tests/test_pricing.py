"""
Tests for customization pricing.

Money assertions use pytest.approx: prices are floats and only rounded when
a cart line is frozen.
"""
import pytest

from coffee_club.customizer.pricing import line_contribution, price, price_session
from coffee_club.customizer.records import IngredientInfo, RecipeLine
from coffee_club.customizer.session import adjust, initialize


ESPRESSO = IngredientInfo(id=1, name="Espresso Shot", category="base_drink", unit_type="shots", unit_cost=0.75)
MILK = IngredientInfo(id=2, name="Steamed Milk", category="liquid_creamer", unit_type="oz", unit_cost=0.10)
VANILLA = IngredientInfo(id=3, name="Vanilla Syrup", category="sugar", unit_type="pumps", unit_cost=0.25)
PUMPKIN = IngredientInfo(id=4, name="Pumpkin Spice Syrup", category="sugar", unit_type="pumps", unit_cost=0.30)
CATALOG = {i.id: i for i in (ESPRESSO, MILK, VANILLA, PUMPKIN)}


def _line(ingredient, amount, use_default_price=True, **kwargs):
    return RecipeLine(
        product_id=1,
        ingredient_id=ingredient.id,
        default_amount=amount,
        use_default_price=use_default_price,
        **kwargs,
    )


def _defaults(recipe):
    return {i: e.default_amount for i, e in recipe.items()}


class TestZeroAdjustment:

    def test_defaults_cost_nothing_extra(self):
        recipe = {
            ESPRESSO.id: _line(ESPRESSO, 2),
            VANILLA.id: _line(VANILLA, 3),
            MILK.id: _line(MILK, 10),
        }
        quote = price(4.50, recipe, _defaults(recipe), CATALOG)
        assert quote.adjustment == 0
        assert quote.final_price == 4.50

    def test_empty_recipe_and_no_add_ins(self):
        quote = price(2.50, {}, {}, CATALOG)
        assert quote.adjustment == 0
        assert quote.final_price == 2.50


class TestDeltaCharging:

    @pytest.mark.parametrize("k", [1, 2, 5])
    def test_increase_charges_k_units(self, k):
        recipe = {ESPRESSO.id: _line(ESPRESSO, 2)}
        base = price(4.50, recipe, {ESPRESSO.id: 2}, CATALOG)
        more = price(4.50, recipe, {ESPRESSO.id: 2 + k}, CATALOG)
        assert more.final_price - base.final_price == pytest.approx(k * 0.75)

    def test_decrease_credits_units(self):
        recipe = {VANILLA.id: _line(VANILLA, 3)}
        quote = price(5.00, recipe, {VANILLA.id: 1}, CATALOG)
        assert quote.adjustment == pytest.approx(-0.50)

    def test_missing_quantity_counts_as_zero(self):
        recipe = {ESPRESSO.id: _line(ESPRESSO, 2)}
        quote = price(4.50, recipe, {}, CATALOG)
        assert quote.adjustment == pytest.approx(-1.50)

    def test_no_floor_on_final_price(self):
        recipe = {ESPRESSO.id: _line(ESPRESSO, 10)}
        quote = price(4.00, recipe, {ESPRESSO.id: 0}, CATALOG)
        assert quote.final_price == pytest.approx(-3.50)


class TestIncludedIngredients:

    @pytest.mark.parametrize("amount", [0, 4, 10, 16, 40])
    def test_use_default_price_false_never_charges(self, amount):
        recipe = {MILK.id: _line(MILK, 10, use_default_price=False, custom_price=0.80)}
        quote = price(4.50, recipe, {MILK.id: amount}, CATALOG)
        assert quote.adjustment == 0


class TestAddIns:

    def test_add_in_full_charge(self):
        quote = price(4.50, {}, {PUMPKIN.id: 2}, CATALOG)
        assert quote.adjustment == pytest.approx(0.60)

    def test_add_in_independent_of_other_flags(self):
        recipe = {
            MILK.id: _line(MILK, 10, use_default_price=False),
            ESPRESSO.id: _line(ESPRESSO, 2),
        }
        quantities = {MILK.id: 14, ESPRESSO.id: 2, PUMPKIN.id: 2}
        quote = price(4.50, recipe, quantities, CATALOG)
        assert quote.adjustment == pytest.approx(0.60)

    def test_add_in_at_zero_costs_nothing(self):
        quote = price(4.50, {}, {PUMPKIN.id: 0}, CATALOG)
        assert quote.adjustment == 0

    def test_ingredient_missing_from_catalog_costs_nothing(self):
        quote = price(4.50, {}, {999: 3}, CATALOG)
        assert quote.adjustment == 0


class TestRatioParts:

    def test_parts_recipe_lines_are_not_costed(self):
        recipe = {ESPRESSO.id: _line(ESPRESSO, 1, unit_type_override="parts")}
        quote = price(3.75, recipe, {ESPRESSO.id: 3}, CATALOG)
        assert quote.adjustment == 0

    def test_line_contribution_for_parts(self):
        entry = _line(MILK, 1, unit_type_override="parts")
        assert line_contribution(MILK.id, 5, entry, MILK) == 0


class TestLatteScenarios:
    """Latte, Medium at $4.50, DEFAULT recipe of 2 espresso shots."""

    def _session(self):
        recipe = {ESPRESSO.id: _line(ESPRESSO, 2)}
        return initialize(recipe, CATALOG.values(), product_id=1, selected_size_id=11, base_price=4.50)

    def test_no_edits(self):
        assert price_session(self._session()).final_price == pytest.approx(4.50)

    def test_extra_shot(self):
        session = adjust(self._session(), ESPRESSO.id, 1)
        assert price_session(session).final_price == pytest.approx(5.25)

    def test_extra_shot_and_pumpkin_spice(self):
        session = adjust(self._session(), ESPRESSO.id, 1)
        session = adjust(session, PUMPKIN.id, 2)
        quote = price_session(session)
        assert quote.adjustment == pytest.approx(1.35)
        assert quote.final_price == pytest.approx(5.85)
