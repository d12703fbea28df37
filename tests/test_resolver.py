"""
Tests for recipe resolution (DEFAULT layer + size override layer).
"""
from coffee_club.customizer.records import DEFAULT_SIZE, RecipeLine
from coffee_club.customizer.resolver import resolve


LATTE = 1
MEDIUM = 11
LARGE = 12
ESPRESSO = 100
MILK = 101
VANILLA = 102


def _entry(ingredient_id, amount, size_id=DEFAULT_SIZE, product_id=LATTE, **flags):
    return RecipeLine(
        product_id=product_id,
        ingredient_id=ingredient_id,
        default_amount=amount,
        size_id=size_id,
        **flags,
    )


class TestResolveOverride:
    """A size entry replaces the DEFAULT entry for the same ingredient."""

    def test_size_entry_replaces_default_entry_entirely(self):
        default = _entry(
            ESPRESSO, 2,
            is_required=True, is_removable=False, use_default_price=True,
        )
        large = _entry(
            ESPRESSO, 5, size_id=LARGE,
            is_required=False, is_removable=True, use_default_price=False,
            unit_type_override="shots", custom_price=1.25,
        )

        effective = resolve(LATTE, LARGE, [default, large])

        assert effective[ESPRESSO] is large
        assert effective[ESPRESSO].default_amount == 5
        assert effective[ESPRESSO].is_required is False
        assert effective[ESPRESSO].use_default_price is False

    def test_override_order_does_not_matter(self):
        default = _entry(ESPRESSO, 2)
        large = _entry(ESPRESSO, 5, size_id=LARGE)

        assert resolve(LATTE, LARGE, [large, default])[ESPRESSO] is large

    def test_large_overrides_milk_but_keeps_default_espresso(self):
        entries = [
            _entry(ESPRESSO, 2),
            _entry(MILK, 10, use_default_price=False),
            _entry(MILK, 12, size_id=LARGE, use_default_price=False),
        ]

        effective = resolve(LATTE, LARGE, entries)

        assert effective[ESPRESSO].default_amount == 2
        assert effective[ESPRESSO].is_default_layer
        assert effective[MILK].default_amount == 12
        assert effective[MILK].size_id == LARGE


class TestResolveFallback:
    """Ingredients with only a DEFAULT entry resolve to it for every size."""

    def test_default_entry_used_for_every_size(self):
        default = _entry(VANILLA, 3)
        entries = [default, _entry(MILK, 12, size_id=LARGE)]

        for size_id in (None, MEDIUM, LARGE, 999):
            assert resolve(LATTE, size_id, entries)[VANILLA] is default

    def test_no_size_selected_ignores_size_layers(self):
        entries = [_entry(ESPRESSO, 2), _entry(MILK, 12, size_id=LARGE)]

        effective = resolve(LATTE, None, entries)

        assert set(effective) == {ESPRESSO}

    def test_other_size_layers_are_ignored(self):
        entries = [_entry(ESPRESSO, 2), _entry(ESPRESSO, 3, size_id=MEDIUM)]

        assert resolve(LATTE, LARGE, entries)[ESPRESSO].default_amount == 2

    def test_size_only_ingredient_appears_for_that_size(self):
        entries = [_entry(ESPRESSO, 2), _entry(VANILLA, 1, size_id=LARGE)]

        assert VANILLA in resolve(LATTE, LARGE, entries)
        assert VANILLA not in resolve(LATTE, MEDIUM, entries)


class TestResolveEdges:

    def test_no_entries_gives_empty_recipe(self):
        assert resolve(LATTE, MEDIUM, []) == {}

    def test_entries_for_other_products_are_ignored(self):
        entries = [_entry(ESPRESSO, 2), _entry(MILK, 8, product_id=2)]

        assert set(resolve(LATTE, None, entries)) == {ESPRESSO}
