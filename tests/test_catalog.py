"""
Tests for catalog reads and the seed-ingredient fallback.
"""
import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from coffee_club.models import Ingredient, Product, ProductSize
from coffee_club.services.catalog import (
    ALL_SCOPES,
    SEED_INGREDIENTS,
    ProductNotFoundError,
    fetch_ingredients,
    get_ingredients,
    get_product,
    get_product_recipe,
    get_product_sizes,
    get_recipe_entries,
    get_unit_types,
    list_products,
)


class TestIngredients:

    def test_ordered_by_category_then_name(self, db_session, seeded):
        ingredients = get_ingredients(db_session)
        keys = [(i.category, i.name) for i in ingredients]
        assert keys == sorted(keys)
        assert len(ingredients) == len(SEED_INGREDIENTS)

    def test_unavailable_ingredients_hidden(self, db_session, seeded):
        whip = db_session.query(Ingredient).filter(Ingredient.name == "Whipped Cream").one()
        whip.available = False
        db_session.commit()

        names = {i.name for i in get_ingredients(db_session)}
        assert "Whipped Cream" not in names
        all_names = {i.name for i in get_ingredients(db_session, include_unavailable=True)}
        assert "Whipped Cream" in all_names

    def test_fetch_success(self, db_session, seeded):
        result = fetch_ingredients(db_session)
        assert result.success
        assert not result.degraded
        assert all(i.id > 0 for i in result.ingredients)

    def test_fetch_falls_back_to_seed_set(self, caplog):
        # No tables at all: every read fails
        engine = create_engine("sqlite://")
        db = sessionmaker(bind=engine)()
        try:
            with caplog.at_level(logging.ERROR, logger="coffee_club.services.catalog"):
                result = fetch_ingredients(db)
        finally:
            db.close()
            engine.dispose()

        assert result.success is False
        assert result.degraded
        assert result.error
        assert len(result.ingredients) == 13
        assert {i.name for i in result.ingredients} >= {"Espresso Shot", "Pumpkin Spice Syrup"}
        assert any("seed ingredients" in r.getMessage() for r in caplog.records)


class TestProducts:

    def test_get_product(self, db_session, seeded):
        latte = get_product(db_session, seeded["products"]["Latte"])
        assert latte.name == "Latte"
        assert latte.has_sizes
        assert latte.price is None

    def test_missing_product(self, db_session, seeded):
        with pytest.raises(ProductNotFoundError):
            get_product(db_session, 99999)

    def test_archived_product_is_hidden(self, db_session, seeded):
        drip = db_session.get(Product, seeded["products"]["House Drip Coffee"])
        drip.archived = True
        db_session.commit()

        with pytest.raises(ProductNotFoundError):
            get_product(db_session, drip.id)
        assert "House Drip Coffee" not in {p.name for p in list_products(db_session)}

    def test_list_products_by_category(self, db_session, seeded):
        assert len(list_products(db_session, "DRINK")) == 3
        assert list_products(db_session, "merch") == []


class TestSizes:

    def test_ordered_by_display_order(self, db_session, seeded):
        sizes = get_product_sizes(db_session, seeded["products"]["Latte"])
        assert [s.size_name for s in sizes] == ["Small", "Medium", "Large"]
        assert [s.price for s in sizes] == [4.00, 4.50, 5.00]

    def test_unavailable_sizes_hidden(self, db_session, seeded):
        large = db_session.get(ProductSize, seeded["sizes"][("Latte", "Large")])
        large.available = False
        db_session.commit()

        sizes = get_product_sizes(db_session, seeded["products"]["Latte"])
        assert [s.size_name for s in sizes] == ["Small", "Medium"]

    def test_unsized_product(self, db_session, seeded):
        assert get_product_sizes(db_session, seeded["products"]["Cortado"]) == []


class TestRecipeEntries:

    def test_scopes(self, db_session, seeded):
        latte_id = seeded["products"]["Latte"]
        large_id = seeded["sizes"][("Latte", "Large")]

        default = get_recipe_entries(db_session, latte_id)
        large = get_recipe_entries(db_session, latte_id, large_id)
        everything = get_recipe_entries(db_session, latte_id, ALL_SCOPES)

        assert len(default) == 2
        assert all(e.is_default_layer for e in default)
        assert [e.default_amount for e in large] == [12]
        assert len(everything) == 3

    def test_product_recipe_includes_ingredients(self, db_session, seeded):
        recipe = get_product_recipe(db_session, seeded["products"]["Cortado"])
        assert {e.unit_type_override for e in recipe.entries} == {"parts"}
        assert {i.name for i in recipe.ingredients.values()} == {"Espresso Shot", "Steamed Milk"}

    def test_product_without_recipe(self, db_session, seeded):
        recipe = get_product_recipe(db_session, seeded["products"]["House Drip Coffee"])
        assert recipe.entries == []


def test_unit_types_ordered(db_session, seeded):
    names = [u.name for u in get_unit_types(db_session)]
    assert names == ["shots", "pumps", "oz", "tsp", "packets", "count", "parts"]
