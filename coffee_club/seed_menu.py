"""
Demo catalog for local development and tests.

Seeds the unit catalog, the ingredient catalog (the same thirteen
ingredients the dialog falls back to), and three drinks:

- Latte: Small/Medium/Large. DEFAULT recipe of 2 espresso shots (charged
  per shot) and 10 oz steamed milk (included). Large pours 12 oz of milk.
- Cortado: fixed price, ratio recipe (1 part espresso, 1 part milk).
- House Drip Coffee: fixed price, no recipe (nothing to customize).

Run with:
    python -m coffee_club.seed_menu
"""

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from .config import DEFAULT_TAX_RATE, get_shop_id, is_placeholder_id
from .models import Ingredient, Product, ProductSize, UnitType
from .services.catalog import SEED_INGREDIENTS
from .services.recipe_store import set_recipe


logger = logging.getLogger(__name__)

DEMO_SHOP_ID = "coffee-club-demo"

UNIT_TYPES = [
    # name, display_name, abbreviation, display_order
    ("shots", "Shots", "shot", 1),
    ("pumps", "Pumps", "pump", 2),
    ("oz", "Ounces", "oz", 3),
    ("tsp", "Teaspoons", "tsp", 4),
    ("packets", "Packets", "packet", 5),
    ("count", "Count", "", 6),
    ("parts", "Parts", "Part", 7),
]


def seed_menu(db: Session, shop_id: str = None) -> Dict[str, Any]:
    """
    Seed the demo catalog into an empty database.

    Returns:
        Dict of created ids: {"ingredients": {name: id},
        "products": {name: id}, "sizes": {(product, size): id}}.
        Empty when the database already has products.
    """
    existing = db.query(Product).count()
    if existing > 0:
        logger.info("Catalog already has %d products. Not seeding again.", existing)
        return {}

    if shop_id is None:
        shop_id = get_shop_id()
        if is_placeholder_id(shop_id):
            shop_id = DEMO_SHOP_ID

    for name, display_name, abbreviation, order in UNIT_TYPES:
        if db.query(UnitType).filter(UnitType.name == name).first() is None:
            db.add(UnitType(
                name=name,
                display_name=display_name,
                abbreviation=abbreviation,
                display_order=order,
            ))

    ingredients = {}
    for seed in SEED_INGREDIENTS:
        row = Ingredient(
            name=seed.name,
            category=seed.category,
            unit_type=seed.unit_type,
            unit_cost=seed.unit_cost,
        )
        db.add(row)
        ingredients[seed.name] = row

    latte = Product(
        name="Latte",
        description="Espresso with steamed milk",
        category="drink",
        tax_rate=DEFAULT_TAX_RATE,
        has_sizes=True,
    )
    latte.sizes = [
        ProductSize(size_name="Small", size_ounces=12, price=4.00, display_order=1),
        ProductSize(size_name="Medium", size_ounces=16, price=4.50, display_order=2),
        ProductSize(size_name="Large", size_ounces=20, price=5.00, display_order=3),
    ]
    cortado = Product(
        name="Cortado",
        description="Equal parts espresso and warm milk",
        category="drink",
        price=3.75,
        tax_rate=DEFAULT_TAX_RATE,
        fixed_size_ounces=4.5,
    )
    drip = Product(
        name="House Drip Coffee",
        category="drink",
        price=2.50,
        tax_rate=DEFAULT_TAX_RATE,
    )
    db.add_all([latte, cortado, drip])
    db.commit()

    espresso_id = ingredients["Espresso Shot"].id
    milk_id = ingredients["Steamed Milk"].id
    sizes = {("Latte", s.size_name): s.id for s in latte.sizes}

    recipes = [
        (latte.id, None, [
            {"ingredient_id": espresso_id, "default_amount": 2, "is_required": True},
            {"ingredient_id": milk_id, "default_amount": 10, "use_default_price": False},
        ]),
        (latte.id, sizes[("Latte", "Large")], [
            {"ingredient_id": milk_id, "default_amount": 12, "use_default_price": False},
        ]),
        (cortado.id, None, [
            {"ingredient_id": espresso_id, "default_amount": 1, "unit_type_override": "parts"},
            {"ingredient_id": milk_id, "default_amount": 1, "unit_type_override": "parts"},
        ]),
    ]
    for product_id, size_id, entries in recipes:
        result = set_recipe(db, product_id, size_id, entries, shop_id=shop_id)
        if not result.success:
            raise RuntimeError(f"Could not seed recipe for product {product_id}: {result.error}")

    logger.info("Seeded %d ingredients and 3 products", len(ingredients))
    return {
        "ingredients": {name: row.id for name, row in ingredients.items()},
        "products": {p.name: p.id for p in (latte, cortado, drip)},
        "sizes": sizes,
    }


if __name__ == "__main__":
    from .db import SessionLocal, init_db
    from .logging_config import setup_logging

    setup_logging()
    init_db()
    session = SessionLocal()
    try:
        seed_menu(session)
    finally:
        session.close()
