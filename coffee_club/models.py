from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    Index,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# --- Unit types ('shots', 'pumps', 'oz', ...) ---

class UnitType(Base):
    """Named unit an ingredient is measured in. `name` is the canonical key."""
    __tablename__ = "unit_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)          # 'shots', 'pumps', 'parts'
    display_name = Column(String, nullable=False)               # 'Shots'
    abbreviation = Column(String, nullable=False, default="")   # 'shot'
    display_order = Column(Integer, nullable=False, default=0)


# --- Ingredient catalog ---

class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)   # base_drink, sugar, liquid_creamer, topping, add_in
    unit_type = Column(String, nullable=False)              # UnitType.name
    unit_cost = Column(Float, nullable=False, default=0.0)  # currency per unit
    available = Column(Boolean, nullable=False, default=True)  # False = soft-deleted
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    recipe_entries = relationship("RecipeEntry", back_populates="ingredient", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("category", "name", name="uix_ingredient_category_name"),
    )


# --- Products and their size sets ---

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)   # 'drink', 'food', 'merch', ...
    price = Column(Float, nullable=True)                    # required only when there is no size set
    tax_rate = Column(Float, nullable=False, default=0.0)
    has_sizes = Column(Boolean, nullable=False, default=False)
    fixed_size_ounces = Column(Float, nullable=True)        # only meaningful when has_sizes is False
    archived = Column(Boolean, nullable=False, default=False)

    sizes = relationship(
        "ProductSize",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductSize.display_order",
    )
    recipe_entries = relationship("RecipeEntry", back_populates="product", cascade="all, delete-orphan")


class ProductSize(Base):
    """A named size of a product. A non-empty size set overrides Product.price."""
    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    size_name = Column(String, nullable=False)      # 'Small', 'Medium', 'Large'
    size_ounces = Column(Float, nullable=True)
    price = Column(Float, nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)

    product = relationship("Product", back_populates="sizes")
    recipe_entries = relationship("RecipeEntry", back_populates="size", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("product_id", "size_name", name="uix_product_size_name"),
    )


# --- Recipe store: (product, size | DEFAULT, ingredient) -> entry ---

class RecipeEntry(Base):
    """
    One ingredient line of a product recipe.

    size_id NULL marks the DEFAULT layer that applies to every size unless a
    size-specific entry for the same ingredient exists.
    """
    __tablename__ = "recipe_entries"

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(String, nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    size_id = Column(Integer, ForeignKey("product_sizes.id", ondelete="CASCADE"), nullable=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False)

    default_amount = Column(Float, nullable=False, default=0.0)
    unit_type_override = Column(String, nullable=True)   # falls back to Ingredient.unit_type
    is_required = Column(Boolean, nullable=False, default=False)
    is_removable = Column(Boolean, nullable=False, default=True)
    is_addable = Column(Boolean, nullable=False, default=True)
    use_default_price = Column(Boolean, nullable=False, default=True)
    custom_price = Column(Float, nullable=True)          # stored, not read by pricing

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product = relationship("Product", back_populates="recipe_entries")
    size = relationship("ProductSize", back_populates="recipe_entries")
    ingredient = relationship("Ingredient", back_populates="recipe_entries")

    __table_args__ = (
        UniqueConstraint("product_id", "size_id", "ingredient_id", name="uix_recipe_entry_scope"),
        Index("ix_recipe_entries_product_size", "product_id", "size_id"),
    )
