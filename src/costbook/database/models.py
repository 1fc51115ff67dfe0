"""SQLAlchemy models for costbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce foreign keys on SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Account(Base):
    """Tenant account model (single-level parent/child)."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")


class Department(Base):
    """Department model; NULL account_id means shared by every tenant."""

    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    share_percent = Column(Numeric(5, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class RateRecord(Base):
    """Immutable labor rate record; highest version wins per (account, department)."""

    __tablename__ = "rate_records"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    shop_cost_per_min = Column(Numeric(12, 6), default=0, nullable=False)
    external_cost_per_min = Column(Numeric(12, 6), default=0, nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_rate_records_latest", "account_id", "department_id", "version"),
    )


class Category(Base):
    """Cost/income/recipe category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Ingredient(Base):
    """Ingredient model; recipe_id marks a recipe shadow entry."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price_per_kg = Column(Numeric(10, 2), default=0, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # At most one shadow per (recipe, owner); NULL recipe_id rows are not constrained
    __table_args__ = (UniqueConstraint("recipe_id", "account_id", name="uq_shadow_ingredient"),)


class Recipe(Base):
    """Recipe model."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    sell_mode = Column(String, nullable=False)
    labor_cost_mode = Column(String, nullable=False)
    labour_minutes = Column(Integer, default=0, nullable=False)
    total_pieces = Column(Integer, default=0, nullable=False)
    recipe_weight_g = Column(Numeric(10, 2), default=0, nullable=False)
    packing_cost = Column(Numeric(10, 2), default=0, nullable=False)
    selling_price_per_piece = Column(Numeric(10, 2), default=0, nullable=False)
    selling_price_per_kg = Column(Numeric(10, 2), default=0, nullable=False)
    vat_rate = Column(Numeric(5, 2), default=0, nullable=False)
    production_cost_per_kg = Column(Numeric(10, 2), default=0, nullable=False)
    declared_total = Column(Numeric(10, 2), default=0, nullable=False)
    potential_margin = Column(Numeric(10, 2), default=0, nullable=False)
    potential_margin_pct = Column(Numeric(7, 2), default=0, nullable=False)
    add_as_ingredient = Column(Boolean, default=False, nullable=False)
    unit_ingredient_cost = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    lines = relationship(
        "RecipeIngredientLine", back_populates="recipe", cascade="all, delete-orphan"
    )


class RecipeIngredientLine(Base):
    """Ingredient line owned by exactly one recipe."""

    __tablename__ = "recipe_ingredient_lines"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity_g = Column(Numeric(10, 2), nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="lines")


class CostRecord(Base):
    """Cost (expense) model."""

    __tablename__ = "costs"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    supplier = Column(String, nullable=False)
    identifier = Column(String, nullable=True)
    other_category = Column(String, nullable=True)


class IncomeRecord(Base):
    """Income model."""

    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    identifier = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
