"""Shared pytest fixtures for costbook tests."""

import tempfile
import os
from decimal import Decimal
from types import SimpleNamespace

import pytest

from costbook.database.factories import create_sqlite_database
from costbook.domain.account import AccountService
from costbook.domain.category import CategoryService
from costbook.domain.department import DepartmentService
from costbook.domain.entities import LaborCostMode, LineInput, RecipeDraft, SellMode
from costbook.domain.ingredient import IngredientService
from costbook.domain.labor_rate import LaborRateResolver, LaborRateService
from costbook.domain.ledger import CostService, IncomeService
from costbook.domain.recipe import RecipeService
from costbook.domain.summary import FinancialAggregator
from costbook.domain.visibility import VisibilityResolver


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def department_service(temp_db):
    return DepartmentService(temp_db)


@pytest.fixture
def ingredient_service(temp_db):
    return IngredientService(temp_db)


@pytest.fixture
def rate_service(temp_db):
    return LaborRateService(temp_db)


@pytest.fixture
def rate_resolver(temp_db):
    return LaborRateResolver(temp_db)


@pytest.fixture
def recipe_service(temp_db):
    return RecipeService(temp_db)


@pytest.fixture
def cost_service(temp_db):
    return CostService(temp_db)


@pytest.fixture
def income_service(temp_db):
    return IncomeService(temp_db)


@pytest.fixture
def aggregator(temp_db):
    return FinancialAggregator(temp_db)


@pytest.fixture
def visibility(temp_db):
    return VisibilityResolver(temp_db)


@pytest.fixture
def tenants(account_service):
    """Two account groups: Bakery (root) with two shops, and an unrelated Deli."""
    root_id = account_service.create_account("Bakery")
    shop_a_id = account_service.create_account("Bakery Shop A", parent_id=root_id)
    shop_b_id = account_service.create_account("Bakery Shop B", parent_id=root_id)
    other_id = account_service.create_account("Deli")
    return SimpleNamespace(
        root=account_service.get_account(root_id),
        shop_a=account_service.get_account(shop_a_id),
        shop_b=account_service.get_account(shop_b_id),
        other=account_service.get_account(other_id),
    )


@pytest.fixture
def flour(ingredient_service, tenants):
    """Flour at 10.00 per kg owned by the Bakery root."""
    ingredient_id = ingredient_service.create_ingredient(tenants.root, "Flour", Decimal("10.00"))
    return ingredient_service.get_ingredient(tenants.root, ingredient_id)


def make_draft(lines, **fields) -> RecipeDraft:
    """Build a piece-mode recipe draft with sensible defaults."""
    values = dict(
        name="Baguette",
        category_id=None,
        department_id=None,
        sell_mode=SellMode.PIECE,
        labor_cost_mode=LaborCostMode.INTERNAL,
        labour_minutes=0,
        lines=tuple(LineInput(ingredient_id, Decimal(str(grams))) for ingredient_id, grams in lines),
        total_pieces=10,
    )
    values.update(fields)
    return RecipeDraft(**values)


@pytest.fixture
def draft():
    """Factory for recipe drafts: draft([(ingredient_id, grams), ...], **fields)."""
    return make_draft


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
