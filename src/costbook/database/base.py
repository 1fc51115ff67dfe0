"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Iterable, Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from costbook.domain.entities import (
    Account,
    Category,
    CategoryKind,
    CostRecord,
    Department,
    IncomeRecord,
    Ingredient,
    LineInput,
    RateRecord,
    Recipe,
    RecipeDraft,
    RecipeIngredientLine,
)


class Database(ABC):
    """Abstract record store for costbook.

    Every query that lists tenant data takes the set of account IDs the caller
    may see; the store itself does no authorization.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one unit: commit on success, roll back everything on error.

        Nested calls join the outermost unit.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, parent_id: Optional[int] = None) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Optional[Account]:
        """Get account by name."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def list_child_account_ids(self, parent_id: int) -> list[int]:
        """List IDs of accounts whose parent is parent_id."""
        pass

    @abstractmethod
    def count_account_records(self, account_id: int) -> int:
        """Count records (recipes, ingredients, costs, incomes, rates) owned by an account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    # Department operations
    @abstractmethod
    def create_department(
        self, name: str, account_id: Optional[int], share_percent: Decimal = Decimal("0")
    ) -> int:
        """Create a department (account_id None => shared). Returns department ID."""
        pass

    @abstractmethod
    def get_department(self, department_id: int) -> Optional[Department]:
        """Get department by ID."""
        pass

    @abstractmethod
    def list_departments(self, account_ids: Iterable[int]) -> list[Department]:
        """List departments owned by the given accounts plus shared ones."""
        pass

    # Rate record operations
    @abstractmethod
    def create_rate_record(
        self,
        account_id: int,
        department_id: Optional[int],
        shop_cost_per_min: Decimal,
        external_cost_per_min: Decimal,
    ) -> int:
        """Insert a new rate record with the next version. Returns record ID."""
        pass

    @abstractmethod
    def get_latest_rate_record(
        self, account_id: int, department_id: Optional[int]
    ) -> Optional[RateRecord]:
        """Most recent record for (account, department); department None => global record."""
        pass

    @abstractmethod
    def get_latest_department_rate_records(self, account_id: int) -> dict[int, RateRecord]:
        """Most recent department-scoped record per department for an account."""
        pass

    @abstractmethod
    def list_rate_records(
        self, account_id: int, department_id: Optional[int] = None
    ) -> list[RateRecord]:
        """List rate records newest first.

        Args:
            account_id: Owning root account
            department_id: Restrict to one department (None => every record
                of the account)
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, kind: CategoryKind, account_id: Optional[int] = None
    ) -> int:
        """Create a category (account_id None => global). Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, kind: CategoryKind, account_ids: Iterable[int]) -> list[Category]:
        """List global categories of a kind plus those owned by the given accounts."""
        pass

    # Ingredient operations
    @abstractmethod
    def create_ingredient(
        self,
        name: str,
        price_per_kg: Decimal,
        account_id: int,
        recipe_id: Optional[int] = None,
    ) -> int:
        """Create an ingredient. Returns ingredient ID."""
        pass

    @abstractmethod
    def get_ingredient(self, ingredient_id: int) -> Optional[Ingredient]:
        """Get ingredient by ID."""
        pass

    @abstractmethod
    def get_ingredients(self, ingredient_ids: Iterable[int]) -> dict[int, Ingredient]:
        """Get several ingredients keyed by ID (missing IDs are absent)."""
        pass

    @abstractmethod
    def list_ingredients(self, account_ids: Iterable[int]) -> list[Ingredient]:
        """List ingredients owned by the given accounts."""
        pass

    @abstractmethod
    def update_ingredient_price(self, ingredient_id: int, price_per_kg: Decimal) -> None:
        """Update an ingredient's price per kilogram."""
        pass

    @abstractmethod
    def delete_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient."""
        pass

    @abstractmethod
    def count_ingredient_usages(self, ingredient_id: int) -> int:
        """Count recipe lines referencing an ingredient."""
        pass

    @abstractmethod
    def get_shadow_ingredient(self, recipe_id: int, account_id: int) -> Optional[Ingredient]:
        """Get the shadow ingredient of a recipe for an owner, if any."""
        pass

    @abstractmethod
    def list_shadow_ingredients(self, recipe_id: int) -> list[Ingredient]:
        """List every shadow ingredient derived from a recipe."""
        pass

    @abstractmethod
    def upsert_shadow_ingredient(
        self, recipe_id: int, account_id: int, name: str, price_per_kg: Decimal
    ) -> int:
        """Create or update the shadow ingredient keyed by (recipe, owner). Returns its ID."""
        pass

    # Recipe operations
    @abstractmethod
    def create_recipe(
        self, account_id: int, draft: RecipeDraft, unit_ingredient_cost: Decimal
    ) -> int:
        """Create a recipe row from a draft (lines are not written). Returns recipe ID."""
        pass

    @abstractmethod
    def update_recipe(
        self, recipe_id: int, draft: RecipeDraft, unit_ingredient_cost: Decimal
    ) -> None:
        """Overwrite a recipe row from a draft (lines are not written)."""
        pass

    @abstractmethod
    def get_recipe(self, recipe_id: int) -> Optional[Recipe]:
        """Get recipe by ID."""
        pass

    @abstractmethod
    def list_recipes(self, account_ids: Iterable[int]) -> list[Recipe]:
        """List recipes owned by the given accounts, ordered by name."""
        pass

    @abstractmethod
    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe and its lines."""
        pass

    @abstractmethod
    def replace_recipe_lines(self, recipe_id: int, lines: Sequence[LineInput]) -> None:
        """Delete every line of a recipe and create the given ones."""
        pass

    @abstractmethod
    def get_recipe_lines(self, recipe_id: int) -> list[RecipeIngredientLine]:
        """Get the ingredient lines of a recipe."""
        pass

    # Cost operations
    @abstractmethod
    def create_cost(
        self,
        account_id: int,
        amount: Decimal,
        date: date,
        supplier: str,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
        other_category: Optional[str] = None,
    ) -> int:
        """Create a cost record. Returns cost ID."""
        pass

    @abstractmethod
    def get_cost(self, cost_id: int) -> Optional[CostRecord]:
        """Get cost by ID."""
        pass

    @abstractmethod
    def update_cost(
        self,
        cost_id: int,
        amount: Decimal,
        date: date,
        supplier: str,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
        other_category: Optional[str] = None,
    ) -> None:
        """Replace the editable fields of a cost record."""
        pass

    @abstractmethod
    def delete_cost(self, cost_id: int) -> None:
        """Delete a cost record."""
        pass

    @abstractmethod
    def list_costs(
        self,
        account_ids: Iterable[int],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[CostRecord]:
        """List cost records (newest first); end_date is exclusive."""
        pass

    # Income operations
    @abstractmethod
    def create_income(
        self,
        account_id: int,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> int:
        """Create an income record. Returns income ID."""
        pass

    @abstractmethod
    def get_income(self, income_id: int) -> Optional[IncomeRecord]:
        """Get income by ID."""
        pass

    @abstractmethod
    def update_income(
        self,
        income_id: int,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> None:
        """Replace the editable fields of an income record."""
        pass

    @abstractmethod
    def delete_income(self, income_id: int) -> None:
        """Delete an income record."""
        pass

    @abstractmethod
    def list_incomes(
        self,
        account_ids: Iterable[int],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[IncomeRecord]:
        """List income records (newest first); end_date is exclusive."""
        pass

    # Aggregations
    @abstractmethod
    def sum_costs_by_category(
        self, account_ids: Iterable[int], start_date: date, end_date: date
    ) -> dict[Optional[int], Decimal]:
        """Sum cost amounts per category in [start_date, end_date).

        Categories without records are absent; None keys uncategorized costs.
        """
        pass

    @abstractmethod
    def sum_costs_by_month(self, account_ids: Iterable[int], year: int) -> dict[int, Decimal]:
        """Sum cost amounts per month (1-12) of a year; empty months are absent."""
        pass

    @abstractmethod
    def sum_incomes_by_month(self, account_ids: Iterable[int], year: int) -> dict[int, Decimal]:
        """Sum income amounts per month (1-12) of a year; empty months are absent."""
        pass

    @abstractmethod
    def list_cost_years(self, account_ids: Iterable[int]) -> list[int]:
        """Distinct years having cost records, newest first."""
        pass
