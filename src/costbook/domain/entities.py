"""Domain model entities for costbook.

These are pure data classes representing business concepts, independent of
database schema. Services and the costing engine only ever see these; the
SQLAlchemy models stay behind the Database interface.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class SellMode(str, Enum):
    """Pricing basis of a recipe."""

    PIECE = "piece"
    WEIGHT = "weight"


class LaborCostMode(str, Enum):
    """Which labor rate a recipe is costed with."""

    INTERNAL = "internal"
    EXTERNAL = "external"


class CategoryKind(str, Enum):
    """What a category classifies."""

    COST = "cost"
    INCOME = "income"
    RECIPE = "recipe"


class RateSource(str, Enum):
    """Provenance of an effective labor rate."""

    GLOBAL = "global"
    OVERRIDE = "override"


@dataclass(frozen=True)
class Account:
    """Tenant account. Root when parent_id is None, otherwise a child of that root."""

    id: int
    name: str
    parent_id: Optional[int]
    created_at: datetime

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Department:
    """Production department; account_id None marks a shared department."""

    id: int
    name: str
    account_id: Optional[int]
    share_percent: Decimal
    created_at: datetime


@dataclass(frozen=True)
class RateRecord:
    """Per-minute labor rates recorded for a root account (optionally per department)."""

    id: int
    account_id: int
    department_id: Optional[int]
    shop_cost_per_min: Decimal
    external_cost_per_min: Decimal
    version: int
    created_at: datetime


@dataclass(frozen=True)
class Ingredient:
    """Purchasable ingredient. recipe_id is set on recipe shadow entries."""

    id: int
    name: str
    price_per_kg: Decimal
    account_id: int
    recipe_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Recipe:
    """Persisted recipe.

    declared_total, potential_margin and potential_margin_pct are stored as
    submitted. unit_ingredient_cost is the only server-computed stored value.
    """

    id: int
    account_id: int
    name: str
    category_id: Optional[int]
    department_id: Optional[int]
    sell_mode: SellMode
    labor_cost_mode: LaborCostMode
    labour_minutes: int
    total_pieces: int
    recipe_weight_g: Decimal
    packing_cost: Decimal
    selling_price_per_piece: Decimal
    selling_price_per_kg: Decimal
    vat_rate: Decimal
    production_cost_per_kg: Decimal
    declared_total: Decimal
    potential_margin: Decimal
    potential_margin_pct: Decimal
    add_as_ingredient: bool
    unit_ingredient_cost: Decimal
    created_at: datetime


@dataclass(frozen=True)
class RecipeIngredientLine:
    """One ingredient quantity (grams) of a recipe."""

    id: int
    recipe_id: int
    ingredient_id: int
    quantity_g: Decimal


@dataclass(frozen=True)
class CostRecord:
    """Expense booked by an account."""

    id: int
    account_id: int
    amount: Decimal
    date: date
    category_id: Optional[int]
    supplier: str
    identifier: Optional[str]
    other_category: Optional[str]


@dataclass(frozen=True)
class IncomeRecord:
    """Income booked by an account."""

    id: int
    account_id: int
    amount: Decimal
    date: date
    category_id: Optional[int]
    identifier: Optional[str]


@dataclass(frozen=True)
class Category:
    """Cost, income or recipe category; account_id None marks a global one."""

    id: int
    name: str
    kind: CategoryKind
    account_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class LineInput:
    """Ingredient line as submitted by the write path."""

    ingredient_id: int
    quantity_g: Decimal


@dataclass(frozen=True)
class RecipeDraft:
    """Validated recipe form fields handed to the write path."""

    name: str
    category_id: Optional[int]
    department_id: Optional[int]
    sell_mode: SellMode
    labor_cost_mode: LaborCostMode
    labour_minutes: int
    lines: tuple[LineInput, ...]
    total_pieces: int = 0
    recipe_weight_g: Decimal = Decimal("0")
    packing_cost: Decimal = Decimal("0")
    selling_price_per_piece: Decimal = Decimal("0")
    selling_price_per_kg: Decimal = Decimal("0")
    vat_rate: Decimal = Decimal("0")
    production_cost_per_kg: Decimal = Decimal("0")
    declared_total: Decimal = Decimal("0")
    potential_margin: Decimal = Decimal("0")
    potential_margin_pct: Decimal = Decimal("0")
    add_as_ingredient: bool = False


@dataclass(frozen=True)
class LaborRate:
    """Effective per-minute labor rates and where they came from."""

    shop: Decimal
    external: Decimal
    source: RateSource = RateSource.GLOBAL


@dataclass(frozen=True)
class CostBreakdown:
    """Unit and batch costs recomputed for display."""

    batch_ingredient_cost: Decimal
    unit_ingredient_cost: Decimal
    batch_labor_cost: Decimal
    unit_labor_cost: Decimal
    unit_packing_cost: Decimal
    total_unit_cost: Decimal
    divisor: Decimal
    labor_rate_per_min: Decimal


@dataclass(frozen=True)
class RecipeCosting:
    """A recipe next to its freshly computed costs.

    declared_total (as submitted) and computed_total (recomputed now) are kept
    apart; they may legitimately differ.
    """

    recipe: Recipe
    lines: tuple[RecipeIngredientLine, ...]
    breakdown: CostBreakdown
    rate: LaborRate

    @property
    def declared_total(self) -> Decimal:
        return self.recipe.declared_total

    @property
    def computed_total(self) -> Decimal:
        return self.breakdown.total_unit_cost


@dataclass(frozen=True)
class YearSeries:
    """Monthly cost, income and net values for one year (index 0 is January)."""

    year: int
    costs: tuple[Decimal, ...]
    incomes: tuple[Decimal, ...]

    @property
    def nets(self) -> tuple[Decimal, ...]:
        return tuple(i - c for i, c in zip(self.incomes, self.costs))

    @property
    def total_cost(self) -> Decimal:
        return sum(self.costs, Decimal("0"))

    @property
    def total_income(self) -> Decimal:
        return sum(self.incomes, Decimal("0"))

    @property
    def total_net(self) -> Decimal:
        return self.total_income - self.total_cost

    def cost(self, month: int) -> Decimal:
        return self.costs[month - 1]

    def income(self, month: int) -> Decimal:
        return self.incomes[month - 1]

    def net(self, month: int) -> Decimal:
        return self.nets[month - 1]


@dataclass(frozen=True)
class DashboardSummary:
    """Monthly dashboard for a visible account set.

    worst_month is None when all twelve monthly nets of the year are equal;
    worst_net then equals best_net.
    """

    year: int
    month: int
    category_totals: dict[Optional[int], Decimal]
    current: YearSeries
    previous: YearSeries
    best_month: int
    best_net: Decimal
    worst_month: Optional[int]
    worst_net: Decimal
    income_this_month: Decimal
    income_same_month_last_year: Decimal
    available_years: tuple[int, ...] = field(default_factory=tuple)

    @property
    def previous_year(self) -> int:
        return self.previous.year

    def category_total(self, category_id: Optional[int]) -> Decimal:
        return self.category_totals.get(category_id, Decimal("0"))
