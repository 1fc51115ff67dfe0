"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the engine never touches ORM
objects. Numeric columns come back as Decimal; enum-valued string columns are
lifted into their domain enums here.
"""

from decimal import Decimal

from costbook.domain import entities as domain
from costbook.database.models import (
    Account as ORMAccount,
    Department as ORMDepartment,
    RateRecord as ORMRateRecord,
    Category as ORMCategory,
    Ingredient as ORMIngredient,
    Recipe as ORMRecipe,
    RecipeIngredientLine as ORMRecipeIngredientLine,
    CostRecord as ORMCostRecord,
    IncomeRecord as ORMIncomeRecord,
)


def _dec(value) -> Decimal:
    """Normalize a stored numeric to Decimal (NULL becomes zero)."""
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        parent_id=orm_account.parent_id,
        created_at=orm_account.created_at,
    )


def department_to_domain(orm_department: ORMDepartment) -> domain.Department:
    """Convert SQLAlchemy Department model to domain Department entity."""
    return domain.Department(
        id=orm_department.id,
        name=orm_department.name,
        account_id=orm_department.account_id,
        share_percent=_dec(orm_department.share_percent),
        created_at=orm_department.created_at,
    )


def rate_record_to_domain(orm_rate: ORMRateRecord) -> domain.RateRecord:
    """Convert SQLAlchemy RateRecord model to domain RateRecord entity."""
    return domain.RateRecord(
        id=orm_rate.id,
        account_id=orm_rate.account_id,
        department_id=orm_rate.department_id,
        shop_cost_per_min=_dec(orm_rate.shop_cost_per_min),
        external_cost_per_min=_dec(orm_rate.external_cost_per_min),
        version=orm_rate.version,
        created_at=orm_rate.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        kind=domain.CategoryKind(orm_category.kind),
        account_id=orm_category.account_id,
        created_at=orm_category.created_at,
    )


def ingredient_to_domain(orm_ingredient: ORMIngredient) -> domain.Ingredient:
    """Convert SQLAlchemy Ingredient model to domain Ingredient entity."""
    return domain.Ingredient(
        id=orm_ingredient.id,
        name=orm_ingredient.name,
        price_per_kg=_dec(orm_ingredient.price_per_kg),
        account_id=orm_ingredient.account_id,
        recipe_id=orm_ingredient.recipe_id,
        created_at=orm_ingredient.created_at,
    )


def recipe_to_domain(orm_recipe: ORMRecipe) -> domain.Recipe:
    """Convert SQLAlchemy Recipe model to domain Recipe entity."""
    return domain.Recipe(
        id=orm_recipe.id,
        account_id=orm_recipe.account_id,
        name=orm_recipe.name,
        category_id=orm_recipe.category_id,
        department_id=orm_recipe.department_id,
        sell_mode=domain.SellMode(orm_recipe.sell_mode),
        labor_cost_mode=domain.LaborCostMode(orm_recipe.labor_cost_mode),
        labour_minutes=orm_recipe.labour_minutes or 0,
        total_pieces=orm_recipe.total_pieces or 0,
        recipe_weight_g=_dec(orm_recipe.recipe_weight_g),
        packing_cost=_dec(orm_recipe.packing_cost),
        selling_price_per_piece=_dec(orm_recipe.selling_price_per_piece),
        selling_price_per_kg=_dec(orm_recipe.selling_price_per_kg),
        vat_rate=_dec(orm_recipe.vat_rate),
        production_cost_per_kg=_dec(orm_recipe.production_cost_per_kg),
        declared_total=_dec(orm_recipe.declared_total),
        potential_margin=_dec(orm_recipe.potential_margin),
        potential_margin_pct=_dec(orm_recipe.potential_margin_pct),
        add_as_ingredient=bool(orm_recipe.add_as_ingredient),
        unit_ingredient_cost=_dec(orm_recipe.unit_ingredient_cost),
        created_at=orm_recipe.created_at,
    )


def recipe_line_to_domain(orm_line: ORMRecipeIngredientLine) -> domain.RecipeIngredientLine:
    """Convert SQLAlchemy RecipeIngredientLine model to domain entity."""
    return domain.RecipeIngredientLine(
        id=orm_line.id,
        recipe_id=orm_line.recipe_id,
        ingredient_id=orm_line.ingredient_id,
        quantity_g=_dec(orm_line.quantity_g),
    )


def cost_to_domain(orm_cost: ORMCostRecord) -> domain.CostRecord:
    """Convert SQLAlchemy CostRecord model to domain CostRecord entity."""
    return domain.CostRecord(
        id=orm_cost.id,
        account_id=orm_cost.account_id,
        amount=_dec(orm_cost.amount),
        date=orm_cost.date,
        category_id=orm_cost.category_id,
        supplier=orm_cost.supplier,
        identifier=orm_cost.identifier,
        other_category=orm_cost.other_category,
    )


def income_to_domain(orm_income: ORMIncomeRecord) -> domain.IncomeRecord:
    """Convert SQLAlchemy IncomeRecord model to domain IncomeRecord entity."""
    return domain.IncomeRecord(
        id=orm_income.id,
        account_id=orm_income.account_id,
        amount=_dec(orm_income.amount),
        date=orm_income.date,
        category_id=orm_income.category_id,
        identifier=orm_income.identifier,
    )
