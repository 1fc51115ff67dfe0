"""Recipe domain service.

Write path: validates and authorizes a RecipeDraft, stores the submitted
totals and margins as given, computes only the unit ingredient cost, replaces
every ingredient line and syncs the recipe's shadow ingredient, all inside
one database transaction.

Read path: recomputes a CostBreakdown from current prices and rates on every
call. Stored totals are never used for display.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from costbook.database.base import Database
from costbook.domain.category import CategoryService
from costbook.domain.entities import (
    Account,
    CategoryKind,
    Ingredient,
    LaborRate,
    LineInput,
    Recipe,
    RecipeCosting,
    RecipeDraft,
    RecipeIngredientLine,
)
from costbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    entity_not_found,
)
from costbook.domain.labor_rate import LaborRateResolver
from costbook.domain.recipe_cost import RecipeCostCalculator, batch_ingredient_cost, unit_divisor
from costbook.domain.visibility import VisibilityResolver
from costbook.utils.money import round2

logger = logging.getLogger(__name__)

COPY_PREFIX = "Copy of "


def draft_from_recipe(
    recipe: Recipe, stored_lines: Sequence[RecipeIngredientLine], **changes
) -> RecipeDraft:
    """Build a draft holding a stored recipe's fields, optionally changed.

    Args:
        recipe: Stored recipe
        stored_lines: Its ingredient lines
        **changes: RecipeDraft fields to override

    Returns:
        RecipeDraft
    """
    draft = RecipeDraft(
        name=recipe.name,
        category_id=recipe.category_id,
        department_id=recipe.department_id,
        sell_mode=recipe.sell_mode,
        labor_cost_mode=recipe.labor_cost_mode,
        labour_minutes=recipe.labour_minutes,
        lines=tuple(LineInput(line.ingredient_id, line.quantity_g) for line in stored_lines),
        total_pieces=recipe.total_pieces,
        recipe_weight_g=recipe.recipe_weight_g,
        packing_cost=recipe.packing_cost,
        selling_price_per_piece=recipe.selling_price_per_piece,
        selling_price_per_kg=recipe.selling_price_per_kg,
        vat_rate=recipe.vat_rate,
        production_cost_per_kg=recipe.production_cost_per_kg,
        declared_total=recipe.declared_total,
        potential_margin=recipe.potential_margin,
        potential_margin_pct=recipe.potential_margin_pct,
        add_as_ingredient=recipe.add_as_ingredient,
    )
    return replace(draft, **changes) if changes else draft


class RecipeService:
    """Service for writing recipes and reading them with live costs."""

    def __init__(self, db: Database):
        """Initialize recipe service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)
        self.categories = CategoryService(db)
        self.rates = LaborRateResolver(db)
        self.calculator = RecipeCostCalculator()

    # Validation helpers
    def _require_recipe(self, actor: Account, recipe_id: int) -> Recipe:
        recipe = self.db.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(entity_not_found("recipe", recipe_id))
        self.visibility.require_visible(actor, recipe.account_id, "recipe", recipe_id)
        return recipe

    def _validate_draft(self, actor: Account, draft: RecipeDraft) -> dict[int, Ingredient]:
        """Check a draft's fields and references; return the referenced ingredients."""
        if not draft.name or not draft.name.strip():
            raise ValidationError("Recipe name must not be empty")
        if not draft.lines:
            raise ValidationError("A recipe needs at least one ingredient line")

        non_negative = {
            "labour minutes": draft.labour_minutes,
            "total pieces": draft.total_pieces,
            "recipe weight": draft.recipe_weight_g,
            "packing cost": draft.packing_cost,
            "selling price per piece": draft.selling_price_per_piece,
            "selling price per kg": draft.selling_price_per_kg,
            "production cost per kg": draft.production_cost_per_kg,
            "total expense": draft.declared_total,
        }
        for label, value in non_negative.items():
            if value is not None and value < 0:
                raise ValidationError(f"{label.capitalize()} must not be negative")
        for line in draft.lines:
            if line.quantity_g < 0:
                raise ValidationError(
                    f"Quantity for ingredient {line.ingredient_id} must not be negative"
                )

        self.categories.require_allowed(actor, draft.category_id, CategoryKind.RECIPE)

        if draft.department_id is not None:
            department = self.db.get_department(draft.department_id)
            if department is None:
                raise NotFoundError(entity_not_found("department", draft.department_id))
            if department.account_id is not None:
                self.visibility.require_visible(
                    actor, department.account_id, "department", draft.department_id
                )

        ingredients = self.db.get_ingredients(line.ingredient_id for line in draft.lines)
        visible = self.visibility.visible_accounts(actor)
        for line in draft.lines:
            ingredient = ingredients.get(line.ingredient_id)
            if ingredient is None:
                raise NotFoundError(entity_not_found("ingredient", line.ingredient_id))
            if ingredient.account_id not in visible:
                self.visibility.require_visible(
                    actor, ingredient.account_id, "ingredient", line.ingredient_id
                )
        return ingredients

    def _check_no_self_consumption(self, recipe_id: int, ingredients: dict[int, Ingredient]) -> None:
        """Reject lines that would make a recipe consume itself.

        Follows shadow ingredients through the recipes they mirror, so an
        indirect loop (A uses B's shadow, B uses A's shadow) is caught too.
        """
        pending = [ing.recipe_id for ing in ingredients.values() if ing.recipe_id is not None]
        seen: set[int] = set()
        while pending:
            source_id = pending.pop()
            if source_id == recipe_id:
                raise ValidationError(
                    f"Recipe {recipe_id} cannot use its own shadow ingredient, "
                    "directly or through other recipes"
                )
            if source_id in seen:
                continue
            seen.add(source_id)
            nested = self.db.get_ingredients(
                line.ingredient_id for line in self.db.get_recipe_lines(source_id)
            )
            pending.extend(ing.recipe_id for ing in nested.values() if ing.recipe_id is not None)

    def _unit_ingredient_cost(self, draft: RecipeDraft, ingredients: dict[int, Ingredient]) -> Decimal:
        prices = {ing_id: ing.price_per_kg for ing_id, ing in ingredients.items()}
        batch = batch_ingredient_cost(draft.lines, prices)
        return round2(batch / unit_divisor(draft, draft.lines))

    def _release_shadow(self, shadow: Ingredient) -> None:
        usages = self.db.count_ingredient_usages(shadow.id)
        if usages > 0:
            raise DependencyError(
                f"Recipe {shadow.recipe_id} is used as an ingredient by {usages} recipe line"
                f"{'s' if usages != 1 else ''}; remove those lines first"
            )
        self.db.delete_ingredient(shadow.id)

    def _sync_shadow(self, recipe_id: int, owner_id: int, draft: RecipeDraft) -> None:
        """Upsert or remove the shadow ingredient keyed by (recipe, owner)."""
        if draft.add_as_ingredient:
            # Priced from the submitted production cost, not the computed total
            self.db.upsert_shadow_ingredient(
                recipe_id=recipe_id,
                account_id=owner_id,
                name=draft.name,
                price_per_kg=draft.production_cost_per_kg,
            )
            return
        shadow = self.db.get_shadow_ingredient(recipe_id, owner_id)
        if shadow is not None:
            self._release_shadow(shadow)

    # Write path
    def create_recipe(self, actor: Account, draft: RecipeDraft) -> int:
        """Create a recipe owned by the actor.

        Args:
            actor: Acting account (becomes the owner)
            draft: Validated form fields and ingredient lines

        Returns:
            Recipe ID

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If a referenced department or ingredient is missing
            AuthorizationError: If a referenced category, department or
                ingredient is outside the actor's group
        """
        with self.db.transaction():
            ingredients = self._validate_draft(actor, draft)
            unit_cost = self._unit_ingredient_cost(draft, ingredients)
            recipe_id = self.db.create_recipe(actor.id, draft, unit_cost)
            self.db.replace_recipe_lines(recipe_id, draft.lines)
            self._sync_shadow(recipe_id, actor.id, draft)

        logger.info("Created recipe %s for account %s", recipe_id, actor.id)
        return recipe_id

    def update_recipe(self, actor: Account, recipe_id: int, draft: RecipeDraft) -> None:
        """Overwrite a recipe and replace all its ingredient lines.

        Raises:
            NotFoundError: If recipe not found
            AuthorizationError: If the recipe or a reference is outside the
                actor's group
            ValidationError: If a field is invalid or a line would make the
                recipe consume itself
            DependencyError: If clearing the ingredient flag would orphan
                lines of other recipes
        """
        recipe = self._require_recipe(actor, recipe_id)
        with self.db.transaction():
            ingredients = self._validate_draft(actor, draft)
            self._check_no_self_consumption(recipe_id, ingredients)
            unit_cost = self._unit_ingredient_cost(draft, ingredients)
            self.db.update_recipe(recipe_id, draft, unit_cost)
            self.db.replace_recipe_lines(recipe_id, draft.lines)
            self._sync_shadow(recipe_id, recipe.account_id, draft)

        logger.info("Updated recipe %s", recipe_id)

    def delete_recipe(self, actor: Account, recipe_id: int) -> None:
        """Delete a recipe, its lines and its shadow ingredients.

        Raises:
            DependencyError: If another recipe uses this recipe's shadow ingredient
        """
        self._require_recipe(actor, recipe_id)
        with self.db.transaction():
            for shadow in self.db.list_shadow_ingredients(recipe_id):
                self._release_shadow(shadow)
            self.db.delete_recipe(recipe_id)

        logger.info("Deleted recipe %s", recipe_id)

    def duplicate_recipe(self, actor: Account, recipe_id: int) -> int:
        """Copy a recipe and its lines under the same owner.

        The copy is named "Copy of <name>" and is not exposed as an ingredient.

        Returns:
            ID of the new recipe
        """
        recipe = self._require_recipe(actor, recipe_id)
        lines = self.db.get_recipe_lines(recipe_id)
        draft = draft_from_recipe(
            recipe, lines, name=f"{COPY_PREFIX}{recipe.name}", add_as_ingredient=False
        )
        with self.db.transaction():
            copy_id = self.db.create_recipe(recipe.account_id, draft, recipe.unit_ingredient_cost)
            self.db.replace_recipe_lines(copy_id, draft.lines)

        logger.info("Duplicated recipe %s as %s", recipe_id, copy_id)
        return copy_id

    # Read path
    def get_recipe(self, actor: Account, recipe_id: int) -> Recipe:
        """Get a stored recipe visible to the actor."""
        return self._require_recipe(actor, recipe_id)

    def get_lines(self, actor: Account, recipe_id: int) -> list[RecipeIngredientLine]:
        """Get the ingredient lines of a recipe visible to the actor."""
        self._require_recipe(actor, recipe_id)
        return self.db.get_recipe_lines(recipe_id)

    def _owner_root_id(self, owner_id: int, fallback: Account) -> int:
        owner = self.db.get_account(owner_id)
        return self.visibility.root_id(owner if owner is not None else fallback)

    def _costings(self, actor: Account, recipes: Sequence[Recipe]) -> list[RecipeCosting]:
        """Recompute costings from one read of lines, prices and rates."""
        lines_by_recipe = {r.id: tuple(self.db.get_recipe_lines(r.id)) for r in recipes}
        ingredient_ids = {line.ingredient_id for lines in lines_by_recipe.values() for line in lines}
        prices = {i: ing.price_per_kg for i, ing in self.db.get_ingredients(ingredient_ids).items()}

        rates: dict[tuple[int, Optional[int]], LaborRate] = {}
        for recipe in recipes:
            key = (self._owner_root_id(recipe.account_id, actor), recipe.department_id)
            if key not in rates:
                rates[key] = self.rates.effective_rate(*key)

        costings = []
        for recipe in recipes:
            lines = lines_by_recipe[recipe.id]
            rate = rates[(self._owner_root_id(recipe.account_id, actor), recipe.department_id)]
            costings.append(
                RecipeCosting(
                    recipe=recipe,
                    lines=lines,
                    breakdown=self.calculator.compute(recipe, lines, prices, rate),
                    rate=rate,
                )
            )
        return costings

    def get_recipe_costing(self, actor: Account, recipe_id: int) -> RecipeCosting:
        """Recipe with costs recomputed from current prices and rates."""
        recipe = self._require_recipe(actor, recipe_id)
        return self._costings(actor, [recipe])[0]

    def list_recipe_costings(self, actor: Account) -> list[RecipeCosting]:
        """Every recipe of the actor's group with freshly computed costs."""
        recipes = self.db.list_recipes(self.visibility.visible_accounts(actor))
        return self._costings(actor, recipes)
