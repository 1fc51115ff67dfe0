"""Ingredient domain service."""

import logging
from decimal import Decimal

from costbook.database.base import Database
from costbook.domain.entities import Account, Ingredient
from costbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    entity_not_found,
)
from costbook.domain.recipe_cost import line_cost
from costbook.domain.visibility import VisibilityResolver
from costbook.utils.money import to_decimal

logger = logging.getLogger(__name__)


class IngredientService:
    """Service for managing ingredients and their prices."""

    def __init__(self, db: Database):
        """Initialize ingredient service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)

    def create_ingredient(self, actor: Account, name: str, price_per_kg: Decimal) -> int:
        """Create an ingredient owned by the actor.

        Raises:
            ValidationError: If the name is empty or the price negative
        """
        if not name or not name.strip():
            raise ValidationError("Ingredient name must not be empty")
        price = to_decimal(price_per_kg)
        if price < 0:
            raise ValidationError("Price per kg must not be negative")

        ingredient_id = self.db.create_ingredient(name=name, price_per_kg=price, account_id=actor.id)
        logger.info("Created ingredient %s for account %s", ingredient_id, actor.id)
        return ingredient_id

    def get_ingredient(self, actor: Account, ingredient_id: int) -> Ingredient:
        """Get an ingredient visible to the actor.

        Raises:
            NotFoundError: If ingredient not found
            AuthorizationError: If it belongs to another tenant
        """
        ingredient = self.db.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError(entity_not_found("ingredient", ingredient_id))
        self.visibility.require_visible(actor, ingredient.account_id, "ingredient", ingredient_id)
        return ingredient

    def list_ingredients(self, actor: Account) -> list[Ingredient]:
        """List ingredients of the actor's group, recipe shadows included."""
        return self.db.list_ingredients(self.visibility.visible_accounts(actor))

    def update_price(self, actor: Account, ingredient_id: int, price_per_kg: Decimal) -> None:
        """Change an ingredient's price.

        Raises:
            ValidationError: If the price is negative or the ingredient is a
                recipe shadow (its price follows the recipe)
        """
        ingredient = self.get_ingredient(actor, ingredient_id)
        if ingredient.recipe_id is not None:
            raise ValidationError(
                f"Ingredient {ingredient_id} mirrors recipe {ingredient.recipe_id}; "
                "update the recipe instead"
            )
        price = to_decimal(price_per_kg)
        if price < 0:
            raise ValidationError("Price per kg must not be negative")
        self.db.update_ingredient_price(ingredient_id, price)
        logger.info("Updated price of ingredient %s to %s", ingredient_id, price)

    def delete_ingredient(self, actor: Account, ingredient_id: int) -> None:
        """Delete an ingredient no recipe uses.

        Raises:
            ValidationError: If the ingredient is a recipe shadow
            DependencyError: If recipe lines still reference it
        """
        ingredient = self.get_ingredient(actor, ingredient_id)
        if ingredient.recipe_id is not None:
            raise ValidationError(
                f"Ingredient {ingredient_id} mirrors recipe {ingredient.recipe_id}; "
                "clear the recipe's ingredient flag instead"
            )
        usages = self.db.count_ingredient_usages(ingredient_id)
        if usages > 0:
            raise DependencyError(
                f"Cannot delete ingredient {ingredient_id}: used by {usages} recipe line"
                f"{'s' if usages != 1 else ''}"
            )
        self.db.delete_ingredient(ingredient_id)
        logger.info("Deleted ingredient %s", ingredient_id)

    def preview_line_cost(self, actor: Account, ingredient_id: int, quantity_g: Decimal) -> Decimal:
        """Cost of using quantity_g grams of an ingredient, rounded to cents."""
        ingredient = self.get_ingredient(actor, ingredient_id)
        return line_cost(ingredient.price_per_kg, quantity_g)
