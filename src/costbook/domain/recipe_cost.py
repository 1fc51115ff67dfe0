"""Recipe unit-cost computation.

Every intermediate figure is rounded half-up to cents before it feeds the
next step, so unit costs are sums of already rounded parts. Divisors are
floored (one piece, one gram) and the calculator never raises for zero or
missing quantities, prices or rates.
"""

from decimal import Decimal
from typing import Mapping, Protocol, Sequence

from costbook.domain.entities import CostBreakdown, LaborCostMode, LaborRate, SellMode
from costbook.utils.money import (
    GRAMS_PER_KG,
    ZERO,
    piece_divisor,
    round2,
    to_decimal,
    weight_divisor_kg,
)


class CostedLine(Protocol):
    """Anything with an ingredient reference and a quantity in grams."""

    ingredient_id: int
    quantity_g: Decimal


class CostedRecipe(Protocol):
    """Recipe fields the calculator reads (a Recipe or a RecipeDraft)."""

    sell_mode: SellMode
    labor_cost_mode: LaborCostMode
    labour_minutes: int
    total_pieces: int
    recipe_weight_g: Decimal
    packing_cost: Decimal


def line_cost(price_per_kg: Decimal, quantity_g: Decimal) -> Decimal:
    """Cost of one ingredient line, rounded to cents."""
    return round2(to_decimal(quantity_g) / GRAMS_PER_KG * to_decimal(price_per_kg))


def batch_ingredient_cost(lines: Sequence[CostedLine], prices: Mapping[int, Decimal]) -> Decimal:
    """Sum of line costs at current prices, rounded once at the end.

    Lines whose ingredient has no price contribute zero.
    """
    total = ZERO
    for line in lines:
        price = to_decimal(prices.get(line.ingredient_id))
        total += to_decimal(line.quantity_g) / GRAMS_PER_KG * price
    return round2(total)


def unit_divisor(recipe: CostedRecipe, lines: Sequence[CostedLine]) -> Decimal:
    """Pieces (piece mode) or kilograms (weight mode) one batch yields."""
    if SellMode(recipe.sell_mode) is SellMode.PIECE:
        return piece_divisor(recipe.total_pieces)
    return weight_divisor_kg(recipe.recipe_weight_g, [line.quantity_g for line in lines])


def labor_rate_for(recipe: CostedRecipe, rate: LaborRate) -> Decimal:
    """Pick the external or shop rate according to the recipe's labor mode."""
    if LaborCostMode(recipe.labor_cost_mode) is LaborCostMode.EXTERNAL:
        return to_decimal(rate.external)
    return to_decimal(rate.shop)


class RecipeCostCalculator:
    """Compute batch and unit costs of a recipe.

    Stateless: the same inputs always produce the same CostBreakdown.
    """

    def compute(
        self,
        recipe: CostedRecipe,
        lines: Sequence[CostedLine],
        prices: Mapping[int, Decimal],
        rate: LaborRate,
    ) -> CostBreakdown:
        """Compute the cost breakdown.

        Args:
            recipe: Recipe (or draft) providing sell mode, labor mode and yields
            lines: Ingredient lines with quantities in grams
            prices: Price per kg keyed by ingredient ID, read before the call
            rate: Resolved labor rate for the recipe's department

        Returns:
            CostBreakdown of batch and per-unit figures
        """
        divisor = unit_divisor(recipe, lines)
        is_piece = SellMode(recipe.sell_mode) is SellMode.PIECE

        batch_ingredients = batch_ingredient_cost(lines, prices)
        unit_ingredients = round2(batch_ingredients / divisor)

        per_minute = labor_rate_for(recipe, rate)
        batch_labor = round2(Decimal(int(recipe.labour_minutes or 0)) * per_minute)
        unit_labor = round2(batch_labor / divisor)

        packing = to_decimal(recipe.packing_cost)
        # Weight mode packing cost is already a per-kg figure
        unit_packing = round2(packing / divisor) if is_piece else round2(packing)

        return CostBreakdown(
            batch_ingredient_cost=batch_ingredients,
            unit_ingredient_cost=unit_ingredients,
            batch_labor_cost=batch_labor,
            unit_labor_cost=unit_labor,
            unit_packing_cost=unit_packing,
            total_unit_cost=round2(unit_ingredients + unit_labor + unit_packing),
            divisor=divisor,
            labor_rate_per_min=per_minute,
        )
