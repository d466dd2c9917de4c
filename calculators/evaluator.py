"""
Entry point of the calculation engine.

``evaluate`` looks up the category, then hands the raw inputs and chosen units to the
calculator registered for it. Nothing is recorded here; recording is the caller's call.
"""

import logging
from typing import Any, Mapping, Optional

from .base import get_calculator
from .catalog import get_category
from .models import CalculationResult

logger = logging.getLogger("fluidcalc-mcp.evaluator")


def evaluate(category_id: str, inputs: Optional[Mapping[str, Any]] = None,
             units: Optional[Mapping[str, str]] = None) -> CalculationResult:
    """
    Evaluate one category for a set of raw inputs.

    Args:
        category_id: Catalog id such as "flow-rate" or "reynolds"
        inputs: Field name -> raw value (number or numeric text)
        units: Field name -> chosen unit label; missing entries use the field default

    Returns:
        CalculationResult with ``value`` None when inputs are incomplete, NaN/inf when
        the inputs make the formula invalid

    Raises:
        UnknownCategoryError: If the category id is not in the catalog
    """
    category = get_category(category_id)
    result = get_calculator(category.id)(category, inputs or {}, units or {})
    if result.is_valid:
        logger.debug(f"{category.id} = {result.value} {result.output_unit}")
    return result
