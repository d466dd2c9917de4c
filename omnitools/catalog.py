"""Browse the calculation categories and their input fields."""

import logging
from typing import Optional

from calculators import get_category, list_categories, unit_conversion_options
from calculators.catalog import UNIT_CONVERSION
from utils.json_helpers import safe_json_dumps

logger = logging.getLogger("fluidcalc-mcp.catalog_tool")


def calculator_catalog(category: Optional[str] = None, measurement_type: Optional[str] = None) -> str:
    """List calculation categories, or describe one category.

    Args:
        category: Category id to describe; omit to list all categories
        measurement_type: For unit-conversion, the quantity family whose units to list

    Returns:
        JSON string with categories, or the fields, units and formula of one category
    """
    try:
        if category is None:
            return safe_json_dumps({
                "categories": [
                    {"id": c.id, "name": c.name, "description": c.description}
                    for c in list_categories()
                ]
            })

        info = get_category(category)
        response = {
            "id": info.id,
            "name": info.name,
            "description": info.description,
            "output_unit": info.output_unit,
            "formula": info.formula,
            "fields": [
                {
                    "name": spec.name,
                    "label": spec.label,
                    "units": list(spec.units),
                    "default_unit": spec.default_unit,
                }
                for spec in info.input_fields
            ],
        }
        if info.id == UNIT_CONVERSION:
            response["unit_conversion"] = unit_conversion_options(measurement_type)
        return safe_json_dumps(response)

    except Exception as e:
        logger.error(f"Error in calculator_catalog: {e}", exc_info=True)
        return safe_json_dumps({"error": str(e)})
