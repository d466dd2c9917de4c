"""Evaluate one calculation category, optionally recording it in the history."""

import logging
from typing import Any, Dict, Optional

from calculators import evaluate, get_category
from history import add_calculation
from utils.formatting import format_result_value
from utils.json_helpers import safe_json_dumps

logger = logging.getLogger("fluidcalc-mcp.calculator")


def fluid_calculator(
    category: str,
    inputs: Dict[str, Any],
    units: Optional[Dict[str, str]] = None,
    record: bool = False,
) -> str:
    """Run a fluid mechanics calculation.

    Categories: flow-rate, velocity-flow, pressure, density, water-column, reynolds,
    relative-roughness, friction-factor, head-loss, energy-equation, pump-power, npsh,
    bernoulli, unit-conversion. Use calculator_catalog to see each category's fields.

    Args:
        category: Category id
        inputs: Field name -> value. Zero, blank or non-numeric values count as missing.
            unit-conversion takes value, measurementType, fromUnit and toUnit.
        units: Field name -> unit label (e.g. {"velocity": "km/h"}); fields without an
            entry use their default unit
        record: Append a valid result to the calculation history

    Returns:
        JSON string with the value, formatted value, unit and derivation

    Examples:
        >>> fluid_calculator("flow-rate", {"velocity": 2, "area": 3})
        >>> fluid_calculator("reynolds", {"density": 1000, "velocity": 2, "diameter": 0.1,
        ...                  "viscosity": 0.001})
        >>> fluid_calculator("unit-conversion", {"value": 1, "measurementType": "pressure",
        ...                  "fromUnit": "atm", "toUnit": "Pa"})
    """
    try:
        info = get_category(category)
        result = evaluate(category, inputs, units)

        response = {
            "category": info.id,
            "calculator": info.name,
            "ready": result.is_ready,
            "valid": result.is_valid,
            "value": result.value,
            "formatted_value": format_result_value(result.value, info.id) if result.is_valid else "",
            "unit": result.output_unit,
            "formula": info.formula.formula,
            "derivation": result.derivation,
            "explanation": result.explanation,
        }
        if result.classification:
            response["flow_regime"] = result.classification
        if result.alternate_units:
            response["alternate_units"] = result.alternate_units
        if result.missing_fields:
            response["missing_fields"] = result.missing_fields
        if result.is_ready and not result.is_valid:
            response["warning"] = "Inputs do not produce a valid result"

        if record:
            entry = add_calculation(result, inputs, units)
            response["recorded"] = entry is not None
            if entry is not None:
                response["history_id"] = entry.id

        return safe_json_dumps(response)

    except Exception as e:
        logger.error(f"Error in fluid_calculator: {e}", exc_info=True)
        return safe_json_dumps({"error": str(e)})
