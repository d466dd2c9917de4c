"""Unit converter: one value between two units of the same quantity family."""

import logging
from typing import Any, Mapping

from utils.formatting import format_number, to_precision
from utils.input_resolver import parse_raw_value
from utils.json_helpers import is_valid_number
from utils.units import MEASUREMENT_TYPE_LABELS, convert, factor_of

from .base import invalid, not_ready, register
from .catalog import DEFAULT_MEASUREMENT_TYPE, UNIT_CONVERSION, CalculationCategory, default_conversion_units
from .models import CalculationResult

logger = logging.getLogger("fluidcalc-mcp.unit_conversion")


@register(UNIT_CONVERSION)
def unit_conversion(category: CalculationCategory, inputs: Mapping[str, Any],
                    units: Mapping[str, str]) -> CalculationResult:
    measurement_type = inputs.get("measurementType") or DEFAULT_MEASUREMENT_TYPE
    default_from, default_to = default_conversion_units(measurement_type)
    from_unit = inputs.get("fromUnit") or default_from
    to_unit = inputs.get("toUnit") or default_to
    output_unit = to_unit or ""

    value = parse_raw_value(inputs.get("value"))
    if value is None:
        return not_ready(category, output_unit, ["value"])

    unknown = [unit for unit in (from_unit, to_unit) if factor_of(measurement_type, unit) is None]
    if unknown:
        logger.debug(f"Cannot convert {measurement_type}: unknown units {unknown}")
        return not_ready(category, output_unit, [])

    converted = convert(value, measurement_type, from_unit, to_unit)
    if not is_valid_number(converted):
        logger.debug(f"Conversion of {value} {from_unit} to {to_unit} produced {converted}")
        return invalid(category, output_unit, value=converted)

    label = MEASUREMENT_TYPE_LABELS.get(measurement_type, measurement_type)
    return CalculationResult(
        category_id=category.id,
        value=converted,
        derivation=[
            f"Conversão de {label}:",
            "",
            f"{format_number(value)} {from_unit}  =  {to_precision(converted, 6)} {to_unit}",
        ],
        output_unit=output_unit,
        si_inputs={"value": value * factor_of(measurement_type, from_unit)},
    )
