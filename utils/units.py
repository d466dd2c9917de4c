"""
Unit registry and SI conversion for the fluid calculator.

Each quantity family maps a unit label to the factor that converts a value expressed in
that unit to the family's SI base unit (``SI_value = raw_value * factor``). Exactly one
unit per family has factor 1.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger("fluidcalc-mcp.units")

# Sentinel families that need no conversion table
DIMENSIONLESS = "dimensionless"
PERCENTAGE = "percentage"

UNIT_FACTORS: Dict[str, Dict[str, float]] = {
    "velocity": {
        "m/s": 1.0,
        "km/h": 0.277778,
        "ft/s": 0.3048,
        "mph": 0.44704,
    },
    "area": {
        "m²": 1.0,
        "cm²": 0.0001,
        "ft²": 0.092903,
        "in²": 0.00064516,
    },
    "force": {
        "N": 1.0,
        "kN": 1000.0,
        "lbf": 4.44822,
    },
    "pressure": {
        "Pa": 1.0,
        "kPa": 1000.0,
        "bar": 100000.0,
        "psi": 6894.76,
        "atm": 101325.0,
    },
    "mass": {
        "kg": 1.0,
        "g": 0.001,
        "lb": 0.453592,
        "ton": 1000.0,
    },
    "volume": {
        "m³": 1.0,
        "L": 0.001,
        "cm³": 0.000001,
        "gal (US)": 0.00378541,
        "ft³": 0.0283168,
    },
    "density": {
        "kg/m³": 1.0,
        "g/cm³": 1000.0,
        "lb/ft³": 16.0185,
    },
    "length": {
        "m": 1.0,
        "cm": 0.01,
        "mm": 0.001,
        "ft": 0.3048,
        "in": 0.0254,
        "km": 1000.0,
        "mi": 1609.34,
    },
    "viscosity": {
        "Pa·s": 1.0,
        "cP (centiPoise)": 0.001,
        "P (Poise)": 0.1,
    },
    "flow": {
        "m³/s": 1.0,
        "m³/h": 1 / 3600,
        "L/s": 0.001,
        "L/min": 0.001 / 60,
        "gal/min (US)": 0.00378541 / 60,
    },
}

# Display labels for the unit converter's measurement type selector
MEASUREMENT_TYPE_LABELS: Dict[str, str] = {
    "velocity": "Velocidade",
    "area": "Área",
    "force": "Força",
    "pressure": "Pressão",
    "mass": "Massa",
    "volume": "Volume",
    "density": "Densidade",
    "length": "Comprimento",
    "viscosity": "Viscosidade",
    "flow": "Vazão",
}


def families() -> List[str]:
    """Names of every quantity family with a conversion table."""
    return list(UNIT_FACTORS.keys())


def units_for(family: str) -> List[str]:
    """Unit labels of a family in registry order, or an empty list for unknown families."""
    return list(UNIT_FACTORS.get(family, {}).keys())


def base_unit(family: str) -> Optional[str]:
    """The SI base unit of a family (the unit whose factor is 1)."""
    for unit, factor in UNIT_FACTORS.get(family, {}).items():
        if factor == 1:
            return unit
    return None


def factor_of(family: str, unit: Optional[str]) -> Optional[float]:
    """Conversion factor of ``unit`` to the SI base of ``family``, None when not found."""
    if not unit:
        return None
    return UNIT_FACTORS.get(family, {}).get(unit)


def to_si(raw_value: float, family: str, unit: Optional[str]) -> float:
    """Convert a raw value to SI.

    Missing or unknown units (and unknown families) pass the value through unchanged,
    i.e. the value is assumed to already be in SI. The value itself is never validated.
    """
    factor = factor_of(family, unit)
    if factor is None:
        if unit and family not in (DIMENSIONLESS, PERCENTAGE):
            logger.debug(f"Unit '{unit}' not found for family '{family}', assuming SI")
        return raw_value
    return raw_value * factor


def convert(value: float, family: str, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert between two units of the same family, None if either unit is unknown."""
    from_factor = factor_of(family, from_unit)
    to_factor = factor_of(family, to_unit)
    if from_factor is None or to_factor is None:
        return None
    return value * from_factor / to_factor
