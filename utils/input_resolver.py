"""
Shared input resolution for every calculator.

This module eliminates code duplication across calculators by providing a single
place for the presence check, the unit conversion to SI and the per-input lines of
the derivation trace.
"""

import logging
import math
import numbers
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .formatting import format_number, to_fixed
from .units import DIMENSIONLESS, PERCENTAGE, to_si

logger = logging.getLogger("fluidcalc-mcp.input_resolver")


def parse_raw_value(raw: Any) -> Optional[float]:
    """Interpret a raw user value, returning None when it counts as "not supplied".

    Blank strings, None, text that is not a number, NaN and zero are all treated as
    missing. Zero being "missing" mirrors the calculator's long-standing behavior: a
    typed 0 blocks the calculation exactly like an empty field.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    elif isinstance(raw, numbers.Real):
        value = float(raw)
    else:
        return None
    if value == 0 or math.isnan(value):
        return None
    return value


class ResolvedInput(BaseModel):
    """One input after unit resolution."""

    model_config = ConfigDict(frozen=True)

    field: str
    raw: float
    unit: str
    si_value: float


class InputResolver:
    """
    Centralized input resolution with consistent logging.

    Collects missing field names in ``missing`` and derivation lines in ``results_log``.
    """

    def __init__(self, category_id: str):
        self.category_id = category_id
        self.results_log: List[str] = []
        self.missing: List[str] = []
        self.resolved: Dict[str, ResolvedInput] = {}

    def check_presence(self, field_names: List[str], inputs: Mapping[str, Any]) -> Dict[str, float]:
        """Parse every required field, recording the ones that are missing."""
        parsed: Dict[str, float] = {}
        for name in field_names:
            value = parse_raw_value(inputs.get(name))
            if value is None:
                self.missing.append(name)
            else:
                parsed[name] = value
        if self.missing:
            logger.debug(f"{self.category_id}: missing inputs {self.missing}")
        return parsed

    def resolve_field(self, spec, raw: float, unit: Optional[str] = None) -> float:
        """Convert one field to SI and log its derivation line.

        ``spec`` is an ``InputFieldSpec``; the chosen unit falls back to its default unit.
        """
        chosen = unit or spec.default_unit
        si_value = to_si(raw, spec.family, chosen)
        self.resolved[spec.name] = ResolvedInput(field=spec.name, raw=raw, unit=chosen or "", si_value=si_value)

        if spec.family == DIMENSIONLESS:
            self.results_log.append(f"{spec.symbol} = {to_fixed(si_value, spec.precision)}")
        elif spec.family == PERCENTAGE:
            self.results_log.append(
                f"{spec.symbol} = {format_number(raw)}% = {to_fixed(raw / 100, spec.precision)}"
            )
        else:
            self.results_log.append(
                f"{spec.symbol} = {format_number(raw)} {chosen} = "
                f"{to_fixed(si_value, spec.precision)} {spec.si_unit}"
            )
        return si_value

    def resolve_all(self, fields, inputs: Mapping[str, Any],
                    units: Optional[Mapping[str, str]] = None) -> Optional[Dict[str, float]]:
        """Presence check then SI conversion of an ordered list of field specs.

        Returns None (and logs nothing) when any field is missing.
        """
        units = units or {}
        parsed = self.check_presence([spec.name for spec in fields], inputs)
        if self.missing:
            return None
        return {spec.name: self.resolve_field(spec, parsed[spec.name], units.get(spec.name)) for spec in fields}

    def si_inputs(self) -> Dict[str, float]:
        return {name: item.si_value for name, item in self.resolved.items()}

    def get_logs(self) -> Dict[str, List[str]]:
        """Get accumulated logs."""
        return {
            "log": self.results_log.copy(),
            "missing": self.missing.copy(),
        }
