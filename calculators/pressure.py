"""
Pressure, density and water column calculations.
"""

from typing import Dict

import fluids.core

from utils.constants import G_GRAVITY, PA_per_BAR, PA_per_KPA, PA_per_PSI, WATER_DENSITY
from utils.formatting import to_fixed

from .base import FormulaOutcome, formula


@formula("pressure")
def pressure(si: Dict[str, float]) -> FormulaOutcome:
    force, area = si["force"], si["area"]
    p = force / area
    return FormulaOutcome(
        value=p,
        header=["Pressão (P) = Força (F) / Área (A)"],
        steps=[
            f"P = {to_fixed(force, 2)} / {to_fixed(area, 6)} = {to_fixed(p, 2)} Pa",
            f"P = {to_fixed(p / PA_per_KPA, 4)} kPa",
            f"P = {to_fixed(p / PA_per_BAR, 6)} bar",
            f"P = {to_fixed(p / PA_per_PSI, 4)} psi",
        ],
        alternate_units={"kPa": p / PA_per_KPA, "bar": p / PA_per_BAR, "psi": p / PA_per_PSI},
    )


@formula("density")
def density(si: Dict[str, float]) -> FormulaOutcome:
    mass, volume = si["mass"], si["volume"]
    rho = mass / volume
    return FormulaOutcome(
        value=rho,
        header=["Densidade (ρ) = Massa (m) / Volume (V)"],
        steps=[
            f"ρ = {to_fixed(mass, 4)} / {to_fixed(volume, 6)} = {to_fixed(rho, 2)} kg/m³",
            f"ρ = {to_fixed(rho / 1000, 4)} g/cm³",
        ],
        alternate_units={"g/cm³": rho / 1000},
    )


@formula("water-column")
def water_column(si: Dict[str, float]) -> FormulaOutcome:
    p = si["pressure"]
    h = fluids.core.head_from_P(P=p, rho=WATER_DENSITY, g=G_GRAVITY)
    return FormulaOutcome(
        value=h,
        header=["Altura (h) = Pressão (P) / (ρ × g)"],
        values_heading="Valores:",
        extra_values=["ρ (água) = 1000 kg/m³", "g = 9,81 m/s²"],
        steps=[
            f"h = {to_fixed(p, 2)} / (1000 × 9,81)",
            f"h = {to_fixed(h, 4)} m",
            f"h = {to_fixed(h * 100, 2)} cm",
            f"h = {to_fixed(h * 1000, 1)} mm",
        ],
        alternate_units={"cm": h * 100, "mm": h * 1000},
    )
