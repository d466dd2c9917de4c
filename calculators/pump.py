"""
Pumping calculations: manometric head from the energy equation, hydraulic power and
available NPSH.
"""

from typing import Dict

from utils.constants import G_GRAVITY, W_per_HP, W_per_KW
from utils.formatting import to_fixed

from .base import FormulaOutcome, formula

GRAVITY_LINE = "g = 9,81 m/s²"


@formula("energy-equation")
def energy_equation(si: Dict[str, float]) -> FormulaOutcome:
    rho_g = si["density"] * G_GRAVITY
    pressure_head = (si["p2"] - si["p1"]) / rho_g
    velocity_head = (si["v2"] ** 2 - si["v1"] ** 2) / (2 * G_GRAVITY)
    elevation = si["z2"] - si["z1"]
    head = pressure_head + velocity_head + elevation + si["headLoss"]
    return FormulaOutcome(
        value=head,
        header=[
            "Equação da Energia para Carga Manométrica da Bomba (Hₘ):",
            "Hₘ = (P₂-P₁)/(ρg) + (v₂²-v₁²)/(2g) + (z₂-z₁) + hₜ",
        ],
        extra_values=[GRAVITY_LINE],
        steps=[
            f"Hₘ = {to_fixed(pressure_head, 4)} + {to_fixed(velocity_head, 4)} + "
            f"{to_fixed(elevation, 4)} + {to_fixed(si['headLoss'], 4)}",
            f"Hₘ = {to_fixed(head, 4)} m",
        ],
    )


@formula("pump-power")
def pump_power(si: Dict[str, float]) -> FormulaOutcome:
    rho, q, h = si["density"], si["flow"], si["head"]
    eta = si["efficiency"] / 100
    power = rho * G_GRAVITY * q * h / eta
    return FormulaOutcome(
        value=power,
        header=["Potência da Bomba (P) = (ρ × g × Q × H) / η"],
        extra_values=[GRAVITY_LINE],
        steps=[
            f"P = ({to_fixed(rho, 2)} × 9,81 × {to_fixed(q, 6)} × {to_fixed(h, 2)}) / {to_fixed(eta, 2)}",
            f"P = {to_fixed(power, 2)} W",
            f"P = {to_fixed(power / W_per_KW, 4)} kW",
            f"P = {to_fixed(power / W_per_HP, 4)} hp",
        ],
        alternate_units={"kW": power / W_per_KW, "hp": power / W_per_HP},
    )


@formula("npsh")
def npsh_available(si: Dict[str, float]) -> FormulaOutcome:
    pressure_head = (si["atmosphericPressure"] - si["vaporPressure"]) / (si["density"] * G_GRAVITY)
    npsh = pressure_head - si["suctionHeight"] - si["headLoss"]
    return FormulaOutcome(
        value=npsh,
        header=["NPSH Disponível = (Pₐₜₘ - Pᵥ) / (ρg) - hₛ - hₗ"],
        extra_values=[GRAVITY_LINE],
        steps=[
            f"NPSH = {to_fixed(pressure_head, 4)} - {to_fixed(si['suctionHeight'], 2)} - "
            f"{to_fixed(si['headLoss'], 4)}",
            f"NPSH = {to_fixed(npsh, 4)} m",
        ],
    )
