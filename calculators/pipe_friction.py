"""
Pipe friction calculations: Reynolds number, relative roughness, Swamee-Jain friction
factor and total head loss.
"""

import math
from typing import Dict

import fluids.core

from utils.constants import G_GRAVITY, RE_LAMINAR_MAX, RE_TURBULENT_MIN
from utils.formatting import to_fixed

from .base import FormulaOutcome, formula

LAMINAR = "Laminar"
TRANSITIONAL = "Transição"
TURBULENT = "Turbulento"


def classify_regime(reynolds_number: float) -> str:
    """Flow regime: laminar below 2300, transitional below 4000, turbulent otherwise."""
    if reynolds_number < RE_LAMINAR_MAX:
        return LAMINAR
    if reynolds_number < RE_TURBULENT_MIN:
        return TRANSITIONAL
    return TURBULENT


def describe_regime(regime: str) -> str:
    return {
        LAMINAR: "Laminar (Re < 2300)",
        TRANSITIONAL: "Transição (2300 < Re < 4000)",
        TURBULENT: "Turbulento (Re > 4000)",
    }[regime]


@formula("reynolds")
def reynolds(si: Dict[str, float]) -> FormulaOutcome:
    rho, v, d, mu = si["density"], si["velocity"], si["diameter"], si["viscosity"]
    re = fluids.core.Reynolds(V=v, D=d, rho=rho, mu=mu)
    regime = classify_regime(re)
    return FormulaOutcome(
        value=re,
        header=["Número de Reynolds (Re) = (ρ × v × D) / μ"],
        steps=[
            f"Re = ({to_fixed(rho, 2)} × {to_fixed(v, 4)} × {to_fixed(d, 4)}) / {to_fixed(mu, 6)}",
            f"Re = {to_fixed(re, 0)}",
            "",
            f"Regime de Escoamento: {describe_regime(regime)}",
        ],
        classification=regime,
    )


@formula("relative-roughness")
def relative_roughness(si: Dict[str, float]) -> FormulaOutcome:
    roughness, d = si["roughness"], si["diameter"]
    ed = roughness / d
    return FormulaOutcome(
        value=ed,
        header=["Rugosidade Relativa (ε/D) = Rugosidade Absoluta (ε) / Diâmetro (D)"],
        steps=[
            f"ε/D = {to_fixed(roughness, 6)} / {to_fixed(d, 4)} = {to_fixed(ed, 6)}",
            "",
            "Este valor é adimensional e representa a rugosidade relativa da tubulação.",
        ],
    )


@formula("friction-factor")
def friction_factor(si: Dict[str, float]) -> FormulaOutcome:
    re, ed = si["reynolds"], si["relativeRoughness"]
    # Swamee-Jain, explicit form of Colebrook for turbulent flow
    f = 0.25 / math.log10(ed / 3.7 + 5.74 / re ** 0.9) ** 2
    return FormulaOutcome(
        value=f,
        header=[
            "Fator de Atrito (f) - Equação de Swamee-Jain:",
            "f = 0.25 / [log₁₀(ε/D/3.7 + 5.74/Re^0.9)]²",
        ],
        values_heading="Valores:",
        steps=[
            f"f = 0.25 / [log₁₀({to_fixed(ed, 6)}/3.7 + 5.74/{to_fixed(re, 0)}^0.9)]²",
            f"f = {to_fixed(f, 6)}",
            "",
            "Este valor é adimensional e representa o fator de atrito de Darcy-Weisbach.",
        ],
    )


@formula("head-loss")
def head_loss(si: Dict[str, float]) -> FormulaOutcome:
    f, length, d, v, k_sum = (
        si["frictionFactor"], si["length"], si["diameter"], si["velocity"], si["kSum"]
    )
    velocity_head = v ** 2 / (2 * G_GRAVITY)
    # Darcy-Weisbach distributed loss expressed as an equivalent K = f·L/D
    distributed = fluids.core.K_from_f(fd=f, L=length, D=d) * velocity_head
    localized = k_sum * velocity_head
    total = distributed + localized
    return FormulaOutcome(
        value=total,
        header=[
            "Perda de Carga Total (hₜ) = Perda Distribuída (hₗ) + Perda Localizada (hₘ)",
            "",
            "Perda Distribuída (Darcy-Weisbach):",
            "hₗ = f × (L/D) × (v²/2g)",
            "",
            "Perda Localizada:",
            "hₘ = Σk × (v²/2g)",
        ],
        extra_values=["g = 9,81 m/s²"],
        steps=[
            f"Perda Distribuída = {to_fixed(distributed, 4)} m",
            f"Perda Localizada = {to_fixed(localized, 4)} m",
            f"Perda Total = {to_fixed(total, 4)} m",
        ],
        alternate_units={"distributed_m": distributed, "localized_m": localized},
    )
