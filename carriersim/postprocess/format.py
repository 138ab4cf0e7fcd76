# carriersim/postprocess/format.py
"""
Display strings for carrier results (terminal / report output).
"""

from __future__ import annotations

import math

__all__ = ["format_scientific", "format_energy", "format_concentration"]


def format_scientific(value: float, digits: int = 2) -> str:
    """'1.23 × 10^16' style; '0' for zero, plain str() for inf/nan."""
    value = float(value)
    if value == 0.0:
        return "0"
    if not math.isfinite(value):
        return str(value)
    exponent = math.floor(math.log10(abs(value)))
    coeff = round(value / 10.0 ** exponent, digits)
    if abs(coeff) >= 10.0:          # 9.999e15 -> 10.00 × 10^15
        coeff /= 10.0
        exponent += 1
    return f"{coeff:.{digits}f} × 10^{exponent}"


def format_energy(value_eV: float, digits: int = 1) -> str:
    """Energy in meV, e.g. 0.3479 -> '347.9 meV'."""
    return f"{float(value_eV) * 1000.0:.{digits}f} meV"


def format_concentration(value_cm3: float, digits: int = 2) -> str:
    return f"{format_scientific(value_cm3, digits)} cm⁻³"
