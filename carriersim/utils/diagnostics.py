"""
carriersim/utils/diagnostics.py

Targeted, low-noise diagnostics for carrier results.
Import and call these from workflows / CLI when debug=True.
"""

from __future__ import annotations

import math

from . import logger


def _fmt(x: float) -> str:
    return f"{x:.3e}"


def log_result_summary(result, *, prefix: str = "[diag]") -> None:
    """Print one compact line for a CarrierResult."""
    msg = [
        prefix,
        f"T={result.T_K:g} K",
        f"Eg={result.Eg_eV:+.4f} eV",
        f"ni={_fmt(result.ni_cm3)}",
        f"n={_fmt(result.n_cm3)}",
        f"p={_fmt(result.p_cm3)}",
        f"Ef-Ei={result.fermi_offset_eV * 1e3:+.2f} meV",
        f"regime={result.regime.value}",
    ]
    print(" | ".join(msg))


def mass_action_error(result) -> float:
    """Relative deviation |n p - ni^2| / ni^2 (0 when ni^2 == 0 and n p == 0)."""
    ni2 = result.ni_cm3 * result.ni_cm3
    np_ = result.n_cm3 * result.p_cm3
    if ni2 == 0.0:
        return 0.0 if np_ == 0.0 else math.inf
    return abs(np_ - ni2) / ni2


def check_mass_action(result, *, rel_tol: float = 1e-9, prefix: str = "[diag]") -> bool:
    err = mass_action_error(result)
    ok = err <= rel_tol
    print(f"{prefix} mass action: |np - ni^2|/ni^2={err:.3e} | ok={ok}")
    return ok


def check_neutrality(result, *, prefix: str = "[diag]") -> float:
    """
    Report the charge-neutrality residual p - n + (N_D - N_A), relative to max(n, p).

    Exact in the extrinsic-exact regime; the intrinsic and asymptotic regimes
    are approximations and leave a small residual.
    """
    resid = result.p_cm3 - result.n_cm3 + result.net_doping_cm3
    scale = max(result.n_cm3, result.p_cm3)
    rel = abs(resid) / scale if scale > 0.0 else 0.0
    print(f"{prefix} neutrality: residual={resid:+.3e} cm^-3 (rel {rel:.3e})")
    return rel


def warn_if_unphysical(result) -> list[str]:
    """Warn (via logger) about legitimate-but-suspicious outcomes; return the messages."""
    msgs: list[str] = []
    if result.Eg_eV <= 0.0:
        msgs.append(
            f"bandgap at T={result.T_K:g} K is {result.Eg_eV:+.4f} eV (<= 0); "
            "linear T-law extrapolated beyond its range"
        )
    if result.ni_cm3 == 0.0:
        msgs.append(f"n_i underflowed to 0 at T={result.T_K:g} K")
    elif not math.isfinite(result.ni_cm3):
        msgs.append(f"n_i overflowed at T={result.T_K:g} K")
    for m in msgs:
        logger.warn(m)
    return msgs
