# carriersim/physics/carriers/equilibrium.py
"""
Equilibrium carrier densities in a uniformly doped semiconductor (carrier solver).

- Units: eV, K, cm^-3.
- Complete ionization, MB statistics, mass action n p = n_i^2.
- Three regimes:
    * intrinsic            : |N_D - N_A| < n_i  -> n = p = n_i
    * extrinsic-exact      : quadratic root of mass action + neutrality
    * extrinsic-asymptotic : |N_D - N_A| >= ratio * n_i -> majority = |N_D - N_A|

Public API (stable):
    ConductionType, Regime
    OperatingConditions, SolverOptions, CarrierResult
    classify_regime(net_cm3, ni_cm3, ratio) -> Regime
    solve(material, T_K, ND_cm3, NA_cm3, kB_eV_per_K=K_B_EV, *, options=None)
    solve_at(material, conditions, kB_eV_per_K=K_B_EV, *, options=None)

Notes
-----
- Stateless; safe to call from several threads.
- Default ratio 1e9: from there on the exact root equals |net| in float64,
  so switching to the asymptotic branch never moves n or p.
- Negative E_g(T) is passed through unless SolverOptions.clamp_bandgap.
- Minority density is n_i * (n_i / majority). Mass action holds to 1e-9 only
  while that minority stays a normal float (>= sys.float_info.min); deep in
  freeze-out it goes subnormal, loses precision, and finally underflows to 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from carriersim.materials.database import MaterialParameters
from carriersim.utils.constants import K_B_EV
from carriersim.utils.errors import DomainError
from carriersim.physics.carriers.intrinsic import (
    bandgap_at_T,
    effective_dos_at_T,
    intrinsic_density,
    validate_kB,
    validate_temperature,
)

__all__ = [
    "STRONG_EXTRINSIC_RATIO",
    "ConductionType",
    "Regime",
    "OperatingConditions",
    "SolverOptions",
    "CarrierResult",
    "DomainError",
    "classify_regime",
    "solve",
    "solve_at",
]

STRONG_EXTRINSIC_RATIO = 1.0e9


# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------


class ConductionType(str, Enum):
    INTRINSIC = "Intrinsic"
    N_TYPE = "n-type"
    P_TYPE = "p-type"


class Regime(str, Enum):
    INTRINSIC = "intrinsic"
    EXTRINSIC_EXACT = "extrinsic-exact"
    EXTRINSIC_ASYMPTOTIC = "extrinsic-asymptotic"


@dataclass(frozen=True, slots=True)
class OperatingConditions:
    """Temperature [K] and dopant densities [cm^-3]."""
    T_K: float
    ND_cm3: float = 0.0
    NA_cm3: float = 0.0


@dataclass(frozen=True, slots=True)
class SolverOptions:
    """
    strong_extrinsic_ratio : |net| / n_i at and above which majority = |net|.
    clamp_bandgap          : clamp E_g(T) at 0 eV instead of letting it go negative.
    """
    strong_extrinsic_ratio: float = STRONG_EXTRINSIC_RATIO
    clamp_bandgap: bool = False

    def __post_init__(self) -> None:
        r = self.strong_extrinsic_ratio
        if not (r >= 1.0):
            raise ValueError(f"strong_extrinsic_ratio must be >= 1 (got {r}).")


@dataclass(frozen=True, slots=True)
class CarrierResult:
    ni_cm3: float
    n_cm3: float
    p_cm3: float
    fermi_offset_eV: float          # E_F - E_i
    conduction_type: ConductionType
    regime: Regime
    Eg_eV: float                    # bandgap actually used at T
    T_K: float
    kB_eV_per_K: float
    net_doping_cm3: float           # N_D - N_A


# ---------------------------------------------------------------------
# Regime dispatch
# ---------------------------------------------------------------------


def classify_regime(net_cm3: float, ni_cm3: float, ratio: float = STRONG_EXTRINSIC_RATIO) -> Regime:
    """Pick the solution branch for net doping `net_cm3` against `ni_cm3`."""
    dop = abs(net_cm3)
    if dop == 0.0 or dop < ni_cm3:
        return Regime.INTRINSIC
    if dop >= ratio * ni_cm3:
        return Regime.EXTRINSIC_ASYMPTOTIC
    return Regime.EXTRINSIC_EXACT


def _majority_minority(dop: float, ni: float, regime: Regime) -> Tuple[float, float]:
    """Majority and minority density for net doping magnitude `dop` > 0."""
    if regime is Regime.EXTRINSIC_ASYMPTOTIC:
        maj = dop
    else:
        # (N + sqrt(N^2 + 4 n_i^2)) / 2 without squaring N
        half = 0.5 * dop
        maj = half + math.hypot(half, ni)
    return maj, ni * (ni / maj)


def _log_ratio(maj: float, ni: float) -> float:
    """ln(maj / n_i); +inf when n_i underflowed to 0."""
    if ni == 0.0:
        return math.inf
    return math.log(maj) - math.log(ni)


def _validate_doping(ND_cm3: float, NA_cm3: float) -> Tuple[float, float]:
    ND, NA = float(ND_cm3), float(NA_cm3)
    for label, v in (("N_D", ND), ("N_A", NA)):
        if not math.isfinite(v):
            raise DomainError(f"{label} must be finite (got {v}).")
        if v < 0.0:
            raise DomainError(f"{label} must be >= 0 cm^-3 (got {v}).")
    return ND, NA


# ---------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------


def solve(
    material: MaterialParameters,
    T_K: float,
    ND_cm3: float,
    NA_cm3: float,
    kB_eV_per_K: float = K_B_EV,
    *,
    options: Optional[SolverOptions] = None,
) -> CarrierResult:
    """
    Equilibrium n, p, n_i and E_F - E_i for `material` at `T_K`.

    Parameters
    ----------
    material : MaterialParameters
        300 K reference parameters.
    T_K : float
        Temperature [K], > 0.
    ND_cm3, NA_cm3 : float
        Donor / acceptor densities [cm^-3], >= 0.
    kB_eV_per_K : float
        Boltzmann constant [eV/K], > 0.
    options : SolverOptions, optional
        Regime threshold and bandgap policy.

    Returns
    -------
    CarrierResult

    Raises
    ------
    DomainError
        T <= 0, kB <= 0, negative (or non-finite) N_D / N_A.
    """
    opts = options or SolverOptions()
    T = float(validate_temperature(T_K))
    kB = validate_kB(kB_eV_per_K)
    ND, NA = _validate_doping(ND_cm3, NA_cm3)

    Eg = float(bandgap_at_T(material.Eg300_eV, material.dEg_dT_eV_per_K, T,
                            clamp=opts.clamp_bandgap))
    Nc = effective_dos_at_T(material.Nc300_cm3, T)
    Nv = effective_dos_at_T(material.Nv300_cm3, T)
    ni = float(intrinsic_density(Eg, Nc, Nv, T, kB))

    net = ND - NA
    regime = classify_regime(net, ni, opts.strong_extrinsic_ratio)
    kT = kB * T

    if regime is Regime.INTRINSIC:
        n = p = ni
        dEf = 0.0
        ctype = ConductionType.INTRINSIC
    elif net > 0.0:
        n, p = _majority_minority(net, ni, regime)
        dEf = kT * _log_ratio(n, ni)
        ctype = ConductionType.N_TYPE
    else:
        p, n = _majority_minority(-net, ni, regime)
        dEf = -kT * _log_ratio(p, ni)
        ctype = ConductionType.P_TYPE

    return CarrierResult(
        ni_cm3=ni,
        n_cm3=float(n),
        p_cm3=float(p),
        fermi_offset_eV=float(dEf),
        conduction_type=ctype,
        regime=regime,
        Eg_eV=Eg,
        T_K=T,
        kB_eV_per_K=kB,
        net_doping_cm3=net,
    )


def solve_at(
    material: MaterialParameters,
    conditions: OperatingConditions,
    kB_eV_per_K: float = K_B_EV,
    *,
    options: Optional[SolverOptions] = None,
) -> CarrierResult:
    """solve() with temperature and doping bundled in OperatingConditions."""
    return solve(
        material, conditions.T_K, conditions.ND_cm3, conditions.NA_cm3,
        kB_eV_per_K, options=options,
    )
