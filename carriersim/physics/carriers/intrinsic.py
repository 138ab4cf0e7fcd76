# carriersim/physics/carriers/intrinsic.py
"""
Intrinsic references for a single homogeneous semiconductor (eV / cm^-3 units).

- Linear bandgap temperature law referenced to 300 K.
- Effective densities of states scaled as (T/300)^{3/2}.
- MB (Maxwell–Boltzmann) intrinsic density and intrinsic-level position.

Public API:
    bandgap_at_T(Eg300_eV, dEg_dT_eV_per_K, T, clamp=False) -> Eg
    effective_dos_at_T(N300_cm3, T) -> N(T)
    intrinsic_density(Eg_eV, Nc_cm3, Nv_cm3, T, kB_eV_per_K=K_B_EV) -> n_i
    intrinsic_level_offset(Nc_cm3, Nv_cm3, T, kB_eV_per_K=K_B_EV) -> E_i - midgap

Notes
-----
- All functions accept scalars or numpy arrays and broadcast like numpy.
- exp() overflow/underflow in n_i is not an error: a huge gap at low T gives
  n_i -> 0, a negative (unclamped) gap at high T gives a large n_i.
"""

from __future__ import annotations

import numpy as np

from carriersim.utils.constants import DOS_T_EXPONENT, K_B_EV, T_REF_K
from carriersim.utils.errors import DomainError

__all__ = [
    "bandgap_at_T",
    "effective_dos_at_T",
    "intrinsic_density",
    "intrinsic_level_offset",
    "validate_temperature",
    "validate_kB",
]


def _c64(x) -> np.ndarray:
    return np.asarray(x, dtype=np.float64)


def validate_temperature(T: float | np.ndarray) -> np.ndarray:
    """Return T as float64; raise DomainError unless finite and > 0 K."""
    T = _c64(T)
    if not np.all(np.isfinite(T)):
        raise DomainError("Temperature T has non-finite values.")
    if np.any(T <= 0.0):
        tmin = float(np.min(T))
        raise DomainError(f"T must be > 0 K (got min {tmin}).")
    return T


def validate_kB(kB_eV_per_K: float) -> float:
    """Return kB as float; raise DomainError unless finite and > 0 eV/K."""
    kB = float(kB_eV_per_K)
    if not np.isfinite(kB) or kB <= 0.0:
        raise DomainError(f"Boltzmann constant must be > 0 eV/K (got {kB}).")
    return kB


def bandgap_at_T(
    Eg300_eV: float | np.ndarray,
    dEg_dT_eV_per_K: float | np.ndarray,
    T: float | np.ndarray,
    *,
    clamp: bool = False,
) -> np.ndarray:
    """
    Temperature-adjusted bandgap [eV]:
        Eg(T) = Eg(300 K) + dEg/dT * (T - 300).

    With clamp=False a negative result is returned as-is.
    """
    T = validate_temperature(T)
    Eg = _c64(Eg300_eV) + _c64(dEg_dT_eV_per_K) * (T - T_REF_K)
    if clamp:
        Eg = np.maximum(Eg, 0.0)
    return Eg


def effective_dos_at_T(N300_cm3: float | np.ndarray, T: float | np.ndarray) -> np.ndarray:
    """Effective DOS [cm^-3] at T from its 300 K value: N(T) = N300 (T/300)^{3/2}."""
    T = validate_temperature(T)
    return _c64(N300_cm3) * (T / T_REF_K) ** DOS_T_EXPONENT


def intrinsic_density(
    Eg_eV: float | np.ndarray,
    Nc_cm3: float | np.ndarray,
    Nv_cm3: float | np.ndarray,
    T: float | np.ndarray,
    kB_eV_per_K: float = K_B_EV,
) -> np.ndarray:
    """
    Intrinsic density [cm^-3] under MB approximation:
        n_i = sqrt(N_c N_v) * exp(-E_g / (2 k_B T)).
    """
    T = validate_temperature(T)
    kB = validate_kB(kB_eV_per_K)
    Eg = _c64(Eg_eV)
    with np.errstate(over="ignore", under="ignore"):
        return np.sqrt(_c64(Nc_cm3) * _c64(Nv_cm3)) * np.exp(-Eg / (2.0 * kB * T))


def intrinsic_level_offset(
    Nc_cm3: float | np.ndarray,
    Nv_cm3: float | np.ndarray,
    T: float | np.ndarray,
    kB_eV_per_K: float = K_B_EV,
) -> np.ndarray:
    """
    Intrinsic level relative to midgap [eV], MB approximation:
        E_i - (E_C + E_V)/2 = (k_B T / 2) ln(N_v / N_c).
    """
    T = validate_temperature(T)
    kB = validate_kB(kB_eV_per_K)
    return 0.5 * kB * T * np.log(_c64(Nv_cm3) / _c64(Nc_cm3))
