# carriersim/materials/database.py
"""
Materials database for the carrier calculator (Si / Ge / GaAs, extensible).

- eV, cm^-3 and K units (calculator convention, not SI).
- Parameters are referenced to 300 K; T-laws live in physics/carriers/intrinsic.py.
- Records are frozen: edits produce new records via with_overrides().

Public API (stable):
    MaterialParameters
    get_material(name, library=None) -> MaterialParameters
    list_materials(library=None) -> list[str]
    with_overrides(material, **changes) -> MaterialParameters
    modified_fields(material, kB_eV_per_K=None) -> list[str]
    is_modified(material, kB_eV_per_K=None) -> bool

Notes:
- Lookup is case-insensitive and accepts long names ("silicon") as aliases.
- A user `library` (e.g. from io/materials_csv.py) shadows the presets.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional
import math

from carriersim.utils.constants import K_B_EV
from carriersim.utils.errors import DomainError


__all__ = [
    "MaterialParameters",
    "PARAMETER_FIELDS",
    "get_material",
    "list_materials",
    "with_overrides",
    "modified_fields",
    "is_modified",
]

# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MaterialParameters:
    """
    300 K reference parameters of one semiconductor.

    Attributes
    ----------
    name : str
        Registry key, e.g. "Si".
    Eg300_eV : float
        Bandgap at 300 K [eV].
    Nc300_cm3 : float
        Conduction-band effective density of states at 300 K [cm^-3].
    Nv300_cm3 : float
        Valence-band effective density of states at 300 K [cm^-3].
    dEg_dT_eV_per_K : float
        Linear bandgap temperature coefficient [eV/K], typically negative.
    """

    name: str
    Eg300_eV: float
    Nc300_cm3: float
    Nv300_cm3: float
    dEg_dT_eV_per_K: float

    def __post_init__(self) -> None:
        for key in ("Eg300_eV", "dEg_dT_eV_per_K"):
            if not math.isfinite(getattr(self, key)):
                raise DomainError(f"{self.name}: {key} must be finite (got {getattr(self, key)}).")
        for key in ("Nc300_cm3", "Nv300_cm3"):
            v = getattr(self, key)
            if not math.isfinite(v) or v <= 0.0:
                raise DomainError(f"{self.name}: {key} must be > 0 cm^-3 (got {v}).")


PARAMETER_FIELDS = tuple(f.name for f in fields(MaterialParameters) if f.name != "name")


# ---------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------

_REGISTRY: Dict[str, MaterialParameters] = {
    "Si": MaterialParameters(
        name="Si", Eg300_eV=1.12, Nc300_cm3=2.8e19, Nv300_cm3=1.04e19,
        dEg_dT_eV_per_K=-2.73e-4,
    ),
    "Ge": MaterialParameters(
        name="Ge", Eg300_eV=0.66, Nc300_cm3=1.04e19, Nv300_cm3=6.0e18,
        dEg_dT_eV_per_K=-3.9e-4,
    ),
    "GaAs": MaterialParameters(
        name="GaAs", Eg300_eV=1.42, Nc300_cm3=4.7e17, Nv300_cm3=7.0e18,
        dEg_dT_eV_per_K=-5.4e-4,
    ),
}

_ALIASES: Dict[str, str] = {
    "silicon": "Si",
    "germanium": "Ge",
    "gallium arsenide": "GaAs",
}


def _resolve_key(name: str, table: Mapping[str, MaterialParameters]) -> Optional[str]:
    if name in table:
        return name
    low = name.strip().lower()
    for key in table:
        if key.lower() == low:
            return key
    alias = _ALIASES.get(low)
    if alias is not None and alias in table:
        return alias
    return None


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------


def get_material(
    name: str,
    library: Optional[Mapping[str, MaterialParameters]] = None,
) -> MaterialParameters:
    """
    Look up a material by key or alias.

    Parameters
    ----------
    name : str
        Registry key ("Si"), any-case key ("gaas") or alias ("Silicon").
    library : mapping, optional
        Extra user materials; searched before the presets.

    Returns
    -------
    MaterialParameters
    """
    if library:
        key = _resolve_key(name, library)
        if key is not None:
            return library[key]
    key = _resolve_key(name, _REGISTRY)
    if key is None:
        raise KeyError(f"material '{name}' not found")
    return _REGISTRY[key]


def list_materials(library: Optional[Mapping[str, MaterialParameters]] = None) -> list[str]:
    """Return preset keys followed by any extra library keys."""
    keys = list(_REGISTRY.keys())
    if library:
        keys.extend(k for k in library if k not in _REGISTRY)
    return keys


def with_overrides(material: MaterialParameters, **changes: float) -> MaterialParameters:
    """Return a copy of `material` with the given parameters replaced (None values ignored)."""
    unknown = sorted(set(changes) - set(PARAMETER_FIELDS))
    if unknown:
        raise ValueError(f"unknown material parameter(s): {', '.join(unknown)}")
    clean = {k: float(v) for k, v in changes.items() if v is not None}
    if not clean:
        return material
    return replace(material, **clean)


def modified_fields(
    material: MaterialParameters,
    kB_eV_per_K: Optional[float] = None,
) -> list[str]:
    """
    Names of parameters that differ from the preset with the same key.

    A material with no preset counterpart (CSV ingest, custom name) reports
    nothing. If `kB_eV_per_K` is given and differs from K_B_EV, "kB_eV_per_K"
    is appended.
    """
    out: list[str] = []
    key = _resolve_key(material.name, _REGISTRY)
    if key is not None:
        ref = _REGISTRY[key]
        out.extend(f for f in PARAMETER_FIELDS if getattr(material, f) != getattr(ref, f))
    if kB_eV_per_K is not None and float(kB_eV_per_K) != K_B_EV:
        out.append("kB_eV_per_K")
    return out


def is_modified(material: MaterialParameters, kB_eV_per_K: Optional[float] = None) -> bool:
    """True when the material or the Boltzmann constant differ from their defaults."""
    return bool(modified_fields(material, kB_eV_per_K))
