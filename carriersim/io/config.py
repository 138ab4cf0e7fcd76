# carriersim/io/config.py
# -*- coding: utf-8 -*-
"""
YAML → material / conditions / solver options / sweep helpers.

Schema (minimal, example):

material:
  name: Si
  overrides: { Eg300_eV: 1.10 }      # optional, any MaterialParameters field
materials_csv: extra_materials.csv   # optional, relative to this file
conditions:
  T_K: 300
  ND_cm3: 1.0e16
  NA_cm3: 0
constants:
  kB_eV_per_K: 8.617e-5              # optional
solver:
  strong_extrinsic_ratio: 1.0e9      # optional
  clamp_bandgap: false               # optional
sweep:                               # optional, used by workflows/sweep.py
  variable: T_K                      # T_K | ND_cm3 | NA_cm3
  start: 200
  stop: 500
  num: 31
  scale: linear                      # linear | log
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from carriersim.io.materials_csv import load_materials
from carriersim.materials.database import MaterialParameters, get_material, with_overrides
from carriersim.physics.carriers.equilibrium import OperatingConditions, SolverOptions
from carriersim.utils.constants import K_B_EV

SWEEP_VARIABLES = ("T_K", "ND_cm3", "NA_cm3")

@dataclass
class RunConfig:
    raw: dict
    path: Path

@dataclass
class SweepSpec:
    variable: str
    start: float
    stop: float
    num: int
    scale: str = "linear"

def load_config(path: Path) -> RunConfig:
    data = yaml.safe_load(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("Top-level YAML must be a mapping")
    _validate_minimum(data)
    return RunConfig(raw=data, path=Path(path))

def build_material(cfg: RunConfig) -> MaterialParameters:
    m = cfg.raw["material"]
    if isinstance(m, str):
        m = {"name": m}
    elif not isinstance(m, dict):
        raise ValueError(f"material must be a name or a mapping (got {m!r})")
    if "name" not in m:
        raise ValueError("Missing material.name")
    name = str(m["name"])

    library = None
    csv_rel = cfg.raw.get("materials_csv")
    if csv_rel:
        csv_path = Path(str(csv_rel))
        if not csv_path.is_absolute():
            csv_path = cfg.path.parent / csv_path
        library = load_materials(csv_path)

    material = get_material(name, library=library)
    overrides = m.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise ValueError("material.overrides must be a mapping")
    return with_overrides(material, **{k: _num(v, f"material.overrides.{k}") for k, v in overrides.items()})

def build_conditions(cfg: RunConfig) -> OperatingConditions:
    c = _section(cfg.raw, "conditions")
    return OperatingConditions(
        T_K=_num(c.get("T_K", 300.0), "conditions.T_K"),
        ND_cm3=_num(c.get("ND_cm3", 0.0), "conditions.ND_cm3"),
        NA_cm3=_num(c.get("NA_cm3", 0.0), "conditions.NA_cm3"),
    )

def build_kB(cfg: RunConfig) -> float:
    consts = _section(cfg.raw, "constants")
    return _num(consts.get("kB_eV_per_K", K_B_EV), "constants.kB_eV_per_K")

def build_solver_options(cfg: RunConfig) -> SolverOptions:
    s = _section(cfg.raw, "solver")
    defaults = SolverOptions()
    return SolverOptions(
        strong_extrinsic_ratio=_num(
            s.get("strong_extrinsic_ratio", defaults.strong_extrinsic_ratio),
            "solver.strong_extrinsic_ratio",
        ),
        clamp_bandgap=bool(s.get("clamp_bandgap", defaults.clamp_bandgap)),
    )

def build_sweep(cfg: RunConfig) -> Optional[SweepSpec]:
    s = _section(cfg.raw, "sweep")
    if not s:
        return None
    variable = str(s.get("variable", "T_K"))
    if variable not in SWEEP_VARIABLES:
        raise ValueError(f"sweep.variable must be one of {SWEEP_VARIABLES} (got {variable!r})")
    scale = str(s.get("scale", "linear")).lower()
    if scale not in ("linear", "log"):
        raise ValueError(f"sweep.scale must be 'linear' or 'log' (got {scale!r})")
    for key in ("start", "stop"):
        if key not in s:
            raise ValueError(f"Missing sweep.{key}")
    num = _num(s.get("num", 31), "sweep.num")
    if not (1 <= num < float("inf")):
        raise ValueError(f"sweep.num must be a finite count >= 1 (got {num!r})")
    return SweepSpec(
        variable=variable,
        start=_num(s["start"], "sweep.start"),
        stop=_num(s["stop"], "sweep.stop"),
        num=int(num),
        scale=scale,
    )

def apply_overrides(cfg: RunConfig, overrides: Sequence[str]) -> RunConfig:
    """
    Apply dotted 'a.b.c=value' overrides in place (value parsed as YAML).

    Example: apply_overrides(cfg, ["conditions.T_K=350", "material.name=Ge"])
    """
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"override must look like key.path=value (got {item!r})")
        key, value = item.split("=", 1)
        parts = [p for p in key.strip().split(".") if p]
        if not parts:
            raise ValueError(f"empty override key in {item!r}")
        node: Dict[str, Any] = cfg.raw
        for p in parts[:-1]:
            child = node.get(p)
            if child is None:
                child = node[p] = {}
            elif not isinstance(child, dict):
                raise ValueError(f"cannot descend into non-mapping key {p!r} in {item!r}")
            node = child
        node[parts[-1]] = yaml.safe_load(value)
    _validate_minimum(cfg.raw)
    return cfg

def _num(v: Any, where: str) -> float:
    # PyYAML reads '1e16' (no dot) as a string
    try:
        return float(v)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: expected a number (got {v!r})") from exc

def _validate_minimum(cfg: dict) -> None:
    for key in ("material", "conditions"):
        if key not in cfg:
            raise ValueError(f"Missing top-level key: {key}")
    for key in ("conditions", "constants", "solver", "sweep"):
        _section(cfg, key)
    m = cfg["material"]
    if not isinstance(m, (str, dict)):
        raise ValueError(f"material must be a name or a mapping (got {m!r})")

def _section(cfg: dict, key: str) -> dict:
    """cfg[key] as a mapping; a missing or null section reads as {}."""
    s = cfg.get(key)
    if s is None:
        return {}
    if not isinstance(s, dict):
        raise ValueError(f"{key} must be a mapping (got {s!r})")
    return s
