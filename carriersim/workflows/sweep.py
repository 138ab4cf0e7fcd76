# -*- coding: utf-8 -*-
"""
Parameter sweeps over temperature or doping.

Each point is an independent solve(); results are collected into a
pandas DataFrame (one row per point) and optionally written as sweep.csv.
"""
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from carriersim.io.config import (
    SWEEP_VARIABLES, SweepSpec, apply_overrides, build_conditions, build_kB,
    build_material, build_solver_options, build_sweep, load_config,
)
from carriersim.io.results import save_sweep_csv
from carriersim.materials.database import MaterialParameters
from carriersim.physics.carriers.equilibrium import (
    OperatingConditions, SolverOptions, solve_at,
)
from carriersim.physics.carriers.intrinsic import effective_dos_at_T, intrinsic_level_offset
from carriersim.utils import diagnostics as diag
from carriersim.utils import logger
from carriersim.utils.constants import K_B_EV

COLUMNS = [
    "T_K", "ND_cm3", "NA_cm3", "Eg_eV", "ni_cm3", "n_cm3", "p_cm3",
    "fermi_offset_eV", "conduction_type", "regime", "Ei_minus_midgap_eV",
]

def sweep_axis(start: float, stop: float, num: int, scale: str = "linear") -> np.ndarray:
    """Sample points between start and stop (inclusive), linear or log spaced."""
    if num < 1:
        raise ValueError(f"sweep needs num >= 1 (got {num})")
    if scale == "linear":
        return np.linspace(start, stop, num)
    if scale == "log":
        if start <= 0.0 or stop <= 0.0:
            raise ValueError("log sweep needs start, stop > 0")
        return np.logspace(np.log10(start), np.log10(stop), num)
    raise ValueError(f"unknown sweep scale: {scale!r}")

def sweep(
    material: MaterialParameters,
    conditions: OperatingConditions,
    variable: str,
    values: Iterable[float],
    kB_eV_per_K: float = K_B_EV,
    *,
    options: Optional[SolverOptions] = None,
) -> pd.DataFrame:
    """Solve at `conditions` with `variable` replaced by each of `values`."""
    if variable not in SWEEP_VARIABLES:
        raise ValueError(f"variable must be one of {SWEEP_VARIABLES} (got {variable!r})")
    rows = []
    warned = False
    for v in values:
        cond = replace(conditions, **{variable: float(v)})
        res = solve_at(material, cond, kB_eV_per_K, options=options)
        if not warned and diag.warn_if_unphysical(res):
            warned = True
        Nc = effective_dos_at_T(material.Nc300_cm3, res.T_K)
        Nv = effective_dos_at_T(material.Nv300_cm3, res.T_K)
        rows.append({
            "T_K": res.T_K,
            "ND_cm3": cond.ND_cm3,
            "NA_cm3": cond.NA_cm3,
            "Eg_eV": res.Eg_eV,
            "ni_cm3": res.ni_cm3,
            "n_cm3": res.n_cm3,
            "p_cm3": res.p_cm3,
            "fermi_offset_eV": res.fermi_offset_eV,
            "conduction_type": res.conduction_type.value,
            "regime": res.regime.value,
            "Ei_minus_midgap_eV": float(intrinsic_level_offset(Nc, Nv, res.T_K, kB_eV_per_K)),
        })
    return pd.DataFrame(rows, columns=COLUMNS)

def sweep_temperature(
    material: MaterialParameters,
    T_K: Sequence[float],
    ND_cm3: float = 0.0,
    NA_cm3: float = 0.0,
    kB_eV_per_K: float = K_B_EV,
    *,
    options: Optional[SolverOptions] = None,
) -> pd.DataFrame:
    if len(T_K) == 0:
        raise ValueError("empty sweep: no temperatures given")
    cond = OperatingConditions(T_K=float(T_K[0]), ND_cm3=ND_cm3, NA_cm3=NA_cm3)
    return sweep(material, cond, "T_K", T_K, kB_eV_per_K, options=options)

def sweep_doping(
    material: MaterialParameters,
    T_K: float,
    ND_cm3: Sequence[float],
    NA_cm3: float = 0.0,
    kB_eV_per_K: float = K_B_EV,
    *,
    options: Optional[SolverOptions] = None,
) -> pd.DataFrame:
    """Donor sweep at fixed acceptor background."""
    if len(ND_cm3) == 0:
        raise ValueError("empty sweep: no donor densities given")
    cond = OperatingConditions(T_K=T_K, ND_cm3=float(ND_cm3[0]), NA_cm3=NA_cm3)
    return sweep(material, cond, "ND_cm3", ND_cm3, kB_eV_per_K, options=options)

def run_sweep(
    cfg_path: Path,
    overrides: Sequence[str] = (),
    *,
    out_dir: Optional[Path] = None,
    spec: Optional[SweepSpec] = None,
) -> pd.DataFrame:
    """Config → sweep → runs/<stem>/sweep.csv."""
    cfg = load_config(cfg_path)
    if overrides:
        logger.info(f"[sweep] base={cfg_path}, overrides={list(overrides)}")
        apply_overrides(cfg, overrides)
    spec = spec or build_sweep(cfg)
    if spec is None:
        raise ValueError(f"{cfg_path}: no 'sweep' section")

    material = build_material(cfg)
    values = sweep_axis(spec.start, spec.stop, spec.num, spec.scale)
    logger.debug(f"[sweep] {material.name}: {spec.variable} in [{spec.start:g}, {spec.stop:g}] x{spec.num} ({spec.scale})")
    df = sweep(
        material, build_conditions(cfg), spec.variable, values,
        build_kB(cfg), options=build_solver_options(cfg),
    )
    out_dir = out_dir or Path("runs") / Path(cfg_path).stem
    out = save_sweep_csv(out_dir, df)
    logger.info(f"[sweep] wrote {len(df)} points to: {out}")
    return df
