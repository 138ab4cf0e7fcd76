# -*- coding: utf-8 -*-
"""
Single-run workflow wiring config → material → solver → metrics.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Sequence

from carriersim.io.config import (
    apply_overrides, build_conditions, build_kB, build_material,
    build_solver_options, load_config,
)
from carriersim.io.results import result_to_metrics, write_metrics
from carriersim.materials.database import modified_fields
from carriersim.physics.carriers.equilibrium import CarrierResult, solve_at
from carriersim.utils import diagnostics as diag
from carriersim.utils import logger

def run_from_config(
    cfg_path: Path,
    overrides: Sequence[str] = (),
    *,
    out_dir: Optional[Path] = None,
    debug: bool = False,
) -> CarrierResult:
    cfg = load_config(cfg_path)
    if overrides:
        apply_overrides(cfg, overrides)

    material = build_material(cfg)
    kB = build_kB(cfg)
    res = solve_at(material, build_conditions(cfg), kB, options=build_solver_options(cfg))
    diag.warn_if_unphysical(res)
    if debug:
        diag.log_result_summary(res, prefix="[run]")
        diag.check_mass_action(res, prefix="[run]")

    metrics = result_to_metrics(res)
    metrics["material"] = material.name
    metrics["modified"] = modified_fields(material, kB)
    out_dir = out_dir or Path("runs") / Path(cfg_path).stem
    out = write_metrics(out_dir, metrics)
    logger.info(f"[run] wrote metrics to: {out}")
    return res
