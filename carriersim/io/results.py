# -*- coding: utf-8 -*-
"""
Results IO helpers.

Write:
  * metrics.json  (single-point carrier result)
  * sweep.csv     (one row per sweep point)

This keeps on-disk layout stable for post-processing and plots.
"""
from __future__ import annotations
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

import pandas as pd

def result_to_metrics(result) -> Dict[str, Any]:
    """Flatten a CarrierResult into JSON-friendly scalars."""
    d = asdict(result)
    d["conduction_type"] = result.conduction_type.value
    d["regime"] = result.regime.value
    return d

def write_metrics(run_dir: Path, metrics: Dict[str, Any]) -> Path:
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "metrics.json"
    with open(out, "w") as f:
        json.dump(metrics, f, indent=2, sort_keys=True)
    return out

def save_sweep_csv(run_dir: Path, df: pd.DataFrame) -> Path:
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "sweep.csv"
    df.to_csv(out, index=False)
    return out

def load_sweep_csv(run_dir: Path) -> pd.DataFrame:
    return pd.read_csv(run_dir / "sweep.csv")
