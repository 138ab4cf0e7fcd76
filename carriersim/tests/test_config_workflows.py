# -*- coding: utf-8 -*-
"""
YAML config → single-point run and sweeps (metrics.json / sweep.csv on disk).
"""
import json
import math

import numpy as np
import pytest

from carriersim.io.config import (
    apply_overrides, build_conditions, build_kB, build_material,
    build_solver_options, build_sweep, load_config,
)
from carriersim.materials.database import get_material
from carriersim.physics.carriers.equilibrium import ConductionType
from carriersim.workflows.run_point import run_from_config
from carriersim.workflows.sweep import (
    COLUMNS, run_sweep, sweep_axis, sweep_doping, sweep_temperature,
)

CFG = """
material:
  name: Si
  overrides: {Eg300_eV: 1.10}
conditions:
  T_K: 300
  ND_cm3: 1e16
  NA_cm3: 0
constants:
  kB_eV_per_K: 8.617e-5
solver:
  strong_extrinsic_ratio: 1.0e9
sweep:
  variable: T_K
  start: 200
  stop: 500
  num: 7
"""

def _write(tmp_path, text=CFG, name="si_run.yaml"):
    p = tmp_path / name
    p.write_text(text)
    return p

def test_load_and_build(tmp_path):
    cfg = load_config(_write(tmp_path))
    mat = build_material(cfg)
    assert mat.name == "Si" and mat.Eg300_eV == 1.10
    cond = build_conditions(cfg)
    assert cond.T_K == 300.0 and cond.ND_cm3 == 1e16 and cond.NA_cm3 == 0.0
    assert build_kB(cfg) == 8.617e-5
    assert build_solver_options(cfg).strong_extrinsic_ratio == 1e9
    spec = build_sweep(cfg)
    assert spec.variable == "T_K" and spec.num == 7 and spec.scale == "linear"

def test_missing_sections_rejected(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "material: Si\n"))
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "- 1\n- 2\n"))

def test_apply_overrides(tmp_path):
    cfg = load_config(_write(tmp_path))
    apply_overrides(cfg, ["conditions.T_K=350", "material.name=Ge", "solver.clamp_bandgap=true"])
    assert build_conditions(cfg).T_K == 350.0
    assert build_material(cfg).name == "Ge"
    assert build_solver_options(cfg).clamp_bandgap is True
    with pytest.raises(ValueError):
        apply_overrides(cfg, ["conditions.T_K"])

def test_materials_csv_relative_to_config(tmp_path):
    (tmp_path / "extra.csv").write_text(
        "name,Eg300_eV,Nc300_cm3,Nv300_cm3,dEg_dT_eV_per_K\nInP,1.344,5.7e17,1.1e19,-2.9e-4\n"
    )
    text = "material: InP\nmaterials_csv: extra.csv\nconditions: {T_K: 300}\n"
    cfg = load_config(_write(tmp_path, text))
    assert build_material(cfg).Eg300_eV == 1.344

def test_run_from_config_writes_metrics(tmp_path):
    out = tmp_path / "out"
    res = run_from_config(_write(tmp_path), out_dir=out)
    assert res.conduction_type is ConductionType.N_TYPE
    data = json.loads((out / "metrics.json").read_text())
    assert data["conduction_type"] == "n-type"
    assert data["material"] == "Si"
    assert data["modified"] == ["Eg300_eV"]
    assert math.isclose(data["n_cm3"], 1e16, rel_tol=1e-2)

def test_run_sweep_writes_csv(tmp_path):
    out = tmp_path / "sweep"
    df = run_sweep(_write(tmp_path), out_dir=out)
    assert list(df.columns) == COLUMNS
    assert len(df) == 7
    assert (out / "sweep.csv").exists()
    assert np.all(np.diff(df["ni_cm3"].to_numpy()) > 0)
    assert np.allclose(df["n_cm3"] * df["p_cm3"], df["ni_cm3"] ** 2, rtol=1e-9)

def test_run_sweep_requires_section(tmp_path):
    cfg = _write(tmp_path, "material: Si\nconditions: {T_K: 300}\n")
    with pytest.raises(ValueError):
        run_sweep(cfg, out_dir=tmp_path / "x")

def test_sweep_axis():
    assert np.allclose(sweep_axis(1.0, 3.0, 3), [1.0, 2.0, 3.0])
    assert np.allclose(sweep_axis(1e14, 1e18, 5, "log"), [1e14, 1e15, 1e16, 1e17, 1e18])
    with pytest.raises(ValueError):
        sweep_axis(0.0, 1e18, 5, "log")
    with pytest.raises(ValueError):
        sweep_axis(1.0, 2.0, 0)

def test_doping_sweep_crosses_from_p_to_n():
    ge = get_material("Ge")
    df = sweep_doping(ge, 300.0, np.logspace(12, 18, 25), NA_cm3=1e15)
    types = df["conduction_type"].tolist()
    assert types[0] == "p-type" and types[-1] == "n-type"
    assert np.all(np.diff(df["fermi_offset_eV"].to_numpy()) >= 0.0)

def test_temperature_sweep_goes_intrinsic_when_hot():
    si = get_material("Si")
    df = sweep_temperature(si, [300.0, 900.0], ND_cm3=1e14)
    assert df["conduction_type"].tolist() == ["n-type", "Intrinsic"]

@pytest.mark.parametrize("text", [
    "material: Si\nconditions: 300\n",
    "material: Si\nconditions: {T_K: 300}\nconstants: 8.6e-5\n",
    "material: Si\nconditions: {T_K: 300}\nsolver: [1.0e9]\n",
    "material: Si\nconditions: {T_K: 300}\nsweep: T_K\n",
    "material: 14\nconditions: {T_K: 300}\n",
])
def test_scalar_sections_rejected_on_load(tmp_path, text):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, text))

def test_overrides_cannot_replace_a_section_with_a_scalar(tmp_path):
    cfg = load_config(_write(tmp_path))
    with pytest.raises(ValueError, match="constants must be a mapping"):
        apply_overrides(cfg, ["constants=8.6e-5"])
    cfg = load_config(_write(tmp_path))
    with pytest.raises(ValueError):
        apply_overrides(cfg, ["conditions=300"])

def test_null_optional_sections_use_defaults(tmp_path):
    cfg = load_config(_write(tmp_path, "material: Si\nconditions: {T_K: 300}\nconstants:\nsolver:\n"))
    assert build_kB(cfg) == 8.617e-5
    assert build_solver_options(cfg).strong_extrinsic_ratio == 1e9
    assert build_sweep(cfg) is None

@pytest.mark.parametrize("num", ["0", ".inf", ".nan", "many"])
def test_bad_sweep_count_rejected(tmp_path, num):
    text = f"material: Si\nconditions: {{T_K: 300}}\nsweep: {{start: 200, stop: 400, num: {num}}}\n"
    cfg = load_config(_write(tmp_path, text))
    with pytest.raises(ValueError):
        build_sweep(cfg)

def test_empty_sweeps_rejected():
    si = get_material("Si")
    with pytest.raises(ValueError, match="empty sweep"):
        sweep_temperature(si, [])
    with pytest.raises(ValueError, match="empty sweep"):
        sweep_doping(si, 300.0, np.array([]))
