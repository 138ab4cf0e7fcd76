# -*- coding: utf-8 -*-
"""
Command-line entry: default solve, overrides, JSON output, error exit codes.
"""
import json

from carriersim.main import main

def test_default_solve(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Si @ 300 K" in out
    assert "n-type" in out
    assert "modified" not in out

def test_solve_p_type_with_override(capsys, tmp_path):
    path = tmp_path / "res.json"
    rc = main(["solve", "--material", "Ge", "--ND", "0", "--NA", "1e17",
               "--Eg300", "0.70", "--json", str(path)])
    assert rc == 0
    out = capsys.readouterr().out
    assert "p-type" in out
    assert "modified: Eg300_eV" in out
    data = json.loads(path.read_text())
    assert data["conduction_type"] == "p-type"
    assert data["fermi_offset_eV"] < 0.0

def test_domain_error_exit_code(capsys):
    assert main(["solve", "--T=-10"]) == 1
    assert "non-physical input" in capsys.readouterr().err
    assert main(["solve", "--kB", "0"]) == 1

def test_unknown_material_exit_code(capsys):
    assert main(["solve", "--material", "Unobtainium"]) == 1
    assert "lookup failed" in capsys.readouterr().err

def test_materials_listing(capsys):
    assert main(["materials"]) == 0
    out = capsys.readouterr().out
    for name in ("Si", "Ge", "GaAs"):
        assert name in out

def test_run_and_sweep_subcommands(tmp_path, capsys):
    cfg = tmp_path / "ge.yaml"
    cfg.write_text(
        "material: Ge\n"
        "conditions: {T_K: 300, ND_cm3: 0, NA_cm3: 1.0e16}\n"
        "sweep: {variable: NA_cm3, start: 1.0e12, stop: 1.0e18, num: 7, scale: log}\n"
    )
    out_dir = tmp_path / "runs"
    assert main(["run", "--config", str(cfg), "--out", str(out_dir)]) == 0
    assert (out_dir / "metrics.json").exists()
    png = tmp_path / "carriers.png"
    assert main(["sweep", "--config", str(cfg), "--out", str(out_dir),
                 "--png", str(png), "--set", "conditions.T_K=320"]) == 0
    assert (out_dir / "sweep.csv").exists()
    assert png.exists()

def test_malformed_config_exit_code(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("material: Si\nconditions: 300\n")
    assert main(["run", "--config", str(cfg), "--out", str(tmp_path / "r")]) == 1
    assert "conditions must be a mapping" in capsys.readouterr().err

    cfg.write_text("material: Si\nconditions: {T_K: 300}\n")
    assert main(["run", "--config", str(cfg), "--out", str(tmp_path / "r"),
                 "--set", "constants=8.6e-5"]) == 1
    assert "constants must be a mapping" in capsys.readouterr().err
