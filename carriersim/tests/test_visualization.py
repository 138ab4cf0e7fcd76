# -*- coding: utf-8 -*-
"""
Plot helpers return figures with the expected curves.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from carriersim.io.results import save_sweep_csv
from carriersim.materials.database import get_material
from carriersim.postprocess.visualization import (
    plot_carriers_vs_doping, plot_carriers_vs_temperature, plot_fermi_offset,
)
from carriersim.viz.plots import render_plot
from carriersim.workflows.sweep import sweep_doping, sweep_temperature

def test_carriers_vs_temperature():
    df = sweep_temperature(get_material("Si"), np.linspace(250.0, 500.0, 11), ND_cm3=1e15)
    fig, ax = plot_carriers_vs_temperature(df)
    assert len(ax.get_lines()) == 3
    assert ax.get_yscale() == "log"

def test_fermi_offset_vs_doping():
    df = sweep_doping(get_material("GaAs"), 300.0, np.logspace(10, 18, 9))
    fig, ax = plot_fermi_offset(df, x="ND_cm3")
    assert ax.get_xscale() == "log"
    fig, ax = plot_carriers_vs_doping(df)
    assert len(ax.get_lines()) == 3

def test_render_plot_from_saved_sweep(tmp_path):
    df = sweep_temperature(get_material("Ge"), np.linspace(200.0, 400.0, 5), NA_cm3=1e16)
    save_sweep_csv(tmp_path, df)
    png = tmp_path / "fermi.png"
    render_plot(tmp_path, "fermi", png)
    assert png.exists()
    with pytest.raises(ValueError):
        render_plot(tmp_path, "bogus", None)
