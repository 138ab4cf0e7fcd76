# carriersim/postprocess/visualization.py
"""
Lightweight plotting helpers for carrier sweeps (DataFrames from workflows/sweep.py).
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
import matplotlib.pyplot as plt
import pandas as pd

__all__ = ["plot_carriers_vs_temperature", "plot_carriers_vs_doping", "plot_fermi_offset"]


def _c64(x):
    return np.ascontiguousarray(np.asarray(x, dtype=np.float64))


def _new_axes(ax: plt.Axes | None) -> Tuple[plt.Figure, plt.Axes]:
    if ax is None:
        return plt.subplots(figsize=(6.0, 3.6), constrained_layout=True)
    return ax.figure, ax


def _plot_densities(ax: plt.Axes, x: np.ndarray, df: pd.DataFrame) -> None:
    ax.semilogy(x, _c64(df["n_cm3"]), label=r"$n$", linewidth=1.8)
    ax.semilogy(x, _c64(df["p_cm3"]), label=r"$p$", linewidth=1.8)
    ax.semilogy(x, _c64(df["ni_cm3"]), label=r"$n_i$", linestyle="--", linewidth=1.4)
    ax.set_ylabel(r"Concentration (cm$^{-3}$)")
    ax.grid(True, which="both", linestyle=":", linewidth=0.6)
    ax.legend(frameon=False, ncol=3, loc="best")


def plot_carriers_vs_temperature(
    df: pd.DataFrame,
    *,
    ax: plt.Axes | None = None,
    title: str | None = "Carrier concentrations vs temperature",
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot n, p and n_i against T on a log axis.

    Parameters
    ----------
    df : DataFrame
        Needs columns T_K, n_cm3, p_cm3, ni_cm3.
    ax : matplotlib Axes, optional
        If provided, plot into this axes; otherwise create a new figure.
    title : str, optional
        Title for the plot.

    Returns
    -------
    fig, ax : matplotlib Figure and Axes
    """
    fig, ax = _new_axes(ax)
    _plot_densities(ax, _c64(df["T_K"]), df)
    ax.set_xlabel("T (K)")
    if title:
        ax.set_title(title)
    return fig, ax


def plot_carriers_vs_doping(
    df: pd.DataFrame,
    *,
    column: str = "ND_cm3",
    ax: plt.Axes | None = None,
    title: str | None = "Carrier concentrations vs doping",
) -> Tuple[plt.Figure, plt.Axes]:
    """Plot n, p and n_i against a doping column on log-log axes."""
    fig, ax = _new_axes(ax)
    _plot_densities(ax, _c64(df[column]), df)
    ax.set_xscale("log")
    ax.set_xlabel(r"$N_D$ (cm$^{-3}$)" if column == "ND_cm3" else r"$N_A$ (cm$^{-3}$)")
    if title:
        ax.set_title(title)
    return fig, ax


def plot_fermi_offset(
    df: pd.DataFrame,
    *,
    x: str = "T_K",
    ax: plt.Axes | None = None,
    title: str | None = r"$E_F - E_i$",
) -> Tuple[plt.Figure, plt.Axes]:
    """Plot the Fermi-level offset (meV) against column `x`."""
    fig, ax = _new_axes(ax)
    xv = _c64(df[x])
    ax.plot(xv, _c64(df["fermi_offset_eV"]) * 1e3, linewidth=1.8)
    ax.axhline(0.0, color="k", linewidth=0.6)
    if x != "T_K":
        ax.set_xscale("log")
    ax.set_xlabel({"T_K": "T (K)", "ND_cm3": r"$N_D$ (cm$^{-3}$)",
                   "NA_cm3": r"$N_A$ (cm$^{-3}$)"}.get(x, x))
    ax.set_ylabel(r"$E_F - E_i$ (meV)")
    ax.grid(True, which="both", linestyle=":", linewidth=0.6)
    if title:
        ax.set_title(title)
    return fig, ax
