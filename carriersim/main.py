# carriersim/main.py
"""
carriersim main entrypoint.

Default subcommand: solve
Usage examples:
    carriersim
    carriersim solve --material Ge --T 350 --NA 1e17
    carriersim solve --material Si --Eg300 1.10 --kB 8.62e-5 --json out.json
    carriersim run --config run.yaml --set conditions.T_K=400
    carriersim sweep --config run.yaml --png carriers.png
    carriersim materials
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from .io.materials_csv import load_materials
from .io.results import result_to_metrics
from .materials.database import (
    PARAMETER_FIELDS,
    get_material,
    list_materials,
    modified_fields,
    with_overrides,
)
from .physics.carriers.equilibrium import SolverOptions, solve
from .postprocess.format import format_concentration, format_energy
from .utils import diagnostics as diag
from .utils import logger
from .utils.constants import K_B_EV
from .utils.errors import DomainError

__all__ = ["main"]


# ----------------------------- solve subcommand -----------------------------


def _add_solve_subparser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    p = subparsers.add_parser(
        "solve", help="Equilibrium n, p, ni and Fermi offset at one operating point"
    )
    p.add_argument("--material", default="Si", help="Preset key or alias (Si, Ge, GaAs)")
    p.add_argument("--materials-csv", default=None, help="Extra materials CSV")
    p.add_argument("--T", type=float, default=300.0, help="Temperature [K]")
    p.add_argument("--ND", type=float, default=1e16, help="Donor conc [cm^-3]")
    p.add_argument("--NA", type=float, default=0.0, help="Acceptor conc [cm^-3]")
    p.add_argument("--kB", type=float, default=K_B_EV, help="Boltzmann constant [eV/K]")
    # per-parameter overrides of the selected material
    p.add_argument("--Eg300", type=float, default=None, help="Override bandgap at 300 K [eV]")
    p.add_argument("--Nc300", type=float, default=None, help="Override Nc at 300 K [cm^-3]")
    p.add_argument("--Nv300", type=float, default=None, help="Override Nv at 300 K [cm^-3]")
    p.add_argument("--dEg-dT", type=float, default=None, help="Override dEg/dT [eV/K]")
    p.add_argument(
        "--ratio", type=float, default=SolverOptions().strong_extrinsic_ratio,
        help="|ND-NA|/ni at which the asymptotic majority = |ND-NA| is used",
    )
    p.add_argument("--clamp-bandgap", action="store_true", help="Clamp Eg(T) at 0 eV")
    p.add_argument("--json", default=None, help="Write result as JSON to this path")
    p.add_argument("--debug", action="store_true", help="Verbose diagnostics")
    p.set_defaults(cmd="solve")
    return p


def _run_solve(ns: argparse.Namespace) -> int:
    library = load_materials(Path(ns.materials_csv)) if ns.materials_csv else None
    material = with_overrides(
        get_material(ns.material, library=library),
        Eg300_eV=ns.Eg300,
        Nc300_cm3=ns.Nc300,
        Nv300_cm3=ns.Nv300,
        dEg_dT_eV_per_K=ns.dEg_dT,
    )
    opts = SolverOptions(strong_extrinsic_ratio=ns.ratio, clamp_bandgap=ns.clamp_bandgap)
    res = solve(material, ns.T, ns.ND, ns.NA, ns.kB, options=opts)
    diag.warn_if_unphysical(res)

    changed = modified_fields(material, ns.kB)
    tag = f"  [modified: {', '.join(changed)}]" if changed else ""
    print(f"{material.name} @ {res.T_K:g} K  (Eg = {res.Eg_eV:.4f} eV){tag}")
    print(f"  ni      = {format_concentration(res.ni_cm3)}")
    print(f"  n       = {format_concentration(res.n_cm3)}")
    print(f"  p       = {format_concentration(res.p_cm3)}")
    print(f"  Ef - Ei = {format_energy(res.fermi_offset_eV)}")
    print(f"  type    = {res.conduction_type.value}")

    if ns.debug:
        diag.log_result_summary(res)
        diag.check_mass_action(res)
        diag.check_neutrality(res)

    if ns.json:
        metrics = result_to_metrics(res)
        metrics["material"] = material.name
        metrics["modified"] = changed
        Path(ns.json).write_text(json.dumps(metrics, indent=2, sort_keys=True))
        logger.info(f"[ok] wrote {ns.json}")
    return 0


# ------------------------- config-driven subcommands ------------------------


def _add_run_subparser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("run", help="Single point from a YAML config")
    p.add_argument("--config", required=True, help="YAML run config")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                   help="Override config entry (dotted key), repeatable")
    p.add_argument("--out", default=None, help="Output directory (default runs/<stem>)")
    p.add_argument("--debug", action="store_true", help="Verbose diagnostics")
    p.set_defaults(cmd="run")


def _add_sweep_subparser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("sweep", help="Temperature / doping sweep from a YAML config")
    p.add_argument("--config", required=True, help="YAML run config with a 'sweep' section")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                   help="Override config entry (dotted key), repeatable")
    p.add_argument("--out", default=None, help="Output directory (default runs/<stem>)")
    p.add_argument("--png", default=None, help="Write carriers plot to this PNG")
    p.add_argument("--debug", action="store_true", help="Verbose diagnostics")
    p.set_defaults(cmd="sweep")


def _run_config(ns: argparse.Namespace) -> int:
    from .workflows.run_point import run_from_config

    out = Path(ns.out) if ns.out else None
    run_from_config(Path(ns.config), ns.set, out_dir=out, debug=ns.debug)
    return 0


def _run_sweep(ns: argparse.Namespace) -> int:
    from .workflows.sweep import run_sweep

    out = Path(ns.out) if ns.out else Path("runs") / Path(ns.config).stem
    run_sweep(Path(ns.config), ns.set, out_dir=out)
    if ns.png:
        from .viz.plots import render_plot

        render_plot(out, "carriers", Path(ns.png))
        logger.info(f"[ok] wrote {ns.png}")
    return 0


# ---------------------------- materials subcommand --------------------------


def _add_materials_subparser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("materials", help="List material presets")
    p.add_argument("--materials-csv", default=None, help="Extra materials CSV")
    p.set_defaults(cmd="materials")


def _run_materials(ns: argparse.Namespace) -> int:
    library = load_materials(Path(ns.materials_csv)) if ns.materials_csv else None
    print("name       " + "  ".join(f"{f:>16}" for f in PARAMETER_FIELDS))
    for key in list_materials(library):
        m = get_material(key, library=library)
        print(f"{m.name:<10} " + "  ".join(f"{getattr(m, f):>16.4g}" for f in PARAMETER_FIELDS))
    return 0


# --------------------------------- main() ------------------------------------


_HANDLERS = {
    "solve": _run_solve,
    "run": _run_config,
    "sweep": _run_sweep,
    "materials": _run_materials,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="carriersim — equilibrium carrier calculator")
    sub = parser.add_subparsers(dest="cmd")

    solve_parser = _add_solve_subparser(sub)
    _add_run_subparser(sub)
    _add_sweep_subparser(sub)
    _add_materials_subparser(sub)

    ns = parser.parse_args(argv)
    # If no subcommand given, default to 'solve' with defaults
    if ns.cmd is None:
        ns = solve_parser.parse_args([])

    logger.set_verbose(getattr(ns, "debug", False))
    try:
        return _HANDLERS[ns.cmd](ns)
    except DomainError as exc:
        logger.error(f"non-physical input: {exc}")
    except KeyError as exc:
        logger.error(f"lookup failed: {exc}")
    except (ValueError, OSError) as exc:
        logger.error(str(exc))
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
