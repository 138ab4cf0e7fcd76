# -*- coding: utf-8 -*-
"""
Materials CSV ingest.

Expected columns (header, case-sensitive):
  name,Eg300_eV,Nc300_cm3,Nv300_cm3,dEg_dT_eV_per_K

Example rows:
  InP,1.344,5.7e17,1.1e19,-2.9e-4
  Si_strained,1.08,2.8e19,1.04e19,-2.73e-4

Units:
  Eg [eV], Nc/Nv [cm^-3] at 300 K, dEg/dT [eV/K]

The returned mapping is passed to materials.database.get_material(name, library=...).
"""
from __future__ import annotations
import csv
from pathlib import Path
from typing import Dict

from carriersim.materials.database import MaterialParameters, PARAMETER_FIELDS

def load_materials(csv_path: Path) -> Dict[str, MaterialParameters]:
    M: Dict[str, MaterialParameters] = {}
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in ("name",) + PARAMETER_FIELDS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{csv_path}: missing column(s) {', '.join(missing)}")
        for lineno, r in enumerate(reader, start=2):
            name = r["name"].strip()
            if not name:
                raise ValueError(f"{csv_path}:{lineno}: empty material name")
            try:
                values = {k: float(r[k]) for k in PARAMETER_FIELDS}
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{csv_path}:{lineno}: bad numeric value ({exc})") from exc
            M[name] = MaterialParameters(name=name, **values)
    if not M:
        raise ValueError(f"{csv_path}: contains no materials")
    return M
