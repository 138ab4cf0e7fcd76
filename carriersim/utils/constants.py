from __future__ import annotations

__all__ = ["K_B_EV", "T_REF_K", "DOS_T_EXPONENT"]

K_B_EV = 8.617e-5            # Boltzmann constant [eV/K], user-overridable default
T_REF_K = 300.0              # reference temperature of tabulated parameters [K]
DOS_T_EXPONENT = 1.5         # Nc, Nv ~ T^{3/2}
