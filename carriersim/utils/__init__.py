from __future__ import annotations
from .constants import K_B_EV, T_REF_K, DOS_T_EXPONENT
from .errors import DomainError

__all__ = ["K_B_EV", "T_REF_K", "DOS_T_EXPONENT", "DomainError"]
