from __future__ import annotations

__all__ = ["DomainError"]


class DomainError(ValueError):
    """Non-physical input (T <= 0, kB <= 0, negative doping, non-positive DOS)."""
