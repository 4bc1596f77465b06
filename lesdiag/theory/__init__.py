# -- lesdiag/theory/__init__.py
"""
Subpackage for physics from theory.

This package provides:
- linear_eos: linear equation of state converting between temperature and buoyancy
- mixing_length_fit: fitting of the mixing length closure coefficient
"""

from . import linear_eos, mixing_length_fit

__all__ = [
    "linear_eos",
    "mixing_length_fit",
]
