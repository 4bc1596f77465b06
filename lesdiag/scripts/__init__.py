# -- lesdiag/scripts/__init__.py

"""
Subpackage all scripts
"""

from . import run_mixing_length_analysis

__all__ = [
    "run_mixing_length_analysis",
]
