# -- lesdiag/__init__.py
"""
Post-processing of horizontally averaged LES statistics: TKE budget and mixing length diagnostics
"""

from . import errors, fluid, myio, plotting, scripts, theory

__version__ = "1.0.0"
__all__ = [
    "errors",
    "fluid",
    "myio",
    "plotting",
    "scripts",
    "theory",
]
