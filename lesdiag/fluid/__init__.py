# -- lesdiag/fluid/__init__.py

"""
Subpackage for deriving turbulence diagnostics from horizontally averaged LES statistics.

This package provides:
- grid: staggered vertical grid, location-tagged profiles and regridding helpers
- snapshot: reads all profiles of a run at the latest stored iteration
- tke_budget: sign convention and aggregation of the TKE budget terms
- mixing_length: measured (flux-gradient) and estimated (closure) mixing lengths
- report: the labelled profile panels handed to a renderer
"""

from . import grid, snapshot, tke_budget, mixing_length, report

__all__ = [
    "grid",
    "snapshot",
    "tke_budget",
    "mixing_length",
    "report",
]
