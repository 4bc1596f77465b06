# -- lesdiag/plotting/__init__.py

"""
Subpackage for plotting
"""


from . import templates, tools, series

from .templates import (
    mixing_length_diagnostics,
    mixing_length_comparison,
)

from .series import (
    panel_series,
    mixing_length_from_h5,
)


__all__ = [
    "mixing_length_diagnostics",
    "mixing_length_comparison",
    "panel_series",
    "mixing_length_from_h5",
]
