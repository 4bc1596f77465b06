# -- lesdiag/myio/__init__.py

"""
Subpackage for reading LES statistics archives and configuration, and saving results.
"""

from . import myio

__all__ = ["myio"]
