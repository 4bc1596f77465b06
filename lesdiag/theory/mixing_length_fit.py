# -- lesdiag/theory/mixing_length_fit.py
import warnings

import numpy as np
from scipy.optimize import curve_fit  # type: ignore


def _proportional(l_estimated: np.ndarray, coefficient: float) -> np.ndarray:
    return coefficient * l_estimated


def fit_coefficient(l_measured: np.ndarray, l_estimated: np.ndarray) -> float:
    """Least-squares c in l_measured = c * l_estimated over depths where both are finite."""
    l_measured = np.asarray(l_measured, dtype=np.float64)
    l_estimated = np.asarray(l_estimated, dtype=np.float64)
    finite: np.ndarray = np.isfinite(l_measured) & np.isfinite(l_estimated)

    if not np.any(finite):
        warnings.warn("No finite mixing length samples to fit, using c = 1.0", category=UserWarning)
        return 1.0

    try:
        fitted_parameters, _ = curve_fit(
            _proportional, l_estimated[finite], l_measured[finite], p0=(1.0,)
        )
        return float(fitted_parameters[0])
    except (RuntimeError, ValueError, TypeError) as error:
        warnings.warn(f"Fitting of mixing length coefficient failed: {error}", category=UserWarning)
        return 1.0
