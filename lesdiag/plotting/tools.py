import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib import pyplot as plt
from matplotlib.axes import Axes

from lesdiag import globals

PlotMethod = Literal["plot"]


@dataclass
class PlotSeries:
    data: Dict[str, Any]
    x_key: Optional[str] = "x"
    y_key: Optional[str] = "y"
    plot_method: Optional[PlotMethod] = "plot"
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PanelSpec:
    series_list: List[PlotSeries]
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None
    xlim: Optional[Tuple[float, float]] = None
    ylim: Optional[Tuple[float, float]] = None


# ------------------------- rc / axis helpers -------------------------


def update_plot_params() -> None:
    params: Dict[str, Any] = {"font.family": "serif"}
    # LaTeX rendering only where a latex binary is available
    if shutil.which("latex") is not None:
        params.update(
            {
                "text.usetex": True,
                "font.serif": ["Computer Modern"],
                "text.latex.preamble": r"\usepackage{amsmath}",
            }
        )
    else:
        params["text.usetex"] = False
    plt.rcParams.update(params)


def format_plot_axes(axes: Axes) -> Axes:
    axes.spines["top"].set_visible(False)
    axes.spines["right"].set_visible(False)
    axes.spines["left"].set_linewidth(1.2)
    axes.spines["bottom"].set_linewidth(1.0)
    axes.tick_params(axis="both", which="both", direction="out", labelsize=12)
    if axes.get_legend_handles_labels()[0]:
        axes.legend(frameon=False, fontsize=12)
    return axes


# ------------------------- generic plotting helpers -------------------------


def _extract_xy(
    series: PlotSeries,
) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
    """Return numeric (x, y) arrays, None where a key is missing."""
    x: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None
    if series.x_key is not None and series.x_key in series.data:
        x = np.asarray(series.data[series.x_key])
    if series.y_key is not None and series.y_key in series.data:
        y = np.asarray(series.data[series.y_key])
    return x, y


def _plot_one(ax: Axes, series: PlotSeries) -> None:
    """NaN values leave gaps in the curve."""
    method: PlotMethod = series.plot_method or "plot"
    x, y = _extract_xy(series)
    if x is None or y is None:
        raise ValueError("Could not extract both x and y from PlotSeries")
    plot_kwargs = series.kwargs

    if method != "plot":
        raise ValueError(f'Plot method "{method}" not implemented yet')
    ax.plot(x, y, **plot_kwargs)


def _decorate(ax: Axes, panel: PanelSpec) -> None:
    if panel.xlabel:
        ax.set_xlabel(panel.xlabel, fontsize=14)
    if panel.ylabel:
        ax.set_ylabel(panel.ylabel, fontsize=14)
    if panel.xlim is not None:
        ax.set_xlim(*panel.xlim)
    if panel.ylim is not None:
        ax.set_ylim(*panel.ylim)


def _save_and_close(fig, output_path: Union[str, Path], dpi: int) -> Path:
    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out_path), dpi=dpi)

    if not globals.headless:
        plt.show()
    plt.close(fig)
    return out_path


def generic_plot(
    output_path: Union[str, Path],
    series_list: Sequence[PlotSeries],
    figsize: Tuple[float, float] = (6.5, 5.5),
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    xlim: Optional[Tuple[float, float]] = None,
    ylim: Optional[Tuple[float, float]] = None,
    title: Optional[str] = None,
    dpi: int = 300,
) -> Path:
    update_plot_params()
    fig, ax = plt.subplots(figsize=figsize)

    for s in series_list:
        _plot_one(ax, s)

    _decorate(ax, PanelSpec(list(series_list), xlabel, ylabel, xlim, ylim))
    if title:
        ax.set_title(title)
    format_plot_axes(ax)
    fig.tight_layout()

    return _save_and_close(fig, output_path, dpi)


def generic_panel_plot(
    output_path: Union[str, Path],
    panels: Sequence[PanelSpec],
    figsize: Tuple[float, float] = (16.0, 6.0),
    title: Optional[str] = None,
    dpi: int = 300,
) -> Path:
    """One row of axes, one PanelSpec per axes, sharing the vertical axis."""
    if not panels:
        raise ValueError("panels must contain at least one PanelSpec")

    update_plot_params()
    fig, axes = plt.subplots(1, len(panels), figsize=figsize, sharey=True, squeeze=False)

    for ax, panel in zip(axes[0], panels):
        for s in panel.series_list:
            _plot_one(ax, s)
        _decorate(ax, panel)
        format_plot_axes(ax)

    if title:
        fig.suptitle(title)
    fig.tight_layout()

    return _save_and_close(fig, output_path, dpi)
