# -- lesdiag/plotting/templates.py
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from lesdiag.fluid.report import DiagnosticReport
from lesdiag.plotting import series as plt_series
from lesdiag.plotting.tools import PanelSpec, PlotSeries, generic_panel_plot, generic_plot

ZLABEL: str = r"$z$ (m)"


def mixing_length_diagnostics(
    output_dir: Union[str, Path],
    report: DiagnosticReport,
    figsize: Tuple[float, float] = (16.0, 6.0),
    dpi: int = 150,
) -> Path:
    """Temperature, variances, TKE budget and mixing length side by side."""
    panels: List[PanelSpec] = []
    for i, panel in enumerate(report.panels):
        panels.append(
            PanelSpec(
                series_list=plt_series.panel_series(panel),
                xlabel=panel.xlabel,
                ylabel=ZLABEL if i == 0 else None,
                xlim=panel.xlim,
                ylim=report.zlim,
            )
        )
    out_path = Path(output_dir) / f"mixing_length_diagnostics_iter{report.iteration}.png"
    return generic_panel_plot(out_path, panels, figsize=figsize, dpi=dpi)


def mixing_length_comparison(
    output_dir: Union[str, Path],
    series_list: Sequence[PlotSeries],
    zlim: Optional[Tuple[float, float]] = None,
) -> Path:
    out_path = Path(output_dir) / "mixing_length_comparison.png"
    return generic_plot(
        out_path,
        list(series_list),
        xlabel="Mixing length (m)",
        ylabel=ZLABEL,
        xlim=(-5.0, 20.0),
        ylim=zlim,
        figsize=(6.5, 5.5),
        dpi=150,
    )
