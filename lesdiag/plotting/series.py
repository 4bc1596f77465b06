# -- lesdiag/plotting/series.py

from pathlib import Path
from typing import List, Optional, Sequence, Union

from lesdiag.fluid.report import ProfilePanel
from lesdiag.myio import myio
from lesdiag.plotting.tools import PlotSeries

DEFAULT_COLOURS: Sequence[str] = ("C0", "C1", "C2", "C3")


def panel_series(
    panel: ProfilePanel,
    colours: Sequence[str] = DEFAULT_COLOURS,
    linewidth: float = 3.0,
) -> List[PlotSeries]:
    """Profiles are drawn with the value on x and depth on y."""
    series_list: List[PlotSeries] = []
    for i, curve in enumerate(panel.curves):
        label: Optional[str] = curve.label if len(panel.curves) > 1 else None
        series_list.append(
            PlotSeries(
                data={"x": curve.values, "y": curve.z},
                x_key="x",
                y_key="y",
                plot_method="plot",
                kwargs={
                    "label": label,
                    "color": colours[i % len(colours)],
                    "linewidth": linewidth,
                },
            )
        )
    return series_list


def mixing_length_from_h5(
    h5_path: Union[str, Path],
    label: str,
    colour: str,
    linestyles: Sequence[str] = ("-", "--"),
) -> List[PlotSeries]:
    """Measured and estimated mixing length of a saved run."""
    stats, _ = myio.load_from_h5(Path(h5_path))
    lengths = stats["mixing_length"]

    s_measured = PlotSeries(
        data={"x": lengths["measured"]["values"], "y": lengths["measured"]["z"]},
        x_key="x",
        y_key="y",
        plot_method="plot",
        kwargs={"label": f"{label} measured", "linestyle": linestyles[0], "color": colour},
    )
    s_estimated = PlotSeries(
        data={"x": lengths["estimated"]["values"], "y": lengths["estimated"]["z"]},
        x_key="x",
        y_key="y",
        plot_method="plot",
        kwargs={"label": f"{label} estimated", "linestyle": linestyles[1], "color": colour},
    )
    return [s_measured, s_estimated]
