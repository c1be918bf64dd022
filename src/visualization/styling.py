"""
Theme, palettes and the post-render helpers shared by every chart.

**Conceptual**: Renderers in this package return a chart object (a matplotlib
Axes for single-panel charts, a seaborn FacetGrid for faceted ones) instead of
drawing to the screen. Callers then customize it, the way a ggplot object is
extended with `+ labs(...) + xlim(...)`:

    ax = plot_monthly_boxplot(long)
    label_chart(ax, title="Monthly temperatures", y="°C", ylim=(-20, 25))
    save_chart(ax, "figures/boxplot.png")

Only save_chart has a side effect (writing the image and closing the figure).
"""

from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.axes import Axes

from src.config.settings import PlotSettings

# Cold-to-warm colors, keyed by season label
SEASON_PALETTE = {
    'Winter': '#2E86AB',
    'Spring': '#6DB36A',
    'Summer': '#E4572E',
    'Fall': '#F3A712',
}

DIET_PALETTE = 'Set2'

TEMPERATURE_LABEL = 'Temperature (°C)'


def apply_theme(settings: PlotSettings) -> None:
    """Set the seaborn theme used by every subsequent chart."""
    sns.set_theme(style=settings.style)


def label_chart(
    chart: Axes | sns.FacetGrid,
    title: str | None = None,
    x: str | None = None,
    y: str | None = None,
    xlim: tuple[float, float] | None = None,
    ylim: tuple[float, float] | None = None,
) -> Axes | sns.FacetGrid:
    """
    Set title, axis labels and axis limits on a chart, returning the chart.

    Works on a single Axes and on a FacetGrid (labels and limits apply to
    every panel; the title becomes the figure's suptitle). Arguments left as
    None are not touched.

    Raises:
        TypeError: If chart is neither an Axes nor a FacetGrid.
    """
    if isinstance(chart, sns.FacetGrid):
        if x is not None or y is not None:
            chart.set_axis_labels(x_var=x, y_var=y)
        limits = {}
        if xlim is not None:
            limits['xlim'] = xlim
        if ylim is not None:
            limits['ylim'] = ylim
        if limits:
            chart.set(**limits)
        if title is not None:
            chart.figure.suptitle(title, fontweight='bold')
            chart.figure.subplots_adjust(top=0.9)
        return chart

    if isinstance(chart, Axes):
        properties = {}
        if title is not None:
            properties['title'] = title
        if x is not None:
            properties['xlabel'] = x
        if y is not None:
            properties['ylabel'] = y
        if xlim is not None:
            properties['xlim'] = xlim
        if ylim is not None:
            properties['ylim'] = ylim
        chart.set(**properties)
        return chart

    raise TypeError(
        f"Expected a matplotlib Axes or seaborn FacetGrid, got {type(chart).__name__}."
    )


def save_chart(
    chart: Axes | sns.FacetGrid,
    path: Path | str,
    dpi: int = 150,
) -> Path:
    """
    Write a chart's figure to disk and close it.

    The parent directory is created if needed. The image format follows the
    file extension (".png", ".svg", ".pdf", ...).

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    figure = chart.figure
    figure.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(figure)

    return path
