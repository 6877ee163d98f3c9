"""
Figure results and the single entry point that draws them.

``add_marginals`` returns a MarginalFigure; a plain scatter plot can be
wrapped in a PlotFigure. Both carry a ``kind`` tag and are drawn through
``draw_figure``, which dispatches on it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
import logging

import matplotlib
import matplotlib.pyplot as plt
from PIL import Image

from ..base import MarginalType, Margins, RenderConfig, ScatterSpec
from .layouts import TableLayout
from .panels import scatter_table
from ..marginals import MarginalPlotSpec, render_axis_ranges
from ..utils.common import plot_to_image, save_figure

logger = logging.getLogger(__name__)


class FigureKind(Enum):
    """Variants of figure result."""
    PLOT = "plot"
    MARGINAL = "marginal"


class _FigureResult:
    """Export helpers shared by every figure result."""

    def draw(self, new_page: bool = True, figure=None):
        return draw_figure(self, new_page=new_page, figure=figure)

    def _draw_for_export(self):
        """Draw on a fresh figure that is closed again if drawing fails."""
        config = self.config
        fig = plt.figure(figsize=config.figsize, dpi=config.dpi, facecolor=config.facecolor)
        try:
            return draw_figure(self, new_page=True, figure=fig)
        except Exception:
            plt.close(fig)
            raise

    def to_image(self, max_size: Optional[int] = None) -> Image.Image:
        """Draw on a fresh figure and return it as a PIL image (the figure is closed)."""
        fig = self._draw_for_export()
        return plot_to_image(fig, dpi=self.config.dpi, max_size=max_size)

    def save(self, save_path: str) -> Dict:
        """Draw on a fresh figure and write it to ``save_path`` (the figure is closed)."""
        fig = self._draw_for_export()
        return save_figure(fig, save_path, dpi=self.config.dpi)


@dataclass(eq=False)
class PlotFigure(_FigureResult):
    """A single scatter plot without marginal panels."""
    spec: ScatterSpec
    config: RenderConfig = field(default_factory=RenderConfig)
    kind: FigureKind = field(default=FigureKind.PLOT, init=False)


@dataclass(eq=False)
class MarginalFigure(_FigureResult):
    """A scatter plot composed with one or two marginal panels."""
    layout: TableLayout
    spec: ScatterSpec
    marginals: Dict[str, MarginalPlotSpec]
    marginal_type: MarginalType
    margins: Margins
    size: int
    config: RenderConfig = field(default_factory=RenderConfig)
    kind: FigureKind = field(default=FigureKind.MARGINAL, init=False)


def _draw_plot_figure(result: PlotFigure, fig):
    rendered = render_axis_ranges(result.spec, dpi=result.config.dpi)
    scatter_table(result.spec, rendered).draw(fig)


def _draw_marginal_figure(result: MarginalFigure, fig):
    logger.debug(
        f"Drawing {result.marginal_type.value} marginals ({result.margins.value}) "
        f"with layout {result.layout!r}"
    )
    result.layout.draw(fig)


def draw_figure(result, new_page: bool = True, figure=None, config: Optional[RenderConfig] = None):
    """
    Draw a figure result.

    Args:
        result: PlotFigure or MarginalFigure
        new_page: Start from an empty canvas. With no ``figure`` a new pyplot
            figure is created; otherwise ``figure`` is cleared first. When
            False the result is drawn over ``figure`` (or the current figure).
        figure: Matplotlib figure to draw on
        config: Overrides ``result.config`` for a newly created figure

    Returns:
        The matplotlib figure drawn on
    """
    config = config or result.config
    if figure is None:
        if new_page:
            figure = plt.figure(figsize=config.figsize, dpi=config.dpi, facecolor=config.facecolor)
        else:
            figure = plt.gcf()
    elif new_page:
        figure.clf()

    if result.kind is FigureKind.MARGINAL:
        _draw_marginal_figure(result, figure)
    elif result.kind is FigureKind.PLOT:
        _draw_plot_figure(result, figure)
    else:
        raise TypeError(f"Cannot draw figure of kind {result.kind!r}")
    return figure


def show_figure(result, new_page: Optional[bool] = None):
    """
    Draw a figure result for interactive display.

    ``new_page`` defaults to whether matplotlib runs in interactive mode.
    """
    if new_page is None:
        new_page = matplotlib.is_interactive()
    fig = draw_figure(result, new_page=new_page)
    plt.show()
    return fig
