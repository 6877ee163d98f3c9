"""
Cell contents for table layouts and the table of a plain scatter plot.
"""

from dataclasses import dataclass
from typing import Optional
import logging

import matplotlib

from ..base import AxisRange, ScatterSpec, Theme, Unit
from ..marginals import MarginalPlotSpec, RenderedPlot
from ..utils.styling import text_height
from .layouts import TableLayout

logger = logging.getLogger(__name__)

# Row and column indices of the panel in a scatter table
PANEL_ROW = 3
PANEL_COL = 3


def _set_clip(ax, clip: bool):
    """Clip (or stop clipping) the data artists of ``ax`` to its panel."""
    for artist in list(ax.collections) + list(ax.patches) + list(ax.lines):
        artist.set_clip_on(clip)


@dataclass(frozen=True, eq=False)
class ScatterPanel:
    """The main scatter panel, drawn with fixed axis ranges."""
    spec: ScatterSpec
    x_range: AxisRange
    y_range: AxisRange

    is_panel = True

    def draw(self, fig, rect, clip: bool = True):
        with matplotlib.rc_context(self.spec.theme.rc_params()):
            ax = fig.add_axes(rect)
            self.spec.draw(ax, self.x_range, self.y_range)
        _set_clip(ax, clip)
        return ax


@dataclass(frozen=True, eq=False)
class MarginalPanel:
    """A marginal distribution panel."""
    marginal: MarginalPlotSpec
    theme: Theme

    is_panel = True

    def draw(self, fig, rect, clip: bool = True):
        with matplotlib.rc_context(self.theme.rc_params()):
            ax = fig.add_axes(rect)
            self.marginal.draw(ax)
        _set_clip(ax, clip)
        return ax


@dataclass(frozen=True)
class TextBlock:
    """One line of text (title or subtitle), left-aligned in its cell."""
    text: str
    font_size: float
    weight: str = 'normal'
    color: str = 'black'

    is_panel = False

    @property
    def height(self) -> Unit:
        return text_height(self.font_size)

    def draw(self, fig, rect, clip: bool = False):
        left, bottom, _, height = rect
        return fig.text(
            left, bottom + height / 2, self.text,
            fontsize=self.font_size, fontweight=self.weight, color=self.color,
            ha='left', va='center', clip_on=clip
        )


def title_blocks(spec: ScatterSpec) -> Optional[dict]:
    """TextBlocks for the title and subtitle of ``spec`` (None when it has neither)."""
    if not spec.has_title:
        return None
    theme = spec.theme
    blocks = {}
    if spec.title:
        blocks['title'] = TextBlock(spec.title, theme.base_size * theme.title_size)
    if spec.subtitle:
        blocks['subtitle'] = TextBlock(spec.subtitle, theme.base_size * theme.subtitle_size)
    return blocks


def scatter_table(spec: ScatterSpec, rendered: RenderedPlot) -> TableLayout:
    """
    Table layout of a plain scatter plot.

    Rows: margin, title, subtitle, panel, x tick labels, x axis title, margin.
    Columns: margin, y axis title, y tick labels, panel, margin.
    """
    theme = spec.theme
    margin_t, margin_r, margin_b, margin_l = theme.plot_margin
    decorations = rendered.decorations
    blocks = title_blocks(spec) or {}

    heights = [
        margin_t,
        blocks['title'].height if 'title' in blocks else Unit.pt(0),
        blocks['subtitle'].height if 'subtitle' in blocks else Unit.pt(0),
        Unit.null(1),
        Unit.inches(decorations.axis_bottom),
        Unit.inches(decorations.xlab_bottom),
        margin_b,
    ]
    widths = [
        margin_l,
        Unit.inches(decorations.ylab_left),
        Unit.inches(decorations.axis_left),
        Unit.null(1),
        margin_r,
    ]

    layout = TableLayout(heights, widths, font_size=theme.base_size)
    layout = layout.add_cell(
        ScatterPanel(spec, rendered.x_range, rendered.y_range),
        t=PANEL_ROW, l=PANEL_COL, name='panel'
    )
    for row, key in ((1, 'title'), (2, 'subtitle')):
        if key in blocks:
            layout = layout.add_cell(blocks[key], t=row, l=PANEL_COL, name=key, clip=False)
    return layout
