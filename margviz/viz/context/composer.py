"""
Marginal Composer - adds marginal distribution panels to a scatter plot.

This module provides the main entry point, ``add_marginals``. It reconciles
the main plot, renders it once to capture its axis ranges, builds the
marginal plots over those ranges and splices them into the main plot's table
layout. A title or subtitle is lifted off the main plot first and placed
back above the composed layout at the end.
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import logging

from ...errors import ConfigurationError
from ..base import MarginalType, Margins, RenderConfig, ScatterSpec, Unit
from .figure import MarginalFigure
from ..marginals import (
    MarginalPlotSpec,
    build_marginal_plot,
    render_axis_ranges,
    suppress_unmapped_hue_warnings,
    validate_marginal_plot,
)
from ..params import ParamSet, consolidate_params
from ..reconcile import reconcile_scatter
from .layouts import TableLayout
from .panels import MarginalPanel, TextBlock, scatter_table, title_blocks

logger = logging.getLogger(__name__)

TOP_MARGINAL = 'top_marginal'
RIGHT_MARGINAL = 'right_marginal'

# Padding on the side of the omitted marginal panel when only one is drawn
SINGLE_MARGIN_PADDING = Unit.lines(0.5)
# Gap between the title rows and the composed plot
TITLE_SPACER = Unit.cm(0.2)


def validate_size(size) -> int:
    """Return ``size`` if it is a positive integer, else fail."""
    if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size <= 0:
        raise ConfigurationError(f"`size` must be a positive integer, got {size!r}")
    return int(size)


@dataclass
class CompositionConfig:
    """Configuration for marginal composition."""
    marginal_type: MarginalType = MarginalType.DENSITY
    margins: Margins = Margins.BOTH
    size: int = 5

    # Drawing and export
    render: RenderConfig = field(default_factory=RenderConfig)

    # Draw each marginal once while composing so option errors surface early
    validate_layers: bool = True

    def __post_init__(self):
        self.marginal_type = MarginalType.parse(self.marginal_type, 'type')
        self.margins = Margins.parse(self.margins, 'margins')
        self.size = validate_size(self.size)


class MarginalComposer:
    """
    Compose a scatter plot with marginal distribution panels.

    The top marginal is always inserted before the right marginal so that
    the right panel spans only the main panel's rows.
    """

    def __init__(self, config: Optional[CompositionConfig] = None):
        """
        Initialize the marginal composer.

        Args:
            config: Configuration for composition behavior
        """
        self.config = config or CompositionConfig()
        self.logger = logging.getLogger(__name__)

    def compose(self, spec: ScatterSpec, params: ParamSet) -> MarginalFigure:
        """
        Compose ``spec`` with marginal panels.

        Args:
            spec: Reconciled main scatter plot
            params: Consolidated marginal plot options

        Returns:
            MarginalFigure ready to be drawn or exported
        """
        config = self.config

        # Titles are placed above the composed layout, not inside the main table
        titles = title_blocks(spec)
        if titles:
            spec = spec.replace(title=None, subtitle=None)

        rendered = render_axis_ranges(spec, dpi=config.render.dpi)

        marginals: Dict[str, MarginalPlotSpec] = {}
        with suppress_unmapped_hue_warnings():
            for axis in config.margins.axes:
                marginal = build_marginal_plot(
                    axis, config.marginal_type, spec, rendered, params.for_axis(axis)
                )
                if config.validate_layers:
                    validate_marginal_plot(marginal, spec.theme.rc_params())
                marginals[axis] = marginal

        layout = scatter_table(spec, rendered)
        panels = {
            axis: MarginalPanel(marginal, spec.theme) for axis, marginal in marginals.items()
        }

        if config.margins == Margins.BOTH:
            layout = self._add_top_marginal(layout, panels['x'])
            layout = self._add_right_marginal(layout, panels['y'])
        elif config.margins == Margins.X:
            layout = layout.add_padding(Unit.pt(0), SINGLE_MARGIN_PADDING, Unit.pt(0), Unit.pt(0))
            layout = self._add_top_marginal(layout, panels['x'])
        elif config.margins == Margins.Y:
            layout = layout.add_padding(SINGLE_MARGIN_PADDING, Unit.pt(0), Unit.pt(0), Unit.pt(0))
            layout = self._add_right_marginal(layout, panels['y'])
        else:
            raise ConfigurationError(f"Unsupported margins: {config.margins}")

        if titles:
            layout = self._add_title_rows(layout, titles)

        self.logger.info(
            f"Composed {config.marginal_type.value} marginals ({config.margins.value}) "
            f"for {spec.y!r} vs {spec.x!r} at size {config.size}"
        )
        return MarginalFigure(
            layout=layout,
            spec=spec,
            marginals=marginals,
            marginal_type=config.marginal_type,
            margins=config.margins,
            size=config.size,
            config=config.render,
        )

    def _add_top_marginal(self, layout: TableLayout, panel: MarginalPanel) -> TableLayout:
        """New top row of 1/size the panel height, over the main panel's columns."""
        layout = layout.add_rows([Unit.null(1 / self.config.size)], pos=0)
        main = layout.cell('panel')
        self.logger.debug(f"Adding top marginal over columns {main.l}..{main.r}")
        return layout.add_cell(panel, t=0, l=main.l, r=main.r, name=TOP_MARGINAL, z=1)

    def _add_right_marginal(self, layout: TableLayout, panel: MarginalPanel) -> TableLayout:
        """New right column of 1/size the panel width, beside the main panel's rows."""
        layout = layout.add_cols([Unit.null(1 / self.config.size)])
        main = layout.cell('panel')
        col = layout.ncol - 1
        self.logger.debug(f"Adding right marginal beside rows {main.t}..{main.b}")
        return layout.add_cell(panel, t=main.t, b=main.b, l=col, name=RIGHT_MARGINAL, z=1)

    def _add_title_rows(self, layout: TableLayout, titles: Dict[str, TextBlock]) -> TableLayout:
        """Spacer, subtitle and title rows at the top, from the panel's left edge to the right edge."""
        left = layout.cell('panel').l
        right = layout.ncol - 1

        self.logger.debug(f"Adding {sorted(titles)} above columns {left}..{right}")
        layout = layout.add_rows([TITLE_SPACER], pos=0)
        for key in ('subtitle', 'title'):
            if key not in titles:
                continue
            block = titles[key]
            layout = layout.add_rows([block.height], pos=0)
            layout = layout.add_cell(block, t=0, l=left, r=right, name=key, clip=False)
        return layout


def add_marginals(
    p=None,
    data=None,
    x: Optional[str] = None,
    y: Optional[str] = None,
    type='density',
    margins='both',
    size: int = 5,
    xparams: Optional[Mapping[str, Any]] = None,
    yparams: Optional[Mapping[str, Any]] = None,
    config: Optional[RenderConfig] = None,
    **kwargs
) -> MarginalFigure:
    """
    Add marginal density/histogram/boxplot/violin plots to a scatter plot.

    Either pass an existing plot ``p`` (a ScatterSpec or a matplotlib Axes
    with a scatter plot), or all of ``data``, ``x`` and ``y``. Explicit
    ``data``/``x``/``y`` override the bindings of ``p``.

    Args:
        p: Main scatter plot
        data: DataFrame with the plotted columns
        x: Column along the x axis
        y: Column along the y axis
        type: 'density', 'histogram', 'boxplot' or 'violin'
        margins: 'both', 'x' or 'y'
        size: Positive integer; the main panel is ``size`` times wider and
            taller than the marginal panels
        xparams: Options for the x marginal only
        yparams: Options for the y marginal only
        config: Figure size, dpi and background used when drawing
        **kwargs: Options for both marginal plots, passed to seaborn
            (e.g. ``color='red'``, ``bins=10`` for histograms)

    Returns:
        MarginalFigure; draw it with ``draw_figure`` or export it with
        ``to_image``/``save``

    Note:
        ``size`` sets the panel ratio. To change the line width of the
        marginal plots pass ``linewidth`` through ``xparams``/``yparams`` or
        the shared options.
    """
    composition = CompositionConfig(
        marginal_type=type,
        margins=margins,
        size=size,
        render=config or RenderConfig.from_environment(),
    )
    params = consolidate_params(composition.marginal_type, kwargs, xparams, yparams)
    spec = reconcile_scatter(p=p, data=data, x=x, y=y)
    return MarginalComposer(composition).compose(spec, params)
