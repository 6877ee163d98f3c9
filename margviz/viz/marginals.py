"""
Marginal distribution plots that line up with a main scatter plot.

The main plot is rendered once on a scratch figure to capture its axis
ranges; each marginal plot then reuses those ranges verbatim so that its
value axis matches the main panel exactly.
"""

import warnings
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import logging

import matplotlib
import pandas as pd
import seaborn as sns
from matplotlib.transforms import Bbox

from ..errors import LayerParameterError
from .base import AxisRange, MarginalType, ScatterSpec
from .reconcile import check_numeric_column
from .utils.common import managed_figure
from .utils.styling import strip_marginal_axes

logger = logging.getLogger(__name__)

# Warnings seaborn emits when colour options arrive without a hue variable.
# Marginal plots never map hue, so these are expected.
UNMAPPED_HUE_WARNINGS = (
    r".*Ignoring `palette` because no `hue` variable has been assigned",
    r"\s*Passing `palette` without assigning `hue`",
)

DEFAULT_HISTOGRAM_BINS = 30

LAYER_FUNCTIONS = {
    MarginalType.DENSITY: sns.kdeplot,
    MarginalType.HISTOGRAM: sns.histplot,
    MarginalType.BOXPLOT: sns.boxplot,
    MarginalType.VIOLIN: sns.violinplot,
}

SCRATCH_FIGSIZE = (7.0, 7.0)


@contextmanager
def suppress_unmapped_hue_warnings():
    """Silence the expected no-hue warnings; every other warning propagates."""
    with warnings.catch_warnings():
        for pattern in UNMAPPED_HUE_WARNINGS:
            warnings.filterwarnings('ignore', message=pattern)
        yield


@dataclass(frozen=True)
class AxisDecorations:
    """Measured extents (inches) of the axis decorations around the main panel."""
    axis_left: float = 0.0
    ylab_left: float = 0.0
    axis_bottom: float = 0.0
    xlab_bottom: float = 0.0


@dataclass(frozen=True)
class RenderedPlot:
    """What a single render of the main plot tells us."""
    x_range: AxisRange
    y_range: AxisRange
    decorations: AxisDecorations

    def range_for(self, axis: str) -> AxisRange:
        if axis == 'x':
            return self.x_range
        if axis == 'y':
            return self.y_range
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")


def _axis_range(ax, axis: str, label_size: float) -> AxisRange:
    if axis == 'x':
        lo, hi = ax.get_xlim()
        ticks = ax.get_xticks()
    else:
        lo, hi = ax.get_ylim()
        ticks = ax.get_yticks()
    low, high = min(lo, hi), max(lo, hi)
    tolerance = (high - low) * 1e-9
    breaks = tuple(float(t) for t in ticks if low - tolerance <= t <= high + tolerance)
    return AxisRange(axis=axis, limits=(float(lo), float(hi)), breaks=breaks, label_size=label_size)


def _text_bbox(texts, renderer) -> Optional[Bbox]:
    boxes = [t.get_window_extent(renderer) for t in texts if t.get_visible() and t.get_text()]
    if not boxes:
        return None
    return Bbox.union(boxes)


def _measure_decorations(ax, renderer, dpi: float) -> AxisDecorations:
    """Distances from the panel edges to the outer edges of tick labels and axis titles."""
    panel = ax.get_window_extent(renderer)

    yticks = _text_bbox(ax.get_yticklabels(), renderer)
    left_edge = yticks.x0 if yticks is not None else panel.x0
    ylabel = _text_bbox([ax.yaxis.label], renderer)
    ylab_left = (left_edge - ylabel.x0) / dpi if ylabel is not None else 0.0

    xticks = _text_bbox(ax.get_xticklabels(), renderer)
    bottom_edge = xticks.y0 if xticks is not None else panel.y0
    xlabel = _text_bbox([ax.xaxis.label], renderer)
    xlab_bottom = (bottom_edge - xlabel.y0) / dpi if xlabel is not None else 0.0

    return AxisDecorations(
        axis_left=max(0.0, (panel.x0 - left_edge) / dpi),
        ylab_left=max(0.0, ylab_left),
        axis_bottom=max(0.0, (panel.y0 - bottom_edge) / dpi),
        xlab_bottom=max(0.0, xlab_bottom),
    )


def render_axis_ranges(spec: ScatterSpec, dpi: int = 100) -> RenderedPlot:
    """
    Render the main plot once and read back its axis ranges.

    The scratch figure is closed before returning.

    Args:
        spec: Reconciled main scatter plot
        dpi: Resolution of the scratch figure

    Returns:
        RenderedPlot with both axis ranges and the decoration extents
    """
    label_size = spec.theme.tick_label_size
    with matplotlib.rc_context(spec.theme.rc_params()):
        with managed_figure(figsize=SCRATCH_FIGSIZE, dpi=dpi) as fig:
            ax = fig.add_subplot(111)
            spec.draw(ax)
            fig.canvas.draw()
            renderer = fig.canvas.get_renderer()

            x_range = _axis_range(ax, 'x', label_size)
            y_range = _axis_range(ax, 'y', label_size)
            decorations = _measure_decorations(ax, renderer, fig.dpi)

    logger.debug(f"Main plot ranges: x={x_range.limits} y={y_range.limits}")
    return RenderedPlot(x_range=x_range, y_range=y_range, decorations=decorations)


@dataclass(frozen=True, eq=False)
class MarginalPlotSpec:
    """A distribution of one axis's variable, drawn against that axis's range."""
    axis: str
    marginal_type: MarginalType
    values: pd.Series
    axis_range: AxisRange
    params: Mapping[str, Any]

    @property
    def flipped(self) -> bool:
        """The y marginal is drawn rotated, with its values running vertically."""
        return self.axis == 'y'

    def _layer_kwargs(self) -> Dict[str, Any]:
        params = dict(self.params)
        if self.marginal_type == MarginalType.HISTOGRAM:
            if 'bins' not in params and 'binwidth' not in params:
                params['bins'] = DEFAULT_HISTOGRAM_BINS
            params.setdefault('binrange', tuple(sorted(self.axis_range.limits)))
        return params

    def draw(self, ax):
        """
        Draw the distribution on ``ax`` and align it with the main plot.

        Raises:
            LayerParameterError: if seaborn/matplotlib rejects one of the options
        """
        params = self._layer_kwargs()
        data_kwargs = {self.axis: self.values}

        plotter = LAYER_FUNCTIONS.get(self.marginal_type)
        if plotter is None:
            raise ValueError(f"Unsupported marginal type: {self.marginal_type}")

        # seaborn and matplotlib reject unknown options with TypeError/AttributeError
        # and bad option values with ValueError
        try:
            with suppress_unmapped_hue_warnings():
                plotter(ax=ax, **data_kwargs, **params)
        except (TypeError, AttributeError, ValueError) as e:
            raise LayerParameterError(
                f"The {self.marginal_type.value} layer of the {self.axis} marginal plot "
                f"rejected its options {sorted(params)}: {e}",
                option_names=params.keys()
            ) from e

        strip_marginal_axes(ax, value_axis=self.axis, label_size=self.axis_range.label_size)
        self.axis_range.apply(ax)

        # Counts and densities start at zero on the axis facing away from the panel
        if self.marginal_type in (MarginalType.DENSITY, MarginalType.HISTOGRAM):
            if self.flipped:
                ax.set_xlim(left=0)
            else:
                ax.set_ylim(bottom=0)
        return ax


def build_marginal_plot(
    axis: str,
    marginal_type,
    spec: ScatterSpec,
    rendered: RenderedPlot,
    params: Mapping[str, Any]
) -> MarginalPlotSpec:
    """
    Build the marginal plot for one axis of the main plot.

    Args:
        axis: 'x' for the top marginal, 'y' for the right marginal
        marginal_type: MarginalType (or its string value)
        spec: Reconciled main scatter plot
        rendered: Result of ``render_axis_ranges(spec)``
        params: Options for this axis (``ParamSet.for_axis(axis)``)

    Returns:
        MarginalPlotSpec sharing the main plot's AxisRange for ``axis``
    """
    marginal_type = MarginalType.parse(marginal_type, 'type')
    column = spec.x if axis == 'x' else spec.y
    check_numeric_column(spec.data, column, axis)

    return MarginalPlotSpec(
        axis=axis,
        marginal_type=marginal_type,
        values=spec.data[column].dropna(),
        axis_range=rendered.range_for(axis),
        params=dict(params),
    )


def validate_marginal_plot(marginal: MarginalPlotSpec, theme_rc: Optional[Dict[str, Any]] = None):
    """
    Draw a marginal plot once on a scratch figure so option errors surface now.

    Raises:
        LayerParameterError: if the layer rejects one of the options
    """
    with matplotlib.rc_context(theme_rc or {}):
        with managed_figure(figsize=SCRATCH_FIGSIZE) as fig:
            marginal.draw(fig.add_subplot(111))
