"""
margviz Visualization Module

Scatter plot specifications, marginal distribution plots and the table
layouts that compose them into a single figure.
"""

from .base import (
    MarginalType,
    Margins,
    Unit,
    Theme,
    Layer,
    ScatterSpec,
    AxisRange,
    RenderConfig
)
from .context.composer import MarginalComposer, CompositionConfig, add_marginals
from .context.figure import FigureKind, PlotFigure, MarginalFigure, draw_figure, show_figure
from .context.layouts import TableLayout, Cell

# Building blocks
from .marginals import MarginalPlotSpec, build_marginal_plot, render_axis_ranges
from .params import ParamSet, consolidate_params
from .reconcile import reconcile_scatter

# Utilities
from .utils.common import managed_figure, plot_to_image, save_figure
from .utils.styling import strip_marginal_axes

__all__ = [
    # Base types
    'MarginalType',
    'Margins',
    'Unit',
    'Theme',
    'Layer',
    'ScatterSpec',
    'AxisRange',
    'RenderConfig',

    # Composition
    'MarginalComposer',
    'CompositionConfig',
    'add_marginals',
    'FigureKind',
    'PlotFigure',
    'MarginalFigure',
    'draw_figure',
    'show_figure',
    'TableLayout',
    'Cell',

    # Building blocks
    'MarginalPlotSpec',
    'build_marginal_plot',
    'render_axis_ranges',
    'ParamSet',
    'consolidate_params',
    'reconcile_scatter',

    # Utilities
    'plot_to_image',
    'save_figure',
    'managed_figure',
    'strip_marginal_axes'
]
