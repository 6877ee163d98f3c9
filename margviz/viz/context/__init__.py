"""
Composition of scatter plots with marginal panels.
"""

from .layouts import TableLayout, Cell
from .panels import ScatterPanel, MarginalPanel, TextBlock
from .figure import FigureKind, PlotFigure, MarginalFigure, draw_figure, show_figure
from .composer import MarginalComposer, CompositionConfig, add_marginals

__all__ = [
    'TableLayout',
    'Cell',
    'ScatterPanel',
    'MarginalPanel',
    'TextBlock',
    'FigureKind',
    'PlotFigure',
    'MarginalFigure',
    'draw_figure',
    'show_figure',
    'MarginalComposer',
    'CompositionConfig',
    'add_marginals'
]
