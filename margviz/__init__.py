"""
margviz: marginal distribution plots for scatter plots
Add density, histogram, boxplot or violin panels along the edges of a scatter plot.
"""

__version__ = "0.1.0"

# Import main modules
from . import errors
from . import utils
from . import viz

# Make the main entry points available directly
from .errors import (
    MarginalPlotError,
    ConfigurationError,
    UnsupportedTypeError,
    LayerParameterError
)
from .utils import setup_logging
from .viz import (
    add_marginals,
    ScatterSpec,
    Theme,
    Layer,
    RenderConfig,
    MarginalFigure,
    PlotFigure,
    draw_figure,
    show_figure
)

__all__ = [
    'errors',
    'utils',
    'viz',
    'add_marginals',
    'ScatterSpec',
    'Theme',
    'Layer',
    'RenderConfig',
    'MarginalFigure',
    'PlotFigure',
    'draw_figure',
    'show_figure',
    'MarginalPlotError',
    'ConfigurationError',
    'UnsupportedTypeError',
    'LayerParameterError',
    'setup_logging'
]
