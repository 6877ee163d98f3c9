"""
Visualization utilities for margviz.

This module provides figure handling, image export and the styling shared
by the marginal panels.
"""

from .common import managed_figure, plot_to_image, save_figure
from .styling import strip_marginal_axes, text_height

__all__ = [
    # Common utilities
    'managed_figure',
    'plot_to_image',
    'save_figure',

    # Styling utilities
    'strip_marginal_axes',
    'text_height'
]
