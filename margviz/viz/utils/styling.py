"""
Shared styling utilities for margviz plots.

Marginal panels are drawn without any decoration of their own so that the
only visible axes are those of the main scatter plot.
"""

from typing import Optional
import logging

from ..base import LINE_HEIGHT, Unit

__all__ = [
    'strip_marginal_axes',
    'text_height',
]

logger = logging.getLogger(__name__)

# Space left under a title or subtitle line, in points
TEXT_BLOCK_MARGIN_PT = 2.75


def strip_marginal_axes(ax, value_axis: str, label_size: Optional[float] = None):
    """
    Remove background, grid, spines, axis titles, legend and tick labels.

    The tick positions of the value axis are kept (invisible) at the main
    plot's label size so both plots share the same typography.

    Args:
        ax: Matplotlib axis holding a marginal distribution
        value_axis: 'x' or 'y', the axis carrying the data values
        label_size: Tick label size of the main plot
    """
    ax.set_facecolor('none')
    ax.patch.set_visible(False)
    ax.grid(False)
    for spine in ax.spines.values():
        spine.set_visible(False)

    ax.set_xlabel('')
    ax.set_ylabel('')
    ax.set_title('')

    legend = ax.get_legend()
    if legend is not None:
        legend.remove()

    ax.tick_params(
        axis='both', which='both', length=0,
        labelleft=False, labelbottom=False, labelright=False, labeltop=False
    )
    if label_size is not None:
        ax.tick_params(axis=value_axis, labelsize=label_size)


def text_height(font_size: float) -> Unit:
    """Natural height of one line of text at ``font_size`` points."""
    return Unit.pt(font_size * LINE_HEIGHT + TEXT_BLOCK_MARGIN_PT)
