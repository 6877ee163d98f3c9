"""
Resolution of the main scatter plot from ``p``, ``data``, ``x`` and ``y``.
"""

from typing import Optional
import logging

import pandas as pd
from matplotlib.axes import Axes
from pandas.api.types import is_numeric_dtype

from ..errors import ConfigurationError, UnsupportedTypeError
from .base import Layer, ScatterSpec, Unit

logger = logging.getLogger(__name__)

# Margins of the reconciled plot (top, right, bottom, left); the marginal
# panels take the top and right edges
RECONCILED_PLOT_MARGIN = (Unit.cm(0), Unit.cm(0), Unit.cm(0.25), Unit.cm(0.25))


def check_numeric_column(data: pd.DataFrame, column: str, argument: str):
    """Fail unless ``column`` exists in ``data`` and holds numbers."""
    if column not in data.columns:
        raise ConfigurationError(f"`{argument}` column {column!r} is not in the data")
    if not is_numeric_dtype(data[column]) or data[column].dtype == bool:
        raise UnsupportedTypeError(
            f"`{argument}` column {column!r} has non-numeric type {data[column].dtype}; "
            "marginal distributions need a numeric variable"
        )


def reconcile_scatter(
    p=None,
    data: Optional[pd.DataFrame] = None,
    x: Optional[str] = None,
    y: Optional[str] = None
) -> ScatterSpec:
    """
    Combine an optional plot with explicit data/x/y into one scatter spec.

    Explicit ``data``, ``x`` and ``y`` win over the bindings of ``p``.

    Args:
        p: ScatterSpec or matplotlib Axes holding a scatter plot (optional)
        data: DataFrame with the plotted columns
        x: Name of the column along the x axis
        y: Name of the column along the y axis

    Returns:
        ScatterSpec with minimal fixed margins, ready for rendering
    """
    if p is None:
        if data is None or x is None or y is None:
            raise ConfigurationError("`data`, `x`, and `y` must be provided if `p` is not provided")
        spec = ScatterSpec(data=data, x=x, y=y, layers=(Layer('point', {}),))
    else:
        if isinstance(p, Axes):
            p = ScatterSpec.from_axes(p)
        elif not isinstance(p, ScatterSpec):
            raise ConfigurationError(
                f"`p` must be a ScatterSpec or a matplotlib Axes, got {type(p).__name__}"
            )

        if data is None:
            if p.data is None:
                raise ConfigurationError("`data` must be provided if it is not part of the main plot")
            data = p.data
        if x is None:
            if p.x is None:
                raise ConfigurationError("`x` must be provided if it is not bound in the main plot")
            x = p.x
        if y is None:
            if p.y is None:
                raise ConfigurationError("`y` must be provided if it is not bound in the main plot")
            y = p.y

        changes = {}
        # Limits and labels belong to the column they were set for
        if x != p.x:
            changes.update(xlim=None, xlabel=None)
        if y != p.y:
            changes.update(ylim=None, ylabel=None)

        layers = p.layers or (Layer('point', {}),)
        spec = p.replace(data=data, x=x, y=y, layers=layers, **changes)

    if not isinstance(spec.data, pd.DataFrame):
        raise ConfigurationError(f"`data` must be a pandas DataFrame, got {type(spec.data).__name__}")
    check_numeric_column(spec.data, spec.x, 'x')
    check_numeric_column(spec.data, spec.y, 'y')
    for layer in spec.layers:
        if layer.hue is not None and layer.hue not in spec.data.columns:
            raise ConfigurationError(f"`hue` column {layer.hue!r} of the main plot is not in the data")

    logger.debug(f"Reconciled scatter plot of {spec.y!r} against {spec.x!r} ({len(spec.data)} rows)")
    return spec.with_theme(plot_margin=RECONCILED_PLOT_MARGIN)
