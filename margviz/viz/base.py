"""
Base data structures for the margviz visualization system.

This module provides the plot specification consumed by ``add_marginals``
together with the small value types shared by the reconciler, the marginal
plot builder and the layout composer.
"""

import os
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from matplotlib.collections import PathCollection
import logging

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

# Points per inch and centimetres per inch
PT_PER_INCH = 72.27
CM_PER_INCH = 2.54
# Height of one text line relative to the font size
LINE_HEIGHT = 1.2


class _ChoiceEnum(str, Enum):
    """String enum that parses user input into a member or fails loudly."""

    @classmethod
    def parse(cls, value, argument: str):
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        allowed = ", ".join(repr(m.value) for m in cls)
        raise ConfigurationError(f"`{argument}` must be one of {allowed}, got {value!r}")


class MarginalType(_ChoiceEnum):
    """Kinds of marginal distribution plot."""
    DENSITY = "density"
    HISTOGRAM = "histogram"
    BOXPLOT = "boxplot"
    VIOLIN = "violin"


class Margins(_ChoiceEnum):
    """Which margins receive a marginal plot."""
    BOTH = "both"
    X = "x"
    Y = "y"

    @property
    def axes(self) -> Tuple[str, ...]:
        if self is Margins.BOTH:
            return ("x", "y")
        return (self.value,)


@dataclass(frozen=True)
class Unit:
    """
    A row height or column width in a table layout.

    ``null`` units are relative weights that share whatever space is left
    once every fixed unit (``in``, ``cm``, ``pt``, ``lines``) is converted.
    """
    value: float
    kind: str = "null"

    KINDS = ("null", "in", "cm", "pt", "lines")

    def __post_init__(self):
        if self.kind not in self.KINDS:
            raise ConfigurationError(f"Unknown unit kind {self.kind!r}")

    @classmethod
    def null(cls, value: float = 1.0) -> 'Unit':
        return cls(float(value), "null")

    @classmethod
    def inches(cls, value: float) -> 'Unit':
        return cls(float(value), "in")

    @classmethod
    def cm(cls, value: float) -> 'Unit':
        return cls(float(value), "cm")

    @classmethod
    def pt(cls, value: float) -> 'Unit':
        return cls(float(value), "pt")

    @classmethod
    def lines(cls, value: float) -> 'Unit':
        return cls(float(value), "lines")

    @property
    def is_null(self) -> bool:
        return self.kind == "null"

    def to_inches(self, font_size: float) -> float:
        """Convert a fixed unit to inches. ``null`` units have no absolute size."""
        if self.kind == "in":
            return self.value
        if self.kind == "cm":
            return self.value / CM_PER_INCH
        if self.kind == "pt":
            return self.value / PT_PER_INCH
        if self.kind == "lines":
            return self.value * font_size * LINE_HEIGHT / PT_PER_INCH
        raise ValueError("null units have no absolute size")


@dataclass(frozen=True)
class Theme:
    """Appearance of the main scatter plot."""
    base_size: float = 11.0
    background: str = 'white'
    grid: bool = True
    grid_color: str = '#ebebeb'
    # top, right, bottom, left
    plot_margin: Tuple[Unit, Unit, Unit, Unit] = (
        Unit.pt(5.5), Unit.pt(5.5), Unit.pt(5.5), Unit.pt(5.5)
    )
    title_size: float = 1.2
    subtitle_size: float = 1.0
    axis_text_size: float = 0.8

    @property
    def tick_label_size(self) -> float:
        return self.base_size * self.axis_text_size

    def rc_params(self) -> Dict[str, Any]:
        """matplotlib rc overrides used whenever a plot with this theme is drawn."""
        return {
            'font.size': self.base_size,
            'axes.labelsize': self.base_size,
            'axes.titlesize': self.base_size * self.title_size,
            'xtick.labelsize': self.tick_label_size,
            'ytick.labelsize': self.tick_label_size,
            'axes.facecolor': self.background,
            'axes.grid': self.grid,
            'grid.color': self.grid_color,
            'legend.fontsize': self.tick_label_size,
        }


@dataclass(frozen=True)
class Layer:
    """One visual layer of the main plot (only point layers are drawn)."""
    kind: str = 'point'
    params: Mapping[str, Any] = field(default_factory=dict)
    hue: Optional[str] = None


@dataclass(frozen=True, eq=False)
class ScatterSpec:
    """
    Specification of a main scatter plot.

    Instances are never modified; use ``replace`` to derive adjusted copies
    (for example one with stripped margins or without its title).
    """
    data: Optional[pd.DataFrame] = None
    x: Optional[str] = None
    y: Optional[str] = None
    layers: Tuple[Layer, ...] = ()
    theme: Theme = field(default_factory=Theme)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None
    xlim: Optional[Tuple[float, float]] = None
    ylim: Optional[Tuple[float, float]] = None

    @classmethod
    def scatter(
        cls,
        data: pd.DataFrame,
        x: str,
        y: str,
        hue: Optional[str] = None,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        theme: Optional[Theme] = None,
        **point_params
    ) -> 'ScatterSpec':
        """Build a plain scatter plot of ``y`` against ``x``."""
        return cls(
            data=data,
            x=x,
            y=y,
            layers=(Layer('point', dict(point_params), hue),),
            theme=theme or Theme(),
            title=title,
            subtitle=subtitle,
        )

    @classmethod
    def from_axes(cls, ax) -> 'ScatterSpec':
        """
        Lift an existing matplotlib scatter plot into a ScatterSpec.

        The first scatter collection on the axes supplies the data; the axis
        labels name the columns (falling back to ``x``/``y``).

        Args:
            ax: Matplotlib axes holding a scatter plot

        Returns:
            ScatterSpec reproducing the scatter plot
        """
        collections = [c for c in ax.collections if isinstance(c, PathCollection)]
        if not collections:
            raise ConfigurationError("The axes passed as `p` contain no scatter points")
        offsets = np.asarray(collections[0].get_offsets(), dtype=float)

        x_name = ax.get_xlabel() or 'x'
        y_name = ax.get_ylabel() or 'y'
        if x_name == y_name:
            x_name, y_name = 'x', 'y'
        data = pd.DataFrame({x_name: offsets[:, 0], y_name: offsets[:, 1]})

        params = {}
        sizes = collections[0].get_sizes()
        if len(sizes) == 1:
            params['s'] = float(sizes[0])
        facecolors = collections[0].get_facecolors()
        if len(facecolors) == 1:
            params['color'] = tuple(facecolors[0])

        return cls(
            data=data,
            x=x_name,
            y=y_name,
            layers=(Layer('point', params),),
            title=ax.get_title() or None,
            xlim=None if ax.get_autoscalex_on() else tuple(ax.get_xlim()),
            ylim=None if ax.get_autoscaley_on() else tuple(ax.get_ylim()),
        )

    def replace(self, **changes) -> 'ScatterSpec':
        return dataclasses.replace(self, **changes)

    def with_theme(self, **changes) -> 'ScatterSpec':
        return self.replace(theme=dataclasses.replace(self.theme, **changes))

    @property
    def has_title(self) -> bool:
        return bool(self.title) or bool(self.subtitle)

    def draw(self, ax, x_range: Optional['AxisRange'] = None, y_range: Optional['AxisRange'] = None):
        """
        Draw the scatter layers on ``ax``.

        When axis ranges are given they are imposed on the axes, otherwise
        matplotlib autoscaling (with any explicit limits) decides them.
        """
        for layer in self.layers:
            if layer.kind != 'point':
                logger.debug(f"Skipping non-point layer {layer.kind!r}")
                continue
            params = dict(layer.params)
            if layer.hue is not None:
                params.pop('color', None)
                for level, group in self.data.groupby(layer.hue, sort=True):
                    ax.scatter(group[self.x], group[self.y], label=str(level), **params)
                ax.legend(title=layer.hue)
            else:
                ax.scatter(self.data[self.x], self.data[self.y], **params)

        ax.set_xlabel(self.xlabel if self.xlabel is not None else self.x)
        ax.set_ylabel(self.ylabel if self.ylabel is not None else self.y)
        if self.theme.grid:
            ax.grid(True, color=self.theme.grid_color)
        else:
            ax.grid(False)
        ax.set_axisbelow(True)

        if self.xlim is not None:
            ax.set_xlim(*self.xlim)
        if self.ylim is not None:
            ax.set_ylim(*self.ylim)
        if x_range is not None:
            x_range.apply(ax)
        if y_range is not None:
            y_range.apply(ax)


@dataclass(frozen=True)
class AxisRange:
    """Resolved limits and breaks of one axis of the main plot."""
    axis: str
    limits: Tuple[float, float]
    breaks: Tuple[float, ...]
    label_size: float

    def apply(self, ax):
        """Impose these limits, breaks and tick label size on the matching axis of ``ax``."""
        if self.axis == 'x':
            ax.set_xlim(*self.limits)
            ax.set_xticks(list(self.breaks))
        else:
            ax.set_ylim(*self.limits)
            ax.set_yticks(list(self.breaks))
        ax.tick_params(axis=self.axis, labelsize=self.label_size)

    def read(self, ax) -> Tuple[float, float]:
        """Current limits of the matching axis of ``ax``."""
        return tuple(ax.get_xlim() if self.axis == 'x' else ax.get_ylim())


@dataclass
class RenderConfig:
    """Configuration for drawing and exporting composed figures."""
    figsize: Tuple[float, float] = (7.0, 7.0)
    dpi: int = 100
    facecolor: str = 'white'

    @classmethod
    def from_environment(cls) -> 'RenderConfig':
        """Create config from environment variables, keeping defaults for unset ones."""
        default = cls()
        width = float(os.environ.get('MARGVIZ_FIG_WIDTH', default.figsize[0]))
        height = float(os.environ.get('MARGVIZ_FIG_HEIGHT', default.figsize[1]))
        dpi = int(os.environ.get('MARGVIZ_DPI', default.dpi))
        return cls(figsize=(width, height), dpi=dpi)
