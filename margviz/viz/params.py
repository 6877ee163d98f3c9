"""
Consolidation of the style options passed to the marginal plots.

Options arrive in three layers: shared options (``**kwargs`` of
``add_marginals``), x-only options and y-only options. Each layer is kept as
an immutable mapping and merged per axis on demand.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import logging

from .base import MarginalType

logger = logging.getLogger(__name__)

# Alternative spellings accepted for matplotlib/seaborn option names
OPTION_ALIASES = {
    'colour': 'color',
    'col': 'color',
}

# Shared-layer defaults per marginal type
TYPE_DEFAULTS = {
    MarginalType.DENSITY: {'color': 'black'},
    MarginalType.HISTOGRAM: {'color': 'grey', 'edgecolor': 'black'},
    MarginalType.BOXPLOT: {'color': 'grey', 'linecolor': 'black'},
    MarginalType.VIOLIN: {'color': 'grey', 'linecolor': 'black'},
}

# Options a marginal type never accepts from the shared layer
DISALLOWED_SHARED_OPTIONS = {
    MarginalType.DENSITY: ('fill',),
}


def normalize_option_names(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Rewrite aliased option names to their canonical spelling.

    When both an alias and the canonical name are present the canonical
    name wins.
    """
    normalized = {}
    for name, value in (options or {}).items():
        canonical = OPTION_ALIASES.get(name, name)
        if canonical in normalized and canonical != name:
            continue
        normalized[canonical] = value
    return normalized


def _frozen(options: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(options))


@dataclass(frozen=True)
class ParamSet:
    """Shared, x-only and y-only option layers for the marginal plots."""
    shared: Mapping[str, Any] = field(default_factory=lambda: _frozen({}))
    x: Mapping[str, Any] = field(default_factory=lambda: _frozen({}))
    y: Mapping[str, Any] = field(default_factory=lambda: _frozen({}))

    def for_axis(self, axis: str) -> Dict[str, Any]:
        """Options for one axis: the shared layer overlaid by the axis layer."""
        if axis not in ('x', 'y'):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        axis_layer = self.x if axis == 'x' else self.y
        return {**self.shared, **axis_layer}


def consolidate_params(
    marginal_type,
    shared: Optional[Mapping[str, Any]] = None,
    xparams: Optional[Mapping[str, Any]] = None,
    yparams: Optional[Mapping[str, Any]] = None
) -> ParamSet:
    """
    Merge user options with the type defaults into a ParamSet.

    Args:
        marginal_type: MarginalType (or its string value)
        shared: Options applied to both marginal plots
        xparams: Options for the x marginal only
        yparams: Options for the y marginal only

    Returns:
        ParamSet whose ``for_axis`` gives the options used for each axis
    """
    marginal_type = MarginalType.parse(marginal_type, 'type')

    shared_layer = {**TYPE_DEFAULTS[marginal_type], **normalize_option_names(shared)}
    for option in DISALLOWED_SHARED_OPTIONS.get(marginal_type, ()):
        if option in shared_layer:
            logger.debug(f"Dropping shared option {option!r} for {marginal_type.value} marginals")
            del shared_layer[option]

    return ParamSet(
        shared=_frozen(shared_layer),
        x=_frozen(normalize_option_names(xparams)),
        y=_frozen(normalize_option_names(yparams)),
    )
