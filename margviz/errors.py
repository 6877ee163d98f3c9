"""
Exceptions raised while composing marginal plots.

All of them are raised synchronously from ``add_marginals`` (or from the
helpers it calls) and none are recovered internally.
"""


class MarginalPlotError(Exception):
    """Base class for all margviz errors."""


class ConfigurationError(MarginalPlotError, ValueError):
    """Invalid argument combination, missing binding or invalid size."""


class UnsupportedTypeError(ConfigurationError):
    """A column cannot be drawn as a distribution (e.g. it is not numeric)."""


class LayerParameterError(MarginalPlotError):
    """The plotting layer rejected a style option that was passed through."""

    def __init__(self, message: str, option_names=None):
        super().__init__(message)
        self.option_names = tuple(option_names or ())
