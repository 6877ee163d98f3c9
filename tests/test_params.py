#!/usr/bin/env python
"""
Tests for consolidation of marginal plot options.

Covers:
- Type defaults in the shared layer
- Precedence of x/y options over shared options
- Dropping of `fill` from the shared layer of density marginals
- Option name aliases
"""

import sys
import logging
from pathlib import Path
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from margviz.errors import ConfigurationError
from margviz.viz.base import MarginalType
from margviz.viz.params import consolidate_params, normalize_option_names, ParamSet

logging.basicConfig(level=logging.INFO)


def test_type_defaults_fill_shared_layer():
    """Each marginal type starts from its own defaults."""
    params = consolidate_params('density')
    assert params.for_axis('x') == {'color': 'black'}

    params = consolidate_params(MarginalType.HISTOGRAM)
    assert params.for_axis('y') == {'color': 'grey', 'edgecolor': 'black'}

    for marginal_type in ('boxplot', 'violin'):
        params = consolidate_params(marginal_type)
        assert params.for_axis('x') == {'color': 'grey', 'linecolor': 'black'}


def test_axis_options_override_shared_options():
    params = consolidate_params(
        'histogram',
        shared={'color': 'red', 'alpha': 0.5},
        xparams={'color': 'blue'},
        yparams={'bins': 10}
    )

    assert params.for_axis('x') == {'color': 'blue', 'edgecolor': 'black', 'alpha': 0.5}
    assert params.for_axis('y') == {'color': 'red', 'edgecolor': 'black', 'alpha': 0.5, 'bins': 10}


def test_density_drops_shared_fill_only():
    """`fill` is ignored when shared, but honoured for a single axis."""
    params = consolidate_params('density', shared={'fill': True}, yparams={'fill': True})

    assert 'fill' not in params.shared
    assert 'fill' not in params.for_axis('x')
    assert params.for_axis('y')['fill'] is True


def test_fill_kept_for_other_types():
    params = consolidate_params('violin', shared={'fill': False})
    assert params.for_axis('x')['fill'] is False


def test_option_aliases():
    assert normalize_option_names({'colour': 'red'}) == {'color': 'red'}
    assert normalize_option_names({'col': 'red', 'size': 2}) == {'color': 'red', 'size': 2}

    # The canonical spelling wins whatever the order
    assert normalize_option_names({'color': 'blue', 'col': 'red'}) == {'color': 'blue'}
    assert normalize_option_names({'colour': 'red', 'color': 'blue'}) == {'color': 'blue'}

    params = consolidate_params('density', shared={'colour': 'red'})
    assert params.for_axis('x') == {'color': 'red'}


def test_param_layers_are_immutable():
    params = consolidate_params('density', shared={'linewidth': 2})

    with pytest.raises(TypeError):
        params.shared['linewidth'] = 3

    # for_axis hands out a fresh dict every time
    merged = params.for_axis('x')
    merged['linewidth'] = 3
    assert params.for_axis('x')['linewidth'] == 2


def test_invalid_type_and_axis():
    with pytest.raises(ConfigurationError):
        consolidate_params('scatter')

    with pytest.raises(ValueError):
        ParamSet().for_axis('z')
