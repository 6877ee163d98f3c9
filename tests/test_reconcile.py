#!/usr/bin/env python
"""
Tests for resolving the main scatter plot from `p`, `data`, `x` and `y`.
"""

import sys
import logging
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from margviz.errors import ConfigurationError, UnsupportedTypeError
from margviz.viz.base import ScatterSpec
from margviz.viz.reconcile import RECONCILED_PLOT_MARGIN, check_numeric_column, reconcile_scatter

logging.basicConfig(level=logging.INFO)


@pytest.fixture
def data():
    rng = np.random.default_rng(0)
    return pd.DataFrame({
        'a': rng.normal(size=50),
        'b': rng.normal(size=50),
        'c': rng.uniform(size=50),
        'label': ['p', 'q'] * 25,
        'flag': [True, False] * 25,
    })


def test_requires_data_x_y_without_plot(data):
    with pytest.raises(ConfigurationError, match="must be provided if `p` is not provided"):
        reconcile_scatter()

    with pytest.raises(ConfigurationError):
        reconcile_scatter(data=data, x='a')


def test_builds_plot_from_data(data):
    spec = reconcile_scatter(data=data, x='a', y='b')

    assert spec.x == 'a'
    assert spec.y == 'b'
    assert spec.data is data
    assert len(spec.layers) == 1
    assert spec.layers[0].kind == 'point'


def test_explicit_arguments_override_plot(data):
    plot = ScatterSpec.scatter(data, 'a', 'b')

    spec = reconcile_scatter(plot, x='c')
    assert spec.x == 'c'
    assert spec.y == 'b'

    other = data[['a', 'b', 'c']].iloc[:10]
    spec = reconcile_scatter(plot, data=other)
    assert spec.data is other
    assert spec.x == 'a'


def test_overridden_axis_drops_its_limits_and_label(data):
    plot = ScatterSpec.scatter(data, 'a', 'b').replace(
        xlim=(-1.0, 1.0), ylim=(-5.0, 5.0), xlabel='A', ylabel='B'
    )

    spec = reconcile_scatter(plot, x='c')
    assert spec.xlim is None
    assert spec.xlabel is None
    assert spec.ylim == (-5.0, 5.0)
    assert spec.ylabel == 'B'

    # Naming the same column again keeps everything
    spec = reconcile_scatter(plot, x='a', y='b')
    assert spec.xlim == (-1.0, 1.0)
    assert spec.ylabel == 'B'


def test_hue_column_must_be_in_data(data):
    plot = ScatterSpec.scatter(data, 'a', 'b', hue='label')
    assert reconcile_scatter(plot).layers[0].hue == 'label'

    with pytest.raises(ConfigurationError, match="`hue` column 'label'"):
        reconcile_scatter(plot, data=data[['a', 'b']])


def test_plot_without_bindings_needs_arguments(data):
    unbound = ScatterSpec(data=data)

    with pytest.raises(ConfigurationError, match="`x` must be provided"):
        reconcile_scatter(unbound, y='b')

    spec = reconcile_scatter(unbound, x='a', y='b')
    assert (spec.x, spec.y) == ('a', 'b')


def test_margins_are_reset(data):
    plot = ScatterSpec.scatter(data, 'a', 'b', title='Title')
    spec = reconcile_scatter(plot)

    assert spec.theme.plot_margin == RECONCILED_PLOT_MARGIN
    # The input plot is left untouched
    assert plot.theme.plot_margin != RECONCILED_PLOT_MARGIN
    assert spec.title == 'Title'


def test_non_numeric_columns_rejected(data):
    with pytest.raises(UnsupportedTypeError):
        reconcile_scatter(data=data, x='a', y='label')

    with pytest.raises(UnsupportedTypeError):
        check_numeric_column(data, 'flag', 'x')

    # Unsupported types are configuration errors as well
    with pytest.raises(ConfigurationError):
        reconcile_scatter(data=data, x='label', y='a')


def test_missing_column_rejected(data):
    with pytest.raises(ConfigurationError, match="not in the data"):
        reconcile_scatter(data=data, x='a', y='missing')


def test_invalid_plot_type_rejected(data):
    with pytest.raises(ConfigurationError):
        reconcile_scatter(p="not a plot", data=data, x='a', y='b')


def test_plot_from_matplotlib_axes():
    fig, ax = plt.subplots()
    try:
        ax.scatter([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], s=12)
        ax.set_xlabel('width')
        ax.set_ylabel('height')
        ax.set_title('Sizes')

        spec = reconcile_scatter(ax)
    finally:
        plt.close(fig)

    assert (spec.x, spec.y) == ('width', 'height')
    assert list(spec.data['width']) == [1.0, 2.0, 3.0]
    assert list(spec.data['height']) == [4.0, 5.0, 6.0]
    assert spec.title == 'Sizes'
    assert spec.layers[0].params['s'] == 12.0


def test_axes_without_scatter_rejected():
    fig, ax = plt.subplots()
    try:
        ax.plot([1, 2], [3, 4])
        with pytest.raises(ConfigurationError, match="no scatter points"):
            reconcile_scatter(ax)
    finally:
        plt.close(fig)
