#!/usr/bin/env python
"""
Tests for drawing figure results through draw_figure.
"""

import sys
import logging
from pathlib import Path
from types import SimpleNamespace

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from margviz import add_marginals, setup_logging
from margviz.viz.base import RenderConfig, ScatterSpec, Theme
from margviz.viz.context.figure import FigureKind, PlotFigure, draw_figure, show_figure

logging.basicConfig(level=logging.INFO)


@pytest.fixture
def data():
    rng = np.random.default_rng(7)
    return pd.DataFrame({'x': rng.normal(size=30), 'y': rng.normal(size=30)})


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_figure_kinds(data):
    plot = PlotFigure(ScatterSpec.scatter(data, 'x', 'y'))
    composed = add_marginals(data=data, x='x', y='y')

    assert plot.kind is FigureKind.PLOT
    assert composed.kind is FigureKind.MARGINAL


def test_draw_plot_figure(data):
    config = RenderConfig(figsize=(5.0, 4.0), dpi=80)
    plot = PlotFigure(ScatterSpec.scatter(data, 'x', 'y', title='Plain'), config=config)

    fig = draw_figure(plot)
    assert len(fig.axes) == 1
    assert tuple(fig.get_size_inches()) == pytest.approx((5.0, 4.0))
    assert [t.get_text() for t in fig.texts] == ['Plain']


def test_new_page_clears_given_figure(data):
    composed = add_marginals(data=data, x='x', y='y')
    fig = plt.figure()
    fig.add_subplot(111)

    draw_figure(composed, new_page=True, figure=fig)
    assert len(fig.axes) == 3

    draw_figure(composed, new_page=False, figure=fig)
    assert len(fig.axes) == 6


def test_without_new_page_draws_on_current_figure(data):
    composed = add_marginals(data=data, x='x', y='y', margins='x')
    current = plt.figure()

    fig = draw_figure(composed, new_page=False)
    assert fig is current
    assert len(fig.axes) == 2


def test_new_page_creates_figure(data):
    composed = add_marginals(data=data, x='x', y='y')
    before = set(plt.get_fignums())

    fig = composed.draw()
    assert fig.number not in before
    assert tuple(fig.get_size_inches()) == pytest.approx(composed.config.figsize)


def test_unknown_kind_rejected():
    result = SimpleNamespace(kind='table', config=RenderConfig())
    fig = plt.figure()
    with pytest.raises(TypeError):
        draw_figure(result, figure=fig)


def test_show_figure_defaults_to_interactive_mode(data, monkeypatch):
    composed = add_marginals(data=data, x='x', y='y')
    shown = []
    monkeypatch.setattr(plt, 'show', lambda *args, **kwargs: shown.append(True))

    current = plt.figure()
    fig = show_figure(composed)
    # Agg is non-interactive, so the current figure is reused
    assert fig is current
    assert shown == [True]


def test_theme_without_grid(data):
    spec = ScatterSpec.scatter(data, 'x', 'y', theme=Theme(grid=False, base_size=9))
    fig = draw_figure(PlotFigure(spec))

    ax = fig.axes[0]
    assert not any(line.get_visible() for line in ax.get_xgridlines())


def test_render_config_from_environment(monkeypatch):
    monkeypatch.setenv('MARGVIZ_FIG_WIDTH', '9')
    monkeypatch.setenv('MARGVIZ_DPI', '150')
    monkeypatch.delenv('MARGVIZ_FIG_HEIGHT', raising=False)

    config = RenderConfig.from_environment()
    assert config.figsize == (9.0, 7.0)
    assert config.dpi == 150


def test_setup_logging(tmp_path):
    log_file = tmp_path / 'logs' / 'margviz.log'
    logger = setup_logging('debug', log_file=str(log_file))
    try:
        assert logger.name == 'margviz'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logger.debug("composed")
        for handler in logger.handlers:
            handler.flush()
        assert 'composed' in log_file.read_text()
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_setup_logging_level_from_environment(monkeypatch):
    monkeypatch.setenv('MARGVIZ_LOG_LEVEL', 'warning')
    logger = setup_logging()
    try:
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    with pytest.raises(ValueError):
        setup_logging('loud')
