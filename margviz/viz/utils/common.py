"""
Drawing-surface utilities for margviz.

Scratch figures are opened only to be interrogated (axis ranges, decoration
extents, option validation) and must never outlive the call that opened
them. Finished figures are exported at their own size: composed layouts are
resolved against the figure size, so cropping to a tight bounding box would
break the panel proportions.
"""

import io
import os
from contextlib import contextmanager
from typing import Dict, Optional, Union
import logging

import matplotlib.pyplot as plt
from PIL import Image

logger = logging.getLogger(__name__)


@contextmanager
def managed_figure(figsize=None, dpi=None, **kwargs):
    """
    Open a pyplot figure for the duration of a ``with`` block.

    The figure is closed on exit, including when the block raises.
    """
    fig = plt.figure(figsize=figsize, dpi=dpi, **kwargs)
    try:
        yield fig
    finally:
        plt.close(fig)


def _flatten(image: Image.Image, background) -> Image.Image:
    """Composite an RGBA image over an opaque background colour."""
    base = Image.new('RGBA', image.size, background)
    return Image.alpha_composite(base, image.convert('RGBA')).convert('RGB')


def plot_to_image(
    fig: plt.Figure,
    dpi: int = 100,
    force_rgb: bool = True,
    max_size: Optional[int] = None,
    close_fig: bool = True
) -> Image.Image:
    """
    Render a drawn figure to a PIL image.

    Args:
        fig: Drawn matplotlib figure
        dpi: Resolution of the rendering
        force_rgb: Flatten transparency onto white
        max_size: Shrink (keeping the aspect ratio) so neither side exceeds this
        close_fig: Close the figure once rendered

    Returns:
        PIL Image of exactly ``figsize * dpi`` pixels (before ``max_size``)
    """
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format='png', dpi=dpi, facecolor=fig.get_facecolor())
    finally:
        if close_fig:
            plt.close(fig)

    buffer.seek(0)
    image = Image.open(buffer)
    image.load()

    if force_rgb and image.mode != 'RGB':
        image = _flatten(image, 'white')
    if max_size and max(image.size) > max_size:
        image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
    return image


def save_figure(
    fig: plt.Figure,
    save_path: str,
    dpi: int = 100,
    close_fig: bool = True
) -> Dict[str, Union[str, int]]:
    """
    Write a drawn figure to ``save_path``; the extension picks the format.

    Missing parent directories are created.

    Returns:
        ``{'path', 'width', 'height', 'dpi'}`` with the size in pixels
    """
    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)

    width, height = fig.get_size_inches()
    try:
        fig.savefig(save_path, dpi=dpi, facecolor=fig.get_facecolor())
    finally:
        if close_fig:
            plt.close(fig)

    info = {
        'path': save_path,
        'width': int(round(width * dpi)),
        'height': int(round(height * dpi)),
        'dpi': dpi,
    }
    logger.debug(f"Saved {info['width']}x{info['height']} figure to {save_path}")
    return info
