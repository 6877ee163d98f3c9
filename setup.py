"""
Setup script for margviz package.
This file is kept for backwards compatibility only.
Configuration lives in pyproject.toml.
"""

from setuptools import setup

setup(
    # All configuration lives in pyproject.toml
    # This file is kept for backwards compatibility only
)
