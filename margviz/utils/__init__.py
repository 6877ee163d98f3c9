"""
Utility functions for margviz.

- Logging setup and configuration
"""

from .logging import setup_logging

__all__ = ['setup_logging']
