"""
Seitenvorlagen und Template-Hilfsfunktionen.
"""

from .helpers import HELPERS

__all__ = ['HELPERS']
