"""
Data models for page generation.

This module contains pure data classes with no business logic.
"""

from .product import CompatibilityRow, PageData, PageMeta, VehicleCompat

__all__ = ['VehicleCompat', 'CompatibilityRow', 'PageMeta', 'PageData']
