"""
Product sources.

Modules:
    products - Input shape normalization, deduplication and JSON fixture loading
"""

from .products import dedupe_products, load_products_from_file, normalize_products

__all__ = [
    'normalize_products',
    'dedupe_products',
    'load_products_from_file',
]
