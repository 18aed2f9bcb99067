"""
Landing products API integration.

Modules:
    client - Paginated client for GET /api/products/landing/pages
"""

from .client import LandingAPIClient, LandingAPIError, build_page_url

__all__ = [
    'LandingAPIClient',
    'LandingAPIError',
    'build_page_url',
]
