"""
Search index for the site-wide product search box.
"""

from typing import Sequence

from ..common.escaping import to_json
from ..models import PageMeta


def render_search_index(pages: Sequence[PageMeta]) -> str:
    """Compact JSON array, one entry per generated page, in generation order."""
    entries = [
        {
            "url": page.file_name,
            "name": page.title,
            "sku": page.sku,
            "brand": page.brand,
            "category": page.category,
            "description": page.description,
            "vehicleCompat": [compat.to_dict() for compat in page.vehicle_compat],
        }
        for page in pages
    ]
    return to_json(entries)
