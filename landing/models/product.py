"""
Page data models.

Pure data classes for what the renderers derive from a product payload.
The product payload itself stays a plain dict as returned by the API.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class VehicleCompat:
    """Compact compatibility record used by the catalog filters and search index."""
    brand: str
    model: str
    year_start: int
    year_end: int

    def to_dict(self) -> Dict[str, object]:
        # Short keys keep the catalog data attributes and search index small
        return {"b": self.brand, "m": self.model, "ys": self.year_start, "ye": self.year_end}


@dataclass
class CompatibilityRow:
    """One row of the compatibility table on a product page."""
    brand: str
    model: str
    generation: str
    location: str
    year_start: int
    year_end: int
    open_ended: bool = False    # No end year in the source: shown as "Actual"

    @property
    def year_end_label(self) -> str:
        return "Actual" if self.open_ended else str(self.year_end)


@dataclass
class PageMeta:
    """
    Summary of a generated product page.

    Collected for every page during a run and used to build the catalog
    index, the sitemap and the search index.
    """
    id: str
    file_name: str
    url: str
    title: str
    description: str
    sku: str
    brand: str
    category: str
    vehicle_compat: List[VehicleCompat] = field(default_factory=list)
    updated_at: Optional[str] = None    # YYYY-MM-DD

    def __post_init__(self):
        if not self.file_name:
            raise ValueError("Page file name is required")


@dataclass
class PageData:
    """Everything needed to write one product page."""
    file_name: str
    meta: PageMeta
    template_values: Dict[str, str] = field(default_factory=dict)
