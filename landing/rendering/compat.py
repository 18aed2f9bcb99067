"""
Vehicle compatibility helpers.

A compatibility record from the API looks like:

    {
        "vehicleGeneration": {
            "generationName": "II",
            "yearStart": 2012,
            "yearEnd": 2019,
            "vehicleModel": {"name": "208", "vehicleBrand": {"name": "Peugeot"}}
        },
        "vehicleLocation": {"name": "Delantero"}
    }
"""

from typing import Any, Dict, Tuple

from ..common.text_utils import parse_year, pick_locale_text
from ..models import CompatibilityRow, VehicleCompat

MISSING = "N/D"


def _as_dict(value: Any) -> Dict:
    return value if isinstance(value, dict) else {}


def vehicle_parts(item: Any) -> Tuple[Dict, Dict, Dict]:
    """Return the (generation, model, brand) dicts of a compatibility record."""
    generation = _as_dict(_as_dict(item).get("vehicleGeneration"))
    model = _as_dict(generation.get("vehicleModel"))
    brand = _as_dict(model.get("vehicleBrand"))
    return generation, model, brand


def year_range(generation: Dict, current_year: int) -> Tuple[int, int, bool]:
    """
    Resolve the covered year range.

    A missing start year means the current year; a missing end year means
    the range is still open and runs to the current year.

    Returns:
        (year_start, year_end, open_ended)
    """
    year_start = parse_year(generation.get("yearStart")) or current_year
    end_value = parse_year(generation.get("yearEnd"))
    year_end = max(year_start, end_value if end_value is not None else current_year)
    return year_start, year_end, end_value is None


def build_compatibility_row(item: Any, current_year: int) -> CompatibilityRow:
    generation, model, brand = vehicle_parts(item)
    location = _as_dict(_as_dict(item).get("vehicleLocation"))
    year_start, year_end, open_ended = year_range(generation, current_year)

    return CompatibilityRow(
        brand=pick_locale_text(brand.get("name"), MISSING),
        model=pick_locale_text(model.get("name"), MISSING),
        generation=pick_locale_text(generation.get("generationName"), MISSING),
        location=pick_locale_text(location.get("name"), MISSING),
        year_start=year_start,
        year_end=year_end,
        open_ended=open_ended,
    )


def build_vehicle_compat(item: Any, current_year: int) -> VehicleCompat:
    generation, model, brand = vehicle_parts(item)
    year_start, year_end, _ = year_range(generation, current_year)
    return VehicleCompat(
        brand=pick_locale_text(brand.get("name"), MISSING),
        model=pick_locale_text(model.get("name"), MISSING),
        year_start=year_start,
        year_end=year_end,
    )


def describe_compatibility(item: Any, current_year: int) -> str:
    """
    Human-readable label for schema.org isCompatibleWith.

    Example: "Peugeot 208 II 2012-2019" or "Fiat Cronos 2018-Actual"
    """
    generation, model, brand = vehicle_parts(item)
    year_start, year_end, open_ended = year_range(generation, current_year)
    years = f"{year_start}-{'Actual' if open_ended else year_end}"
    parts = [
        pick_locale_text(brand.get("name"), ""),
        pick_locale_text(model.get("name"), ""),
        pick_locale_text(generation.get("generationName"), ""),
        years,
    ]
    return " ".join(part for part in parts if part)
