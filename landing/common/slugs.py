"""
Slug Utilities

Builds URL-friendly slugs and file names for generated pages.
Spanish accents are folded to ASCII (Córdoba -> cordoba).
"""

import re
from typing import Any, Set

from .text_utils import strip_accents

DEFAULT_SLUG = "producto"


def slugify(value: Any) -> str:
    """
    Generate a URL-friendly slug.

    Example:
        >>> slugify("Filtro de Aire Peugeot 208")
        'filtro-de-aire-peugeot-208'
        >>> slugify("Cerradura  Baúl / Portón")
        'cerradura-baul-porton'
    """
    if value is None:
        return ""
    text = strip_accents(str(value)).lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def ensure_unique_file_name(preferred: str, used: Set[str], product_id: Any = None) -> str:
    """
    Reserve a file name that has not been used in this run.

    Collisions get the first 8 characters of the slugified product id and a
    numeric suffix starting at 2: `filtro-1a2b3c4d-2.html`.

    Args:
        preferred: Desired file name, with or without the .html extension
        used: File names already taken (updated in place)
        product_id: Product id used to disambiguate collisions

    Returns:
        The reserved file name
    """
    normalized = preferred if preferred.endswith(".html") else f"{preferred}.html"
    base = normalized[:-len(".html")]
    fallback = slugify(product_id) or DEFAULT_SLUG

    candidate = normalized
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{fallback[:8]}-{suffix}.html"
        suffix += 1

    used.add(candidate)
    return candidate
