"""
SEO Builders

Builds page titles, meta descriptions and URL slugs. Titles and slugs
name the first compatible vehicles so pages rank for searches like
"filtro de aire peugeot 208 2012".
"""

from typing import Any, List, Optional, Sequence

from ..common.settings import Branding
from ..common.slugs import slugify
from ..common.text_utils import parse_year, pick_locale_text
from .compat import vehicle_parts

DESCRIPTION_FALLBACK = "Sin descripción disponible."
TITLE_VEHICLES = 2
DESCRIPTION_VEHICLES = 3
SLUG_VEHICLES = 2


def _vehicle_fields(item: Any):
    generation, model, brand = vehicle_parts(item)
    return (
        pick_locale_text(brand.get("name"), ""),
        pick_locale_text(model.get("name"), ""),
        parse_year(generation.get("yearStart")),
        parse_year(generation.get("yearEnd")),
    )


def build_seo_title(
    product_name: str,
    compatibilities: Sequence[Any],
    branding: Optional[Branding] = None,
) -> str:
    """
    Build the <title> for a product page.

    Tries "<name> para <vehicle> y <vehicle> | <store>", then a shorter
    single-vehicle form, then the bare product name, keeping the title
    within branding.title_max_length characters.
    """
    branding = branding or Branding()
    seen = set()
    labels: List[str] = []

    for item in compatibilities:
        if len(labels) >= TITLE_VEHICLES:
            break
        brand_name, model_name, year_start, year_end = _vehicle_fields(item)
        if not model_name or not year_start:
            continue
        key = f"{brand_name}|{model_name}"
        if key in seen:
            continue
        seen.add(key)
        year_str = f"{year_start}-{year_end}" if year_end else str(year_start)
        labels.append(" ".join(part for part in (brand_name, model_name, year_str) if part))

    plain = f"{product_name} | {branding.store_name}"
    if not labels:
        return plain

    full = f"{product_name} para {' y '.join(labels)} | {branding.store_name}"
    if len(full) <= branding.title_max_length:
        return full

    short = f"{product_name} para {labels[0]} | {branding.short_name}"
    return short if len(short) <= branding.title_max_length else plain


def build_seo_description(
    description: str,
    sku: str,
    category: str,
    compatibilities: Sequence[Any],
    branding: Optional[Branding] = None,
) -> str:
    """
    Build the meta description.

    Combines the product description, up to three compatible models and
    the SKU/category line, truncated with "..." past the length limit.
    """
    branding = branding or Branding()
    seen = set()
    models: List[str] = []

    for item in compatibilities:
        if len(models) >= DESCRIPTION_VEHICLES:
            break
        brand_name, model_name, year_start, year_end = _vehicle_fields(item)
        if not model_name:
            continue
        key = f"{brand_name}|{model_name}"
        if key in seen:
            continue
        seen.add(key)
        if year_start:
            year_str = f" {year_start}-{year_end}" if year_end else f" {year_start}"
        else:
            year_str = ""
        vehicle = " ".join(part for part in (brand_name, model_name) if part)
        models.append(f"{vehicle}{year_str}")

    parts = []
    if description and description != DESCRIPTION_FALLBACK:
        parts.append(description)
    if models:
        parts.append(f"Compatible con {', '.join(models)}.")
    parts.append(f"SKU {sku}. Categoría: {category}. {branding.store_name} {branding.locality}.")

    full = " ".join(parts)
    limit = branding.description_max_length
    if len(full) <= limit:
        return full
    return f"{full[:limit - 3]}..."


def build_seo_slug(product_name: str, sku: str, compatibilities: Sequence[Any]) -> str:
    """
    Build the page slug: name, up to two vehicle models with years, SKU.

    Example:
        "Filtro de Aire" + Peugeot 208 2012-2019 + "FA-123"
        -> "filtro-de-aire-208-2012-a-2019-fa-123"
    """
    name_part = slugify(product_name)
    sku_part = slugify(sku)
    seen = set()
    compat_parts: List[str] = []

    for item in compatibilities:
        if len(compat_parts) >= SLUG_VEHICLES:
            break
        _, model_name, year_start, year_end = _vehicle_fields(item)
        if not model_name or not year_start:
            continue
        if model_name in seen:
            continue
        seen.add(model_name)
        year_str = f"{year_start}-a-{year_end}" if year_end else str(year_start)
        compat_parts.append(slugify(f"{model_name}-{year_str}"))

    return "-".join(part for part in (name_part, *compat_parts, sku_part) if part)
