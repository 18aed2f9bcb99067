"""
Product Page Mapping

Maps one product payload to the values substituted into
templates/product-page.template.html, plus the page summary used by the
catalog, sitemap and search index.

Landing pages are public: price and stock are never rendered.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Set

from ..common.escaping import escape_attr, escape_html, safe_inline_json
from ..common.settings import Branding
from ..common.slugs import DEFAULT_SLUG, ensure_unique_file_name, slugify
from ..common.text_utils import (
    clean_text,
    collation_key,
    display_value,
    normalize_date,
    pick_locale_text,
)
from ..models import CompatibilityRow, PageData, PageMeta
from .compat import build_compatibility_row, build_vehicle_compat, describe_compatibility
from .seo import DESCRIPTION_FALLBACK, build_seo_description, build_seo_slug, build_seo_title

logger = logging.getLogger(__name__)

ASSET_PREFIX = "../"
ROW_SEPARATOR = "\n            "
PILL_SEPARATOR = "\n        "
EMPTY_COMPATIBILITY_ROW = '<tr><td colspan="6">Sin compatibilidades disponibles.</td></tr>'

NO_IMAGE_SVG = (
    '<div class="no-image" hidden><svg xmlns="http://www.w3.org/2000/svg" width="44" height="44" '
    'fill="none" viewBox="0 0 24 24" stroke="currentColor" stroke-width="1.2">'
    '<path stroke-linecap="round" stroke-linejoin="round" d="m2.25 15.75 5.159-5.159a2.25 2.25 0 0 1 '
    '3.182 0l5.159 5.159m-1.5-1.5 1.409-1.409a2.25 2.25 0 0 1 3.182 0l2.909 2.909m-18 3.75h16.5a1.5 '
    '1.5 0 0 0 1.5-1.5V6a1.5 1.5 0 0 0-1.5-1.5H3.75A1.5 1.5 0 0 0 2.25 6v12a1.5 1.5 0 0 0 1.5 1.5Zm10.5'
    '-11.25h.008v.008h-.008V8.25Zm.375 0a.375.375 0 1 1-.75 0 .375.375 0 0 1 .75 0Z"/></svg>'
    '<span>Sin imagen disponible</span></div>'
)


def render_option_list(values: Iterable[Any]) -> str:
    """Render sorted <option> tags for a filter <select>."""
    options = []
    for value in sorted(values, key=collation_key):
        text = str(value)
        options.append(f'<option value="{escape_attr(text)}">{escape_html(text)}</option>')
    return ROW_SEPARATOR.join(options)


def render_compatibility_row(row: CompatibilityRow) -> str:
    return " ".join([
        f'<tr data-brand="{escape_attr(row.brand)}"',
        f'data-model="{escape_attr(row.model)}"',
        f'data-location="{escape_attr(row.location)}"',
        f'data-year-start="{row.year_start}"',
        f'data-year-end="{row.year_end}">',
        f"<td>{escape_html(row.brand)}</td>",
        f"<td>{escape_html(row.model)}</td>",
        f"<td>{escape_html(row.generation)}</td>",
        f"<td>{row.year_start}</td>",
        f"<td>{row.year_end_label}</td>",
        f"<td>{escape_html(row.location)}</td>",
        "</tr>",
    ])


def render_image_html(image_url: str, image_alt: str) -> str:
    """Product image with a placeholder shown when the image fails to load."""
    return (
        f'<img src="{escape_attr(image_url)}" alt="{escape_attr(image_alt)}" loading="eager" '
        "onerror=\"this.style.display='none';this.nextElementSibling.hidden=false\">\n"
        f"{NO_IMAGE_SVG}"
    )


def render_attributes_section(attributes: Dict[str, Any]) -> str:
    pills = [
        f'<span class="attribute-pill">{escape_html(key)}: {escape_html(display_value(value))}</span>'
        for key, value in attributes.items()
    ]
    if not pills:
        return ""
    return f'<div class="attributes">{PILL_SEPARATOR.join(pills)}</div>'


def build_product_schema(
    product_name: str,
    description: str,
    sku: str,
    category: str,
    brand: str,
    image_url: str,
    attributes: Dict[str, Any],
    compatibilities: List[Any],
    current_year: int,
) -> Dict[str, Any]:
    """schema.org Product structured data."""
    return {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": product_name,
        "description": description,
        "sku": sku,
        "category": category,
        "image": image_url,
        "brand": {
            "@type": "Brand",
            "name": brand,
        },
        "additionalProperty": [
            {"@type": "PropertyValue", "name": str(key), "value": display_value(value)}
            for key, value in attributes.items()
        ],
        "isCompatibleWith": [describe_compatibility(item, current_year) for item in compatibilities],
    }


def map_product_to_page(
    product: Dict[str, Any],
    *,
    site_url: str,
    image_base_url: Optional[str] = None,
    used_file_names: Optional[Set[str]] = None,
    output_override: Optional[str] = None,
    branding: Optional[Branding] = None,
    today: Optional[date] = None,
) -> PageData:
    """
    Derive template values and page metadata for one product.

    Args:
        product: Product payload (API shape)
        site_url: Public site URL without trailing slash
        image_base_url: Base URL for product images ({base}/{sku}.jpg)
        used_file_names: File names taken earlier in the run (updated in place)
        output_override: Fixed file name (single-product file mode)
        branding: Store names, CTA defaults and SEO limits
        today: Reference date for open-ended year ranges

    Returns:
        PageData with the unique file name, page meta and template values
    """
    branding = branding or Branding()
    used_file_names = set() if used_file_names is None else used_file_names
    current_year = (today or date.today()).year
    image_base_url = image_base_url or site_url

    brand_info = product.get("brand") if isinstance(product.get("brand"), dict) else {}
    category_info = product.get("category") if isinstance(product.get("category"), dict) else {}
    image_info = product.get("image") if isinstance(product.get("image"), dict) else {}

    product_name = pick_locale_text(product.get("name"), "Producto sin nombre")
    description = pick_locale_text(product.get("description"), DESCRIPTION_FALLBACK)
    sku = clean_text(product.get("sku"), "N/A")
    brand = pick_locale_text(brand_info.get("name"), "Sin marca")
    category = pick_locale_text(category_info.get("name"), "Sin categoría")
    compatibilities = product.get("compatibilities")
    compatibilities = compatibilities if isinstance(compatibilities, list) else []
    attributes = product.get("attributes")
    attributes = attributes if isinstance(attributes, dict) else {}
    product_id = product.get("id")

    slug = build_seo_slug(product_name, sku, compatibilities) or slugify(product_id) or DEFAULT_SLUG
    file_name = ensure_unique_file_name(output_override or f"{slug}.html", used_file_names, product_id)
    canonical_url = f"{site_url}/products/{file_name}"
    image_url = f"{image_base_url}/{sku}.jpg"
    image_alt = clean_text(image_info.get("alt"), f"Imagen de {product_name}")
    cta_url = clean_text(product.get("wholesaleCtaUrl"), branding.cta_url)
    cta_text = clean_text(product.get("wholesaleCtaText"), branding.cta_text)

    rows = [build_compatibility_row(item, current_year) for item in compatibilities]
    brands = {row.brand for row in rows}
    models = {row.model for row in rows}
    locations = {row.location for row in rows}
    years = set()
    for row in rows:
        years.update(range(row.year_start, row.year_end + 1))

    seo_title = build_seo_title(product_name, compatibilities, branding)
    seo_description = build_seo_description(description, sku, category, compatibilities, branding)
    schema = build_product_schema(
        product_name, description, sku, category, brand, image_url,
        attributes, compatibilities, current_year,
    )

    meta = PageMeta(
        id="" if product_id is None else str(product_id),
        file_name=file_name,
        url=canonical_url,
        title=product_name,
        description=description,
        sku=sku,
        brand=brand,
        category=category,
        vehicle_compat=[build_vehicle_compat(item, current_year) for item in compatibilities],
        updated_at=normalize_date(product.get("updatedAt")),
    )

    template_values = {
        "SEO_TITLE": escape_attr(seo_title),
        "SEO_DESCRIPTION": escape_attr(seo_description),
        "CANONICAL_URL": escape_attr(canonical_url),
        "OG_IMAGE_URL": escape_attr(image_url),
        "ASSET_PREFIX": ASSET_PREFIX,
        "PRODUCT_JSON_LD": safe_inline_json(schema),
        "PRODUCT_NAME": escape_html(product_name),
        "PRODUCT_DESCRIPTION": escape_html(description),
        "PRODUCT_SKU": escape_html(sku),
        "PRODUCT_BRAND": escape_html(brand),
        "PRODUCT_CATEGORY": escape_html(category),
        "PRODUCT_IMAGE_HTML": render_image_html(image_url, image_alt),
        "WHOLESALE_CTA_URL": escape_attr(cta_url),
        "WHOLESALE_CTA_TEXT": escape_html(cta_text),
        "ATTRIBUTES_SECTION": render_attributes_section(attributes),
        "FILTER_BRAND_OPTIONS": render_option_list(brands),
        "FILTER_MODEL_OPTIONS": render_option_list(models),
        "FILTER_YEAR_OPTIONS": render_option_list(years),
        "FILTER_LOCATION_OPTIONS": render_option_list(locations),
        "COMPATIBILITY_ROWS": ROW_SEPARATOR.join(render_compatibility_row(row) for row in rows)
        if rows else EMPTY_COMPATIBILITY_ROW,
        "COMPATIBILITY_COUNT_LABEL": escape_html(f"{len(compatibilities)} compatibilidades"),
    }

    logger.debug("Mapped product %s to %s", meta.id or sku, file_name)
    return PageData(file_name=file_name, meta=meta, template_values=template_values)
