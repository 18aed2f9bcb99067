"""
Catalog Index

Renders products/index.html: every generated page as a card, with a text
search, a category filter and a cascading vehicle brand -> model -> year
filter that runs client-side.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

from ..common.escaping import escape_attr, escape_html, safe_inline_json, to_json
from ..common.text_utils import collation_key
from ..models import PageMeta
from .template import render_template


def build_brand_models(pages: Sequence[PageMeta]) -> Dict[str, List[str]]:
    """Map vehicle brand -> sorted list of models."""
    brand_models: Dict[str, set] = {}
    for page in pages:
        for compat in page.vehicle_compat:
            brand_models.setdefault(compat.brand, set()).add(compat.model)
    return {
        brand: sorted(models, key=collation_key)
        for brand, models in brand_models.items()
    }


def build_model_years(pages: Sequence[PageMeta]) -> Dict[str, Dict[str, List[int]]]:
    """Map vehicle brand -> model -> covered years, newest first."""
    model_years: Dict[str, Dict[str, set]] = {}
    for page in pages:
        for compat in page.vehicle_compat:
            years = model_years.setdefault(compat.brand, {}).setdefault(compat.model, set())
            years.update(range(compat.year_start, compat.year_end + 1))
    return {
        brand: {model: sorted(years, reverse=True) for model, years in models.items()}
        for brand, models in model_years.items()
    }


def render_card(page: PageMeta) -> str:
    compat_json = escape_attr(to_json([compat.to_dict() for compat in page.vehicle_compat]))
    href = escape_attr(page.file_name)
    return " ".join([
        f'<article class="card" data-name="{escape_attr(page.title.lower())}"',
        f'data-sku="{escape_attr(page.sku.lower())}"',
        f'data-brand="{escape_attr(page.brand)}"',
        f'data-category="{escape_attr(page.category)}"',
        f'data-compat="{compat_json}">',
        f'<p class="sku">SKU {escape_html(page.sku)}</p>',
        f'<h2><a href="./{href}">{escape_html(page.title)}</a></h2>',
        f'<p class="desc">{escape_html(page.description)}</p>',
        f'<div class="card-meta"><span class="pill">{escape_html(page.brand)}</span>'
        f'<span class="pill">{escape_html(page.category)}</span></div>',
        f'<a class="card-link" href="./{href}">Ver ficha →</a>',
        "</article>",
    ])


def _options(values: Sequence[str]) -> str:
    return "".join(
        f'<option value="{escape_attr(value)}">{escape_html(value)}</option>' for value in values
    )


def render_product_index_page(
    pages: Sequence[PageMeta],
    site_url: str,
    template: str,
    today: Optional[date] = None,
) -> str:
    """
    Render the catalog page.

    Args:
        pages: Generated pages, in generation order
        site_url: Public site URL without trailing slash
        template: Contents of templates/product-index.template.html
        today: Date shown as "Actualizado el"

    Returns:
        Catalog HTML
    """
    today = today or date.today()
    ordered = sorted(pages, key=lambda page: collation_key(page.title))

    brand_models = build_brand_models(ordered)
    model_years = build_model_years(ordered)
    categories = sorted({page.category for page in ordered}, key=collation_key)
    vehicle_brands = sorted(brand_models, key=collation_key)

    return render_template(template, {
        "CANONICAL_URL": escape_attr(f"{site_url}/products/"),
        "CATEGORY_OPTIONS": _options(categories),
        "VEHICLE_BRAND_OPTIONS": _options(vehicle_brands),
        "PRODUCT_COUNT": len(pages),
        "UPDATED_DATE": escape_html(today.isoformat()),
        "BRAND_MODELS_JSON": safe_inline_json(brand_models),
        "MODEL_YEARS_JSON": safe_inline_json(model_years),
        "PRODUCT_CARDS": "\n".join(render_card(page) for page in ordered),
    })
