"""
Sitemap and robots.txt rendering.
"""

from datetime import date
from typing import Optional, Sequence

from ..common.escaping import escape_xml
from ..models import PageMeta

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def render_sitemap_xml(pages: Sequence[PageMeta], site_url: str, today: Optional[date] = None) -> str:
    """
    Render sitemap.xml.

    The home page and the catalog come first, then one entry per product.
    Products without an update date use today as lastmod.
    """
    today_str = (today or date.today()).isoformat()
    entries = [
        (f"{site_url}/", today_str),
        (f"{site_url}/products/", today_str),
    ]
    entries.extend(
        (f"{site_url}/products/{page.file_name}", page.updated_at or today_str)
        for page in pages
    )

    items = "\n".join(
        "\n".join([
            "  <url>",
            f"    <loc>{escape_xml(loc)}</loc>",
            f"    <lastmod>{escape_xml(lastmod)}</lastmod>",
            "  </url>",
        ])
        for loc, lastmod in entries
    )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n'
        f"{items}\n"
        "</urlset>\n"
    )


def render_robots_txt(site_url: str) -> str:
    return "\n".join([
        "User-agent: *",
        "Allow: /",
        "",
        f"Sitemap: {site_url}/sitemap.xml",
        "",
    ])
