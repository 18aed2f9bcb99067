"""
Output rendering.

Modules:
    template     - {{KEY}} substitution and template loading
    compat       - Vehicle compatibility records -> rows, filters, labels
    seo          - Page titles, meta descriptions and slugs
    product_page - Product payload -> template values and page meta
    catalog      - products/index.html
    sitemap      - sitemap.xml and robots.txt
    search_index - products/search-index.json
"""

from .catalog import render_product_index_page
from .product_page import map_product_to_page
from .search_index import render_search_index
from .seo import build_seo_description, build_seo_slug, build_seo_title
from .sitemap import render_robots_txt, render_sitemap_xml
from .template import load_template, render_template

__all__ = [
    'load_template',
    'render_template',
    'map_product_to_page',
    'render_product_index_page',
    'render_sitemap_xml',
    'render_robots_txt',
    'render_search_index',
    'build_seo_title',
    'build_seo_description',
    'build_seo_slug',
]
