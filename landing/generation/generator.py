"""
Landing Page Generator

Runs the whole build: load products (fixture or API), map each to a page,
write the HTML files and, in API mode, the catalog index, sitemap,
robots.txt and search index.

Features:
- Unique file names within a run
- Stale page cleanup before an API build
- Deterministic output for a fixed `today`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..api import LandingAPIClient
from ..common.settings import GeneratorSettings
from ..models import PageMeta
from ..rendering import (
    load_template,
    map_product_to_page,
    render_product_index_page,
    render_robots_txt,
    render_search_index,
    render_sitemap_xml,
    render_template,
)
from ..sources import load_products_from_file

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Summary of one generator run."""
    pages: list[PageMeta] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)
    removed_files: list[Path] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


class LandingPageGenerator:
    """
    Static landing page generator.

    Usage:
        settings = resolve_settings(vars(args))
        result = LandingPageGenerator(settings).run()
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        today: Optional[date] = None,
        client_factory: Callable[..., LandingAPIClient] = LandingAPIClient,
    ):
        """
        Initialize the generator.

        Args:
            settings: Resolved settings for this run
            today: Reference date for "Actualizado el", lastmod and open year ranges
                (defaults to the current UTC date)
            client_factory: Builds the API client from settings.api
        """
        self.settings = settings
        self.today = today or datetime.now(timezone.utc).date()
        self.client_factory = client_factory

    def load_products(self) -> list[dict]:
        """Load products from the configured source."""
        if self.settings.is_api:
            self.settings.api.require_credentials()
            logger.info("Fetching products from %s%s", self.settings.api.base_url, self.settings.api.path)
            with self.client_factory(self.settings.api) as client:
                return client.fetch_all_products()

        return load_products_from_file(self.settings.input_path)

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.settings.root_dir))
        except ValueError:
            return str(path)

    def _write(self, path: Path, content: str, result: GenerationResult) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        result.written_files.append(path)
        logger.info("Generated %s", self._relative(path))

    def remove_existing_pages(self, result: GenerationResult) -> None:
        """Delete every .html file in the output directory (API builds replace the whole set)."""
        for entry in sorted(self.settings.output_dir.iterdir()):
            if entry.is_file() and entry.suffix == ".html":
                entry.unlink()
                result.removed_files.append(entry)
        if result.removed_files:
            logger.info("Removed %d existing pages", len(result.removed_files))

    def run(self) -> GenerationResult:
        """
        Generate every page and index file.

        Returns:
            GenerationResult with the pages and files written

        Raises:
            FileNotFoundError: If a template or the input file is missing
            ValueError: If no products were found or --output is used with several products
            ConfigurationError: If API mode lacks a base URL or token
            LandingAPIError: If the API fails
        """
        settings = self.settings
        result = GenerationResult()

        template = load_template(settings.template_path)
        index_template = load_template(settings.index_template_path) if settings.is_api else None
        products = self.load_products()

        if not products:
            raise ValueError("No products found to generate pages.")

        if settings.output_name and len(products) != 1:
            raise ValueError("--output can only be used when exactly one product is loaded.")

        settings.output_dir.mkdir(parents=True, exist_ok=True)

        if settings.is_api:
            self.remove_existing_pages(result)

        used_file_names: set[str] = set()
        for product in products:
            page = map_product_to_page(
                product,
                site_url=settings.site_url,
                image_base_url=settings.image_base_url,
                used_file_names=used_file_names,
                output_override=settings.output_name,
                branding=settings.branding,
                today=self.today,
            )
            html = render_template(template, page.template_values)
            self._write(settings.output_dir / page.file_name, html, result)
            result.pages.append(page.meta)

        if settings.is_api:
            self._write(
                settings.index_path,
                render_product_index_page(result.pages, settings.site_url, index_template, self.today),
                result,
            )
            self._write(
                settings.sitemap_path,
                render_sitemap_xml(result.pages, settings.site_url, self.today),
                result,
            )
            self._write(settings.robots_path, render_robots_txt(settings.site_url), result)
            self._write(settings.search_index_path, render_search_index(result.pages), result)
            logger.info("Generated %d product pages from API.", result.page_count)

        return result
