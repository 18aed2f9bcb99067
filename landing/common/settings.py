"""
Generator Settings

Resolves CLI flags, environment variables and config/site.yaml defaults
into one settings object. Precedence for every value: flag, then
environment, then YAML default.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .config_loader import PROJECT_ROOT, load_site_settings
from .text_utils import trim_trailing_slash

logger = logging.getLogger(__name__)

SOURCE_FILE = "file"
SOURCE_API = "api"
SOURCES = (SOURCE_FILE, SOURCE_API)

ENV_SITE_URL = "SITE_URL"
ENV_API_BASE_URL = "LANDING_PAGE_API_BASE_URL"
ENV_API_TOKEN = "LANDING_PAGE_TOKEN"
ENV_IMAGE_BASE_URL = "LANDING_PAGE_IMAGE_BASE_URL"
ENV_API_PATH = "LANDING_PAGE_API_PATH"


class ConfigurationError(ValueError):
    """Invalid flag, flag combination or missing required setting."""


@dataclass
class ApiSettings:
    """Connection and pagination settings for the landing products API."""
    base_url: str = ""
    path: str = "/api/products/landing/pages"
    token: str = ""
    limit: int = 100
    max_pages: Optional[int] = None
    retries: int = 5
    retry_delay_ms: int = 1200
    timeout: float = 30

    def require_credentials(self) -> None:
        """Raise if the API cannot be called with these settings."""
        if not self.base_url:
            raise ConfigurationError(
                f"Missing API base URL. Set --api-base-url or {ENV_API_BASE_URL}."
            )
        if not self.token:
            raise ConfigurationError(
                f"Missing landing API token. Set --api-token or {ENV_API_TOKEN}."
            )


@dataclass
class Branding:
    """Store naming and SEO limits used in titles, descriptions and CTAs."""
    store_name: str = "DisCor Mayorista"
    short_name: str = "DisCor"
    locality: str = "Córdoba"
    cta_url: str = "https://clientes.discor.com.ar"
    cta_text: str = "Acceder al Área Clientes"
    title_max_length: int = 70
    description_max_length: int = 155


@dataclass
class GeneratorSettings:
    """Everything the generator needs for one run."""
    root_dir: Path
    source: str = SOURCE_FILE
    site_url: str = "https://discor.com.ar"
    image_base_url: str = "https://discor.com.ar"
    input_path: Optional[Path] = None
    output_name: Optional[str] = None
    template_path: Optional[Path] = None
    index_template_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    api: ApiSettings = field(default_factory=ApiSettings)
    branding: Branding = field(default_factory=Branding)

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)
        if self.input_path is None:
            self.input_path = self.root_dir / "data" / "test-product.json"
        if self.template_path is None:
            self.template_path = self.root_dir / "templates" / "product-page.template.html"
        if self.index_template_path is None:
            self.index_template_path = self.root_dir / "templates" / "product-index.template.html"
        if self.output_dir is None:
            self.output_dir = self.root_dir / "products"

    @property
    def sitemap_path(self) -> Path:
        return self.root_dir / "sitemap.xml"

    @property
    def robots_path(self) -> Path:
        return self.root_dir / "robots.txt"

    @property
    def search_index_path(self) -> Path:
        return self.output_dir / "search-index.json"

    @property
    def index_path(self) -> Path:
        return self.output_dir / "index.html"

    @property
    def is_api(self) -> bool:
        return self.source == SOURCE_API


def validate_output_name(output: str) -> None:
    """
    Ensure --output is a bare file name.

    Raises:
        ConfigurationError: If the name contains separators, traversal or is absolute
    """
    if (
        os.path.basename(output) != output
        or "/" in output
        or "\\" in output
        or ".." in output
        or os.path.isabs(output)
    ):
        raise ConfigurationError(
            "--output must be a plain filename with no path separators or traversal sequences."
        )


def resolve_source(options: Mapping[str, Any], env: Mapping[str, str]) -> str:
    """Explicit --source wins; an API base URL (flag or env) implies api mode."""
    if options.get("source"):
        return options["source"]
    if options.get("api_base_url") or env.get(ENV_API_BASE_URL):
        return SOURCE_API
    return SOURCE_FILE


def _first(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def resolve_settings(
    options: Mapping[str, Any],
    env: Optional[Mapping[str, str]] = None,
    defaults: Optional[Dict[str, Any]] = None,
    root_dir: Optional[Path] = None,
) -> GeneratorSettings:
    """
    Build GeneratorSettings from parsed flags.

    Args:
        options: Parsed CLI options keyed by dest name (site_url, api_token, ...)
        env: Environment mapping (defaults to os.environ)
        defaults: Parsed site.yaml (loaded from config/ when None)
        root_dir: Project root; paths in site.yaml are relative to it

    Returns:
        Resolved settings

    Raises:
        ConfigurationError: On invalid flag combinations
    """
    env = os.environ if env is None else env
    defaults = load_site_settings() if defaults is None else defaults
    root = Path(options.get("root_dir") or root_dir or PROJECT_ROOT)

    site_defaults = defaults.get("site", {})
    api_defaults = defaults.get("api", {})
    path_defaults = defaults.get("paths", {})
    wholesale_defaults = defaults.get("wholesale", {})
    seo_defaults = defaults.get("seo", {})

    source = resolve_source(options, env)
    site_url = trim_trailing_slash(
        _first(options.get("site_url"), env.get(ENV_SITE_URL), site_defaults.get("url"), "")
    )
    image_base_url = trim_trailing_slash(
        _first(options.get("image_base_url"), env.get(ENV_IMAGE_BASE_URL), site_url)
    )

    output_name = options.get("output")
    if source == SOURCE_API and output_name:
        raise ConfigurationError("--output is only valid for file source mode.")
    if output_name:
        validate_output_name(output_name)

    max_limit = api_defaults.get("max_limit", 100)
    limit = min(_first(options.get("limit"), api_defaults.get("limit"), 100), max_limit)

    api = ApiSettings(
        base_url=trim_trailing_slash(
            _first(options.get("api_base_url"), env.get(ENV_API_BASE_URL), "")
        ),
        path=_first(options.get("api_path"), env.get(ENV_API_PATH), api_defaults.get("path"),
                    ApiSettings.path),
        token=_first(options.get("api_token"), env.get(ENV_API_TOKEN), ""),
        limit=limit,
        max_pages=options.get("max_pages"),
        retries=_first(options.get("retries"), api_defaults.get("retries"), ApiSettings.retries),
        retry_delay_ms=_first(options.get("retry_delay_ms"), api_defaults.get("retry_delay_ms"),
                              ApiSettings.retry_delay_ms),
        timeout=api_defaults.get("timeout_seconds", ApiSettings.timeout),
    )

    branding = Branding(
        store_name=site_defaults.get("store_name", Branding.store_name),
        short_name=site_defaults.get("short_name", Branding.short_name),
        locality=site_defaults.get("locality", Branding.locality),
        cta_url=wholesale_defaults.get("cta_url", Branding.cta_url),
        cta_text=wholesale_defaults.get("cta_text", Branding.cta_text),
        title_max_length=seo_defaults.get("title_max_length", Branding.title_max_length),
        description_max_length=seo_defaults.get("description_max_length",
                                                 Branding.description_max_length),
    )

    input_arg = options.get("input") or path_defaults.get("input")
    settings = GeneratorSettings(
        root_dir=root,
        source=source,
        site_url=site_url,
        image_base_url=image_base_url,
        input_path=(root / input_arg) if input_arg else None,
        output_name=output_name,
        template_path=(root / path_defaults["template"]) if path_defaults.get("template") else None,
        index_template_path=(root / path_defaults["index_template"])
        if path_defaults.get("index_template") else None,
        output_dir=(root / path_defaults["output_dir"]) if path_defaults.get("output_dir") else None,
        api=api,
        branding=branding,
    )
    logger.debug("Resolved settings: source=%s site=%s", settings.source, settings.site_url)
    return settings
