# Common utilities
from .config_loader import load_config, load_site_settings
from .escaping import escape_attr, escape_html, escape_xml, safe_inline_json, to_json
from .log_config import setup_logging
from .settings import (
    ApiSettings,
    Branding,
    ConfigurationError,
    GeneratorSettings,
    resolve_settings,
)
from .slugs import ensure_unique_file_name, slugify
from .text_utils import clean_text, normalize_date, parse_year, pick_locale_text
