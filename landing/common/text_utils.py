"""
Text Utilities

Helper functions for cleaning product text coming from the API or fixtures.
Product payloads are loosely typed, so every helper accepts any value and
falls back instead of raising.
"""

import json
import math
import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

MIN_YEAR = 1900
MAX_YEAR = 2200

_TIME_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def clean_text(value: Any, fallback: str) -> str:
    """
    Strip a string value, using fallback for non-strings and blank strings.

    Example:
        >>> clean_text("  Filtro  ", "N/A")
        'Filtro'
        >>> clean_text(42, "N/A")
        'N/A'
    """
    if not isinstance(value, str):
        return fallback
    trimmed = value.strip()
    return trimmed or fallback


def pick_locale_text(value: Any, fallback: str) -> str:
    """
    Pick display text from a plain string or a localized mapping.

    Localized values look like {"es": "Filtro de aire", "en": "Air filter"}.
    Spanish wins; otherwise the first available translation is used.

    Args:
        value: String, localized dict, or anything else
        fallback: Text returned when nothing usable is found

    Returns:
        Cleaned text
    """
    if not value:
        return fallback
    if isinstance(value, str):
        return clean_text(value, fallback)
    if isinstance(value, dict):
        if value.get("es"):
            return clean_text(value["es"], fallback)
        first_value = next(iter(value.values()), None)
        if first_value:
            return clean_text(first_value, fallback)
    elif isinstance(value, list) and value and value[0]:
        return clean_text(value[0], fallback)
    return fallback


def parse_year(value: Any) -> Optional[int]:
    """
    Parse a model year, accepting ints and numeric strings.

    Returns:
        Year between 1900 and 2200, or None
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    year = int(number)
    if year < MIN_YEAR or year > MAX_YEAR:
        return None
    return year


def parse_positive_int(value: Any) -> Optional[int]:
    """Parse a positive integer from an int or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer() or number <= 0:
        return None
    return int(number)


def normalize_date(value: Any) -> Optional[str]:
    """
    Convert an ISO-8601 timestamp to a UTC calendar date.

    Example:
        >>> normalize_date("2025-03-10T23:30:00-03:00")
        '2025-03-11'
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        text = value.strip().replace("Z", "+00:00")
        # fromisoformat before 3.11 only takes 3 or 6 fraction digits
        text = _TIME_FRACTION.sub(lambda m: f"{m[1]}.{m[2][:6].ljust(6, '0')}", text)
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).date().isoformat()


def strip_accents(text: str) -> str:
    """Remove combining diacritical marks (á -> a, ñ -> n)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def collation_key(value: Any) -> Tuple[str, str]:
    """
    Sort key approximating Spanish collation.

    Accents and case are ignored first, except ñ which sorts after n. The
    original text breaks ties so the order is stable.
    """
    text = str(value)
    folded = unicodedata.normalize("NFC", text).casefold().replace("ñ", "n~")
    return (strip_accents(folded), text)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and strip."""
    return re.sub(r"\s+", " ", text).strip()


def trim_trailing_slash(value: str) -> str:
    """Drop one trailing slash from a base URL."""
    return value[:-1] if value.endswith("/") else value


def display_value(value: Any) -> str:
    """
    Render a JSON scalar or list the way it reads in the browser.

    Example:
        >>> display_value(True), display_value(1.0), display_value(["izq", "der"])
        ('true', '1', 'izq,der')
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else display_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
