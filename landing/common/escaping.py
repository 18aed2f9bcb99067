"""
Escaping helpers for HTML, XML and inline JSON-LD.

Values are escaped explicitly at render time; templates receive
already-safe strings.
"""

import json
from typing import Any

_HTML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

_XML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_html(value: Any) -> str:
    text = str(value)
    for char, entity in _HTML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def escape_attr(value: Any) -> str:
    """Escape for use inside a double-quoted attribute; newlines become spaces."""
    return escape_html(value).replace("\n", " ").replace("\r", " ")


def escape_xml(value: Any) -> str:
    text = str(value)
    for char, entity in _XML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def to_json(value: Any) -> str:
    """Compact JSON with non-ASCII characters kept as-is."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def safe_inline_json(value: Any) -> str:
    """Serialize JSON for a <script> block so it cannot close the tag early."""
    return to_json(value).replace("</script", "<\\/script")
