"""
Template substitution.

Templates are plain HTML files with {{KEY}} placeholders. Values are
inserted verbatim, so callers escape them first.
"""

import logging
import re
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def load_template(path: Path) -> str:
    """
    Read a template file.

    Raises:
        FileNotFoundError: If the template doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path}")
    return path.read_text(encoding="utf-8")


def render_template(template: str, values: Mapping[str, object]) -> str:
    """
    Replace every {{KEY}} occurrence with its value in a single pass.

    Placeholders without a value are left untouched. Inserted values are
    never scanned for placeholders.
    """
    def replace(match):
        key = match.group(1)
        return str(values[key]) if key in values else match.group(0)

    return PLACEHOLDER.sub(replace, template)
