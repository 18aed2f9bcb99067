"""
Product Loading

Normalizes the shapes a product payload can take and loads local JSON
fixtures. Accepted shapes:

- a list of products
- an API page: {"data": [...], "pagination": {...}}
- a single product object
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)


def normalize_products(payload: Any) -> list[dict]:
    """
    Extract the product list from a payload.

    Args:
        payload: Decoded JSON from a fixture or an API page

    Returns:
        List of product dicts (empty if the payload has no products)
    """
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("data"), list):
        items = payload["data"]
    elif isinstance(payload, dict):
        items = [payload]
    else:
        return []

    products = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Skipping non-object product entry at position %d", position)
            continue
        products.append(item)
    return products


def _key_part(value: Any) -> str:
    return "" if value is None else str(value)


def dedupe_products(products: Iterable[dict]) -> list[dict]:
    """
    Drop repeated products, keyed on id and sku. The first occurrence wins.

    Pagination can repeat records when the catalog changes between page
    requests.
    """
    seen: set[str] = set()
    unique = []

    for product in products:
        key = f"{_key_part(product.get('id'))}|{_key_part(product.get('sku'))}"
        if key in seen:
            logger.debug("Skipping duplicate product %s", key)
            continue
        seen.add(key)
        unique.append(product)

    return unique


def load_products_from_file(path: str | Path) -> list[dict]:
    """
    Load products from a JSON fixture.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    products = normalize_products(payload)
    logger.info("Loaded %d products from %s", len(products), path)
    return products
