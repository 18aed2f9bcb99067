"""
Landing Products API Client

Client for the public landing products endpoint of the DisCor backend.
Handles bearer authentication, pagination and retries with backoff.
"""

import logging
import math
import random
import time
from typing import Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

import requests

from ..common.settings import ApiSettings
from ..common.text_utils import collapse_whitespace, parse_positive_int
from ..sources.products import dedupe_products, normalize_products

logger = logging.getLogger(__name__)


class LandingAPIError(RuntimeError):
    """API request failed with a non-retryable status or after all retries."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_page_url(base_url: str, api_path: str, page: int, limit: int) -> str:
    """
    Build the URL for one page of landing products.

    Example:
        >>> build_page_url("https://api.example.com", "api/products/landing/pages", 2, 50)
        'https://api.example.com/api/products/landing/pages?page=2&limit=50'
    """
    normalized_path = api_path if api_path.startswith("/") else f"/{api_path}"
    url = urljoin(base_url, normalized_path)
    parts = urlsplit(url)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    params.update({"page": page, "limit": limit})
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


class LandingAPIClient:
    """
    Client for the landing products API.

    Handles:
    - Bearer authentication
    - Pagination until pagination.totalPages (or max_pages)
    - Retries on 429/5xx with Retry-After or exponential backoff plus jitter
    - Deduplication of products repeated across pages

    Usage:
        with LandingAPIClient(settings.api) as client:
            products = client.fetch_all_products()
    """

    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
    MAX_JITTER_MS = 300
    ERROR_BODY_LIMIT = 280

    def __init__(self, settings: ApiSettings):
        """
        Initialize the API client.

        Args:
            settings: Base URL, path, token, pagination and retry settings
        """
        self.settings = settings
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {settings.token}",
            "Accept": "application/json",
        })
        self.requests_made = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _sleep(self, delay_ms: int) -> None:
        time.sleep(delay_ms / 1000)

    def get_retry_delay_ms(self, response: requests.Response, attempt: int) -> int:
        """
        Compute the wait before the next attempt.

        A positive numeric Retry-After header (seconds) wins; otherwise the
        base delay doubles per attempt with up to 300ms of random jitter.
        """
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                seconds = float(retry_after)
            except ValueError:
                seconds = 0
            if math.isfinite(seconds) and seconds > 0:
                return math.ceil(seconds * 1000)

        exponential = self.settings.retry_delay_ms * (2 ** attempt)
        jitter = random.randrange(self.MAX_JITTER_MS)
        return exponential + jitter

    def _error_body(self, response: requests.Response) -> str:
        try:
            text = response.text
        except (requests.exceptions.RequestException, UnicodeDecodeError):
            return ""
        return collapse_whitespace(text[:self.ERROR_BODY_LIMIT])

    def get_json(self, url: str) -> Dict:
        """
        GET a URL and decode JSON, retrying transient failures.

        Args:
            url: Fully built request URL

        Returns:
            Decoded JSON body

        Raises:
            LandingAPIError: On a non-retryable status, exhausted retries or
                a transport error
        """
        retries = self.settings.retries

        for attempt in range(retries + 1):
            try:
                response = self.session.get(url, timeout=self.settings.timeout)
            except requests.exceptions.RequestException as e:
                raise LandingAPIError(f"API request failed at {url}: {e}") from e
            self.requests_made += 1

            if response.ok:
                try:
                    return response.json()
                except ValueError as e:
                    raise LandingAPIError(f"API returned invalid JSON at {url}: {e}") from e

            status = response.status_code
            retryable = status in self.RETRYABLE_STATUS_CODES
            if not retryable or attempt == retries:
                body = self._error_body(response)
                raise LandingAPIError(
                    f"API request failed ({status}) at {url}. {body}".strip(),
                    status_code=status,
                )

            delay = self.get_retry_delay_ms(response, attempt)
            logger.warning("Retry %d/%d after %dms (%d)", attempt + 1, retries, delay, status)
            self._sleep(delay)

        raise LandingAPIError(f"Unexpected retry termination for {url}")

    def fetch_all_products(self) -> List[dict]:
        """
        Fetch every page of landing products.

        Stops after pagination.totalPages or settings.max_pages, whichever
        comes first. A missing or invalid totalPages ends the loop after the
        current page.

        Returns:
            Deduplicated list of product dicts, in API order
        """
        items: List[dict] = []
        page = 1
        max_pages = self.settings.max_pages

        while True:
            url = build_page_url(self.settings.base_url, self.settings.path, page, self.settings.limit)
            payload = self.get_json(url)

            chunk = normalize_products(payload)
            items.extend(chunk)

            pagination = payload.get("pagination") if isinstance(payload, dict) else None
            total_pages = parse_positive_int(
                pagination.get("totalPages") if isinstance(pagination, dict) else None
            ) or page

            logger.info("API page %d/%d fetched (%d products).", page, total_pages, len(chunk))

            page += 1
            if page > total_pages or (max_pages and page > max_pages):
                break

        unique = dedupe_products(items)
        if len(unique) != len(items):
            logger.info("Removed %d duplicate products", len(items) - len(unique))
        return unique
