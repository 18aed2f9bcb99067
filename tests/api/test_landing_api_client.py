"""Tests for landing/api/client.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from landing.api.client import LandingAPIClient, LandingAPIError, build_page_url
from landing.common.settings import ApiSettings


def make_response(status_code=200, payload=None, headers=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.headers = headers or {}
    response.text = text
    response.json.return_value = payload
    return response


def page_payload(products, total_pages):
    return {"data": products, "pagination": {"totalPages": total_pages}}


@pytest.fixture
def settings():
    return ApiSettings(
        base_url="https://api.example.com",
        token="tok_test",
        limit=2,
        retries=3,
        retry_delay_ms=100,
    )


@pytest.fixture
def client(settings):
    """Create a client that records sleeps instead of waiting."""
    c = LandingAPIClient(settings)
    c.sleeps = []
    c._sleep = c.sleeps.append
    return c


class TestBuildPageUrl:
    def test_adds_query(self):
        url = build_page_url("https://api.example.com", "/api/products/landing/pages", 3, 100)
        assert url == "https://api.example.com/api/products/landing/pages?page=3&limit=100"

    def test_adds_leading_slash(self):
        url = build_page_url("https://api.example.com", "api/landing", 1, 10)
        assert url == "https://api.example.com/api/landing?page=1&limit=10"

    def test_absolute_path_replaces_base_path(self):
        url = build_page_url("https://api.example.com/v1", "/api/landing", 1, 10)
        assert url == "https://api.example.com/api/landing?page=1&limit=10"

    def test_keeps_existing_query(self):
        url = build_page_url("https://api.example.com", "/api/landing?locale=es", 2, 50)
        assert url == "https://api.example.com/api/landing?locale=es&page=2&limit=50"

    def test_overrides_page_in_path(self):
        url = build_page_url("https://api.example.com", "/api/landing?page=9&locale=es", 1, 10)
        assert url == "https://api.example.com/api/landing?page=1&locale=es&limit=10"


class TestInit:
    def test_session_headers(self, client):
        assert client.session.headers["Authorization"] == "Bearer tok_test"
        assert client.session.headers["Accept"] == "application/json"

    def test_context_manager_closes_session(self, settings):
        c = LandingAPIClient(settings)
        with patch.object(c.session, "close") as close:
            with c:
                pass
        close.assert_called_once()


class TestGetJson:
    def test_success(self, client):
        with patch.object(client.session, "get", return_value=make_response(payload={"ok": True})):
            assert client.get_json("https://api.example.com/x") == {"ok": True}

    def test_non_retryable_status_fails_immediately(self, client):
        response = make_response(401, text="  Unauthorized\n  token  ")
        with patch.object(client.session, "get", return_value=response) as get:
            with pytest.raises(LandingAPIError) as exc_info:
                client.get_json("https://api.example.com/x")

        assert get.call_count == 1
        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "API request failed (401) at https://api.example.com/x. Unauthorized token"
        assert client.sleeps == []

    def test_retries_then_succeeds(self, client):
        responses = [make_response(503), make_response(429), make_response(payload={"ok": True})]
        with patch.object(client.session, "get", side_effect=responses):
            assert client.get_json("https://api.example.com/x") == {"ok": True}
        assert len(client.sleeps) == 2

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_retryable_statuses(self, client, status):
        responses = [make_response(status), make_response(payload=[])]
        with patch.object(client.session, "get", side_effect=responses):
            assert client.get_json("https://api.example.com/x") == []

    def test_exhausted_retries(self, client):
        with patch.object(client.session, "get", return_value=make_response(502, text="Bad gateway")) as get:
            with pytest.raises(LandingAPIError, match=r"API request failed \(502\)"):
                client.get_json("https://api.example.com/x")

        # retries=3 means 4 attempts and 3 waits
        assert get.call_count == 4
        assert len(client.sleeps) == 3

    def test_zero_retries_single_attempt(self, settings):
        settings.retries = 0
        c = LandingAPIClient(settings)
        with patch.object(c.session, "get", return_value=make_response(503)) as get:
            with pytest.raises(LandingAPIError):
                c.get_json("https://api.example.com/x")
        assert get.call_count == 1

    def test_error_body_truncated(self, client):
        response = make_response(400, text="x" * 1000)
        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(LandingAPIError) as exc_info:
                client.get_json("https://api.example.com/x")
        assert str(exc_info.value).endswith("x" * 280)
        assert "x" * 281 not in str(exc_info.value)

    def test_transport_error_not_retried(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("refused")) as get:
            with pytest.raises(LandingAPIError, match="refused"):
                client.get_json("https://api.example.com/x")
        assert get.call_count == 1

    def test_uses_timeout(self, client):
        with patch.object(client.session, "get", return_value=make_response(payload={})) as get:
            client.get_json("https://api.example.com/x")
        assert get.call_args.kwargs["timeout"] == client.settings.timeout


class TestRetryDelay:
    def test_retry_after_header_seconds(self, client):
        response = make_response(429, headers={"Retry-After": "2.5"})
        assert client.get_retry_delay_ms(response, 0) == 2500

    def test_retry_after_rounds_up(self, client):
        response = make_response(429, headers={"Retry-After": "0.0011"})
        assert client.get_retry_delay_ms(response, 0) == 2

    def test_invalid_retry_after_uses_backoff(self, client):
        response = make_response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})
        with patch("landing.api.client.random.randrange", return_value=0):
            assert client.get_retry_delay_ms(response, 0) == 100

    def test_zero_retry_after_uses_backoff(self, client):
        response = make_response(503, headers={"Retry-After": "0"})
        with patch("landing.api.client.random.randrange", return_value=0):
            assert client.get_retry_delay_ms(response, 1) == 200

    def test_exponential_backoff_with_jitter(self, client):
        response = make_response(503)
        with patch("landing.api.client.random.randrange", return_value=150) as randrange:
            assert client.get_retry_delay_ms(response, 3) == 100 * 8 + 150
        randrange.assert_called_once_with(300)

    def test_jitter_bounds(self, client):
        response = make_response(503)
        for _ in range(50):
            delay = client.get_retry_delay_ms(response, 0)
            assert 100 <= delay < 400


class TestFetchAllProducts:
    def test_follows_total_pages(self, client):
        responses = [
            make_response(payload=page_payload([{"id": 1, "sku": "A"}, {"id": 2, "sku": "B"}], 2)),
            make_response(payload=page_payload([{"id": 3, "sku": "C"}], 2)),
        ]
        with patch.object(client.session, "get", side_effect=responses) as get:
            products = client.fetch_all_products()

        assert [p["id"] for p in products] == [1, 2, 3]
        urls = [call.args[0] for call in get.call_args_list]
        assert urls == [
            "https://api.example.com/api/products/landing/pages?page=1&limit=2",
            "https://api.example.com/api/products/landing/pages?page=2&limit=2",
        ]

    def test_max_pages_stops_early(self, client):
        client.settings.max_pages = 2
        responses = [
            make_response(payload=page_payload([{"id": 1}], 5)),
            make_response(payload=page_payload([{"id": 2}], 5)),
        ]
        with patch.object(client.session, "get", side_effect=responses) as get:
            products = client.fetch_all_products()

        assert get.call_count == 2
        assert len(products) == 2

    def test_missing_pagination_fetches_one_page(self, client):
        with patch.object(client.session, "get", return_value=make_response(payload={"data": [{"id": 1}]})) as get:
            products = client.fetch_all_products()
        assert get.call_count == 1
        assert products == [{"id": 1}]

    def test_invalid_total_pages_fetches_one_page(self, client):
        payload = {"data": [{"id": 1}], "pagination": {"totalPages": "lots"}}
        with patch.object(client.session, "get", return_value=make_response(payload=payload)) as get:
            client.fetch_all_products()
        assert get.call_count == 1

    def test_string_total_pages_accepted(self, client):
        responses = [
            make_response(payload={"data": [{"id": 1}], "pagination": {"totalPages": "2"}}),
            make_response(payload={"data": [{"id": 2}], "pagination": {"totalPages": "2"}}),
        ]
        with patch.object(client.session, "get", side_effect=responses):
            assert len(client.fetch_all_products()) == 2

    def test_dedupes_across_pages(self, client):
        responses = [
            make_response(payload=page_payload([{"id": 1, "sku": "A"}, {"id": 2, "sku": "B"}], 2)),
            make_response(payload=page_payload([{"id": 2, "sku": "B"}, {"id": 3, "sku": "C"}], 2)),
        ]
        with patch.object(client.session, "get", side_effect=responses):
            products = client.fetch_all_products()
        assert [p["sku"] for p in products] == ["A", "B", "C"]

    def test_error_propagates(self, client):
        with patch.object(client.session, "get", return_value=make_response(404, text="Not Found")):
            with pytest.raises(LandingAPIError, match="404"):
                client.fetch_all_products()
