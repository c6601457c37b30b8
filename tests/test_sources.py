"""Unit tests for the upstream source clients."""

from unittest.mock import Mock, patch

import pytest
import requests

from countries.exceptions import FetchError
from countries.sources import COUNTRY_SOURCE, RATE_SOURCE, fetch_countries, fetch_rates


def make_response(payload=None, status_code=200, json_error=None):
    resp = Mock()
    resp.status_code = status_code
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status.return_value = None
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


# ---------------------------------------------------------------------------
# fetch_countries
# ---------------------------------------------------------------------------


class TestFetchCountries:
    @patch("countries.sources.requests.get")
    def test_returns_entries(self, mock_get, country_entries):
        mock_get.return_value = make_response(country_entries)

        assert fetch_countries() == country_entries
        url = mock_get.call_args.args[0]
        assert "restcountries.com" in url
        assert mock_get.call_args.kwargs["timeout"] == 10

    @patch("countries.sources.requests.get")
    def test_timeout_is_configurable(self, mock_get, settings):
        settings.SOURCE_TIMEOUT = 3
        mock_get.return_value = make_response([])

        fetch_countries()
        assert mock_get.call_args.kwargs["timeout"] == 3.0

    @patch("countries.sources.requests.get")
    def test_timeout_raises_fetch_error(self, mock_get):
        mock_get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(FetchError) as excinfo:
            fetch_countries()
        assert excinfo.value.source == COUNTRY_SOURCE
        assert "timed out" in excinfo.value.detail

    @patch("countries.sources.requests.get")
    def test_non_2xx_raises_fetch_error(self, mock_get):
        mock_get.return_value = make_response(status_code=502)

        with pytest.raises(FetchError, match="502"):
            fetch_countries()

    @patch("countries.sources.requests.get")
    def test_connection_error_raises_fetch_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("no route to host")

        with pytest.raises(FetchError) as excinfo:
            fetch_countries()
        assert excinfo.value.source == COUNTRY_SOURCE

    @patch("countries.sources.requests.get")
    def test_invalid_json_raises_fetch_error(self, mock_get):
        mock_get.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(FetchError, match="invalid JSON"):
            fetch_countries()

    @patch("countries.sources.requests.get")
    def test_non_list_payload_raises_fetch_error(self, mock_get):
        mock_get.return_value = make_response({"status": 404, "message": "Not Found"})

        with pytest.raises(FetchError, match="expected a list"):
            fetch_countries()


# ---------------------------------------------------------------------------
# fetch_rates
# ---------------------------------------------------------------------------


class TestFetchRates:
    @patch("countries.sources.requests.get")
    def test_returns_rates_mapping(self, mock_get):
        mock_get.return_value = make_response({"result": "success", "rates": {"USD": 1, "NGN": 1600.5}})

        assert fetch_rates() == {"USD": 1.0, "NGN": 1600.5}
        assert mock_get.call_args.args[0].endswith("/latest/USD")

    @patch("countries.sources.requests.get")
    def test_base_currency_in_url(self, mock_get):
        mock_get.return_value = make_response({"rates": {}})

        fetch_rates("EUR")
        assert mock_get.call_args.args[0].endswith("/latest/EUR")

    @patch("countries.sources.requests.get")
    def test_drops_non_numeric_rates(self, mock_get):
        mock_get.return_value = make_response({"rates": {"USD": 1, "BAD": "n/a", "NUL": None, "FLAG": True}})

        assert fetch_rates() == {"USD": 1.0}

    @patch("countries.sources.requests.get")
    def test_missing_rates_raises_fetch_error(self, mock_get):
        mock_get.return_value = make_response({"result": "error", "error-type": "unsupported-code"})

        with pytest.raises(FetchError) as excinfo:
            fetch_rates()
        assert excinfo.value.source == RATE_SOURCE

    @patch("countries.sources.requests.get")
    def test_timeout_raises_fetch_error(self, mock_get):
        mock_get.side_effect = requests.Timeout()

        with pytest.raises(FetchError) as excinfo:
            fetch_rates()
        assert excinfo.value.source == RATE_SOURCE
