"""HTTP clients for the two upstream datasets.

Each call is a single bounded GET. Every way a call can go wrong is
reported as ``FetchError`` naming the source; nothing is retried here.
"""
import logging
import numbers

import requests
from requests.exceptions import RequestException, Timeout

from .exceptions import FetchError
from .utils import config

logger = logging.getLogger(__name__)

COUNTRY_SOURCE = "country"
RATE_SOURCE = "rate"


def _get_json(source, url, timeout):
    if timeout is None:
        timeout = config.source_timeout
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except Timeout as exc:
        raise FetchError(source, f"timed out after {timeout}s") from exc
    except RequestException as exc:
        # HTTPError from raise_for_status lands here too
        raise FetchError(source, str(exc)) from exc
    except ValueError as exc:
        raise FetchError(source, f"invalid JSON: {exc}") from exc


def fetch_countries(timeout=None):
    """Return the raw country entries as a list of dicts."""
    data = _get_json(COUNTRY_SOURCE, config.countries_api_url, timeout)
    if not isinstance(data, list):
        raise FetchError(COUNTRY_SOURCE, f"expected a list, got {type(data).__name__}")
    logger.info("Fetched %d country entries", len(data))
    return data


def fetch_rates(base=None, timeout=None):
    """Return a mapping of currency code to rate against ``base``."""
    base = base or config.base_currency
    data = _get_json(RATE_SOURCE, f"{config.exchange_api_url}/{base}", timeout)
    rates = data.get("rates") if isinstance(data, dict) else None
    if not isinstance(rates, dict):
        raise FetchError(RATE_SOURCE, "response has no 'rates' mapping")

    clean = {}
    for code, rate in rates.items():
        if isinstance(rate, bool) or not isinstance(rate, numbers.Real):
            logger.debug("Dropping non-numeric rate for %s: %r", code, rate)
            continue
        clean[code] = float(rate)
    logger.info("Fetched %d exchange rates (base %s)", len(clean), base)
    return clean
