"""Persistence of joined country records.

``upsert`` is the only writer used by a refresh. The remaining functions
are the read side consumed by the HTTP views.
"""
import logging

from django.db import DatabaseError, transaction
from django.db.models import F, Max

from .exceptions import StoreError
from .models import Country

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

UPDATE_FIELDS = [
    "capital", "region", "population", "flag_url",
    "currency_code", "exchange_rate", "estimated_gdp",
    "last_refreshed_at",
]


def _latest_by_name(records):
    # dict keeps the first position of a name and the last value written to it
    latest = {}
    for record in records:
        latest[record.name] = record
    return list(latest.values())


def _upsert_chunk(chunk):
    existing = {c.name: c for c in Country.objects.filter(name__in=[r.name for r in chunk])}
    new_countries, update_countries = [], []

    for record in chunk:
        country = existing.get(record.name)
        if country is None:
            new_countries.append(Country(name=record.name, **record.as_fields()))
            continue
        for field, value in record.as_fields().items():
            setattr(country, field, value)
        update_countries.append(country)

    if new_countries:
        Country.objects.bulk_create(new_countries)
    if update_countries:
        Country.objects.bulk_update(update_countries, fields=UPDATE_FIELDS)
    return len(new_countries), len(update_countries)


def upsert(records, chunk_size=DEFAULT_CHUNK_SIZE):
    """
    Insert or overwrite ``records`` keyed by exact name.

    Chunks are written in input order inside one transaction, so either
    every record lands or none does. Returns the number of distinct names
    written.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    records = _latest_by_name(records)
    created = updated = 0
    try:
        with transaction.atomic():
            for start in range(0, len(records), chunk_size):
                c, u = _upsert_chunk(records[start:start + chunk_size])
                created += c
                updated += u
    except (DatabaseError, OverflowError) as exc:
        raise StoreError(f"batch upsert of {len(records)} countries failed: {exc}") from exc

    logger.info("Upserted %d countries (%d created, %d updated)", len(records), created, updated)
    return len(records)


def find_by_name(pattern):
    """Return the first country whose name contains ``pattern``, or None."""
    return Country.objects.filter(name__icontains=pattern).order_by("id").first()


def list_countries(region=None, currency=None, sort_by_metric_desc=False):
    qs = Country.objects.all()
    if region:
        qs = qs.filter(region__iexact=region)
    if currency:
        qs = qs.filter(currency_code__iexact=currency)
    if sort_by_metric_desc:
        return qs.order_by(F("estimated_gdp").desc(nulls_last=True), "id")
    return qs.order_by("id")


def top_by_metric(limit=5):
    return list(list_countries(sort_by_metric_desc=True)[:limit])


def count():
    return Country.objects.count()


def max_last_refreshed_at():
    return Country.objects.aggregate(last=Max("last_refreshed_at"))["last"]


def delete_by_name(pattern):
    """Delete the first country matching ``pattern``; False if none did."""
    country = find_by_name(pattern)
    if country is None:
        return False
    country.delete()
    logger.info("Deleted country %s", country.name)
    return True
