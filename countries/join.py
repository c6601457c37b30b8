"""Join country entries with exchange rates and derive ``estimated_gdp``.

Nothing in this module touches the network or the database.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional

from .serializers import SourceCountrySerializer
from .utils import make_multiplier

logger = logging.getLogger(__name__)


@dataclass
class CountryRecord:
    name: str
    population: int
    last_refreshed_at: datetime
    capital: Optional[str] = None
    region: Optional[str] = None
    currency_code: Optional[str] = None
    exchange_rate: Optional[float] = None
    estimated_gdp: Optional[float] = None
    flag_url: Optional[str] = None

    def as_fields(self):
        """Return every non-key field, ready for the ORM."""
        fields = asdict(self)
        fields.pop("name")
        return fields


def first_currency_code(currencies):
    if not currencies:
        return None
    first = currencies[0] or {}
    return first.get("code") or None


def build_record(entry, rates, as_of, multiplier):
    """Return a ``CountryRecord`` for one raw entry, or None to skip it."""
    serializer = SourceCountrySerializer(data=entry)
    if not serializer.is_valid():
        label = entry.get("name") if isinstance(entry, dict) else entry
        logger.debug("Skipping country entry %r: %s", label, serializer.errors)
        return None
    data = serializer.validated_data

    record = CountryRecord(
        name=data["name"],
        population=data["population"],
        capital=data.get("capital"),
        region=data.get("region"),
        flag_url=data.get("flag"),
        currency_code=first_currency_code(data.get("currencies")),
        last_refreshed_at=as_of,
    )

    rate = rates.get(record.currency_code) if record.currency_code else None
    if rate:
        record.exchange_rate = rate
        record.estimated_gdp = record.population * multiplier() / rate
    return record


def build_records(
    entries: Iterable[Mapping],
    rates: Mapping[str, float],
    as_of: datetime,
    multiplier: Optional[Callable[[], int]] = None,
):
    """Return records for every acceptable entry, in input order.

    ``multiplier`` is called once per record that gets an estimate; when
    omitted an unseeded draw from 1000..2000 is used.
    """
    if multiplier is None:
        multiplier = make_multiplier()

    records = []
    skipped = 0
    for entry in entries:
        record = build_record(entry, rates, as_of, multiplier)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.info("Skipped %d country entries missing required fields", skipped)
    return records
