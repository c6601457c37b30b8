"""End-to-end country refresh: fetch, join, persist, render.

Source and persistence failures abort the run and are raised as
``RefreshError`` subclasses. A failed render is logged and the refresh
still succeeds.
"""
import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime

from . import sources, store
from .exceptions import FetchError, PersistenceFailure, SourceUnavailable, StoreError
from .join import build_records
from .snapshot import default_slot, render
from .utils import config, get_now, make_multiplier

logger = logging.getLogger(__name__)


class RefreshState(enum.Enum):
    IDLE = "idle"
    FETCHING_COUNTRIES = "fetching_countries"
    FETCHING_RATES = "fetching_rates"
    JOINING = "joining"
    PERSISTING = "persisting"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RefreshResult:
    records_written: int
    as_of: datetime


class RefreshPipeline:
    """One refresh run. Collaborators default to the real ones."""

    def __init__(
        self,
        fetch_countries=None,
        fetch_rates=None,
        multiplier=None,
        slot=None,
        chunk_size=None,
        renderer=None,
    ):
        self.fetch_countries = fetch_countries or sources.fetch_countries
        self.fetch_rates = fetch_rates or sources.fetch_rates
        self.multiplier = multiplier or make_multiplier(config.multiplier_seed)
        self.slot = slot
        self.chunk_size = chunk_size or config.chunk_size
        self.renderer = renderer or render
        self.state = RefreshState.IDLE

    def _enter(self, state):
        logger.debug("Refresh %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, error):
        self._enter(RefreshState.FAILED)
        return error

    def _fetch(self):
        # Both requests are in flight at once; the country result is awaited
        # first so its failure wins when both sources are down.
        # A failure returns at once; a request still in flight finishes in
        # its worker thread and its result is discarded.
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="refresh-fetch")
        try:
            self._enter(RefreshState.FETCHING_COUNTRIES)
            countries_future = pool.submit(self.fetch_countries)
            rates_future = pool.submit(self.fetch_rates)
            try:
                entries = countries_future.result()
            except FetchError as exc:
                logger.warning("Country source failed: %s", exc.detail)
                raise self._fail(SourceUnavailable(exc.source, exc.detail)) from exc

            self._enter(RefreshState.FETCHING_RATES)
            try:
                rates = rates_future.result()
            except FetchError as exc:
                logger.warning("Rate source failed: %s", exc.detail)
                raise self._fail(SourceUnavailable(exc.source, exc.detail)) from exc
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
        return entries, rates

    def _render(self, as_of):
        self._enter(RefreshState.RENDERING)
        try:
            slot = self.slot or default_slot()
            image = self.renderer(store.top_by_metric(), store.count(), as_of)
            slot.write(image)
        except Exception:
            logger.exception("Summary image generation failed")

    def run(self, as_of=None):
        if self.state is not RefreshState.IDLE:
            raise RuntimeError("a RefreshPipeline instance can only run once")
        as_of = as_of or get_now()

        entries, rates = self._fetch()

        self._enter(RefreshState.JOINING)
        records = build_records(entries, rates, as_of, self.multiplier)

        self._enter(RefreshState.PERSISTING)
        try:
            written = store.upsert(records, chunk_size=self.chunk_size)
        except StoreError as exc:
            logger.error("Refresh failed while persisting: %s", exc)
            raise self._fail(PersistenceFailure()) from exc

        self._render(as_of)

        self._enter(RefreshState.DONE)
        logger.info("Refresh complete: %d countries as of %s", written, as_of.isoformat())
        return RefreshResult(records_written=written, as_of=as_of)


def refresh(as_of=None, **kwargs):
    """Run a fresh ``RefreshPipeline``; keyword arguments go to its constructor."""
    return RefreshPipeline(**kwargs).run(as_of=as_of)
