import os
import random
from datetime import datetime, timezone

from django.conf import settings

MULTIPLIER_MIN = 1000
MULTIPLIER_MAX = 2000


class Config:
    """Read-through view of the pipeline settings with local defaults."""

    @property
    def environment(self) -> str:
        return getattr(settings, "ENVIRONMENT", "development")

    @property
    def countries_api_url(self) -> str:
        return settings.COUNTRIES_API_URL

    @property
    def exchange_api_url(self) -> str:
        return settings.EXCHANGE_API_URL.rstrip("/")

    @property
    def base_currency(self) -> str:
        return getattr(settings, "EXCHANGE_BASE_CURRENCY", "USD")

    @property
    def source_timeout(self) -> float:
        return float(getattr(settings, "SOURCE_TIMEOUT", 10))

    @property
    def chunk_size(self) -> int:
        return int(getattr(settings, "UPSERT_CHUNK_SIZE", 100))

    @property
    def multiplier_seed(self):
        return getattr(settings, "COUNTRIES_MULTIPLIER_SEED", None)

    @property
    def cache_path(self) -> str:
        """Return absolute cache directory path; created on first image write."""
        if self.environment == "production":
            path = "/tmp/cache"
        else:
            path = os.path.abspath(getattr(settings, "CACHE_DIR", "cache"))
        return path


config = Config()


def make_multiplier(seed=None):
    """Return a zero-argument callable drawing integers in [1000, 2000].

    A seed makes the sequence of draws reproducible.
    """
    rng = random.Random(seed)
    return lambda: rng.randint(MULTIPLIER_MIN, MULTIPLIER_MAX)


def get_summary_image_path():
    """Return full path to the summary image in the writable cache."""
    return os.path.join(config.cache_path, "summary.png")


def get_now():
    """Return current UTC datetime (aware)."""
    return datetime.now(timezone.utc)
