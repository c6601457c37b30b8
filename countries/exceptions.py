"""Errors raised by the country refresh pipeline.

Only ``RefreshError`` subclasses leave ``countries.refresh``; ``FetchError``
and ``StoreError`` are raised by the components and translated there.
"""


class FetchError(Exception):
    """An upstream source timed out, answered non-2xx, or sent garbage."""

    def __init__(self, source, detail):
        self.source = source
        self.detail = detail
        super().__init__(f"{source}: {detail}")


class StoreError(Exception):
    """The database rejected or could not complete a batch write."""


class RefreshError(Exception):
    """Base class for errors reported to callers of a refresh."""


class SourceUnavailable(RefreshError):
    def __init__(self, source, detail=""):
        self.source = source
        self.detail = detail
        super().__init__(f"{source} source unavailable")


class PersistenceFailure(RefreshError):
    def __init__(self):
        super().__init__("internal error")
