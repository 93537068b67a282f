"""Neighborhood tax rate resolution. Pure function, no I/O."""

from src.data.base import RateTable
from src.models.property import RateEntry


def resolve_rate(neighborhood_code: str, rate_table: RateTable) -> RateEntry | None:
    """Return the most recent rate entry for a neighborhood, or None.

    Ties on year (only possible with a table that skips duplicate checks)
    go to the entry seen last.
    """
    latest: RateEntry | None = None
    for entry in rate_table.entries_for(neighborhood_code):
        if latest is None or entry.year >= latest.year:
            latest = entry
    return latest
