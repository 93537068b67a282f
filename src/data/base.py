"""Protocol definitions for the read-only inputs of the tax engine.

Any object satisfying these protocols can back an analysis run; the engine
never mutates them.
"""

from typing import Protocol, Sequence, runtime_checkable

from src.models.property import PropertyRecord, RateEntry


@runtime_checkable
class PropertyStore(Protocol):
    def lookup(self, pin: str) -> PropertyRecord | None:
        """Return the property record for a PIN, or None if unknown."""
        ...


@runtime_checkable
class RateTable(Protocol):
    def entries_for(self, neighborhood_code: str) -> Sequence[RateEntry]:
        """Return all known rate entries for a neighborhood (possibly empty)."""
        ...
