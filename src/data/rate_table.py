"""Neighborhood tax rate table.

Holds every published (neighborhood, year) rate. A neighborhood may have
several years; a given year may appear only once per neighborhood, so the
"most recent rate" is always unambiguous.

File formats:
    CSV:  neighborhood_code,year,rate
    JSON: {"12345": [{"year": 2024, "rate": 7.25}, ...], ...}
"""

import csv
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Mapping

from src.config import settings
from src.data.sample_data import SAMPLE_TAX_RATES
from src.models.property import RateEntry

logger = logging.getLogger(__name__)


class RateTableError(ValueError):
    """Raised for malformed or conflicting rate data."""


class InMemoryRateTable:
    def __init__(self, entries: Iterable[RateEntry] = ()):
        self._by_code: dict[str, list[RateEntry]] = {}
        for entry in entries:
            existing = self._by_code.setdefault(entry.neighborhood_code, [])
            if any(e.year == entry.year for e in existing):
                raise RateTableError(
                    f"Duplicate rate for neighborhood {entry.neighborhood_code} "
                    f"year {entry.year}"
                )
            existing.append(entry)
        for rows in self._by_code.values():
            rows.sort(key=lambda e: e.year)

    @classmethod
    def from_mapping(cls, rates: Mapping[str, Mapping[int, Decimal]]) -> "InMemoryRateTable":
        """Build from {neighborhood_code: {year: rate}}."""
        return cls(
            RateEntry(neighborhood_code=str(code), year=int(year), rate=Decimal(str(rate)))
            for code, by_year in rates.items()
            for year, rate in by_year.items()
        )

    def entries_for(self, neighborhood_code: str) -> tuple[RateEntry, ...]:
        return tuple(self._by_code.get(neighborhood_code, ()))

    def neighborhoods(self) -> list[str]:
        return sorted(self._by_code)

    def all_entries(self) -> list[RateEntry]:
        return [e for code in self.neighborhoods() for e in self._by_code[code]]

    def __len__(self) -> int:
        return sum(len(rows) for rows in self._by_code.values())

    def merge_year(self, year: int, rates: Mapping[str, Decimal]) -> "InMemoryRateTable":
        """Return a new table with one year's uploaded rates applied.

        Uploaded rates replace any existing entry for the same neighborhood
        and year; all other entries are kept. The original table is unchanged.
        """
        replaced = {str(code) for code in rates}
        kept = [
            e for e in self.all_entries()
            if not (e.year == year and e.neighborhood_code in replaced)
        ]
        uploaded = [
            RateEntry(neighborhood_code=str(code), year=year, rate=Decimal(str(rate)))
            for code, rate in rates.items()
        ]
        logger.info("Merged %d uploaded rates for %d", len(uploaded), year)
        return InMemoryRateTable(kept + uploaded)


def _parse_entry(code, year, rate, where: str) -> RateEntry:
    try:
        return RateEntry(
            neighborhood_code=str(code).strip(),
            year=int(year),
            rate=Decimal(str(rate).strip()),
        )
    except (ValueError, TypeError, InvalidOperation) as e:
        raise RateTableError(f"Invalid rate row at {where}: {code!r}, {year!r}, {rate!r}") from e


def _load_csv(path: Path) -> list[RateEntry]:
    entries = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = {"neighborhood_code", "year", "rate"} - set(reader.fieldnames or ())
        if missing:
            raise RateTableError(f"{path} is missing columns: {sorted(missing)}")
        for line_no, row in enumerate(reader, start=2):
            entries.append(
                _parse_entry(row["neighborhood_code"], row["year"], row["rate"], f"{path}:{line_no}")
            )
    return entries


def _load_json(path: Path) -> list[RateEntry]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise RateTableError(f"{path} must contain an object keyed by neighborhood code")
    entries = []
    for code, rows in data.items():
        if not isinstance(rows, list):
            raise RateTableError(f"Invalid rate rows at {path}[{code}]: expected a list")
        for i, row in enumerate(rows):
            where = f"{path}[{code}][{i}]"
            if not isinstance(row, Mapping):
                raise RateTableError(f"Invalid rate row at {where}: {row!r}")
            entries.append(_parse_entry(code, row.get("year"), row.get("rate"), where))
    return entries


def load_year_rates(path: str | Path) -> dict[str, Decimal]:
    """Load one year's uploaded rates as {neighborhood_code: rate}.

    CSV:  neighborhood_code,rate
    JSON: {"12345": 7.40, ...}
    """
    path = Path(path)
    suffix = path.suffix.lower()
    rows: list[tuple[object, object, str]] = []
    if suffix == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = {"neighborhood_code", "rate"} - set(reader.fieldnames or ())
            if missing:
                raise RateTableError(f"{path} is missing columns: {sorted(missing)}")
            for line_no, row in enumerate(reader, start=2):
                rows.append((row["neighborhood_code"], row["rate"], f"{path}:{line_no}"))
    elif suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise RateTableError(f"{path} must contain an object keyed by neighborhood code")
        rows = [(code, rate, f"{path}[{code}]") for code, rate in data.items()]
    else:
        raise RateTableError(f"Unsupported rate file type: {path.suffix}")

    rates: dict[str, Decimal] = {}
    for code, rate, where in rows:
        code = str(code).strip()
        if code in rates:
            raise RateTableError(f"Duplicate uploaded rate for neighborhood {code} at {where}")
        try:
            rates[code] = Decimal(str(rate).strip())
        except InvalidOperation as e:
            raise RateTableError(f"Invalid rate row at {where}: {code!r}, {rate!r}") from e
    return rates


def load_rate_table(path: str | Path) -> InMemoryRateTable:
    """Load a rate table from a .csv or .json file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        entries = _load_csv(path)
    elif suffix == ".json":
        entries = _load_json(path)
    else:
        raise RateTableError(f"Unsupported rate file type: {path.suffix}")

    table = InMemoryRateTable(entries)
    logger.info("Loaded %d rates for %d neighborhoods from %s", len(table), len(table.neighborhoods()), path)
    return table


def default_rate_table() -> InMemoryRateTable:
    """Configured rate file if set, otherwise the sample rates."""
    if settings.rate_table_path:
        return load_rate_table(settings.rate_table_path)
    return InMemoryRateTable.from_mapping(SAMPLE_TAX_RATES)
