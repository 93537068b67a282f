"""Property record store backed by an in-memory mapping.

Records can come from the bundled sample dataset or from a JSON file,
either an object keyed by PIN or a list of records.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Mapping

from src.config import settings
from src.data.sample_data import SAMPLE_PROPERTIES
from src.models.property import PropertyRecord

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = (
    "pin",
    "address",
    "township",
    "neighborhood_code",
    "equalization_factor",
    "tax_rate_year",
    "tax_rate_value",
)


def _optional_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return Decimal(str(value))


def property_from_dict(raw: Mapping[str, Any]) -> PropertyRecord:
    """Build a PropertyRecord from a plain dict (JSON row or sample entry)."""
    missing = [f for f in _REQUIRED_FIELDS if f not in raw]
    if missing:
        raise ValueError(f"Property record is missing fields: {missing}")
    try:
        return PropertyRecord(
            pin=str(raw["pin"]),
            address=str(raw["address"]),
            township=str(raw["township"]),
            neighborhood_code=str(raw["neighborhood_code"]),
            board_tot=_optional_decimal(raw.get("board_tot")),
            certified_tot=_optional_decimal(raw.get("certified_tot")),
            mailed_tot=_optional_decimal(raw.get("mailed_tot")),
            equalization_factor=Decimal(str(raw["equalization_factor"])),
            tax_rate_year=int(raw["tax_rate_year"]),
            tax_rate_value=Decimal(str(raw["tax_rate_value"])),
        )
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid number in property record {raw.get('pin')!r}") from e


class InMemoryPropertyStore:
    """Read-only PIN → PropertyRecord lookup. Copies its input on construction."""

    def __init__(self, records: Iterable[PropertyRecord] | Mapping[str, PropertyRecord]):
        if isinstance(records, Mapping):
            self._records = dict(records)
        else:
            self._records = {r.pin: r for r in records}

    def lookup(self, pin: str) -> PropertyRecord | None:
        return self._records.get(pin)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, pin: object) -> bool:
        return pin in self._records

    @property
    def pins(self) -> list[str]:
        return list(self._records)


def load_property_store(path: str | Path) -> InMemoryPropertyStore:
    """Load property records from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        for pin, row in data.items():
            if not isinstance(row, Mapping):
                raise ValueError(f"Property record for PIN {pin!r} in {path} is not an object")
        rows = [{"pin": pin, **row} for pin, row in data.items()]
    elif isinstance(data, list):
        for i, row in enumerate(data):
            if not isinstance(row, Mapping):
                raise ValueError(f"Property record at {path}[{i}] is not an object")
        rows = data
    else:
        raise ValueError(f"Unsupported property file layout in {path}")

    records = [property_from_dict(row) for row in rows]
    logger.info("Loaded %d property records from %s", len(records), path)
    return InMemoryPropertyStore(records)


def default_property_store() -> InMemoryPropertyStore:
    """Configured property file if set, otherwise the sample dataset."""
    if settings.property_data_path:
        return load_property_store(settings.property_data_path)
    return InMemoryPropertyStore(property_from_dict(row) for row in SAMPLE_PROPERTIES.values())
