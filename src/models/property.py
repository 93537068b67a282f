from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PropertyRecord:
    pin: str
    address: str
    township: str
    neighborhood_code: str

    # Assessments (None = not available from that source)
    board_tot: Decimal | None
    certified_tot: Decimal | None
    mailed_tot: Decimal | None

    equalization_factor: Decimal

    # Rate stored with the record; used when the rate table has no entry
    tax_rate_year: int
    tax_rate_value: Decimal

    def __post_init__(self):
        for name in ("board_tot", "certified_tot", "mailed_tot"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.equalization_factor <= 0:
            raise ValueError(
                f"equalization_factor must be positive, got {self.equalization_factor}"
            )


@dataclass(frozen=True)
class RateEntry:
    neighborhood_code: str
    year: int
    rate: Decimal  # Percent: 7.25 = 7.25%
