from decimal import Decimal

from src.data.rate_table import InMemoryRateTable
from src.engine.rates import resolve_rate
from src.models.property import RateEntry


class _ListRateTable:
    """Duck-typed table that allows duplicate years (no load-time checks)."""

    def __init__(self, entries):
        self._entries = entries

    def entries_for(self, neighborhood_code):
        return [e for e in self._entries if e.neighborhood_code == neighborhood_code]


class TestResolveRate:
    def test_most_recent_year(self, sample_rates):
        entry = resolve_rate("12345", sample_rates)
        assert entry.year == 2024
        assert entry.rate == Decimal("7.25")

    def test_unsorted_input(self):
        table = InMemoryRateTable([
            RateEntry("1", 2024, Decimal("3")),
            RateEntry("1", 2020, Decimal("1")),
            RateEntry("1", 2022, Decimal("2")),
        ])
        assert resolve_rate("1", table).year == 2024

    def test_unknown_code_returns_none(self, sample_rates):
        assert resolve_rate("00000", sample_rates) is None

    def test_empty_table(self, empty_rates):
        assert resolve_rate("12345", empty_rates) is None

    def test_ignores_other_neighborhoods(self, sample_rates):
        entry = resolve_rate("33211", sample_rates)
        assert entry.neighborhood_code == "33211"
        assert entry.year == 2023
        assert entry.rate == Decimal("10.25")

    def test_duplicate_year_last_wins(self):
        table = _ListRateTable([
            RateEntry("1", 2024, Decimal("5.00")),
            RateEntry("1", 2024, Decimal("6.00")),
            RateEntry("1", 2023, Decimal("9.00")),
        ])
        assert resolve_rate("1", table).rate == Decimal("6.00")
