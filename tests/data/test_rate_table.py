"""Tests for rate table construction, merging and file loading."""

import json
from decimal import Decimal

import pytest

from src.data.rate_table import (
    InMemoryRateTable,
    RateTableError,
    load_rate_table,
    load_year_rates,
)
from src.engine.rates import resolve_rate
from src.models.property import RateEntry


class TestInMemoryRateTable:
    def test_entries_sorted_by_year(self, sample_rates):
        years = [e.year for e in sample_rates.entries_for("12345")]
        assert years == [2022, 2023, 2024]

    def test_unknown_code_empty(self, sample_rates):
        assert sample_rates.entries_for("nope") == ()

    def test_rejects_duplicate_year(self):
        with pytest.raises(RateTableError, match="12345"):
            InMemoryRateTable([
                RateEntry("12345", 2024, Decimal("7.25")),
                RateEntry("12345", 2024, Decimal("7.30")),
            ])

    def test_same_year_different_neighborhoods_ok(self):
        table = InMemoryRateTable([
            RateEntry("1", 2024, Decimal("7")),
            RateEntry("2", 2024, Decimal("8")),
        ])
        assert len(table) == 2
        assert table.neighborhoods() == ["1", "2"]

    def test_counts(self, sample_rates):
        assert len(sample_rates) == 10
        assert len(sample_rates.neighborhoods()) == 6


class TestMergeYear:
    def test_uploaded_rate_replaces_same_year(self, sample_rates):
        merged = sample_rates.merge_year(2024, {"12345": Decimal("7.40")})
        assert resolve_rate("12345", merged).rate == Decimal("7.40")
        # Other years kept
        assert [e.year for e in merged.entries_for("12345")] == [2022, 2023, 2024]

    def test_newer_year_becomes_most_recent(self, sample_rates):
        merged = sample_rates.merge_year(2025, {"33211": Decimal("10.60")})
        entry = resolve_rate("33211", merged)
        assert entry.year == 2025
        assert entry.rate == Decimal("10.60")

    def test_adds_new_neighborhood(self, sample_rates):
        merged = sample_rates.merge_year(2024, {"44444": "6.10"})
        assert resolve_rate("44444", merged).rate == Decimal("6.10")

    def test_original_unchanged(self, sample_rates):
        sample_rates.merge_year(2024, {"12345": Decimal("9.99")})
        assert resolve_rate("12345", sample_rates).rate == Decimal("7.25")


class TestLoadRateTable:
    def test_csv(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text(
            "neighborhood_code,year,rate\n"
            "12345,2023,7.10\n"
            "12345,2024,7.25\n"
            "98765,2024,8.10\n"
        )
        table = load_rate_table(path)
        assert len(table) == 3
        assert resolve_rate("12345", table).rate == Decimal("7.25")

    def test_json(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({
            "12345": [{"year": 2022, "rate": 6.95}, {"year": 2024, "rate": 7.25}],
        }))
        table = load_rate_table(path)
        entry = resolve_rate("12345", table)
        assert entry.year == 2024
        assert entry.rate == Decimal("7.25")

    def test_csv_missing_column(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("code,year,rate\n1,2024,7\n")
        with pytest.raises(RateTableError, match="neighborhood_code"):
            load_rate_table(path)

    def test_csv_bad_number(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("neighborhood_code,year,rate\n1,2024,seven\n")
        with pytest.raises(RateTableError, match=":2"):
            load_rate_table(path)

    def test_duplicate_years_rejected_on_load(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("neighborhood_code,year,rate\n1,2024,7\n1,2024,8\n")
        with pytest.raises(RateTableError):
            load_rate_table(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "rates.pdf"
        path.write_bytes(b"%PDF")
        with pytest.raises(RateTableError):
            load_rate_table(path)

    def test_json_row_not_an_object(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"12345": [7.25]}))
        with pytest.raises(RateTableError, match=r"\[12345\]\[0\]"):
            load_rate_table(path)

    def test_json_rows_not_a_list(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"12345": 7.25}))
        with pytest.raises(RateTableError, match="12345"):
            load_rate_table(path)


class TestLoadYearRates:
    def test_csv(self, tmp_path):
        path = tmp_path / "2025.csv"
        path.write_text("neighborhood_code,rate\n12345,7.40\n44444,6.10\n")
        assert load_year_rates(path) == {"12345": Decimal("7.40"), "44444": Decimal("6.10")}

    def test_json(self, tmp_path):
        path = tmp_path / "2025.json"
        path.write_text(json.dumps({"12345": "7.40"}))
        assert load_year_rates(path) == {"12345": Decimal("7.40")}

    def test_duplicate_neighborhood(self, tmp_path):
        path = tmp_path / "2025.csv"
        path.write_text("neighborhood_code,rate\n12345,7.40\n12345,7.50\n")
        with pytest.raises(RateTableError, match="12345"):
            load_year_rates(path)

    def test_bad_rate(self, tmp_path):
        path = tmp_path / "2025.csv"
        path.write_text("neighborhood_code,rate\n12345,high\n")
        with pytest.raises(RateTableError, match=":2"):
            load_year_rates(path)
