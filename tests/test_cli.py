import json
from decimal import Decimal

import pytest

from src.cli import main
from tests.factories import ALL_PRESENT_PIN, UNKNOWN_PIN


class TestCli:
    def test_summary(self, capsys):
        assert main(["12-34-567-890-1234", UNKNOWN_PIN]) == 0
        out = capsys.readouterr().out
        assert "Request ID:" in out
        assert "$26,100.00" in out
        assert "Not found" in out

    def test_json_export(self, capsys):
        main([ALL_PRESENT_PIN, "--source", "mailed", "--export", "json"])
        data = json.loads(capsys.readouterr().out)
        assert data["assessment_source_override"] == "mailed"
        assert data["results"][0]["assessment_type_selected"] == "Mailed"

    def test_invalid_pins_skipped(self, capsys):
        main([ALL_PRESENT_PIN, "abc"])
        captured = capsys.readouterr()
        assert "Skipping 'abc'" in captured.err

    def test_no_valid_pins_exits(self):
        with pytest.raises(SystemExit):
            main(["123"])

    def test_rate_file(self, tmp_path, capsys):
        path = tmp_path / "rates.csv"
        path.write_text("neighborhood_code,year,rate\n12345,2025,8.00\n")
        main([ALL_PRESENT_PIN, "--rates", str(path), "--export", "csv"])
        out = capsys.readouterr().out
        assert '"2025"' in out
        assert '"8.00"' in out

    def test_uploaded_rates_applied(self, tmp_path, capsys):
        path = tmp_path / "2024.csv"
        path.write_text("neighborhood_code,rate\n12345,7.40\n")
        main([ALL_PRESENT_PIN, "--upload-rates", "2024", str(path), "--export", "json"])
        result = json.loads(capsys.readouterr().out)["results"][0]
        assert result["tax_rate_year"] == 2024
        assert Decimal(result["tax_rate_value"]) == Decimal("7.40")
        assert Decimal(result["estimated_taxes"]) == Decimal("26640")

    def test_uploaded_rates_newer_year(self, tmp_path, capsys):
        path = tmp_path / "2025.json"
        path.write_text(json.dumps({"12345": "7.60"}))
        main([ALL_PRESENT_PIN, "--upload-rates", "2025", str(path), "--export", "json"])
        result = json.loads(capsys.readouterr().out)["results"][0]
        assert result["tax_rate_year"] == 2025

    def test_upload_year_must_be_numeric(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("neighborhood_code,rate\n12345,7.40\n")
        with pytest.raises(SystemExit):
            main([ALL_PRESENT_PIN, "--upload-rates", "next", str(path)])
