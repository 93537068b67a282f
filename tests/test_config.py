from src.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PIN_LENGTH", raising=False)
        s = Settings(_env_file=None)
        assert s.pin_length == 14
        assert s.max_rate_age_years == 1
        assert s.property_data_path is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PIN_LENGTH", "10")
        assert Settings(_env_file=None).pin_length == 10

    def test_fields(self):
        assert set(Settings.model_fields) == {
            "property_data_path",
            "rate_table_path",
            "pin_length",
            "max_rate_age_years",
            "analysis_max_workers",
            "county_name",
            "log_level",
        }
