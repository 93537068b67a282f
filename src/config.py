from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Data sources (unset = bundled sample dataset)
    property_data_path: str | None = None
    rate_table_path: str | None = None

    # PIN input
    pin_length: int = 14

    # Analysis
    max_rate_age_years: int = 1  # Rates older than as_of_year - this are flagged stale
    analysis_max_workers: int = 1

    # Reports
    county_name: str = "Cook County, Illinois"

    # App
    log_level: str = "INFO"


settings = Settings()
