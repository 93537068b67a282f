"""Canonical test fixtures used across engine, data and API tests.

Fixture dataset: the bundled six-property sample plus its neighborhood rates.
Neighborhood 12345: 2022 6.95%, 2023 7.10%, 2024 7.25%.
"""

import pytest

from src.data.property_store import InMemoryPropertyStore, property_from_dict
from src.data.rate_table import InMemoryRateTable
from src.data.sample_data import SAMPLE_PROPERTIES, SAMPLE_TAX_RATES


@pytest.fixture
def sample_store() -> InMemoryPropertyStore:
    return InMemoryPropertyStore(property_from_dict(row) for row in SAMPLE_PROPERTIES.values())


@pytest.fixture
def sample_rates() -> InMemoryRateTable:
    return InMemoryRateTable.from_mapping(SAMPLE_TAX_RATES)


@pytest.fixture
def empty_rates() -> InMemoryRateTable:
    return InMemoryRateTable()
