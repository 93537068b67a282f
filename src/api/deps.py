"""FastAPI dependency injection."""

from functools import lru_cache

from src.data.base import PropertyStore, RateTable
from src.data.property_store import default_property_store
from src.data.rate_table import default_rate_table


@lru_cache
def get_property_store() -> PropertyStore:
    return default_property_store()


@lru_cache
def get_rate_table() -> RateTable:
    return default_rate_table()
