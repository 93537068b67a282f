"""Tax rate lookup routes."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_rate_table
from src.api.schemas import RateResponse
from src.data.base import RateTable
from src.engine.rates import resolve_rate

router = APIRouter(prefix="/api/v1/rates", tags=["rates"])


@router.get("/{neighborhood_code}", response_model=RateResponse)
async def get_rate(neighborhood_code: str, rate_table: RateTable = Depends(get_rate_table)):
    """Most recent published rate for a neighborhood code."""
    entry = resolve_rate(neighborhood_code, rate_table)
    if entry is None:
        raise HTTPException(
            status_code=404, detail=f"No tax rate for neighborhood {neighborhood_code}"
        )
    return RateResponse(neighborhood_code=entry.neighborhood_code, year=entry.year, rate=entry.rate)
