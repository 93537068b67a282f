"""Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.models.assessment import AssessmentOverride


# ---- Request schemas ----

class AnalyzeRequest(BaseModel):
    pins: list[str] = Field(..., min_length=1, description="PINs, dashes and spaces allowed")
    assessment_source: AssessmentOverride = AssessmentOverride.AUTO
    analyze_current_taxes: bool = True
    income_approach: bool = False
    as_of_year: int | None = Field(None, description="Flag rates older than this year")


# ---- Response schemas ----

class AssessmentResponse(BaseModel):
    value: Decimal | None = None
    type: str
    source: str


class PropertyResponse(BaseModel):
    pin: str
    address: str
    township: str
    neighborhood_code: str
    board_tot: Decimal | None = None
    certified_tot: Decimal | None = None
    mailed_tot: Decimal | None = None
    equalization_factor: Decimal
    tax_rate_year: int
    tax_rate_value: Decimal


class PinResultResponse(BaseModel):
    pin: str
    found: bool
    property: PropertyResponse | None = None
    assessment: AssessmentResponse
    tax_rate_year: int | None = None
    tax_rate_value: Decimal | None = None
    estimated_tax: Decimal | None = None
    warnings: list[str] = []
    draft_invoice_line_item: str


class InvalidPinResponse(BaseModel):
    raw: str
    error: str


class AnalysisResponse(BaseModel):
    request_id: str
    created_at: datetime
    assessment_source: str
    analyze_current_taxes: bool
    income_approach: bool
    results: list[PinResultResponse]
    invalid_pins: list[InvalidPinResponse] = []


class RateResponse(BaseModel):
    neighborhood_code: str
    year: int
    rate: Decimal
