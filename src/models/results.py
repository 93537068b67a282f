import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from src.models.assessment import AssessmentOverride, AssessmentResult
from src.models.property import PropertyRecord


@dataclass(frozen=True)
class AnalysisOptions:
    assessment_override: AssessmentOverride = AssessmentOverride.AUTO
    analyze_current_taxes: bool = True
    income_approach: bool = False  # Flag only; no capitalization is performed
    as_of_year: int | None = None  # Enables the stale-rate warning


@dataclass(frozen=True)
class AnalysisSession:
    """Identifies one analysis session; passed explicitly to every consumer."""

    request_id: str
    created_at: datetime


def new_session() -> AnalysisSession:
    return AnalysisSession(
        request_id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc),
    )


@dataclass(frozen=True)
class AnalysisResult:
    pin: str
    property: PropertyRecord | None
    found: bool
    assessment: AssessmentResult

    # Rate actually applied (table entry or the record's fallback)
    tax_rate_year: int | None = None
    tax_rate_value: Decimal | None = None

    estimated_tax: Decimal | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    draft_invoice_line_item: str = ""
