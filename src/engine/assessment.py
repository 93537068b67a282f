"""Assessment selection.

Pure function: property record in, AssessmentResult out. No I/O.
"""

from decimal import Decimal
from typing import Callable

from src.models.assessment import (
    AssessmentOverride,
    AssessmentResult,
    AssessmentSource,
    NO_ASSESSMENT,
)
from src.models.property import PropertyRecord


class InvalidOverrideError(ValueError):
    """Raised when an assessment override is not one of the four known values."""


_GETTERS: dict[AssessmentSource, Callable[[PropertyRecord], Decimal | None]] = {
    AssessmentSource.BOARD: lambda p: p.board_tot,
    AssessmentSource.CERTIFIED: lambda p: p.certified_tot,
    AssessmentSource.MAILED: lambda p: p.mailed_tot,
}

# Auto-selection order: first present value wins.
PRECEDENCE: tuple[AssessmentSource, ...] = (
    AssessmentSource.BOARD,
    AssessmentSource.CERTIFIED,
    AssessmentSource.MAILED,
)

_OVERRIDE_SOURCES: dict[AssessmentOverride, AssessmentSource] = {
    AssessmentOverride.BOARD: AssessmentSource.BOARD,
    AssessmentOverride.CERTIFIED: AssessmentSource.CERTIFIED,
    AssessmentOverride.MAILED: AssessmentSource.MAILED,
}


def parse_override(override: AssessmentOverride | str) -> AssessmentOverride:
    """Accept an AssessmentOverride or its string value (case-insensitive)."""
    if isinstance(override, AssessmentOverride):
        return override
    if isinstance(override, str):
        try:
            return AssessmentOverride(override.strip().lower())
        except ValueError:
            pass
    valid = [o.value for o in AssessmentOverride]
    raise InvalidOverrideError(
        f"Unknown assessment override {override!r}. Available: {valid}"
    )


def select_assessment(
    prop: PropertyRecord,
    override: AssessmentOverride | str = AssessmentOverride.AUTO,
) -> AssessmentResult:
    """Pick the assessment value to tax and record where it came from.

    An explicit override returns that source's stored value as-is, even when
    it is missing; it never falls back to another source. AUTO walks
    PRECEDENCE and returns the first present value.
    """
    override = parse_override(override)

    if override is not AssessmentOverride.AUTO:
        source = _OVERRIDE_SOURCES[override]
        return AssessmentResult(value=_GETTERS[source](prop), source=source)

    for source in PRECEDENCE:
        value = _GETTERS[source](prop)
        if value is not None:
            return AssessmentResult(value=value, source=source)

    return NO_ASSESSMENT
