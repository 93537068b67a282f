"""Assessment source types and the selector's result record."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class AssessmentSource(Enum):
    BOARD = "board"
    CERTIFIED = "certified"
    MAILED = "mailed"
    NONE = "none"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[AssessmentSource, str] = {
    AssessmentSource.BOARD: "Board",
    AssessmentSource.CERTIFIED: "Certified",
    AssessmentSource.MAILED: "Mailed",
    AssessmentSource.NONE: "None",
}


class AssessmentOverride(Enum):
    BOARD = "board"
    CERTIFIED = "certified"
    MAILED = "mailed"
    AUTO = "auto"


@dataclass(frozen=True)
class AssessmentResult:
    value: Decimal | None
    source: AssessmentSource

    def __post_init__(self):
        if self.source is AssessmentSource.NONE and self.value is not None:
            raise ValueError("An assessment with source NONE cannot carry a value")

    @property
    def label(self) -> str:
        return self.source.label


NO_ASSESSMENT = AssessmentResult(value=None, source=AssessmentSource.NONE)
