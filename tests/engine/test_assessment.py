"""Unit tests for assessment source selection."""

from decimal import Decimal

import pytest

from src.engine.assessment import InvalidOverrideError, parse_override, select_assessment
from src.models.assessment import AssessmentOverride, AssessmentResult, AssessmentSource
from tests.factories import make_property


class TestAutoSelection:
    def test_board_wins_when_present(self):
        prop = make_property()
        result = select_assessment(prop)
        assert result.source == AssessmentSource.BOARD
        assert result.label == "Board"
        assert result.value == Decimal("120000")

    def test_board_wins_even_if_lower(self):
        """Precedence is by source, not by value."""
        prop = make_property(board=Decimal("1"), certified=Decimal("999999"))
        assert select_assessment(prop).source == AssessmentSource.BOARD

    def test_board_of_zero_is_present(self):
        prop = make_property(board=Decimal("0"))
        result = select_assessment(prop)
        assert result.source == AssessmentSource.BOARD
        assert result.value == Decimal("0")

    def test_certified_when_board_missing(self):
        prop = make_property(board=None)
        result = select_assessment(prop, AssessmentOverride.AUTO)
        assert result.source == AssessmentSource.CERTIFIED
        assert result.value == Decimal("110000")

    def test_mailed_when_only_mailed(self):
        prop = make_property(board=None, certified=None)
        result = select_assessment(prop)
        assert result.source == AssessmentSource.MAILED
        assert result.label == "Mailed"
        assert result.value == Decimal("100000")

    def test_none_when_all_missing(self):
        prop = make_property(board=None, certified=None, mailed=None)
        result = select_assessment(prop)
        assert result.source == AssessmentSource.NONE
        assert result.label == "None"
        assert result.value is None

    def test_deterministic(self):
        prop = make_property(board=None)
        assert select_assessment(prop) == select_assessment(prop)


class TestExplicitOverride:
    @pytest.mark.parametrize("override,source,value", [
        (AssessmentOverride.BOARD, AssessmentSource.BOARD, Decimal("120000")),
        (AssessmentOverride.CERTIFIED, AssessmentSource.CERTIFIED, Decimal("110000")),
        (AssessmentOverride.MAILED, AssessmentSource.MAILED, Decimal("100000")),
    ])
    def test_returns_named_source(self, override, source, value):
        result = select_assessment(make_property(), override)
        assert result.source == source
        assert result.value == value

    def test_missing_source_does_not_fall_back(self):
        """Explicit certified with no certified value stays certified/None."""
        prop = make_property(certified=None)
        result = select_assessment(prop, AssessmentOverride.CERTIFIED)
        assert result.source == AssessmentSource.CERTIFIED
        assert result.label == "Certified"
        assert result.value is None

    def test_board_override_when_board_missing(self):
        prop = make_property(board=None)
        result = select_assessment(prop, AssessmentOverride.BOARD)
        assert result.source == AssessmentSource.BOARD
        assert result.value is None

    def test_string_override_accepted(self):
        result = select_assessment(make_property(), "Mailed")
        assert result.source == AssessmentSource.MAILED


class TestInvalidOverride:
    @pytest.mark.parametrize("bad", ["assessor", "", "none", 3, None])
    def test_rejected(self, bad):
        with pytest.raises(InvalidOverrideError):
            select_assessment(make_property(), bad)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_override("latest")


class TestAssessmentResult:
    def test_none_source_cannot_hold_value(self):
        with pytest.raises(ValueError):
            AssessmentResult(value=Decimal("5"), source=AssessmentSource.NONE)

    def test_label_tracks_source(self):
        for source in AssessmentSource:
            assert AssessmentResult(value=None, source=source).label == source.label
