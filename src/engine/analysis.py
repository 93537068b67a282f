"""PIN analysis orchestrator.

Flow per PIN: property lookup → assessment selection → rate resolution →
warnings → tax estimate → draft invoice line item.

Every PIN yields exactly one AnalysisResult. Missing data becomes warnings
or None fields; only an invalid assessment override raises.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from src.config import settings
from src.data.base import PropertyStore, RateTable
from src.engine.assessment import parse_override, select_assessment
from src.engine.property_tax import compute_tax
from src.engine.rates import resolve_rate
from src.models.assessment import AssessmentOverride, NO_ASSESSMENT
from src.models.results import AnalysisOptions, AnalysisResult, AnalysisSession

logger = logging.getLogger(__name__)

PIN_NOT_FOUND_WARNING = "No data found for this PIN in the current dataset."
NO_ASSESSMENT_WARNING = (
    "No assessment value available (board, certified, and mailed assessments all missing)."
)
NO_BOARD_WARNING = "Board of Review assessment not available."
NO_CERTIFIED_WARNING = "Certified assessment not available."

DRAFT_INVOICE_TEMPLATE = "Property Tax Estimate – PIN(s) {pin} – Fee $___"


def rate_fallback_warning(neighborhood_code: str) -> str:
    return (
        f"No tax rate found for neighborhood {neighborhood_code} in central lookup. "
        f"Fell back to the rate stored with the property record."
    )


def stale_rate_warning(rate_year: int, as_of_year: int) -> str:
    return (
        f"Tax rate year {rate_year} may be out of date for {as_of_year}; "
        f"verify against the latest published rates."
    )


def draft_invoice_line_item(pin: str) -> str:
    """Billing template; the fee is left blank for manual completion."""
    return DRAFT_INVOICE_TEMPLATE.format(pin=pin)


def _resolve_override(
    override: AssessmentOverride | str | None,
    options: AnalysisOptions | None,
) -> AssessmentOverride:
    if override is None:
        override = options.assessment_override if options is not None else AssessmentOverride.AUTO
    return parse_override(override)


def analyze_pin(
    pin: str,
    store: PropertyStore,
    rate_table: RateTable,
    override: AssessmentOverride | str | None = None,
    options: AnalysisOptions | None = None,
) -> AnalysisResult:
    """Analyze one PIN against the store and rate table.

    override defaults to options.assessment_override, then AUTO.
    """
    override = _resolve_override(override, options)

    prop = store.lookup(pin)
    if prop is None:
        logger.info("PIN %s not found in property store", pin)
        return AnalysisResult(
            pin=pin,
            property=None,
            found=False,
            assessment=NO_ASSESSMENT,
            warnings=(PIN_NOT_FOUND_WARNING,),
            draft_invoice_line_item=draft_invoice_line_item(pin),
        )

    assessment = select_assessment(prop, override)
    warnings: list[str] = []

    rate_entry = resolve_rate(prop.neighborhood_code, rate_table)
    if rate_entry is not None:
        rate_year, rate_value = rate_entry.year, rate_entry.rate
    else:
        logger.warning(
            "No rate for neighborhood %s (PIN %s), using record rate %s (%s)",
            prop.neighborhood_code, pin, prop.tax_rate_value, prop.tax_rate_year,
        )
        rate_year, rate_value = prop.tax_rate_year, prop.tax_rate_value
        warnings.append(rate_fallback_warning(prop.neighborhood_code))

    if assessment.value is None:
        warnings.append(NO_ASSESSMENT_WARNING)
    if prop.board_tot is None:
        warnings.append(NO_BOARD_WARNING)
    # Mailed is not checked here
    if prop.certified_tot is None and prop.board_tot is None:
        warnings.append(NO_CERTIFIED_WARNING)

    if options is not None and options.as_of_year is not None:
        if rate_year < options.as_of_year - settings.max_rate_age_years:
            warnings.append(stale_rate_warning(rate_year, options.as_of_year))

    estimated_tax = None
    if assessment.value is not None:
        estimated_tax = compute_tax(rate_value, prop.equalization_factor, assessment.value)

    return AnalysisResult(
        pin=pin,
        property=prop,
        found=True,
        assessment=assessment,
        tax_rate_year=rate_year,
        tax_rate_value=rate_value,
        estimated_tax=estimated_tax,
        warnings=tuple(warnings),
        draft_invoice_line_item=draft_invoice_line_item(pin),
    )


def analyze_batch(
    pins: Sequence[str],
    store: PropertyStore,
    rate_table: RateTable,
    override: AssessmentOverride | str | None = None,
    options: AnalysisOptions | None = None,
    max_workers: int | None = None,
    session: AnalysisSession | None = None,
) -> list[AnalysisResult]:
    """Analyze PINs independently, one result per input in input order.

    Duplicates are analyzed again rather than deduplicated. With
    max_workers > 1 the PINs are spread over a thread pool. The session, when
    given, tags the batch log lines with its request id.
    """
    override = _resolve_override(override, options)
    workers = max_workers if max_workers is not None else settings.analysis_max_workers

    def _one(pin: str) -> AnalysisResult:
        return analyze_pin(pin, store, rate_table, override, options)

    if workers <= 1 or len(pins) <= 1:
        results = [_one(pin) for pin in pins]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_one, pins))

    request_id = session.request_id if session is not None else "-"
    logger.info(
        "Request %s: analyzed %d PINs (%d found)",
        request_id, len(results), sum(1 for r in results if r.found),
    )
    return results
