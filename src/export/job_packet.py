"""Job packet export: CSV/JSON rows and a plain-text analysis report.

Every absent value is written as "N/A", never as zero or blank, so downstream
readers can tell a missing assessment from a zero one.
"""

import csv
import io
import json
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Sequence

from src.config import settings
from src.models.results import AnalysisOptions, AnalysisResult, AnalysisSession

NOT_AVAILABLE = "N/A"
EXPORT_VERSION = "1.0"
TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def format_currency(value: Decimal | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"${value.quantize(TWO_PLACES, ROUND_HALF_UP):,}"


def format_percent(value: Decimal | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value.quantize(FOUR_PLACES, ROUND_HALF_UP)}%"


def _or_na(value: Any) -> Any:
    return NOT_AVAILABLE if value is None else value


def build_export_rows(
    results: Sequence[AnalysisResult],
    session: AnalysisSession,
    options: AnalysisOptions,
) -> list[dict[str, Any]]:
    """One flat row per result, in result order."""
    created_at = session.created_at.isoformat()
    rows = []
    for r in results:
        p = r.property
        rows.append({
            "request_id": session.request_id,
            "created_at": created_at,
            "pin": r.pin,
            "analyze_current_taxes": options.analyze_current_taxes,
            "income_approach": options.income_approach,
            "assessment_source_override": options.assessment_override.value,
            "address": p.address if p else NOT_AVAILABLE,
            "township": p.township if p else NOT_AVAILABLE,
            "neighborhood_code": p.neighborhood_code if p else NOT_AVAILABLE,
            "assessment_selected": _or_na(r.assessment.value),
            "assessment_type_selected": r.assessment.label,
            "board_tot": _or_na(p.board_tot) if p else NOT_AVAILABLE,
            "certified_tot": _or_na(p.certified_tot) if p else NOT_AVAILABLE,
            "mailed_tot": _or_na(p.mailed_tot) if p else NOT_AVAILABLE,
            "tax_rate_year": _or_na(r.tax_rate_year),
            "tax_rate_value": _or_na(r.tax_rate_value),
            "equalization_factor": p.equalization_factor if p else NOT_AVAILABLE,
            "estimated_taxes": _or_na(r.estimated_tax),
            "warnings": "; ".join(r.warnings),
            "draft_invoice_line_item": r.draft_invoice_line_item,
            "data_found": r.found,
        })
    return rows


def export_csv(rows: Sequence[dict[str, Any]]) -> str:
    """Render rows as CSV with every field quoted. Empty input → empty string."""
    if not rows:
        return ""
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf, fieldnames=list(rows[0]), quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    writer.writeheader()
    writer.writerows(rows)
    return buf.getvalue()


def export_json(
    results: Sequence[AnalysisResult],
    session: AnalysisSession,
    options: AnalysisOptions,
) -> str:
    payload = {
        "request_id": session.request_id,
        "created_at": session.created_at.isoformat(),
        "export_version": EXPORT_VERSION,
        "analyze_current_taxes": options.analyze_current_taxes,
        "income_approach": options.income_approach,
        "assessment_source_override": options.assessment_override.value,
        "results": build_export_rows(results, session, options),
    }
    return json.dumps(payload, indent=2, default=str)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _narrative(r: AnalysisResult, income_approach: bool) -> str:
    p = r.property
    text = (
        f"The property located at {p.address} (PINs: {r.pin}) is located in "
        f"{p.township} township and is currently assessed at "
        f"{format_currency(r.assessment.value)}, which equates to estimated taxes of "
        f"{format_currency(r.estimated_tax)}."
    )
    if income_approach:
        text += " An income approach analysis has been flagged for this property."
    return text


def render_text_report(
    results: Sequence[AnalysisResult],
    session: AnalysisSession,
    options: AnalysisOptions,
) -> str:
    """Plain-text analysis report covering the PINs that were found."""
    lines = [
        "Property Tax Analysis Report",
        f"Request ID: {session.request_id} | Generated: {session.created_at:%Y-%m-%d %H:%M UTC}"
        f" | {settings.county_name}",
        "",
    ]

    for r in results:
        if not r.found or r.property is None:
            continue
        p = r.property
        lines += [
            p.address,
            "-" * len(p.address),
            _narrative(r, options.income_approach),
            "",
            f"  PIN:                    {r.pin}",
            f"  Township:               {p.township}",
            f"  Neighborhood Code:      {p.neighborhood_code}",
            f"  Board Assessment:       {format_currency(p.board_tot)}",
            f"  Certified Assessment:   {format_currency(p.certified_tot)}",
            f"  Mailed Assessment:      {format_currency(p.mailed_tot)}",
            f"  Selected Assessment:    {format_currency(r.assessment.value)} ({r.assessment.label})",
            f"  Tax Rate Year:          {_or_na(r.tax_rate_year)}",
            f"  Tax Rate:               {format_percent(r.tax_rate_value)}",
            f"  Equalization Factor:    {p.equalization_factor.quantize(FOUR_PLACES)}",
            f"  Estimated Annual Taxes: {format_currency(r.estimated_tax)}",
        ]
        if r.warnings:
            lines.append(f"  Warnings:               {'; '.join(r.warnings)}")
        lines.append("")

    missing = [r.pin for r in results if not r.found]
    if missing:
        lines.append(f"PINs not found: {', '.join(missing)}")
        lines.append("")

    lines.append(
        f"Request ID: {session.request_id} | "
        f"Analyze Current Taxes: {_yes_no(options.analyze_current_taxes)} | "
        f"Income Approach: {_yes_no(options.income_approach)}"
    )
    return "\n".join(lines) + "\n"
