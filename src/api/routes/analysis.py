"""Analysis routes: the primary API entry point."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response

from src.api.deps import get_property_store, get_rate_table
from src.api.schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    AssessmentResponse,
    InvalidPinResponse,
    PinResultResponse,
    PropertyResponse,
)
from src.data.base import PropertyStore, RateTable
from src.data.pins import validate_pin
from src.engine.analysis import analyze_batch
from src.export.job_packet import build_export_rows, export_csv, export_json
from src.models.results import AnalysisOptions, AnalysisResult, AnalysisSession, new_session

router = APIRouter(prefix="/api/v1", tags=["analysis"])


def _result_to_response(result: AnalysisResult) -> PinResultResponse:
    """Convert engine AnalysisResult to API response."""
    prop_resp = None
    p = result.property
    if p is not None:
        prop_resp = PropertyResponse(
            pin=p.pin,
            address=p.address,
            township=p.township,
            neighborhood_code=p.neighborhood_code,
            board_tot=p.board_tot,
            certified_tot=p.certified_tot,
            mailed_tot=p.mailed_tot,
            equalization_factor=p.equalization_factor,
            tax_rate_year=p.tax_rate_year,
            tax_rate_value=p.tax_rate_value,
        )

    return PinResultResponse(
        pin=result.pin,
        found=result.found,
        property=prop_resp,
        assessment=AssessmentResponse(
            value=result.assessment.value,
            type=result.assessment.label,
            source=result.assessment.source.value,
        ),
        tax_rate_year=result.tax_rate_year,
        tax_rate_value=result.tax_rate_value,
        estimated_tax=result.estimated_tax,
        warnings=list(result.warnings),
        draft_invoice_line_item=result.draft_invoice_line_item,
    )


def _run_analysis(
    req: AnalyzeRequest, store: PropertyStore, rate_table: RateTable
) -> tuple[AnalysisSession, AnalysisOptions, list[AnalysisResult], list[InvalidPinResponse]]:
    checked = [validate_pin(raw) for raw in req.pins]
    valid = [p.normalized for p in checked if p.valid]
    invalid = [InvalidPinResponse(raw=p.raw, error=p.error) for p in checked if not p.valid]
    if not valid:
        raise HTTPException(status_code=400, detail="No valid PINs provided")

    session = new_session()
    options = AnalysisOptions(
        assessment_override=req.assessment_source,
        analyze_current_taxes=req.analyze_current_taxes,
        income_approach=req.income_approach,
        as_of_year=req.as_of_year,
    )
    results = analyze_batch(valid, store, rate_table, options=options, session=session)
    return session, options, results, invalid


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(
    req: AnalyzeRequest,
    store: PropertyStore = Depends(get_property_store),
    rate_table: RateTable = Depends(get_rate_table),
):
    """PIN list → one analysis result per valid PIN, in request order.

    Invalid PINs are skipped and reported back in invalid_pins.
    """
    session, options, results, invalid = _run_analysis(req, store, rate_table)

    return AnalysisResponse(
        request_id=session.request_id,
        created_at=session.created_at,
        assessment_source=options.assessment_override.value,
        analyze_current_taxes=options.analyze_current_taxes,
        income_approach=options.income_approach,
        results=[_result_to_response(r) for r in results],
        invalid_pins=invalid,
    )


@router.post("/analyze/export")
async def analyze_export(
    req: AnalyzeRequest,
    format: Literal["csv", "json"] = "csv",
    store: PropertyStore = Depends(get_property_store),
    rate_table: RateTable = Depends(get_rate_table),
):
    """Job packet for the same analysis, stamped with its session."""
    session, options, results, _ = _run_analysis(req, store, rate_table)
    headers = {"X-Request-ID": session.request_id}
    if format == "json":
        return Response(
            export_json(results, session, options), media_type="application/json", headers=headers
        )
    return Response(
        export_csv(build_export_rows(results, session, options)),
        media_type="text/csv",
        headers=headers,
    )
