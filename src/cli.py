"""CLI for running PIN tax analyses locally.

Usage:
    python -m src.cli 12-34-567-890-1234 98765432109876
    python -m src.cli 12345678901234 --source certified --income-approach
    python -m src.cli 12345678901234 --export csv > packet.csv
    python -m src.cli 12345678901234 --rates rates.csv --properties properties.json
"""

import argparse
import logging
import sys

from src.config import settings
from src.data.pins import parse_pin_input
from src.data.property_store import default_property_store, load_property_store
from src.data.rate_table import default_rate_table, load_rate_table, load_year_rates
from src.engine.analysis import analyze_batch
from src.export.job_packet import (
    build_export_rows,
    export_csv,
    export_json,
    format_currency,
    format_percent,
    render_text_report,
)
from src.models.assessment import AssessmentOverride
from src.models.results import AnalysisOptions, AnalysisResult, new_session


def print_result(r: AnalysisResult) -> None:
    print(f"\n{'=' * 60}")
    print(f"  PIN {r.pin}")
    print(f"{'=' * 60}")
    if not r.found:
        print("  Not found")
    else:
        p = r.property
        print(f"  Address:          {p.address}")
        print(f"  Township:         {p.township} (neighborhood {p.neighborhood_code})")
        print(f"  Assessment:       {format_currency(r.assessment.value)} ({r.assessment.label})")
        print(f"  Tax Rate:         {format_percent(r.tax_rate_value)} ({r.tax_rate_year})")
        print(f"  Equalization:     {p.equalization_factor}")
        print(f"  Estimated Tax:    {format_currency(r.estimated_tax)}")
    print(f"  Line Item:        {r.draft_invoice_line_item}")
    for w in r.warnings:
        print(f"  ! {w}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Property tax estimate by PIN")
    parser.add_argument("pins", nargs="+", help="PINs (dashes/spaces allowed, comma-separated ok)")
    parser.add_argument(
        "--source",
        choices=[o.value for o in AssessmentOverride],
        default=AssessmentOverride.AUTO.value,
        help="Assessment source (default: auto = Board → Certified → Mailed)",
    )
    parser.add_argument("--income-approach", action="store_true", help="Flag income approach analysis")
    parser.add_argument("--skip-current-taxes", action="store_true", help="Mark current tax analysis as not requested")
    parser.add_argument("--as-of-year", type=int, help="Warn when the applied rate is older than this year allows")
    parser.add_argument("--export", choices=["csv", "json", "report"], help="Print an export instead of the summary")
    parser.add_argument("--rates", help="Rate table file (.csv or .json)")
    parser.add_argument(
        "--upload-rates",
        nargs=2,
        metavar=("YEAR", "FILE"),
        help="Apply one year's uploaded rates (.csv or .json) on top of the rate table",
    )
    parser.add_argument("--properties", help="Property records file (.json)")
    parser.add_argument("--workers", type=int, default=None, help="Parallel workers for large batches")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    valid, invalid = parse_pin_input(",".join(args.pins))
    for bad in invalid:
        print(f"Skipping {bad.raw!r}: {bad.error}", file=sys.stderr)
    if not valid:
        parser.error("no valid PINs provided")

    store = load_property_store(args.properties) if args.properties else default_property_store()
    rate_table = load_rate_table(args.rates) if args.rates else default_rate_table()
    if args.upload_rates:
        year, upload_path = args.upload_rates
        if not year.isdigit():
            parser.error(f"--upload-rates year must be a number, got {year!r}")
        rate_table = rate_table.merge_year(int(year), load_year_rates(upload_path))

    session = new_session()
    options = AnalysisOptions(
        assessment_override=AssessmentOverride(args.source),
        analyze_current_taxes=not args.skip_current_taxes,
        income_approach=args.income_approach,
        as_of_year=args.as_of_year,
    )
    results = analyze_batch(
        [p.normalized for p in valid], store, rate_table,
        options=options, max_workers=args.workers, session=session,
    )

    if args.export == "csv":
        sys.stdout.write(export_csv(build_export_rows(results, session, options)))
    elif args.export == "json":
        print(export_json(results, session, options))
    elif args.export == "report":
        sys.stdout.write(render_text_report(results, session, options))
    else:
        print(f"Request ID: {session.request_id}")
        for r in results:
            print_result(r)
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
