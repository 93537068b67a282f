"""CLI client for the PIN Tax Analyzer API; posts PINs and prints a terminal report.

Usage:
    python tax-analyzer/analyze_pins.py 12-34-567-890-1234 98765432109876
    python tax-analyzer/analyze_pins.py 12345678901234 --source mailed --income-approach
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    if v is None:
        return "N/A"
    return f"${Decimal(str(v)):,.2f}"


def _pct(v) -> str:
    if v is None:
        return "N/A"
    return f"{Decimal(str(v)):.4f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_session(data: dict) -> None:
    _header("Analysis Session")
    print(f"  Request ID:         {data['request_id']}")
    print(f"  Created:            {data['created_at']}")
    print(f"  Assessment Source:  {data['assessment_source']}")
    print(f"  Income Approach:    {'Yes' if data['income_approach'] else 'No'}")


def print_pin_result(result: dict) -> None:
    _header(f"PIN {result['pin']}")
    if not result["found"]:
        print("  Not found in the current dataset")
    else:
        prop = result["property"]
        assessment = result["assessment"]
        print(f"  Address:            {prop['address']}")
        print(f"  Township:           {prop['township']}")
        print(f"  Neighborhood:       {prop['neighborhood_code']}")
        print(f"  Board / Cert / Mail: {_dollar(prop['board_tot'])} / "
              f"{_dollar(prop['certified_tot'])} / {_dollar(prop['mailed_tot'])}")
        print(f"  Selected:           {_dollar(assessment['value'])} ({assessment['type']})")
        print(f"  Tax Rate:           {_pct(result['tax_rate_value'])} ({result['tax_rate_year']})")
        print(f"  Equalization:       {prop['equalization_factor']}")
        print(f"  Estimated Tax:      {_dollar(result['estimated_tax'])}")
    print(f"  Line Item:          {result['draft_invoice_line_item']}")
    for w in result.get("warnings", []):
        print(f"  ! {w}")


def print_invalid(data: dict) -> None:
    invalid = data.get("invalid_pins", [])
    if not invalid:
        return
    _header("Skipped Entries")
    for item in invalid:
        print(f"  {item['raw']!r}: {item['error']}")


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(description="Analyze PINs via the PIN Tax Analyzer API")
    parser.add_argument("pins", nargs="+", help="Property PINs")
    parser.add_argument(
        "--source",
        choices=["auto", "board", "certified", "mailed"],
        default="auto",
        help="Assessment source (default: auto)",
    )
    parser.add_argument("--income-approach", action="store_true", help="Flag income approach analysis")
    parser.add_argument("--as-of-year", type=int, help="Warn on rates older than this year allows")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    payload: dict = {
        "pins": args.pins,
        "assessment_source": args.source,
        "income_approach": args.income_approach,
    }
    if args.as_of_year is not None:
        payload["as_of_year"] = args.as_of_year

    url = f"{args.api_url}/api/v1/analyze"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_session(data)
    for result in data["results"]:
        print_pin_result(result)
    print_invalid(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
