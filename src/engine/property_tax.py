"""Property tax formula.

Pure function: rate, equalization factor and assessment in, tax out. No I/O.
"""

from decimal import Decimal

HUNDRED = Decimal("100")


def compute_tax(
    rate_percent: Decimal,
    equalization_factor: Decimal,
    assessment_value: Decimal,
) -> Decimal:
    """Estimated annual tax = (rate / 100) × equalization factor × assessment.

    rate_percent is on a percent scale (7.25 for 7.25%). The result is not
    rounded; currency formatting happens at presentation time.
    """
    return (rate_percent / HUNDRED) * equalization_factor * assessment_value
