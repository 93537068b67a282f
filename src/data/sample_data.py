"""Bundled sample dataset: six Cook County properties and neighborhood rates.

Used when no property or rate file is configured. Rates are percentages of
equalized assessed value, keyed by neighborhood (tax) code.
"""

from decimal import Decimal

SAMPLE_PROPERTIES: dict[str, dict] = {
    "12345678901234": {
        "pin": "12345678901234",
        "address": "123 Main St, Chicago, IL 60614",
        "township": "Lake View",
        "neighborhood_code": "12345",
        "mailed_tot": Decimal("100000"),
        "certified_tot": Decimal("110000"),
        "board_tot": Decimal("120000"),
        "equalization_factor": Decimal("3.0"),
        "tax_rate_year": 2024,
        "tax_rate_value": Decimal("7.25"),
    },
    "98765432109876": {
        "pin": "98765432109876",
        "address": "456 Oak Avenue, Evanston, IL 60201",
        "township": "Evanston",
        "neighborhood_code": "98765",
        "mailed_tot": Decimal("250000"),
        "certified_tot": Decimal("260000"),
        "board_tot": None,
        "equalization_factor": Decimal("3.0"),
        "tax_rate_year": 2024,
        "tax_rate_value": Decimal("8.10"),
    },
    "11223344556677": {
        "pin": "11223344556677",
        "address": "789 Elm Boulevard, Skokie, IL 60077",
        "township": "Niles",
        "neighborhood_code": "55432",
        "mailed_tot": Decimal("185000"),
        "certified_tot": None,
        "board_tot": None,
        "equalization_factor": Decimal("2.9163"),
        "tax_rate_year": 2024,
        "tax_rate_value": Decimal("9.50"),
    },
    "55667788990011": {
        "pin": "55667788990011",
        "address": "321 Maple Court, Oak Park, IL 60301",
        "township": "Oak Park",
        "neighborhood_code": "33211",
        "mailed_tot": Decimal("320000"),
        "certified_tot": Decimal("335000"),
        "board_tot": Decimal("310000"),
        "equalization_factor": Decimal("3.0"),
        "tax_rate_year": 2023,
        "tax_rate_value": Decimal("10.25"),
    },
    "44332211009988": {
        "pin": "44332211009988",
        "address": "654 Pine Street, Cicero, IL 60804",
        "township": "Cicero",
        "neighborhood_code": "77654",
        "mailed_tot": Decimal("95000"),
        "certified_tot": Decimal("98000"),
        "board_tot": Decimal("92000"),
        "equalization_factor": Decimal("2.9163"),
        "tax_rate_year": 2024,
        "tax_rate_value": Decimal("11.75"),
    },
    "22334455667788": {
        "pin": "22334455667788",
        "address": "987 Willow Way, Berwyn, IL 60402",
        "township": "Berwyn",
        "neighborhood_code": "22876",
        "mailed_tot": None,
        "certified_tot": None,
        "board_tot": None,
        "equalization_factor": Decimal("3.0"),
        "tax_rate_year": 2024,
        "tax_rate_value": Decimal("8.75"),
    },
}

# neighborhood_code → {year: rate}
SAMPLE_TAX_RATES: dict[str, dict[int, Decimal]] = {
    "12345": {2022: Decimal("6.95"), 2023: Decimal("7.10"), 2024: Decimal("7.25")},
    "98765": {2023: Decimal("7.95"), 2024: Decimal("8.10")},
    "55432": {2024: Decimal("9.50")},
    "33211": {2022: Decimal("9.80"), 2023: Decimal("10.25")},
    "77654": {2024: Decimal("11.75")},
    "22876": {2024: Decimal("8.75")},
}
