"""PIN input parsing and validation.

Operators paste PINs comma-separated or one per line, often with dashes
(12-34-567-890-1234). Only normalized, valid PINs reach the engine.
"""

import re
from dataclasses import dataclass

from src.config import settings

_SEPARATORS = re.compile(r"[\n,]+")
_STRIP = re.compile(r"[\s\-]")
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ValidatedPin:
    raw: str
    normalized: str
    valid: bool
    error: str | None = None


def normalize_pin(raw: str) -> str:
    return _STRIP.sub("", raw)


def validate_pin(raw: str, length: int | None = None) -> ValidatedPin:
    length = length if length is not None else settings.pin_length
    normalized = normalize_pin(raw)
    if not normalized:
        return ValidatedPin(raw, normalized, False, "Empty PIN")
    if not _DIGITS.fullmatch(normalized):
        return ValidatedPin(raw, normalized, False, "PIN must contain digits only")
    if len(normalized) != length:
        return ValidatedPin(
            raw, normalized, False, f"Must be {length} digits (got {len(normalized)})"
        )
    return ValidatedPin(raw, normalized, True)


def parse_pin_input(
    text: str, length: int | None = None
) -> tuple[list[ValidatedPin], list[ValidatedPin]]:
    """Split free-form input into (valid, invalid) PINs, preserving order."""
    parts = [p.strip() for p in _SEPARATORS.split(text)]
    checked = [validate_pin(p, length) for p in parts if p]
    return [p for p in checked if p.valid], [p for p in checked if not p.valid]
