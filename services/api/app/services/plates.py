"""License plate normalization and OCR text post-processing.

Plates are 7 or 8 digits. The canonical form used for storage and lookups
is the dashed display form: ``XX-XXX-XX`` for 7 digits and ``XXX-XX-XXX``
for 8 digits.
"""

import re

from app.errors import InvalidPlate

VALID_LENGTHS = (7, 8)

_NON_DIGIT = re.compile(r"\D")

# Checked in order; the first match wins
_OCR_PATTERNS = [
    re.compile(r"\b(\d{2})-?(\d{3})-?(\d{2})\b"),
    re.compile(r"\b(\d{3})-?(\d{2})-?(\d{3})\b"),
]

PATTERN_CONFIDENCE = 0.85
DIGITS_CONFIDENCE = 0.4
FALLBACK_CONFIDENCE = 0.2


def strip_plate(raw: str) -> str:
    return _NON_DIGIT.sub("", raw or "")


def format_plate(digits: str) -> str:
    """Insert dashes into a 7 or 8 digit string."""
    if len(digits) == 7:
        return f"{digits[:2]}-{digits[2:5]}-{digits[5:]}"
    if len(digits) == 8:
        return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"
    raise InvalidPlate(f"Plate must have 7 or 8 digits, got {len(digits)}")


def normalize_plate(raw: str) -> str:
    """Return the canonical dashed form of ``raw``.

    Raises InvalidPlate when the digit count is not 7 or 8.
    """
    return format_plate(strip_plate(raw))


def is_valid_plate(raw: str) -> bool:
    return len(strip_plate(raw)) in VALID_LENGTHS


def extract_plate(text: str) -> tuple[str, float]:
    """Pick the most plate-like string out of OCR text.

    Confidence is a fixed heuristic: 0.85 for a plate-shaped match, 0.4 when
    at least 7 digits were found anywhere, 0.2 otherwise.
    """
    for pattern in _OCR_PATTERNS:
        match = pattern.search(text)
        if match:
            return format_plate("".join(match.groups())), PATTERN_CONFIDENCE

    digits = strip_plate(text)
    if len(digits) >= 7:
        return format_plate(digits[:7]), DIGITS_CONFIDENCE
    return digits, FALLBACK_CONFIDENCE
