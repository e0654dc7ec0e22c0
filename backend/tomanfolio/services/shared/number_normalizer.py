"""Locale-aware number parsing for scraped price text.

Provider pages mix Persian and Arabic-Indic digits, local thousands
separators, currency words and symbols. ``parse_number`` returns ``None``
for anything it cannot read; ``normalize_number`` is the fetcher-boundary
form that maps ``None`` to zero, which callers must treat as "discard".
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# Extended Arabic-Indic (Persian) and Arabic-Indic digits -> ASCII
_DIGIT_TABLE = str.maketrans(
    "۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩",
    "01234567890123456789",
)

# Arabic thousands separator and ASCII comma
_THOUSANDS_SEPARATORS = re.compile(r"[,٬]")
_ARABIC_DECIMAL_SEPARATOR = "٫"
_NON_NUMERIC = re.compile(r"[^0-9.]")

_ZERO = Decimal("0")


def to_ascii_digits(value: str) -> str:
    """Replace localized digits with ASCII digits, leaving other text intact."""
    return value.translate(_DIGIT_TABLE)


def parse_number(raw: object) -> Decimal | None:
    """Parse a locale-formatted numeric string.

    Args:
        raw: Text such as ``"۱۲۳٬۴۵۶ تومان"`` or ``"$ 2,650.40"``. Non-string
            values are converted with ``str()``.

    Returns:
        The parsed value, or None when nothing numeric remains or the result
        is not finite.
    """
    if raw is None:
        return None

    text = to_ascii_digits(str(raw))
    text = _THOUSANDS_SEPARATORS.sub("", text)
    text = text.replace(_ARABIC_DECIMAL_SEPARATOR, ".")
    text = _NON_NUMERIC.sub("", text)
    if not text:
        return None

    try:
        value = Decimal(text)
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None
    return value


def normalize_number(raw: object) -> Decimal:
    """Parse scraped numeric text, returning zero when unparseable."""
    value = parse_number(raw)
    return _ZERO if value is None else value


def rial_to_toman(rial: Decimal) -> Decimal:
    """Convert rial to toman (divide by ten, rounded half up to an integer)."""
    return (rial / 10).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def round_toman(value: Decimal) -> Decimal:
    """Round a toman amount half up to an integer."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
