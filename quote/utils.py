import logging
import math
import re

from flask import current_app, has_app_context

ZIP_PATTERN = re.compile(r"^[0-9]{5}(-[0-9]{4})?$")


def app_logger(name: str) -> logging.Logger:
    """Flask's application logger inside a request, a module logger elsewhere."""
    if has_app_context():
        return current_app.logger
    return logging.getLogger(name)


def is_blank(value) -> bool:
    """True for ``None``, empty strings, zero and other falsy payload values."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def is_valid_zip(value) -> bool:
    return bool(ZIP_PATTERN.match(str(value).strip()))


def parse_number(x) -> float:
    """Parse a numeric payload value; ``$`` and thousands separators are allowed.

    Raises ``ValueError`` for anything that is not a finite number.
    """
    if isinstance(x, bool):
        raise ValueError(f"not a number: {x!r}")
    if isinstance(x, (int, float)):
        val = float(x)
    else:
        s = str(x).strip().replace("$", "").replace(",", "")
        val = float(s)
    if math.isnan(val) or math.isinf(val):
        raise ValueError(f"not a finite number: {x!r}")
    return val


def to_number(x, default: float = 0.0) -> float:
    """Like :func:`parse_number` but returns ``default`` instead of raising."""
    if x is None:
        return default
    try:
        return parse_number(x)
    except (TypeError, ValueError):
        return default


def sum_accessorials(accessorials) -> float:
    """Total the carrier's accessorial charges.

    Accepts a bare number, a list of ``{"accessorialPrice": ...}`` entries
    or a list of bare numbers.  Missing prices count as zero.
    """
    if accessorials is None:
        return 0.0
    if not isinstance(accessorials, list):
        return to_number(accessorials)

    total = 0.0
    for acc in accessorials:
        if isinstance(acc, dict):
            total += to_number(acc.get("accessorialPrice"))
        else:
            total += to_number(acc)
    return total
