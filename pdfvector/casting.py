import itertools
from typing import Any

from pdfvector.utils import Rect, isnumber


def safe_int(o: Any) -> int | None:
    try:
        return int(o)
    except (TypeError, ValueError, OverflowError):
        return None


def safe_float(o: Any) -> float | None:
    try:
        return float(o)
    except (TypeError, ValueError, OverflowError):
        return None


def safe_number(o: Any) -> float | None:
    """Like safe_float, but only accepts actual numbers, not numeric strings."""
    if not isnumber(o):
        return None
    return safe_float(o)


def safe_rect_list(value: Any) -> Rect | None:
    try:
        values = list(itertools.islice(value, 4))
    except TypeError:
        return None

    if len(values) != 4:
        return None

    return safe_rect(*values)


def safe_rect(a: Any, b: Any, c: Any, d: Any) -> Rect | None:
    a_f = safe_number(a)
    b_f = safe_number(b)
    c_f = safe_number(c)
    d_f = safe_number(d)

    if a_f is None or b_f is None or c_f is None or d_f is None:
        return None

    return a_f, b_f, c_f, d_f


def safe_number_list(value: Any) -> list[float] | None:
    """Converts an array of numbers, such as a dash array."""
    if not isinstance(value, (list, tuple)):
        return None
    numbers = [safe_number(v) for v in value]
    if any(n is None for n in numbers):
        return None
    return numbers  # type: ignore[return-value]
