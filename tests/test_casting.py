from typing import Any, Optional

import pytest

from pdfvector.casting import (
    safe_float,
    safe_int,
    safe_number,
    safe_number_list,
    safe_rect_list,
)
from pdfvector.utils import Rect


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        ([0, 0, 0, 0], (0.0, 0.0, 0.0, 0.0)),
        ([1, 2, 3, 4], (1.0, 2.0, 3.0, 4.0)),
        ([0, 0, 0, None], None),
        ([0, 0, 0, "0"], None),  # Numeric strings are not numbers in PDF
        ([], None),
        ([0, 0, 0], None),
        ([1, 2, 3, 4, 5], (1.0, 2.0, 3.0, 4.0)),
        (None, None),
        (object(), None),
    ],
)
def test_safe_rect_list(arg: Any, expected: Optional[Rect]) -> None:
    assert safe_rect_list(arg) == expected


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        (0, 0.0),
        (1, 1.0),
        ("0", 0.0),
        ("1.5", 1.5),
        (None, None),
        (object(), None),
        (2**1024, None),  # Integer too large to convert to float
    ],
)
def test_safe_float(arg: Any, expected: Optional[float]) -> None:
    assert safe_float(arg) == expected


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        (3, 3),
        (3.7, 3),
        ("12", 12),
        (None, None),
        ("abc", None),
        (float("inf"), None),
    ],
)
def test_safe_int(arg: Any, expected: Optional[int]) -> None:
    assert safe_int(arg) == expected


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        (0, 0.0),
        (1.5, 1.5),
        ("1.5", None),
        (True, None),
        (None, None),
        (2**1024, None),
    ],
)
def test_safe_number(arg: Any, expected: Optional[float]) -> None:
    assert safe_number(arg) == expected


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        ([3, 2], [3.0, 2.0]),
        ([], []),
        ((1, 0.5), [1.0, 0.5]),
        ([3, "2"], None),
        (None, None),
        ("32", None),
    ],
)
def test_safe_number_list(arg: Any, expected: Optional[list[float]]) -> None:
    assert safe_number_list(arg) == expected
