from __future__ import annotations

from decimal import Decimal

import pytest

from calculator_errors import InfiniteResultError
from numeric_formatter import format_result


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [
        ("0", 12, "0"),
        ("-0.000", 12, "0"),
        ("96.0", 12, "96"),
        ("3.0001220703125", 12, "3.000122070313"),
        ("-114671819.5", 12, "-114671819.5"),
        ("999999999999.5", 12, "999999999999.5"),
        ("0.0000000000015", 12, "0.000000000002"),
        ("2.5", 3, "2.5"),
        ("0.0015", 3, "0.002"),
        ("0.00149", 3, "0.001"),
        ("-0.6666666", 3, "-0.667"),
    ],
)
def test_plain_notation(value: str, precision: int, expected: str) -> None:
    assert format_result(Decimal(value), precision) == expected


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [
        ("1E+12", 12, "1E12"),
        ("1E-12", 12, "1E-12"),
        ("1.5E-13", 12, "1.5E-13"),
        ("-1.797010299914431E+57", 12, "-1.797010299914E57"),
        ("9.9999999999999E+20", 12, "1E21"),
        ("123456.123456789", 3, "1.235E5"),
        ("0.0005", 3, "5E-4"),
        ("15511210043330985984000000", 12, "1.551121004333E25"),
    ],
)
def test_scientific_notation(value: str, precision: int, expected: str) -> None:
    assert format_result(Decimal(value), precision) == expected


def test_threshold_depends_on_precision() -> None:
    value = Decimal("15511210043330985984000000")
    assert format_result(value, 30) == "15511210043330985984000000"
    assert format_result(Decimal("1234.5"), 3) == "1.235E3"
    assert format_result(Decimal("1234.5"), 4) == "1234.5"


@pytest.mark.parametrize(
    "canonical", ["4.076447993302E2603", "-1.797010299914E57", "3.000122070313", "96", "1E-20"]
)
def test_formatting_is_idempotent(canonical: str) -> None:
    assert format_result(Decimal(canonical), 12) == canonical


def test_extreme_exponents() -> None:
    assert format_result(Decimal("1E+999999999999999999"), 12) == "1E999999999999999999"
    assert format_result(Decimal("-2E-999999999999999999"), 12) == "-2E-999999999999999999"
    with pytest.raises(InfiniteResultError):
        format_result(Decimal("9.9999999999999E+999999999999999999"), 12)
