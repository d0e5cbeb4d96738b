"""Formato canónico de los resultados decimales."""

from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    Overflow,
)

from calculator_errors import InfiniteResultError, NotNumericResultError


def _context(digits: int) -> Context:
    return Context(prec=digits, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _power_of_ten(exponent: int) -> Decimal:
    return Decimal((0, (1,), exponent))


def format_result(value: Decimal, precision: int) -> str:
    """Convierte ``value`` en texto con ``precision`` decimales como máximo.

    Los valores con ``|value| >= 10^precision`` o ``|value| <= 10^-precision``
    se escriben en notación científica (``4.076447993302E2603``); el resto
    en notación decimal simple. En ambos casos se redondea hacia arriba en
    el punto medio y se eliminan los ceros finales.

    Raises:
        InfiniteResultError: el redondeo supera el exponente máximo de ``decimal``.
    """
    if value.is_zero():
        return "0"

    magnitude = value.copy_abs()
    try:
        if magnitude >= _power_of_ten(precision) or magnitude <= _power_of_ten(-precision):
            return _format_scientific(value, precision)
        return _format_plain(value, precision)
    except Overflow as exc:
        raise InfiniteResultError() from exc
    except DecimalException as exc:
        raise NotNumericResultError() from exc


def _format_scientific(value: Decimal, precision: int) -> str:
    rounded = _context(precision + 1).plus(value)
    sign, digits, _ = rounded.as_tuple()
    mantissa = "".join(str(d) for d in digits).rstrip("0") or "0"
    if len(mantissa) > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"
    return f"{'-' if sign else ''}{mantissa}E{rounded.adjusted()}"


def _format_plain(value: Decimal, precision: int) -> str:
    # |value| < 10^precision: la parte entera cabe en ``precision`` dígitos
    rounded = value.quantize(_power_of_ten(-precision), context=_context(2 * precision + 2))
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
