"""Aplicación de operadores y funciones sobre decimales exactos.

Suma, resta, producto, negación y factorial son exactos. La división usa
una precisión de trabajo fija. Potencias, raíces, trigonometría y
logaritmos pasan por mpmath con 53 bits de precisión (equivalente a un
``double``) y su resultado se valida antes de volver a ``Decimal``.
"""

from __future__ import annotations

import math
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    Overflow,
)

from calculator_errors import (
    InfiniteResultError,
    NotNumericResultError,
    NumericalDomainError,
    UnregisteredOperationError,
)
from character_classifier import Operator

try:
    from mpmath import MPContext
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

DIVISION_PRECISION = 34
FLOAT_PRECISION_BITS = 53

_EXACT = Context(prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)
_DIVISION = Context(
    prec=DIVISION_PRECISION, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN
)

# Contexto propio: nunca se modifica tras crearlo, así que puede compartirse
# entre hilos sin tocar la precisión global de ``mpmath.mp``.
_FP = MPContext()
_FP.prec = FLOAT_PRECISION_BITS


def constant_value(symbol: str) -> Decimal:
    """Valor en coma flotante de ``e`` o ``π``."""
    if symbol == "e":
        return _to_decimal(_FP.e)
    if symbol == "π":
        return _to_decimal(_FP.pi)
    raise UnregisteredOperationError(f"Constante desconocida: {symbol}")


def literal_value(literal: str) -> Decimal:
    """Valor exacto de un literal numérico ya validado.

    Raises:
        InfiniteResultError: el exponente supera el máximo de ``decimal``.
        NotNumericResultError: el exponente queda por debajo del mínimo.
    """
    try:
        return Decimal(literal)
    except DecimalException as exc:
        _, _, exponent = literal.lower().partition("e")
        if exponent.startswith("-"):
            raise NotNumericResultError("Número demasiado pequeño para representarse") from exc
        raise InfiniteResultError("Número demasiado grande para representarse") from exc


def _to_decimal(result) -> Decimal:
    if isinstance(result, _FP.mpc):
        raise NotNumericResultError()
    try:
        value = float(result)
    except OverflowError as exc:
        raise InfiniteResultError() from exc
    if math.isnan(value):
        raise NotNumericResultError()
    if math.isinf(value):
        raise InfiniteResultError()
    return Decimal(repr(value))


def _to_mpf(value: Decimal):
    return _FP.mpf(float(value))


def _exact(fn):
    def wrapped(*operands: Decimal) -> Decimal:
        try:
            return fn(*operands)
        except Overflow as exc:
            raise InfiniteResultError() from exc
        except DecimalException as exc:
            raise NotNumericResultError() from exc

    return wrapped


def _floating(fn):
    def wrapped(*operands: Decimal) -> Decimal:
        try:
            return _to_decimal(fn(*(_to_mpf(x) for x in operands)))
        except ZeroDivisionError as exc:
            raise InfiniteResultError() from exc

    return wrapped


class ArithmeticDispatcher:
    """Aplica un operador a uno o dos operandos decimales."""

    def __init__(self, use_radians: bool = True):
        self._use_radians = use_radians
        self._binary = self._build_binary()
        self._unary = self._build_unary()

    @property
    def use_radians(self) -> bool:
        return self._use_radians

    # ── Operadores binarios ──────────────────────────────────────

    def apply_binary(self, left: Decimal, operator: Operator, right: Decimal) -> Decimal:
        handler = self._binary.get(operator)
        if handler is None:
            raise UnregisteredOperationError(f"Operación binaria no registrada: {operator.value}")
        return handler(left, right)

    @staticmethod
    @_exact
    def _divide(left: Decimal, right: Decimal) -> Decimal:
        if right.is_zero():
            if left.is_zero():
                raise NotNumericResultError("División indeterminada 0/0")
            raise InfiniteResultError("División por cero")
        return _DIVISION.divide(left, right)

    def _build_binary(self) -> dict:
        return {
            Operator.ADD: _exact(_EXACT.add),
            Operator.SUBTRACT: _exact(_EXACT.subtract),
            Operator.MULTIPLY: _exact(_EXACT.multiply),
            Operator.DIVIDE: self._divide,
            Operator.POWER: _floating(_FP.power),
        }

    # ── Operadores unarios y funciones ───────────────────────────

    def apply_unary(self, operator: Operator, operand: Decimal) -> Decimal:
        handler = self._unary.get(operator)
        if handler is None:
            raise UnregisteredOperationError(f"Operación unaria no registrada: {operator.value}")
        return handler(operand)

    @staticmethod
    def _factorial(value: Decimal) -> Decimal:
        if value.is_signed() and not value.is_zero():
            raise NumericalDomainError("El factorial requiere un entero no negativo")
        if value != value.to_integral_value():
            raise NumericalDomainError("El factorial requiere un entero no negativo")

        product = 1
        for factor in range(2, int(value) + 1):
            product *= factor
        return Decimal(product)

    @staticmethod
    def _square_root(value: Decimal) -> Decimal:
        if value.is_signed() and not value.is_zero():
            raise NumericalDomainError("Raíz cuadrada de un número negativo")
        return _floating(_FP.power)(value, Decimal("0.5"))

    @staticmethod
    def _cube_root(x):
        root = _FP.cbrt(abs(x))
        return -root if x < 0 else root

    def _trig(self, fn):
        use_radians = self._use_radians

        def wrapped(x):
            return fn(x if use_radians else _FP.radians(x))

        return wrapped

    def _inv_trig(self, fn):
        use_radians = self._use_radians

        def wrapped(x):
            result = fn(x)
            if use_radians or isinstance(result, _FP.mpc):
                return result
            return _FP.degrees(result)

        return wrapped

    @staticmethod
    def _reciprocal(fn):
        def wrapped(x):
            base = fn(x)
            if base == 0:
                raise InfiniteResultError()
            return 1 / base

        return wrapped

    def _build_unary(self) -> dict:
        return {
            Operator.NEGATE: _exact(_EXACT.minus),
            Operator.FACTORIAL: self._factorial,
            Operator.ROOT: self._square_root,
            Operator.SQRT: self._square_root,
            Operator.CBRT: _floating(self._cube_root),
            Operator.LN: _floating(_FP.ln),
            Operator.LOG: _floating(_FP.log10),
            Operator.LOG2: _floating(lambda x: _FP.log(x, 2)),
            Operator.SIN: _floating(self._trig(_FP.sin)),
            Operator.COS: _floating(self._trig(_FP.cos)),
            Operator.TAN: _floating(self._trig(_FP.tan)),
            Operator.CSC: _floating(self._trig(self._reciprocal(_FP.sin))),
            Operator.SEC: _floating(self._trig(self._reciprocal(_FP.cos))),
            Operator.COT: _floating(self._trig(self._reciprocal(_FP.tan))),
            Operator.ASIN: _floating(self._inv_trig(_FP.asin)),
            Operator.ACOS: _floating(self._inv_trig(_FP.acos)),
            Operator.ATAN: _floating(self._inv_trig(_FP.atan)),
        }
