"""Clasificación de caracteres y símbolos de operadores.

Predicados puros y totales: nunca lanzan excepciones, sólo responden
True/False (o None cuando un símbolo no corresponde a ningún operador).
"""

from __future__ import annotations

from enum import Enum


class Arity(Enum):
    UNARY = 1
    BINARY = 2


class Operator(Enum):
    """Identidad cerrada de los operadores, funciones y el paréntesis centinela."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    NEGATE = "u-"
    FACTORIAL = "!"
    ROOT = "√"
    SQRT = "sqrt"
    CBRT = "cbrt"
    LN = "ln"
    LOG = "log"
    LOG2 = "log2"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    CSC = "csc"
    SEC = "sec"
    COT = "cot"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    OPEN_PAREN = "("

    @property
    def precedence(self) -> int | None:
        return _PRECEDENCE.get(self)

    @property
    def arity(self) -> Arity | None:
        if self is Operator.OPEN_PAREN:
            return None
        return Arity.BINARY if self in _BINARY else Arity.UNARY

    @property
    def right_associative(self) -> bool:
        return self is Operator.POWER or self.arity is Arity.UNARY

    @property
    def is_unary(self) -> bool:
        return self.arity is Arity.UNARY


_BINARY = frozenset(
    {Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE, Operator.POWER}
)

UNARY_PRECEDENCE = 4

_PRECEDENCE = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
    Operator.POWER: 3,
}
_PRECEDENCE.update(
    {op: UNARY_PRECEDENCE for op in Operator if op not in _BINARY and op is not Operator.OPEN_PAREN}
)

OPERATOR_ALIASES = {"×": "*", "÷": "/"}

FUNCTION_NAMES = {
    "sqrt": Operator.SQRT,
    "cbrt": Operator.CBRT,
    "ln": Operator.LN,
    "log": Operator.LOG,
    "log2": Operator.LOG2,
    "sin": Operator.SIN,
    "cos": Operator.COS,
    "tan": Operator.TAN,
    "csc": Operator.CSC,
    "sec": Operator.SEC,
    "cot": Operator.COT,
    "asin": Operator.ASIN,
    "arcsin": Operator.ASIN,
    "acos": Operator.ACOS,
    "arccos": Operator.ACOS,
    "atan": Operator.ATAN,
    "arctan": Operator.ATAN,
}

MATH_CONSTANTS = ("e", "π")
DECIMAL_SEPARATORS = (".", ",")
EXPONENT_MARKERS = ("e", "E")
_DIGITS = "0123456789"


def is_digit(c: str) -> bool:
    return len(c) == 1 and c in _DIGITS


def is_digit_part(c: str) -> bool:
    """Dígito, separador decimal o marca de exponente."""
    return is_digit(c) or c in DECIMAL_SEPARATORS or c in EXPONENT_MARKERS


def normalize_operator(symbol: str) -> str:
    return OPERATOR_ALIASES.get(symbol, symbol)


def is_operator_symbol(symbol: str) -> bool:
    return normalize_operator(symbol) in ("+", "-", "*", "/", "^")


def is_function_name(name: str) -> bool:
    return name in FUNCTION_NAMES


def is_unary(symbol: str) -> bool:
    return symbol in ("u-", "!", "√") or is_function_name(symbol)


def is_math_constant(c: str) -> bool:
    return c in MATH_CONSTANTS


def operator_for(symbol: str) -> Operator | None:
    """Operador asociado a un símbolo, alias o nombre de función."""
    symbol = normalize_operator(symbol)
    if symbol in FUNCTION_NAMES:
        return FUNCTION_NAMES[symbol]
    try:
        return Operator(symbol)
    except ValueError:
        return None
