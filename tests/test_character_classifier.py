from __future__ import annotations

import pytest

from character_classifier import (
    Arity,
    Operator,
    is_digit_part,
    is_function_name,
    is_math_constant,
    is_operator_symbol,
    is_unary,
    normalize_operator,
    operator_for,
)


@pytest.mark.parametrize("char", ["0", "7", ".", ",", "e", "E"])
def test_digit_parts(char: str) -> None:
    assert is_digit_part(char)


@pytest.mark.parametrize("char", ["a", "+", "(", "π", "", "12"])
def test_non_digit_parts(char: str) -> None:
    assert not is_digit_part(char)


@pytest.mark.parametrize("symbol", ["+", "-", "*", "/", "^", "×", "÷"])
def test_operator_symbols(symbol: str) -> None:
    assert is_operator_symbol(symbol)


@pytest.mark.parametrize("symbol", ["!", "√", "(", "u-", "sin", ""])
def test_non_operator_symbols(symbol: str) -> None:
    assert not is_operator_symbol(symbol)


def test_unicode_aliases_normalize_to_ascii() -> None:
    assert normalize_operator("×") == "*"
    assert normalize_operator("÷") == "/"
    assert normalize_operator("^") == "^"


@pytest.mark.parametrize(
    "symbol", ["u-", "!", "√", "sin", "arcsin", "asin", "acos", "arccos", "atan", "log2", "cbrt"]
)
def test_unary_tokens(symbol: str) -> None:
    assert is_unary(symbol)


@pytest.mark.parametrize("symbol", ["-", "+", "^", "sine", "exp", ""])
def test_non_unary_tokens(symbol: str) -> None:
    assert not is_unary(symbol)


def test_function_names_are_lowercase_only() -> None:
    assert is_function_name("tan")
    assert not is_function_name("TAN")


def test_math_constants() -> None:
    assert is_math_constant("e")
    assert is_math_constant("π")
    assert not is_math_constant("x")
    assert not is_math_constant("E")


def test_operator_lookup() -> None:
    assert operator_for("×") is Operator.MULTIPLY
    assert operator_for("arctan") is Operator.ATAN
    assert operator_for("√") is Operator.ROOT
    assert operator_for("%") is None
    assert operator_for("") is None


def test_precedence_ordering() -> None:
    assert Operator.ADD.precedence == Operator.SUBTRACT.precedence
    assert Operator.MULTIPLY.precedence == Operator.DIVIDE.precedence
    assert Operator.ADD.precedence < Operator.MULTIPLY.precedence < Operator.POWER.precedence
    for op in (Operator.NEGATE, Operator.FACTORIAL, Operator.ROOT, Operator.SIN, Operator.LOG2):
        assert op.precedence > Operator.POWER.precedence
    assert Operator.OPEN_PAREN.precedence is None


def test_arity_and_associativity() -> None:
    assert Operator.POWER.arity is Arity.BINARY
    assert Operator.POWER.right_associative
    assert not Operator.SUBTRACT.right_associative
    assert Operator.NEGATE.arity is Arity.UNARY
    assert Operator.NEGATE.right_associative
    assert not Operator.MULTIPLY.right_associative
    assert Operator.OPEN_PAREN.arity is None
