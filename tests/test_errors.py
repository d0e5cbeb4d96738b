from __future__ import annotations

import pytest

from calculator_errors import (
    CalculatorError,
    ErrorKind,
    ExpressionSyntaxError,
    InfiniteResultError,
    NotNumericResultError,
    NumericalDomainError,
    UnbalancedParenthesesError,
    UnregisteredOperationError,
)

ALL_ERRORS = (
    ExpressionSyntaxError,
    UnbalancedParenthesesError,
    NumericalDomainError,
    NotNumericResultError,
    InfiniteResultError,
    UnregisteredOperationError,
)


def test_one_error_class_per_kind() -> None:
    assert {error.kind for error in ALL_ERRORS} == set(ErrorKind)


@pytest.mark.parametrize("error", ALL_ERRORS)
def test_errors_share_a_base(error: type[CalculatorError]) -> None:
    assert issubclass(error, CalculatorError)
    assert issubclass(error, ValueError)


def test_message_is_preserved() -> None:
    err = NumericalDomainError("boom")
    assert err.message == "boom"
    assert str(err) == "boom"


def test_default_message() -> None:
    assert str(InfiniteResultError()) == InfiniteResultError.default_message
