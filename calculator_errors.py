"""Taxonomía cerrada de errores del motor de cálculo.

Todas las excepciones derivan de ValueError para conservar el contrato
del motor original (``evaluate`` lanza ValueError ante expresiones
inválidas).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    SYNTAX = "syntax"
    UNBALANCED_PARENTHESES = "unbalanced_parentheses"
    NUMERICAL_DOMAIN = "numerical_domain"
    NOT_NUMERIC_RESULT = "not_numeric_result"
    INFINITE_RESULT = "infinite_result"
    UNREGISTERED_OPERATION = "unregistered_operation"


class CalculatorError(ValueError):
    """Error base de la calculadora."""

    kind: ErrorKind
    default_message = "Error de cálculo"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ExpressionSyntaxError(CalculatorError):
    kind = ErrorKind.SYNTAX
    default_message = "Error de sintaxis"


class UnbalancedParenthesesError(CalculatorError):
    kind = ErrorKind.UNBALANCED_PARENTHESES
    default_message = "Los paréntesis no están bien colocados"


class NumericalDomainError(CalculatorError):
    kind = ErrorKind.NUMERICAL_DOMAIN
    default_message = "Valor fuera del dominio de la operación"


class NotNumericResultError(CalculatorError):
    kind = ErrorKind.NOT_NUMERIC_RESULT
    default_message = "El resultado no es un número"


class InfiniteResultError(CalculatorError):
    kind = ErrorKind.INFINITE_RESULT
    default_message = "El resultado es infinito"


class UnregisteredOperationError(CalculatorError):
    kind = ErrorKind.UNREGISTERED_OPERATION
    default_message = "Operación no registrada"
