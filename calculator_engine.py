"""
Motor de cálculo para la calculadora.

Este módulo provee la función ``solve`` y la clase ``CalculatorEngine``,
que limpian la expresión recibida y la delegan en el evaluador elegido
(shunting-yard o notación polaca inversa).

Contrato de interfaz:
    - evaluate(expression: str) -> str | None
    - angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from calculator_config import Configuration
from expression_engine import ShuntingYardEvaluator
from rpn_evaluator import ReversePolishEvaluator

logger = logging.getLogger(__name__)


class SolvingMethod(Enum):
    SHUNTING_YARD = "shunting_yard"
    REVERSE_POLISH_NOTATION = "rpn"


_WHITESPACE = re.compile(r"\s+")
_DANGLING_DECIMAL_POINT = re.compile(r"\.(?=[(+\-*×/÷^])")


def clean_expression(expression: str) -> str:
    """Prepara una expresión infija para el evaluador shunting-yard."""
    expr = _WHITESPACE.sub("", expression)
    expr = expr.lower()
    expr = expr.replace("−", "-")
    expr = expr.replace(",", ".")
    expr = expr.replace(")(", ")*(")
    expr = expr.replace("()", "(1)")
    expr = _DANGLING_DECIMAL_POINT.sub(".0", expr)
    return expr


def clean_rpn_expression(expression: str) -> str:
    expr = expression.replace(";", " ")
    expr = _WHITESPACE.sub(" ", expr).strip()
    return expr.replace(",", ".")


def solve(
    expression: str | None,
    config: Configuration | None = None,
    method: SolvingMethod = SolvingMethod.SHUNTING_YARD,
) -> str | None:
    """Resuelve ``expression`` y devuelve el resultado como cadena.

    Devuelve None si la expresión es None o queda vacía tras limpiarla.

    Raises:
        CalculatorError: expresión inválida o resultado no representable.
    """
    if expression is None:
        return None
    config = config or Configuration()

    if method is SolvingMethod.REVERSE_POLISH_NOTATION:
        cleaned = clean_rpn_expression(expression)
        evaluator = ReversePolishEvaluator(config)
    else:
        cleaned = clean_expression(expression)
        evaluator = ShuntingYardEvaluator(config)

    if not cleaned:
        return None

    logger.debug("Evaluando %r (%s)", cleaned, method.value)
    result = evaluator.evaluate(cleaned)
    logger.debug("Resultado de %r: %s", cleaned, result)
    return result


class CalculatorEngine:
    """Evalúa expresiones matemáticas con una configuración ajustable."""

    def __init__(
        self,
        config: Configuration | None = None,
        method: SolvingMethod = SolvingMethod.SHUNTING_YARD,
    ):
        self._config = config or Configuration()
        self._method = method

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def method(self) -> SolvingMethod:
        return self._method

    @method.setter
    def method(self, method: SolvingMethod):
        self._method = SolvingMethod(method)

    # ── Propiedades de configuración ─────────────────────────────

    @property
    def precision(self) -> int:
        return self._config.precision

    @precision.setter
    def precision(self, precision: int):
        self._config = self._config.with_changes(precision=precision)

    @property
    def balance_parentheses(self) -> bool:
        return self._config.balance_parentheses

    @balance_parentheses.setter
    def balance_parentheses(self, enabled: bool):
        self._config = self._config.with_changes(balance_parentheses=bool(enabled))

    @property
    def use_radians(self) -> bool:
        return self._config.use_radians

    @use_radians.setter
    def use_radians(self, enabled: bool):
        self._config = self._config.with_changes(use_radians=bool(enabled))

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return "rad" if self._config.use_radians else "deg"

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self.use_radians = mode == "rad"

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str | None) -> str | None:
        """Evalúa la expresión con la configuración actual.

        Raises:
            ExpressionSyntaxError: expresión inválida o función desconocida.
            UnbalancedParenthesesError: paréntesis sin pareja.
            NumericalDomainError: factorial o raíz fuera de su dominio.
            NotNumericResultError: resultado NaN (por ejemplo 0/0).
            InfiniteResultError: división por cero o desbordamiento.
        """
        return solve(expression, self._config, self._method)
