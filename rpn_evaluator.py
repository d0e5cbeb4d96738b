"""Evaluación de expresiones en notación polaca inversa (RPN)."""

from __future__ import annotations

import re
from decimal import Decimal

from arithmetic_dispatcher import ArithmeticDispatcher, literal_value
from calculator_config import Configuration
from calculator_errors import ExpressionSyntaxError
from character_classifier import is_operator_symbol, operator_for
from expression_engine import NUMBER_PATTERN
from numeric_formatter import format_result

RPN_NUMBER_PATTERN = re.compile(r"[+\-]?" + NUMBER_PATTERN.pattern)


class ReversePolishEvaluator:
    """Evalúa tokens separados por espacios: ``3 4 2 * +``."""

    def __init__(self, config: Configuration | None = None):
        self._config = config or Configuration()

    @property
    def config(self) -> Configuration:
        return self._config

    def evaluate(self, expression: str) -> str | None:
        tokens = expression.split()
        if not tokens:
            return None

        dispatcher = ArithmeticDispatcher(use_radians=self._config.use_radians)
        stack: list[Decimal] = []
        for token in tokens:
            if is_operator_symbol(token):
                if len(stack) < 2:
                    raise ExpressionSyntaxError(f"Faltan operandos para '{token}'")
                right = stack.pop()
                left = stack.pop()
                stack.append(dispatcher.apply_binary(left, operator_for(token), right))
            elif RPN_NUMBER_PATTERN.fullmatch(token):
                stack.append(literal_value(token))
            else:
                raise ExpressionSyntaxError(f'Token inválido "{token}" en la expresión')

        if len(stack) != 1:
            raise ExpressionSyntaxError("La expresión RPN deja más de un valor en la pila")
        return format_result(stack[0], self._config.precision)
