"""Evaluación de expresiones infijas con el algoritmo shunting-yard.

La expresión se recorre una sola vez de izquierda a derecha: el análisis
léxico y la evaluación ocurren a la vez sobre dos pilas (operandos y
operadores). Cada operador se aplica en cuanto su precedencia lo permite,
de modo que al terminar sólo queda un operando, que se formatea.

La expresión llega ya limpia (ver ``calculator_engine``): sin espacios,
en minúsculas, con ``.`` como separador decimal y con ``)(`` y ``()``
expandidos.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from enum import Enum, auto

from arithmetic_dispatcher import ArithmeticDispatcher, constant_value, literal_value
from calculator_config import Configuration
from calculator_errors import ExpressionSyntaxError, UnbalancedParenthesesError
from character_classifier import (
    DECIMAL_SEPARATORS,
    EXPONENT_MARKERS,
    FUNCTION_NAMES,
    Operator,
    is_digit,
    is_digit_part,
    is_math_constant,
    is_operator_symbol,
    operator_for,
)
from numeric_formatter import format_result

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?")


class TokenKind(Enum):
    """Último token significativo leído."""

    START = auto()
    NUMBER = auto()
    CONSTANT = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    FACTORIAL = auto()
    ROOT = auto()
    FUNCTION = auto()
    SIGN = auto()
    BINARY_OPERATOR = auto()


# Tokens tras los cuales ya hay un valor completo
VALUE_KINDS = frozenset(
    {TokenKind.NUMBER, TokenKind.CONSTANT, TokenKind.CLOSE_PAREN, TokenKind.FACTORIAL}
)
# Tokens tras los cuales se espera un operando
OPERAND_EXPECTED = frozenset(
    {
        TokenKind.START,
        TokenKind.OPEN_PAREN,
        TokenKind.ROOT,
        TokenKind.FUNCTION,
        TokenKind.SIGN,
        TokenKind.BINARY_OPERATOR,
    }
)
FUNCTION_PREDECESSORS = frozenset(
    {
        TokenKind.START,
        TokenKind.NUMBER,
        TokenKind.OPEN_PAREN,
        TokenKind.CLOSE_PAREN,
        TokenKind.FACTORIAL,
        TokenKind.ROOT,
        TokenKind.SIGN,
        TokenKind.BINARY_OPERATOR,
    }
)


class ShuntingYardEvaluator:
    """Evalúa expresiones infijas limpias según una configuración."""

    def __init__(self, config: Configuration | None = None):
        self._config = config or Configuration()

    @property
    def config(self) -> Configuration:
        return self._config

    def evaluate(self, expression: str) -> str | None:
        """Devuelve el resultado formateado o None si no hay ningún valor.

        Raises:
            CalculatorError: cualquier error de la taxonomía interrumpe la
                evaluación sin resultado parcial.
        """
        return _Scan(expression, self._config).run()


class _Scan:
    """Estado de una única evaluación: nunca se comparte entre llamadas."""

    def __init__(self, expression: str, config: Configuration):
        self.expression = expression
        self.config = config
        self.dispatcher = ArithmeticDispatcher(use_radians=config.use_radians)
        self.operands: list[Decimal] = []
        self.operators: list[Operator] = []
        self.open_parentheses = 0
        self.position = 0
        self.last = TokenKind.START

    # ── Recorrido principal ──────────────────────────────────────

    def run(self) -> str | None:
        text = self.expression
        while self.position < len(text):
            char = text[self.position]
            if is_math_constant(char):
                self._read_constant(char)
            elif char == "√":
                self._read_root()
            elif char == "!":
                self._read_factorial()
            elif char in "+-" and self.last in OPERAND_EXPECTED:
                self._read_sign(char)
            elif char == "(":
                self._read_open_parenthesis()
            elif char == ")":
                self._read_close_parenthesis()
            elif is_operator_symbol(char):
                self._read_binary_operator(char)
            elif char.isalpha():
                self._read_function()
                continue
            elif is_digit_part(char):
                # 'e' y 'E' ya se han tratado como constante o nombre
                self._read_number()
                continue
            elif char.isspace():
                pass
            else:
                raise ExpressionSyntaxError(f"Carácter no permitido '{char}'")
            self.position += 1

        return self._finish()

    def _finish(self) -> str | None:
        if not self.operands:
            return None

        if self.config.balance_parentheses and self.open_parentheses > 0:
            logger.debug("Cerrando %d paréntesis pendientes", self.open_parentheses)
            while self.open_parentheses > 0:
                self._fold_to_open_parenthesis()
                if not self.operators:
                    raise UnbalancedParenthesesError(
                        "No se pudieron balancear los paréntesis de la expresión"
                    )
                self.operators.pop()
                self.open_parentheses -= 1

        while self.operators:
            operator = self.operators[-1]
            if operator is Operator.OPEN_PAREN:
                if not self.config.balance_parentheses:
                    raise UnbalancedParenthesesError()
                self.operators.pop()
                continue
            self._fold()

        if len(self.operands) != 1:
            raise ExpressionSyntaxError("Faltan operadores entre los valores")
        return format_result(self.operands[0], self.config.precision)

    # ── Tokens ───────────────────────────────────────────────────

    def _read_constant(self, char: str):
        if self.last in VALUE_KINDS:
            self._implicit_multiplication()
        self.operands.append(constant_value(char))
        self.last = TokenKind.CONSTANT

    def _read_root(self):
        if self.last in VALUE_KINDS:
            self._implicit_multiplication()
        self.operators.append(Operator.ROOT)
        self.last = TokenKind.ROOT

    def _read_factorial(self):
        if not self.operands or self.last not in VALUE_KINDS:
            raise ExpressionSyntaxError("El operador factorial '!' no tiene un número delante")
        self._fold_pending_functions()
        self._apply_unary(Operator.FACTORIAL)
        self.last = TokenKind.FACTORIAL

    def _read_sign(self, char: str):
        if char == "-":
            self.operators.append(Operator.NEGATE)
        self.last = TokenKind.SIGN

    def _read_open_parenthesis(self):
        if self.last in VALUE_KINDS:
            self._implicit_multiplication()
        self.operators.append(Operator.OPEN_PAREN)
        if self.config.balance_parentheses:
            self.open_parentheses += 1
        self.last = TokenKind.OPEN_PAREN

    def _read_close_parenthesis(self):
        if self.last in (TokenKind.BINARY_OPERATOR, TokenKind.SIGN, TokenKind.ROOT, TokenKind.FUNCTION):
            raise ExpressionSyntaxError("Carácter ')' inesperado después de un operador")
        if self.last is TokenKind.OPEN_PAREN:
            self.operands.append(Decimal(1))

        self._fold_to_open_parenthesis()
        if not self.operators:
            if not self.config.balance_parentheses:
                raise UnbalancedParenthesesError()
        else:
            self.operators.pop()
            if self.config.balance_parentheses:
                self.open_parentheses -= 1
            # sin(...), √(...), -(...): el prefijo se aplica al paréntesis recién cerrado
            if self.operators and self.operators[-1].is_unary:
                self._fold()
        self.last = TokenKind.CLOSE_PAREN

    def _read_binary_operator(self, char: str):
        if self.last in OPERAND_EXPECTED:
            raise ExpressionSyntaxError(f"Carácter '{char}' inesperado")
        if self.position == len(self.expression) - 1:
            # Un operador final se ignora: "2+" vale 2
            logger.debug("Operador final '%s' ignorado", char)
            return
        self._push_binary(operator_for(char))
        self.last = TokenKind.BINARY_OPERATOR

    def _read_function(self):
        text = self.expression
        start = self.position
        if self.last not in FUNCTION_PREDECESSORS:
            raise ExpressionSyntaxError(
                f"Carácter '{text[start]}' fuera de lugar después de '{text[start - 1]}'"
            )

        end = start
        while end < len(text) and text[end].isalpha():
            end += 1
        name = text[start:end]
        if name == "log" and text[end:end + 1] == "2":
            name = "log2"
            end += 1
        if name not in FUNCTION_NAMES:
            raise ExpressionSyntaxError(f'Token inválido "{name}" en la expresión')

        if self.last in VALUE_KINDS:
            self._implicit_multiplication()
        self.operators.append(FUNCTION_NAMES[name])
        self.position = end
        self.last = TokenKind.FUNCTION

    def _read_number(self):
        literal, end = self._scan_number_literal(self.position)
        if not NUMBER_PATTERN.fullmatch(literal):
            raise ExpressionSyntaxError(f'Número inválido "{literal}" en la expresión')

        if self.last in VALUE_KINDS:
            self._implicit_multiplication()
        self.operands.append(literal_value(literal))
        self.position = end
        self.last = TokenKind.NUMBER
        self._fold_pending_functions()

    def _scan_number_literal(self, start: int) -> tuple[str, int]:
        text = self.expression
        chars: list[str] = []
        has_separator = False
        has_exponent = False
        i = start
        while i < len(text) and is_digit_part(text[i]):
            char = text[i]
            if char in DECIMAL_SEPARATORS:
                if has_exponent:
                    raise ExpressionSyntaxError("Uso incorrecto de la notación E")
                if has_separator:
                    raise ExpressionSyntaxError("Un número sólo puede tener un separador decimal")
                has_separator = True
                chars.append(".")
            elif char in EXPONENT_MARKERS:
                if has_exponent:
                    break
                exponent = self._exponent_suffix(i)
                if exponent is None:
                    if char == "E":
                        raise ExpressionSyntaxError("Uso incorrecto de la notación E")
                    # 'e' sin dígitos detrás es la constante de Euler
                    break
                has_exponent = True
                chars.append(exponent)
                i += len(exponent)
                continue
            else:
                chars.append(char)
            i += 1
        return "".join(chars), i

    def _exponent_suffix(self, index: int) -> str | None:
        """Texto ``e[+-]d`` que empieza en ``index``, o None si no es un exponente."""
        text = self.expression
        suffix = text[index]
        following = text[index + 1:index + 2]
        if following in ("+", "-"):
            suffix += following
            following = text[index + 2:index + 3]
        if not is_digit(following):
            return None
        return suffix

    # ── Pilas ────────────────────────────────────────────────────

    def _implicit_multiplication(self):
        logger.debug("Multiplicación implícita en la posición %d", self.position)
        self._push_binary(Operator.MULTIPLY)

    def _push_binary(self, operator: Operator):
        while (
            self.operators
            and self.operators[-1] is not Operator.OPEN_PAREN
            and self.operators[-1].precedence >= operator.precedence
            and not operator.right_associative
        ):
            self._fold()
        self.operators.append(operator)

    @staticmethod
    def _is_pending_function(operator: Operator) -> bool:
        return operator.is_unary and operator is not Operator.NEGATE

    def _fold_pending_functions(self):
        # El menos unario espera a que su operando esté completo (potencias, factorial)
        while self.operators and self._is_pending_function(self.operators[-1]):
            self._fold()

    def _fold_to_open_parenthesis(self):
        while self.operators and self.operators[-1] is not Operator.OPEN_PAREN:
            self._fold()

    def _fold(self):
        operator = self.operators.pop()
        if operator.is_unary:
            self._apply_unary(operator)
            return
        if len(self.operands) < 2:
            raise ExpressionSyntaxError(f"Falta un operando para '{operator.value}'")
        right = self.operands.pop()
        left = self.operands.pop()
        self.operands.append(self.dispatcher.apply_binary(left, operator, right))

    def _apply_unary(self, operator: Operator):
        if not self.operands:
            raise ExpressionSyntaxError(f"Falta un operando para '{operator.value}'")
        self.operands.append(self.dispatcher.apply_unary(operator, self.operands.pop()))
