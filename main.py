"""Punto de entrada de la calculadora en línea de comandos."""

from __future__ import annotations

import argparse
import logging
import sys

from calculator_config import DEFAULT_PRECISION, Configuration
from calculator_engine import CalculatorEngine, SolvingMethod
from calculator_errors import CalculatorError

EXIT_OK = 0
EXIT_CALCULATION_ERROR = 1
EXIT_USAGE_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calculadora",
        description="Evalúa expresiones aritméticas con precisión configurable.",
    )
    parser.add_argument(
        "expressions",
        nargs="*",
        help="Expresiones a evaluar. Sin expresiones se leen líneas de la entrada estándar.",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        help="Decimales del resultado (mínimo 3).",
    )
    parser.add_argument(
        "-b",
        "--balance-parentheses",
        action="store_true",
        help="Cierra o abre automáticamente los paréntesis que falten.",
    )
    parser.add_argument(
        "-d",
        "--degrees",
        action="store_true",
        help="Las funciones trigonométricas trabajan en grados.",
    )
    parser.add_argument(
        "--rpn",
        action="store_true",
        help="Interpreta las expresiones en notación polaca inversa.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Muestra trazas de depuración.")
    return parser


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def run(engine: CalculatorEngine, expressions) -> int:
    status = EXIT_OK
    for expression in expressions:
        try:
            result = engine.evaluate(expression)
        except CalculatorError as exc:
            _eprint(f"error: {exc.message}")
            status = EXIT_CALCULATION_ERROR
            continue
        print("" if result is None else result)
    return status


def main(argv: list[str] | None = None) -> int:
    try:
        args = _build_parser().parse_args(argv)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_USAGE_ERROR

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = Configuration(
        precision=args.precision,
        balance_parentheses=args.balance_parentheses,
        use_radians=not args.degrees,
    )
    method = SolvingMethod.REVERSE_POLISH_NOTATION if args.rpn else SolvingMethod.SHUNTING_YARD
    engine = CalculatorEngine(config, method)

    expressions = args.expressions or (line.rstrip("\n") for line in sys.stdin)
    return run(engine, expressions)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
