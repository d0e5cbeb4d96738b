"""Configuración inmutable de una evaluación."""

from __future__ import annotations

from dataclasses import dataclass, replace

MIN_PRECISION = 3
DEFAULT_PRECISION = 12


@dataclass(frozen=True)
class Configuration:
    """Precisión del resultado, balanceo de paréntesis y unidad angular.

    La precisión nunca baja de ``MIN_PRECISION``: valores menores se
    sustituyen por el mínimo al construir el objeto.
    """

    precision: int = DEFAULT_PRECISION
    balance_parentheses: bool = False
    use_radians: bool = True

    def __post_init__(self):
        object.__setattr__(self, "precision", max(int(self.precision), MIN_PRECISION))

    def with_changes(self, **changes) -> "Configuration":
        return replace(self, **changes)
