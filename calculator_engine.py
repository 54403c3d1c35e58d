"""
Motor de cálculo de la calculadora.

Este módulo provee la clase CalculatorEngine, que recibe la expresión del
filtro de entrada (en forma canónica o de pantalla), recorta operadores
finales, la evalúa y devuelve un resultado estructurado.

Contrato de interfaz:
    - evaluate(expression: str) -> EvaluationOutcome
    - evaluate_with_callback(expression, callback) -> None
"""

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable

from mpmath import mp

from formula_evaluator import FormulaEvaluator, FormulaSyntaxError, PythonMathProvider
from locale_tokenizer import LocaleTokenizer
from string_resources import ResourceLookup

logger = logging.getLogger(__name__)


MAX_DIGITS = 12
TRAILING_OPERATORS = "+-*/^"


class ErrorKind(enum.Enum):
    NONE = None
    SYNTAX = "error_syntax"
    NOT_A_NUMBER = "error_nan"

    @property
    def resource_name(self) -> str | None:
        """Nombre del recurso de cadena con el mensaje para el usuario."""
        return self.value


@dataclass(frozen=True)
class EvaluationOutcome:
    """Resultado de una evaluación: valor, expresión incompleta o error.

    ``expression`` es siempre la expresión normalizada y recortada que se
    intentó evaluar.
    """

    expression: str
    value: str | None = None
    error: ErrorKind = ErrorKind.NONE

    @property
    def is_value(self) -> bool:
        return self.value is not None

    @property
    def is_error(self) -> bool:
        return self.error is not ErrorKind.NONE

    @property
    def is_incomplete(self) -> bool:
        return self.value is None and self.error is ErrorKind.NONE


EvaluationCallback = Callable[[str, "str | None", ErrorKind], None]


class CalculatorEngine:
    """Evalúa expresiones de la calculadora; no guarda estado entre llamadas."""

    def __init__(
        self,
        tokenizer: LocaleTokenizer | None = None,
        provider: PythonMathProvider | None = None,
    ):
        self._tokenizer = tokenizer or LocaleTokenizer()
        self._provider = provider or PythonMathProvider()

    @property
    def tokenizer(self) -> LocaleTokenizer:
        return self._tokenizer

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> EvaluationOutcome:
        """Evalúa la expresión.

        Nunca lanza excepciones por el contenido de la expresión: los
        errores de sintaxis y los NaN se devuelven como ``ErrorKind``.
        """
        expr = self._tokenizer.normalize(expression).strip()
        expr = expr.rstrip(TRAILING_OPERATORS + " ")
        if not expr:
            return EvaluationOutcome(expr)

        try:
            value = FormulaEvaluator(self._provider).evaluate(expr)
        except FormulaSyntaxError as exc:
            logger.debug("Error de sintaxis en %r: %s", expr, exc)
            return EvaluationOutcome(expr, error=ErrorKind.SYNTAX)
        except RecursionError:
            logger.debug("Anidamiento excesivo en %r", expr)
            return EvaluationOutcome(expr, error=ErrorKind.SYNTAX)

        if math.isnan(value):
            return EvaluationOutcome(expr, error=ErrorKind.NOT_A_NUMBER)
        if math.isinf(value):
            sign = self._tokenizer.glyph("-") if value < 0 else ""
            return EvaluationOutcome(expr, sign + self._tokenizer.glyph("Infinity"))
        return EvaluationOutcome(expr, self._tokenizer.localize(self._format_result(value)))

    def evaluate_with_callback(self, expression: str, callback: EvaluationCallback) -> None:
        """Adaptador para anfitriones que esperan una retrollamada.

        La retrollamada se invoca exactamente una vez antes de volver.
        """
        outcome = self.evaluate(expression)
        callback(outcome.expression, outcome.value, outcome.error)

    @staticmethod
    def error_message(kind: ErrorKind, lookup: ResourceLookup) -> str | None:
        if kind is ErrorKind.NONE:
            return None
        return lookup(kind.resource_name)

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def _format_result(value: float) -> str:
        if value == 0:
            return "0"

        with mp.workprec(53):
            text = mp.nstr(mp.mpf(value), n=MAX_DIGITS)

        mantissa, sep, exponent = text.partition("e")
        if "." in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(".")
        return mantissa + sep + exponent
