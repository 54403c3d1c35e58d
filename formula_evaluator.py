"""Parseo y evaluación de expresiones canónicas de la calculadora.

Gramática (descenso recursivo)::

    expr    := term (('+'|'-') term)*
    term    := factor (('*'|'/') factor)*
    factor  := unary ('^' factor)?
    unary   := ('+'|'-') unary | call
    call    := ident '(' expr ')' | primary
    primary := number | 'Infinity' | '(' expr ')'

Toda la aritmética sigue IEEE-754 en doble precisión: las excepciones de
``math`` se traducen a infinitos o NaN en lugar de propagarse.
"""

import math
import re


class FormulaSyntaxError(ValueError):
    """La expresión no se puede consumir completa con la gramática."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (posición {position})")
        self.position = position


def _ieee_log(fn):
    def w(x):
        try:
            return fn(x)
        except ValueError:
            # log(0) = -inf, log(x < 0) = NaN
            return -math.inf if x == 0 else math.nan

    return w


def _ieee_trig(fn):
    def w(x):
        try:
            return fn(x)
        except ValueError:
            # sin(±inf), cos(±inf), tan(±inf)
            return math.nan

    return w


class PythonMathProvider:
    """Provee las funciones con nombre que admite la gramática."""

    def build_namespace(self) -> dict:
        return {
            "sin": _ieee_trig(math.sin),
            "cos": _ieee_trig(math.cos),
            "tan": _ieee_trig(math.tan),
            "ln": _ieee_log(math.log),
            "log": _ieee_log(math.log10),
        }


def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == int(y) and int(y) % 2 == 1


def _power(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0 and y < 0:
            if _is_odd_integer(y):
                return math.copysign(math.inf, x)
            return math.inf
        return math.nan


_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?)
  | (?P<name>[A-Za-z]+)
  | (?P<op>[-+*/^()])
  | (?P<space>\s+)
    """,
    re.VERBOSE | re.ASCII,
)


class FormulaEvaluator:
    """Evalúa una expresión canónica y devuelve un ``float``.

    Raises:
        FormulaSyntaxError: token desconocido, paréntesis sin cerrar,
            operando ausente o tokens sin consumir.
    """

    _CONSTANTS = {"Infinity": math.inf}

    def __init__(self, provider: PythonMathProvider | None = None):
        self._functions = (provider or PythonMathProvider()).build_namespace()
        self._tokens = []
        self._pos = 0

    def evaluate(self, expression: str) -> float:
        self._tokens = self._tokenize(expression)
        self._pos = 0
        try:
            value = self._expr()
            kind, text, position = self._peek()
            if kind != "end":
                raise FormulaSyntaxError(f"Token inesperado {text!r}", position)
            return value
        finally:
            self._tokens = []

    # ── Léxico ───────────────────────────────────────────────────

    def _tokenize(self, expression: str) -> list:
        tokens = []
        pos = 0
        while pos < len(expression):
            match = _TOKEN_RE.match(expression, pos)
            if match is None:
                raise FormulaSyntaxError(
                    f"Carácter no permitido {expression[pos]!r}", pos
                )
            kind = match.lastgroup
            text = match.group(0)
            if kind == "name" and text not in self._functions and text not in self._CONSTANTS:
                raise FormulaSyntaxError(f"Identificador desconocido {text!r}", pos)
            if kind != "space":
                tokens.append((kind, text, pos))
            pos = match.end()
        tokens.append(("end", "", len(expression)))
        return tokens

    def _peek(self):
        return self._tokens[self._pos]

    def _advance(self):
        token = self._tokens[self._pos]
        if token[0] != "end":
            self._pos += 1
        return token

    def _accept(self, *ops: str):
        kind, text, _ = self._peek()
        if kind == "op" and text in ops:
            self._advance()
            return text
        return None

    def _expect(self, op: str):
        kind, text, position = self._peek()
        if kind != "op" or text != op:
            found = repr(text) if kind != "end" else "fin de la expresión"
            raise FormulaSyntaxError(f"Se esperaba {op!r} y se encontró {found}", position)
        self._advance()

    # ── Gramática ────────────────────────────────────────────────

    def _expr(self) -> float:
        value = self._term()
        while True:
            op = self._accept("+", "-")
            if op is None:
                return value
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs

    def _term(self) -> float:
        value = self._factor()
        while True:
            op = self._accept("*", "/")
            if op is None:
                return value
            rhs = self._factor()
            value = value * rhs if op == "*" else _divide(value, rhs)

    def _factor(self) -> float:
        base = self._unary()
        if self._accept("^"):
            return _power(base, self._factor())
        return base

    def _unary(self) -> float:
        op = self._accept("+", "-")
        if op == "-":
            return -self._unary()
        if op == "+":
            return self._unary()
        return self._call()

    def _call(self) -> float:
        kind, text, _ = self._peek()
        if kind == "name" and text in self._functions:
            self._advance()
            self._expect("(")
            argument = self._expr()
            self._expect(")")
            return self._functions[text](argument)
        return self._primary()

    def _primary(self) -> float:
        kind, text, position = self._advance()
        if kind == "number":
            return float(text)
        if kind == "name" and text in self._CONSTANTS:
            return self._CONSTANTS[text]
        if kind == "op" and text == "(":
            value = self._expr()
            self._expect(")")
            return value
        found = repr(text) if kind != "end" else "fin de la expresión"
        raise FormulaSyntaxError(f"Falta un operando, se encontró {found}", position)
