"""Tabla de cadenas que el anfitrión expone al motor.

El motor nunca lee configuración del entorno: todo lo que depende del
idioma (glifos de operadores, nombres de funciones, mensajes de error)
llega como una búsqueda ``nombre -> cadena`` inyectada al construir el
tokenizador.
"""

from __future__ import annotations

from typing import Callable, Mapping

ResourceLookup = Callable[[str], str]


DEFAULT_STRINGS = {
    "op_div": "÷",
    "op_mul": "×",
    "op_sub": "−",
    "inf": "∞",
    "fun_sin": "sin",
    "fun_cos": "cos",
    "fun_tan": "tan",
    "fun_ln": "ln",
    "fun_log": "log",
    "error_syntax": "Error",
    "error_nan": "Not a number",
}


class StringResources:
    """Búsqueda de cadenas con sobrescrituras del anfitrión sobre una base.

    ``decimal_point`` y ``zero_digit`` son opcionales: si el anfitrión no
    los define, el separador decimal y los dígitos se dejan tal cual.
    """

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        base: Mapping[str, str] = DEFAULT_STRINGS,
    ):
        self._strings = dict(base)
        if overrides:
            self._strings.update(overrides)

    def get_string(self, name: str) -> str:
        try:
            return self._strings[name]
        except KeyError:
            raise KeyError(f"Recurso de cadena desconocido: {name}") from None

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._strings.get(name, default)

    def __call__(self, name: str) -> str:
        return self.get_string(name)

    def __contains__(self, name: str) -> bool:
        return name in self._strings
