"""Traducción entre la forma canónica de una expresión y la que ve el usuario.

La forma canónica usa ``/``, ``*``, ``-``, dígitos ASCII e ``Infinity``;
la forma de pantalla usa los glifos que define el idioma activo
(``÷``, ``×``, ``−``, ``∞``, dígitos locales...).
"""

import re

from string_resources import ResourceLookup, StringResources


class GlyphTableError(ValueError):
    """La tabla de glifos no es biyectiva."""


# (token canónico, nombre del recurso con su glifo)
_GLYPH_RESOURCES = (
    ("/", "op_div"),
    ("*", "op_mul"),
    ("-", "op_sub"),
    ("cos", "fun_cos"),
    ("ln", "fun_ln"),
    ("log", "fun_log"),
    ("sin", "fun_sin"),
    ("tan", "fun_tan"),
    ("Infinity", "inf"),
)


def _optional(lookup: ResourceLookup, name: str):
    try:
        return lookup(name)
    except KeyError:
        return None


def _alternation(tokens) -> re.Pattern:
    # Los tokens más largos primero: coincidencia más larga en cada posición.
    ordered = sorted(tokens, key=len, reverse=True)
    return re.compile("|".join(re.escape(t) for t in ordered))


class LocaleTokenizer:
    """Reescritor bidireccional entre tokens canónicos y glifos locales.

    Se construye una sola vez a partir de la búsqueda de cadenas del
    anfitrión y no cambia después; puede compartirse entre filtros y
    evaluadores.
    """

    def __init__(self, lookup: ResourceLookup | None = None):
        if lookup is None:
            lookup = StringResources()

        table = {}

        decimal_point = _optional(lookup, "decimal_point")
        if decimal_point is not None:
            table["."] = decimal_point

        zero_digit = _optional(lookup, "zero_digit")
        if zero_digit is not None:
            if len(zero_digit) != 1:
                raise GlyphTableError(
                    f"zero_digit debe ser un solo carácter: {zero_digit!r}"
                )
            for i in range(10):
                table[str(i)] = chr(ord(zero_digit) + i)

        for canonical, name in _GLYPH_RESOURCES:
            table[canonical] = lookup(name)

        self._to_display = table
        self._to_canonical = self._invert(table)
        self._canonical_re = _alternation(self._to_display)
        self._display_re = _alternation(self._to_canonical)

    @staticmethod
    def _invert(table: dict) -> dict:
        inverse = {}
        for canonical, display in table.items():
            if not display:
                raise GlyphTableError(f"Glifo vacío para {canonical!r}")
            if display in inverse:
                raise GlyphTableError(
                    f"{inverse[display]!r} y {canonical!r} comparten el glifo {display!r}"
                )
            inverse[display] = canonical
        return inverse

    def glyph(self, canonical: str) -> str:
        """Glifo de pantalla de un único token canónico."""
        return self._to_display.get(canonical, canonical)

    def localize(self, expression: str) -> str:
        """Forma canónica → forma de pantalla, en una sola pasada."""
        return self._canonical_re.sub(
            lambda m: self._to_display[m.group(0)], expression
        )

    def normalize(self, expression: str) -> str:
        """Forma de pantalla → forma canónica, en una sola pasada."""
        return self._display_re.sub(
            lambda m: self._to_canonical[m.group(0)], expression
        )
