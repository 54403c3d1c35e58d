"""Filtro de entrada: mantiene bien formada la expresión mientras se edita."""

import logging

from locale_tokenizer import LocaleTokenizer

logger = logging.getLogger(__name__)


BINARY_OPERATORS = "+-*/^"
SIGN_OPERATORS = "+-"
DIGITS = "0123456789"


class InputFilter:
    """Búfer de edición que corrige cada inserción antes de aplicarla.

    El búfer se guarda en forma canónica; los índices de ``replace`` se
    refieren a él. Las inserciones pueden llegar en forma de pantalla.

    Invariantes del búfer tras cualquier edición:
        - no empieza (ni empieza un grupo ``(``) con ``*``, ``/`` o ``^``;
        - no hay dos operadores binarios seguidos;
        - cada número tiene como mucho un ``.``.
    """

    def __init__(
        self,
        text: str = "",
        tokenizer: LocaleTokenizer | None = None,
        edited_since_result: bool = True,
    ):
        self._tokenizer = tokenizer or LocaleTokenizer()
        self._buffer = self._feed("", self._tokenizer.normalize(text))
        self._edited = edited_since_result

    # ── Acceso ───────────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._buffer

    @property
    def display_text(self) -> str:
        return self._tokenizer.localize(self._buffer)

    @property
    def edited_since_result(self) -> bool:
        return self._edited

    def __str__(self) -> str:
        return self._buffer

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"InputFilter({self._buffer!r}, edited_since_result={self._edited})"

    # ── Edición ──────────────────────────────────────────────────

    def reset(self, text: str = "", edited_since_result: bool = True):
        self._buffer = self._feed("", self._tokenizer.normalize(text))
        self._edited = edited_since_result

    def append(self, insertion: str):
        end = len(self._buffer)
        self.replace(end, end, insertion)

    def replace(self, start: int, end: int, insertion: str):
        """Sustituye ``[start, end)`` por ``insertion`` aplicando las reglas."""
        buffer = self._buffer
        if not 0 <= start <= end <= len(buffer):
            raise IndexError(
                f"Rango de edición fuera del búfer: [{start}, {end}) en {len(buffer)}"
            )

        text = self._tokenizer.normalize(insertion or "")
        head, tail = buffer[:start], buffer[end:]

        # Primera tecla tras mostrar un resultado: empieza otra expresión,
        # salvo un operador que no puede abrirla, que continúa el resultado.
        if not self._edited and start == end == len(buffer):
            result = self._feed("", text)
            if not result and text:
                result = self._feed(head, text)
            else:
                head = ""
        else:
            result = self._feed(head, text)
        if start == end and result == head:
            if text:
                logger.debug("Inserción descartada: %r en %r", text, buffer)
            return

        self._buffer = self._feed(result, tail)
        self._edited = True

    @classmethod
    def _feed(cls, out: str, text: str) -> str:
        for char in text:
            out = cls._feed_char(out, char)
        return out

    @staticmethod
    def _starts_group(out: str) -> bool:
        return not out or out[-1] == "("

    @classmethod
    def _feed_char(cls, out: str, char: str) -> str:
        if char in BINARY_OPERATORS:
            if out and out[-1] in BINARY_OPERATORS:
                # Un operador sustituye al anterior.
                replaced = out[:-1]
                if char not in SIGN_OPERATORS and cls._starts_group(replaced):
                    return out
                return replaced + char
            if char not in SIGN_OPERATORS and cls._starts_group(out):
                return out
            return out + char

        if char == ".":
            i = len(out)
            while i > 0 and (out[i - 1] in DIGITS or out[i - 1] == "."):
                i -= 1
            if "." in out[i:]:
                return out

        return out + char
