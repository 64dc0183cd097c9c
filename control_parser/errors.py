"""
control_parser/errors.py — kody błędów i wyjątki parserów bajtowych.

Dwie klasy porażek:
  GrammarError      — wejście nie pasuje do gramatyki w bieżącej pozycji
                      (brak ':', klucz od '\\n', brak pustej linii, urwana linia)
  MissingFieldError — stanza poprawna składniowo, ale bez wymaganego pola

Oba wyjątki niosą pozycję (offset w wejściu) i nieskonsumowaną resztę,
żeby wywołujący mógł zalogować diagnostykę zamiast przerywać przetwarzanie.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stałe kody błędów parsera stanz."""

    # składnia pojedynczej linii key: value
    NO_SEPARATOR              = "E_NO_SEPARATOR"
    EMPTY_KEY                 = "E_EMPTY_KEY"
    KEY_STARTS_WITH_NEWLINE   = "E_KEY_STARTS_WITH_NEWLINE"
    UNTERMINATED_LINE         = "E_UNTERMINATED_LINE"

    # składnia dokumentu
    MISSING_BLANK_LINE        = "E_MISSING_BLANK_LINE"

    # semantyka
    FIELD_MISSING             = "E_FIELD_MISSING"

    # sekcja opisu
    MARKER_NOT_FOUND          = "E_MARKER_NOT_FOUND"


class ParseError(Exception):
    """
    Bazowy wyjątek parsera.

    - code:      ErrorCode
    - position:  offset w buforze wejściowym, w którym dopasowanie zawiodło
    - remainder: data[position:] — nieskonsumowana reszta wejścia (liczona
                 dopiero przy odczycie; sam wyjątek nie kopiuje bufora)
    """

    def __init__(self, code: ErrorCode, data: bytes, position: int, message: str = "") -> None:
        self.code = code
        self.position = position
        self._data = data
        super().__init__(message or f"{code} at offset {position}")

    @property
    def remainder(self) -> bytes:
        return self._data[self.position:]


class GrammarError(ParseError):
    """Porażka składniowa: wejście nie pasuje do gramatyki."""


class MissingFieldError(ParseError):
    """Porażka semantyczna: stanza poprawna, ale bez wymaganego pola."""

    def __init__(self, field: bytes, data: bytes, position: int) -> None:
        self.field = field
        super().__init__(
            ErrorCode.FIELD_MISSING,
            data,
            position,
            f"brak pola {field!r} w stanzie (offset {position})",
        )
