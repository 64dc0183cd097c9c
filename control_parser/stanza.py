"""
control_parser/stanza.py — parser indeksów w formacie pliku control (Debian).

Gramatyka (bajtowa; ':' i '\\n' to jedyne znaki strukturalne):

  key        := byte+ bez ':'; niepusty; nie zaczyna się od '\\n'
  separator  := ':' (spacja | tab)*
  value      := byte* do następnego '\\n' (bez niego)
  key_value  := key separator value
  stanza     := (key_value '\\n')+
  record     := stanza '\\n'
  document   := record+

Linie kontynuacji i wartości wieloliniowe nie są obsługiwane.

Publiczne API:
  parse_key_value(data)           -> (key, value, remainder)
  parse_stanza(data)              -> (pairs, remainder)
  extract_field(data, field)      -> (value, remainder)
  extract_field_all(data, field)  -> (values, remainder)
  extract_package_names(data)     -> (names, remainder)
  dump_stanza(pairs)              -> bytes
"""

from __future__ import annotations

from typing import TypeAlias

from .errors import ErrorCode, GrammarError, MissingFieldError, ParseError
from .scan import expect, fail, skip_space0, take_until

# Para (klucz, wartość) jednej linii stanzy.
Pair: TypeAlias = tuple[bytes, bytes]

PACKAGE_FIELD = b"Package"

_NEWLINE = b"\n"


def _as_bytes(field: bytes | str) -> bytes:
    return field.encode("utf-8") if isinstance(field, str) else field


# ---------------------------------------------------------------------------
# Implementacja pozycyjna (bez kopiowania reszty)
# ---------------------------------------------------------------------------

def _key_value_at(data: bytes, pos: int) -> tuple[bytes, bytes, int]:
    """Zwraca (key, value, nl) — nl to indeks kończącego '\\n' (nieskonsumowany)."""
    colon = take_until(data, pos, b":", ErrorCode.NO_SEPARATOR)
    if colon == pos:
        raise fail(ErrorCode.EMPTY_KEY, data, pos)
    if data[pos] == 0x0A:
        raise fail(ErrorCode.KEY_STARTS_WITH_NEWLINE, data, pos)
    start = skip_space0(data, colon + 1)
    nl = take_until(data, start, _NEWLINE, ErrorCode.UNTERMINATED_LINE)
    return data[pos:colon], data[start:nl], nl


def _stanza_at(data: bytes, pos: int) -> tuple[list[Pair], int]:
    """Jedna lub więcej linii key_value; zwraca pary i pozycję za ostatnim '\\n'."""
    pairs: list[Pair] = []
    end = len(data)
    while True:
        # pusta linia / koniec danych kończą stanzę bez budowania wyjątku
        if pairs and (pos == end or data[pos] == 0x0A):
            break
        try:
            key, value, nl = _key_value_at(data, pos)
        except GrammarError:
            if pairs:
                break
            raise
        pairs.append((key, value))
        pos = nl + 1
    return pairs, pos


def _field_at(data: bytes, pos: int, field: bytes) -> tuple[bytes, int]:
    pairs, end = _stanza_at(data, pos)
    for key, value in pairs:
        if key == field:
            return value, end
    raise MissingFieldError(field, data, pos)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_key_value(data: bytes) -> tuple[bytes, bytes, bytes]:
    """
    Parsuje jedną linię `key: value` z początku data.

    Reszta zaczyna się od kończącego linię '\\n'.

    Raises:
        GrammarError: brak ':', pusty klucz, klucz od '\\n' lub brak '\\n'.
    """
    key, value, nl = _key_value_at(data, 0)
    return key, value, data[nl:]


def parse_stanza(data: bytes) -> tuple[list[Pair], bytes]:
    """
    Parsuje jedną stanzę (≥1 linia key: value zakończona '\\n').

    Pusta linia kończąca stanzę NIE jest konsumowana — zostaje w reszcie.
    """
    pairs, end = _stanza_at(data, 0)
    return pairs, data[end:]


def extract_field(data: bytes, field: bytes | str) -> tuple[bytes, bytes]:
    """
    Parsuje jedną stanzę i zwraca wartość pierwszego pola o nazwie field.

    Raises:
        GrammarError:      stanza niepoprawna składniowo.
        MissingFieldError: stanza poprawna, ale bez pola field.
    """
    value, end = _field_at(data, 0, _as_bytes(field))
    return value, data[end:]


def extract_field_all(data: bytes, field: bytes | str) -> tuple[list[bytes], bytes]:
    """
    Zbiera wartość pola field z kolejnych rekordów (stanza + pusta linia).

    Zatrzymuje się bez wyjątku na pierwszym rekordzie, który nie parsuje się
    w całości (zła składnia, brak pola, brak pustej linii, koniec danych).
    Niepusta reszta to sygnał dla wywołującego do zalogowania ostrzeżenia.
    """
    name = _as_bytes(field)
    values: list[bytes] = []
    pos = 0
    while True:
        try:
            value, end = _field_at(data, pos, name)
            end = expect(data, end, _NEWLINE, ErrorCode.MISSING_BLANK_LINE)
        except ParseError:
            break
        values.append(value)
        pos = end
    return values, data[pos:]


def extract_package_names(data: bytes) -> tuple[list[bytes], bytes]:
    """Skrót: extract_field_all(data, b"Package") dla pliku Packages."""
    return extract_field_all(data, PACKAGE_FIELD)


def dump_stanza(pairs: list[Pair]) -> bytes:
    """Serializuje pary z powrotem do linii `key: value\\n` (bez pustej linii)."""
    return b"".join(key + b": " + value + _NEWLINE for key, value in pairs)
