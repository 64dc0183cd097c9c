"""
control_parser/scan.py — prymitywy skanowania bufora bajtów.

Wszystkie funkcje przyjmują (data, pos) i zwracają nową pozycję (int);
nie kopiują danych. Porażka → GrammarError z pozycją startową.

  take_until(data, pos, token, code) -> int   indeks pierwszego wystąpienia token
  skip_space0(data, pos)             -> int   pomija spacje i tabulatory
  skip_multispace1(data, pos)        -> int   pomija ≥1 bajt z " \\t\\r\\n"
  expect(data, pos, token, code)     -> int   wymaga literału token w pos
"""

from __future__ import annotations

from .errors import ErrorCode, GrammarError

_SPACE = b" \t"
_MULTISPACE = b" \t\r\n"


def fail(code: ErrorCode, data: bytes, pos: int) -> GrammarError:
    """Buduje GrammarError z resztą od pozycji pos."""
    return GrammarError(code, data, pos)


def take_until(data: bytes, pos: int, token: bytes, code: ErrorCode) -> int:
    idx = data.find(token, pos)
    if idx < 0:
        raise fail(code, data, pos)
    return idx


def skip_space0(data: bytes, pos: int) -> int:
    end = len(data)
    while pos < end and data[pos] in _SPACE:
        pos += 1
    return pos


def skip_multispace1(data: bytes, pos: int, code: ErrorCode) -> int:
    start = pos
    end = len(data)
    while pos < end and data[pos] in _MULTISPACE:
        pos += 1
    if pos == start:
        raise fail(code, data, start)
    return pos


def expect(data: bytes, pos: int, token: bytes, code: ErrorCode) -> int:
    if not data.startswith(token, pos):
        raise fail(code, data, pos)
    return pos + len(token)
