"""
control_parser/section.py — wycinanie sekcji opisu z treści pull requesta.

Oczekiwany układ (markdown, nagłówek podkreślony myślnikami):

  ...
  Topic Description
  -----------------

  <treść opisu>

  Package(s) Affected
  ...

Algorytm (wszystko albo nic):
  1. znajdź start_marker
  2. od niego znajdź pierwszy bajt underline_char
  3. pomiń resztę tej linii i ≥1 bajt białych znaków (puste linie, \\r)
  4. znajdź end_marker na początku linii ('\\n' + end_marker)
  5. zwróć bajty pomiędzy — bez '\\n' poprzedzającego end_marker, bez trimowania
"""

from __future__ import annotations

from .errors import ErrorCode, GrammarError
from .scan import skip_multispace1, take_until

TOPIC_DESCRIPTION_MARKER = b"Topic Description"
HEADING_UNDERLINE        = b"-"
PACKAGES_AFFECTED_MARKER = b"Package(s) Affected"


def _section_bounds(
    data: bytes,
    start_marker: bytes,
    underline_char: bytes,
    end_marker: bytes,
) -> tuple[int, int]:
    pos = take_until(data, 0, start_marker, ErrorCode.MARKER_NOT_FOUND)
    pos = take_until(data, pos, underline_char, ErrorCode.MARKER_NOT_FOUND)
    pos = take_until(data, pos, b"\n", ErrorCode.UNTERMINATED_LINE)
    start = skip_multispace1(data, pos, ErrorCode.MISSING_BLANK_LINE)
    end = take_until(data, start, b"\n" + end_marker, ErrorCode.MARKER_NOT_FOUND)
    return start, end


def extract_section(
    data: bytes,
    start_marker: bytes,
    underline_char: bytes,
    end_marker: bytes,
) -> bytes | None:
    """
    Zwraca treść sekcji pomiędzy nagłówkiem start_marker a linią end_marker.

    None gdy którykolwiek marker nie istnieje albo występują w złej kolejności.
    Końcowe puste linie przed end_marker zostają w wyniku (poza ostatnim '\\n').
    """
    try:
        start, end = _section_bounds(data, start_marker, underline_char, end_marker)
    except GrammarError:
        return None
    return data[start:end]


def extract_topic_description(data: bytes) -> bytes | None:
    """extract_section ze stałymi markerami szablonu PR repozytorium pakietów."""
    return extract_section(
        data,
        TOPIC_DESCRIPTION_MARKER,
        HEADING_UNDERLINE,
        PACKAGES_AFFECTED_MARKER,
    )
