"""
control_parser — parsery bajtowe: indeksy Packages i sekcja opisu tematu.

Interfejs publiczny:
    parse_key_value, parse_stanza, extract_field, extract_field_all,
    extract_package_names, dump_stanza      — parser stanz (stanza.py)
    extract_section, extract_topic_description — ekstraktor sekcji (section.py)
    ErrorCode, ParseError, GrammarError, MissingFieldError — typy błędów

Typowe użycie:
    from control_parser import extract_package_names

    names, rest = extract_package_names(Path("Packages").read_bytes())
    if rest:
        log.warning("%d bytes remain unparsed", len(rest))
"""

from .errors import ErrorCode, GrammarError, MissingFieldError, ParseError
from .section import (
    HEADING_UNDERLINE,
    PACKAGES_AFFECTED_MARKER,
    TOPIC_DESCRIPTION_MARKER,
    extract_section,
    extract_topic_description,
)
from .stanza import (
    PACKAGE_FIELD,
    Pair,
    dump_stanza,
    extract_field,
    extract_field_all,
    extract_package_names,
    parse_key_value,
    parse_stanza,
)

__all__ = [
    # errors
    "ErrorCode",
    "ParseError",
    "GrammarError",
    "MissingFieldError",
    # stanza
    "PACKAGE_FIELD",
    "Pair",
    "parse_key_value",
    "parse_stanza",
    "extract_field",
    "extract_field_all",
    "extract_package_names",
    "dump_stanza",
    # section
    "TOPIC_DESCRIPTION_MARKER",
    "HEADING_UNDERLINE",
    "PACKAGES_AFFECTED_MARKER",
    "extract_section",
    "extract_topic_description",
]
