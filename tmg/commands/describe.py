"""Komenda: tmg describe — sekcja "Topic Description" z zapisanej treści PR."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from control_parser import extract_topic_description

console = Console()


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def run(args: argparse.Namespace) -> None:
    try:
        data = _read_input(args.file)
    except OSError as e:
        console.print(f"[red]Nie można odczytać pliku:[/red] {e}")
        raise SystemExit(1)

    section = extract_topic_description(data)
    if section is None:
        console.print("[yellow]Brak sekcji Topic Description.[/yellow]")
        raise SystemExit(1)

    text = section.decode("utf-8", errors="replace")
    if not args.raw:
        text = text.replace("\r\n", "\n").strip()
    console.print(escape(text), highlight=False)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "describe",
        help="Wycina sekcję \"Topic Description\" z treści pull requesta.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wycina opis tematu z treści PR: od nagłówka "Topic Description" (podkreślonego
myślnikami) do linii "Package(s) Affected".

Przykłady:
  tmg describe pr-body.md
  gh pr view 123 --json body -q .body | tmg describe -
        """,
    )
    p.add_argument(
        "file",
        metavar="PLIK",
        help="Plik z treścią PR ('-' = stdin).",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        help="Nie przycinaj białych znaków wokół sekcji.",
    )
    p.set_defaults(func=run)
