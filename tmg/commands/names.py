"""Komenda: tmg names — wypisuje wartości pola z pliku indeksu Packages."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from control_parser import PACKAGE_FIELD, extract_field_all

console = Console()


def run(args: argparse.Namespace) -> None:
    path = Path(args.packages_file)
    try:
        data = path.read_bytes()
    except OSError as e:
        console.print(f"[red]Nie można odczytać pliku:[/red] {e}")
        raise SystemExit(1)

    values, rest = extract_field_all(data, args.field)

    for value in values:
        console.print(escape(value.decode("utf-8", errors="replace")), highlight=False)

    if rest:
        console.print(
            f"[yellow]Parser napotkał problemy, {len(rest)} bajtów nie zostało "
            f"sparsowanych (offset {len(data) - len(rest)}).[/yellow]"
        )
    console.print(f"  [dim]{len(values)} wartości pola {args.field}[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "names",
        help="Wypisuje nazwy pakietów (lub inne pole) z pliku Packages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje plik indeksu Packages (stanze key: value oddzielone pustą linią)
i wypisuje wartość wskazanego pola z każdej stanzy, w kolejności pliku.

Przykłady:
  tmg names dists/topic/main/binary-amd64/Packages
  tmg names Packages --field Version
        """,
    )
    p.add_argument(
        "packages_file",
        metavar="PACKAGES",
        help="Ścieżka do pliku indeksu Packages.",
    )
    p.add_argument(
        "--field",
        metavar="POLE",
        default=PACKAGE_FIELD.decode("ascii"),
        help="Nazwa pola do wyciągnięcia (domyślnie: Package).",
    )
    p.set_defaults(func=run)
