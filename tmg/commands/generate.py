"""Komenda: tmg generate — skanowanie tematów i zapis manifest/topics.json."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from data_model.manifest import Manifest, dump_manifest
from github_api import GitHubError, fetch_descriptions
from scanner import build_manifest
from tmg.settings import ConfigError, load_settings

console = Console()

MANIFEST_RELPATH = Path("manifest") / "topics.json"


# ---------------------------------------------------------------------------
# Opisy z GitHuba
# ---------------------------------------------------------------------------

def _load_descriptions(args: argparse.Namespace) -> dict[str, str]:
    if args.no_fetch:
        console.print("[yellow]Pobieranie opisów wyłączone (--no-fetch).[/yellow]")
        return {}

    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]Błędna konfiguracja:[/red] {e}")
        raise SystemExit(1) from e
    if args.base:
        settings.base_branch = args.base

    console.print(f"Pobieranie opisów tematów z GitHuba ([cyan]{args.repo}[/cyan]) …")
    try:
        descriptions = fetch_descriptions(args.repo, settings)
    except GitHubError as e:
        console.print(f"[red]Nie udało się pobrać opisów:[/red] {e}")
        console.print("[yellow]Opisy niedostępne.[/yellow]")
        return {}

    console.print(f"Pobrano [bold]{len(descriptions)}[/bold] opisów.")
    return descriptions


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(manifest: Manifest) -> None:
    if not manifest:
        console.print("[yellow]Brak tematów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("TEMAT", no_wrap=True, style="bold cyan")
    table.add_column("ARCH", no_wrap=False, max_width=30)
    table.add_column("PAKIETY", justify="right", no_wrap=True)
    table.add_column("OPIS", no_wrap=False, max_width=50)

    for topic in manifest:
        description = topic.description.splitlines()[0] if topic.description else "-"
        table.add_row(
            topic.name,
            ", ".join(topic.architectures) or "-",
            str(len(topic.packages)),
            description[:80],
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(manifest)} tematów[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    root = Path(args.dir)
    if not (root / "dists").is_dir():
        console.print(f"[red]Brak katalogu dists/ w:[/red] {root}")
        raise SystemExit(1)

    output = Path(args.output) if args.output else root / MANIFEST_RELPATH

    descriptions = _load_descriptions(args)

    console.print(f"Skanowanie tematów w [bold]{root}[/bold] …")
    try:
        manifest = build_manifest(root, descriptions)
    except OSError as e:
        console.print(f"[red]Nie udało się zeskanować tematów:[/red] {e}")
        raise SystemExit(1)

    try:
        dump_manifest(manifest, output)
    except OSError as e:
        console.print(f"[red]Nie udało się zapisać manifestu {output}:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]Manifest:[/green] {output}  ({len(manifest)} tematów)")

    if args.show:
        _show_table(manifest)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "generate",
        help="Skanuje tematy i zapisuje manifest/topics.json.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Skanuje <KATALOG>/dists/<temat>/main/binary-<arch>/Packages, pobiera opisy
tematów z pull requestów GitHuba i zapisuje manifest JSON.

Przykłady:
  tmg generate -d /srv/debs -p AOSC-Dev/aosc-os-abbs
  tmg generate -d /srv/debs -p AOSC-Dev/aosc-os-abbs --show
  tmg generate -d /srv/debs -p AOSC-Dev/aosc-os-abbs --no-fetch -o topics.json
        """,
    )
    p.add_argument(
        "-d", "--dir",
        metavar="KATALOG",
        required=True,
        help="Katalog główny repozytorium deb (zawiera dists/).",
    )
    p.add_argument(
        "-p", "--repo",
        metavar="OWNER/NAZWA",
        required=True,
        help="Repozytorium GitHuba z pull requestami tematów, np. AOSC-Dev/aosc-os-abbs.",
    )
    p.add_argument(
        "-o", "--output",
        metavar="PLIK",
        default=None,
        help="Plik wyjściowy (domyślnie: KATALOG/manifest/topics.json).",
    )
    p.add_argument(
        "--base",
        metavar="GAŁĄŹ",
        default=None,
        help="Gałąź bazowa pull requestów (domyślnie: TMG_BASE_BRANCH lub stable).",
    )
    p.add_argument(
        "--no-fetch",
        action="store_true",
        help="Nie pobieraj opisów z GitHuba.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę tematów w terminalu po zapisie.",
    )
    p.set_defaults(func=run)
