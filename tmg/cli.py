"""
tmg — generator manifestu tematów (topics) repozytorium pakietów.

Użycie:
  tmg [-v] <komenda> [opcje]

Komendy:
  generate   Skanuje dists/, pobiera opisy z GitHuba i zapisuje manifest/topics.json.
  names      Wypisuje nazwy pakietów (lub inne pole) z pliku Packages.
  describe   Wycina sekcję "Topic Description" z zapisanej treści PR.
"""

from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler

from tmg import __version__
from tmg.commands import describe as cmd_describe
from tmg.commands import generate as cmd_generate
from tmg.commands import names as cmd_names


def setup_logging(verbosity: int) -> None:
    """Logi bibliotek (scanner, github_api) przez RichHandler na stderr."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmg",
        description="Topics Manifest Generator — manifest tematów repozytorium pakietów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"tmg {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Więcej logów (-v: info, -vv: debug).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_generate.add_parser(subparsers)
    cmd_names.add_parser(subparsers)
    cmd_describe.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
