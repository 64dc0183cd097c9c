"""
scanner/topics.py — skanowanie drzewa repozytorium w poszukiwaniu tematów.

Układ katalogów:
  <root>/dists/<topic>/main/binary-<arch>/Packages

Temat "stable" nie jest tematem i jest pomijany. Architektura trafia do
manifestu tylko wtedy, gdy jej plik Packages dał co najmniej jedną nazwę.
"""

from __future__ import annotations

import logging
from pathlib import Path

from control_parser import extract_package_names
from data_model.manifest import Manifest, TopicManifest

logger = logging.getLogger(__name__)

ARCH_PREFIX    = "binary-"
PACKAGES_INDEX = "Packages"
STABLE_TOPIC   = "stable"


class TopicScanError(RuntimeError):
    """Temat nie daje się zeskanować (brak main/, nieczytelny Packages itp.)."""


def _topic_date(topic_dir: Path) -> int:
    st = topic_dir.stat()
    created = getattr(st, "st_birthtime", None) or st.st_mtime
    return max(0, int(created))


def read_package_names(packages_path: Path) -> list[str]:
    """
    Zwraca nazwy pakietów z jednego pliku Packages (w kolejności pliku).

    Niepełne sparsowanie (reszta bajtów) jest tylko ostrzeżeniem.

    Raises:
        OSError:          plik nie istnieje lub jest nieczytelny.
        TopicScanError:   nazwa pakietu nie jest poprawnym UTF-8.
    """
    names, rest = extract_package_names(packages_path.read_bytes())
    if rest:
        logger.warning(
            "%s: parser napotkał problemy, %d bajtów nie zostało sparsowanych",
            packages_path, len(rest),
        )
    try:
        return [n.decode("utf-8") for n in names]
    except UnicodeDecodeError as exc:
        raise TopicScanError(f"{packages_path}: nazwa pakietu spoza UTF-8: {exc}") from exc


def scan_topic(topic_dir: Path) -> TopicManifest:
    """Skanuje jeden katalog tematu; opis pozostaje pusty (None)."""
    name = topic_dir.name
    logger.info("Skanowanie tematu %s", name)

    main_dir = topic_dir / "main"
    if not main_dir.is_dir():
        raise TopicScanError(f"{topic_dir}: brak katalogu main/")

    packages: set[str] = set()
    architectures: list[str] = []
    for entry in sorted(main_dir.iterdir()):
        if not entry.is_dir() or not entry.name.startswith(ARCH_PREFIX):
            continue
        arch = entry.name[len(ARCH_PREFIX):]
        try:
            names = read_package_names(entry / PACKAGES_INDEX)
        except OSError as exc:
            raise TopicScanError(f"{entry}: nie można odczytać {PACKAGES_INDEX}: {exc}") from exc
        if not names:
            logger.warning("%s/%s: brak pakietów w indeksie, architektura pominięta", name, arch)
            continue
        packages.update(names)
        architectures.append(arch)

    return TopicManifest(
        name=name,
        description=None,
        date=_topic_date(topic_dir),
        architectures=architectures,
        packages=sorted(packages),
    )


def collect_topics(root: Path) -> Manifest:
    """
    Zwraca manifesty wszystkich tematów pod <root>/dists.

    Tematy, których nie da się zeskanować, są logowane i pomijane.

    Raises:
        FileNotFoundError: brak katalogu <root>/dists.
    """
    dists_dir = root / "dists"
    if not dists_dir.is_dir():
        raise FileNotFoundError(f"Brak katalogu {dists_dir}")

    manifests: Manifest = []
    for topic_dir in sorted(dists_dir.iterdir()):
        if not topic_dir.is_dir():
            continue
        if topic_dir.name == STABLE_TOPIC:
            logger.debug("Pomijam %s — to nie jest temat", topic_dir.name)
            continue
        try:
            manifests.append(scan_topic(topic_dir))
        except TopicScanError as exc:
            logger.warning("Błąd skanowania tematu %s: %s. Temat pominięty.", topic_dir.name, exc)
    return manifests
