"""
data_model/manifest.py — rekord manifestu tematu (topic) i jego serializacja.

TopicManifest odpowiada jednemu katalogowi dists/<topic>; lista rekordów
tworzy plik manifest/topics.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TypeAlias


@dataclass(slots=True)
class TopicManifest:
    name: str                    # nazwa tematu == nazwa gałęzi źródłowej
    description: str | None      # sekcja "Topic Description" z PR (lub tytuł)
    date: int                    # czas utworzenia katalogu, sekundy UNIX (0 = brak)
    architectures: list[str] = field(default_factory=list)
    packages: list[str] = field(default_factory=list)


# Kolekcja rekordów w kolejności skanowania.
Manifest: TypeAlias = list[TopicManifest]


def manifest_to_json(manifest: Manifest) -> str:
    """Serializuje manifest do zwartego JSON (lista obiektów)."""
    return json.dumps([asdict(t) for t in manifest], ensure_ascii=False)


def dump_manifest(manifest: Manifest, path: Path) -> Path:
    """Zapisuje manifest do pliku (UTF-8), tworząc brakujący katalog nadrzędny."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest_to_json(manifest), encoding="utf-8")
    return path


def load_manifest(path: Path) -> Manifest:
    data = json.loads(path.read_text(encoding="utf-8"))
    return [TopicManifest(**item) for item in data]
