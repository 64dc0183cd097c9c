"""
scanner/assemble.py — łączenie zeskanowanych tematów z opisami z GitHuba.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from data_model.manifest import Manifest
from scanner.topics import collect_topics

logger = logging.getLogger(__name__)


def attach_descriptions(manifest: Manifest, descriptions: Mapping[str, str]) -> Manifest:
    """Przypisuje opis po nazwie tematu == nazwie gałęzi PR (in place)."""
    for topic in manifest:
        description = descriptions.get(topic.name)
        if description is None:
            logger.warning("%s: brak opisu.", topic.name)
        topic.description = description
    return manifest


def build_manifest(root: Path, descriptions: Mapping[str, str]) -> Manifest:
    return attach_descriptions(collect_topics(root), descriptions)
