"""
data_model — struktury danych manifestu tematów.

Moduły:
  manifest — TopicManifest, Manifest, manifest_to_json, dump_manifest, load_manifest

Format pliku manifest/topics.json:
  [{"name": ..., "description": ..., "date": ..., "architectures": [...], "packages": [...]}, ...]
"""

from .manifest import (
    Manifest,
    TopicManifest,
    dump_manifest,
    load_manifest,
    manifest_to_json,
)

__all__ = [
    "Manifest",
    "TopicManifest",
    "dump_manifest",
    "load_manifest",
    "manifest_to_json",
]
