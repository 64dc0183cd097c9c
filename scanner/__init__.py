"""
scanner — skanowanie katalogu dists/ i składanie manifestu tematów.

Interfejs publiczny:
    collect_topics, scan_topic, read_package_names, TopicScanError  (topics.py)
    attach_descriptions, build_manifest                             (assemble.py)
"""

from .topics import TopicScanError, collect_topics, read_package_names, scan_topic
from .assemble import attach_descriptions, build_manifest

__all__ = [
    "TopicScanError",
    "collect_topics",
    "read_package_names",
    "scan_topic",
    "attach_descriptions",
    "build_manifest",
]
