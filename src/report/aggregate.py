"""
Fold per-file detections into one report keyed by feature id.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from catalog.model import Feature


@dataclass
class ReportEntry:
    """All files one feature was detected in."""

    feature: Feature
    # Insertion-ordered set of paths
    files: Dict[str, None] = field(default_factory=dict)

    @property
    def id(self):
        return self.feature.id

    def add_file(self, path: str) -> None:
        self.files.setdefault(path, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.feature.id,
            "name": self.feature.name,
            "baseline": self.feature.baseline,
            "files": list(self.files),
        }


class Aggregator:
    """
    Accumulates (path, features) pairs.

    Entries are created on the first hit for a feature id and iterate in
    first-seen order. No interpretation of baseline happens here.
    """

    def __init__(self):
        self._entries: Dict[Any, ReportEntry] = {}

    def add(self, path: str, features: Iterable[Feature]) -> None:
        for feature in features:
            entry = self._entries.get(feature.id)
            if entry is None:
                entry = self._entries[feature.id] = ReportEntry(feature)
            entry.add_file(path)

    def entries(self) -> List[ReportEntry]:
        return list(self._entries.values())

    def results(self) -> List[Dict[str, Any]]:
        """Serializable report records in first-seen order."""
        return [entry.to_dict() for entry in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)


def aggregate(detections: Iterable) -> Aggregator:
    """Fold a stream of (path, features) pairs in discovery order."""
    aggregator = Aggregator()
    for path, features in detections:
        aggregator.add(path, features)
    return aggregator
