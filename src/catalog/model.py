"""
Canonical catalog types: Feature records and the read-only lookup table.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional


@dataclass(frozen=True, eq=False)
class Feature:
    """
    One catalog entry.

    `baseline` is True (widely available), False (not), or any other status
    value passed through from the catalog source unchanged.

    Equality and hashing are by identity: two records with the same id from
    different sources are distinct features.
    """

    id: Optional[str]
    name: Optional[str]
    baseline: Any = False
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "baseline": self.baseline,
            "description": self.description,
        }


class FeatureCatalog:
    """
    Immutable lookup table mapping case-folded feature name -> Feature.

    Built once per run and lent read-only to the detectors.
    """

    def __init__(self, table: Dict[str, Feature]):
        self._table: Mapping[str, Feature] = MappingProxyType(dict(table))

    def lookup(self, token: Optional[str]) -> Optional[Feature]:
        """Probe with an already case-folded token."""
        if token is None:
            return None
        return self._table.get(token)

    @property
    def table(self) -> Mapping[str, Feature]:
        return self._table

    def keys(self) -> List[str]:
        return list(self._table.keys())

    def __contains__(self, token: object) -> bool:
        return token in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"FeatureCatalog({len(self._table)} features)"
