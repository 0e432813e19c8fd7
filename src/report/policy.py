"""
Pass/fail policy over a finished report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from report.aggregate import ReportEntry


@dataclass
class Verdict:
    ok: bool
    unsafe_entries: List[ReportEntry] = field(default_factory=list)
    critical_entries: List[ReportEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "unsafeEntries": [e.to_dict() for e in self.unsafe_entries],
            "criticalEntries": [e.to_dict() for e in self.critical_entries],
        }


def is_unsafe(entry: ReportEntry) -> bool:
    # Only an explicit False is unsafe; "low", "high" and other statuses are not
    return entry.feature.baseline is False


def is_critical(entry: ReportEntry, critical_ids: frozenset) -> bool:
    feature_id = entry.feature.id
    return isinstance(feature_id, str) and feature_id.casefold() in critical_ids


def evaluate_policy(
    entries: Iterable[ReportEntry],
    critical_features: Iterable[str] = (),
    fail_on_limited: bool = True,
) -> Verdict:
    """
    Classify report entries and derive the verdict.

    Critical features count against the verdict whatever their baseline.
    The verdict only fails when `fail_on_limited` is set.
    """
    entries = list(entries)
    critical_ids = frozenset(c.strip().casefold() for c in critical_features if c and c.strip())

    unsafe = [e for e in entries if is_unsafe(e)]
    critical = [e for e in entries if is_critical(e, critical_ids)]
    ok = not (fail_on_limited and (unsafe or critical))
    return Verdict(ok=ok, unsafe_entries=unsafe, critical_entries=critical)
