"""Tests for the pass/fail policy."""

import pytest

from catalog.model import Feature
from report.aggregate import ReportEntry
from report.policy import evaluate_policy


def entry(feature_id: str, baseline, *files: str) -> ReportEntry:
    e = ReportEntry(Feature(id=feature_id, name=feature_id, baseline=baseline))
    for path in files or ("a.js",):
        e.add_file(path)
    return e


class TestVerdict:
    def test_unsafe_entry_fails_when_gated(self):
        verdict = evaluate_policy([entry("eyedropper", False)], [], fail_on_limited=True)
        assert verdict.ok is False
        assert len(verdict.unsafe_entries) == 1
        assert verdict.critical_entries == []

    def test_unsafe_entry_passes_when_not_gated(self):
        verdict = evaluate_policy([entry("eyedropper", False)], [], fail_on_limited=False)
        assert verdict.ok is True
        assert len(verdict.unsafe_entries) == 1

    def test_critical_baseline_feature_fails(self):
        verdict = evaluate_policy([entry("fetch", True)], ["fetch"], fail_on_limited=True)
        assert verdict.ok is False
        assert verdict.unsafe_entries == []
        assert [e.id for e in verdict.critical_entries] == ["fetch"]

    def test_clean_report_passes(self):
        verdict = evaluate_policy([entry("fetch", True), entry("has", "low")], ["eyedropper"])
        assert verdict.ok is True

    def test_empty_report_passes(self):
        assert evaluate_policy([], ["fetch"]).ok is True


class TestClassification:
    @pytest.mark.parametrize("baseline", [True, "high", "low", "limited", None, 0, ""])
    def test_only_literal_false_is_unsafe(self, baseline):
        verdict = evaluate_policy([entry("x", baseline)])
        assert verdict.unsafe_entries == []

    def test_critical_match_is_case_insensitive(self):
        verdict = evaluate_policy([entry("view-transitions", "low")], ["  View-Transitions "])
        assert [e.id for e in verdict.critical_entries] == ["view-transitions"]

    def test_feature_can_be_unsafe_and_critical(self):
        e = entry("eyedropper", False)
        verdict = evaluate_policy([e], ["EYEDROPPER"])
        assert verdict.unsafe_entries == [e]
        assert verdict.critical_entries == [e]

    def test_pure_and_idempotent(self):
        entries = [entry("a", False), entry("b", True)]
        first = evaluate_policy(entries, ["b"])
        second = evaluate_policy(entries, ["b"])
        assert first.to_dict() == second.to_dict()
        assert [e.id for e in entries] == ["a", "b"]


def test_verdict_to_dict():
    verdict = evaluate_policy([entry("has", False, "x.css")], [], fail_on_limited=True)
    assert verdict.to_dict() == {
        "ok": False,
        "unsafeEntries": [{"id": "has", "name": "has", "baseline": False, "files": ["x.css"]}],
        "criticalEntries": [],
    }
