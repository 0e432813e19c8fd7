"""
Scan pipeline.

1. Catalog: bundled data + baseline.json - .baselineignore (once, up front)
2. Detection: one detector call per discovered file (optionally in a pool)
3. Aggregation: serial fold in discovery order
4. Policy: verdict from the finished report
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from catalog.model import Feature, FeatureCatalog
from catalog.sources import build_catalog
from cli.helpers import collect_source_files, read_source_file
from core.config import RunOptions
from core.utils import debug, warn
from detect.dispatch import classify_file, detect_features
from detect.style import StyleParseError
from report.aggregate import Aggregator, ReportEntry
from report.policy import Verdict, evaluate_policy


@dataclass
class FileOutcome:
    """Detection result for one file."""

    path: str
    features: List[Feature] = field(default_factory=list)
    error: Optional[Exception] = None


@dataclass
class ScanResult:
    verdict: Verdict
    entries: List[ReportEntry] = field(default_factory=list)
    feature_count: int = 0
    files_scanned: int = 0
    # Files dropped because they could not be read or parsed
    skipped: List[str] = field(default_factory=list)

    @property
    def details(self) -> List[Dict[str, Any]]:
        """Report records in first-seen order."""
        return [e.to_dict() for e in self.entries]

    @property
    def ok(self) -> bool:
        return self.verdict.ok

    @property
    def critical_detected(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.verdict.critical_entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "details": self.details,
            "criticalDetected": self.critical_detected,
        }


def scan_file(cwd: str, path: str, catalog: FeatureCatalog) -> FileOutcome:
    """Read and scan one file. Style parse errors are returned, not raised."""
    source_code = read_source_file(cwd, path)
    if source_code is None:
        return FileOutcome(path, error=OSError(f"unreadable: {path}"))
    try:
        return FileOutcome(path, detect_features(path, source_code, catalog))
    except StyleParseError as e:
        return FileOutcome(path, error=e)


def _scan_all(cwd: str, files: List[str], catalog: FeatureCatalog, jobs: int) -> Iterator[FileOutcome]:
    if jobs <= 1 or len(files) <= 1:
        for path in files:
            yield scan_file(cwd, path, catalog)
        return
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        # map() yields in submission order, which keeps the fold deterministic
        yield from pool.map(lambda p: scan_file(cwd, p, catalog), files)


def scan_files(
    cwd: str,
    files: List[str],
    catalog: FeatureCatalog,
    jobs: int = 1,
    strict: bool = False,
) -> Tuple[Aggregator, List[str]]:
    """
    Scan files and fold detections into an Aggregator.

    Returns (aggregator, skipped_paths). With `strict`, the first stylesheet
    parse error is re-raised instead of skipping the file.
    """
    aggregator = Aggregator()
    skipped: List[str] = []
    for outcome in _scan_all(cwd, files, catalog, jobs):
        if outcome.error is not None:
            if strict and isinstance(outcome.error, StyleParseError):
                raise outcome.error
            warn(f"Skipping {outcome.path}: {outcome.error}")
            skipped.append(outcome.path)
            continue
        if outcome.features:
            debug(f"{outcome.path}: {', '.join(str(f.id) for f in outcome.features)}")
        aggregator.add(outcome.path, outcome.features)
    return aggregator, skipped


def run(options: Optional[RunOptions] = None, catalog: Optional[FeatureCatalog] = None) -> ScanResult:
    """Run a full scan and evaluate the policy."""
    options = options or RunOptions()
    if catalog is None:
        catalog = build_catalog(options.cwd, options.catalog_path)

    files = [f for f in collect_source_files(options.cwd, options.patterns) if classify_file(f)]
    debug(f"Scanning {len(files)} file(s) with {len(catalog)} feature(s)")

    aggregator, skipped = scan_files(options.cwd, files, catalog, jobs=options.jobs, strict=options.strict)
    verdict = evaluate_policy(aggregator.entries(), options.critical_features, options.fail_on_limited)

    return ScanResult(
        verdict=verdict,
        entries=aggregator.entries(),
        feature_count=len(catalog),
        files_scanned=len(files) - len(skipped),
        skipped=skipped,
    )
