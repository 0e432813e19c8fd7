"""
Report aggregation and policy evaluation.
"""

from report.aggregate import Aggregator, ReportEntry, aggregate
from report.policy import Verdict, evaluate_policy

__all__ = ["Aggregator", "ReportEntry", "aggregate", "Verdict", "evaluate_policy"]
