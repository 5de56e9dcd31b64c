"""
bylawcheck Compliance Module

Per-metric compliance verdicts for a project record.
"""

from bylawcheck.compliance.evaluator import (
    METRIC_ORDER,
    ComplianceCheck,
    ComplianceSummary,
    ComplianceReport,
    evaluate,
    report_filename,
)

__all__ = [
    "METRIC_ORDER",
    "ComplianceCheck",
    "ComplianceSummary",
    "ComplianceReport",
    "evaluate",
    "report_filename",
]
