"""
bylawcheck Compliance Evaluator

Applies a resolved RuleSet to a ProjectRecord. Pure: no I/O, same inputs
give the same report.

Comparison directions:
- height, far: observed must not exceed the maximum
- setback, parking: observed must meet or exceed the minimum
"""

from typing import Dict, List, Literal, Optional, Union
import re

from pydantic import BaseModel, computed_field, field_validator

from bylawcheck.core.models import ProjectRecord, RuleSet


Metric = Literal["height", "setback", "parking", "far"]

METRIC_ORDER = ("height", "setback", "parking", "far")

_WHITESPACE = re.compile(r"\s+")


class ComplianceCheck(BaseModel):
    """
    One evaluated metric.

    For setback, value, limit and clause are {front, rear, side} maps; for
    the other metrics clause is a single citation and limit is {"max": n}
    or {"min": n}.
    """
    metric: Metric
    value: Union[int, float, Dict[str, float]]
    limit: Dict[str, float]
    compliant: bool
    clause: Union[None, str, Dict[str, Optional[str]]] = None

    class Config:
        frozen = True


class ComplianceSummary(BaseModel):
    compliant: int
    violations: int


class ComplianceReport(BaseModel):
    """Aggregate result: four checks in fixed order plus derived counts."""
    project_name: str
    checks: List[ComplianceCheck]
    rules_source: Optional[Literal["external", "default"]] = None

    class Config:
        frozen = True

    @field_validator("checks")
    @classmethod
    def _checks_in_metric_order(cls, checks: List[ComplianceCheck]) -> List[ComplianceCheck]:
        metrics = tuple(check.metric for check in checks)
        if metrics != METRIC_ORDER:
            raise ValueError(f"checks must be {METRIC_ORDER}, got {metrics}")
        return checks

    @computed_field
    @property
    def filename(self) -> str:
        return report_filename(self.project_name)

    @computed_field
    @property
    def summary(self) -> ComplianceSummary:
        compliant = sum(1 for check in self.checks if check.compliant)
        return ComplianceSummary(
            compliant=compliant,
            violations=len(self.checks) - compliant,
        )


def report_filename(project_name: str) -> str:
    """'Green Tower 2' -> 'Green_Tower_2.csv'"""
    return f"{_WHITESPACE.sub('_', project_name)}.csv"


def check_height(record: ProjectRecord, rules: RuleSet) -> ComplianceCheck:
    return ComplianceCheck(
        metric="height",
        value=record.height_m,
        limit={"max": rules.height_max},
        compliant=record.height_m <= rules.height_max,
        clause=rules.height_clause,
    )


def check_setback(record: ProjectRecord, rules: RuleSet) -> ComplianceCheck:
    setback = rules.setback
    observed = {
        "front": record.front_setback_m,
        "rear": record.rear_setback_m,
        "side": record.side_setback_m,
    }
    required = {
        "front": setback.front,
        "rear": setback.rear,
        "side": setback.side,
    }
    return ComplianceCheck(
        metric="setback",
        value=observed,
        limit=required,
        compliant=all(observed[side] >= required[side] for side in required),
        clause={
            "front": setback.front_clause,
            "rear": setback.rear_clause,
            "side": setback.side_clause,
        },
    )


def check_parking(record: ProjectRecord, rules: RuleSet) -> ComplianceCheck:
    return ComplianceCheck(
        metric="parking",
        value=record.parking_spots,
        limit={"min": rules.parking_min},
        compliant=record.parking_spots >= rules.parking_min,
        clause=rules.parking_clause,
    )


def check_far(record: ProjectRecord, rules: RuleSet) -> ComplianceCheck:
    return ComplianceCheck(
        metric="far",
        value=record.far_utilized,
        limit={"max": rules.far_max},
        compliant=record.far_utilized <= rules.far_max,
        clause=rules.far_clause,
    )


def evaluate(record: ProjectRecord, rules: RuleSet) -> ComplianceReport:
    """
    Evaluate a project against resolved rules.

    Args:
        record: Normalized project record
        rules: Resolved limits

    Returns:
        ComplianceReport with checks ordered height, setback, parking, far
    """
    return ComplianceReport(
        project_name=record.project_name,
        checks=[
            check_height(record, rules),
            check_setback(record, rules),
            check_parking(record, rules),
            check_far(record, rules),
        ],
    )
