"""
bylawcheck Service

Provides the BylawComplianceService class exposing the two caller-facing
operations:
- check_compliance: raw row -> ComplianceReport
- ask_bylaw: question (+ optional project context) -> BylawAnswer

The service holds only immutable configuration (resolvers and default
rules) and can be shared across concurrent requests.
"""

from typing import Any, Mapping, Optional, Union
import logging

from bylawcheck.compliance.evaluator import ComplianceReport, evaluate
from bylawcheck.config.default_rules import load_default_rules
from bylawcheck.config.settings import Settings, get_settings
from bylawcheck.core.models import BylawAnswer, ProjectRecord
from bylawcheck.core.normalizer import normalize
from bylawcheck.exceptions import InvalidInput, UnexpectedInternal
from bylawcheck.knowledge.qa import BylawQAResolver
from bylawcheck.knowledge.rules import RuleResolver

logger = logging.getLogger(__name__)


REQUIRED_TEXT_FIELDS = ("project_name", "building_type", "location")

RawRow = Union[Mapping[str, Any], ProjectRecord]


class BylawComplianceService:
    """
    Compliance checks and bylaw Q&A over one project record per call.

    Args:
        rule_resolver: Resolves limits for a record
        qa_resolver: Answers free-text questions

    Example:
        >>> service = BylawComplianceService.from_settings()
        >>> report = service.check_compliance({"project_name": "Green Tower 2", ...})
        >>> report.summary.violations
    """

    def __init__(self, rule_resolver: RuleResolver, qa_resolver: BylawQAResolver):
        self.rule_resolver = rule_resolver
        self.qa_resolver = qa_resolver

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BylawComplianceService":
        """Load default rules once and wire resolvers from settings."""
        settings = settings or get_settings()
        defaults = load_default_rules(settings.rules_file)
        return cls(
            rule_resolver=RuleResolver.from_config(settings.knowledge, defaults),
            qa_resolver=BylawQAResolver.from_config(settings.knowledge),
        )

    def check_compliance(self, raw_row: RawRow) -> ComplianceReport:
        """
        Normalize a row, resolve rules for it and evaluate compliance.

        Raises:
            InvalidInput: project_name, building_type or location is missing
            UnexpectedInternal: normalization or evaluation failed
        """
        try:
            record = normalize(raw_row)
        except (AttributeError, TypeError, ValueError) as e:
            raise UnexpectedInternal(f"Could not normalize project row: {e}") from e

        missing = [field for field in REQUIRED_TEXT_FIELDS if not getattr(record, field)]
        if missing:
            raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

        logger.info(f"Processing compliance check for: {record.project_name}")
        rules, source = self.rule_resolver.resolve(record)

        try:
            report = evaluate(record, rules)
        except ValueError as e:
            raise UnexpectedInternal(f"Compliance evaluation failed: {e}") from e

        report = report.model_copy(update={"rules_source": source})
        logger.info(
            f"Compliance check completed for {record.project_name} "
            f"(rules: {source}): {report.summary.model_dump()}"
        )
        return report

    def ask_bylaw(self, question: Optional[str], context: Optional[RawRow] = None) -> BylawAnswer:
        """
        Answer a bylaw question, optionally about a specific project.

        Raises:
            InvalidInput: question is empty
        """
        if not question or not question.strip():
            raise InvalidInput("Missing required field: question")

        logger.info(f"Processing bylaw question: {question}")
        record = normalize(context) if context is not None else None
        return self.qa_resolver.answer(question, record)
