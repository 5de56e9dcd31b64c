"""
bylawcheck - Building Bylaw Compliance Checker

Checks a single building-project record against municipal bylaw limits
resolved from an external knowledge service, and answers free-text bylaw
questions. Both degrade to static BBMP 2019 defaults when the service is
unavailable.

Modules:
    - core: Project record model and normalization
    - knowledge: Knowledge-service client, reply parsing, rule and Q&A resolvers
    - compliance: Per-metric compliance evaluation
    - config: Settings and default bylaw limits
    - api: FastAPI backend server
"""

__version__ = "0.1.0"

from bylawcheck.core import ProjectRecord, RuleSet, SetbackRules, BylawAnswer, normalize
from bylawcheck.compliance import ComplianceCheck, ComplianceReport, evaluate
from bylawcheck.knowledge import RuleResolver, RuleResolution, BylawQAResolver
from bylawcheck.service import BylawComplianceService

__all__ = [
    # Core
    "ProjectRecord",
    "RuleSet",
    "SetbackRules",
    "BylawAnswer",
    "normalize",
    # Compliance
    "ComplianceCheck",
    "ComplianceReport",
    "evaluate",
    # Knowledge
    "RuleResolver",
    "RuleResolution",
    "BylawQAResolver",
    # Service
    "BylawComplianceService",
]
