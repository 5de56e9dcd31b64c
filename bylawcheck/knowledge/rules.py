"""
bylawcheck Rule Resolver

Queries the knowledge service for the numeric limits and clause citations
that apply to a project, retrying once before falling back to the static
default RuleSet. Resolution never raises: the caller always gets a usable
RuleSet plus the source it came from.
"""

from typing import Callable, NamedTuple, Optional
import logging
import time

from bylawcheck.config.default_rules import DEFAULT_RULES
from bylawcheck.config.settings import KnowledgeServiceConfig
from bylawcheck.core.models import ProjectRecord, RuleSet
from bylawcheck.exceptions import ConfigurationMissing
from bylawcheck.knowledge.client import BaseKnowledgeClient, get_client
from bylawcheck.knowledge.parser import to_ruleset
from bylawcheck.knowledge.retry import query_with_retry

logger = logging.getLogger(__name__)


SOURCE_EXTERNAL = "external"
SOURCE_DEFAULT = "default"


class RuleResolution(NamedTuple):
    rules: RuleSet
    source: str


def build_rules_query(record: ProjectRecord, document_id: Optional[str] = None) -> str:
    """Build the structured limits query for a project."""
    document = document_id or "the configured document"
    return f"""Using document {document} (Bangalore bylaws), return the numerical limits and exact clause references for:
1) maximum permissible building height (m) for a {record.building_type} at {record.location}
2) minimum front/rear/side setback (m)
3) minimum required parking spaces (give rule per area or per unit)
4) maximum allowed FAR
Provide results as JSON: {{"height_max": X, "height_clause": "...", "setback": {{"front": X, "rear": Y, "side": Z, "front_clause": "...", "rear_clause": "...", "side_clause": "..."}}, "parking_min": X, "parking_clause": "...", "far_max": X, "far_clause": "..."}}"""


class RuleResolver:
    """
    Resolve the RuleSet for a project.

    Args:
        client: Knowledge-service client; None means not configured and
            every resolution returns the defaults without a call
        defaults: RuleSet returned when the service cannot be used
        retries: Extra attempts after the first
        backoff: Seconds between attempts
        document_id: Document named in the query text
        sleep: Wait function (injectable for tests)
    """

    def __init__(
        self,
        client: Optional[BaseKnowledgeClient] = None,
        defaults: RuleSet = DEFAULT_RULES,
        retries: int = 1,
        backoff: float = 1.0,
        document_id: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.defaults = defaults
        self.retries = retries
        self.backoff = backoff
        self.document_id = document_id
        self.sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: KnowledgeServiceConfig,
        defaults: RuleSet = DEFAULT_RULES,
        **kwargs,
    ) -> "RuleResolver":
        """Build a resolver from settings; incomplete credentials leave it offline."""
        try:
            client = get_client(config)
        except ConfigurationMissing as e:
            logger.warning(f"Knowledge service not configured: {e}")
            client = None

        return cls(
            client=client,
            defaults=defaults,
            retries=config.max_retries,
            backoff=config.retry_backoff,
            document_id=config.document_id,
            **kwargs,
        )

    def resolve(self, record: ProjectRecord) -> RuleResolution:
        """
        Resolve limits for a project.

        Returns:
            RuleResolution with source "external" or "default"
        """
        if self.client is None:
            logger.info("No knowledge service configured, using default rules")
            return RuleResolution(self.defaults, SOURCE_DEFAULT)

        query = build_rules_query(record, self.document_id)
        try:
            rules = query_with_retry(
                self.client,
                query,
                to_ruleset,
                retries=self.retries,
                backoff=self.backoff,
                sleep=self.sleep,
            )
        except Exception:
            logger.warning(
                f"Rule resolution failed for '{record.project_name}', using default rules",
                exc_info=True,
            )
            return RuleResolution(self.defaults, SOURCE_DEFAULT)

        logger.info(f"Resolved rules for '{record.project_name}' from {self.client.name}")
        return RuleResolution(rules, SOURCE_EXTERNAL)


def resolve_rules(
    record: ProjectRecord,
    config: Optional[KnowledgeServiceConfig] = None,
    defaults: RuleSet = DEFAULT_RULES,
) -> RuleResolution:
    """Resolve limits for a project using settings from the environment."""
    resolver = RuleResolver.from_config(config or KnowledgeServiceConfig(), defaults)
    return resolver.resolve(record)
