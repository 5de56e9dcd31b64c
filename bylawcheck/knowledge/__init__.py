"""
bylawcheck Knowledge Module

Bylaw knowledge-service integration:
- Client abstraction (LlamaCloud, mock)
- Tolerant reply parsing into RuleSet / BylawAnswer
- Rule resolution and question answering with retry and fallback
"""

from .client import (
    BaseKnowledgeClient,
    LlamaCloudClient,
    MockKnowledgeClient,
    get_client,
)
from .parser import (
    ReplyKind,
    ParsedReply,
    parse_reply,
    extract_json_object,
    to_ruleset,
    to_answer,
)
from .retry import query_with_retry
from .rules import (
    RuleResolution,
    RuleResolver,
    build_rules_query,
    resolve_rules,
)
from .qa import (
    CANNED_ANSWERS,
    GENERIC_ANSWER,
    BylawQAResolver,
    build_question_prompt,
    match_canned_answer,
    answer_question,
)

__all__ = [
    # Client
    "BaseKnowledgeClient",
    "LlamaCloudClient",
    "MockKnowledgeClient",
    "get_client",

    # Parser
    "ReplyKind",
    "ParsedReply",
    "parse_reply",
    "extract_json_object",
    "to_ruleset",
    "to_answer",

    # Resolvers
    "query_with_retry",
    "RuleResolution",
    "RuleResolver",
    "build_rules_query",
    "resolve_rules",
    "CANNED_ANSWERS",
    "GENERIC_ANSWER",
    "BylawQAResolver",
    "build_question_prompt",
    "match_canned_answer",
    "answer_question",
]
