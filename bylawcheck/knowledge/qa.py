"""
bylawcheck Bylaw Q&A Resolver

Answers free-text bylaw questions through the knowledge service, optionally
with the project record as context. When the service is unavailable the
question is matched against an ordered table of canned answers; callers
always receive a BylawAnswer.
"""

from typing import Callable, Optional, Sequence, Tuple
import logging
import time

from bylawcheck.config.settings import KnowledgeServiceConfig
from bylawcheck.core.models import BylawAnswer, ProjectRecord
from bylawcheck.exceptions import ConfigurationMissing, InvalidInput
from bylawcheck.knowledge.client import BaseKnowledgeClient, get_client
from bylawcheck.knowledge.parser import to_answer
from bylawcheck.knowledge.retry import query_with_retry

logger = logging.getLogger(__name__)


# (lower-case substring, answer); evaluated in order, first match wins.
CANNED_ANSWERS: Tuple[Tuple[str, BylawAnswer], ...] = (
    ("min stair width", BylawAnswer(
        answer=(
            "The minimum stair width in residential buildings is 1.2 meters as per BBMP 2019. "
            "This ensures safe evacuation and accessibility compliance. "
            "Ensure your staircase design meets this requirement."
        ),
        clause="BBMP 2019, Clause 6.3.2",
        page="45",
    )),
    ("car parking requirements", BylawAnswer(
        answer=(
            "Parking requirements are typically 1 space per 100 sqm of built area for commercial buildings. "
            "Residential buildings require 1 space per dwelling unit. "
            "Check your local zone requirements for specific ratios."
        ),
        clause="BBMP 2019, Clause 6.2.1",
        page="42",
    )),
    ("max floor area ratio", BylawAnswer(
        answer=(
            "Maximum FAR varies by zone but is typically 1.25 for residential areas and up to 2.5 for commercial zones. "
            "Your project should not exceed the permitted FAR for the specific zone."
        ),
        clause="BBMP 2019, Table 5.4.1",
        page="38",
    )),
    ("front setback for residential", BylawAnswer(
        answer=(
            "Front setback for residential buildings is minimum 7 meters from the road boundary. "
            "This provides adequate light, ventilation and fire safety access. "
            "Ensure compliance before construction."
        ),
        clause="BBMP 2019, Clause 5.1.1",
        page="35",
    )),
)

GENERIC_ANSWER = BylawAnswer(
    answer=(
        "I apologize, but I cannot access the bylaw document at the moment. "
        "Please try again later or consult the BBMP 2019 bylaws directly for specific requirements."
    ),
    clause=None,
    page=None,
)


def build_question_prompt(
    question: str,
    context: Optional[ProjectRecord] = None,
    document_id: Optional[str] = None,
) -> str:
    """Build the Q&A prompt, embedding the project record when given."""
    document = document_id or "the configured document"
    prompt = (
        f"You are an assistant with the Bangalore bylaws document {document}. "
        "Answer concisely with 1-3 sentences and include: "
        "(a) short numeric answer if applicable, "
        "(b) the clause citation and page number if available, and "
        "(c) a one-line actionable note."
    )
    if context is not None:
        prompt += f"\nContext (project details): {context.model_dump_json()}"
    prompt += f"\nQuestion: {question}"
    prompt += '\nReturn JSON: {"answer": "...", "clause": "BBMP 2019 Clause 4.2.1", "page": "32"}'
    return prompt


def match_canned_answer(
    question: str,
    table: Sequence[Tuple[str, BylawAnswer]] = CANNED_ANSWERS,
) -> BylawAnswer:
    """Return the first canned answer whose pattern occurs in the question."""
    lowered = question.lower()
    for pattern, answer in table:
        if pattern in lowered:
            return answer
    return GENERIC_ANSWER


class BylawQAResolver:
    """
    Answer bylaw questions.

    Args:
        client: Knowledge-service client; None means answers come only from
            the canned table
        retries: Extra attempts after the first
        backoff: Seconds between attempts
        document_id: Document named in the prompt
        canned: Ordered (pattern, answer) fallback table
        sleep: Wait function (injectable for tests)
    """

    def __init__(
        self,
        client: Optional[BaseKnowledgeClient] = None,
        retries: int = 1,
        backoff: float = 1.0,
        document_id: Optional[str] = None,
        canned: Sequence[Tuple[str, BylawAnswer]] = CANNED_ANSWERS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.retries = retries
        self.backoff = backoff
        self.document_id = document_id
        self.canned = canned
        self.sleep = sleep

    @classmethod
    def from_config(cls, config: KnowledgeServiceConfig, **kwargs) -> "BylawQAResolver":
        try:
            client = get_client(config)
        except ConfigurationMissing as e:
            logger.warning(f"Knowledge service not configured: {e}")
            client = None

        return cls(
            client=client,
            retries=config.max_retries,
            backoff=config.retry_backoff,
            document_id=config.document_id,
            **kwargs,
        )

    def answer(self, question: str, context: Optional[ProjectRecord] = None) -> BylawAnswer:
        """
        Answer a question.

        Raises:
            InvalidInput: question is empty or whitespace
        """
        if not question or not question.strip():
            raise InvalidInput("Question is required")

        if self.client is None:
            return match_canned_answer(question, self.canned)

        prompt = build_question_prompt(question, context, self.document_id)
        try:
            return query_with_retry(
                self.client,
                prompt,
                to_answer,
                retries=self.retries,
                backoff=self.backoff,
                sleep=self.sleep,
            )
        except Exception:
            logger.warning("Bylaw query failed, using fallback answer", exc_info=True)
            return match_canned_answer(question, self.canned)


def answer_question(
    question: str,
    context: Optional[ProjectRecord] = None,
    config: Optional[KnowledgeServiceConfig] = None,
) -> BylawAnswer:
    """Answer a question using settings from the environment."""
    resolver = BylawQAResolver.from_config(config or KnowledgeServiceConfig())
    return resolver.answer(question, context)
