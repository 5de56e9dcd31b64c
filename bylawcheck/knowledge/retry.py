"""
Sequential retry for knowledge-service calls.

One attempt, a fixed pause, then at most `retries` further attempts. A reply
that fails to parse counts as a failed attempt.
"""

from typing import Any, Callable, TypeVar
import logging
import time

from bylawcheck.exceptions import TransientServiceFailure
from bylawcheck.knowledge.client import BaseKnowledgeClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def query_with_retry(
    client: BaseKnowledgeClient,
    prompt: str,
    parse: Callable[[Any], T],
    retries: int = 1,
    backoff: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Query the knowledge service and parse the reply, retrying on failure.

    Args:
        client: Knowledge-service client
        prompt: Query text
        parse: Converts the raw reply; raises MalformedReply if unusable
        retries: Extra attempts after the first
        backoff: Seconds to wait between attempts
        sleep: Wait function (injectable for tests)

    Returns:
        Parsed result of the first successful attempt

    Raises:
        TransientServiceFailure: every attempt failed
    """
    attempts = retries + 1
    last_error: TransientServiceFailure = TransientServiceFailure("no attempt made")

    for attempt in range(1, attempts + 1):
        try:
            return parse(client.query(prompt))
        except TransientServiceFailure as e:
            last_error = e
            logger.warning(f"{client.name} attempt {attempt}/{attempts} failed: {e}")

        if attempt < attempts:
            sleep(backoff)

    raise last_error
