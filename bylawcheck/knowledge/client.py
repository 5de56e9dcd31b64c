"""
bylawcheck Knowledge-Service Clients

Provides unified interface for the external bylaw knowledge service:
- LlamaCloud document query endpoint (HTTP, bearer token)
- Mock client with scripted replies for tests and offline runs
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
import json
import logging

import requests

from bylawcheck.config.settings import KnowledgeServiceConfig
from bylawcheck.exceptions import ConfigurationMissing, TransientServiceFailure

logger = logging.getLogger(__name__)


class BaseKnowledgeClient(ABC):
    """Abstract base class for knowledge-service transports."""

    @abstractmethod
    def query(self, prompt: str) -> Any:
        """
        Send a prompt and return the raw reply.

        The reply may be a decoded JSON value or plain text; shaping it is
        the parser's job. Transport failures raise TransientServiceFailure.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return client name."""
        pass


class LlamaCloudClient(BaseKnowledgeClient):
    """LlamaCloud document query endpoint."""

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        document_id: str,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.document_id = document_id
        self.timeout = timeout

    @property
    def name(self) -> str:
        return f"llamacloud/{self.document_id}"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "query": prompt,
            "document_id": self.document_id,
            "response_format": "json",
        }

    def query(self, prompt: str) -> Any:
        try:
            # One request per call; handlers run on worker threads.
            response = requests.post(
                self.endpoint,
                headers=self.build_headers(),
                json=self.build_payload(prompt),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransientServiceFailure(f"LlamaCloud request failed: {e}") from e

        try:
            return response.json()
        except ValueError:
            # Not JSON at all; hand the text to the parser for extraction.
            return response.text


class MockKnowledgeClient(BaseKnowledgeClient):
    """
    Scripted client for testing without a knowledge service.

    Each call consumes the next scripted reply; an Exception instance in the
    script is raised instead of returned. With no script, returns canned
    JSON that matches the prompt kind. Prompts are recorded in `calls`.
    """

    RULES_REPLY = {
        "height_max": 15,
        "height_clause": "BBMP 2019, Clause 4.3.2",
        "setback": {
            "front": 6,
            "rear": 3,
            "side": 2,
            "front_clause": "Clause 5.1.1",
            "rear_clause": "Clause 5.1.2",
            "side_clause": "Clause 5.1.3",
        },
        "parking_min": 10,
        "parking_clause": "Clause 6.2.1",
        "far_max": 1.75,
        "far_clause": "Table 5.4.1",
    }

    ANSWER_REPLY = {
        "answer": "Mock answer: refer to the cited clause.",
        "clause": "BBMP 2019, Clause 1.1",
        "page": "1",
    }

    def __init__(self, replies: Optional[Iterable[Any]] = None, model: str = "mock"):
        self.model = model
        self._replies: Optional[List[Any]] = list(replies) if replies is not None else None
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return f"mock/{self.model}"

    def query(self, prompt: str) -> Any:
        self.calls.append(prompt)

        if self._replies is None:
            if "height_max" in prompt:
                return json.dumps(self.RULES_REPLY)
            return dict(self.ANSWER_REPLY)

        if not self._replies:
            raise TransientServiceFailure("Mock client has no scripted replies left")

        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def get_client(
    config: Optional[KnowledgeServiceConfig] = None,
    provider: str = "llamacloud",
    **kwargs,
) -> BaseKnowledgeClient:
    """
    Factory function to get a knowledge-service client.

    Args:
        config: Connection settings (read from the environment if omitted)
        provider: One of 'llamacloud', 'mock'
        **kwargs: Provider-specific options

    Returns:
        BaseKnowledgeClient instance

    Raises:
        ConfigurationMissing: credentials for 'llamacloud' are incomplete
    """
    if provider == "mock":
        return MockKnowledgeClient(**kwargs)

    if provider != "llamacloud":
        raise ValueError(f"Unknown provider: {provider}. Choose from: ['llamacloud', 'mock']")

    config = config or KnowledgeServiceConfig()
    if not config.is_configured:
        raise ConfigurationMissing(
            "LLAMACLOUD_API_KEY, LLAMACLOUD_ENDPOINT and LLAMACLOUD_DOCUMENT_ID must be set"
        )

    return LlamaCloudClient(
        api_key=config.api_key,
        endpoint=config.endpoint,
        document_id=config.document_id,
        timeout=config.timeout,
        **kwargs,
    )
