"""
bylawcheck Knowledge-Service Reply Parser

The knowledge service answers in several shapes:
- a JSON object already in the requested structure
- a string with a JSON object embedded in prose or code fences
- an object wrapping the payload under `result` / `text` / `response` / `output`

parse_reply() classifies a raw reply into a tagged ParsedReply; to_ruleset()
and to_answer() then validate it into the canonical models. Anything that
cannot be shaped raises MalformedReply.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Set
import json

from pydantic import ValidationError

from bylawcheck.core.models import BylawAnswer, RuleSet
from bylawcheck.exceptions import MalformedReply


ALTERNATE_KEYS = ("result", "text", "response", "output")

RULESET_KEYS = frozenset({"height_max", "setback", "parking_min", "far_max"})
ANSWER_KEYS = frozenset({"answer"})


class ReplyKind(str, Enum):
    STRUCTURED = "structured"
    EMBEDDED_JSON = "embedded_json"
    ALTERNATE_KEY = "alternate_key"
    TEXT = "text"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ParsedReply:
    """Reply classified by shape; payload is set for object kinds, text for TEXT."""
    kind: ReplyKind
    payload: Optional[Dict[str, Any]] = None
    text: Optional[str] = None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Decode the span from the first '{' to the last '}' as a JSON object."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_reply(raw: Any, expected_keys: Iterable[str]) -> ParsedReply:
    """
    Classify a raw knowledge-service reply.

    Args:
        raw: Decoded JSON value, text, or bytes from the transport
        expected_keys: Keys that mark an object as already structured

    Returns:
        ParsedReply tagged with the detected shape
    """
    expected = set(expected_keys)

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        data = extract_json_object(raw)
        if data is None:
            return ParsedReply(ReplyKind.UNRECOGNIZED)
        # Embedded JSON may itself be a result/text wrapper.
        parsed = _classify_object(data, expected)
        if parsed.kind in (ReplyKind.STRUCTURED, ReplyKind.UNRECOGNIZED):
            return ParsedReply(ReplyKind.EMBEDDED_JSON, payload=data)
        return parsed

    if isinstance(raw, dict):
        return _classify_object(raw, expected)

    return ParsedReply(ReplyKind.UNRECOGNIZED)


def _classify_object(data: Dict[str, Any], expected: Set[str]) -> ParsedReply:
    if expected & data.keys():
        return ParsedReply(ReplyKind.STRUCTURED, payload=data)

    for key in ALTERNATE_KEYS:
        value = data.get(key)
        if isinstance(value, dict):
            return ParsedReply(ReplyKind.ALTERNATE_KEY, payload=value)
        if isinstance(value, str) and value.strip():
            unwrapped = extract_json_object(value)
            if unwrapped is not None:
                return ParsedReply(ReplyKind.ALTERNATE_KEY, payload=unwrapped)
            return ParsedReply(ReplyKind.TEXT, text=value.strip())

    return ParsedReply(ReplyKind.UNRECOGNIZED)


def to_ruleset(raw: Any) -> RuleSet:
    """Parse a rules reply into a RuleSet; every numeric limit must be present."""
    parsed = parse_reply(raw, RULESET_KEYS)
    if parsed.payload is None:
        raise MalformedReply(f"Unusable rules reply ({parsed.kind.value})")

    try:
        return RuleSet(**parsed.payload)
    except (ValidationError, TypeError) as e:
        raise MalformedReply(f"Rules reply failed validation: {e}") from e


def to_answer(raw: Any) -> BylawAnswer:
    """Parse a Q&A reply into a BylawAnswer; a missing or blank answer is malformed."""
    parsed = parse_reply(raw, ANSWER_KEYS)

    if parsed.kind is ReplyKind.TEXT:
        return BylawAnswer(answer=parsed.text)
    if parsed.payload is None:
        raise MalformedReply(f"Unusable answer reply ({parsed.kind.value})")

    answer = parsed.payload.get("answer")
    if not isinstance(answer, str) or not answer.strip():
        raise MalformedReply("Answer reply has no answer text")

    try:
        return BylawAnswer(
            answer=answer,
            clause=parsed.payload.get("clause"),
            page=parsed.payload.get("page"),
        )
    except ValidationError as e:
        raise MalformedReply(f"Answer reply failed validation: {e}") from e
