"""
bylawcheck Error Taxonomy

Resolvers absorb dependency-facing failures (ConfigurationMissing,
TransientServiceFailure) into degraded results. Only InvalidInput and
UnexpectedInternal reach the caller.
"""


class BylawCheckError(Exception):
    """Base class for bylawcheck errors."""


class InvalidInput(BylawCheckError, ValueError):
    """Caller supplied an empty question or an incomplete project record."""


class ConfigurationMissing(BylawCheckError):
    """Knowledge-service credentials are absent."""


class TransientServiceFailure(BylawCheckError):
    """Knowledge-service call timed out, failed, or returned an error status."""


class MalformedReply(TransientServiceFailure):
    """Knowledge-service reply could not be parsed into the expected shape."""


class UnexpectedInternal(BylawCheckError):
    """Logic defect while normalizing or evaluating a record."""
