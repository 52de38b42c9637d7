"""Error types and sanitization utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from kubernetes.client.exceptions import ApiException

if TYPE_CHECKING:
    from ..states.steps import ResourceKind


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"AMQ_(?:CLUSTER_)?PASSWORD[=:\s]+([^\s,;\)]+)",
    r"adminPassword[=:\s\"']+([^\s,;\)\"']+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "password",
    "secret",
    "credentials",
    "token",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, lambda m: m.group(0).replace(m.group(1), "[REDACTED]"), sanitized)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"\b{field}[:\s]+([^\s,;\)]+)",
            rf"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message."""
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized


def is_not_found(error: BaseException | None) -> bool:
    """Return True if the error is a Kubernetes 404."""
    return isinstance(error, ApiException) and error.status == 404


class OperatorError(Exception):
    """Base class for errors raised by the operator."""


class InvalidNameError(OperatorError, ValueError):
    """A generated resource name is not a valid Kubernetes name."""


class ResourceRetrievalError(OperatorError):
    """A dependent resource could not be read from the cluster.

    The creating-resources state treats every retrieval failure as "absent",
    ``not_found`` tells a real 404 apart from transport or permission errors.
    """

    def __init__(self, kind: str, name: str, cause: BaseException | None = None):
        self.kind = kind
        self.name = name
        self.cause = cause
        super().__init__(f"failed to retrieve {kind} {name}: {cause}")

    @property
    def not_found(self) -> bool:
        return is_not_found(self.cause)


class ResourceCreationError(OperatorError):
    """A dependent resource could not be created."""

    def __init__(self, kind: str, name: str, cause: BaseException | None = None):
        self.kind = kind
        self.name = name
        self.cause = cause
        super().__init__(f"failed to create {kind} {name}: {cause}")

    @property
    def conflict(self) -> bool:
        return isinstance(self.cause, ApiException) and self.cause.status == 409


class WorkloadUpdateError(OperatorError):
    """Persisting a drift correction on the workload failed."""

    def __init__(self, name: str, cause: BaseException | None = None):
        self.name = name
        self.cause = cause
        super().__init__(f"failed to update StatefulSet {name}: {cause}")


@dataclass(frozen=True)
class StepResult:
    """Outcome of one create-or-retrieve step."""

    kind: ResourceKind
    created: bool = False
    error: ResourceCreationError | None = None
    retrieval_error: ResourceRetrievalError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class StepErrors(OperatorError):
    """Aggregates the failed steps of one create-or-retrieve pass."""

    def __init__(self, results: list[StepResult]):
        self.results = results
        self.errors: list[ResourceCreationError] = [
            result.error for result in results if result.error is not None
        ]
        kinds = ", ".join(result.kind.value for result in results if result.failed)
        super().__init__(f"{len(self.errors)} resource step(s) failed: {kinds}")

    @property
    def retrieval_errors(self) -> list[ResourceRetrievalError]:
        return [
            result.retrieval_error
            for result in self.results
            if result.failed and result.retrieval_error is not None
        ]
