"""Utility functions for the ActiveMQ Artemis Operator."""

from .conditions import (
    set_ready_condition,
    set_resources_created_condition,
    set_scaling_condition,
    update_condition,
)
from .errors import (
    ResourceCreationError,
    InvalidNameError,
    ResourceRetrievalError,
    StepErrors,
    StepResult,
    WorkloadUpdateError,
    sanitize_exception,
)
from .events import emit_event
from .rate_limit import handle_rate_limit_error, rate_limit_k8s
from .secrets import generate_password, generate_user

__all__ = [
    "update_condition",
    "set_ready_condition",
    "set_resources_created_condition",
    "set_scaling_condition",
    "InvalidNameError",
    "ResourceCreationError",
    "ResourceRetrievalError",
    "StepErrors",
    "StepResult",
    "WorkloadUpdateError",
    "sanitize_exception",
    "emit_event",
    "handle_rate_limit_error",
    "rate_limit_k8s",
    "generate_password",
    "generate_user",
]
