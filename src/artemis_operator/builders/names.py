"""Canonical names and labels for resources owned by an ActiveMQArtemis.

Every name is a pure function of the custom resource name and a fixed role
suffix, so repeated reconciles always address the same objects.
"""

from __future__ import annotations

from ..constants import (
    LABEL_APPLICATION,
    LABEL_CR_NAME,
    MAX_NAME_LENGTH,
    SUFFIX_CLUSTER_SECRET,
    SUFFIX_HEADLESS_SERVICE,
    SUFFIX_LABEL_APP,
    SUFFIX_PING_SERVICE,
    SUFFIX_POD,
    SUFFIX_STATEFULSET,
    SUFFIX_USER_SECRET,
)
from ..utils.errors import InvalidNameError


def resource_name(cr_name: str, suffix: str) -> str:
    """Join a custom resource name and a role suffix.

    Raises:
        InvalidNameError: If the name is empty or longer than a DNS-1123 label
    """
    if not cr_name:
        raise InvalidNameError("custom resource name is required")
    name = f"{cr_name}-{suffix}"
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(f"generated name {name!r} exceeds {MAX_NAME_LENGTH} characters")
    return name


def statefulset_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_STATEFULSET)


def headless_service_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_HEADLESS_SERVICE)


def ping_service_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_PING_SERVICE)


def pod_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_POD)


def user_secret_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_USER_SECRET)


def cluster_secret_name(cr_name: str) -> str:
    return resource_name(cr_name, SUFFIX_CLUSTER_SECRET)


def labels(cr_name: str) -> dict[str, str]:
    """Labels shared by every object of one broker deployment."""
    return {
        LABEL_APPLICATION: resource_name(cr_name, SUFFIX_LABEL_APP),
        LABEL_CR_NAME: cr_name,
    }


def label_selector(cr_name: str) -> str:
    """Labels as a selector string for list calls."""
    return ",".join(f"{key}={value}" for key, value in labels(cr_name).items())
