"""Utilities for broker credential secrets."""

from __future__ import annotations

import base64
import secrets

GENERATED_USER_LENGTH = 8
GENERATED_PASSWORD_LENGTH = 16


def generate_user() -> str:
    """Generate a random broker user name."""
    return "user" + secrets.token_hex(GENERATED_USER_LENGTH // 2)


def generate_password() -> str:
    """Generate a random broker password."""
    return secrets.token_urlsafe(GENERATED_PASSWORD_LENGTH)


def encode_secret_data(data: dict[str, str]) -> dict[str, str]:
    """Base64 encode secret values for the ``data`` field of a Secret."""
    return {k: base64.b64encode(v.encode("utf-8")).decode("utf-8") for k, v in data.items()}

