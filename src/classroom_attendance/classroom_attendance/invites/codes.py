from __future__ import annotations

import secrets
import string

from ..core.constants import INVITE_CODE_LENGTH, INVITE_CODE_PREFIX

_ALPHABET = string.digits + string.ascii_uppercase


def generate_code() -> str:
    """``INV-`` followed by 9 random base-36 characters."""
    return INVITE_CODE_PREFIX + "".join(secrets.choice(_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def normalize_code(value: str) -> str:
    return (value or "").strip().upper()
