"""Field validators and sanitizers shared by the request schemas."""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")


def sanitize_text(value: str | None, max_len: int = 10000) -> str:
    """Strip NUL bytes and surrounding whitespace, then cap the length."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    return cleaned[:max_len]


def normalize_email(value: str) -> str:
    cleaned = sanitize_text(value, max_len=320).lower()
    if not EMAIL_PATTERN.match(cleaned):
        raise ValueError("Please provide a valid email")
    return cleaned


def normalize_phone(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = re.sub(r"[\s()-]", "", value)
    if not cleaned:
        return None
    if not PHONE_PATTERN.match(cleaned):
        raise ValueError("Please provide a valid phone number")
    return cleaned
