"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Create an opaque 32-character hex record identifier."""
    return uuid.uuid4().hex


def new_signature_id() -> str:
    """Placeholder envelope id until an e-signature provider is wired in."""
    return f"sig-{uuid.uuid4().hex}"
