"""Deterministic hashing utilities for diagramkit.

Provides canonical JSON serialization and SHA-256 hashing for diagram
content payloads, plus the id scheme used for generated commit ids.
All checksum hashing is deterministic: same input always produces same
output, regardless of dict key ordering.

IMPORTANT: Pydantic models must be converted to dicts via
model_dump(mode="json") BEFORE passing to these functions.
These functions operate on plain dicts/primitives only.
"""

from __future__ import annotations

import hashlib
import json
import uuid
from typing import Any, Sequence


def canonical_json(data: Any) -> bytes:
    """Serialize data to canonical JSON bytes.

    Uses sorted keys, compact separators, and UTF-8 encoding
    to ensure deterministic output.

    Args:
        data: Any JSON-serializable Python object (dict, list, str, int, etc.).

    Returns:
        UTF-8 encoded bytes of the canonical JSON string.
    """
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def content_hash(payload: dict) -> str:
    """Compute SHA-256 hash of a diagram content payload.

    Args:
        payload: Content dict (already converted from Pydantic models).

    Returns:
        Hex digest of SHA-256 hash.
    """
    return hashlib.sha256(canonical_json(payload)).hexdigest()


def generate_commit_id(
    sequence: int,
    parent_ids: Sequence[str],
    message: str | None,
) -> str:
    """Build an id for a commit created without an explicit one.

    Format: ``commit-<sequence>-<parent prefix>-<message digest prefix>``.
    The parent prefix is the first six characters of the first parent id
    (``root`` for a parentless commit). Without a message a random token is
    digested instead, so two anonymous commits still get distinct ids.

    Not a content address: ids only need to be unique within one diagram.
    """
    parent_part = parent_ids[0][:6] if parent_ids else "root"
    seed = message if message is not None else uuid.uuid4().hex
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()[:6]
    return f"commit-{sequence}-{parent_part}-{digest}"
