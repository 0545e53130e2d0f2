"""Configuration models for diagramkit.

DiagramConfig holds settings shared by diagrams and the deserialization
factory: checksum strictness on load, the default commit-graph branch, and
JSON output formatting.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator


class DiagramConfig(BaseModel):
    """Library-wide diagram configuration."""

    model_config = {"frozen": True}

    strict_checksum: bool = False  # raise instead of warn on mismatch
    default_branch: str = "master"
    json_indent: Optional[int] = None

    @field_validator("default_branch")
    @classmethod
    def _non_empty_branch(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("default_branch cannot be empty")
        return v


DEFAULT_CONFIG = DiagramConfig()
