"""Conversions between diagram class names and canonical wire type names."""

from __future__ import annotations

import re

# Class names that plain capitalization of the snake_case form cannot rebuild.
_ACRONYM_CLASS_NAMES: dict[str, str] = {
    "er_diagram": "ERDiagram",
}

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def camel_to_snake(name: str) -> str:
    """``GitgraphDiagram`` -> ``gitgraph_diagram``, ``ERDiagram`` -> ``er_diagram``."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def snake_to_camel(name: str) -> str:
    """``flowchart_diagram`` -> ``FlowchartDiagram``; acronyms are hard-mapped."""
    if name in _ACRONYM_CLASS_NAMES:
        return _ACRONYM_CLASS_NAMES[name]
    return "".join(part.capitalize() for part in name.split("_"))
