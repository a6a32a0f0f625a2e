# src/nodecompat/rendering/__init__.py
"""Markdown rendering of compatibility data."""

from nodecompat.rendering.connection_guide import (
    generate_compatibility_matrix,
    generate_node_connection_guide,
    truncate_name,
)

__all__ = [
    "generate_compatibility_matrix",
    "generate_node_connection_guide",
    "truncate_name",
]
