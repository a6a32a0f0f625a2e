# src/nodecompat/analysis/__init__.py
"""Compatibility analysis over node port declarations."""

from nodecompat.analysis.compatibility import (
    build_compatibility_matrix,
    get_compatibility_score,
    get_incoming_connections,
    get_recommended_connections,
    is_compatible,
    score_connection,
)

__all__ = [
    "build_compatibility_matrix",
    "get_compatibility_score",
    "get_incoming_connections",
    "get_recommended_connections",
    "is_compatible",
    "score_connection",
]
