# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import node_sets, connection_tags
"""

from tests.strategies.nodes import connection_infos, connection_tags, node_sets

__all__ = [
    "connection_infos",
    "connection_tags",
    "node_sets",
]
