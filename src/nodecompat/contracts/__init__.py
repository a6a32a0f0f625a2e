# src/nodecompat/contracts/__init__.py
"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core,
analysis, or rendering. Settings classes are NOT re-exported here -
import them from nodecompat.core.config.

Import patterns:
    from nodecompat.contracts import NodeConnectionInfo, CompatibilityMatrix
"""

from nodecompat.contracts.connection import (
    CompatibilityEntry,
    CompatibilityMatrix,
    NodeCompatibility,
    NodeConnectionInfo,
)
from nodecompat.contracts.enums import (
    AI_CONNECTION_PREFIX,
    DEFAULT_CATEGORY,
    SPECIAL_INPUT_TYPES,
    TRIGGER_CATEGORY,
    ConnectionType,
    ai_connection_label,
    is_ai_connection,
)
from nodecompat.contracts.errors import CatalogError, DescriptorParseError, NodeCompatError

__all__ = [
    "AI_CONNECTION_PREFIX",
    "DEFAULT_CATEGORY",
    "SPECIAL_INPUT_TYPES",
    "TRIGGER_CATEGORY",
    "CatalogError",
    "CompatibilityEntry",
    "CompatibilityMatrix",
    "ConnectionType",
    "DescriptorParseError",
    "NodeCompatError",
    "NodeCompatibility",
    "NodeConnectionInfo",
    "ai_connection_label",
    "is_ai_connection",
]
