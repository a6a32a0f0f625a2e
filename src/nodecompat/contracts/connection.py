# src/nodecompat/contracts/connection.py
"""Connection info model: node ports, pairwise results, and the matrix.

These types answer: "What can this node be wired to?"

All records are frozen. Sequence fields are normalised to tuples at
construction so a built matrix can be shared without defensive copies.
JSON helpers use the camelCase keys of the n8n build cache files
(node-io-config.json, compatibility-matrix.json).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from nodecompat.contracts.enums import DEFAULT_CATEGORY


def _distinct(tags: Iterable[str]) -> tuple[str, ...]:
    """Collapse repeated tags, keeping the first occurrence order."""
    return tuple(dict.fromkeys(tags))


@dataclass(frozen=True, slots=True)
class NodeConnectionInfo:
    """Port declaration for one node type.

    input_types and output_types are ordered sets: order is kept for display
    but never affects whether two nodes match. output_count can exceed
    len(output_types) when several connectors share a type (IF true/false).
    """

    node_type: str
    display_name: str
    input_types: tuple[str, ...] = ()
    output_types: tuple[str, ...] = ()
    is_multi_input: bool = False
    is_multi_output: bool = False
    requires_special_inputs: bool = False
    category: str = DEFAULT_CATEGORY
    output_count: int = 0
    output_names: tuple[str, ...] = field(default_factory=tuple)
    is_dynamic_output: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_types", _distinct(self.input_types))
        object.__setattr__(self, "output_types", _distinct(self.output_types))
        object.__setattr__(self, "output_names", tuple(self.output_names))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeConnectionInfo:
        """Build from a camelCase record as stored in node-io-config.json."""
        return cls(
            node_type=data["nodeType"],
            display_name=data["displayName"],
            input_types=tuple(data.get("inputTypes", ())),
            output_types=tuple(data.get("outputTypes", ())),
            is_multi_input=bool(data.get("isMultiInput", False)),
            is_multi_output=bool(data.get("isMultiOutput", False)),
            requires_special_inputs=bool(data.get("requiresSpecialInputs", False)),
            category=data.get("category", DEFAULT_CATEGORY),
            output_count=int(data.get("outputCount", 0)),
            output_names=tuple(data.get("outputNames", ())),
            is_dynamic_output=bool(data.get("isDynamicOutput", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodeType": self.node_type,
            "displayName": self.display_name,
            "inputTypes": list(self.input_types),
            "outputTypes": list(self.output_types),
            "isMultiInput": self.is_multi_input,
            "isMultiOutput": self.is_multi_output,
            "requiresSpecialInputs": self.requires_special_inputs,
            "category": self.category,
            "outputCount": self.output_count,
            "outputNames": list(self.output_names),
            "isDynamicOutput": self.is_dynamic_output,
        }


@dataclass(frozen=True, slots=True)
class CompatibilityEntry:
    """Result of evaluating one ordered (source, target) pair.

    A score of 0 means the pair is incompatible.
    """

    target_node: str
    score: int
    reason: str
    connection_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"score must be non-negative, got {self.score}")
        object.__setattr__(self, "connection_types", tuple(self.connection_types))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompatibilityEntry:
        return cls(
            target_node=data["targetNode"],
            score=int(data["score"]),
            reason=data["reason"],
            connection_types=tuple(data.get("connectionTypes", ())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "targetNode": self.target_node,
            "score": self.score,
            "reason": self.reason,
            "connectionTypes": list(self.connection_types),
        }


@dataclass(frozen=True, slots=True)
class NodeCompatibility:
    """Matrix row for one source node.

    compatible holds score > 0 entries sorted by score descending (stable);
    incompatible holds score == 0 entries in target iteration order.
    """

    compatible: tuple[CompatibilityEntry, ...] = ()
    incompatible: tuple[CompatibilityEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "compatible", tuple(self.compatible))
        object.__setattr__(self, "incompatible", tuple(self.incompatible))

    def find(self, target_node: str) -> CompatibilityEntry | None:
        """Compatible entry for target_node, or None."""
        for entry in self.compatible:
            if entry.target_node == target_node:
                return entry
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeCompatibility:
        return cls(
            compatible=tuple(CompatibilityEntry.from_dict(e) for e in data.get("compatible", ())),
            incompatible=tuple(CompatibilityEntry.from_dict(e) for e in data.get("incompatible", ())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "compatible": [e.to_dict() for e in self.compatible],
            "incompatible": [e.to_dict() for e in self.incompatible],
        }


# Keyed by source node_type, in input node order. Built once per node set and
# treated as read-only; no entry exists for node types outside that set.
CompatibilityMatrix: TypeAlias = dict[str, NodeCompatibility]
