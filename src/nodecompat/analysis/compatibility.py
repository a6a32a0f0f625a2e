# src/nodecompat/analysis/compatibility.py
"""Connection compatibility analysis between node types.

Checks, for every ordered pair of nodes, whether an output connection type of
the source is accepted by an input of the target, and scores the pairing.

Scoring per matched tag:
    main      -> 50  (ordinary data flow, the most common wiring)
    ai_*      -> 70  (specialised capability channel)
    any other -> 60
plus 20 when a trigger feeds a non-trigger node over main.

The matrix is built once for a node set (O(N^2 * P)) and only read afterwards.
Nothing here raises for empty or unknown data: queries against node types
outside the matrix return empty/False/0.
"""

from __future__ import annotations

from collections.abc import Sequence

from nodecompat.contracts.connection import (
    CompatibilityEntry,
    CompatibilityMatrix,
    NodeCompatibility,
    NodeConnectionInfo,
)
from nodecompat.contracts.enums import TRIGGER_CATEGORY, ConnectionType, is_ai_connection
from nodecompat.core.logging import get_logger

logger = get_logger(__name__)

MAIN_MATCH_SCORE = 50
AI_MATCH_SCORE = 70
OTHER_MATCH_SCORE = 60
TRIGGER_BONUS = 20

TRIGGER_BONUS_REASON = "Trigger → Processing node"
NO_MATCH_REASON = "No matching connection types"


def _tag_score(tag: str) -> int:
    if tag == ConnectionType.MAIN:
        return MAIN_MATCH_SCORE
    if is_ai_connection(tag):
        return AI_MATCH_SCORE
    return OTHER_MATCH_SCORE


def score_connection(source: NodeConnectionInfo, target: NodeConnectionInfo) -> CompatibilityEntry:
    """Evaluate wiring source's outputs into target's inputs.

    Args:
        source: Node whose outputs are connected
        target: Node whose inputs receive the connection

    Returns:
        CompatibilityEntry for target; score 0 when no output type of
        source is accepted by target.
    """
    accepted = set(target.input_types)
    matching = [tag for tag in source.output_types if tag in accepted]

    if not matching:
        return CompatibilityEntry(
            target_node=target.node_type,
            score=0,
            reason=NO_MATCH_REASON,
            connection_types=(),
        )

    score = 0
    reasons: list[str] = []
    for tag in matching:
        score += _tag_score(tag)
        # Matching is by identical tag, so both sides of the arrow are the same.
        reasons.append(f"{tag} → {tag}")

    main = ConnectionType.MAIN
    if (
        main in source.output_types
        and main in target.input_types
        and source.category == TRIGGER_CATEGORY
        and target.category != TRIGGER_CATEGORY
    ):
        score += TRIGGER_BONUS
        reasons.append(TRIGGER_BONUS_REASON)

    return CompatibilityEntry(
        target_node=target.node_type,
        score=score,
        reason=", ".join(reasons),
        connection_types=tuple(matching),
    )


def build_compatibility_matrix(nodes: Sequence[NodeConnectionInfo]) -> CompatibilityMatrix:
    """Build the full compatibility matrix for a node set.

    Every node gets exactly one row, even when both lists are empty.
    compatible is sorted by score descending; sorted() is stable so equal
    scores keep target iteration order.

    Node types are assumed unique. Duplicates are not detected here; the
    later duplicate's row replaces the earlier one.

    Args:
        nodes: Port declarations, one per node type

    Returns:
        Matrix keyed by source node_type in input order
    """
    matrix: CompatibilityMatrix = {}
    compatible_pairs = 0

    for source in nodes:
        compatible: list[CompatibilityEntry] = []
        incompatible: list[CompatibilityEntry] = []

        for target in nodes:
            if source.node_type == target.node_type:
                continue
            entry = score_connection(source, target)
            if entry.score > 0:
                compatible.append(entry)
            else:
                incompatible.append(entry)

        compatible_pairs += len(compatible)
        matrix[source.node_type] = NodeCompatibility(
            compatible=tuple(sorted(compatible, key=lambda e: e.score, reverse=True)),
            incompatible=tuple(incompatible),
        )

    logger.debug(
        "compatibility_matrix_built",
        node_count=len(nodes),
        compatible_pairs=compatible_pairs,
    )
    return matrix


def get_recommended_connections(
    node_type: str,
    matrix: CompatibilityMatrix,
    limit: int = 10,
) -> list[CompatibilityEntry]:
    """Top `limit` compatible targets for node_type (empty if unknown)."""
    row = matrix.get(node_type)
    if row is None:
        return []
    return list(row.compatible[: max(limit, 0)])


def is_compatible(source_type: str, target_type: str, matrix: CompatibilityMatrix) -> bool:
    """Whether target_type is in source_type's compatible list."""
    row = matrix.get(source_type)
    if row is None:
        return False
    return row.find(target_type) is not None


def get_compatibility_score(source_type: str, target_type: str, matrix: CompatibilityMatrix) -> int:
    """Score of the source -> target pair, 0 when incompatible or unknown."""
    row = matrix.get(source_type)
    if row is None:
        return 0
    entry = row.find(target_type)
    return entry.score if entry is not None else 0


def get_incoming_connections(
    node_type: str,
    matrix: CompatibilityMatrix,
    nodes: Sequence[NodeConnectionInfo],
) -> list[tuple[NodeConnectionInfo, CompatibilityEntry]]:
    """Nodes that list node_type as a compatible target.

    Scans `nodes` (not the matrix) so the result only contains nodes the
    caller knows about. Sorted by score descending, ties in `nodes` order.

    Returns:
        (source node, entry for node_type) pairs
    """
    incoming: list[tuple[NodeConnectionInfo, CompatibilityEntry]] = []
    for source in nodes:
        if source.node_type == node_type:
            continue
        row = matrix.get(source.node_type)
        if row is None:
            continue
        entry = row.find(node_type)
        if entry is not None:
            incoming.append((source, entry))

    return sorted(incoming, key=lambda pair: pair[1].score, reverse=True)
