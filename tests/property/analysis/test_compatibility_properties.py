# tests/property/analysis/test_compatibility_properties.py
"""Property-based tests for compatibility matrix construction.

These tests verify structural invariants of the matrix over random catalogs:
- Every node gets exactly one row, and no row mentions its own node
- Each row partitions all other nodes into compatible/incompatible
- Compatible rows are sorted by score, ties kept in catalog order
- Scores follow from the matching tags alone (plus the trigger bonus)
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from nodecompat.analysis import (
    build_compatibility_matrix,
    get_incoming_connections,
    get_recommended_connections,
    is_compatible,
    score_connection,
)
from nodecompat.analysis.compatibility import AI_MATCH_SCORE, MAIN_MATCH_SCORE, OTHER_MATCH_SCORE, TRIGGER_BONUS
from nodecompat.contracts import NodeConnectionInfo
from tests.property.settings import DETERMINISM_SETTINGS, QUICK_SETTINGS, STANDARD_SETTINGS
from tests.strategies import connection_infos, node_sets


def _expected_score(source: NodeConnectionInfo, target: NodeConnectionInfo) -> int:
    score = 0
    for tag in source.output_types:
        if tag in target.input_types:
            if tag == "main":
                score += MAIN_MATCH_SCORE
            elif tag.startswith("ai_"):
                score += AI_MATCH_SCORE
            else:
                score += OTHER_MATCH_SCORE
    if score and "main" in source.output_types and "main" in target.input_types:
        if source.category == "trigger" and target.category != "trigger":
            score += TRIGGER_BONUS
    return score


class TestMatrixShape:
    """Row coverage and partitioning."""

    @given(nodes=node_sets())
    @STANDARD_SETTINGS
    def test_one_row_per_node_in_input_order(self, nodes: list[NodeConnectionInfo]) -> None:
        matrix = build_compatibility_matrix(nodes)

        assert list(matrix) == [n.node_type for n in nodes]

    @given(nodes=node_sets())
    @STANDARD_SETTINGS
    def test_rows_partition_other_nodes(self, nodes: list[NodeConnectionInfo]) -> None:
        matrix = build_compatibility_matrix(nodes)

        for node in nodes:
            row = matrix[node.node_type]
            targets = [e.target_node for e in row.compatible + row.incompatible]
            expected = [n.node_type for n in nodes if n.node_type != node.node_type]
            assert sorted(targets) == sorted(expected)
            assert [e.target_node for e in row.incompatible] == [
                t for t in expected if t not in {e.target_node for e in row.compatible}
            ]

    @given(nodes=node_sets())
    @STANDARD_SETTINGS
    def test_partition_by_score(self, nodes: list[NodeConnectionInfo]) -> None:
        for row in build_compatibility_matrix(nodes).values():
            assert all(e.score > 0 and e.connection_types for e in row.compatible)
            assert all(e.score == 0 and not e.connection_types for e in row.incompatible)


class TestMatrixOrdering:
    """Sort order of compatible lists."""

    @given(nodes=node_sets())
    @STANDARD_SETTINGS
    def test_compatible_sorted_descending_with_stable_ties(self, nodes: list[NodeConnectionInfo]) -> None:
        position = {n.node_type: i for i, n in enumerate(nodes)}

        for row in build_compatibility_matrix(nodes).values():
            keys = [(-e.score, position[e.target_node]) for e in row.compatible]
            assert keys == sorted(keys)

    @given(nodes=node_sets(), limit=st.integers(min_value=-2, max_value=10))
    @QUICK_SETTINGS
    def test_recommendations_are_a_prefix(self, nodes: list[NodeConnectionInfo], limit: int) -> None:
        matrix = build_compatibility_matrix(nodes)

        for node in nodes:
            recommended = get_recommended_connections(node.node_type, matrix, limit)
            assert recommended == list(matrix[node.node_type].compatible[: max(limit, 0)])

    @given(nodes=node_sets(min_size=1))
    @STANDARD_SETTINGS
    def test_incoming_matches_forward_lookups(self, nodes: list[NodeConnectionInfo]) -> None:
        matrix = build_compatibility_matrix(nodes)
        target = nodes[0].node_type

        incoming = get_incoming_connections(target, matrix, nodes)

        sources = {source.node_type for source, _ in incoming}
        assert sources == {n.node_type for n in nodes if n.node_type != target and is_compatible(n.node_type, target, matrix)}
        scores = [entry.score for _, entry in incoming]
        assert scores == sorted(scores, reverse=True)


class TestScoring:
    """Pairwise score formula."""

    @given(source=connection_infos(node_type="src"), target=connection_infos(node_type="tgt"))
    @STANDARD_SETTINGS
    def test_score_follows_matching_tags(self, source: NodeConnectionInfo, target: NodeConnectionInfo) -> None:
        entry = score_connection(source, target)

        assert entry.target_node == "tgt"
        assert entry.score == _expected_score(source, target)
        assert entry.connection_types == tuple(t for t in source.output_types if t in target.input_types)

    @given(source=connection_infos(node_type="src"), target=connection_infos(node_type="tgt"))
    @STANDARD_SETTINGS
    def test_display_name_never_affects_score(self, source: NodeConnectionInfo, target: NodeConnectionInfo) -> None:
        renamed = NodeConnectionInfo(
            node_type=source.node_type,
            display_name=source.display_name + " (copy)",
            input_types=source.input_types,
            output_types=source.output_types,
            category=source.category,
        )

        assert score_connection(renamed, target) == score_connection(source, target)

    @given(nodes=node_sets())
    @DETERMINISM_SETTINGS
    def test_rebuild_is_identical(self, nodes: list[NodeConnectionInfo]) -> None:
        assert build_compatibility_matrix(nodes) == build_compatibility_matrix(list(nodes))
