# src/nodecompat/rendering/connection_guide.py
"""Markdown connection guides and the compatibility matrix table.

Read-only consumers of a built CompatibilityMatrix. Nothing here computes
compatibility; ordering and truncation follow the matrix exactly so the
output is byte-identical for identical inputs.

If the matrix and the node list diverge (a stale matrix against a filtered
node list), targets missing from the node list are dropped from the output.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from nodecompat.analysis.compatibility import get_incoming_connections
from nodecompat.contracts.connection import CompatibilityEntry, CompatibilityMatrix, NodeConnectionInfo
from nodecompat.contracts.enums import ConnectionType, ai_connection_label, is_ai_connection
from nodecompat.core.logging import get_logger

logger = get_logger(__name__)

ELLIPSIS = ".."

NO_INPUT_MESSAGE = "This node does not accept input from other nodes (usually a trigger node)."
NO_OUTPUT_MESSAGE = "This node has no output, usually used as a workflow endpoint."

# Semantic meaning of well-known multi-output connectors, keyed by node type
# then output name.
OUTPUT_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "nodes-base.if": {
        "true": "Output when condition is true",
        "false": "Output when condition is false",
    },
    "nodes-base.splitInBatches": {
        "done": "Output when all batches are processed",
        "loop": "Output for each batch iteration (for looping)",
    },
    "nodes-base.compareDatasets": {
        "In A only": "Items only in dataset A",
        "Same": "Items that are the same in both datasets",
        "Different": "Items that are different between datasets",
        "In B only": "Items only in dataset B",
    },
    "nodes-base.switch": {
        "Fallback": "Default output when no rules match",
    },
}

# Nodes whose numbered outputs ("0", "1", ...) are routing branches.
_INDEXED_OUTPUT_NODES: frozenset[str] = frozenset({"nodes-base.switch"})

# Numeric literals as n8n expressions parse them: signed decimals with an
# optional exponent, Infinity, and unsigned hex/octal/binary.
_NUMERIC_LITERAL = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+"
)

MATRIX_CORNER_LABEL = "Source Node ↓ / Target Node →"
MATRIX_COLUMN_WIDTH = 12
MATRIX_ROW_WIDTH = 20

HIGH_COMPATIBILITY_SCORE = 70
MEDIUM_COMPATIBILITY_SCORE = 50

MATRIX_LEGEND: tuple[str, ...] = (
    "- `++` High Compatibility (score ≥ 70) - Strongly recommended",
    "- `+` Medium Compatibility (score 50-69) - Can connect",
    "- `~` Low Compatibility (score < 50) - May be able to connect",
    "- `X` Incompatible - Cannot connect",
    "- `-` N/A - Same node",
)


def truncate_name(name: str, max_length: int) -> str:
    """Fit a display name into a table cell.

    Names up to max_length are unchanged; longer names keep their first
    max_length - 2 characters followed by "..". Widths below 2 leave only
    the marker.
    """
    if len(name) <= max_length:
        return name
    return name[: max(max_length - len(ELLIPSIS), 0)] + ELLIPSIS


def get_output_description(node_type: str, output_name: str) -> str:
    """Description of a known output connector, or "" when none is known."""
    description = OUTPUT_DESCRIPTIONS.get(node_type, {}).get(output_name)
    if description is not None:
        return description
    if node_type in _INDEXED_OUTPUT_NODES and _is_number(output_name):
        return f"Output path {output_name}"
    return ""


def _is_number(value: str) -> bool:
    """Whether n8n would read value as a number (blank counts as 0)."""
    stripped = value.strip()
    return not stripped or _NUMERIC_LITERAL.fullmatch(stripped) is not None


def format_connection_type_list(types: Sequence[str]) -> str:
    """Render tags as inline code with a short gloss."""
    parts: list[str] = []
    for tag in types:
        if tag == ConnectionType.MAIN:
            parts.append("`main` (general data flow)")
        elif is_ai_connection(tag):
            parts.append(f"`{tag}` ({ai_connection_label(tag)})")
        else:
            parts.append(f"`{tag}`")
    return ", ".join(parts)


def _format_connection_types(node: NodeConnectionInfo) -> str:
    lines: list[str] = []

    if node.input_types:
        lines.append(f"- Input Types: {format_connection_type_list(node.input_types)}")
    else:
        lines.append("- Input Types: None (this is a trigger or starting node)")

    if node.output_types:
        lines.append(f"- Output Types: {format_connection_type_list(node.output_types)}")

        if node.output_count > 1 or node.is_dynamic_output:
            count = f"{node.output_count} (configurable)" if node.is_dynamic_output else f"{node.output_count}"
            lines.append(f"- Output Count: {count}")

            if node.output_names:
                lines.append("\nOutput Details:")
                for index, name in enumerate(node.output_names, start=1):
                    description = get_output_description(node.node_type, name)
                    suffix = f" - {description}" if description else ""
                    lines.append(f"{index}. `{name}`{suffix}")

    return "\n".join(lines)


def _format_connection_line(index: int, display_name: str, entry: CompatibilityEntry) -> str:
    via = ", ".join(f"`{tag}`" for tag in entry.connection_types)
    return f"{index}. {display_name} - via {via} connection"


def _format_incoming_connections(
    node: NodeConnectionInfo,
    matrix: CompatibilityMatrix,
    all_nodes: Sequence[NodeConnectionInfo],
    limit: int,
) -> str:
    incoming = get_incoming_connections(node.node_type, matrix, all_nodes)[: max(limit, 0)]
    if not incoming:
        return NO_INPUT_MESSAGE

    return "\n".join(
        _format_connection_line(index, source.display_name, entry)
        for index, (source, entry) in enumerate(incoming, start=1)
    )


def _format_outgoing_connections(
    node: NodeConnectionInfo,
    matrix: CompatibilityMatrix,
    all_nodes: Sequence[NodeConnectionInfo],
    limit: int,
) -> str:
    row = matrix.get(node.node_type)
    if row is None or not row.compatible:
        return NO_OUTPUT_MESSAGE

    names = {n.node_type: n.display_name for n in all_nodes}
    top = row.compatible[: max(limit, 0)]
    resolved = [(names[entry.target_node], entry) for entry in top if entry.target_node in names]

    dropped = len(top) - len(resolved)
    if dropped:
        logger.debug(
            "connection_targets_not_in_node_list",
            node_type=node.node_type,
            dropped=dropped,
        )

    return "\n".join(
        _format_connection_line(index, display_name, entry)
        for index, (display_name, entry) in enumerate(resolved, start=1)
    )


def _special_requirement(tag: str) -> str:
    if tag == ConnectionType.AI_LANGUAGE_MODEL:
        return "(required)"
    if tag in (ConnectionType.AI_TOOL, ConnectionType.AI_MEMORY):
        return "(optional, multiple allowed)"
    return "(optional)"


def _format_special_requirements(node: NodeConnectionInfo) -> str:
    ai_inputs = [tag for tag in node.input_types if is_ai_connection(tag)]
    if not ai_inputs:
        logger.warning(
            "special_inputs_flag_without_ai_inputs",
            node_type=node.node_type,
            input_types=list(node.input_types),
        )
        return ""

    lines = ["This AI node requires the following special inputs:\n"]
    for tag in ai_inputs:
        lines.append(f"- {ai_connection_label(tag)} {_special_requirement(tag)}")
    return "\n".join(lines)


def generate_node_connection_guide(
    node: NodeConnectionInfo,
    matrix: CompatibilityMatrix,
    all_nodes: Sequence[NodeConnectionInfo],
    limit: int = 10,
) -> str:
    """Render the Markdown connection guide for a single node.

    Sections, in order: connection types (always), "Can Receive From" (when the
    node has inputs), "Can Connect To" (when it has outputs), and
    "Special Requirements" (when requires_special_inputs is set).

    Args:
        node: Node to document
        matrix: Matrix built over a superset of all_nodes
        all_nodes: Node list used to resolve display names
        limit: Maximum entries per incoming/outgoing list

    Returns:
        Markdown text
    """
    sections: list[str] = ["## Connection Guide\n"]

    sections.append("### Connection Type\n")
    sections.append(_format_connection_types(node))

    if node.input_types:
        sections.append("\n### Can Receive From\n")
        sections.append(_format_incoming_connections(node, matrix, all_nodes, limit))

    if node.output_types:
        sections.append("\n### Can Connect To\n")
        sections.append(_format_outgoing_connections(node, matrix, all_nodes, limit))

    if node.requires_special_inputs:
        sections.append("\n### Special Requirements\n")
        sections.append(_format_special_requirements(node))

    return "\n".join(sections)


def _matrix_cell(source: NodeConnectionInfo, target: NodeConnectionInfo, matrix: CompatibilityMatrix) -> str:
    if source.node_type == target.node_type:
        return "-"

    row = matrix.get(source.node_type)
    entry = row.find(target.node_type) if row is not None else None
    if entry is None:
        return "X"
    if entry.score >= HIGH_COMPATIBILITY_SCORE:
        return "++"
    if entry.score >= MEDIUM_COMPATIBILITY_SCORE:
        return "+"
    return "~"


def generate_compatibility_matrix(
    matrix: CompatibilityMatrix,
    all_nodes: Sequence[NodeConnectionInfo],
    top_n: int = 30,
) -> str:
    """Render the pairwise compatibility table for the first top_n nodes.

    Nodes are taken in the caller's order; callers sort by importance first.
    Rows are sources, columns are targets.
    """
    sections: list[str] = ["# Node Compatibility Matrix\n"]
    sections.append(
        "This matrix shows connection compatibility between nodes. Rows are source nodes, columns are target nodes.\n"
    )

    selected = list(all_nodes[: max(top_n, 0)])

    header = [MATRIX_CORNER_LABEL]
    header.extend(truncate_name(n.display_name, MATRIX_COLUMN_WIDTH) for n in selected)
    sections.append(f"| {' | '.join(header)} |")
    sections.append(f"| {' | '.join('---' for _ in header)} |")

    for source in selected:
        row = [truncate_name(source.display_name, MATRIX_ROW_WIDTH)]
        row.extend(_matrix_cell(source, target, matrix) for target in selected)
        sections.append(f"| {' | '.join(row)} |")

    sections.append("\n## Legend\n")
    sections.extend(MATRIX_LEGEND)

    return "\n".join(sections)
