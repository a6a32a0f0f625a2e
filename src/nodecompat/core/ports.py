# src/nodecompat/core/ports.py
"""Port parsing: n8n node descriptions -> connection declarations.

Reads the `inputs`/`outputs` section of an n8n node type description (as
exported to JSON by the node collector) and summarises it into the shape the
compatibility analyzer consumes.

n8n descriptions come in a few forms:
- inputs/outputs as a list of tags ("main") or port mappings ({"type": ...})
- inputs/outputs as an expression string ("={{ ... }}") evaluated at runtime
- a versioned wrapper {"nodeVersions": {"1": {"description": ...}, ...}}

Expressions are never evaluated. Dynamic inputs fall back to the static AI
node table or to ["main"]; dynamic outputs are reported as a single "main"
type with a configurable connector count.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from nodecompat.contracts.connection import NodeConnectionInfo
from nodecompat.contracts.enums import DEFAULT_CATEGORY, SPECIAL_INPUT_TYPES, TRIGGER_CATEGORY, ConnectionType
from nodecompat.contracts.errors import DescriptorParseError
from nodecompat.core.ai_inputs import AI_NODE_INPUTS, get_ai_node_inputs

# Outputs of a Switch node in expression mode when numberOutputs is absent.
_DEFAULT_SWITCH_OUTPUTS = 4

PortSpec: TypeAlias = str | Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class NodePortInfo:
    """Input/output summary of one node description."""

    node_type: str
    version: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]
    is_multi_input: bool
    is_multi_output: bool
    requires_special_inputs: bool
    has_error_output: bool
    output_count: int
    output_names: tuple[str, ...]
    is_dynamic_output: bool


def _resolve_description(description: Mapping[str, Any]) -> Mapping[str, Any]:
    """Pick the latest version's description from a versioned wrapper."""
    node_versions = description.get("nodeVersions")
    if isinstance(node_versions, Mapping) and node_versions:
        latest = max(node_versions, key=lambda v: float(v))
        versioned = node_versions[latest]
        if isinstance(versioned, Mapping) and isinstance(versioned.get("description"), Mapping):
            return versioned["description"]
    if isinstance(description.get("description"), Mapping):
        return description["description"]
    if isinstance(description.get("baseDescription"), Mapping):
        return description["baseDescription"]
    return description


def _extract_version(desc: Mapping[str, Any]) -> str:
    version = desc.get("version")
    if isinstance(version, list) and version:
        latest = max(float(v) for v in version)
        return f"{latest:g}"
    if version is None or version == "":
        return "1"
    return str(version)


def _normalize_inputs(inputs: Any, node_type: str) -> list[PortSpec]:
    if not inputs:
        return []
    if isinstance(inputs, str):
        if node_type in AI_NODE_INPUTS:
            ai_inputs = get_ai_node_inputs(node_type)
            if ai_inputs:
                return [{"type": str(p.type), "displayName": p.display_name, "required": p.required} for p in ai_inputs]
        return [ConnectionType.MAIN.value]
    if isinstance(inputs, list):
        return inputs
    return []


def _normalize_outputs(outputs: Any) -> list[PortSpec]:
    # Expression outputs (Switch) are handled via is_dynamic_output.
    if not outputs or isinstance(outputs, str):
        return []
    if isinstance(outputs, list):
        return outputs
    return []


def _port_types(ports: Sequence[PortSpec]) -> tuple[str, ...]:
    types: dict[str, None] = {}
    for port in ports:
        if isinstance(port, str):
            types[port] = None
        elif isinstance(port, Mapping) and port.get("type"):
            types[str(port["type"])] = None
    return tuple(types)


def _switch_output_names(desc: Mapping[str, Any]) -> tuple[str, ...]:
    for prop in desc.get("properties") or ():
        if isinstance(prop, Mapping) and prop.get("name") == "numberOutputs":
            default = prop.get("default")
            if isinstance(default, int) and not isinstance(default, bool):
                return tuple(str(i) for i in range(default))
    return tuple(str(i) for i in range(_DEFAULT_SWITCH_OUTPUTS))


def _output_names(desc: Mapping[str, Any], outputs: Sequence[PortSpec]) -> tuple[str, ...]:
    explicit = desc.get("outputNames")
    if isinstance(explicit, list):
        return tuple(str(name) for name in explicit)

    if desc.get("name") == "switch" and isinstance(desc.get("outputs"), str):
        return _switch_output_names(desc)

    names: list[str] = []
    for port in outputs:
        if isinstance(port, str):
            names.append(port)
        elif isinstance(port, Mapping) and port.get("displayName"):
            names.append(str(port["displayName"]))
    return tuple(names)


def parse_node_ports(description: Mapping[str, Any]) -> NodePortInfo:
    """Summarise the ports of an n8n node description.

    Args:
        description: Node type description, plain or versioned

    Returns:
        NodePortInfo for the latest version

    Raises:
        DescriptorParseError: If description is not a mapping
    """
    if not isinstance(description, Mapping):
        raise DescriptorParseError(f"Node description must be a mapping, got {type(description).__name__}")

    desc = _resolve_description(description)
    node_type = str(desc.get("name") or "")

    inputs = _normalize_inputs(desc.get("inputs"), node_type)
    outputs = _normalize_outputs(desc.get("outputs"))
    is_dynamic_output = isinstance(desc.get("outputs"), str)
    output_names = _output_names(desc, outputs)
    input_types = _port_types(inputs)

    if is_dynamic_output:
        output_count = len(output_names)
        is_multi_output = len(output_names) > 1
        output_types: tuple[str, ...] = (ConnectionType.MAIN.value,)
    else:
        output_count = len(outputs)
        is_multi_output = len(outputs) > 1
        output_types = _port_types(outputs)

    return NodePortInfo(
        node_type=node_type,
        version=_extract_version(desc),
        input_types=input_types,
        output_types=output_types,
        is_multi_input=len(inputs) > 1,
        is_multi_output=is_multi_output,
        requires_special_inputs=any(t in SPECIAL_INPUT_TYPES for t in input_types),
        has_error_output=any(isinstance(p, Mapping) and p.get("category") == "error" for p in outputs),
        output_count=output_count,
        output_names=output_names,
        is_dynamic_output=is_dynamic_output,
    )


def infer_category(description: Mapping[str, Any]) -> str:
    """Category from the n8n group list: trigger nodes vs everything else."""
    group = _resolve_description(description).get("group") or ()
    if isinstance(group, str):
        group = (group,)
    return TRIGGER_CATEGORY if TRIGGER_CATEGORY in group else DEFAULT_CATEGORY


def to_connection_info(
    description: Mapping[str, Any],
    *,
    node_type: str | None = None,
    display_name: str | None = None,
    category: str | None = None,
) -> NodeConnectionInfo:
    """Parse a node description straight into a NodeConnectionInfo.

    Args:
        description: Node type description
        node_type: Package-qualified type (e.g. "nodes-base.slack");
            defaults to the description's own name
        display_name: Human label; defaults to the description's displayName
        category: Coarse classification used for the trigger bonus;
            defaults to "trigger" for nodes in the n8n "trigger" group
            and "misc" otherwise
    """
    ports = parse_node_ports(description)
    desc = _resolve_description(description)
    return NodeConnectionInfo(
        node_type=node_type or ports.node_type,
        display_name=display_name or str(desc.get("displayName") or ports.node_type),
        input_types=ports.input_types,
        output_types=ports.output_types,
        is_multi_input=ports.is_multi_input,
        is_multi_output=ports.is_multi_output,
        requires_special_inputs=ports.requires_special_inputs,
        category=category or infer_category(desc),
        output_count=ports.output_count,
        output_names=ports.output_names,
        is_dynamic_output=ports.is_dynamic_output,
    )
