# src/nodecompat/core/catalog.py
"""Node catalog and matrix cache files.

A node catalog is a JSON or YAML list. Each record is either:
- a connection record in the node-io-config.json layout
  ({"nodeType", "displayName", "inputTypes", "outputTypes", ...}), or
- an n8n node description ({"name", "inputs", "outputs", ...}, optionally
  wrapped in {"description": ...} or {"nodeVersions": ...}), parsed through
  nodecompat.core.ports. Top-level "nodeType", "displayName" and "category"
  override what the description declares.

This is the trust boundary: records are validated here, so the analyzer can
assume well-formed, uniquely keyed input.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nodecompat.contracts.connection import CompatibilityMatrix, NodeCompatibility, NodeConnectionInfo
from nodecompat.contracts.enums import DEFAULT_CATEGORY
from nodecompat.contracts.errors import CatalogError, DescriptorParseError
from nodecompat.core.logging import get_logger
from nodecompat.core.ports import to_connection_info

logger = get_logger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class NodeConnectionRecord(BaseModel):
    """Validated connection record (camelCase on disk)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: str = Field(alias="nodeType", min_length=1)
    display_name: str = Field(alias="displayName")
    input_types: list[str] = Field(default_factory=list, alias="inputTypes")
    output_types: list[str] = Field(default_factory=list, alias="outputTypes")
    is_multi_input: bool = Field(default=False, alias="isMultiInput")
    is_multi_output: bool = Field(default=False, alias="isMultiOutput")
    requires_special_inputs: bool = Field(default=False, alias="requiresSpecialInputs")
    category: str = DEFAULT_CATEGORY
    output_count: int = Field(default=0, ge=0, alias="outputCount")
    output_names: list[str] = Field(default_factory=list, alias="outputNames")
    is_dynamic_output: bool = Field(default=False, alias="isDynamicOutput")

    def to_connection_info(self) -> NodeConnectionInfo:
        return NodeConnectionInfo(
            node_type=self.node_type,
            display_name=self.display_name,
            input_types=tuple(self.input_types),
            output_types=tuple(self.output_types),
            is_multi_input=self.is_multi_input,
            is_multi_output=self.is_multi_output,
            requires_special_inputs=self.requires_special_inputs,
            category=self.category,
            output_count=self.output_count,
            output_names=tuple(self.output_names),
            is_dynamic_output=self.is_dynamic_output,
        )


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Node catalog not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot parse {path.name}: {e}") from e


def _is_connection_record(record: Mapping[str, Any]) -> bool:
    return "inputTypes" in record or "outputTypes" in record


def _record_to_info(record: Mapping[str, Any]) -> NodeConnectionInfo:
    if _is_connection_record(record):
        return NodeConnectionRecord.model_validate(record).to_connection_info()

    info = to_connection_info(
        record,
        node_type=record.get("nodeType"),
        display_name=record.get("displayName"),
        category=record.get("category"),
    )
    if not info.node_type:
        raise DescriptorParseError("node description has no name and no nodeType")
    return info


def parse_node_catalog(records: Any, *, source: str = "<memory>") -> list[NodeConnectionInfo]:
    """Validate catalog records and convert them to NodeConnectionInfo.

    Args:
        records: Decoded catalog document (a list of mappings)
        source: Name used in error messages

    Returns:
        Nodes in catalog order

    Raises:
        CatalogError: If the document is not a list, a record is invalid,
            or a node type appears twice
    """
    if not isinstance(records, list):
        raise CatalogError(f"{source}: expected a list of node records, got {type(records).__name__}")

    nodes: list[NodeConnectionInfo] = []
    seen: dict[str, int] = {}
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CatalogError(f"{source}: record {index} is {type(record).__name__}, expected a mapping")
        try:
            info = _record_to_info(record)
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors())
            raise CatalogError(f"{source}: record {index} is invalid: {problems}") from e
        except (DescriptorParseError, ValueError, TypeError) as e:
            raise CatalogError(f"{source}: record {index} could not be parsed: {e}") from e

        if info.node_type in seen:
            raise CatalogError(
                f"{source}: duplicate nodeType '{info.node_type}' at records {seen[info.node_type]} and {index}"
            )
        seen[info.node_type] = index
        nodes.append(info)

    return nodes


def load_node_catalog(path: Path) -> list[NodeConnectionInfo]:
    """Load a node catalog from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogError: If the file cannot be parsed or validated
    """
    nodes = parse_node_catalog(_read_document(path), source=path.name)
    logger.info("node_catalog_loaded", path=str(path), node_count=len(nodes))
    return nodes


def save_node_catalog(nodes: Sequence[NodeConnectionInfo], path: Path) -> None:
    """Write nodes as a connection-record JSON list."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([n.to_dict() for n in nodes], indent=2, ensure_ascii=False), encoding="utf-8")


def matrix_to_dict(matrix: CompatibilityMatrix) -> dict[str, Any]:
    return {node_type: row.to_dict() for node_type, row in matrix.items()}


def matrix_from_dict(data: Any) -> CompatibilityMatrix:
    """Rebuild a matrix from its JSON form.

    Raises:
        CatalogError: If the data does not have the matrix layout
    """
    if not isinstance(data, Mapping):
        raise CatalogError(f"matrix cache must be an object, got {type(data).__name__}")
    try:
        return {str(node_type): NodeCompatibility.from_dict(row) for node_type, row in data.items()}
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CatalogError(f"matrix cache is malformed: {e}") from e


def save_matrix(matrix: CompatibilityMatrix, path: Path) -> None:
    """Persist a matrix as JSON (compatibility-matrix.json layout)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(matrix_to_dict(matrix), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("matrix_saved", path=str(path), node_count=len(matrix))


def load_matrix(path: Path) -> CompatibilityMatrix:
    """Load a matrix cache written by save_matrix().

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogError: If the file is not a valid matrix cache
    """
    if not path.exists():
        raise FileNotFoundError(f"Matrix cache not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError(f"Cannot parse {path.name}: {e}") from e
    return matrix_from_dict(data)
