# src/nodecompat/core/__init__.py
"""Core infrastructure: configuration, logging, port parsing, and catalog files."""

from nodecompat.core.catalog import (
    load_matrix,
    load_node_catalog,
    parse_node_catalog,
    save_matrix,
    save_node_catalog,
)
from nodecompat.core.config import NodeCompatSettings, OutputSettings, RenderSettings, load_settings
from nodecompat.core.logging import configure_logging, get_logger
from nodecompat.core.ports import NodePortInfo, parse_node_ports, to_connection_info

__all__ = [
    "NodeCompatSettings",
    "NodePortInfo",
    "OutputSettings",
    "RenderSettings",
    "configure_logging",
    "get_logger",
    "load_matrix",
    "load_node_catalog",
    "load_settings",
    "parse_node_catalog",
    "parse_node_ports",
    "save_matrix",
    "save_node_catalog",
    "to_connection_info",
]
