# src/nodecompat/contracts/errors.py
"""Exceptions raised at the file and descriptor boundary.

Analysis and rendering never raise for missing or empty data; these errors
exist only for loading catalogs and parsing node descriptions.
"""


class NodeCompatError(Exception):
    """Base class for nodecompat errors."""

    pass


class CatalogError(NodeCompatError):
    """Raised when a node catalog or matrix cache cannot be loaded.

    Covers unreadable files, records that fail validation, and duplicate
    node types (the analyzer assumes node types are unique).
    """

    pass


class DescriptorParseError(NodeCompatError):
    """Raised when an n8n node description is not a usable mapping."""

    pass
