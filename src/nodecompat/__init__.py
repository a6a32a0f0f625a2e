# src/nodecompat/__init__.py
"""
nodecompat: Port-level connection compatibility for n8n nodes.

Infers which node types can be wired together from their declared
input/output connection types, scores each pairing, and renders the
result as Markdown connection guides and a compatibility matrix.
"""

__version__ = "0.3.0"
