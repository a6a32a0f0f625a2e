# src/nodecompat/contracts/enums.py
"""Connection-type tags and node categories used across subsystem boundaries.

Connection-type tags are opaque strings. ConnectionType lists the values n8n
itself declares, but analysis never rejects an unknown tag: anything that is
not "main" and not "ai_"-prefixed is scored as a generic channel.
"""

from enum import StrEnum

AI_CONNECTION_PREFIX = "ai_"

# Category that earns the trigger -> processing bonus. Categories are
# otherwise free-form and never used for matching.
TRIGGER_CATEGORY = "trigger"

# Category for nodes that declare none.
DEFAULT_CATEGORY = "misc"


class ConnectionType(StrEnum):
    """Connection-type tags declared by n8n node ports."""

    MAIN = "main"
    AI_AGENT = "ai_agent"
    AI_CHAIN = "ai_chain"
    AI_DOCUMENT = "ai_document"
    AI_EMBEDDING = "ai_embedding"
    AI_LANGUAGE_MODEL = "ai_languageModel"
    AI_MEMORY = "ai_memory"
    AI_OUTPUT_PARSER = "ai_outputParser"
    AI_RETRIEVER = "ai_retriever"
    AI_RERANKER = "ai_reranker"
    AI_TEXT_SPLITTER = "ai_textSplitter"
    AI_TOOL = "ai_tool"
    AI_VECTOR_STORE = "ai_vectorStore"


# Input tags that mark a node as needing specialised upstream wiring.
SPECIAL_INPUT_TYPES: frozenset[str] = frozenset(t.value for t in ConnectionType if t is not ConnectionType.MAIN)


def is_ai_connection(tag: str) -> bool:
    """Whether a tag names an AI capability channel."""
    return tag.startswith(AI_CONNECTION_PREFIX)


def ai_connection_label(tag: str) -> str:
    """Human label for an ai_ tag: prefix removed, split before capitals.

    "ai_languageModel" -> "language Model", "ai_tool" -> "tool".
    """
    bare = tag.replace(AI_CONNECTION_PREFIX, "", 1)
    spaced = "".join(f" {ch}" if ch.isupper() else ch for ch in bare)
    return spaced.strip()
