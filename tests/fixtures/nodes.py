"""Node declarations shared by unit and property tests.

The catalog mirrors a small slice of real n8n nodes: a trigger, plain
actions, branching nodes, and an AI agent with its model/tool/memory
suppliers.
"""

from __future__ import annotations

from typing import Any

from nodecompat.contracts import NodeConnectionInfo


def make_node(node_type: str, **overrides: Any) -> NodeConnectionInfo:
    """NodeConnectionInfo with main-in/main-out action defaults."""
    fields: dict[str, Any] = {
        "display_name": node_type,
        "input_types": ("main",),
        "output_types": ("main",),
        "category": "action",
        "output_count": 1,
    }
    fields.update(overrides)
    return NodeConnectionInfo(node_type=node_type, **fields)


WEBHOOK = make_node(
    "nodes-base.webhook",
    display_name="Webhook",
    input_types=(),
    category="trigger",
)
HTTP_REQUEST = make_node("nodes-base.httpRequest", display_name="HTTP Request")
SLACK = make_node("nodes-base.slack", display_name="Slack")
IF_NODE = make_node(
    "nodes-base.if",
    display_name="If",
    category="transform",
    output_count=2,
    output_names=("true", "false"),
    is_multi_output=True,
)
SWITCH = make_node(
    "nodes-base.switch",
    display_name="Switch",
    category="transform",
    output_count=4,
    output_names=("0", "1", "2", "3"),
    is_multi_output=True,
    is_dynamic_output=True,
)
AGENT = make_node(
    "@n8n/n8n-nodes-langchain.agent",
    display_name="AI Agent",
    input_types=("main", "ai_languageModel", "ai_memory", "ai_tool", "ai_outputParser"),
    is_multi_input=True,
    requires_special_inputs=True,
    category="ai",
)
OPENAI_MODEL = make_node(
    "@n8n/n8n-nodes-langchain.lmChatOpenAi",
    display_name="OpenAI Chat Model",
    input_types=(),
    output_types=("ai_languageModel",),
    category="ai",
)
MEMORY = make_node(
    "@n8n/n8n-nodes-langchain.memoryBufferWindow",
    display_name="Window Buffer Memory",
    input_types=(),
    output_types=("ai_memory",),
    category="ai",
)
CALCULATOR = make_node(
    "@n8n/n8n-nodes-langchain.toolCalculator",
    display_name="Calculator",
    input_types=(),
    output_types=("ai_tool",),
    category="ai",
)


def sample_catalog() -> list[NodeConnectionInfo]:
    """Catalog in a fixed order; tests rely on this order for tie-breaks."""
    return [WEBHOOK, HTTP_REQUEST, SLACK, IF_NODE, SWITCH, AGENT, OPENAI_MODEL, MEMORY, CALCULATOR]
