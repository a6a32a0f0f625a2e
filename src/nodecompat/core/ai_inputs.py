# src/nodecompat/core/ai_inputs.py
"""Static input configurations for well-known AI nodes.

AI nodes declare their inputs as runtime expressions that cannot be evaluated
statically. This table supplies the inputs they resolve to so the port parser
does not have to guess.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from nodecompat.contracts.enums import ConnectionType


@dataclass(frozen=True, slots=True)
class InputPort:
    """One declared input connector."""

    type: str
    display_name: str
    required: bool = False
    max_connections: int | None = None
    excluded_nodes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AINodeInputConfig:
    """Input configuration for one AI node type.

    conditional_inputs are appended by get_ai_node_inputs() depending on
    node parameters ("hasOutputParser", "needsFallback").
    """

    node_type: str
    versions: tuple[str, ...]
    dynamic_behavior: Literal["static", "conditional"]
    base_inputs: tuple[InputPort, ...] = ()
    conditional_inputs: Mapping[str, tuple[InputPort, ...]] = field(default_factory=dict)


_AGENT_EXCLUDED_MODELS: tuple[str, ...] = (
    "@n8n/n8n-nodes-langchain.lmCohere",
    "@n8n/n8n-nodes-langchain.lmOllama",
    "n8n/n8n-nodes-langchain.lmOpenAi",
    "@n8n/n8n-nodes-langchain.lmOpenHuggingFaceInference",
)

_VECTOR_STORE_INPUT = InputPort(
    type=ConnectionType.AI_VECTOR_STORE,
    display_name="Vector Store",
    required=True,
    max_connections=1,
)


def _static(node_type: str, *versions: str, inputs: tuple[InputPort, ...] = ()) -> AINodeInputConfig:
    return AINodeInputConfig(
        node_type=node_type,
        versions=versions or ("1",),
        dynamic_behavior="static",
        base_inputs=inputs,
    )


AI_NODE_INPUTS: dict[str, AINodeInputConfig] = {
    "agent": AINodeInputConfig(
        node_type="agent",
        versions=("1", "2", "3"),
        dynamic_behavior="conditional",
        base_inputs=(
            InputPort(type=ConnectionType.MAIN, display_name="Input", required=True),
            InputPort(
                type=ConnectionType.AI_LANGUAGE_MODEL,
                display_name="Chat Model",
                required=True,
                max_connections=1,
                excluded_nodes=_AGENT_EXCLUDED_MODELS,
            ),
            InputPort(type=ConnectionType.AI_MEMORY, display_name="Memory", max_connections=1),
            InputPort(type=ConnectionType.AI_TOOL, display_name="Tool"),
        ),
        conditional_inputs={
            "hasOutputParser": (
                InputPort(
                    type=ConnectionType.AI_OUTPUT_PARSER,
                    display_name="Output Parser",
                    max_connections=1,
                ),
            ),
            "needsFallback": (
                InputPort(
                    type=ConnectionType.AI_LANGUAGE_MODEL,
                    display_name="Fallback Model",
                    required=True,
                    max_connections=1,
                    excluded_nodes=_AGENT_EXCLUDED_MODELS,
                ),
            ),
        },
    ),
    # Language models
    "lmOpenAi": _static("lmOpenAi"),
    "lmAzureOpenAi": _static("lmAzureOpenAi"),
    "lmChatAnthropic": _static("lmChatAnthropic"),
    "lmChatGoogleVertexAi": _static("lmChatGoogleVertexAi"),
    "lmCohere": _static("lmCohere"),
    "lmOllama": _static("lmOllama"),
    "lmGroq": _static("lmGroq"),
    # Tools
    "toolCode": _static("toolCode", "1", "1.1", "1.2", "1.3"),
    "toolHttpRequest": _static("toolHttpRequest"),
    "toolWorkflow": _static("toolWorkflow", "1", "2"),
    "toolWikipedia": _static("toolWikipedia"),
    "toolSerpApi": _static("toolSerpApi"),
    "toolVectorStore": _static("toolVectorStore", inputs=(_VECTOR_STORE_INPUT,)),
    "toolCalculator": _static("toolCalculator"),
    "toolThink": _static("toolThink"),
    # Memory
    "memoryBuffer": _static("memoryBuffer"),
    "memoryVectorStore": _static("memoryVectorStore", inputs=(_VECTOR_STORE_INPUT,)),
    # Retrievers
    "vectorStoreRetriever": _static("vectorStoreRetriever", inputs=(_VECTOR_STORE_INPUT,)),
    # Output parsers
    "outputParserJson": _static("outputParserJson"),
    "outputParserStructured": _static("outputParserStructured"),
}


def get_ai_node_inputs(node_type: str, parameters: Mapping[str, Any] | None = None) -> list[InputPort]:
    """Resolved input ports for a known AI node.

    The output parser input is included unless parameters["hasOutputParser"]
    is explicitly False; the fallback model only when
    parameters["needsFallback"] is True.

    Returns:
        Input ports, empty for unknown node types
    """
    config = AI_NODE_INPUTS.get(node_type)
    if config is None:
        return []

    params = parameters or {}
    inputs = list(config.base_inputs)
    if params.get("hasOutputParser") is not False:
        inputs.extend(config.conditional_inputs.get("hasOutputParser", ()))
    if params.get("needsFallback") is True:
        inputs.extend(config.conditional_inputs.get("needsFallback", ()))
    return inputs


def is_known_ai_node(node_type: str) -> bool:
    return node_type in AI_NODE_INPUTS


def requires_input_type(node_type: str, input_type: str) -> bool:
    """Whether the node has a required input of input_type."""
    return any(port.type == input_type and port.required for port in get_ai_node_inputs(node_type))


def get_supported_input_types(node_type: str) -> list[str]:
    """Distinct input tags of a known AI node, in declaration order."""
    return list(dict.fromkeys(str(port.type) for port in get_ai_node_inputs(node_type)))
