"""Tests for parsing n8n node descriptions into port declarations."""

from __future__ import annotations

from typing import Any

import pytest

from nodecompat.contracts import DescriptorParseError
from nodecompat.core.ports import infer_category, parse_node_ports, to_connection_info


def _description(**overrides: Any) -> dict[str, Any]:
    desc: dict[str, Any] = {
        "name": "slack",
        "displayName": "Slack",
        "group": ["output"],
        "version": 2,
        "inputs": ["main"],
        "outputs": ["main"],
    }
    desc.update(overrides)
    return desc


class TestParseNodePorts:
    def test_plain_main_node(self) -> None:
        ports = parse_node_ports(_description())

        assert ports.node_type == "slack"
        assert ports.version == "2"
        assert ports.input_types == ("main",)
        assert ports.output_types == ("main",)
        assert ports.output_count == 1
        assert ports.output_names == ("main",)
        assert ports.is_multi_input is False
        assert ports.is_dynamic_output is False

    def test_trigger_without_inputs(self) -> None:
        ports = parse_node_ports(_description(name="webhook", inputs=[]))

        assert ports.input_types == ()
        assert ports.is_multi_input is False
        assert ports.requires_special_inputs is False

    def test_version_list_reports_latest(self) -> None:
        assert parse_node_ports(_description(version=[1, 2, 2.1])).version == "2.1"

    def test_missing_version_defaults_to_one(self) -> None:
        desc = _description()
        del desc["version"]

        assert parse_node_ports(desc).version == "1"

    def test_branch_outputs_share_one_type(self) -> None:
        ports = parse_node_ports(_description(name="if", outputs=["main", "main"], outputNames=["true", "false"]))

        assert ports.output_types == ("main",)
        assert ports.output_count == 2
        assert ports.output_names == ("true", "false")
        assert ports.is_multi_output is True

    def test_mapping_ports_and_error_output(self) -> None:
        ports = parse_node_ports(
            _description(
                outputs=[
                    {"type": "main", "displayName": "Success"},
                    {"type": "main", "displayName": "Error", "category": "error"},
                ],
            )
        )

        assert ports.output_names == ("Success", "Error")
        assert ports.has_error_output is True

    def test_ai_inputs_require_special_wiring(self) -> None:
        ports = parse_node_ports(
            _description(
                name="chainLlm",
                inputs=["main", {"type": "ai_languageModel", "displayName": "Model", "required": True}],
            )
        )

        assert ports.input_types == ("main", "ai_languageModel")
        assert ports.is_multi_input is True
        assert ports.requires_special_inputs is True

    def test_expression_inputs_for_known_ai_node(self) -> None:
        ports = parse_node_ports(_description(name="agent", inputs="={{ ((parameters) => [...])($parameter) }}"))

        assert ports.input_types == ("main", "ai_languageModel", "ai_memory", "ai_tool", "ai_outputParser")
        assert ports.requires_special_inputs is True

    def test_expression_inputs_for_unknown_node_fall_back_to_main(self) -> None:
        ports = parse_node_ports(_description(name="mystery", inputs="={{ $parameter.inputs }}"))

        assert ports.input_types == ("main",)

    def test_switch_expression_outputs_use_number_outputs_default(self) -> None:
        ports = parse_node_ports(
            _description(
                name="switch",
                outputs="={{ $parameter.rules }}",
                properties=[{"name": "numberOutputs", "default": 3}],
            )
        )

        assert ports.is_dynamic_output is True
        assert ports.output_types == ("main",)
        assert ports.output_names == ("0", "1", "2")
        assert ports.output_count == 3

    def test_switch_expression_outputs_without_property(self) -> None:
        ports = parse_node_ports(_description(name="switch", outputs="={{ $parameter.rules }}"))

        assert ports.output_names == ("0", "1", "2", "3")
        assert ports.is_multi_output is True

    def test_versioned_wrapper_uses_latest_description(self) -> None:
        wrapper = {
            "nodeVersions": {
                "1": {"description": _description(displayName="Old", outputs=["main"])},
                "2": {"description": _description(displayName="New", outputs=["main", "main"])},
            },
        }

        ports = parse_node_ports(wrapper)

        assert ports.output_count == 2

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(DescriptorParseError, match="mapping"):
            parse_node_ports(["main"])  # type: ignore[arg-type]


class TestToConnectionInfo:
    def test_defaults_come_from_description(self) -> None:
        info = to_connection_info(_description())

        assert info.node_type == "slack"
        assert info.display_name == "Slack"
        assert info.category == "misc"

    def test_trigger_group_sets_trigger_category(self) -> None:
        info = to_connection_info(_description(name="webhook", group=["trigger"], inputs=[]))

        assert info.category == "trigger"

    def test_overrides_win(self) -> None:
        info = to_connection_info(
            _description(),
            node_type="nodes-base.slack",
            display_name="Slack (v2)",
            category="communication",
        )

        assert info.node_type == "nodes-base.slack"
        assert info.display_name == "Slack (v2)"
        assert info.category == "communication"

    @pytest.mark.parametrize(
        ("group", "expected"),
        [(["trigger"], "trigger"), ("trigger", "trigger"), (["transform"], "misc"), ([], "misc")],
    )
    def test_infer_category(self, group: Any, expected: str) -> None:
        assert infer_category({"group": group}) == expected
