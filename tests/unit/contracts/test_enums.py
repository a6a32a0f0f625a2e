"""Tests for connection-type tags."""

import pytest

from nodecompat.contracts import ConnectionType
from nodecompat.contracts.enums import SPECIAL_INPUT_TYPES, ai_connection_label, is_ai_connection


class TestConnectionType:
    def test_values_are_plain_strings(self) -> None:
        assert ConnectionType.AI_LANGUAGE_MODEL == "ai_languageModel"
        assert f"{ConnectionType.MAIN}" == "main"

    def test_special_inputs_exclude_main(self) -> None:
        assert "main" not in SPECIAL_INPUT_TYPES
        assert "ai_tool" in SPECIAL_INPUT_TYPES
        assert len(SPECIAL_INPUT_TYPES) == len(ConnectionType) - 1


class TestTagHelpers:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("ai_tool", True),
            ("ai_somethingNew", True),
            ("main", False),
            ("customData", False),
            ("AI_tool", False),
        ],
    )
    def test_is_ai_connection(self, tag: str, expected: bool) -> None:
        assert is_ai_connection(tag) is expected

    @pytest.mark.parametrize(
        ("tag", "label"),
        [
            ("ai_languageModel", "language Model"),
            ("ai_tool", "tool"),
            ("ai_outputParser", "output Parser"),
            ("ai_textSplitter", "text Splitter"),
        ],
    )
    def test_label(self, tag: str, label: str) -> None:
        assert ai_connection_label(tag) == label
