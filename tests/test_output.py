"""Tests for metadata rendering (outputs/output.py)."""

import json

from stencil_lens.indexer import ComponentIndexer
from stencil_lens.models.component_models import ComponentMetadata
from stencil_lens.outputs.output import summarize, to_json


class TestOutput:

    def test_json_uses_camel_case_keys(self, component_source) -> None:
        data = json.loads(to_json(ComponentIndexer().extract(component_source)))

        assert data["className"] == "MyCounter"
        assert data["propsConnect"] == ["menuCtrl"]
        assert data["watched"] == [{"prop": "label", "handler": "labelChanged"}]
        assert data["listeners"] == [{"events": ["click", "keydown"], "handler": "handleInput"}]
        assert data["internalMethods"] == ["helper"]

    def test_summary(self, component_source) -> None:
        summary = summarize(ComponentIndexer().extract(component_source))

        assert summary.splitlines()[0] == "[MyCounter]"
        assert "  states: count" in summary
        assert "  listen: click, keydown -> handleInput" in summary

    def test_summary_without_component(self) -> None:
        assert summarize(ComponentMetadata()) == "(no component)"
