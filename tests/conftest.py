"""Shared fixtures: a parser, sample component sources and a recording host."""

import os
from collections import Counter
from typing import Any, Optional

import pytest

from stencil_lens.models.service_models import (
    CompletionEntryDetails,
    CompletionInfo,
    QuickInfo,
    ReferencedSymbol,
    RenameLocation,
    SymbolDisplayPart,
)
from stencil_lens.parsing import TypeScriptParser

COMPONENT_SOURCE = """\
import { Component, Element, Event, EventEmitter, Listen, Method, Prop, State, Watch } from '@stencil/core';

@Component({ tag: 'my-counter' })
export class MyCounter {
  @Element() el: HTMLElement;
  @State() count = 0;
  @Prop() label: string;
  @Prop({ connect: 'ion-menu-controller' }) menuCtrl: any;
  @Prop({ context: 'config' }) config: any;
  @Event() changed: EventEmitter;
  cache = new Map();

  @Watch('label')
  labelChanged(newValue: string) {
    this.cache.clear();
  }

  @Listen('click')
  @Listen('keydown')
  handleInput(ev: Event) {
    this.count++;
  }

  @Method()
  reset() {
    this.count = 0;
  }

  componentDidUpdate() {}

  componentWillLoad() {}

  helper() {
    return this.label;
  }

  hostData() {
    return {  };
  }

  render() {
    return <div>hello </div>;
  }
}
"""

PLAIN_SOURCE = """\
export class NotAComponent {
  @Prop() label: string;
  render() {}
  componentDidLoad() {}
}
"""


@pytest.fixture
def parser() -> TypeScriptParser:
    return TypeScriptParser()


@pytest.fixture
def component_source(parser: TypeScriptParser):
    return parser.parse(COMPONENT_SOURCE, "my-counter.tsx")


@pytest.fixture
def plain_source(parser: TypeScriptParser):
    return parser.parse(PLAIN_SOURCE, "plain.tsx")


def method_details(name: str, owner: str = "MyCounter") -> CompletionEntryDetails:
    """Details the way a host renders `(method) Owner.name(): void`."""
    return CompletionEntryDetails(
        name=name,
        kind="method",
        display_parts=[
            SymbolDisplayPart("(", "punctuation"),
            SymbolDisplayPart("method", "text"),
            SymbolDisplayPart(")", "punctuation"),
            SymbolDisplayPart(" ", "space"),
            SymbolDisplayPart(owner, "className"),
            SymbolDisplayPart(".", "punctuation"),
            SymbolDisplayPart(name, "methodName"),
            SymbolDisplayPart("(): void", "text"),
        ],
    )


def property_details(name: str, owner: str = "MyCounter") -> CompletionEntryDetails:
    return CompletionEntryDetails(
        name=name,
        kind="property",
        display_parts=[
            SymbolDisplayPart("(", "punctuation"),
            SymbolDisplayPart("property", "text"),
            SymbolDisplayPart(")", "punctuation"),
            SymbolDisplayPart(" ", "space"),
            SymbolDisplayPart(owner, "className"),
            SymbolDisplayPart(".", "punctuation"),
            SymbolDisplayPart(name, "propertyName"),
        ],
    )


class RecordingHost:
    """In-memory host that serves canned answers and counts every call."""

    def __init__(self, files: Optional[dict[str, str]] = None):
        self.files = dict(files or {})
        self.calls: Counter = Counter()
        self.completions: Optional[CompletionInfo] = None
        self.details: dict[str, CompletionEntryDetails] = {}
        self.quick_info: Optional[QuickInfo] = None
        self.references: Optional[list[ReferencedSymbol]] = None
        self.rename_locations: Optional[list[RenameLocation]] = None
        self.tag_names: list[str] = []
        self.type_checker: Any = None
        self.last_rename_args: Optional[tuple] = None
        self.last_completion_options: Optional[dict[str, Any]] = None

    def get_source_text(self, file_name: str) -> Optional[str]:
        self.calls["get_source_text"] += 1
        return self.files.get(file_name)

    def get_completions_at_position(self, file_name, position, options=None):
        self.calls["get_completions_at_position"] += 1
        self.last_completion_options = options
        return self.completions

    def get_completion_entry_details(self, file_name, position, name, format_options=None,
                                     source=None, preferences=None):
        self.calls["get_completion_entry_details"] += 1
        return self.details.get(name)

    def get_quick_info_at_position(self, file_name, position):
        self.calls["get_quick_info_at_position"] += 1
        return self.quick_info

    def find_references(self, file_name, position):
        self.calls["find_references"] += 1
        return self.references

    def find_rename_locations(self, file_name, position, find_in_strings, find_in_comments):
        self.calls["find_rename_locations"] += 1
        self.last_rename_args = (find_in_strings, find_in_comments)
        return self.rename_locations

    def get_jsx_intrinsic_tag_names(self, file_name, position):
        self.calls["get_jsx_intrinsic_tag_names"] += 1
        return list(self.tag_names)

    def get_type_checker(self):
        self.calls["get_type_checker"] += 1
        return self.type_checker

    def get_syntactic_diagnostics(self, file_name):
        self.calls["get_syntactic_diagnostics"] += 1
        return []


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost({"my-counter.tsx": COMPONENT_SOURCE, "plain.tsx": PLAIN_SOURCE})


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch) -> None:
    """Keep STENCIL_LENS__* variables from the outer shell out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("STENCIL_LENS__"):
            monkeypatch.delenv(key)
