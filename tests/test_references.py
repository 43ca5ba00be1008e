"""Tests for reference and rename augmentation (references.py)."""

import pytest

from stencil_lens.indexer import ComponentIndexer
from stencil_lens.models.service_models import (
    ReferencedSymbol,
    ReferenceEntry,
    RenameLocation,
    TextSpan,
)
from stencil_lens.references import (
    augment_references,
    augment_rename_locations,
    find_quoted,
    handler_name_offset,
    name_at,
)

WATCH_SOURCE = """\
@Component({ tag: 'x-name' })
export class NameTag {
  @Prop() name: string;
  @Prop() value: string;

  @Watch('name')
  onNameChange() {}

  @Watch("value")
  valueChanged() {}
}
"""


@pytest.fixture
def source(parser):
    return parser.parse(WATCH_SOURCE, "name-tag.tsx")


@pytest.fixture
def meta(source):
    return ComponentIndexer().extract(source)


def symbol_refs(start: int) -> list[ReferencedSymbol]:
    return [ReferencedSymbol(definition="def", references=[
        ReferenceEntry("name-tag.tsx", TextSpan(start, 4), is_definition=True),
    ])]


class TestNameAt:

    def test_identifier_under_cursor(self, source) -> None:
        node = source.get_node(WATCH_SOURCE.index("name: string") + 1)

        assert name_at(source, node) == "name"

    def test_other_nodes(self, source) -> None:
        assert name_at(source, None) is None
        assert name_at(source, source.get_node(WATCH_SOURCE.index("string"))) is None


class TestFindReferences:

    def test_appends_quoted_occurrence(self, meta, source) -> None:
        prior = symbol_refs(WATCH_SOURCE.index("name: string"))

        result = augment_references(meta, source, "name", prior)

        assert len(result) == 2
        extra = result[1]
        assert extra.definition == "def"
        assert extra.references == [ReferenceEntry(
            file_name="name-tag.tsx",
            text_span=TextSpan(WATCH_SOURCE.index("'name'") + 1, 4),
            is_definition=False,
            is_write_access=True,
            is_in_string=True,
        )]
        assert len(prior) == 1

    def test_double_quotes_are_found_first(self) -> None:
        text = "a('value'); b(\"value\");"

        assert find_quoted(text, "value") == text.index('"value"')
        assert find_quoted(text, "missing") == -1

    def test_unwatched_names_pass_through(self, meta, source) -> None:
        prior = symbol_refs(0)

        assert augment_references(meta, source, "other", prior) is prior
        assert augment_references(meta, source, None, prior) is prior
        assert augment_references(meta, source, "name", None) is None


class TestRenameLocations:

    def test_substring_of_handler_name(self, meta, source) -> None:
        prior = [RenameLocation("name-tag.tsx", TextSpan(0, 5))]

        result = augment_rename_locations(meta, source, "value", prior)

        handler_start = WATCH_SOURCE.index("valueChanged()")
        assert result == [*prior, RenameLocation("name-tag.tsx", TextSpan(handler_start, 5))]

    def test_handler_without_exact_match_is_left_alone(self, meta, source) -> None:
        prior = [RenameLocation("name-tag.tsx", TextSpan(0, 4))]

        # "onNameChange" holds "Name", not "name"
        assert augment_rename_locations(meta, source, "name", prior) is prior

    def test_no_host_result(self, meta, source) -> None:
        assert augment_rename_locations(meta, source, "value", None) is None

    def test_handler_offset_uses_declaration(self, parser) -> None:
        text = """\
@Component({ tag: 'x-a' })
export class A {
  @Prop() open: boolean;
  toggle() { this.openChanged(); }
  @Watch('open')
  openChanged() {}
}
"""
        source = parser.parse(text, "a.tsx")
        meta = ComponentIndexer().extract(source)

        assert handler_name_offset(meta, source, "openChanged") == text.index("openChanged() {}")
        assert handler_name_offset(meta, source, "nowhere") == -1
