"""Tests for type predicates (type_predicates.py)."""

from types import SimpleNamespace

from stencil_lens.plugin import ComponentLanguageService
from stencil_lens.type_predicates import (
    SyntacticType,
    TypeFlags,
    check_type,
    is_boolean,
    is_number,
    is_string,
    type_from_annotation,
)

STRING = SyntacticType(TypeFlags.STRING, "string")
NUMBER_LITERAL = SyntacticType(TypeFlags.NUMBER_LITERAL, "3")
TRUE = SyntacticType(TypeFlags.BOOLEAN_LITERAL, "true")
OBJECT = SyntacticType(TypeFlags.OBJECT, "object")


def union(*members: SyntacticType) -> SyntacticType:
    return SyntacticType(TypeFlags.UNION, " | ".join(m.text for m in members), members)


class TestPrimitives:

    def test_absent_type_is_nothing(self) -> None:
        assert not is_boolean(None)
        assert not is_number(None)
        assert not is_string(None)

    def test_literal_and_general_forms(self) -> None:
        assert is_string(STRING)
        assert is_string(SyntacticType(TypeFlags.STRING_LITERAL, "'a'"))
        assert is_number(NUMBER_LITERAL)
        assert is_boolean(TRUE)
        assert not is_string(OBJECT)


class TestCheckType:

    def test_union_passes_when_any_member_passes(self) -> None:
        assert check_type(union(OBJECT, STRING), is_string)
        assert check_type(union(OBJECT, union(NUMBER_LITERAL)), is_number)

    def test_union_fails_when_no_member_passes(self) -> None:
        assert not check_type(union(OBJECT, STRING), is_boolean)

    def test_short_circuits_on_first_match(self) -> None:
        seen = []

        def check(t):
            seen.append(t)
            return is_string(t)

        assert check_type(union(STRING, OBJECT, TRUE), check)
        assert seen == [STRING]

    def test_plain_type_is_checked_directly(self) -> None:
        assert check_type(TRUE, is_boolean)
        assert not check_type(TRUE, is_string)


class TestFromAnnotation:

    def test_builds_types_from_field_annotations(self, parser) -> None:
        source = parser.parse(
            "class A {\n  a: string | 'x' | 3;\n  b: boolean;\n  c: Foo;\n}\n", "a.ts")
        annotations = source.get_all_nodes(lambda n: n.type == "type_annotation")

        a, b, c = (type_from_annotation(source.source_bytes, n) for n in annotations)

        assert a.flags & TypeFlags.UNION
        assert [bool(m.flags) for m in a.types] == [True, True, True]
        assert check_type(a, is_number)
        assert not check_type(a, is_boolean)
        assert is_boolean(b)
        assert c.text == "Foo"
        assert not (is_string(c) or is_number(c) or is_boolean(c))

    def test_missing_node(self) -> None:
        assert type_from_annotation(b"", None) is None


class TestCheckerTypes:
    """Types handed out by the host's checker are classified the same way."""

    def test_checker_reached_through_the_service(self, host) -> None:
        optional_flag = SimpleNamespace(flags=int(TypeFlags.UNION), types=[
            SimpleNamespace(flags=int(TypeFlags.UNDEFINED)),
            SimpleNamespace(flags=int(TypeFlags.BOOLEAN_LITERAL)),
        ])
        host.type_checker = SimpleNamespace(types={"open": optional_flag})

        checker = ComponentLanguageService(host).get_type_checker()

        assert host.calls["get_type_checker"] == 1
        assert check_type(checker.types["open"], is_boolean)
        assert not check_type(checker.types["open"], is_string)
