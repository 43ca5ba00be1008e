# --- Type predicates -----------------------------------------------------------
#
# Works on anything that looks like a checker type: an object with integer
# `flags` and, for unions, a `types` sequence. `SyntacticType` builds such
# objects straight from TypeScript type annotations when no checker is around.

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

from stencil_lens.tree_sitter_helpers import node_text


class TypeFlags(IntFlag):
    """Primitive classification flags for a type."""
    ANY = 1 << 0
    UNKNOWN = 1 << 1
    STRING = 1 << 2
    NUMBER = 1 << 3
    BOOLEAN = 1 << 4
    STRING_LITERAL = 1 << 7
    NUMBER_LITERAL = 1 << 8
    BOOLEAN_LITERAL = 1 << 9
    UNDEFINED = 1 << 15
    NULL = 1 << 16
    OBJECT = 1 << 19
    UNION = 1 << 20

    STRING_LIKE = STRING | STRING_LITERAL
    NUMBER_LIKE = NUMBER | NUMBER_LITERAL
    BOOLEAN_LIKE = BOOLEAN | BOOLEAN_LITERAL


@dataclass(frozen=True)
class SyntacticType:
    """A type as written in the source, classified by its flags."""
    flags: TypeFlags
    text: str
    types: tuple["SyntacticType", ...] = field(default_factory=tuple)


def check_type(type_, check: Callable[[object], bool]) -> bool:
    """
    Applies `check` to a type. For a union the check passes as soon as any
    member passes (any-of, not all-of); the union itself is tested last.
    """
    if type_ is not None and type_.flags & TypeFlags.UNION:
        if any(check_type(member, check) for member in type_.types):
            return True
    return check(type_)


def is_boolean(t) -> bool:
    if t:
        return bool(t.flags & TypeFlags.BOOLEAN_LIKE)
    return False


def is_number(t) -> bool:
    if t:
        return bool(t.flags & TypeFlags.NUMBER_LIKE)
    return False


def is_string(t) -> bool:
    if t:
        return bool(t.flags & TypeFlags.STRING_LIKE)
    return False


# --- Building types from annotations -----------------------------------------

_PREDEFINED = {
    "string": TypeFlags.STRING,
    "number": TypeFlags.NUMBER,
    "boolean": TypeFlags.BOOLEAN,
    "any": TypeFlags.ANY,
    "unknown": TypeFlags.UNKNOWN,
    "undefined": TypeFlags.UNDEFINED,
    "object": TypeFlags.OBJECT,
}


def _flatten_union(source_bytes: bytes, node, out: list):
    for child in node.named_children:
        if child.type == "union_type":
            _flatten_union(source_bytes, child, out)
        else:
            member = type_from_annotation(source_bytes, child)
            if member is not None:
                out.append(member)


def _literal_flags(source_bytes: bytes, node) -> TypeFlags:
    literal = node.named_children[0] if node.named_children else node
    if literal.type == "string" or literal.type == "template_string":
        return TypeFlags.STRING_LITERAL
    if literal.type == "number" or literal.type == "unary_expression":
        return TypeFlags.NUMBER_LITERAL
    if literal.type in ("true", "false"):
        return TypeFlags.BOOLEAN_LITERAL
    if literal.type == "null":
        return TypeFlags.NULL
    if literal.type == "undefined":
        return TypeFlags.UNDEFINED
    return TypeFlags(0)


def type_from_annotation(source_bytes: bytes, node) -> Optional[SyntacticType]:
    """
    Turns a type node (or the `type_annotation` wrapping it) into a
    SyntacticType. Unrecognized shapes come back with no primitive flags.
    """
    if node is None:
        return None
    if node.type == "type_annotation":
        inner = node.named_children
        return type_from_annotation(source_bytes, inner[0]) if inner else None
    if node.type == "parenthesized_type":
        inner = node.named_children
        return type_from_annotation(source_bytes, inner[0]) if inner else None

    text = node_text(source_bytes, node)
    if node.type == "union_type":
        members: list[SyntacticType] = []
        _flatten_union(source_bytes, node, members)
        return SyntacticType(TypeFlags.UNION, text, tuple(members))
    if node.type == "predefined_type":
        return SyntacticType(_PREDEFINED.get(text, TypeFlags(0)), text)
    if node.type == "literal_type":
        return SyntacticType(_literal_flags(source_bytes, node), text)
    return SyntacticType(TypeFlags(0), text)
