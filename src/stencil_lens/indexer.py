from typing import Optional

from tree_sitter import Node

from stencil_lens import constants as C
from stencil_lens.core.logging import get_logger
from stencil_lens.models.component_models import (
    CATEGORY_ORDER,
    Category,
    ComponentMetadata,
    ListenerEntry,
    WatchedEntry,
)
from stencil_lens.parsing import SourceFile
from stencil_lens.tree_sitter_helpers import node_text

log = get_logger(__name__)

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration")
FIELD_NODE_TYPES = ("public_field_definition",)
METHOD_NODE_TYPES = ("method_definition",)
MEMBER_NODE_TYPES = FIELD_NODE_TYPES + METHOD_NODE_TYPES

# Decorators that place a member into exactly one bucket
_PLACEMENT_DECORATORS = {
    C.ELEMENT_DECORATOR: Category.ELEMENT,
    C.STATE_DECORATOR: Category.STATE,
    C.EVENT_DECORATOR: Category.EVENT,
    C.METHOD_DECORATOR: Category.METHOD,
}


# --- Decorator helpers -------------------------------------------------------

def decorator_name(source_bytes: bytes, decorator: Node) -> Optional[str]:
    """
    Name of a decorator written as `@Name` or `@Name(...)`; None for member
    expressions and anything else.
    """
    expr = _decorator_expression(decorator)
    if expr is None:
        return None
    if expr.type == "identifier":
        return node_text(source_bytes, expr)
    if expr.type == "call_expression":
        fn = expr.child_by_field_name("function")
        if fn is not None and fn.type == "identifier":
            return node_text(source_bytes, fn)
    return None


def decorator_arguments(decorator: Node) -> list[Node]:
    """Argument expressions of a call-style decorator (empty for `@Name`)."""
    expr = _decorator_expression(decorator)
    if expr is None or expr.type != "call_expression":
        return []
    args = expr.child_by_field_name("arguments")
    if args is None:
        return []
    return [a for a in args.named_children if a.type != "comment"]


def _decorator_expression(decorator: Node) -> Optional[Node]:
    for child in decorator.named_children:
        if child.type != "comment":
            return child
    return None


_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def _unescape(sequence: str) -> str:
    """Value of one escape_sequence node (`\\'`, `\\n`, `\\x41`, `\\u{1F600}`...)."""
    body = sequence[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body[:1] in ("x", "u"):
        digits = body[1:].strip("{}")
        try:
            return chr(int(digits, 16))
        except ValueError:
            return body
    if body.startswith(("\n", "\r")):
        return ""  # line continuation
    return body


def string_literal_value(source_bytes: bytes, node: Optional[Node]) -> Optional[str]:
    """Value of a quoted string literal node, with escape sequences decoded."""
    if node is None or node.type != "string":
        return None
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(source_bytes, child))
        elif child.type == "escape_sequence":
            parts.append(_unescape(node_text(source_bytes, child)))
    return "".join(parts)


def object_keys(source_bytes: bytes, node: Optional[Node]) -> list[str]:
    """Keys of an object literal, in order (`{ a: 1, 'b': 2, c }` -> a, b, c)."""
    if node is None or node.type != "object":
        return []
    keys = []
    for child in node.named_children:
        if child.type == "pair":
            key = child.child_by_field_name("key")
            if key is None:
                continue
            text = string_literal_value(source_bytes, key)
            keys.append(text if text is not None else node_text(source_bytes, key))
        elif child.type == "shorthand_property_identifier":
            keys.append(node_text(source_bytes, child))
    return keys


def class_decorators(class_node: Node) -> list[Node]:
    """
    Decorators on a class, including those written before `export`
    (the grammar hangs those on the export_statement).
    """
    decorators = [c for c in class_node.children if c.type == "decorator"]
    parent = class_node.parent
    if parent is not None and parent.type == "export_statement":
        decorators = [c for c in parent.children if c.type == "decorator"] + decorators
    return decorators


def has_decorator_named(source_bytes: bytes, decorators: list[Node], name: str) -> bool:
    return any(decorator_name(source_bytes, d) == name for d in decorators)


def is_component_class(source_bytes: bytes, node: Optional[Node]) -> bool:
    if node is None or node.type not in CLASS_NODE_TYPES:
        return False
    return has_decorator_named(source_bytes, class_decorators(node), C.COMPONENT_DECORATOR)


def iter_class_members(class_body: Node):
    """
    Yields (member, decorators) for each field/method in a class body.

    Method decorators are siblings that precede the method in the body,
    field decorators are children of the field; both are collected.
    """
    pending: list[Node] = []
    for child in class_body.named_children:
        if child.type == "decorator":
            pending.append(child)
            continue
        if child.type == "comment":
            continue
        if child.type in MEMBER_NODE_TYPES:
            own = [c for c in child.children if c.type == "decorator"]
            yield child, pending + own
        pending = []


def member_name(source_bytes: bytes, member: Node) -> Optional[str]:
    """Plain identifier name of a member; None for computed, quoted or #private names."""
    name_node = member.child_by_field_name("name")
    if name_node is None or name_node.type != "property_identifier":
        return None
    return node_text(source_bytes, name_node)


def _is_accessor(member: Node) -> bool:
    return any(c.type in ("get", "set") for c in member.children)


# --- The Indexer -------------------------------------------------------------

class ComponentIndexer:
    """
    Walks a TypeScript tree and buckets the members of each @Component class
    by the role their decorators give them.

    Extraction never mutates the tree and keeps no state between calls, so
    running it twice on the same snapshot yields equal models.
    """

    def extract(self, source: SourceFile) -> ComponentMetadata:
        """Metadata for the first component class, or an empty model."""
        found = self.extract_all(source, limit=1)
        return found[0] if found else ComponentMetadata()

    def extract_at(self, source: SourceFile, position: int) -> ComponentMetadata:
        """
        Metadata for the component class enclosing a character position,
        falling back to the first component class in the file.
        """
        found = self.extract_all(source)
        if not found:
            return ComponentMetadata()
        offset = source.byte_offset(position)
        for meta in found:
            if meta.start_byte <= offset < meta.end_byte:
                return meta
        return found[0]

    def extract_all(self, source: SourceFile, limit: Optional[int] = None) -> list[ComponentMetadata]:
        """One model per component class, in source order."""
        found: list[ComponentMetadata] = []
        self._walk(source.source_bytes, source.root, found, limit)
        return found

    # -- AST walk -------------------------------------------------------------

    def _walk(self, source_bytes: bytes, node: Node, found: list, limit: Optional[int]):
        if limit is not None and len(found) >= limit:
            return
        if is_component_class(source_bytes, node):
            found.append(self._index_class(source_bytes, node))

        # Keep walking everything else: nested or sibling trees never abort extraction
        for child in node.children:
            self._walk(source_bytes, child, found, limit)

    def _index_class(self, source_bytes: bytes, class_node: Node) -> ComponentMetadata:
        meta = ComponentMetadata(start_byte=class_node.start_byte, end_byte=class_node.end_byte)
        name_node = class_node.child_by_field_name("name")
        if name_node is not None:
            meta.class_name = node_text(source_bytes, name_node)

        body = class_node.child_by_field_name("body")
        if body is None:
            return meta

        undecorated, decorated = [], []
        for member, decorators in iter_class_members(body):
            name = member_name(source_bytes, member)
            if name is None:
                continue
            names = [decorator_name(source_bytes, d) for d in decorators]
            if any(n in C.ROLE_DECORATORS for n in names):
                decorated.append(name)
                self._index_decorated(source_bytes, meta, member, name, decorators)
            else:
                undecorated.append(name)
                self._index_undecorated(meta, member, name)

        log.debug("component_members", component=meta.class_name,
                  undecorated=undecorated, decorated=decorated)
        return meta

    def _index_undecorated(self, meta: ComponentMetadata, member: Node, name: str):
        if name in C.COMPONENT_BUILTIN_METHODS:
            return
        if name in C.COMPONENT_LIFECYCLE_METHODS:
            meta.lifecycle.append(name)
        elif member.type in FIELD_NODE_TYPES:
            meta.internal_properties.append(name)
        elif member.type in METHOD_NODE_TYPES and not _is_accessor(member):
            meta.internal_methods.append(name)

    def _index_decorated(self, source_bytes: bytes, meta: ComponentMetadata, member: Node,
                         name: str, decorators: list[Node]):
        # Every recognized decorator is tested; placement then takes the
        # earliest category so a name lands in at most one bucket.
        roles: set[Category] = set()
        events: list[str] = []
        for decorator in decorators:
            dname = decorator_name(source_bytes, decorator)
            args = decorator_arguments(decorator)
            first = args[0] if args else None

            if dname in _PLACEMENT_DECORATORS:
                roles.add(_PLACEMENT_DECORATORS[dname])
            elif dname == C.PROP_DECORATOR:
                roles.add(self._prop_category(source_bytes, first))
            elif dname == C.WATCH_DECORATOR:
                prop = string_literal_value(source_bytes, first)
                if prop is not None:
                    meta.watched.append(WatchedEntry(prop, name))
            elif dname == C.LISTEN_DECORATOR:
                event = string_literal_value(source_bytes, first)
                if event is not None:
                    events.append(event)

        if events:
            meta.listeners.append(ListenerEntry(tuple(events), name))

        for category in CATEGORY_ORDER:
            if category in roles:
                meta.bucket(category).append(name)
                break

    def _prop_category(self, source_bytes: bytes, options: Optional[Node]) -> Category:
        keys = object_keys(source_bytes, options)
        if "connect" in keys:
            return Category.PROP_CONNECT
        if "context" in keys:
            return Category.PROP_CONTEXT
        return Category.PROP
