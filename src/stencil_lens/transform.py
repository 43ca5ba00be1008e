"""Adjust the host's completion, detail and hover answers for component members.

Every function here takes the host's answer and returns an adjusted copy;
the host's objects are left as they were.
"""

from dataclasses import replace
from typing import Iterable, Optional

from tree_sitter import Node

from stencil_lens import constants as C
from stencil_lens.indexer import decorator_name
from stencil_lens.models.component_models import (
    CATEGORY_ORDER,
    Category,
    CategoryMatch,
    ComponentMetadata,
)
from stencil_lens.models.service_models import (
    CompletionEntry,
    CompletionEntryDetails,
    CompletionInfo,
    QuickInfo,
    SymbolDisplayPart,
)
from stencil_lens.ranking import sort_text
from stencil_lens.tree_sitter_helpers import ancestors, node_text

# Host element kinds
KIND_PROPERTY = "property"
KIND_METHOD = "method"
KIND_UNKNOWN = ""


# --- Category lookup ---------------------------------------------------------

def get_category(meta: ComponentMetadata, name: str) -> Optional[CategoryMatch]:
    """
    First bucket (in canonical order) holding `name`. Watch and listen
    entries are matched by handler name. None for names the component does
    not declare itself (inherited or framework members).
    """
    for category in CATEGORY_ORDER:
        if category is Category.WATCH:
            for watcher in meta.watched:
                if watcher.handler_method_name == name:
                    return CategoryMatch(watcher, category)
        elif category is Category.LISTEN:
            for listener in meta.listeners:
                if listener.handler_method_name == name:
                    return CategoryMatch(listener, category)
        elif name in meta.bucket(category):
            return CategoryMatch(name, category)
    return None


# --- Display parts -----------------------------------------------------------

def decorator_display_parts(kind: str, arg: Optional[str] = None) -> list[SymbolDisplayPart]:
    """`@Kind(arg)` as display parts."""
    parts = [SymbolDisplayPart("@", "punctuation"), SymbolDisplayPart(kind, "text"),
             SymbolDisplayPart("(", "punctuation")]
    if arg:
        parts.append(SymbolDisplayPart(arg, "text"))
    parts.append(SymbolDisplayPart(")", "punctuation"))
    return parts


def badge_display_parts(kind: str) -> list[SymbolDisplayPart]:
    return [SymbolDisplayPart(kind, "text")]


def with_documentation(documentation: list[SymbolDisplayPart], heading: str,
                       body: str) -> list[SymbolDisplayPart]:
    """Appends a markdown block under `heading` unless one is already there."""
    if any(heading in part.text for part in documentation):
        return list(documentation)
    return [*documentation, SymbolDisplayPart(f"\n\n{heading}{body}", "markdown")]


# --- Member completions ------------------------------------------------------

def adjust_member_completions(meta: ComponentMetadata, info: CompletionInfo,
                              remove: Iterable[str] = ()) -> CompletionInfo:
    """
    Drops builtin methods (and any configured names) from a `this.` completion
    list and gives every component member a category-based sort key.
    """
    removed = set(remove)
    entries = []
    for entry in info.entries:
        if entry.kind == KIND_METHOD and entry.name in C.COMPONENT_BUILTIN_METHODS:
            continue
        if entry.name in removed:
            continue
        match = get_category(meta, entry.name)
        if match is not None:
            entry = replace(entry, sort_text=sort_text(match.category, entry.name))
        entries.append(entry)
    return replace(info, entries=entries)


# --- Completion details ------------------------------------------------------

def adjust_completion_details(meta: ComponentMetadata,
                              details: Optional[CompletionEntryDetails],
                              name: str) -> Optional[CompletionEntryDetails]:
    """
    Re-labels the `(property)` / `(method)` segment of a member's detail view
    with its component role, and adds role specific notes.
    """
    if details is None or details.kind not in (KIND_PROPERTY, KIND_METHOD):
        return details
    match = get_category(meta, name)
    if match is None:
        return details

    parts = list(details.display_parts)
    documentation = list(details.documentation)

    if match.category is Category.WATCH:
        parts[1:2] = badge_display_parts(Category.WATCH.value)
        parts += [
            SymbolDisplayPart("\n", "punctuation"),
            SymbolDisplayPart("(", "punctuation"),
            SymbolDisplayPart("watched", "text"),
            SymbolDisplayPart(")", "punctuation"),
            SymbolDisplayPart(" ", "space"),
            SymbolDisplayPart(match.item.target_property_name, "keyword"),
        ]
    elif match.category is Category.LISTEN:
        event_parts: list[SymbolDisplayPart] = []
        for event in match.item.event_names:
            event_parts += decorator_display_parts(C.LISTEN_DECORATOR, event)
            event_parts.append(SymbolDisplayPart("\n", "punctuation"))
        # Replace the leading "(method) " segment
        parts = event_parts + parts[4:]
    else:
        if match.category is Category.LIFECYCLE:
            documentation = with_documentation(
                documentation, C.LIFECYCLE_DOC_HEADING, C.COMPONENT_LIFECYCLE_DOCS.get(name, ""))
        parts[1:2] = badge_display_parts(match.category.value)

    return replace(details, display_parts=parts, documentation=documentation)


def adjust_quick_info(info: Optional[QuickInfo]) -> Optional[QuickInfo]:
    """Adds framework docs to the hover of lifecycle and builtin methods."""
    if info is None or info.kind != KIND_METHOD:
        return info
    name = next((p.text for p in info.display_parts if p.kind == "methodName"), None)
    if name in C.COMPONENT_LIFECYCLE_METHODS:
        docs = with_documentation(info.documentation, C.LIFECYCLE_DOC_HEADING,
                                  C.COMPONENT_LIFECYCLE_DOCS[name])
    elif name in C.COMPONENT_BUILTIN_METHODS:
        docs = with_documentation(info.documentation, C.BUILTIN_DOC_HEADING,
                                  C.COMPONENT_BUILTIN_METHOD_DOCS[name])
    else:
        return info
    return replace(info, documentation=docs)


# --- Decorator options -------------------------------------------------------

def expand_to(name: str, kind: Optional[str]) -> Optional[str]:
    if kind == "string":
        return f"{name}: "
    if kind == "boolean":
        return f"{name}: true"
    return None


def decorator_options_context(source_bytes: bytes, node: Optional[Node]) -> Optional[str]:
    """
    Name of the decorator whose options object encloses `node`, as in
    `@Prop({ | })`; None anywhere else.
    """
    obj = node
    for _ in range(3):
        if obj is None or obj.type == "object":
            break
        obj = obj.parent
    if obj is None or obj.type != "object":
        return None

    args = obj.parent
    call = args.parent if args is not None else None
    decorator = call.parent if call is not None else None
    if args is None or args.type != "arguments" or call.type != "call_expression" \
            or decorator is None or decorator.type != "decorator":
        return None
    return decorator_name(source_bytes, decorator)


def expand_decorator_options(info: CompletionInfo, decorator: str) -> CompletionInfo:
    """Turns option names into ready-to-type `name: ` / `name: true` snippets."""
    table = C.DECORATOR_OPTIONS_EXPANSION.get(decorator)
    if not table:
        return info
    entries = []
    for entry in info.entries:
        insert_text = expand_to(entry.name, table.get(entry.name))
        if insert_text is not None:
            entry = replace(entry, insert_text=insert_text, has_action=True)
        entries.append(entry)
    return replace(info, entries=entries)


# --- Injected completions ----------------------------------------------------

def is_markup_text(node: Optional[Node]) -> bool:
    return node is not None and node.type == "jsx_text"


def markup_tag_completions(tag_names: Iterable[str],
                           excluded_prefixes: Iterable[str] = ("test-",)) -> CompletionInfo:
    """Tag completions for a cursor sitting in markup text."""
    prefixes = tuple(excluded_prefixes)
    return CompletionInfo(
        is_global_completion=False,
        is_member_completion=False,
        is_new_identifier_location=True,
        entries=[
            CompletionEntry(name=tag, kind=KIND_UNKNOWN, insert_text=f"<{tag}>")
            for tag in tag_names
            if not (prefixes and tag.startswith(prefixes))
        ],
    )


def is_inside_host_data(source_bytes: bytes, node: Optional[Node]) -> bool:
    """True for an object literal anywhere inside a `hostData()` method."""
    if node is None or node.type != "object":
        return False
    for parent in ancestors(node):
        if parent.type == "method_definition":
            name = parent.child_by_field_name("name")
            if name is not None and node_text(source_bytes, name) == "hostData":
                return True
    return False


def host_data_completions() -> CompletionInfo:
    return CompletionInfo(
        is_global_completion=False,
        is_member_completion=True,
        is_new_identifier_location=True,
        entries=[
            CompletionEntry(
                name=item,
                kind=KIND_PROPERTY,
                insert_text=f"'{item}': " if "-" in item else f"{item}: ",
            )
            for item in C.HOST_DATA_COMPLETIONS
        ],
    )
