# --- Reference / rename augmentation -------------------------------------------
#
# @Watch('name') ties a handler to a property through a string literal, which
# symbol-based references never see. These helpers add those occurrences.

from typing import Optional

from tree_sitter import Node

from stencil_lens.core.logging import get_logger
from stencil_lens.indexer import member_name
from stencil_lens.models.component_models import ComponentMetadata
from stencil_lens.models.service_models import (
    ReferencedSymbol,
    ReferenceEntry,
    RenameLocation,
    TextSpan,
)
from stencil_lens.parsing import SourceFile

log = get_logger(__name__)

IDENTIFIER_NODE_TYPES = ("identifier", "property_identifier", "shorthand_property_identifier")


def name_at(source: SourceFile, node: Optional[Node]) -> Optional[str]:
    """Identifier text under the cursor (or the name of the field declared there)."""
    if node is None:
        return None
    if node.type in IDENTIFIER_NODE_TYPES:
        return source.node_text(node)
    if node.type == "public_field_definition":
        return member_name(source.source_bytes, node)
    return None


def find_quoted(text: str, name: str) -> int:
    """Offset of the first `"name"` (else `'name'`) in text, or -1."""
    found = text.find(f'"{name}"')
    if found < 0:
        found = text.find(f"'{name}'")
    return found


def augment_references(meta: ComponentMetadata, source: SourceFile, name: Optional[str],
                       prior: Optional[list[ReferencedSymbol]]) -> Optional[list[ReferencedSymbol]]:
    """
    Adds the quoted occurrence of a watched property's name as a write
    reference inside a string.
    """
    if not name or not prior or meta.watcher_for(name) is None:
        return prior

    found = find_quoted(source.text, name)
    if found < 0:
        return prior

    extra = ReferencedSymbol(
        definition=prior[0].definition,
        references=[ReferenceEntry(
            file_name=source.file_name,
            text_span=TextSpan(start=found + 1, length=len(name)),
            is_definition=False,
            is_write_access=True,
            is_in_string=True,
        )],
    )
    return [*prior, extra]


def handler_name_offset(meta: ComponentMetadata, source: SourceFile, handler: str) -> int:
    """
    Character offset of a handler's declared name in the component class,
    falling back to the first textual occurrence; -1 when absent.
    """
    def is_handler(node: Node) -> bool:
        return (node.type == "method_definition"
                and meta.start_byte <= node.start_byte < meta.end_byte
                and member_name(source.source_bytes, node) == handler)

    declarations = source.get_all_nodes(is_handler)
    if declarations:
        return source.node_start(declarations[0].child_by_field_name("name"))
    return source.text.find(handler)


def augment_rename_locations(meta: ComponentMetadata, source: SourceFile, name: Optional[str],
                             prior: Optional[list[RenameLocation]]) -> Optional[list[RenameLocation]]:
    """
    Adds the part of a watch handler's name that spells the watched property,
    e.g. `value` inside `valueChanged`. Handlers that do not contain the name
    verbatim (`onNameChange` for `name`) are left alone.
    """
    watcher = meta.watcher_for(name) if name else None
    if watcher is None or prior is None:
        return prior

    index = watcher.handler_method_name.find(name)
    if index < 0:
        log.debug("rename_handler_unmatched", property=name, handler=watcher.handler_method_name)
        return prior

    start = handler_name_offset(meta, source, watcher.handler_method_name)
    if start < 0:
        return prior
    location = RenameLocation(file_name=source.file_name,
                              text_span=TextSpan(start=start + index, length=len(name)))
    return [*prior, location]
