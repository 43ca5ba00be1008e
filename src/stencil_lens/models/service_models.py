# --- Response shapes shared with the host language service ---------------------
#
# These mirror what the host returns for completions, details, hover, references
# and renames. All positions are character offsets into the file text.

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SymbolDisplayPart:
    text: str
    kind: str  # "punctuation", "text", "keyword", "methodName", ...


@dataclass(frozen=True)
class TextSpan:
    start: int
    length: int


@dataclass
class CompletionEntry:
    name: str
    kind: str  # "property", "method", "memberVariable", ...
    sort_text: str = ""
    insert_text: Optional[str] = None
    has_action: bool = False


@dataclass
class CompletionInfo:
    is_global_completion: bool
    is_member_completion: bool
    is_new_identifier_location: bool
    entries: list[CompletionEntry] = field(default_factory=list)


@dataclass
class CompletionEntryDetails:
    name: str
    kind: str
    display_parts: list[SymbolDisplayPart] = field(default_factory=list)
    documentation: list[SymbolDisplayPart] = field(default_factory=list)


@dataclass
class QuickInfo:
    kind: str
    text_span: TextSpan
    display_parts: list[SymbolDisplayPart] = field(default_factory=list)
    documentation: list[SymbolDisplayPart] = field(default_factory=list)


@dataclass
class ReferenceEntry:
    file_name: str
    text_span: TextSpan
    is_definition: bool = False
    is_write_access: bool = False
    is_in_string: bool = False


@dataclass
class ReferencedSymbol:
    definition: object  # host-defined definition info, passed through untouched
    references: list[ReferenceEntry] = field(default_factory=list)


@dataclass
class RenameLocation:
    file_name: str
    text_span: TextSpan
