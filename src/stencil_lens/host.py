"""The host language service the plugin sits in front of.

The plugin never owns source files or symbol tables; it asks the host for
the current text of a file and for the host's own answer to each request,
then adjusts that answer.
"""

from typing import Any, Optional, Protocol

from stencil_lens.models.service_models import (
    CompletionEntryDetails,
    CompletionInfo,
    QuickInfo,
    ReferencedSymbol,
    RenameLocation,
)


class LanguageServiceHost(Protocol):
    def get_source_text(self, file_name: str) -> Optional[str]:
        """Current text of a file, or None if the host does not know it."""
        ...

    def get_completions_at_position(self, file_name: str, position: int,
                                    options: Optional[dict[str, Any]] = None) -> Optional[CompletionInfo]:
        ...

    def get_completion_entry_details(self, file_name: str, position: int, name: str,
                                     format_options: Any = None, source: Optional[str] = None,
                                     preferences: Any = None) -> Optional[CompletionEntryDetails]:
        ...

    def get_quick_info_at_position(self, file_name: str, position: int) -> Optional[QuickInfo]:
        ...

    def find_references(self, file_name: str, position: int) -> Optional[list[ReferencedSymbol]]:
        ...

    def find_rename_locations(self, file_name: str, position: int, find_in_strings: bool,
                              find_in_comments: bool) -> Optional[list[RenameLocation]]:
        ...

    def get_jsx_intrinsic_tag_names(self, file_name: str, position: int) -> list[str]:
        """Custom element tag names known at a position (markup completions)."""
        ...

    def get_type_checker(self) -> Any:
        """
        The host's type checker. Types it hands out carry integer `flags`
        (and `types` for unions), the shape stencil_lens.type_predicates reads.
        """
        ...
