import hashlib
from dataclasses import dataclass
from typing import Callable, Optional

from tree_sitter import Language, Node, Parser, Tree

from stencil_lens.core.errors import GrammarError
from stencil_lens.tree_sitter_helpers import find_all_nodes, find_node, node_text


# --- Tree-sitter language loading -------------------------------------------

_LANGUAGES: dict[str, Language] = {}


def load_typescript_language(tsx: bool = True) -> Language:
    """
    Loads the TypeScript (or TSX) grammar from the tree_sitter_typescript
    package. Component sources are usually .tsx, so that is the default.
    """
    dialect = "tsx" if tsx else "typescript"
    if dialect in _LANGUAGES:
        return _LANGUAGES[dialect]

    try:
        import tree_sitter_typescript
    except ImportError as e:
        raise GrammarError.unavailable(
            dialect, "install tree-sitter-typescript (pip install tree-sitter-typescript)"
        ) from e

    lang_fn = tree_sitter_typescript.language_tsx if tsx else tree_sitter_typescript.language_typescript
    language = Language(lang_fn())
    _LANGUAGES[dialect] = language
    return language


def is_tsx(file_name: str) -> bool:
    # Plain .ts files cannot contain JSX and parse differently around `<T>` casts
    return not file_name.endswith(".ts")


# --- Parsed snapshot ---------------------------------------------------------

@dataclass(frozen=True)
class SourceFile:
    """
    One parsed snapshot of a file. Host positions are character offsets,
    tree-sitter works in bytes; conversion happens here.
    """
    file_name: str
    text: str
    source_bytes: bytes
    tree: Tree
    version: str  # content digest, changes on every edit

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def byte_offset(self, position: int) -> int:
        if len(self.source_bytes) == len(self.text):
            return position
        return len(self.text[:position].encode("utf-8"))

    def char_offset(self, byte: int) -> int:
        if len(self.source_bytes) == len(self.text):
            return byte
        return len(self.source_bytes[:byte].decode("utf-8", errors="replace"))

    def get_node(self, position: int) -> Optional[Node]:
        """Deepest node at a character position."""
        if position < 0:
            return None
        return find_node(self.tree, self.byte_offset(position))

    def get_all_nodes(self, predicate: Callable[[Node], bool]) -> list[Node]:
        return find_all_nodes(self.tree, predicate)

    def get_line_and_char(self, position: int) -> tuple[int, int]:
        """0-based (line, character) of a character position."""
        before = self.text[:position]
        line = before.count("\n")
        return line, position - (before.rfind("\n") + 1)

    def node_text(self, node: Node) -> str:
        return node_text(self.source_bytes, node)

    def node_start(self, node: Node) -> int:
        """Character offset of a node's start."""
        return self.char_offset(node.start_byte)


class TypeScriptParser:
    """
    Parses TypeScript/TSX text into SourceFile snapshots.
    One tree-sitter Parser per dialect, created lazily.
    """

    def __init__(self):
        self._parsers: dict[bool, Parser] = {}

    def _parser(self, tsx: bool) -> Parser:
        if tsx not in self._parsers:
            self._parsers[tsx] = Parser(load_typescript_language(tsx))
        return self._parsers[tsx]

    def parse(self, text: str, file_name: str = "<source>.tsx") -> SourceFile:
        source_bytes = text.encode("utf-8")
        tree = self._parser(is_tsx(file_name)).parse(source_bytes)
        return SourceFile(
            file_name=file_name,
            text=text,
            source_bytes=source_bytes,
            tree=tree,
            version=hashlib.sha1(source_bytes).hexdigest(),
        )
