"""Component-aware front for a host language service.

`create()` wraps a host so that completions, completion details, hover,
references and renames inside @Component classes come back re-ranked,
re-labelled and documented. Anything not overridden here is forwarded to
the host untouched.
"""

from typing import Any, Mapping, Optional

from stencil_lens.cache import CompletionDetailsCache, QuickInfoCache
from stencil_lens.config import PluginConfig, load_config
from stencil_lens.core.logging import configure_logging, get_logger
from stencil_lens.host import LanguageServiceHost
from stencil_lens.indexer import ComponentIndexer
from stencil_lens.models.component_models import ComponentMetadata
from stencil_lens.models.service_models import (
    CompletionEntryDetails,
    CompletionInfo,
    QuickInfo,
    ReferencedSymbol,
    RenameLocation,
)
from stencil_lens.outputs.output import to_dict
from stencil_lens.parsing import SourceFile, TypeScriptParser
from stencil_lens.references import augment_references, augment_rename_locations, name_at
from stencil_lens.transform import (
    adjust_completion_details,
    adjust_member_completions,
    adjust_quick_info,
    decorator_options_context,
    expand_decorator_options,
    host_data_completions,
    is_inside_host_data,
    is_markup_text,
    markup_tag_completions,
)

log = get_logger(__name__)

COMPLETION_OPTIONS = {
    "triggerCharacter": ".",
    "includeCompletionsForModuleExports": True,
}


class ComponentLanguageService:
    """Proxy over a host language service. One instance per project."""

    def __init__(self, host: LanguageServiceHost, config: Optional[PluginConfig] = None,
                 parser: Optional[TypeScriptParser] = None):
        self.host = host
        self.config = config or PluginConfig()
        self.parser = parser or TypeScriptParser()
        self.indexer = ComponentIndexer()
        self.quick_info_cache: QuickInfoCache[QuickInfo] = QuickInfoCache(self.config.quick_info_cache_size)
        self.details_cache: CompletionDetailsCache[CompletionEntryDetails] = CompletionDetailsCache()
        self._snapshots: dict[str, SourceFile] = {}

    def __getattr__(self, name: str) -> Any:
        # Everything we do not intercept goes straight to the host
        if name == "host":
            raise AttributeError(name)
        return getattr(self.host, name)

    # -- Snapshots --------------------------------------------------------------

    def source_file(self, file_name: str) -> Optional[SourceFile]:
        """Parsed snapshot of the host's current text; reparsed only when the text changes."""
        text = self.host.get_source_text(file_name)
        if text is None:
            self._snapshots.pop(file_name, None)
            return None
        cached = self._snapshots.get(file_name)
        if cached is not None and cached.text == text:
            return cached
        snapshot = self.parser.parse(text, file_name)
        self._snapshots[file_name] = snapshot
        return snapshot

    def metadata(self, source: SourceFile, position: int) -> ComponentMetadata:
        meta = self.indexer.extract_at(source, position)
        log.debug("document_metadata", file=source.file_name, metadata=to_dict(meta))
        return meta

    # -- Intercepted operations -------------------------------------------------

    def get_completions_at_position(self, file_name: str, position: int,
                                    options: Optional[dict[str, Any]] = None) -> Optional[CompletionInfo]:
        prior = self.host.get_completions_at_position(
            file_name, position, {**COMPLETION_OPTIONS, **(options or {})})
        source = self.source_file(file_name)
        if source is None:
            return prior
        meta = self.metadata(source, position)
        if meta.class_name is None:
            return prior
        node = source.get_node(position)

        decorator = decorator_options_context(source.source_bytes, node)
        if decorator is not None:
            log.debug("inside_decorator", decorator=decorator)
            return expand_decorator_options(prior, decorator) if prior is not None else prior

        if prior is not None and prior.is_member_completion and not prior.is_new_identifier_location:
            adjusted = adjust_member_completions(meta, prior, self.config.remove)
            removed = len(prior.entries) - len(adjusted.entries)
            if removed:
                log.info("completion_entries_removed", count=removed)
            return adjusted

        if is_markup_text(node):
            if prior is None:
                tags = self.host.get_jsx_intrinsic_tag_names(file_name, position)
                return markup_tag_completions(tags, self.config.excluded_tag_prefixes)
            return prior

        if is_inside_host_data(source.source_bytes, node):
            log.debug("inside_host_data")
            return host_data_completions()

        return prior

    def get_completion_entry_details(self, file_name: str, position: int, name: str,
                                     format_options: Any = None, source: Optional[str] = None,
                                     preferences: Any = None) -> Optional[CompletionEntryDetails]:
        snapshot = self.source_file(file_name)

        def compute() -> Optional[CompletionEntryDetails]:
            prior = self.host.get_completion_entry_details(
                file_name, position, name, format_options, source, preferences)
            if snapshot is None:
                return prior
            return adjust_completion_details(self.metadata(snapshot, position), prior, name)

        scope = (file_name, position, snapshot.version if snapshot else None)
        return self.details_cache.get_or_compute(scope, name, compute)

    def get_quick_info_at_position(self, file_name: str, position: int) -> Optional[QuickInfo]:
        snapshot = self.source_file(file_name)
        node = snapshot.get_node(position) if snapshot else None
        if node is None:
            return self.host.get_quick_info_at_position(file_name, position)

        def compute() -> Optional[QuickInfo]:
            prior = self.host.get_quick_info_at_position(file_name, position)
            if self.indexer.extract(snapshot).class_name is None:
                return prior
            return adjust_quick_info(prior)

        key = (file_name, node.start_byte, node.end_byte, snapshot.version)
        return self.quick_info_cache.get_or_compute(key, compute)

    def find_references(self, file_name: str, position: int) -> Optional[list[ReferencedSymbol]]:
        prior = self.host.find_references(file_name, position)
        source = self.source_file(file_name)
        if source is None:
            return prior
        name = name_at(source, source.get_node(position))
        return augment_references(self.metadata(source, position), source, name, prior)

    def find_rename_locations(self, file_name: str, position: int, find_in_strings: bool = False,
                              find_in_comments: bool = False) -> Optional[list[RenameLocation]]:
        source = self.source_file(file_name)
        if source is None:
            return self.host.find_rename_locations(file_name, position, find_in_strings, find_in_comments)

        meta = self.metadata(source, position)
        name = name_at(source, source.get_node(position))
        if name and meta.watcher_for(name) is not None:
            # The watch decorator names the property in a string
            find_in_strings = True
        prior = self.host.find_rename_locations(file_name, position, find_in_strings, find_in_comments)
        return augment_rename_locations(meta, source, name, prior)


def create(host: LanguageServiceHost, plugin_config: Optional[Mapping[str, Any]] = None) -> ComponentLanguageService:
    """Entry point for hosts: validate config, set up logging, wrap the service."""
    config = load_config(plugin_config)
    configure_logging(config=config.logging)
    log.info("plugin_created", remove=config.remove, quick_info_cache_size=config.quick_info_cache_size)
    return ComponentLanguageService(host, config)
