# --- Data models for component metadata ----------------------------------------
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Category(str, Enum):
    """Role a component member plays, in presentation order."""
    OWN_PROPERTY = "own property"
    ELEMENT = "element"
    STATE = "state"
    PROP_CONNECT = "prop:connect"
    PROP_CONTEXT = "prop:context"
    PROP = "prop"
    WATCH = "watch"
    EVENT = "event"
    LIFECYCLE = "lifecycle"
    LISTEN = "listen"
    METHOD = "method"
    LOCAL_METHOD = "local method"


# Canonical order; Enum iteration follows declaration order.
CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


@dataclass(frozen=True)
class WatchedEntry:
    """A handler invoked when a property changes."""
    target_property_name: str  # e.g. "name" in @Watch('name')
    handler_method_name: str  # e.g. "onNameChange"


@dataclass(frozen=True)
class ListenerEntry:
    """A handler invoked for one or more events."""
    event_names: tuple[str, ...]  # one per @Listen(...) on the handler
    handler_method_name: str


@dataclass
class ComponentMetadata:
    """Members of one component class, bucketed by role."""
    class_name: Optional[str] = None
    internal_properties: list[str] = field(default_factory=list)
    internal_methods: list[str] = field(default_factory=list)
    elements: list[str] = field(default_factory=list)
    states: list[str] = field(default_factory=list)
    props_connect: list[str] = field(default_factory=list)
    props_context: list[str] = field(default_factory=list)
    props: list[str] = field(default_factory=list)
    watched: list[WatchedEntry] = field(default_factory=list)
    events: list[str] = field(default_factory=list)
    lifecycle: list[str] = field(default_factory=list)
    listeners: list[ListenerEntry] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    # Byte span of the class declaration, used to pick the class under a cursor
    start_byte: int = -1
    end_byte: int = -1

    def bucket(self, category: Category) -> list:
        """The list backing a category."""
        return getattr(self, _BUCKETS[category])

    def watcher_for(self, property_name: str) -> Optional[WatchedEntry]:
        for watcher in self.watched:
            if watcher.target_property_name == property_name:
                return watcher
        return None


_BUCKETS = {
    Category.OWN_PROPERTY: "internal_properties",
    Category.ELEMENT: "elements",
    Category.STATE: "states",
    Category.PROP_CONNECT: "props_connect",
    Category.PROP_CONTEXT: "props_context",
    Category.PROP: "props",
    Category.WATCH: "watched",
    Category.EVENT: "events",
    Category.LIFECYCLE: "lifecycle",
    Category.LISTEN: "listeners",
    Category.METHOD: "methods",
    Category.LOCAL_METHOD: "internal_methods",
}


CategoryItem = Union[str, WatchedEntry, ListenerEntry]


@dataclass(frozen=True)
class CategoryMatch:
    """Result of looking a member name up in the metadata."""
    item: CategoryItem
    category: Category
