# --- Framework lookup tables ---------------------------------------------------

COMPONENT_DECORATOR = "Component"

# Role annotations recognized on component members
ELEMENT_DECORATOR = "Element"
STATE_DECORATOR = "State"
PROP_DECORATOR = "Prop"
WATCH_DECORATOR = "Watch"
LISTEN_DECORATOR = "Listen"
EVENT_DECORATOR = "Event"
METHOD_DECORATOR = "Method"

ROLE_DECORATORS = (
    ELEMENT_DECORATOR,
    STATE_DECORATOR,
    PROP_DECORATOR,
    WATCH_DECORATOR,
    LISTEN_DECORATOR,
    EVENT_DECORATOR,
    METHOD_DECORATOR,
)

COMPONENT_BUILTIN_METHODS = (
    "render",
    "hostData",
)

COMPONENT_BUILTIN_METHOD_DOCS = {
    "render": "\n\nReturns a tree of components that will be rendered to the DOM at runtime.",
    "hostData": "\n\nDynamically sets attributes on the host element.",
}

# Canonical lifecycle order
COMPONENT_LIFECYCLE_METHODS = (
    "componentWillLoad",
    "componentDidLoad",
    "componentWillUpdate",
    "componentDidUpdate",
    "componentDidUnload",
)

COMPONENT_LIFECYCLE_DOCS = {
    "componentWillLoad": (
        "\n\nThe component is about to load and it has not rendered yet."
        "\n\nThis is the best place to make any data updates before the first render."
        "\n\n`componentWillLoad` will only be called once."
    ),
    "componentDidLoad": (
        "\n\nThe component has loaded and has already rendered."
        "\n\nUpdating data in this method will cause the component to re-render."
        "\n\n`componentDidLoad` will only be called once."
    ),
    "componentWillUpdate": (
        "\n\nThe component is about to update and re-render."
        "\n\nCalled multiple times throughout the life of the component as it updates."
        "\n\n`componentWillUpdate` is not called on the first render."
    ),
    "componentDidUpdate": (
        "\n\nThe component has just re-rendered."
        "\n\nCalled multiple times throughout the life of the component as it updates."
        "\n\n`componentDidUpdate` is not called on the first render."
    ),
    "componentDidUnload": "\n\nThe component did unload and the element will be destroyed.",
}

LIFECYCLE_DOC_HEADING = "**Component Lifecycle Method**"
BUILTIN_DOC_HEADING = "**Component Method**"

# Decorator option name -> how its value is inserted
PROP_OPTIONS_EXPANSION = {
    "attr": "string",
    "context": "string",
    "connect": "string",
    "mutable": "boolean",
    "reflectToAttr": "boolean",
}

EVENT_OPTIONS_EXPANSION = {
    "eventName": "string",
    "bubbles": "boolean",
    "cancelable": "boolean",
    "composed": "boolean",
}

DECORATOR_OPTIONS_EXPANSION = {
    PROP_DECORATOR: PROP_OPTIONS_EXPANSION,
    EVENT_DECORATOR: EVENT_OPTIONS_EXPANSION,
}

HOST_DATA_COMPLETIONS = (
    "class",
    "style",
    "slot",
    "aria-label",
)
