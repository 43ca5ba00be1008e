import json

from stencil_lens.models.component_models import ComponentMetadata


# --- Pretty printing & JSON export ------------------------------------------

def summarize(meta: ComponentMetadata) -> str:
    """
    Human-friendly rendering of a component's members, one role per line.
    """
    if meta.class_name is None:
        return "(no component)"
    lines = [f"[{meta.class_name}]"]
    for label, names in (
        ("own properties", meta.internal_properties),
        ("elements", meta.elements),
        ("states", meta.states),
        ("props (connect)", meta.props_connect),
        ("props (context)", meta.props_context),
        ("props", meta.props),
        ("events", meta.events),
        ("lifecycle", meta.lifecycle),
        ("methods", meta.methods),
        ("local methods", meta.internal_methods),
    ):
        if names:
            lines.append(f"  {label}: {', '.join(names)}")
    for w in meta.watched:
        lines.append(f"  watch: {w.target_property_name} -> {w.handler_method_name}")
    for listener in meta.listeners:
        lines.append(f"  listen: {', '.join(listener.event_names)} -> {listener.handler_method_name}")
    return "\n".join(lines)


def to_dict(meta: ComponentMetadata) -> dict:
    return {
        "className": meta.class_name,
        "internalProperties": list(meta.internal_properties),
        "elements": list(meta.elements),
        "states": list(meta.states),
        "propsConnect": list(meta.props_connect),
        "propsContext": list(meta.props_context),
        "props": list(meta.props),
        "watched": [
            {"prop": w.target_property_name, "handler": w.handler_method_name}
            for w in meta.watched
        ],
        "events": list(meta.events),
        "lifecycle": list(meta.lifecycle),
        "listeners": [
            {"events": list(listener.event_names), "handler": listener.handler_method_name}
            for listener in meta.listeners
        ],
        "methods": list(meta.methods),
        "internalMethods": list(meta.internal_methods),
    }


def to_json(meta: ComponentMetadata) -> str:
    """
    Serializes the metadata to JSON, for debug logs.
    """
    return json.dumps(to_dict(meta), indent=2)
