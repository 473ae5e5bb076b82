"""Text conversion helpers.

This module provides:
- to_text: generic value-to-string conversion used for flattened values
  and criteria coercion
- render_plain_text: plain rendering of rich display text (strings or JSON
  text components)
"""

from typing import Any, Mapping


def to_text(value: Any) -> str:
    """Convert an arbitrary value to its display string.

    Rules:
    - None renders as an empty string at the top level and as ``null``
      when nested inside a container
    - booleans render as ``true`` / ``false``
    - sequences render as ``[a, b]`` and mappings as ``{k=v, k2=v2}``
    - everything else uses ``str()``

    Args:
        value: Value to convert

    Returns:
        String rendering of value

    Example:
        >>> to_text({"level": 5, "flags": [True, None]})
        '{level=5, flags=[true, null]}'
    """
    if value is None:
        return ""
    return _render(value)


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        inner = ", ".join(f"{_render(k)}={_render(v)}" for k, v in value.items())
        return "{" + inner + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render(v) for v in value) + "]"
    return str(value)


def render_plain_text(component: Any) -> str:
    """Render rich display text to plain text.

    Accepts a plain string, a JSON text component mapping, or a list of
    components. For a mapping, the ``text`` content is emitted first
    (``translate`` key when there is no ``text``), followed by every child
    in ``extra``. Formatting keys such as ``color`` or ``bold`` are ignored.

    Args:
        component: Rich text value

    Returns:
        Concatenated plain text; empty string for None

    Example:
        >>> render_plain_text({"text": "Fire ", "color": "red", "extra": [{"text": "Sword"}]})
        'Fire Sword'
    """
    if component is None:
        return ""
    if isinstance(component, str):
        return component
    if isinstance(component, (list, tuple)):
        return "".join(render_plain_text(part) for part in component)
    if isinstance(component, Mapping):
        if "text" in component:
            head = to_text(component.get("text"))
        else:
            head = to_text(component.get("translate"))
        children = component.get("extra")
        if not isinstance(children, (list, tuple)):
            # a lone child that is not wrapped in a list
            return head + render_plain_text(children)
        return head + "".join(render_plain_text(child) for child in children)
    return to_text(component)
