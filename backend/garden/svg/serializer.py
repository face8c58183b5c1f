"""Write SVG markup from element definitions."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape, quoteattr

_RESERVED_KEYS = ("tag", "children", "text")


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{round(value, 2):g}"
    return str(value)


def serialize_element(elem: dict[str, Any], indent: int = 1) -> list[str]:
    """Render one element dict (and its ``children``) as indented lines."""
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED_KEYS and v is not None}
    attr_str = "".join(f" {k}={quoteattr(_format_value(v))}" for k, v in attrs.items())

    children = elem.get("children") or []
    text = elem.get("text")
    if not children and text is None:
        return [f"{pad}<{tag}{attr_str} />"]
    if not children:
        return [f"{pad}<{tag}{attr_str}>{escape(str(text))}</{tag}>"]

    lines = [f"{pad}<{tag}{attr_str}>"]
    for child in children:
        lines.extend(serialize_element(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 300.0,
    canvas_h: float = 250.0,
    width: float | None = None,
    height: float | None = None,
) -> str:
    """Generate SVG markup from element definitions."""
    size = ""
    if width is not None and height is not None:
        size = f' width="{_format_value(width)}" height="{_format_value(height)}"'
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_format_value(canvas_w)} '
        f'{_format_value(canvas_h)}"{size} role="img">',
    ]

    for elem in elements:
        lines.extend(serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
