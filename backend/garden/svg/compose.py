"""Two-layer sticker composition: recolored background shape + centred fruit.

The background shape keeps its geometry but every paintable element is filled
with the background color and loses its stroke. The fruit keeps its own
colors. Both layers optionally carry SMIL animations (rotate / bounce).
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from svgpathtools import parse_path

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

PAINT_TAGS = {"path", "circle", "rect", "polygon", "ellipse"}
# Kept outside the scaled/rotated shape group.
_NON_VISUAL_TAGS = {"defs", "style", "title", "desc", "metadata"}

SHAPE_SCALE = 0.85
FRUIT_SCALE = 0.7
DEFAULT_SHAPE_CENTER = (150.0, 125.0)
DEFAULT_FRUIT_CENTER = (50.0, 50.0)
DEFAULT_VIEWBOX = (0.0, 0.0, 300.0, 250.0)
DISPLAY_WIDTH = 300
DISPLAY_HEIGHT = 250


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _num(value: str | None, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value.replace("px", "").strip())
    except ValueError:
        return default


def _fmt(value: float) -> str:
    return f"{round(value, 3):g}"


def parse_viewbox(root: ET.Element) -> tuple[float, float, float, float] | None:
    raw = root.get("viewBox")
    if not raw:
        return None
    parts = raw.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return (x, y, w, h)


def content_bbox(root: ET.Element) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax) over the paintable elements, ignoring transforms."""
    xs: list[float] = []
    ys: list[float] = []
    for elem in root.iter():
        tag = _strip_ns(elem.tag)
        if tag == "path" and elem.get("d"):
            try:
                xmin, xmax, ymin, ymax = parse_path(elem.get("d")).bbox()
            except Exception as e:
                logger.debug("Skipping unparsable path in bbox: %s", e)
                continue
            xs += [xmin, xmax]
            ys += [ymin, ymax]
        elif tag == "circle":
            cx, cy, r = _num(elem.get("cx")), _num(elem.get("cy")), _num(elem.get("r"))
            xs += [cx - r, cx + r]
            ys += [cy - r, cy + r]
        elif tag == "ellipse":
            cx, cy = _num(elem.get("cx")), _num(elem.get("cy"))
            rx, ry = _num(elem.get("rx")), _num(elem.get("ry"))
            xs += [cx - rx, cx + rx]
            ys += [cy - ry, cy + ry]
        elif tag == "rect":
            x, y = _num(elem.get("x")), _num(elem.get("y"))
            xs += [x, x + _num(elem.get("width"))]
            ys += [y, y + _num(elem.get("height"))]
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))


def _center(root: ET.Element, default: tuple[float, float], use_bbox: bool) -> tuple[float, float]:
    vb = parse_viewbox(root)
    if vb is not None:
        x, y, w, h = vb
        return (x + w / 2, y + h / 2)
    if use_bbox:
        box = content_bbox(root)
        if box is not None:
            return ((box[0] + box[2]) / 2, (box[1] + box[3]) / 2)
    return default


def recolor_shape(root: ET.Element, background_color: str) -> int:
    """Fill every paintable element with the background color, dropping strokes."""
    count = 0
    for elem in root.iter():
        if _strip_ns(elem.tag) in PAINT_TAGS:
            elem.set("fill", background_color)
            elem.attrib.pop("stroke", None)
            elem.attrib.pop("stroke-width", None)
            count += 1
    return count


def _rotate_animation(cx: float, cy: float) -> ET.Element:
    return ET.Element(_q("animateTransform"), {
        "attributeName": "transform",
        "attributeType": "XML",
        "type": "rotate",
        "from": f"0 {_fmt(cx)} {_fmt(cy)}",
        "to": f"360 {_fmt(cx)} {_fmt(cy)}",
        "dur": "5s",
        "repeatCount": "indefinite",
        "additive": "sum",
    })


def _bounce_animation() -> ET.Element:
    return ET.Element(_q("animateTransform"), {
        "attributeName": "transform",
        "attributeType": "XML",
        "type": "translate",
        "values": "0,0; 0,-150; 0,0",
        "dur": "1.5s",
        "repeatCount": "indefinite",
        "additive": "sum",
        "calcMode": "spline",
        "keySplines": "0.42 0 0.58 1; 0.42 0 0.58 1",
        "keyTimes": "0; 0.5; 1",
    })


def _parse(svg_text: str, label: str) -> ET.Element | None:
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        logger.warning("SVG parsing error in %s: %s", label, e)
        return None
    if _strip_ns(root.tag) != "svg":
        logger.warning("%s has no <svg> root", label)
        return None
    return root


def insert_into_shape(
    shape_svg: str,
    fruit_svg: str,
    background_color: str,
    animated: bool = True,
) -> str | None:
    """Compose the fruit into the recolored shape. None when either side is unusable."""
    if not shape_svg or not fruit_svg:
        return None

    shape_root = _parse(shape_svg, "shape")
    fruit_root = _parse(fruit_svg, "fruit")
    if shape_root is None or fruit_root is None:
        return None

    recolor_shape(shape_root, background_color)

    cx, cy = _center(shape_root, DEFAULT_SHAPE_CENTER, use_bbox=False)
    fcx, fcy = _center(fruit_root, DEFAULT_FRUIT_CENTER, use_bbox=True)

    shape_group = ET.Element(_q("g"), {
        "class": "sticker-shape-group",
        "transform": (
            f"translate({_fmt(cx)}, {_fmt(cy)}) scale({SHAPE_SCALE}) "
            f"translate({_fmt(-cx)}, {_fmt(-cy)})"
        ),
    })
    for child in list(shape_root):
        if _strip_ns(child.tag) in _NON_VISUAL_TAGS:
            continue
        shape_root.remove(child)
        shape_group.append(child)
    if animated:
        shape_group.append(_rotate_animation(cx, cy))
    shape_root.append(shape_group)

    fruit_group = ET.Element(_q("g"), {
        "class": "sticker-fruit-group",
        "transform": (
            f"translate({_fmt(cx)}, {_fmt(cy)}) scale({FRUIT_SCALE}) "
            f"translate({_fmt(-fcx)}, {_fmt(-fcy)})"
        ),
    })
    for child in list(fruit_root):
        if _strip_ns(child.tag) in ("title", "desc", "metadata"):
            continue
        fruit_group.append(child)
    if animated:
        fruit_group.append(_bounce_animation())
    shape_root.append(fruit_group)

    if parse_viewbox(shape_root) is None:
        shape_root.set("viewBox", " ".join(_fmt(v) for v in DEFAULT_VIEWBOX))
    shape_root.set("width", str(DISPLAY_WIDTH))
    shape_root.set("height", str(DISPLAY_HEIGHT))

    return ET.tostring(shape_root, encoding="unicode")
