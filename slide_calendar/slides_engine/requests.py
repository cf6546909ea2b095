"""Request builders for the Slides batchUpdate API.

Provides primitives that each describe one declarative mutation of a
presentation (create a shape, style it, insert and style its text) and a
composite label helper. Builders never generate ids: callers pass the
object id of the element they create, so identical arguments always give
identical requests.

All geometry is in EMU. A created shape is a ``magnitude`` x ``magnitude``
square scaled by ``scale_x`` / ``scale_y`` and translated to its position.
"""

from typing import Any, Optional

from slide_calendar.schemas.theme import DEFAULT_MAGNITUDE, ShapeStyle, TextStyle

Request = dict[str, Any]

EMU_PER_INCH = 914400
POINTS_PER_INCH = 72

_BLACK = "#000000"


# ---------------------------------------------------------------------------
# Page and shape creation
# ---------------------------------------------------------------------------


def create_slide_request(page_id: str, layout_id: str) -> Request:
    """Create a new slide from a layout."""
    return {
        "createSlide": {
            "objectId": page_id,
            "slideLayoutReference": {"layoutId": layout_id},
        }
    }


def create_shape_request(
    page_id: str,
    element_id: str,
    shape_type: str,
    scale_x: float,
    scale_y: float,
    translate_x: float,
    translate_y: float,
    magnitude: float = DEFAULT_MAGNITUDE,
) -> Request:
    """Allocate a new shape on a page.

    Args:
        page_id: The page the shape is created on.
        element_id: Object id of the new shape.
        shape_type: Slides shape type (e.g., "FLOW_CHART_TERMINATOR", "TEXT_BOX").
        scale_x, scale_y: Scale applied to the magnitude-sized base square.
        translate_x, translate_y: Position of the top-left corner in EMU.
        magnitude: Side of the base square in EMU.

    Returns:
        The createShape request.
    """
    return {
        "createShape": {
            "objectId": element_id,
            "shapeType": shape_type,
            "elementProperties": {
                "pageObjectId": page_id,
                "size": {
                    "height": {"magnitude": magnitude, "unit": "EMU"},
                    "width": {"magnitude": magnitude, "unit": "EMU"},
                },
                "transform": {
                    "scaleX": scale_x,
                    "scaleY": scale_y,
                    "translateX": translate_x,
                    "translateY": translate_y,
                    "unit": "EMU",
                },
            },
        }
    }


# ---------------------------------------------------------------------------
# Shape and text styling
# ---------------------------------------------------------------------------


def update_shape_request(element_id: str, style: ShapeStyle) -> Request:
    """Set the background fill, outline and content alignment of a shape."""
    return {
        "updateShapeProperties": {
            "objectId": element_id,
            "shapeProperties": {
                "shapeBackgroundFill": _background_fill(style.fill_color),
                "outline": _outline(style),
                "contentAlignment": style.content_alignment or "MIDDLE",
            },
            "fields": "shapeBackgroundFill,outline,contentAlignment",
        }
    }


def insert_text_request(element_id: str, text: str) -> Request:
    """Insert text into a shape."""
    return {
        "insertText": {
            "objectId": element_id,
            "text": text,
        }
    }


def update_text_style_request(
    element_id: str,
    font_family: str,
    font_size: float,
    color: Optional[str] = None,
    bold: bool = False,
    italic: bool = False,
    underline: bool = False,
    strikethrough: bool = False,
) -> Request:
    """Set the character style of all text in a shape.

    Unset flags are sent as False and an unset color as black, so the
    request always overrides every field it names.
    """
    return {
        "updateTextStyle": {
            "objectId": element_id,
            "style": {
                "fontFamily": font_family,
                "fontSize": {"magnitude": font_size, "unit": "PT"},
                "foregroundColor": {"opaqueColor": hex_to_rgb_color(color or _BLACK)},
                "bold": bool(bold),
                "italic": bool(italic),
                "underline": bool(underline),
                "strikethrough": bool(strikethrough),
            },
            "textRange": {"type": "ALL"},
            "fields": "fontFamily,fontSize,foregroundColor,bold,italic,underline,strikethrough",
        }
    }


def text_style_request(element_id: str, style: TextStyle, color: Optional[str] = None) -> Request:
    """update_text_style_request() driven by a theme TextStyle."""
    return update_text_style_request(
        element_id,
        style.font_family,
        style.font_size,
        color=color or style.color,
        bold=style.bold,
        italic=style.italic,
        underline=style.underline,
        strikethrough=style.strikethrough,
    )


def update_paragraph_style_request(
    element_id: str,
    alignment: Optional[str] = None,
    spacing_mode: Optional[str] = None,
    direction: Optional[str] = None,
) -> Request:
    """Set the paragraph style of all text in a shape."""
    return {
        "updateParagraphStyle": {
            "objectId": element_id,
            "style": {
                "alignment": alignment or "CENTER",
                "spacingMode": spacing_mode or "COLLAPSE_LISTS",
                "direction": direction or "LEFT_TO_RIGHT",
            },
            "textRange": {"type": "ALL"},
            "fields": "alignment,spacingMode,direction",
        }
    }


# ---------------------------------------------------------------------------
# Composite element helpers
# ---------------------------------------------------------------------------


def text_element_requests(
    page_id: str,
    element_id: str,
    text: str,
    shape_type: str,
    scale_x: float,
    scale_y: float,
    translate_x: float,
    translate_y: float,
    shape_style: ShapeStyle,
    text_style: TextStyle,
    magnitude: float = DEFAULT_MAGNITUDE,
) -> list[Request]:
    """Create, style and fill a shape that carries text.

    Emits the five requests of one styled element contiguously, in the
    order the API needs them: create, shape style, text, text style,
    paragraph style.
    """
    return [
        create_shape_request(
            page_id, element_id, shape_type,
            scale_x, scale_y, translate_x, translate_y, magnitude,
        ),
        update_shape_request(element_id, shape_style),
        insert_text_request(element_id, text),
        text_style_request(element_id, text_style, color=shape_style.text_color),
        update_paragraph_style_request(element_id),
    ]


def label_requests(
    page_id: str,
    element_id: str,
    text: str,
    scale_x: float,
    scale_y: float,
    translate_x: float,
    translate_y: float,
    text_style: TextStyle,
    alignment: str = "CENTER",
    magnitude: float = DEFAULT_MAGNITUDE,
) -> list[Request]:
    """Create a borderless text box label."""
    return [
        create_shape_request(
            page_id, element_id, "TEXT_BOX",
            scale_x, scale_y, translate_x, translate_y, magnitude,
        ),
        insert_text_request(element_id, text),
        text_style_request(element_id, text_style),
        update_paragraph_style_request(element_id, alignment),
    ]


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def emu_to_points(emu: float) -> float:
    """Convert EMU to points."""
    return emu / EMU_PER_INCH * POINTS_PER_INCH


def points_to_emu(points: float) -> float:
    """Convert points to EMU."""
    return points / POINTS_PER_INCH * EMU_PER_INCH


def hex_to_rgb_color(hex_color: str) -> dict[str, Any]:
    """Convert '#RRGGBB' to a Slides ``{"rgbColor": {...}}`` color (0..1 channels)."""
    h = hex_color.lstrip("#")
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    red, green, blue = (int(h[i:i + 2], 16) / 255 for i in (0, 2, 4))
    return {"rgbColor": {"red": red, "green": green, "blue": blue}}


def rgb_color_to_hex(color: dict[str, Any]) -> str:
    """Inverse of hex_to_rgb_color(); missing channels count as 0."""
    rgb = color.get("rgbColor", color)
    channels = [rgb.get(name, 0) for name in ("red", "green", "blue")]
    return "#" + "".join(f"{round(c * 255):02X}" for c in channels)


def _background_fill(fill_color: Optional[str]) -> dict[str, Any]:
    if fill_color is None:
        return {"propertyState": "NOT_RENDERED"}
    return {"solidFill": {"color": hex_to_rgb_color(fill_color), "alpha": 1}}


def _outline(style: ShapeStyle) -> dict[str, Any]:
    outline = style.outline
    if outline.color is None:
        return {"propertyState": "NOT_RENDERED"}
    return {
        "outlineFill": {"solidFill": {"color": hex_to_rgb_color(outline.color), "alpha": 1}},
        "weight": {"magnitude": outline.weight_emu, "unit": "EMU"},
        "dashStyle": outline.dash_style,
    }
