"""PowerPoint backend using python-pptx.

Applies Slides batchUpdate requests to a local ``.pptx`` presentation so
calendars can be generated without a Google account. Supports the request
kinds the calendar composers emit: createShape, updateShapeProperties,
insertText, updateTextStyle and updateParagraphStyle.

A batch is checked in full (request kinds, page and object references,
shape types) before anything is applied; a rejected batch leaves the
presentation untouched.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.dml import MSO_LINE_DASH_STYLE
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Emu, Pt

from slide_calendar.backends.base import SlidesBackend
from slide_calendar.errors import InvalidBatchError, LayoutNotFoundError
from slide_calendar.schemas.calendar_schema import BatchResult
from slide_calendar.slides_engine.requests import Request, points_to_emu, rgb_color_to_hex

logger = logging.getLogger(__name__)

_R_ID = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}id"

# Slides shape types -> python-pptx autoshapes (TEXT_BOX is handled apart)
SHAPE_TYPE_MAP = {
    "RECTANGLE": MSO_SHAPE.RECTANGLE,
    "ROUND_RECTANGLE": MSO_SHAPE.ROUNDED_RECTANGLE,
    "ELLIPSE": MSO_SHAPE.OVAL,
    "FLOW_CHART_TERMINATOR": MSO_SHAPE.FLOWCHART_TERMINATOR,
    "FLOW_CHART_PROCESS": MSO_SHAPE.FLOWCHART_PROCESS,
}

DASH_STYLE_MAP = {
    "SOLID": MSO_LINE_DASH_STYLE.SOLID,
    "DOT": MSO_LINE_DASH_STYLE.ROUND_DOT,
    "DASH": MSO_LINE_DASH_STYLE.DASH,
    "DASH_DOT": MSO_LINE_DASH_STYLE.DASH_DOT,
    "LONG_DASH": MSO_LINE_DASH_STYLE.LONG_DASH,
    "LONG_DASH_DOT": MSO_LINE_DASH_STYLE.LONG_DASH_DOT,
}

ANCHOR_MAP = {
    "TOP": MSO_ANCHOR.TOP,
    "MIDDLE": MSO_ANCHOR.MIDDLE,
    "BOTTOM": MSO_ANCHOR.BOTTOM,
}

ALIGNMENT_MAP = {
    "START": PP_ALIGN.LEFT,
    "CENTER": PP_ALIGN.CENTER,
    "END": PP_ALIGN.RIGHT,
    "JUSTIFIED": PP_ALIGN.JUSTIFY,
}

_SUPPORTED_KINDS = (
    "createShape",
    "updateShapeProperties",
    "insertText",
    "updateTextStyle",
    "updateParagraphStyle",
)


class PptxBackend(SlidesBackend):
    """Slides backend writing to a python-pptx Presentation.

    Args:
        presentation: Presentation to add slides to. Defaults to a new
            presentation from python-pptx's default template.
        page_size: Optional (width, height) in EMU to resize the slides to.
    """

    def __init__(
        self,
        presentation: Optional[Presentation] = None,
        page_size: Optional[tuple[int, int]] = None,
    ):
        self.presentation = presentation if presentation is not None else Presentation()
        if page_size is not None:
            self.presentation.slide_width = Emu(page_size[0])
            self.presentation.slide_height = Emu(page_size[1])
        self._pages: dict[str, Any] = {}
        self._elements: dict[str, Any] = {}

    @classmethod
    def from_template(cls, template_path: str | Path) -> "PptxBackend":
        """Open a template deck for its layouts, dropping its existing slides."""
        template_path = Path(template_path)
        if not template_path.exists():
            raise FileNotFoundError(f"Base template not found: {template_path}")

        prs = Presentation(str(template_path))
        existing_count = len(prs.slides)
        if existing_count:
            _strip_existing_slides(prs)
        logger.info(
            f"Opened base template: {template_path.name} "
            f"({len(list(_iter_layouts(prs)))} layouts, {existing_count} slides stripped)"
        )
        return cls(prs)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.presentation.save(str(path))
        logger.info(f"Saved: {path} ({len(self.presentation.slides)} slides)")
        return path

    # ------------------------------------------------------------------
    # Layouts and pages
    # ------------------------------------------------------------------

    def _find_layout(self, layout_name: str):
        for layout in _iter_layouts(self.presentation):
            if layout.name.lower() == layout_name.lower():
                return layout
        names = [layout.name for layout in _iter_layouts(self.presentation)]
        raise LayoutNotFoundError(layout_name, names)

    def resolve_layout(self, layout_name: str) -> str:
        return self._find_layout(layout_name).name

    def new_page(self, layout_name: str) -> str:
        layout = self._find_layout(layout_name)
        slide = self.presentation.slides.add_slide(layout)
        page_id = self.new_unique_id()
        self._pages[page_id] = slide
        logger.debug(f"Added slide {page_id} with layout '{layout.name}'")
        return page_id

    def element(self, element_id: str):
        """The python-pptx shape created for an object id."""
        return self._elements[element_id]

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def submit_batch(self, requests: list[Request]) -> BatchResult:
        try:
            self._validate(requests)
        except InvalidBatchError as e:
            logger.error(str(e))
            return BatchResult(ok=False, error=str(e))

        replies: list[dict[str, Any]] = []
        for index, request in enumerate(requests):
            kind, body = next(iter(request.items()))
            try:
                replies.append(self._apply(kind, body))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Request {index} ({kind}) failed after validation: {e}")
                return BatchResult(ok=False, error=f"request {index} ({kind}): {e}", replies=replies)
        return BatchResult(ok=True, replies=replies)

    def _validate(self, requests: list[Request]) -> None:
        issues: list[str] = []
        known = set(self._elements)
        for index, request in enumerate(requests):
            if not isinstance(request, dict) or len(request) != 1:
                issues.append(f"request {index}: expected a single-key request object")
                continue
            kind, body = next(iter(request.items()))
            if kind not in _SUPPORTED_KINDS or not isinstance(body, dict):
                issues.append(f"request {index}: unsupported request kind {kind!r}")
                continue
            object_id = body.get("objectId")
            if not object_id:
                issues.append(f"request {index} ({kind}): missing objectId")
                continue
            if kind == "createShape":
                page_id = body.get("elementProperties", {}).get("pageObjectId")
                if page_id not in self._pages:
                    issues.append(f"request {index}: unknown page {page_id!r}")
                shape_type = body.get("shapeType")
                if shape_type != "TEXT_BOX" and shape_type not in SHAPE_TYPE_MAP:
                    issues.append(f"request {index}: unsupported shape type {shape_type!r}")
                if object_id in known:
                    issues.append(f"request {index}: duplicate object id {object_id!r}")
                known.add(object_id)
            elif object_id not in known:
                issues.append(f"request {index} ({kind}): unknown object {object_id!r}")
        if issues:
            raise InvalidBatchError(issues)

    def _apply(self, kind: str, body: dict[str, Any]) -> dict[str, Any]:
        if kind == "createShape":
            self._create_shape(body)
            return {"createShape": {"objectId": body["objectId"]}}

        shape = self._elements[body["objectId"]]
        if kind == "updateShapeProperties":
            _update_shape_properties(shape, body.get("shapeProperties", {}))
        elif kind == "insertText":
            text_frame = shape.text_frame
            text_frame.text = text_frame.text + body.get("text", "")
        elif kind == "updateTextStyle":
            _update_text_style(shape, body.get("style", {}))
        elif kind == "updateParagraphStyle":
            _update_paragraph_style(shape, body.get("style", {}))
        return {}

    def _create_shape(self, body: dict[str, Any]) -> None:
        props = body["elementProperties"]
        slide = self._pages[props["pageObjectId"]]
        size = props.get("size", {})
        transform = props.get("transform", {})
        unit = transform.get("unit", "EMU")

        width = _to_emu(size.get("width")) * transform.get("scaleX", 1)
        height = _to_emu(size.get("height")) * transform.get("scaleY", 1)
        left = _length(transform.get("translateX", 0), unit)
        top = _length(transform.get("translateY", 0), unit)

        if body["shapeType"] == "TEXT_BOX":
            shape = slide.shapes.add_textbox(_emu(left), _emu(top), _emu(width), _emu(height))
        else:
            shape = slide.shapes.add_shape(
                SHAPE_TYPE_MAP[body["shapeType"]], _emu(left), _emu(top), _emu(width), _emu(height)
            )
        shape.name = body["objectId"]
        self._elements[body["objectId"]] = shape


# ---------------------------------------------------------------------------
# Property appliers
# ---------------------------------------------------------------------------


def _update_shape_properties(shape, props: dict[str, Any]) -> None:
    fill = props.get("shapeBackgroundFill")
    if fill is not None:
        color = fill.get("solidFill", {}).get("color")
        if fill.get("propertyState") == "NOT_RENDERED" or color is None:
            shape.fill.background()
        else:
            shape.fill.solid()
            shape.fill.fore_color.rgb = _rgb(color)

    outline = props.get("outline")
    if outline is not None:
        color = outline.get("outlineFill", {}).get("solidFill", {}).get("color")
        if outline.get("propertyState") == "NOT_RENDERED" or color is None:
            shape.line.fill.background()
        else:
            shape.line.color.rgb = _rgb(color)
            if "weight" in outline:
                shape.line.width = _emu(_to_emu(outline["weight"]))
            dash_style = outline.get("dashStyle")
            if dash_style in DASH_STYLE_MAP:
                shape.line.dash_style = DASH_STYLE_MAP[dash_style]

    alignment = props.get("contentAlignment")
    if alignment in ANCHOR_MAP:
        shape.text_frame.vertical_anchor = ANCHOR_MAP[alignment]


def _update_text_style(shape, style: dict[str, Any]) -> None:
    color = style.get("foregroundColor", {}).get("opaqueColor")
    for paragraph in shape.text_frame.paragraphs:
        for run in paragraph.runs:
            font = run.font
            if "fontFamily" in style:
                font.name = style["fontFamily"]
            if "fontSize" in style:
                font.size = Pt(style["fontSize"]["magnitude"])
            if color:
                font.color.rgb = _rgb(color)
            for key in ("bold", "italic", "underline"):
                if key in style:
                    setattr(font, key, bool(style[key]))
            if "strikethrough" in style:
                rPr = run._r.get_or_add_rPr()
                rPr.set("strike", "sngStrike" if style["strikethrough"] else "noStrike")


def _update_paragraph_style(shape, style: dict[str, Any]) -> None:
    alignment = ALIGNMENT_MAP.get(style.get("alignment"))
    direction = style.get("direction")
    if "spacingMode" in style:
        logger.debug(f"Ignoring spacingMode {style['spacingMode']!r} on {shape.name}")
    for paragraph in shape.text_frame.paragraphs:
        if alignment is not None:
            paragraph.alignment = alignment
        if direction:
            pPr = paragraph._p.get_or_add_pPr()
            pPr.set("rtl", "1" if direction == "RIGHT_TO_LEFT" else "0")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _iter_layouts(prs: Presentation):
    for master in prs.slide_masters:
        yield from master.slide_layouts


def _strip_existing_slides(prs: Presentation) -> None:
    """Remove all slides, keeping masters, layouts and theme."""
    slide_list = prs.slides._sldIdLst
    for sld_id in list(slide_list):
        r_id = sld_id.get(_R_ID)
        if r_id:
            prs.part.drop_rel(r_id)
        slide_list.remove(sld_id)


def _length(value: float, unit: str) -> float:
    return points_to_emu(value) if unit == "PT" else value


def _to_emu(dimension: Optional[dict[str, Any]]) -> float:
    if not dimension:
        return 0
    return _length(dimension.get("magnitude", 0), dimension.get("unit", "EMU"))


def _emu(value: float) -> Emu:
    return Emu(int(round(value)))


def _rgb(color: dict[str, Any]) -> RGBColor:
    return RGBColor.from_string(rgb_color_to_hex(color).lstrip("#"))
