import typing
from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Every linear value below is in points, every angle in degrees.


@dataclass
class Shadow:
    h: float = 0
    v: float = 0
    blur: float = 0
    color: str = ""


@dataclass
class VisualElement:
    type: str = ""
    left: Optional[float] = None
    top: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotate: Optional[float] = 0
    # z-index in document order, unique within a slide
    order: int = 0


@dataclass
class StyledElement(VisualElement):
    name: str = ""
    content: str = ""  # HTML produced by the text body formatter
    fill_color: str = ""
    border_color: str = ""
    border_width: float = 0
    border_type: str = "solid"
    border_stroke_dasharray: str = "0"
    is_flip_h: bool = False
    is_flip_v: bool = False
    v_align: str = "up"
    shadow: Optional[Shadow] = None


@dataclass
class ShapeElement(StyledElement):
    type: str = "shape"
    shap_type: str = ""  # preset geometry name or "custom"
    path: Optional[str] = None  # SVG path, custom geometry only


@dataclass
class TextElement(StyledElement):
    type: str = "text"
    is_vertical: bool = False


@dataclass
class ImageElement(VisualElement):
    type: str = "image"
    src: Optional[str] = None  # data URI
    is_flip_h: bool = False
    is_flip_v: bool = False


@dataclass
class VideoElement(VisualElement):
    type: str = "video"
    blob: Optional[str] = None  # data URI of an embedded video
    src: Optional[str] = None  # external video link


@dataclass
class AudioElement(VisualElement):
    type: str = "audio"
    blob: Optional[str] = None


@dataclass
class TableCell:
    text: str = ""
    row_span: Optional[int] = None
    col_span: Optional[int] = None
    v_merge: Optional[bool] = None
    h_merge: Optional[bool] = None
    fill_color: Optional[str] = None
    font_color: Optional[str] = None
    font_bold: Optional[bool] = None


@dataclass
class TableElement(VisualElement):
    type: str = "table"
    data: List[List[TableCell]] = field(default_factory=list)
    border_color: Optional[str] = None
    border_width: Optional[float] = None
    border_type: Optional[str] = None


@dataclass
class ChartPoint:
    x: str = ""
    y: float = 0


@dataclass
class ChartSeries:
    key: str = ""
    values: List[ChartPoint] = field(default_factory=list)
    xlabels: Dict[str, str] = field(default_factory=dict)


@dataclass
class ChartElement(VisualElement):
    type: str = "chart"
    chart_type: str = ""
    data: List[ChartSeries] = field(default_factory=list)
    marker: Optional[bool] = None
    bar_dir: Optional[str] = None
    hole_size: Optional[int] = None
    grouping: Optional[str] = None
    style: Optional[str] = None


@dataclass
class DiagramElement(VisualElement):
    type: str = "diagram"
    elements: List[VisualElement] = field(default_factory=list)


@dataclass
class GroupElement(VisualElement):
    type: str = "group"
    elements: List[VisualElement] = field(default_factory=list)


@dataclass
class MathElement(VisualElement):
    type: str = "math"
    latex: str = ""


@dataclass
class SlideFill:
    # "color", "gradient" or "image"
    type: str = "color"
    value: typing.Any = None


@dataclass
class SlideSize:
    width: float = 0
    height: float = 0


@dataclass
class Slide:
    fill: Optional[SlideFill] = None
    elements: List[VisualElement] = field(default_factory=list)
    note: str = ""

    def iter_elements(self) -> typing.Iterator[VisualElement]:
        """Depth-first iteration over all elements, nested ones included."""
        stack = list(reversed(self.elements))
        while stack:
            element = stack.pop()
            yield element
            children = getattr(element, "elements", None)
            if children:
                stack.extend(reversed(children))


@dataclass
class Presentation:
    slides: List[Slide] = field(default_factory=list)
    size: SlideSize = field(default_factory=SlideSize)

    def to_dict(self) -> dict:
        """Renderer-ready JSON representation (camelCase keys, no nulls)."""
        from pptx2json.serialization import serialize_presentation

        return serialize_presentation(self)
