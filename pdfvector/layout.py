from collections.abc import Iterator, Sequence

from pdfvector.pdfstate import Color
from pdfvector.utils import (
    INF,
    Matrix,
    PathSegment,
    Point,
    Rect,
    bbox2str,
    get_bound,
    matrix2str,
)


class LTItem:
    """Interface for things that can be collected from a page"""


class LTComponent(LTItem):
    """Object with a bounding box"""

    def __init__(self, bbox: Rect) -> None:
        LTItem.__init__(self)
        self.set_bbox(bbox)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {bbox2str(self.bbox)}>"

    # Disable comparison.
    def __lt__(self, _: object) -> bool:
        raise ValueError

    def __le__(self, _: object) -> bool:
        raise ValueError

    def __gt__(self, _: object) -> bool:
        raise ValueError

    def __ge__(self, _: object) -> bool:
        raise ValueError

    def set_bbox(self, bbox: Rect) -> None:
        (x0, y0, x1, y1) = bbox
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.width = x1 - x0
        self.height = y1 - y0
        self.bbox = bbox


class LTCurve(LTComponent):
    """A generic Bezier curve

    The parameter `original_path` contains the original
    pathing information from the pdf (e.g. for reconstructing Bezier Curves).

    `dashing_style` contains the Dashing information if any.
    """

    def __init__(
        self,
        linewidth: float,
        pts: list[Point],
        stroke: bool = False,
        fill: bool = False,
        evenodd: bool = False,
        stroking_color: Color | None = None,
        non_stroking_color: Color | None = None,
        original_path: Sequence[PathSegment] | None = None,
        dashing_style: tuple[list[float], float] | None = None,
    ) -> None:
        LTComponent.__init__(self, get_bound(pts))
        self.pts = pts
        self.linewidth = linewidth
        self.stroke = stroke
        self.fill = fill
        self.evenodd = evenodd
        self.stroking_color = stroking_color
        self.non_stroking_color = non_stroking_color
        self.original_path = original_path
        self.dashing_style = dashing_style

    def get_pts(self) -> str:
        return ",".join(f"{x:.3f},{y:.3f}" for x, y in self.pts)


class LTLine(LTCurve):
    """A single straight line.

    Could be used for separating text or figures.
    """

    def __init__(
        self,
        linewidth: float,
        p0: Point,
        p1: Point,
        stroke: bool = False,
        fill: bool = False,
        evenodd: bool = False,
        stroking_color: Color | None = None,
        non_stroking_color: Color | None = None,
        original_path: Sequence[PathSegment] | None = None,
        dashing_style: tuple[list[float], float] | None = None,
    ) -> None:
        LTCurve.__init__(
            self,
            linewidth,
            [p0, p1],
            stroke,
            fill,
            evenodd,
            stroking_color,
            non_stroking_color,
            original_path,
            dashing_style,
        )


class LTRect(LTCurve):
    """A rectangle.

    Could be used for framing another pictures or figures.
    """

    def __init__(
        self,
        linewidth: float,
        bbox: Rect,
        stroke: bool = False,
        fill: bool = False,
        evenodd: bool = False,
        stroking_color: Color | None = None,
        non_stroking_color: Color | None = None,
        original_path: Sequence[PathSegment] | None = None,
        dashing_style: tuple[list[float], float] | None = None,
    ) -> None:
        (x0, y0, x1, y1) = bbox
        LTCurve.__init__(
            self,
            linewidth,
            [(x0, y0), (x1, y0), (x1, y1), (x0, y1)],
            stroke,
            fill,
            evenodd,
            stroking_color,
            non_stroking_color,
            original_path,
            dashing_style,
        )


class LTShading(LTComponent):
    """Area painted by the sh operator.

    The shading is kept as given; its extent is the page or form area.
    """

    def __init__(self, name: str, shading: object, bbox: Rect) -> None:
        LTComponent.__init__(self, bbox)
        self.name = name
        self.shading = shading

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.name}) {bbox2str(self.bbox)}>"


class LTContainer(LTComponent):
    """Object that can be extended"""

    def __init__(self, bbox: Rect) -> None:
        LTComponent.__init__(self, bbox)
        self._objs: list[LTComponent] = []

    def __iter__(self) -> Iterator[LTComponent]:
        return iter(self._objs)

    def __len__(self) -> int:
        return len(self._objs)

    def add(self, obj: LTComponent) -> None:
        self._objs.append(obj)

    def iter_curves(self) -> Iterator[LTCurve]:
        """All curves in this container and the ones nested in it, in paint
        order."""
        for obj in self:
            if isinstance(obj, LTContainer):
                yield from obj.iter_curves()
            elif isinstance(obj, LTCurve):
                yield obj


class LTExpandableContainer(LTContainer):
    """Container whose bounding box grows to enclose its children"""

    def __init__(self) -> None:
        LTContainer.__init__(self, (+INF, +INF, -INF, -INF))

    def add(self, obj: LTComponent) -> None:
        LTContainer.add(self, obj)
        self.set_bbox(
            (
                min(self.x0, obj.x0),
                min(self.y0, obj.y0),
                max(self.x1, obj.x1),
                max(self.y1, obj.y1),
            ),
        )


class LTFigure(LTContainer):
    """Represents an area used by PDF Form objects.

    PDF Forms can be used to present figures or pictures by embedding yet
    another PDF document within a page. Note that LTFigure objects can appear
    recursively.
    """

    def __init__(self, name: str, bbox: Rect, matrix: Matrix) -> None:
        self.name = name
        self.matrix = matrix
        LTContainer.__init__(self, matrix.transform_rect(bbox))

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}({self.name}) "
            f"{bbox2str(self.bbox)} matrix={matrix2str(self.matrix)}>"
        )


class LTPage(LTFigure):
    """Represents an entire page.

    May contain child objects like LTFigure, LTShading, LTRect, LTCurve and
    LTLine.
    """

    def __init__(self, pageid: int, bbox: Rect, rotate: float = 0) -> None:
        LTFigure.__init__(self, f"page{pageid}", bbox, Matrix.identity())
        self.pageid = pageid
        self.rotate = rotate

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}({self.pageid!r}) "
            f"{bbox2str(self.bbox)} rotate={self.rotate!r}>"
        )
