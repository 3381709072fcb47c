from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pdfvector.pstypes import PSLiteral
from pdfvector.utils import Matrix, PathSegment, Rect

if TYPE_CHECKING:
    from pdfvector.pdfstate import PDFGraphicState


class PDFDevice:
    """Receives the output of PDFPageInterpreter.

    All coordinates a device receives are already in device space.
    """

    def __init__(self) -> None:
        self.ctm: Matrix | None = None

    def __repr__(self) -> str:
        return "<PDFDevice>"

    def __enter__(self) -> "PDFDevice":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def close(self) -> None:
        pass

    def set_ctm(self, ctm: Matrix) -> None:
        self.ctm = ctm

    def begin_tag(self, tag: PSLiteral, props: object | None = None) -> None:
        pass

    def end_tag(self) -> None:
        pass

    def do_tag(self, tag: PSLiteral, props: object | None = None) -> None:
        pass

    def begin_page(self, page: object, ctm: Matrix) -> None:
        pass

    def end_page(self, page: object) -> None:
        pass

    def begin_figure(self, name: str, bbox: Rect, matrix: Matrix) -> None:
        pass

    def end_figure(self, name: str) -> None:
        pass

    def paint_path(
        self,
        graphicstate: "PDFGraphicState",
        stroke: bool,
        fill: bool,
        evenodd: bool,
        path: Sequence[PathSegment],
    ) -> None:
        pass

    def paint_shading(self, name: str, shading: Any, ctm: Matrix) -> None:
        pass
