import logging
import re
from collections.abc import Sequence
from typing import Any, cast

from pdfvector.casting import safe_rect_list
from pdfvector.layout import (
    LTContainer,
    LTCurve,
    LTExpandableContainer,
    LTFigure,
    LTLine,
    LTPage,
    LTRect,
    LTShading,
)
from pdfvector.pdfdevice import PDFDevice
from pdfvector.pdfstate import PDFGraphicState
from pdfvector.pdftypes import dict_value, get_inheritable, resolve1
from pdfvector.utils import Matrix, PathSegment, Point, Rect

log = logging.getLogger(__name__)


class PDFPathAggregator(PDFDevice):
    """Collects painted paths as layout objects.

    Every painted subpath becomes an LTLine, LTRect or LTCurve on the current
    page or figure. Paths arrive in device space, so no further
    transformation is applied here.
    """

    def __init__(self, pageno: int = 1) -> None:
        PDFDevice.__init__(self)
        self.pageno = pageno
        self._stack: list[LTContainer] = []
        # collects output painted outside of begin_page/end_page
        self.cur_item: LTContainer = LTExpandableContainer()
        self.result: LTPage | None = None

    def begin_page(self, page: object, ctm: Matrix) -> None:
        mediabox = safe_rect_list(get_inheritable(page, "MediaBox"))
        if mediabox is None:
            mediabox = (0, 0, 612, 792)
        (x0, y0, x1, y1) = ctm.transform_rect(mediabox)
        mediabox = (0, 0, abs(x0 - x1), abs(y0 - y1))
        self.cur_item = LTPage(self.pageno, mediabox)

    def end_page(self, page: object) -> None:
        assert not self._stack, str(len(self._stack))
        assert isinstance(self.cur_item, LTPage), str(type(self.cur_item))
        self.pageno += 1
        self.receive_layout(self.cur_item)

    def receive_layout(self, ltpage: LTPage) -> None:
        self.result = ltpage

    def get_result(self) -> LTPage:
        assert self.result is not None
        return self.result

    def begin_figure(self, name: str, bbox: Rect, matrix: Matrix) -> None:
        # the interpreter has already concatenated matrix into the CTM
        assert self.ctm is not None
        self._stack.append(self.cur_item)
        self.cur_item = LTFigure(name, bbox, self.ctm)

    def end_figure(self, _: str) -> None:
        fig = self.cur_item
        assert isinstance(self.cur_item, LTFigure), str(type(self.cur_item))
        self.cur_item = self._stack.pop()
        self.cur_item.add(fig)

    def paint_shading(self, name: str, shading: Any, ctm: Matrix) -> None:
        bbox = safe_rect_list(resolve1(dict_value(shading).get("BBox")))
        if bbox is not None:
            bbox = ctm.transform_rect(bbox)
        elif isinstance(self.cur_item, LTFigure):
            bbox = self.cur_item.bbox
        else:
            log.debug("Shading %r has no extent, skipping", name)
            return
        self.cur_item.add(LTShading(name, shading, bbox))

    def paint_path(
        self,
        gstate: PDFGraphicState,
        stroke: bool,
        fill: bool,
        evenodd: bool,
        path: Sequence[PathSegment],
    ) -> None:
        """Paint paths described in section 4.4 of the PDF reference manual"""
        shape = "".join(x[0] for x in path)

        if shape[:1] != "m":
            # Per PDF Reference Section 4.4.1, "path construction operators may
            # be invoked in any sequence, but the first one invoked must be m
            # or re to begin a new subpath." The interpreter turns re into its
            # mlllh equivalent, so a path that does not start with m is invalid.
            log.debug("Ignoring path %r which does not start with m", shape)

        elif shape.count("m") > 1:
            # recurse if there are multiple m's in this shape
            for m in re.finditer(r"m[^m]+", shape):
                subpath = path[m.start(0) : m.end(0)]
                self.paint_path(gstate, stroke, fill, evenodd, subpath)

        else:
            # "h" has no point of its own; it ends where the subpath started.
            # All other segments end at their final two arguments, the
            # preceding ones being Bezier control points.
            pts = [
                cast(Point, p[-2:] if p[0] != "h" else path[0][-2:]) for p in path
            ]
            original_path = list(path)

            # Drop a redundant "l" on a path closed with "h"
            if len(shape) > 3 and shape[-2:] == "lh" and pts[-2] == pts[0]:
                shape = shape[:-2] + "h"
                pts.pop()

            if shape in {"mlh", "ml"}:
                # single line segment
                #
                # Note: 'ml', in conditional above, is a frequent anomaly
                # that we want to support.
                self.cur_item.add(
                    LTLine(
                        gstate.linewidth,
                        pts[0],
                        pts[1],
                        stroke,
                        fill,
                        evenodd,
                        gstate.scolor,
                        gstate.ncolor,
                        original_path=original_path,
                        dashing_style=gstate.dash,
                    )
                )

            elif shape in {"mlllh", "mllll"}:
                (x0, y0), (x1, y1), (x2, y2), (x3, y3), _ = pts

                is_closed_loop = pts[0] == pts[4]
                has_square_coordinates = (
                    x0 == x1 and y1 == y2 and x2 == x3 and y3 == y0
                ) or (y0 == y1 and x1 == x2 and y2 == y3 and x3 == x0)
                if is_closed_loop and has_square_coordinates:
                    bbox = (
                        min(x0, x2),
                        min(y0, y2),
                        max(x0, x2),
                        max(y0, y2),
                    )
                    self.cur_item.add(
                        LTRect(
                            gstate.linewidth,
                            bbox,
                            stroke,
                            fill,
                            evenodd,
                            gstate.scolor,
                            gstate.ncolor,
                            original_path,
                            gstate.dash,
                        )
                    )
                else:
                    self._add_curve(gstate, stroke, fill, evenodd, pts, original_path)
            else:
                self._add_curve(gstate, stroke, fill, evenodd, pts, original_path)

    def _add_curve(
        self,
        gstate: PDFGraphicState,
        stroke: bool,
        fill: bool,
        evenodd: bool,
        pts: list[Point],
        original_path: list[PathSegment],
    ) -> None:
        curve = LTCurve(
            gstate.linewidth,
            pts,
            stroke,
            fill,
            evenodd,
            gstate.scolor,
            gstate.ncolor,
            original_path,
            gstate.dash,
        )
        self.cur_item.add(curve)
