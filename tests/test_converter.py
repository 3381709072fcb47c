import pytest

from pdfvector.converter import PDFPathAggregator
from pdfvector.layout import (
    LTContainer,
    LTCurve,
    LTFigure,
    LTLine,
    LTPage,
    LTRect,
    LTShading,
)
from pdfvector.pdfinterp import PDFPageInterpreter, PDFResourceManager
from pdfvector.pdfpath import PDFPath
from pdfvector.pdfstate import PDFGraphicState
from pdfvector.pdftypes import PDFStream
from pdfvector.pstypes import LIT
from pdfvector.utils import Matrix


def graphicstate():
    return PDFGraphicState(Matrix(), PDFPath())


class TestPaintPath:
    def test_paint_path(self):
        path = [("m", 6, 7), ("l", 7, 7)]
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 100, 0, 100))
        analyzer.paint_path(graphicstate(), False, False, False, path)
        assert len(analyzer.cur_item) == 1

    def test_paint_path_mlllh(self):
        path = [("m", 6, 7), ("l", 7, 7), ("l", 7, 91), ("l", 6, 91), ("h",)]
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 100, 0, 100))
        analyzer.paint_path(graphicstate(), False, False, False, path)
        assert len(analyzer.cur_item) == 1

    def test_paint_path_multiple_mlllh(self):
        """Path from samples/contrib/issue-00369-excel.pdf"""
        path = [
            ("m", 6, 7),
            ("l", 7, 7),
            ("l", 7, 91),
            ("l", 6, 91),
            ("h",),
            ("m", 4, 7),
            ("l", 6, 7),
            ("l", 6, 91),
            ("l", 4, 91),
            ("h",),
            ("m", 67, 2),
            ("l", 68, 2),
            ("l", 68, 3),
            ("l", 67, 3),
            ("h",),
        ]
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 100, 0, 100))
        analyzer.paint_path(graphicstate(), False, False, False, path)
        assert len(analyzer.cur_item) == 3

    def test_paint_path_quadrilaterals(self):
        """Via https://github.com/pdfminer/pdfminer.six/issues/473"""

        def parse(path):
            analyzer = self._get_analyzer()
            analyzer.cur_item = LTContainer((0, 1000, 0, 1000))
            analyzer.paint_path(graphicstate(), False, False, False, path)
            return list(analyzer.cur_item)

        def get_types(path):
            return list(map(type, parse(path)))

        # Standard rect
        assert get_types(
            [
                ("m", 10, 90),
                ("l", 90, 90),
                ("l", 90, 10),
                ("l", 10, 10),
                ("h",),
            ],
        ) == [LTRect]

        # Same but mllll variation
        assert get_types(
            [
                ("m", 10, 90),
                ("l", 90, 90),
                ("l", 90, 10),
                ("l", 10, 10),
                ("l", 10, 90),
            ],
        ) == [LTRect]

        # Same but mllllh variation
        assert get_types(
            [
                ("m", 10, 90),
                ("l", 90, 90),
                ("l", 90, 10),
                ("l", 10, 10),
                ("l", 10, 90),
                ("h",),
            ],
        ) == [LTRect]

        # Bowtie shape
        assert get_types(
            [
                ("m", 110, 90),
                ("l", 190, 10),
                ("l", 190, 90),
                ("l", 110, 10),
                ("h",),
            ],
        ) == [LTCurve]

        # Quadrilateral with one slanted side
        assert get_types(
            [
                ("m", 210, 90),
                ("l", 290, 60),
                ("l", 290, 10),
                ("l", 210, 10),
                ("h",),
            ],
        ) == [LTCurve]

        # Path with one rect subpath and one pentagon
        assert get_types(
            [
                ("m", 410, 90),
                ("l", 445, 90),
                ("l", 445, 10),
                ("l", 410, 10),
                ("h",),
                ("m", 455, 70),
                ("l", 475, 90),
                ("l", 490, 70),
                ("l", 490, 10),
                ("l", 455, 10),
                ("h",),
            ],
        ) == [LTRect, LTCurve]

        # Three types of simple lines, in both 'mlh' and 'ml' variations
        assert get_types(
            [
                ("m", 10, 30),
                ("l", 10, 40),
                ("h",),
                ("m", 10, 50),
                ("l", 70, 50),
                ("m", 10, 10),
                ("l", 30, 30),
            ],
        ) == [LTLine, LTLine, LTLine]

    def _get_analyzer(self):
        analyzer = PDFPathAggregator()
        analyzer.set_ctm(Matrix())
        return analyzer

    def test_paint_path_beziers(self):
        """See section 4.4, table 4.9 of the PDF reference manual"""
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 1000, 0, 1000))
        path = [
            ("m", 72.41, 433.89),
            ("c", 72.41, 434.45, 71.96, 434.89, 71.41, 434.89),
        ]
        analyzer.paint_path(graphicstate(), False, False, False, path)
        (curve,) = analyzer.cur_item
        assert curve.pts == [(72.41, 433.89), (71.41, 434.89)]
        assert curve.original_path == path

    def test_paint_path_dashed(self):
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 1000, 0, 1000))
        gstate = graphicstate()
        gstate.dash = ([1, 1], 0)
        analyzer.paint_path(
            gstate, False, False, False, [("m", 0, 0), ("c", 1, 1, 2, 2, 3, 0)]
        )
        (curve,) = analyzer.cur_item
        assert curve.dashing_style == ([1, 1], 0)

    def test_paint_path_without_starting_m(self):
        gs = graphicstate()
        analyzer = self._get_analyzer()
        analyzer.cur_item = LTContainer((0, 100, 0, 100))
        paths = [[("h",)], [("l", 72.41, 433.89), ("l", 82.41, 433.89), ("h",)]]
        for path in paths:
            analyzer.paint_path(gs, False, False, False, path)
        assert len(analyzer.cur_item) == 0

    def test_colors_and_flags(self):
        analyzer = self._get_analyzer()
        gstate = graphicstate()
        gstate.linewidth = 2
        gstate.scolor = (1, 0, 0)
        gstate.ncolor = 0.5
        analyzer.paint_path(gstate, True, True, True, [("m", 0, 0), ("l", 5, 5)])
        (line,) = analyzer.cur_item
        assert (line.stroke, line.fill, line.evenodd) == (True, True, True)
        assert line.linewidth == 2
        assert line.stroking_color == (1, 0, 0)
        assert line.non_stroking_color == 0.5


class TestAggregation:
    @pytest.fixture
    def aggregator(self):
        return PDFPathAggregator()

    @pytest.fixture
    def interpreter(self, aggregator):
        return PDFPageInterpreter(PDFResourceManager(), aggregator)

    def test_page(self, interpreter, aggregator, parse):
        page = {"MediaBox": [0, 0, 200, 100]}
        interpreter.process_page(page, parse("10 10 50 20 re f 0 0 m 100 0 l S"))
        ltpage = aggregator.get_result()
        assert isinstance(ltpage, LTPage)
        assert ltpage.bbox == (0, 0, 200, 100)
        rect, line = ltpage
        assert isinstance(rect, LTRect)
        assert rect.bbox == (10, 10, 60, 30)
        assert rect.fill and not rect.stroke
        assert isinstance(line, LTLine)
        assert line.pts == [(0, 0), (100, 0)]

    def test_rotated_page(self, interpreter, aggregator, parse):
        page = {"MediaBox": [0, 0, 200, 100], "Rotate": 90}
        interpreter.process_page(page, parse("10 10 50 20 re f"))
        ltpage = aggregator.get_result()
        assert ltpage.bbox == (0, 0, 100, 200)
        (rect,) = ltpage
        assert isinstance(rect, LTRect)
        assert rect.bbox == (10, 140, 30, 190)

    def test_form_becomes_figure(self, interpreter, aggregator, parse, tokenize):
        fm0 = PDFStream(
            {
                "Subtype": LIT("Form"),
                "BBox": [0, 0, 10, 10],
                "Matrix": [2, 0, 0, 2, 0, 0],
            },
            tokenize("0 0 5 5 re S"),
        )
        page = {"MediaBox": [0, 0, 200, 100], "Resources": {"XObject": {"Fm0": fm0}}}
        interpreter.process_page(page, parse("1 0 0 1 50 50 cm /Fm0 Do"))
        ltpage = aggregator.get_result()
        (figure,) = ltpage
        assert isinstance(figure, LTFigure)
        assert figure.name == "Fm0"
        assert figure.bbox == (50, 50, 70, 70)
        (rect,) = figure
        assert rect.bbox == (50, 50, 60, 60)
        assert list(ltpage.iter_curves()) == [rect]

    def test_contents_without_page(self, interpreter, aggregator, parse):
        interpreter.render_contents({}, parse("0 0 m 10 10 l S 20 5 m 30 5 l S"))
        container = aggregator.cur_item
        assert len(container) == 2
        assert container.bbox == (0, 0, 30, 10)

    def test_shading(self, interpreter, aggregator, parse):
        resources = {
            "Shading": {
                "Sh0": {"ShadingType": 2, "BBox": [0, 0, 5, 5]},
                "Sh1": {"ShadingType": 2},
            }
        }
        page = {"MediaBox": [0, 0, 200, 100], "Resources": resources}
        interpreter.process_page(page, parse("2 0 0 2 0 0 cm /Sh0 sh /Sh1 sh"))
        sh0, sh1 = aggregator.get_result()
        assert isinstance(sh0, LTShading)
        assert sh0.bbox == (0, 0, 10, 10)
        assert sh1.bbox == (0, 0, 200, 100)


class TestLayout:
    def test_rect_points(self):
        rect = LTRect(1, (0, 0, 10, 5))
        assert rect.pts == [(0, 0), (10, 0), (10, 5), (0, 5)]
        assert rect.get_pts() == (
            "0.000,0.000,10.000,0.000,10.000,5.000,0.000,5.000"
        )

    def test_components_are_not_ordered(self):
        with pytest.raises(ValueError):
            _ = LTLine(1, (0, 0), (1, 1)) < LTLine(1, (0, 0), (2, 2))

    def test_figure_bbox_is_transformed(self):
        figure = LTFigure("Fm0", (0, 0, 10, 20), Matrix(0, 1, -1, 0, 0, 0))
        assert figure.bbox == (-20, 0, 0, 10)
