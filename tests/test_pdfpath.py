import pytest

from pdfvector.pdfpath import PDFPath, PDFPathSink


def test_sink_is_abstract():
    with pytest.raises(NotImplementedError):
        PDFPathSink().move_to(0, 0)


class TestPDFPath:
    def test_records_segments(self):
        path = PDFPath()
        path.move_to(0, 0)
        path.line_to(10, 0)
        path.curve_to(10, 5, 5, 10, 0, 10)
        path.close()
        assert list(path) == [
            ("m", 0, 0),
            ("l", 10, 0),
            ("c", 10, 5, 5, 10, 0, 10),
            ("h",),
        ]
        assert len(path) == 4
        assert repr(path) == "<PDFPath: 'mlch'>"

    def test_take_empties_the_path(self):
        path = PDFPath()
        path.move_to(1, 2)
        segments = path.take()
        assert segments == [("m", 1, 2)]
        assert path.is_empty()
        path.line_to(3, 4)
        assert segments == [("m", 1, 2)]

    def test_clear(self):
        path = PDFPath()
        path.move_to(1, 2)
        path.clear()
        assert path.is_empty()

    def test_bbox_includes_control_points(self):
        path = PDFPath()
        path.move_to(0, 0)
        path.curve_to(5, 20, -3, 4, 10, 10)
        path.close()
        assert path.get_points() == [(0, 0), (5, 20), (-3, 4), (10, 10)]
        assert path.get_bbox() == (-3, 0, 10, 20)

    def test_empty_bbox(self):
        assert PDFPath().get_bbox() is None
