from collections.abc import Iterator

from pdfvector.utils import PathSegment, Point, Rect, get_bound


class PDFPathSink:
    """Receives path construction in device space.

    The interpreter only calls these four methods and never looks at how a
    sink represents the path.
    """

    def move_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    def line_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    def curve_to(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class PDFPath(PDFPathSink):
    """A path sink that records its segments.

    Segments are tuples like ``("m", x, y)``, ``("l", x, y)``,
    ``("c", x1, y1, x2, y2, x3, y3)`` and ``("h",)``.
    """

    def __init__(self) -> None:
        self.segments: list[PathSegment] = []

    def __repr__(self) -> str:
        return f"<PDFPath: {''.join(s[0] for s in self.segments)!r}>"

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def move_to(self, x: float, y: float) -> None:
        self.segments.append(("m", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.segments.append(("l", x, y))

    def curve_to(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None:
        self.segments.append(("c", x1, y1, x2, y2, x3, y3))

    def close(self) -> None:
        self.segments.append(("h",))

    def is_empty(self) -> bool:
        return not self.segments

    def clear(self) -> None:
        self.segments = []

    def take(self) -> list[PathSegment]:
        """Returns the recorded segments and starts a new, empty path."""
        segments = self.segments
        self.segments = []
        return segments

    def get_points(self) -> list[Point]:
        pts: list[Point] = []
        for seg in self.segments:
            coords = seg[1:]
            pts.extend(zip(coords[0::2], coords[1::2]))  # type: ignore[arg-type]
        return pts

    def get_bbox(self) -> Rect | None:
        pts = self.get_points()
        if not pts:
            return None
        return get_bound(pts)
