from typing import TYPE_CHECKING, Union

from pdfvector.pdfpath import PDFPathSink
from pdfvector.utils import Matrix, PathSegment, Point

if TYPE_CHECKING:
    from pdfvector.pdfpattern import PDFPattern

# Colors are stored as given by the content stream, without conversion.
Color = Union[
    float,  # Greyscale
    tuple[float, ...],  # RGB, CMYK or any other component list
    str,  # Pattern name (colored pattern, PaintType=1)
    tuple[tuple[float, ...], str],  # (components, pattern name), PaintType=2
]

ClipPath = tuple[tuple[PathSegment, ...], bool]  # (segments, evenodd)


class PDFGraphicState:
    """One entry of the graphics state stack.

    The CTM and the current point belong to this state. The path does not:
    all states of one interpretation share the same path object, so a path
    built inside ``q ... Q`` survives the restore.
    """

    def __init__(self, ctm: Matrix, path: PDFPathSink) -> None:
        self.ctm = ctm
        self.path = path
        # both in device space, None until a subpath is started
        self.current_point: Point | None = None
        self.subpath_start: Point | None = None

        self.linewidth: float = 1
        self.linecap: int = 0
        self.linejoin: int = 0
        self.miterlimit: float = 10
        self.dash: tuple[list[float], float] = ([], 0)
        self.intent: str | None = None
        self.flatness: float = 0

        # stroking color
        self.scolor: Color = 0
        self.scs: str = "DeviceGray"
        self.spattern: "PDFPattern | None" = None

        # non stroking color
        self.ncolor: Color = 0
        self.ncs: str = "DeviceGray"
        self.npattern: "PDFPattern | None" = None

        # clipping paths intersected in this scope, in device space
        self.clips: list[ClipPath] = []

    def copy(self) -> "PDFGraphicState":
        obj = PDFGraphicState(self.ctm.copy(), self.path)
        obj.current_point = self.current_point
        obj.subpath_start = self.subpath_start
        obj.linewidth = self.linewidth
        obj.linecap = self.linecap
        obj.linejoin = self.linejoin
        obj.miterlimit = self.miterlimit
        obj.dash = (list(self.dash[0]), self.dash[1])
        obj.intent = self.intent
        obj.flatness = self.flatness
        obj.scolor = self.scolor
        obj.scs = self.scs
        obj.spattern = self.spattern
        obj.ncolor = self.ncolor
        obj.ncs = self.ncs
        obj.npattern = self.npattern
        obj.clips = list(self.clips)
        return obj

    def __repr__(self) -> str:
        return (
            f"<PDFGraphicState: "
            f"ctm={self.ctm!r}, "
            f"current_point={self.current_point!r}, "
            f"linewidth={self.linewidth!r}, "
            f"linecap={self.linecap!r}, "
            f"linejoin={self.linejoin!r}, "
            f"miterlimit={self.miterlimit!r}, "
            f"dash={self.dash!r}, "
            f"intent={self.intent!r}, "
            f"flatness={self.flatness!r}, "
            f"stroking color={self.scolor!r}, "
            f"non stroking color={self.ncolor!r}>"
        )


class PDFStateStack:
    """The q/Q save and restore stack.

    The stack is never empty: its bottom entry is the state seeded from the
    base CTM of the page, form or pattern being interpreted.
    """

    def __init__(self, ctm: Matrix, path: PDFPathSink) -> None:
        self.base_ctm = ctm.copy()
        self._states = [PDFGraphicState(ctm.copy(), path)]

    def __repr__(self) -> str:
        return f"<PDFStateStack: depth={self.depth}, current={self.current!r}>"

    def __len__(self) -> int:
        return len(self._states)

    @property
    def depth(self) -> int:
        return len(self._states)

    @property
    def current(self) -> PDFGraphicState:
        return self._states[-1]

    def push(self) -> None:
        self._states.append(self.current.copy())

    def pop(self) -> bool:
        """Restores the previous state.

        Returns False, leaving the stack untouched, when only the base state
        is left; reporting the unbalanced Q is up to the caller.
        """
        if len(self._states) == 1:
            return False
        self._states.pop()
        return True

    def current_ctm(self) -> Matrix:
        return self.current.ctm

    def set_ctm(self, ctm: Matrix) -> None:
        self.current.ctm = ctm.copy()

    def concatenate_ctm(self, delta: Matrix) -> None:
        """Applies the cm operator: ``ctm = delta * ctm``."""
        self.current.ctm.concatenate(delta)

    def current_point(self) -> Point | None:
        return self.current.current_point

    def set_current_point(self, x: float, y: float) -> None:
        self.current.current_point = (x, y)

    def clear_current_point(self, all_frames: bool = False) -> None:
        """Forgets the current point of the active state.

        With all_frames, saved states lose theirs as well; used once the
        shared path has been consumed, so that no state refers to a subpath
        that no longer exists.
        """
        for state in self._states if all_frames else [self.current]:
            state.current_point = None
            state.subpath_start = None

    def to_device_space(self, x: float, y: float) -> Point:
        """Maps a point from the content stream's space to device space."""
        return self.current.ctm.transform_point(x, y)
