from collections.abc import Callable, Sequence
from typing import Any

import pytest

from pdfvector.pdfdevice import PDFDevice
from pdfvector.pdfinterp import (
    PDFInterpretResult,
    PDFPageInterpreter,
    PDFResourceManager,
)
from pdfvector.pdfoperator import PDFOperator, iter_operators
from pdfvector.pdfstate import PDFGraphicState
from pdfvector.pstypes import KWD, LIT, PSLiteral
from pdfvector.utils import Matrix, PathSegment, Rect


def _tokenize(source: str) -> list[object]:
    """Splits a content stream written with spaces between all tokens.

    Good enough for tests: "[" and "]" must be separate words and strings
    may not contain spaces.
    """
    stack: list[list[object]] = [[]]
    for word in source.split():
        if word == "[":
            stack.append([])
        elif word == "]":
            array = stack.pop()
            stack[-1].append(array)
        elif word.startswith("/"):
            stack[-1].append(LIT(word[1:]))
        elif word.startswith("("):
            stack[-1].append(word[1:-1].encode())
        else:
            value: object
            try:
                value = int(word)
            except ValueError:
                try:
                    value = float(word)
                except ValueError:
                    value = KWD(word.encode())
            stack[-1].append(value)
    assert len(stack) == 1, "unbalanced brackets"
    return stack[0]


class RecordingDevice(PDFDevice):
    def __init__(self) -> None:
        PDFDevice.__init__(self)
        self.ctms: list[Matrix] = []
        self.pages: list[tuple[object, Matrix]] = []
        self.painted: list[
            tuple[bool, bool, bool, list[PathSegment], PDFGraphicState]
        ] = []
        self.figures: list[tuple[str, Rect, Matrix]] = []
        self.tags: list[tuple[str, PSLiteral | None, object]] = []
        self.shadings: list[tuple[str, Any, Matrix]] = []

    def set_ctm(self, ctm: Matrix) -> None:
        PDFDevice.set_ctm(self, ctm)
        self.ctms.append(ctm)

    def paint_path(
        self,
        graphicstate: PDFGraphicState,
        stroke: bool,
        fill: bool,
        evenodd: bool,
        path: Sequence[PathSegment],
    ) -> None:
        self.painted.append((stroke, fill, evenodd, list(path), graphicstate.copy()))

    def begin_page(self, page: object, ctm: Matrix) -> None:
        self.pages.append((page, ctm))

    def begin_figure(self, name: str, bbox: Rect, matrix: Matrix) -> None:
        self.figures.append((name, bbox, matrix))

    def begin_tag(self, tag: PSLiteral, props: object | None = None) -> None:
        self.tags.append(("begin", tag, props))

    def end_tag(self) -> None:
        self.tags.append(("end", None, None))

    def do_tag(self, tag: PSLiteral, props: object | None = None) -> None:
        self.tags.append(("point", tag, props))

    def paint_shading(self, name: str, shading: Any, ctm: Matrix) -> None:
        self.shadings.append((name, shading, ctm))


@pytest.fixture
def tokenize() -> Callable[[str], list[object]]:
    return _tokenize


@pytest.fixture
def parse() -> Callable[[str], list[PDFOperator]]:
    def parse(source: str) -> list[PDFOperator]:
        return list(iter_operators(_tokenize(source)))

    return parse


@pytest.fixture
def device() -> RecordingDevice:
    return RecordingDevice()


@pytest.fixture
def interpreter(device: RecordingDevice) -> PDFPageInterpreter:
    return PDFPageInterpreter(PDFResourceManager(), device)


@pytest.fixture
def run(
    interpreter: PDFPageInterpreter, parse: Callable[[str], list[PDFOperator]]
) -> Callable[..., PDFInterpretResult]:
    """Interprets a content stream from the identity CTM."""

    def run(
        source: str,
        resources: dict[str, Any] | None = None,
        ctm: Matrix | None = None,
    ) -> PDFInterpretResult:
        return interpreter.render_contents(resources or {}, parse(source), ctm)

    return run


@pytest.fixture
def strict(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pdfvector.settings.STRICT", True)
