"""Tiling and shading patterns.

A pattern's /Matrix maps pattern space into the default coordinate space of
the page (or form) that uses it. Only the pattern-space side lives here:
painting the pattern cell is the rasterizer's job.
"""

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from pdfvector import settings
from pdfvector.casting import safe_float, safe_int, safe_rect_list
from pdfvector.pdfexceptions import MalformedMatrix, PDFValueError
from pdfvector.pdftypes import dict_value, resolve1
from pdfvector.utils import Matrix, Rect

log = logging.getLogger(__name__)


def repair_pattern_matrix(matrix: Matrix) -> Matrix:
    """Repairs a degenerate pattern matrix in place and returns it.

    Some producers write patterns whose scale factors are zero but which
    other viewers still render; the rules below reproduce that output. A
    zero scale takes over the shear on the other axis, and a scale that is
    still zero afterwards becomes 1. The order of the steps matters: the
    fallback must not undo a successful promotion.
    """
    if matrix.scale_x == 0:
        matrix.set_value(0, 0, matrix.shear_x)
        matrix.set_value(1, 0, 0)
    if matrix.scale_y == 0:
        matrix.set_value(1, 1, matrix.shear_y)
        matrix.set_value(0, 1, 0)
    if matrix.scale_x == 0:
        matrix.set_value(0, 0, 1)
    if matrix.scale_y == 0:
        matrix.set_value(1, 1, 1)
    return matrix


class PDFPattern:
    """Base class of the pattern dictionaries."""

    TILING: ClassVar[int] = 1
    SHADING: ClassVar[int] = 2

    pattern_type: ClassVar[int] = 0

    def __init__(self, spec: object, name: str | None = None) -> None:
        self.spec = spec
        self.attrs = dict_value(spec)
        self.name = name
        self._matrix: Matrix | None = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: name={self.name!r}>"

    @property
    def matrix(self) -> Matrix:
        """The repaired pattern matrix, resolved on first access."""
        if self._matrix is None:
            self._matrix = self._resolve_matrix()
        return self._matrix

    def _resolve_matrix(self) -> Matrix:
        array = resolve1(self.attrs.get("Matrix"))
        if array is None:
            return Matrix.identity()
        try:
            matrix = Matrix.from_array(array)
        except MalformedMatrix:
            if settings.STRICT:
                raise
            log.warning(
                "Ignoring malformed /Matrix %r of pattern %r", array, self.name
            )
            return Matrix.identity()
        original = matrix.as_tuple()
        repair_pattern_matrix(matrix)
        if matrix.as_tuple() != original:
            log.debug(
                "Repaired degenerate pattern matrix %r -> %r", original, matrix
            )
        return matrix

    def to_device_matrix(self, base_ctm: Matrix) -> Matrix:
        """Composes the pattern matrix with the CTM of the pattern's parent.

        base_ctm is the CTM in effect when the page or form using the pattern
        started, not the CTM at the time the pattern is painted.
        """
        return self.matrix.multiply(base_ctm)


class PDFTilingPattern(PDFPattern):
    PAINT_COLORED: ClassVar[int] = 1
    PAINT_UNCOLORED: ClassVar[int] = 2

    TILING_CONSTANT_SPACING: ClassVar[int] = 1
    TILING_NO_DISTORTION: ClassVar[int] = 2
    TILING_CONSTANT_SPACING_FASTER_TILING: ClassVar[int] = 3

    pattern_type = PDFPattern.TILING

    def __init__(self, spec: object, name: str | None = None) -> None:
        super().__init__(spec, name)
        self.paint_type = safe_int(resolve1(self.attrs.get("PaintType"))) or 0
        self.tiling_type = safe_int(resolve1(self.attrs.get("TilingType"))) or 0
        if self.tiling_type not in (
            self.TILING_CONSTANT_SPACING,
            self.TILING_NO_DISTORTION,
            self.TILING_CONSTANT_SPACING_FASTER_TILING,
        ):
            if settings.STRICT:
                raise PDFValueError(f"Invalid TilingType: {self.tiling_type!r}")
            log.warning(
                "Pattern %r has invalid TilingType %r", name, self.tiling_type
            )
        self.xstep = safe_float(resolve1(self.attrs.get("XStep"))) or 0.0
        self.ystep = safe_float(resolve1(self.attrs.get("YStep"))) or 0.0
        self.bbox: Rect | None = safe_rect_list(resolve1(self.attrs.get("BBox")))
        resources = resolve1(self.attrs.get("Resources"))
        self.resources: Mapping[str, Any] | None = (
            dict_value(resources) if resources is not None else None
        )

    def __repr__(self) -> str:
        return (
            f"<PDFTilingPattern: name={self.name!r}, "
            f"paint_type={self.paint_type!r}, "
            f"xstep={self.xstep!r}, "
            f"ystep={self.ystep!r}, "
            f"bbox={self.bbox!r}>"
        )

    def is_colored(self) -> bool:
        return self.paint_type == self.PAINT_COLORED

    def get_device_bbox(self, base_ctm: Matrix) -> Rect | None:
        """The pattern cell's bounding box in device space."""
        if self.bbox is None:
            return None
        return self.to_device_matrix(base_ctm).transform_rect(self.bbox)


class PDFShadingPattern(PDFPattern):
    pattern_type = PDFPattern.SHADING

    def __init__(self, spec: object, name: str | None = None) -> None:
        super().__init__(spec, name)
        self.shading = resolve1(self.attrs.get("Shading"))
        self.extgstate = resolve1(self.attrs.get("ExtGState"))


def get_pattern(spec: object, name: str | None = None) -> PDFPattern:
    """Creates the pattern object matching the /PatternType of spec."""
    attrs = dict_value(spec)
    pattern_type = safe_int(resolve1(attrs.get("PatternType")))
    if pattern_type == PDFPattern.SHADING:
        return PDFShadingPattern(spec, name)
    if pattern_type != PDFPattern.TILING:
        if settings.STRICT:
            raise PDFValueError(f"Invalid PatternType: {pattern_type!r}")
        log.warning("Pattern %r has invalid PatternType %r", name, pattern_type)
    return PDFTilingPattern(spec, name)
