"""Miscellaneous Routines."""

import math
import struct
from collections.abc import Iterable, Iterator, Sequence
from typing import Union

import charset_normalizer  # For str encoding detection

from pdfvector.pdfexceptions import MalformedMatrix

# from sys import maxint as INF doesn't work anymore under Python3, but PDF
# still uses 32 bits ints
INF = (1 << 31) - 1

Point = tuple[float, float]
Rect = tuple[float, float, float, float]
MatrixTuple = tuple[float, float, float, float, float, float]
PathSegment = Union[
    tuple[str],  # Literal['h']
    tuple[str, float, float],  # Literal['m', 'l']
    tuple[str, float, float, float, float, float, float],
]  # Literal['c']

_FLOAT32 = struct.Struct("f")


def to_float32(value: float) -> float:
    """Rounds a Python float to the nearest IEEE single precision value.

    Values beyond the single precision range saturate to infinity.
    """
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def isnumber(x: object) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


class Matrix:
    """A 2D affine transformation.

    The six components (a, b, c, d, e, f) are kept in a 3x3 row-major array
    whose last column is fixed at (0, 0, 1)::

        a  b  0
        c  d  0
        e  f  1

    Points are row vectors: ``[x' y' 1] = [x y 1] * M``. All components are
    stored with single precision.
    """

    _IDENTITY = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    def __init__(
        self,
        a: float = 1,
        b: float = 0,
        c: float = 0,
        d: float = 1,
        e: float = 0,
        f: float = 0,
    ) -> None:
        self._single = [
            to_float32(a),
            to_float32(b),
            0.0,
            to_float32(c),
            to_float32(d),
            0.0,
            to_float32(e),
            to_float32(f),
            1.0,
        ]

    @classmethod
    def identity(cls) -> "Matrix":
        return cls()

    @classmethod
    def from_components(
        cls, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> "Matrix":
        """Creates a matrix without any validation.

        Degenerate matrices (e.g. a zero scale) are legitimate here; repairing
        them is up to the caller.
        """
        return cls(a, b, c, d, e, f)

    @classmethod
    def from_array(cls, values: object) -> "Matrix":
        """Creates a matrix from a flat array such as a /Matrix entry.

        :raises MalformedMatrix: if the array has fewer than six numbers.
        """
        if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
            raise MalformedMatrix(f"Matrix array required: {values!r}")
        if len(values) < 6:
            raise MalformedMatrix(f"Matrix needs 6 numbers, got {len(values)}")
        components = values[:6]
        if not all(isnumber(v) for v in components):
            raise MalformedMatrix(f"Matrix entries must be numbers: {components!r}")
        return cls(*components)

    @classmethod
    def scale_instance(cls, sx: float, sy: float) -> "Matrix":
        return cls(sx, 0, 0, sy, 0, 0)

    @classmethod
    def translate_instance(cls, tx: float, ty: float) -> "Matrix":
        return cls(1, 0, 0, 1, tx, ty)

    def __repr__(self) -> str:
        return f"<Matrix: {matrix2str(self)}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._single == other._single

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def as_tuple(self) -> MatrixTuple:
        s = self._single
        return s[0], s[1], s[3], s[4], s[6], s[7]

    def copy(self) -> "Matrix":
        clone = Matrix()
        clone._single[:] = self._single
        return clone

    def reset(self) -> None:
        self._single[:] = self._IDENTITY

    def get_value(self, row: int, column: int) -> float:
        return self._single[row * 3 + column]

    def set_value(self, row: int, column: int, value: float) -> None:
        self._single[row * 3 + column] = to_float32(value)

    @property
    def scale_x(self) -> float:
        return self._single[0]

    @property
    def shear_y(self) -> float:
        return self._single[1]

    @property
    def shear_x(self) -> float:
        return self._single[3]

    @property
    def scale_y(self) -> float:
        return self._single[4]

    @property
    def translate_x(self) -> float:
        return self._single[6]

    @property
    def translate_y(self) -> float:
        return self._single[7]

    @property
    def x_scale(self) -> float:
        """Length of the transformed x unit vector.

        Derived from the scale and shear components; not a stored value. For
        an unrotated matrix this is just scale_x.
        """
        (a, b, c, _d, _e, _f) = self.as_tuple()
        if b == 0 and c == 0:
            return a
        return to_float32(math.hypot(a, b))

    @property
    def y_scale(self) -> float:
        """Length of the transformed y unit vector, see x_scale."""
        (_a, b, c, d, _e, _f) = self.as_tuple()
        if b == 0 and c == 0:
            return d
        return to_float32(math.hypot(c, d))

    def extract_scaling(self) -> "Matrix":
        """A new matrix with only the scale components of this one."""
        return Matrix.scale_instance(self.scale_x, self.scale_y)

    def extract_translating(self) -> "Matrix":
        """A new matrix with only the translation components of this one."""
        return Matrix.translate_instance(self.translate_x, self.translate_y)

    def to_array(self) -> list[float]:
        """The six components as a flat array, as in a /Matrix entry."""
        return list(self.as_tuple())

    def multiply(self, other: "Matrix", result: "Matrix | None" = None) -> "Matrix":
        """Returns ``self * other``, stored into result.

        Any of self, other and result may be the same object. Operands that
        share storage with the result are copied first, otherwise writing the
        first product terms would corrupt the later ones.
        """
        if result is None:
            result = Matrix()

        lhs = self._single
        rhs = other._single
        if self is result:
            lhs = list(lhs)
        if other is result:
            rhs = list(rhs)

        out = result._single
        for row in range(3):
            r0, r1, r2 = lhs[row * 3], lhs[row * 3 + 1], lhs[row * 3 + 2]
            for col in range(3):
                out[row * 3 + col] = to_float32(
                    r0 * rhs[col] + r1 * rhs[3 + col] + r2 * rhs[6 + col]
                )
        return result

    def concatenate(self, other: "Matrix") -> None:
        """Premultiplies other into this matrix: ``self = other * self``."""
        other.multiply(self, self)

    def translate(self, tx: float, ty: float) -> None:
        self.concatenate(Matrix.translate_instance(tx, ty))

    def scale(self, sx: float, sy: float) -> None:
        self.concatenate(Matrix.scale_instance(sx, sy))

    def transform_point(self, x: float, y: float) -> Point:
        (a, b, c, d, e, f) = self.as_tuple()
        return to_float32(x * a + y * c + e), to_float32(x * b + y * d + f)

    def transform_vector(self, dx: float, dy: float) -> Point:
        """Like transform_point but without the translation."""
        (a, b, c, d, _e, _f) = self.as_tuple()
        return to_float32(dx * a + dy * c), to_float32(dx * b + dy * d)

    def transform_rect(self, rect: Rect) -> Rect:
        """Applies the matrix to a rectangle.

        The result is not a rotated rectangle, but the axis-aligned rectangle
        that tightly fits the transformed corners.
        """
        (x0, y0, x1, y1) = rect
        return get_bound(
            self.transform_point(x, y)
            for (x, y) in ((x0, y0), (x1, y0), (x1, y1), (x0, y1))
        )


def get_bound(pts: Iterable[Point]) -> Rect:
    """Compute a minimal rectangle that covers all the points."""
    limit: Rect = (INF, INF, -INF, -INF)
    (x0, y0, x1, y1) = limit
    for x, y in pts:
        x0 = min(x0, x)
        y0 = min(y0, y)
        x1 = max(x1, x)
        y1 = max(y1, y)
    return x0, y0, x1, y1


def make_compat_str(o: object) -> str:
    """Converts everything to string, if bytes guessing the encoding."""
    if isinstance(o, bytes):
        enc = charset_normalizer.detect(o)
        if enc["encoding"] is None:
            return str(o)
        try:
            return o.decode(enc["encoding"])
        except (UnicodeDecodeError, LookupError):
            return str(o)
    else:
        return str(o)


def shorten_str(s: str, size: int) -> str:
    if size < 7:
        return s[:size]
    if len(s) > size:
        length = (size - 5) // 2
        return f"{s[:length]} ... {s[-length:]}"
    else:
        return s


def bbox2str(bbox: Rect) -> str:
    (x0, y0, x1, y1) = bbox
    return f"{x0:.3f},{y0:.3f},{x1:.3f},{y1:.3f}"


def matrix2str(m: Matrix | MatrixTuple) -> str:
    (a, b, c, d, e, f) = m
    return f"[{a:.2f},{b:.2f},{c:.2f},{d:.2f}, ({e:.2f},{f:.2f})]"
