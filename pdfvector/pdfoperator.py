import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, TypeVar

from pdfvector.casting import safe_float
from pdfvector.pdfexceptions import OperandCountMismatch, OperandTypeMismatch
from pdfvector.pstypes import PSKeyword, PSLiteral, keyword_name
from pdfvector.utils import isnumber, make_compat_str, shorten_str

log = logging.getLogger(__name__)


class PDFOperator:
    """One content-stream operator together with its operands.

    The operands are already decoded: numbers, names (PSLiteral), strings
    (bytes), arrays (list) and dictionaries (dict).
    """

    def __init__(self, name: str | PSKeyword, operands: Sequence[object] = ()) -> None:
        self.name = keyword_name(name)
        self.operands = list(operands)

    def __repr__(self) -> str:
        parts = [shorten_str(make_compat_str(x), 40) for x in self.operands]
        parts.append(self.name)
        return f"<PDFOperator: {' '.join(parts)}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PDFOperator):
            return NotImplemented
        return self.name == other.name and self.operands == other.operands

    __hash__ = None  # type: ignore[assignment]


class OperandKind:
    """A named operand type with a conversion to the handler's value."""

    def __init__(
        self,
        name: str,
        accepts: Callable[[object], bool],
        convert: Callable[[Any], Any] = lambda x: x,
    ) -> None:
        self.name = name
        self.accepts = accepts
        self.convert = convert

    def __repr__(self) -> str:
        return f"<OperandKind: {self.name}>"


def _to_float(x: Any) -> float:
    value = safe_float(x)
    if value is None:
        raise OperandTypeMismatch(f"Number out of range: {x!r}")
    return value


NUMBER = OperandKind("number", isnumber, _to_float)
INTEGER = OperandKind(
    "integer",
    lambda x: isnumber(x) and (isinstance(x, int) or x.is_integer()),
    int,
)
NAME = OperandKind("name", lambda x: isinstance(x, PSLiteral))
ARRAY = OperandKind("array", lambda x: isinstance(x, list))
NAME_OR_DICTIONARY = OperandKind(
    "name or dictionary", lambda x: isinstance(x, (PSLiteral, dict))
)
COLOR_COMPONENT = OperandKind(
    "number or name",
    lambda x: isnumber(x) or isinstance(x, PSLiteral),
    lambda x: x if isinstance(x, PSLiteral) else _to_float(x),
)


_HandlerT = TypeVar("_HandlerT", bound=Callable[..., Any])


def operands(
    *kinds: OperandKind, rest: OperandKind | None = None
) -> Callable[[_HandlerT], _HandlerT]:
    """Declares the operands an operator handler takes.

    ``kinds`` are the exact positional operands; if ``rest`` is given, any
    number of further operands of that kind are accepted as well.
    """

    def decorator(func: _HandlerT) -> _HandlerT:
        func.operand_kinds = kinds  # type: ignore[attr-defined]
        func.operand_rest = rest  # type: ignore[attr-defined]
        return func

    return decorator


def check_operands(
    op: PDFOperator,
    kinds: Sequence[OperandKind],
    rest: OperandKind | None = None,
) -> list[Any]:
    """Validates the operands of op and returns their converted values.

    :raises OperandCountMismatch: if the number of operands is wrong.
    :raises OperandTypeMismatch: if an operand has the wrong type.
    """
    args = op.operands
    if len(args) < len(kinds) or (rest is None and len(args) != len(kinds)):
        expected = f"{len(kinds)}" if rest is None else f"at least {len(kinds)}"
        raise OperandCountMismatch(
            f"Operator {op.name!r} takes {expected} operands, got {len(args)}"
        )
    values = []
    for i, arg in enumerate(args):
        kind = kinds[i] if i < len(kinds) else rest
        assert kind is not None
        if not kind.accepts(arg):
            raise OperandTypeMismatch(
                f"Operand {i} of {op.name!r} must be a {kind.name}, got {arg!r}"
            )
        values.append(kind.convert(arg))
    return values


def iter_operators(tokens: Iterable[object]) -> Iterator[PDFOperator]:
    """Groups a flat token sequence into operators.

    Every PSKeyword ends an operator and takes all the operands seen since
    the previous one. Operands left over at the end of the stream are
    dropped.
    """
    argstack: list[object] = []
    for token in tokens:
        if isinstance(token, PSKeyword):
            yield PDFOperator(token, argstack)
            argstack = []
        else:
            argstack.append(token)
    if argstack:
        log.warning(
            "Ignoring %d operands without operator at end of stream", len(argstack)
        )
