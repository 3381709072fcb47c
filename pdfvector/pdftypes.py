import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pdfvector import settings
from pdfvector.pdfexceptions import PDFTypeError
from pdfvector.pdfoperator import PDFOperator, iter_operators
from pdfvector.pstypes import PSLiteral, literal_name

log = logging.getLogger(__name__)

# Longest Parent chain followed when looking up inheritable attributes.
MAX_INHERITANCE_DEPTH = 64


class PDFStream:
    """A stream object: a dictionary plus its already tokenized content.

    Form XObjects and tiling patterns are streams. The tokens are the flat
    operand/operator sequence produced by the tokenizer.
    """

    def __init__(
        self,
        attrs: Mapping[str, Any],
        tokens: Iterable[object] = (),
        objid: int | None = None,
    ) -> None:
        self.attrs = dict(attrs)
        self.tokens = tokens
        self.objid = objid

    def __repr__(self) -> str:
        return f"<PDFStream({self.objid!r}): {self.attrs!r}>"

    def __contains__(self, name: object) -> bool:
        return name in self.attrs

    def __getitem__(self, name: str) -> Any:
        return self.attrs[name]

    def get(self, name: str, default: object = None) -> Any:
        return self.attrs.get(name, default)

    def get_operators(self) -> Iterator[PDFOperator]:
        return iter_operators(self.tokens)


def resolve1(x: object, default: object = None) -> Any:
    """Resolves an indirect object.

    Indirect references come from the object model and only need to
    provide a ``resolve(default)`` method.
    """
    depth = 0
    while hasattr(x, "resolve"):
        depth += 1
        if depth > MAX_INHERITANCE_DEPTH:
            return default
        x = x.resolve(default=default)
    return x


def dict_value(x: object) -> Mapping[str, Any]:
    x = resolve1(x)
    if isinstance(x, PDFStream):
        return x.attrs
    if not isinstance(x, Mapping):
        if settings.STRICT:
            raise PDFTypeError(f"Dict required: {x!r}")
        return {}
    return x


def list_value(x: object) -> list[Any] | tuple[Any, ...]:
    x = resolve1(x)
    if not isinstance(x, (list, tuple)):
        if settings.STRICT:
            raise PDFTypeError(f"List required: {x!r}")
        return []
    return x


def name_value(x: object) -> str | None:
    """Returns the name of a name object, also accepting plain strings."""
    x = resolve1(x)
    if isinstance(x, PSLiteral):
        return literal_name(x)
    if isinstance(x, str):
        return x
    return None


def get_inheritable(obj: object, key: str, parent_key: str = "Parent") -> Any:
    """Looks up key on obj, then on its ancestors.

    The Parent chain of a malformed document may contain cycles, so the walk
    stops at an object it has already visited or after
    MAX_INHERITANCE_DEPTH steps. Returns None if the key is not found.
    """
    visited: set[int] = set()
    node: object = resolve1(obj)
    for _ in range(MAX_INHERITANCE_DEPTH):
        if node is None:
            break
        if id(node) in visited:
            log.warning("Circular Parent reference while looking up %r", key)
            break
        visited.add(id(node))
        attrs = dict_value(node)
        if key in attrs:
            return resolve1(attrs[key])
        node = resolve1(attrs.get(parent_key))
    else:
        log.warning("Parent chain too deep while looking up %r", key)
    return None
