from typing import Any, Generic, TypeVar, Union

from pdfvector import settings
from pdfvector.pdfexceptions import PDFTypeError


class PSObject:
    """Base class for the symbolic operand types of a content stream."""


class PSLiteral(PSObject):
    """A PDF name object, such as the "/P0" in "/P0 scn".

    Names are case sensitive. Do not create an instance of PSLiteral
    directly, always use LIT() so that names can be compared with "is".
    """

    NameType = Union[str, bytes]

    def __init__(self, name: NameType) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"/{self.name!r}"


class PSKeyword(PSObject):
    """A bare word in a content stream, i.e. an operator mnemonic.

    Do not create an instance of PSKeyword directly, always use KWD().
    """

    def __init__(self, name: bytes) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"/{self.name!r}"


_SymbolT = TypeVar("_SymbolT", PSLiteral, PSKeyword)


class PSSymbolTable(Generic[_SymbolT]):
    """Interns PSLiteral/PSKeyword objects by name.

    Interned objects can be checked for identity with the "is" operator.
    """

    def __init__(self, klass: type[_SymbolT]) -> None:
        self.dict: dict[PSLiteral.NameType, _SymbolT] = {}
        self.klass: type[_SymbolT] = klass

    def intern(self, name: PSLiteral.NameType) -> _SymbolT:
        if name in self.dict:
            lit = self.dict[name]
        else:
            # PSKeyword always takes bytes, PSLiteral takes either
            lit = self.klass(name)  # type: ignore[arg-type]
            self.dict[name] = lit
        return lit


PSLiteralTable = PSSymbolTable(PSLiteral)
PSKeywordTable = PSSymbolTable(PSKeyword)
LIT = PSLiteralTable.intern
KWD = PSKeywordTable.intern


def literal_name(x: Any) -> str:
    if isinstance(x, PSLiteral):
        if isinstance(x.name, str):
            return x.name
        try:
            return str(x.name, "utf-8")
        except UnicodeDecodeError:
            return str(x.name)
    else:
        if settings.STRICT:
            raise PDFTypeError(f"Literal required: {x!r}")
        return str(x)


def keyword_name(x: Any) -> str:
    if isinstance(x, PSKeyword):
        return str(x.name, "utf-8", "ignore")
    if isinstance(x, str):
        return x
    if settings.STRICT:
        raise PDFTypeError(f"Keyword required: {x!r}")
    return str(x)
