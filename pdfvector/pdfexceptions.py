class PDFException(Exception):
    """Base class for all pdfvector exceptions."""


class PDFTypeError(PDFException, TypeError):
    pass


class PDFValueError(PDFException, ValueError):
    pass


class PDFEOFError(PDFException, EOFError):
    """Raised by an operand source when the content stream is exhausted."""


class PDFIOError(PDFException, IOError):
    """Raised when the underlying byte resource fails."""


class PDFInterpreterError(PDFException):
    """Base class for errors the interpreter recovers from.

    Each of these affects a single operator only: the operator is reported
    and skipped, and interpretation continues with the next one.
    """


class OperandCountMismatch(PDFInterpreterError):
    pass


class OperandTypeMismatch(PDFInterpreterError):
    pass


class NoCurrentPoint(PDFInterpreterError):
    pass


class MalformedMatrix(PDFInterpreterError, PDFValueError):
    pass


class UnknownOperator(PDFInterpreterError):
    pass


class StackUnderflow(PDFInterpreterError):
    pass
