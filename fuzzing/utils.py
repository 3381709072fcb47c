"""Utilities shared across the various content stream fuzzing harnesses"""

import logging
from typing import Any

import atheris

from fuzzing.fuzzed_data_provider import PdfvectorFuzzedDataProvider
from pdfvector.pdfinterp import PDFPageInterpreter
from pdfvector.pdfoperator import PDFOperator
from pdfvector.pdftypes import PDFStream
from pdfvector.pstypes import KWD, LIT

OPERATOR_NAMES = sorted(
    set(PDFPageInterpreter.get_handlers()) | PDFPageInterpreter.IGNORED_OPERATORS
)


def to_tokens(operators: list[PDFOperator]) -> list[object]:
    """Flattens operators back into the token sequence of a stream."""
    tokens: list[object] = []
    for op in operators:
        tokens.extend(op.operands)
        tokens.append(KWD(op.name.encode()))
    return tokens


def prepare_pdfvector_fuzzing() -> None:
    """Used to disable logging of the pdfvector module"""
    logging.getLogger("pdfvector").setLevel(logging.CRITICAL)


@atheris.instrument_func  # type: ignore[misc]
def generate_resources(fdp: PdfvectorFuzzedDataProvider) -> dict[str, Any]:
    """Resources that the generated operators can refer to by name."""
    form = PDFStream(
        {
            "Subtype": LIT("Form"),
            "BBox": [fdp.ConsumeOperand() for _ in range(4)],
            "Matrix": [fdp.ConsumeOperand() for _ in range(6)],
        },
        to_tokens(fdp.ConsumeOperatorList(OPERATOR_NAMES, 20)),
    )
    resources: dict[str, Any] = {
        "XObject": {"Fm0": form},
        "Shading": {"Sh0": {"ShadingType": 2, "BBox": fdp.ConsumeOperand()}},
        "Pattern": {
            "P0": {
                "PatternType": fdp.ConsumeIntInRange(0, 3),
                "PaintType": fdp.ConsumeIntInRange(0, 3),
                "TilingType": fdp.ConsumeIntInRange(0, 4),
                "Matrix": fdp.ConsumeOperand(),
                "BBox": fdp.ConsumeOperand(),
            }
        },
        "ExtGState": {"GS0": fdp.ConsumeOperand()},
        "ColorSpace": {"CS0": fdp.ConsumeName()},
    }
    if fdp.ConsumeBool():
        # let the form refer to itself
        form.attrs["Resources"] = resources
    return resources


@atheris.instrument_func  # type: ignore[misc]
def generate_page(fdp: PdfvectorFuzzedDataProvider) -> dict[str, Any]:
    page: dict[str, Any] = {
        "MediaBox": [fdp.ConsumeOperand() for _ in range(4)],
        "Rotate": fdp.ConsumeOperand(),
        "Resources": generate_resources(fdp),
    }
    if fdp.ConsumeBool():
        page = {"Parent": page}
    return page
