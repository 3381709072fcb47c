#!/usr/bin/env python3
import sys

import atheris

from fuzzing.fuzzed_data_provider import PdfvectorFuzzedDataProvider

with atheris.instrument_imports():
    from fuzzing.utils import (
        OPERATOR_NAMES,
        generate_page,
        prepare_pdfvector_fuzzing,
    )
    from pdfvector.converter import PDFPathAggregator
    from pdfvector.pdfinterp import PDFPageInterpreter, PDFResourceManager


def fuzz_one_input(data: bytes) -> None:
    fdp = PdfvectorFuzzedDataProvider(data)

    page = generate_page(fdp)
    operators = fdp.ConsumeOperatorList(OPERATOR_NAMES, 200)
    device = PDFPathAggregator()
    interpreter = PDFPageInterpreter(PDFResourceManager(), device)
    # Recoverable errors are reported in the result, anything raised is a bug
    result = interpreter.process_page(page, operators)
    assert result.completed
    device.get_result()


if __name__ == "__main__":
    prepare_pdfvector_fuzzing()
    atheris.Setup(sys.argv, fuzz_one_input)
    atheris.Fuzz()
