import logging

import pytest

from pdfvector.pdfexceptions import OperandCountMismatch, OperandTypeMismatch
from pdfvector.pdfoperator import (
    ARRAY,
    COLOR_COMPONENT,
    INTEGER,
    NAME,
    NAME_OR_DICTIONARY,
    NUMBER,
    PDFOperator,
    check_operands,
    iter_operators,
    operands,
)
from pdfvector.pstypes import KWD, LIT


class TestPDFOperator:
    def test_name_from_keyword(self):
        op = PDFOperator(KWD(b"f*"), [])
        assert op.name == "f*"

    def test_equality(self):
        assert PDFOperator("m", [1, 2]) == PDFOperator(KWD(b"m"), [1, 2])
        assert PDFOperator("m", [1, 2]) != PDFOperator("l", [1, 2])

    def test_repr_shows_operands_and_name(self):
        assert repr(PDFOperator("m", [1, 2])) == "<PDFOperator: 1 2 m>"


class TestCheckOperands:
    def test_converts_numbers_to_float(self):
        values = check_operands(PDFOperator("m", [1, 2.5]), [NUMBER, NUMBER])
        assert values == [1.0, 2.5]
        assert all(isinstance(v, float) for v in values)

    @pytest.mark.parametrize("args", [[], [1], [1, 2, 3]])
    def test_wrong_count(self, args):
        with pytest.raises(OperandCountMismatch):
            check_operands(PDFOperator("m", args), [NUMBER, NUMBER])

    @pytest.mark.parametrize(
        "args",
        [
            [LIT("a"), 2],
            [b"1", 2],
            [True, 2],
            [None, 2],
            [[1], 2],
        ],
    )
    def test_wrong_type(self, args):
        with pytest.raises(OperandTypeMismatch):
            check_operands(PDFOperator("m", args), [NUMBER, NUMBER])

    def test_number_out_of_float_range(self):
        with pytest.raises(OperandTypeMismatch):
            check_operands(PDFOperator("w", [2**1024]), [NUMBER])

    @pytest.mark.parametrize(("arg", "ok"), [(1, True), (2.0, True), (1.5, False)])
    def test_integer(self, arg, ok):
        op = PDFOperator("J", [arg])
        if ok:
            assert check_operands(op, [INTEGER]) == [int(arg)]
        else:
            with pytest.raises(OperandTypeMismatch):
                check_operands(op, [INTEGER])

    def test_rest_accepts_any_number_of_extra_operands(self):
        op = PDFOperator("sc", [0.1, 0.2, 0.3])
        assert check_operands(op, [NUMBER], NUMBER) == [0.1, 0.2, 0.3]

    def test_rest_still_requires_fixed_operands(self):
        with pytest.raises(OperandCountMismatch):
            check_operands(PDFOperator("sc", []), [NUMBER], NUMBER)

    def test_rest_checks_types(self):
        with pytest.raises(OperandTypeMismatch):
            check_operands(PDFOperator("sc", [0.1, LIT("P0")]), [NUMBER], NUMBER)

    def test_color_component_keeps_names(self):
        values = check_operands(
            PDFOperator("scn", [1, LIT("P0")]), [COLOR_COMPONENT], COLOR_COMPONENT
        )
        assert values == [1.0, LIT("P0")]

    def test_other_kinds(self):
        op = PDFOperator("BDC", [LIT("Span"), {"MCID": 0}])
        assert check_operands(op, [NAME, NAME_OR_DICTIONARY]) == [
            LIT("Span"),
            {"MCID": 0},
        ]
        assert check_operands(PDFOperator("d", [[1, 2], 0]), [ARRAY, NUMBER]) == [
            [1, 2],
            0.0,
        ]


def test_operands_decorator_records_kinds():
    @operands(NUMBER, rest=NAME)
    def handler(*args):
        pass

    assert handler.operand_kinds == (NUMBER,)
    assert handler.operand_rest is NAME


class TestIterOperators:
    def test_groups_operands_by_keyword(self):
        tokens = [0, 0, KWD(b"m"), 10, 10, KWD(b"l"), KWD(b"S")]
        assert list(iter_operators(tokens)) == [
            PDFOperator("m", [0, 0]),
            PDFOperator("l", [10, 10]),
            PDFOperator("S", []),
        ]

    def test_dangling_operands_are_dropped(self, caplog):
        tokens = [1, KWD(b"w"), 2, 3]
        with caplog.at_level(logging.WARNING, logger="pdfvector"):
            ops = list(iter_operators(tokens))
        assert ops == [PDFOperator("w", [1])]
        assert "without operator" in caplog.text

    def test_is_lazy(self):
        def tokens():
            yield 1
            yield KWD(b"w")
            raise AssertionError("read too far")

        first = next(iter_operators(tokens()))
        assert first == PDFOperator("w", [1])
