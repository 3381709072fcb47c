from atheris import FuzzedDataProvider

from pdfvector.pdfoperator import PDFOperator
from pdfvector.pstypes import LIT

NAMES = ["P0", "Sh0", "Fm0", "GS0", "Pattern", "DeviceRGB", "DeviceCMYK", "OC"]


class PdfvectorFuzzedDataProvider(FuzzedDataProvider):  # type: ignore[misc]
    def ConsumeRandomBytes(self) -> bytes:
        int_range = self.ConsumeIntInRange(0, self.remaining_bytes())
        return bytes(self.ConsumeBytes(int_range))

    def ConsumeName(self) -> object:
        if self.ConsumeBool():
            return LIT(self.PickValueInList(NAMES))
        return LIT(self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(0, 8)))

    def ConsumeOperand(self, depth: int = 0) -> object:
        kind = self.ConsumeIntInRange(0, 5)
        if kind == 0:
            return self.ConsumeIntInRange(-1000, 1000)
        elif kind == 1:
            return self.ConsumeRegularFloat()
        elif kind == 2:
            return self.ConsumeName()
        elif kind == 3:
            return bytes(self.ConsumeBytes(self.ConsumeIntInRange(0, 8)))
        elif kind == 4 and depth < 2:
            count = self.ConsumeIntInRange(0, 6)
            return [self.ConsumeOperand(depth + 1) for _ in range(count)]
        elif depth < 2:
            return {
                self.PickValueInList(NAMES): self.ConsumeOperand(depth + 1)
                for _ in range(self.ConsumeIntInRange(0, 3))
            }
        return None

    def ConsumeOperator(self, names: list[str]) -> PDFOperator:
        if self.ConsumeProbability() < 0.9:
            name = self.PickValueInList(names)
        else:
            name = self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(1, 3))
        count = self.ConsumeIntInRange(0, 7)
        return PDFOperator(name, [self.ConsumeOperand() for _ in range(count)])

    def ConsumeOperatorList(
        self, names: list[str], max_count: int
    ) -> list[PDFOperator]:
        count = self.ConsumeIntInRange(0, max_count)
        return [self.ConsumeOperator(names) for _ in range(count)]
