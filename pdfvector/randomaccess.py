"""Random-access byte resources for content streams kept on disk.

Several streams of one document (a page and the forms or patterns it uses)
may read from the same file handle. Each of them seeks before it reads, so
a seek and the read that follows it must not be interleaved with another
reader; both classes here hold the resource's lock for the pair.
"""

import io
import logging
import os
import threading
from typing import BinaryIO

from pdfvector.pdfexceptions import PDFIOError, PDFValueError

log = logging.getLogger(__name__)


class RandomAccessFile:
    """A seekable binary file shared by several readers."""

    def __init__(self, fp: BinaryIO) -> None:
        self.fp: BinaryIO | None = fp
        self.lock = threading.RLock()

    @classmethod
    def open(cls, path: str | os.PathLike[str], mode: str = "rb") -> "RandomAccessFile":
        if "b" not in mode:
            mode += "b"
        return cls(open(path, mode))

    def __repr__(self) -> str:
        return f"<RandomAccessFile: {self.fp!r}>"

    def __enter__(self) -> "RandomAccessFile":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def _file(self) -> BinaryIO:
        if self.fp is None:
            raise PDFIOError("I/O operation on closed RandomAccessFile")
        return self.fp

    @property
    def closed(self) -> bool:
        return self.fp is None

    def close(self) -> None:
        with self.lock:
            if self.fp is not None:
                self.fp.close()
                self.fp = None

    def seek(self, position: int) -> None:
        if position < 0:
            raise PDFValueError(f"Negative seek position: {position!r}")
        self._file().seek(position)

    def tell(self) -> int:
        return self._file().tell()

    def length(self) -> int:
        fp = self._file()
        with self.lock:
            pos = fp.tell()
            fp.seek(0, io.SEEK_END)
            size = fp.tell()
            fp.seek(pos)
        return size

    def read(self, size: int = -1) -> bytes:
        return self._file().read(size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Reads into buffer and returns the number of bytes read, 0 at the
        end of the file."""
        n = self._file().readinto(buffer)  # type: ignore[attr-defined]
        return n or 0

    def read_byte(self) -> int:
        """Returns the next byte, or -1 at the end of the file."""
        data = self._file().read(1)
        if not data:
            return -1
        return data[0]

    def write(self, data: bytes | int) -> int:
        if isinstance(data, int):
            data = bytes((data,))
        return self._file().write(data)


class RandomAccessWindow(io.RawIOBase):
    """A read-only view of the bytes [start, start + length) of a resource.

    The view keeps its own position, so any number of windows can share the
    resource. Closing the window leaves the resource open.
    """

    def __init__(self, resource: RandomAccessFile, start: int, length: int) -> None:
        super().__init__()
        if start < 0 or length < 0:
            raise PDFValueError(f"Invalid window: start={start!r}, length={length!r}")
        self.resource = resource
        self.position = start
        self.end = start + length

    def __repr__(self) -> str:
        return f"<RandomAccessWindow: position={self.position}, end={self.end}>"

    def readable(self) -> bool:
        return True

    def available(self) -> int:
        return self.end - self.position

    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        size = min(len(buffer), self.available())
        if size <= 0:
            return 0
        with self.resource.lock:
            self.resource.seek(self.position)
            n = self.resource.readinto(memoryview(buffer)[:size])
        if n == 0:
            log.debug("Resource ended before window end %d", self.end)
        self.position += n
        return n

    def read_byte(self) -> int:
        """Returns the next byte, or -1 at the end of the window."""
        if self.available() <= 0:
            return -1
        with self.resource.lock:
            self.resource.seek(self.position)
            b = self.resource.read_byte()
        if b >= 0:
            self.position += 1
        return b

    def skip(self, n: int) -> int:
        """Moves forward by at most n bytes and returns how far it moved."""
        skipped = max(0, min(n, self.available()))
        self.position += skipped
        return skipped
