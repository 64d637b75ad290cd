"""
Byte counting for streams, used to report how much data a compressor
consumed and produced and how long it took.
"""
import io
import time
from dataclasses import dataclass
from typing import BinaryIO, Callable, Tuple


class StatStream(io.RawIOBase):
    """
    Transparent pass-through over a binary stream that counts the bytes
    moved by every successful read and write.

    The wrapped stream is never closed by the decorator; it can be
    recovered with into_inner().
    """

    def __init__(self, inner: BinaryIO):
        """
        Args:
            inner: The stream to measure
        """
        super().__init__()
        self.inner = inner
        self.read_count = 0
        self.write_count = 0

    def readable(self) -> bool:
        readable = getattr(self.inner, "readable", None)
        return readable is not None and readable()

    def writable(self) -> bool:
        writable = getattr(self.inner, "writable", None)
        return writable is not None and writable()

    def readinto(self, b) -> int:
        """
        Read into a pre-allocated buffer.

        Args:
            b: The writable buffer

        Returns:
            The number of bytes read, 0 at end of stream
        """
        readinto = getattr(self.inner, "readinto", None)
        if readinto is not None:
            n = readinto(b)
        else:
            data = self.inner.read(len(b))
            n = len(data)
            memoryview(b)[:n] = data
        if n:
            self.read_count += n
        return n or 0

    def write(self, b) -> int:
        """
        Write a byte buffer.

        Args:
            b: The bytes to write

        Returns:
            The number of bytes written
        """
        n = self.inner.write(b)
        if n is None:
            n = len(b)
        self.write_count += n
        return n

    def flush(self):
        flush = getattr(self.inner, "flush", None)
        if flush is not None and not self.closed and not getattr(self.inner, "closed", False):
            flush()

    def get_count(self) -> Tuple[int, int]:
        """
        Return the number of bytes read and written.
        """
        return self.read_count, self.write_count

    def into_inner(self) -> BinaryIO:
        """
        Return the wrapped stream.
        """
        return self.inner


@dataclass
class Stats:
    """Totals collected over one compressor run."""

    read: int
    written: int
    elapsed: float  # seconds

    def space_saved(self) -> float:
        """
        Percentage of the input that the output saved,
        (1 - written / read) * 100, or 0 when nothing was read.
        """
        if not self.read:
            return 0.0
        return (1 - self.written / self.read) * 100


def run_with_stats(
    func: Callable[[BinaryIO, BinaryIO], str], input_path: str, output_path: str
) -> Tuple[Stats, str]:
    """
    Opens both files, measures them with StatStream behind buffered
    wrappers and times func(reader, writer). The output file is truncated.

    Returns:
        Tuple (statistics, log returned by func)
    """
    with open(input_path, "rb", buffering=0) as fin, open(output_path, "wb", buffering=0) as fout:
        stat_r = StatStream(fin)
        stat_w = StatStream(fout)
        with io.BufferedReader(stat_r) as reader, io.BufferedWriter(stat_w) as writer:
            start_time = time.time()
            log = func(reader, writer)
            writer.flush()
            elapsed = time.time() - start_time

        return Stats(stat_r.read_count, stat_w.write_count, elapsed), log
