from typing import BinaryIO

from bitarray import bitarray
from bitarray.util import int2ba

BUFFER_SIZE = 8192  # bytes held before draining to the sink


class CodeWriter:
    """
    Writes fixed-width unsigned integers MSB first, buffering them in a
    bitarray until enough whole bytes have accumulated.
    """

    def __init__(self, stream: BinaryIO, width: int, buffer_size: int = BUFFER_SIZE):
        """
        :param stream: sink stream opened in binary mode
        :param width: token size in bytes
        :param buffer_size: number of buffered bytes that triggers a drain
        """
        if width < 1:
            raise ValueError("Token width must be at least one byte")
        if buffer_size < 1:
            raise ValueError("Buffer size must be positive")
        self.stream = stream
        self.width = width
        self.code_bits = width * 8
        self.buffer_size = buffer_size
        self.bits = bitarray(endian="big")
        self.written = 0

    def write_code(self, code: int):
        """
        Appends `code` as `width * 8` bits, most significant bit first.
        """
        if code < 0 or code >> self.code_bits:
            raise ValueError(f"Code {code} does not fit in {self.code_bits} bits")
        self.bits.extend(int2ba(code, length=self.code_bits, endian="big"))
        self.written += 1
        if len(self.bits) >= self.buffer_size * 8:
            self._drain()

    def _drain(self):
        # tokens are whole bytes, so the buffer is always byte aligned
        if self.bits:
            self.stream.write(self.bits.tobytes())
            self.bits.clear()

    def flush(self):
        """
        Writes every buffered token to the sink and flushes it.
        """
        self._drain()
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
