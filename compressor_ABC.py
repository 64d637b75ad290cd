from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Callable, Tuple

from io_stats import Stats, run_with_stats

StreamFunc = Callable[[BinaryIO, BinaryIO], str]


class Compressor(ABC):
    """
    Interface for stream compressors: every algorithm reads a byte stream
    and writes its transformed form to another byte stream, returning a
    log string about the run.

    Files and in-memory buffers are adapted to streams here, so concrete
    algorithms only implement compress() and decompress().
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads bytes from the input stream until it is exhausted and writes
        the compressed representation to the output stream.

        Args:
            input_stream: Source of raw bytes
            output_stream: Sink for the compressed data

        Returns:
            Log information about the run
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads compressed data from the input stream and writes the
        reconstructed bytes to the output stream.

        Args:
            input_stream: Source of compressed data
            output_stream: Sink for the decompressed bytes

        Returns:
            Log information about the run
        """

    def compress_file(self, input_file: str, output_file: str) -> Tuple[Stats, str]:
        """
        Compresses one file into another, measuring the bytes moved and
        the time taken. The output file is truncated.

        Returns:
            Tuple (statistics, log information)
        """
        return run_with_stats(self.compress, input_file, output_file)

    def decompress_file(self, input_file: str, output_file: str) -> Tuple[Stats, str]:
        """
        Decompresses one file into another; see compress_file().
        """
        return run_with_stats(self.decompress, input_file, output_file)

    def compress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        """Returns (compressed data, log information)."""
        return self._transform_bytes(self.compress, data)

    def decompress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        """Returns (decompressed data, log information)."""
        return self._transform_bytes(self.decompress, data)

    @staticmethod
    def _transform_bytes(func: StreamFunc, data: bytes) -> Tuple[bytes, str]:
        sink = io.BytesIO()
        log = func(io.BytesIO(data), sink)
        return sink.getvalue(), log
