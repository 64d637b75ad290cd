from typing import BinaryIO, Iterator, Optional


class TruncatedCodeError(EOFError):
    """The stream ended in the middle of a fixed-width token."""


class CodeReader:
    """
    Reads fixed-width unsigned big-endian integers from a byte stream.
    """

    def __init__(self, stream: BinaryIO, width: int):
        """
        :param stream: source stream opened in binary mode
        :param width: token size in bytes
        """
        if width < 1:
            raise ValueError("Token width must be at least one byte")
        self.stream = stream
        self.width = width
        self.count = 0  # tokens read so far

    def read_code(self) -> Optional[int]:
        """
        Reads exactly `width` bytes and returns them as an unsigned integer.
        Returns None if the stream is exhausted before the token starts.
        """
        chunk = self.stream.read(self.width)
        if not chunk:
            return None
        # raw streams may return fewer bytes than asked for
        while len(chunk) < self.width:
            more = self.stream.read(self.width - len(chunk))
            if not more:
                raise TruncatedCodeError(
                    f"Stream ended after {len(chunk)} of {self.width} bytes "
                    f"of token #{self.count + 1}"
                )
            chunk += more

        self.count += 1
        return int.from_bytes(chunk, byteorder="big")

    def __iter__(self) -> Iterator[int]:
        while True:
            code = self.read_code()
            if code is None:
                return
            yield code
