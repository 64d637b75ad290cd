"""
LZW Compression and Decompression

Streams are transformed in a single pass. The compressed form is a flat
sequence of 16-bit big-endian codes with no header, length or trailer.
"""
from typing import BinaryIO, Dict

from code_reader import CodeReader, TruncatedCodeError
from code_writer import CodeWriter
from compressor_ABC import Compressor

CODE_WIDTH = 16  # bits per code
CODE_SIZE = CODE_WIDTH // 8
MAX_CODES = 1 << CODE_WIDTH  # includes the bootstrap entries
BOOTSTRAP_SIZE = 256

# every single byte maps to its own value; runs work on shallow copies
ENCODE_TABLE = {bytes([i]): i for i in range(BOOTSTRAP_SIZE)}
DECODE_TABLE = {i: bytes([i]) for i in range(BOOTSTRAP_SIZE)}

__all__ = [
    "LZWCompressor",
    "LZWError",
    "DictionaryFullError",
    "CorruptStreamError",
    "TruncatedCodeError",
    "encode",
    "decode",
]


class LZWError(Exception):
    """Base class for failures of the LZW transform itself."""


class DictionaryFullError(LZWError):
    """The next entry would need a code wider than CODE_WIDTH bits."""


class CorruptStreamError(LZWError):
    """A code refers to an entry the decoder cannot know about."""


def next_code(dictionary: Dict) -> int:
    """
    Returns the code the next inserted entry gets, which is always the
    current dictionary size.
    """
    code = len(dictionary)
    if code >= MAX_CODES:
        raise DictionaryFullError(
            f"Dictionary is full: {MAX_CODES} codes of {CODE_WIDTH} bits are in use"
        )
    return code


class LZWCompressor(Compressor):
    """
    A class for LZW compression and decompression of byte streams.
    """

    def __init__(self):
        self.dictionary_size = 0
        self.codes_count = 0
        self.bytes_count = 0

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Greedy longest-match encoder. Emits the code of the longest known
        prefix of the remaining input and registers that prefix extended by
        the next byte.
        """
        reader = CodeReader(input_stream, 1)
        writer = CodeWriter(output_stream, CODE_SIZE)
        dictionary = dict(ENCODE_TABLE)
        seq = b""

        for byte in reader:
            candidate = seq + bytes((byte,))
            if candidate in dictionary:
                seq = candidate
                continue
            writer.write_code(dictionary[seq])
            dictionary[candidate] = next_code(dictionary)
            seq = candidate[-1:]

        if seq:
            writer.write_code(dictionary[seq])
        writer.flush()

        self.dictionary_size = len(dictionary)
        self.codes_count = writer.written
        self.bytes_count = reader.count
        return self._log(
            f"Encoded {reader.count} bytes into {writer.written} codes",
            reader.count,
            writer.written * CODE_SIZE,
        )

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Rebuilds the encoder's dictionary one entry behind it. A code that
        is not known yet can only be the entry the encoder created in the
        same step, which is the previous sequence plus its own first byte.
        """
        reader = CodeReader(input_stream, CODE_SIZE)
        dictionary = dict(DECODE_TABLE)
        previous = b""
        written = 0

        for code in reader:
            entry = dictionary.get(code)
            if entry is None:
                if code != len(dictionary) or not previous:
                    raise CorruptStreamError(
                        f"Code {code} at position {reader.count - 1} is unknown "
                        f"(dictionary has {len(dictionary)} entries)"
                    )
                entry = previous + previous[:1]

            output_stream.write(entry)
            written += len(entry)

            if previous:
                dictionary[next_code(dictionary)] = previous + entry[:1]
            previous = entry

        flush = getattr(output_stream, "flush", None)
        if flush is not None:
            flush()

        self.dictionary_size = len(dictionary)
        self.codes_count = reader.count
        self.bytes_count = written
        return self._log(
            f"Decoded {reader.count} codes into {written} bytes",
            reader.count * CODE_SIZE,
            written,
        )

    def _log(self, summary: str, size_in: int, size_out: int) -> str:
        log = [summary, f"Dictionary size: {self.dictionary_size}"]
        diff = size_in - size_out
        if diff > 0:
            ratio = (1 - size_out / size_in) * 100
            log.append(f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)")
        elif diff < 0:
            log.append(f"Size increased by {-diff} bytes")
        else:
            log.append("Size unchanged")
        return "\n".join(log)


def encode(source: BinaryIO, sink: BinaryIO) -> None:
    """Compresses `source` into `sink`."""
    LZWCompressor().compress(source, sink)


def decode(source: BinaryIO, sink: BinaryIO) -> None:
    """Decompresses `source` into `sink`."""
    LZWCompressor().decompress(source, sink)
