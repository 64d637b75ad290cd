import io

import pytest

from code_reader import CodeReader, TruncatedCodeError
from code_writer import CodeWriter


class TrickleStream(io.RawIOBase):
    """Hands out at most one byte per read call."""

    def __init__(self, data: bytes):
        super().__init__()
        self.data = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        chunk = self.data.read(1)
        b[: len(chunk)] = chunk
        return len(chunk)


def test_reads_big_endian_words():
    reader = CodeReader(io.BytesIO(b"\x01\x00\xff\xff\x00\x41"), 2)
    assert list(reader) == [256, 65535, 65]
    assert reader.count == 3


def test_reads_single_bytes():
    reader = CodeReader(io.BytesIO(b"ol\xe1"), 1)
    assert [reader.read_code() for _ in range(4)] == [0x6F, 0x6C, 0xE1, None]


def test_clean_end_of_stream():
    reader = CodeReader(io.BytesIO(b""), 2)
    assert reader.read_code() is None
    assert reader.count == 0


def test_short_reads_are_completed():
    reader = CodeReader(TrickleStream(b"\x12\x34\x56\x78"), 2)
    assert list(reader) == [0x1234, 0x5678]


def test_partial_token_raises():
    reader = CodeReader(io.BytesIO(b"\x00\x41\x00"), 2)
    assert reader.read_code() == 65
    with pytest.raises(TruncatedCodeError):
        reader.read_code()


def test_truncation_is_an_eof_error():
    with pytest.raises(EOFError):
        CodeReader(TrickleStream(b"\x00"), 2).read_code()


def test_rejects_zero_width():
    with pytest.raises(ValueError):
        CodeReader(io.BytesIO(), 0)


def test_writes_big_endian_words():
    out = io.BytesIO()
    writer = CodeWriter(out, 2)
    for code in (65, 256, 65535):
        writer.write_code(code)
    writer.flush()

    assert out.getvalue() == b"\x00\x41\x01\x00\xff\xff"
    assert writer.written == 3


def test_buffers_until_flush():
    out = io.BytesIO()
    writer = CodeWriter(out, 2, buffer_size=4)
    writer.write_code(1)
    assert out.getvalue() == b""

    writer.write_code(2)
    assert out.getvalue() == b"\x00\x01\x00\x02"

    writer.write_code(3)
    writer.flush()
    assert out.getvalue() == b"\x00\x01\x00\x02\x00\x03"


@pytest.mark.parametrize("code", [-1, 65536])
def test_rejects_codes_out_of_range(code):
    writer = CodeWriter(io.BytesIO(), 2)
    with pytest.raises(ValueError):
        writer.write_code(code)


def test_writer_output_reads_back():
    codes = [0, 1, 255, 256, 4095, 65535]
    out = io.BytesIO()
    writer = CodeWriter(out, 2)
    for code in codes:
        writer.write_code(code)
    writer.flush()

    out.seek(0)
    assert list(CodeReader(out, 2)) == codes
