import struct

import pytest

from dxbc.streams import Decoder
from dxbc.exceptions import StreamExpected, LimitReached, DecodeStrFailed


def test_read_little_endian():
    decoder = Decoder(b'\x01\x02\x03\x04\x05\x06\x07')

    assert decoder.read_u8() == 0x01
    assert decoder.read_u16() == 0x0302
    assert decoder.read_u32() == 0x07060504
    assert decoder.eof()


def test_read_past_the_end():
    decoder = Decoder(b'\x01\x02\x03')

    with pytest.raises(StreamExpected) as excinfo:
        decoder.read_u32()

    assert excinfo.value.offset == 0
    # a failed read doesn't move the cursor
    assert decoder.get_offset() == 0
    assert decoder.read_u16() == 0x0201


def test_bytes_and_words():
    decoder = Decoder(b'DXBC' + struct.pack('<3I', 1, 2, 3))

    assert bytes(decoder.bytes(4)) == b'DXBC'
    assert decoder.words(3) == (1, 2, 3)

    with pytest.raises(LimitReached):
        decoder.bytes(1)

    with pytest.raises(LimitReached):
        decoder.seek(8).words(3)


def test_str():
    decoder = Decoder(b'kebab\x00miao\x00')

    assert decoder.str() == 'kebab'
    assert decoder.get_offset() == 6
    assert decoder.str() == 'miao'
    assert decoder.eof()


def test_str_without_terminator():
    decoder = Decoder(b'kebab')

    with pytest.raises(StreamExpected):
        decoder.str()


def test_str_invalid_utf8():
    decoder = Decoder(b'\x00\xff\xfe\x00')
    decoder.seek_mut(1)

    with pytest.raises(DecodeStrFailed) as excinfo:
        decoder.str()

    assert excinfo.value.offset == 1


def test_seek_does_not_move_the_cursor():
    decoder = Decoder(struct.pack('<3I', 0xa, 0xb, 0xc))

    other = decoder.seek(8)

    assert other.read_u32() == 0xc
    assert decoder.get_offset() == 0
    assert decoder.read_u32() == 0xa

    assert decoder.seek_mut(8) is decoder
    assert decoder.read_u32() == 0xc


def test_scoped_decoder():
    """The scope is a window over the data: offsets restart from zero
    and reading past its end fails even if the parent has more data"""
    decoder = Decoder(b'\xaa\xbb' + struct.pack('<2I', 0xcafebabe, 0xdeadbeef))
    decoder.seek_mut(2)

    scoped = decoder.scoped_decoder(4)

    assert scoped.get_offset() == 0
    assert scoped.get_offset(absolute=True) == 2
    assert scoped.read_u32() == 0xcafebabe
    assert scoped.eof()

    with pytest.raises(StreamExpected) as excinfo:
        scoped.read_u8()

    # the offset of the error is the absolute one
    assert excinfo.value.offset == 6

    with pytest.raises(LimitReached):
        scoped.seek(0).bytes(5)


def test_scoped_decoder_nested():
    decoder = Decoder(bytes(range(16)))

    outer = decoder.seek(4).scoped_decoder(8)
    inner = outer.seek(2).scoped_decoder(100)  # clamped to the outer scope

    assert inner.limit == 6
    assert inner.origin == 6
    assert bytes(inner.bytes(6)) == bytes(range(6, 12))


def test_seek_outside_scope():
    decoder = Decoder(bytes(8)).scoped_decoder(4)

    with pytest.raises(StreamExpected):
        decoder.seek(6).read_u8()

    with pytest.raises(StreamExpected):
        decoder.seek(4).str()


def test_decoder_from_path(tmp_path):
    path = tmp_path / 'blob.bin'
    path.write_bytes(b'\x2a\x00\x00\x00')

    assert Decoder(str(path)).read_u32() == 42
    assert Decoder(path).read_u32() == 42


def test_decoder_wrong_type():
    with pytest.raises(ValueError):
        Decoder(42)


def test_limited():
    decoder = Decoder(bytes(range(16))).scoped_decoder(12)
    decoder.seek_mut(4)

    limited = decoder.limited(8)

    # same position, offsets are not rebased
    assert limited.get_offset() == 4
    assert limited.read_u32() == 0x07060504
    assert limited.eof()

    with pytest.raises(StreamExpected):
        limited.read_u8()

    # the bound can only be lowered, and never below the cursor
    assert decoder.limited(100).limit == 12
    assert decoder.limited(0).eof()
