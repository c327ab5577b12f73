import hashlib
import struct

import pytest

from dxbc.checksum import checksum, verify_checksum, digest_hex, CHECKSUM_OFFSET
from dxbc.common.md5 import MD5, INIT_STATE, transform, block_to_words

from conftest import make_container, make_rdef_sm4


def payload(size):
    return bytes((_ * 7 + 3) & 0xff for _ in range(size))


@pytest.mark.parametrize('size', [0, 1, 3, 55, 56, 63, 64, 65, 119, 120, 200, 1000])
def test_md5(size):
    data = payload(size)

    assert MD5(data).hexdigest() == hashlib.md5(data).hexdigest()


def test_md5_update():
    md5 = MD5()
    for idx in range(0, 300, 7):
        md5.update(payload(300)[idx:idx + 7])

    assert md5.digest() == hashlib.md5(payload(300)).digest()
    # digest() doesn't consume the context
    assert md5.digest() == hashlib.md5(payload(300)).digest()


def test_checksum_long_tail():
    """The last partial block has 60 bytes: the length goes into a block of its own"""
    data = payload(CHECKSUM_OFFSET + 64 + 60)
    body = data[CHECKSUM_OFFSET:]
    bits = len(body) * 8

    state = transform(INIT_STATE, block_to_words(body[:64]))
    state = transform(state, block_to_words(body[64:] + b'\x80' + b'\x00' * 3))
    state = transform(state, [bits] + [0] * 14 + [(bits >> 2) | 1])

    assert checksum(data) == state


def test_checksum_short_tail():
    """The last partial block has 10 bytes: the length is placed before them"""
    data = payload(CHECKSUM_OFFSET + 64 + 10)
    body = data[CHECKSUM_OFFSET:]
    bits = len(body) * 8

    state = transform(INIT_STATE, block_to_words(body[:64]))

    words = block_to_words(struct.pack('<I', bits) + body[64:] + b'\x80' + b'\x00' * 49)
    words[15] = (bits >> 2) | 1
    state = transform(state, words)

    assert checksum(data) == state


def test_checksum_no_tail():
    data = payload(CHECKSUM_OFFSET + 128)
    body = data[CHECKSUM_OFFSET:]
    bits = 128 * 8

    state = transform(INIT_STATE, block_to_words(body[:64]))
    state = transform(state, block_to_words(body[64:]))
    state = transform(state, [bits, 0x80] + [0] * 13 + [(bits >> 2) | 1])

    assert checksum(data) == state


def test_checksum_is_not_md5():
    data = payload(CHECKSUM_OFFSET + 40)

    assert digest_hex(checksum(data)) != hashlib.md5(data[CHECKSUM_OFFSET:]).hexdigest()


def test_checksum_skips_header():
    data = payload(CHECKSUM_OFFSET + 100)
    other = b'\xff' * CHECKSUM_OFFSET + data[CHECKSUM_OFFSET:]

    assert checksum(data) == checksum(other)
    assert checksum(data) != checksum(data[:-1] + b'\x00')


def test_verify_checksum():
    data = make_container((b'RDEF', make_rdef_sm4()))

    assert verify_checksum(data)

    corrupted = bytearray(data)
    corrupted[-1] ^= 0xff

    assert not verify_checksum(bytes(corrupted))
    assert not verify_checksum(make_container((b'RDEF', make_rdef_sm4()), fix_checksum=False))


def test_digest_hex():
    assert digest_hex((0x04030201, 0, 0, 0xffffffff)) == '01020304' + '00' * 8 + 'ff' * 4


def retail_checksum(data):
    '''The same checksum written the other way around: first the whole
    message is padded, with the length words in their final place, then
    it's hashed block by block.'''
    body = bytes(data[CHECKSUM_OFFSET:])
    size = len(body)
    full_size = size & ~0x3f
    left = size - full_size

    bits = struct.pack('<I', (size * 8) & 0xffffffff)
    high = struct.pack('<I', ((size << 1) | 1) & 0xffffffff)

    if left < 56:
        message = body[:full_size] + bits + body[full_size:] + b'\x80' + b'\x00' * (55 - left) + high
    else:
        message = body + b'\x80' + b'\x00' * (63 - left) + bits + b'\x00' * 56 + high

    assert len(message) % 64 == 0

    state = INIT_STATE
    for idx in range(0, len(message), 64):
        state = transform(state, block_to_words(message[idx:idx + 64]))

    return state


@pytest.mark.parametrize('size', [0, 1, 4, 55, 56, 57, 60, 63, 64, 119, 120, 127, 128, 300, 1000])
def test_checksum_against_padded_message(size):
    data = payload(CHECKSUM_OFFSET + size)

    assert checksum(data) == retail_checksum(data)


def test_checksum_of_container(container):
    assert checksum(container) == retail_checksum(container)
    assert verify_checksum(container)
