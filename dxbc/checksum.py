'''
# DXBC checksum

The header of the container stores a digest computed with MD5 over all the
data following the checksum itself (i.e. from offset 0x14), but with a
finalization different from the standard one:

 - the length is the one of the hashed data only, in bits and truncated to 32 bits
 - if the last partial block has less than 56 bytes, the length is written
   *before* the remaining data, followed by the usual 0x80 and zeros
 - otherwise the remaining data and the padding form a block and then a block of zeros
   follows with the length in the first word
 - in both cases the last word of the final block is (length >> 2) | 1 instead
   of the upper half of a 64-bit length

It must be reproduced exactly, otherwise the runtime refuses the shader.
'''
import struct

from .common.md5 import MD5, PADDING, block_to_words
from .header import DXBCHeader


CHECKSUM_OFFSET = 0x14


def checksum(data):
    '''Returns the checksum of the container as four 32-bit words'''
    body = memoryview(data)[CHECKSUM_OFFSET:]

    length = len(body)
    bits = (length * 8) & 0xffffffff
    full_size = length & ~0x3f

    md5 = MD5(body[:full_size])

    last_data = bytes(body[full_size:])
    last_size = len(last_data)

    if last_size >= 56:
        md5.transform(last_data + PADDING[:64 - last_size])

        words = [0] * 16
        words[0] = bits
    else:
        words = block_to_words(struct.pack('<I', bits) + last_data + PADDING[:64 - 4 - last_size])

    words[15] = (bits >> 2) | 1
    md5.transform_words(words)

    return md5.state


def digest_hex(words):
    return struct.pack('<4I', *words).hex()


def verify_checksum(data):
    '''Compares the checksum stored into the header with the calculated one'''
    header = DXBCHeader(data)

    return header.digest == checksum(data)
