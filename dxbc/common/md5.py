'''
MD5 as described in RFC 1321 <https://www.ietf.org/rfc/rfc1321.txt>.

hashlib doesn't expose the compression function nor the internal state, that
are needed to implement the variant of the finalization used by DXBC, so here
we have the whole algorithm; update() and digest() behave like the standard one.
'''
import math
import struct


MASK = 0xffffffff

INIT_STATE = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476)

PADDING = b'\x80' + b'\x00' * 63

# per-round shift amounts
S = [7, 12, 17, 22] * 4 + [5, 9, 14, 20] * 4 + [4, 11, 16, 23] * 4 + [6, 10, 15, 21] * 4

# binary integer part of the sines of integers (in radians)
K = [int(abs(math.sin(i + 1)) * 2 ** 32) & MASK for i in range(64)]


def _rotl(x, n):
    return ((x << n) | (x >> (32 - n))) & MASK


def transform(state, words):
    '''Compress one block, given as 16 little-endian words, into the state'''
    a, b, c, d = state

    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | ~d)
            g = (7 * i) % 16

        f = (f + a + K[i] + words[g]) & MASK
        a, d, c = d, c, b
        b = (b + _rotl(f, S[i])) & MASK

    return (
        (state[0] + a) & MASK,
        (state[1] + b) & MASK,
        (state[2] + c) & MASK,
        (state[3] + d) & MASK,
    )


def block_to_words(block):
    return list(struct.unpack('<16I', block))


class MD5(object):

    def __init__(self, data=b''):
        self.state = INIT_STATE
        self.buffer = bytearray()
        self.count = 0  # in bytes

        self.update(data)

    def copy(self):
        other = MD5()
        other.state = self.state
        other.buffer = bytearray(self.buffer)
        other.count = self.count

        return other

    def transform(self, block):
        '''Process directly a 64 bytes block, without touching the pending data'''
        self.transform_words(block_to_words(block))

    def transform_words(self, words):
        self.state = transform(self.state, words)

    def update(self, data):
        data = bytes(data)
        self.count += len(data)

        if self.buffer:
            missing = 64 - len(self.buffer)
            self.buffer += data[:missing]
            data = data[missing:]

            if len(self.buffer) < 64:
                return

            self.transform(bytes(self.buffer))
            self.buffer = bytearray()

        full = len(data) & ~0x3f
        for idx in range(0, full, 64):
            self.transform(data[idx:idx + 64])

        self.buffer = bytearray(data[full:])

    def digest(self):
        ctx = self.copy()

        index = self.count % 64
        padding_size = (56 - index) if index < 56 else (120 - index)

        ctx.update(PADDING[:padding_size] + struct.pack('<Q', (self.count * 8) & 0xffffffffffffffff))

        return struct.pack('<4I', *ctx.state)

    def hexdigest(self):
        return self.digest().hex()
