import logging
import struct
from pathlib import Path

from .exceptions import (
    StreamExpected,
    LimitReached,
    DecodeStrFailed,
)


logger = logging.getLogger(__name__)


class Decoder(object):
    '''This is a cursor over an immutable buffer: every read is checked against
    the bound of the current scope and not against the length of the whole buffer,
    so that a record cannot read into its neighbours.

    The buffer is always accessed via memoryview so that slicing a scope doesn't copy
    the underlying data.

    The offsets used by seek() and returned by get_offset() are relative to the
    start of the view; "origin" is where the view starts in the root buffer.'''

    def __init__(self, obj, offset=0, limit=None, origin=0):
        self._type = type(obj)
        self.obj = obj
        self.origin = origin

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            if isinstance(obj, Path):
                init_method = self.init_path
            else:
                raise ValueError('\'%s\' is the wrong kind of buffer to decode' % obj.__class__.__name__)

        init_method()

        self.limit = len(self.obj) if limit is None else min(limit, len(self.obj))
        self.offset = offset

    def __repr__(self):
        return '<%s(offset=0x%x, limit=0x%x, origin=0x%x)>' % (
            self.__class__.__name__, self.offset, self.limit, self.origin)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = memoryview(f.read())

    init_path = init_str

    def init_bytes(self):
        self.obj = memoryview(self.obj)

    init_bytearray = init_bytes

    def init_memoryview(self):
        self.obj = self.obj.cast('B') if self.obj.format != 'B' else self.obj

    @property
    def remaining(self):
        return self.limit - self.offset

    def get_offset(self, absolute=False):
        return self.offset + self.origin if absolute else self.offset

    def eof(self):
        return self.offset == self.limit

    def _read_struct(self, fmt):
        size = struct.calcsize(fmt)
        if self.offset < 0 or size > self.remaining:
            raise StreamExpected(self.get_offset(absolute=True))

        value = struct.unpack_from(fmt, self.obj, self.offset)[0]
        self.offset += size

        return value

    def read_u8(self):
        return self._read_struct('<B')

    def read_u16(self):
        return self._read_struct('<H')

    def read_u32(self):
        return self._read_struct('<I')

    def read(self, fmt):
        '''Read a single little-endian value described by a struct format character'''
        return self._read_struct('<%s' % fmt)

    def bytes(self, n):
        '''Returns the next n bytes as a view into the buffer'''
        if self.offset < 0 or n > self.remaining:
            raise LimitReached(self.get_offset(absolute=True))

        data = self.obj[self.offset:self.offset + n]
        self.offset += n

        return data

    def words(self, n):
        '''Returns the next n little-endian 32-bit words'''
        if self.offset < 0 or n * 4 > self.remaining:
            raise LimitReached(self.get_offset(absolute=True))

        data = struct.unpack_from('<%dI' % n, self.obj, self.offset)
        self.offset += n * 4

        return data

    def str(self):
        '''Read a null-terminated UTF-8 string'''
        start = self.offset
        if start < 0 or start >= self.limit:
            raise StreamExpected(self.get_offset(absolute=True))

        end = bytes(self.obj[start:self.limit]).find(b'\x00')
        if end < 0:
            raise StreamExpected(self.origin + self.limit)

        raw = self.obj[start:start + end]

        try:
            value = str(raw, 'utf-8')
        except UnicodeDecodeError as e:
            raise DecodeStrFailed(self.get_offset(absolute=True), e)

        self.offset = start + end + 1

        return value

    def seek(self, offset):
        '''Returns a new cursor at the given offset sharing the same bound'''
        return Decoder(self.obj, offset=offset, limit=self.limit, origin=self.origin)

    def seek_mut(self, offset):
        self.offset = offset

        return self

    def limited(self, limit):
        '''Returns a cursor at the same position with the bound lowered to "limit";
        unlike scoped_decoder() the offsets are not rebased.'''
        limit = max(self.offset, min(self.limit, limit))

        return Decoder(self.obj, offset=self.offset, limit=limit, origin=self.origin)

    def scoped_decoder(self, length):
        '''Returns a decoder restricted to the next "length" bytes; the offsets
        of the new decoder start from zero.'''
        start = min(max(self.offset, 0), self.limit)
        end = min(self.limit, start + length)

        return Decoder(self.obj[start:end], origin=self.origin + start)
