'''
# DXBC container

    .--------------------------------.
    | header                         |
    | chunk offsets[chunk_count]     |
    | chunk 0: tag, length, body     |
    | chunk 1: tag, length, body     |
      ...
    '--------------------------------'

The checksum covers everything after itself, see dxbc.checksum.
'''
from .core import Chunk
from . import fields
from .properties import Dependency


DXBC_MAGIC = b'DXBC'


class DXBCHeader(Chunk):
    magic         = fields.StringField(4, default=DXBC_MAGIC, is_magic=True)
    checksum      = fields.ArrayField(fields.StructField('I'), n=4)
    reserved      = fields.StructField('I')  # always 1
    size          = fields.StructField('I')
    chunk_count   = fields.StructField('I')
    chunk_offsets = fields.ArrayField(fields.StructField('I'), n=Dependency('.chunk_count'))

    @property
    def digest(self):
        return tuple(self.checksum.values)


class ChunkHeader(Chunk):
    '''tag and length that precede the body of each chunk'''
    tag    = fields.StringField(4)
    length = fields.StructField('I')

    @property
    def name(self):
        return bytes(self.tag.value).decode('latin1')
