"""
Core module for the abstraction of a record of the format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Decoder
from .exceptions import DXBCException
from .properties import (
    get_root_from_chunk,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk inside the scope it was unpacked from.

    A Chunk can contain sub-chunks; the value of a Chunk is the chunk itself
    so that a PointerField to a Chunk resolves to it.

    Passing some data to the constructor (a Decoder or anything a Decoder accepts)
    unpacks it immediately.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            decoder = data if isinstance(data, Decoder) else Decoder(data)
            self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, decoder))
            self.unpack(decoder)

    def _get_value(self):
        return self

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, str(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root == self

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.field_offset, field.field_size)

        return result

    def _unpack(self, decoder: Decoder):
        '''Here we take the data from the decoder and build the representation
        given by the class this method is implemented.

        The fields are unpacked in order of declaration at the actual position
        of the decoder; fields that indicate their own offset (arrays, pointers)
        jump back and forth using a sibling decoder so the cursor of this chunk
        only moves on the contiguous part of the record.

        A failing field re-raises the exception with its name appended to
        the chain, so that the caller knows where the data is broken.
        '''
        for field_name, field in self.get_fields():
            if not field.is_present:
                self.logger.debug('skipping %s.%s' % (self.__class__.__name__, field_name))
                continue

            self.logger.debug('unpacking %s.%s at offset 0x%x' % (
                self.__class__.__name__, field_name, decoder.get_offset()))

            try:
                field.unpack(decoder)
            except DXBCException as e:
                e.chain.append(field_name)
                raise
