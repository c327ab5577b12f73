"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a Decoder.

Since in DXBC a record refers to other records by offset, other than the plain
fields there is the PointerField that reads an offset and unpacks its target
at that position, without moving the cursor of the record.
"""
import logging
from enum import Enum

from .meta import FieldBase
from .properties import Dependency, resolve_property
from .streams import Decoder
from .exceptions import (
    DXBCException,
    DecodeEnumFailed,
    ChunkIncorrectException,
    MagicException,
)


def truncate_flags(flags, value):
    '''Build a Flag dropping the bits that are not known to the enumeration'''
    mask = 0
    for member in flags.__members__.values():
        mask |= member.value

    return flags(value & mask)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, field_name=None, father=None, default=None, condition=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.field_name = field_name
        self.father = father
        self.default = default
        self.field_offset = None
        self.condition = condition
        self._size = 0

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    field_size = property(
        fget=lambda self: self._size,
    )

    @property
    def is_present(self):
        '''A field with a condition exists only when the condition resolves to True,
        otherwise it keeps its default value and doesn't consume data.'''
        if self.condition is None:
            return True

        return bool(resolve_property(self, self.condition))

    def unpack(self, decoder: Decoder):
        '''Read the field at the actual position of the decoder, updating offset and size'''
        self.field_offset = decoder.get_offset()

        self._unpack(decoder)

        self._size = decoder.get_offset() - self.field_offset

    def _unpack(self, decoder: Decoder):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    little-endian integers from bytes.

    The "enum" argument indicates a subclass of enum.Enum so to have directly a representation
    of the integer value of the field itself: an unknown value is a failure since we cannot
    let it slip through the parsing. The "flags" argument instead indicates a subclass
    of enum.Flag and the unknown bits are silently dropped.
    """

    def __init__(self, format, default=None, enum=None, flags=None, **kw):
        self.format = format
        self.enum = enum
        self.flags = flags
        super().__init__(default=default, **kw)

    def __repr__(self):
        if self.enum or self.flags or self.value is None:
            return f'<{self.__class__.__name__}({self.value!r})>'

        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        if self.enum or self.flags:
            return str(self.value)
        return hex(self.value) if self.value is not None else 'None'

    def value_from_default(self):
        if self.enum and self.default is not None and not isinstance(self.default, Enum):
            return self.enum(self.default)

        return super().value_from_default()

    def _unpack_enum(self, value: int, offset: int) -> Enum:
        try:
            return self.enum(value)
        except ValueError:
            self.logger.debug(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')
            raise DecodeEnumFailed(offset, enum=self.enum, value=value)

    def _unpack(self, decoder: Decoder):
        offset = decoder.get_offset(absolute=True)
        value = decoder.read(self.format)

        if self.enum:
            value = self._unpack_enum(value, offset)
        elif self.flags:
            value = truncate_flags(self.flags, value)

        self.value = value


class StringField(Field):
    """Represent a contiguous chunk of bytes, as a view into the original buffer."""

    def __init__(self, n, is_magic=False, **kw):
        self.length = n
        self.is_magic = is_magic
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, bytes(self.value) if self.value is not None else None)

    def __len__(self):
        return resolve_property(self, self.length)

    def _unpack(self, decoder: Decoder):
        value = decoder.bytes(len(self))

        if self.is_magic and bytes(value) != self.default:
            self.logger.warning(f'the magic doesn\'t correspond: {bytes(value)!r} instead of {self.default!r}')
            raise MagicException()

        self.value = value


class CStringField(Field):
    '''Null-terminated UTF-8 string'''

    def __str__(self):
        return self.value if self.value is not None else ''

    def _unpack(self, decoder: Decoder):
        self.value = decoder.str()


class ArrayField(Field):
    '''Unpack an array of Fields (or Chunks).

    The number of elements is indicated via the parameter named "n", usually
    a Dependency on a counter in the same record. If "offset" is indicated the
    array is not inline but it is placed at that offset of the scope, in that
    case the cursor of the record doesn't move.
    '''

    def __init__(self, field, n=0, offset=None, **kw):
        self.field = field
        if not isinstance(n, (Dependency, int)):
            raise Exception('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self._n = n
        self._array_offset = offset

        kw.setdefault('default', [])
        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value or [])

    def __iter__(self):
        return iter(self.value or [])

    @property
    def values(self):
        return [_.value for _ in self]

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, decoder: Decoder):
        if self._array_offset is None:
            return super().unpack(decoder)

        offset = resolve_property(self, self._array_offset)
        super().unpack(decoder.seek(offset))

    def _unpack(self, decoder: Decoder):
        n = resolve_property(self, self._n)
        self.logger.debug('unpacking %d elements for array \'%s\'' % (n, self.field_name))

        elements = []
        for idx in range(n):
            element = self.instance_element()
            element.field_name = str(idx)
            try:
                element.unpack(decoder)
            except DXBCException as e:
                e.chain.append(idx)
                raise
            elements.append(element)

        self.value = elements


# maximum number of pointers followed to reach a record
MAX_DEPTH = 64


class PointerField(Field):
    '''Reads a 32-bit offset and unpacks the given field at that position of
    the current scope. The record's cursor only advances by the offset itself.

    If "nullable" is set, an offset equal to zero means that the target is absent.

    The value of this field is the value of the target; the target itself is
    accessible via the attribute with the same name.'''

    def __init__(self, field, nullable=False, **kw):
        self.field = field
        self.nullable = nullable
        self.pointer = None
        self.target = None
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}(0x{self.pointer or 0:x} -> {self.target!r})>'

    def __str__(self):
        return str(self.target) if self.target is not None else 'None'

    def _get_value(self):
        if self.target is None:
            return self._value

        return self.target.value

    def _check_nesting(self):
        '''A record reached again through the same pointer would recurse forever,
        a legal but too long chain of pointers would exhaust the stack anyway.'''
        depth = 0
        father = self.father
        while father is not None:
            if isinstance(father, PointerField):
                if father.pointer == self.pointer and type(father.field) is type(self.field):
                    raise ChunkIncorrectException(f'cyclic reference to offset 0x{self.pointer:x}')
                depth += 1
            father = father.father

        if depth >= MAX_DEPTH:
            raise ChunkIncorrectException(f'references nested more than {MAX_DEPTH} levels at offset 0x{self.pointer:x}')

    def _unpack(self, decoder: Decoder):
        self.pointer = decoder.read_u32()

        if self.nullable and self.pointer == 0:
            self.target = None
            return

        self._check_nesting()

        target = self.field.create(father=self)
        target.field_name = self.field_name
        target.unpack(decoder.seek(self.pointer))

        self.target = target
