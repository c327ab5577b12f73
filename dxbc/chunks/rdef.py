'''
# Resource definition chunk (RDEF)

The chunk contains the reflection data of a shader: the constant buffers with
their variables and types, and the resources bound to the shader.

It's organized like a heap: fixed-layout records contain 32-bit offsets,
relative to the start of the chunk itself, to other records and strings
placed elsewhere in the same chunk

    RDEF header
      '-> ConstantBuffer[cb_count]      (packed array at cb_offset)
      |     '-> ShaderVariable[count]   (packed array at var_offset)
      |           '-> ShaderType
      |                 '-> ShaderTypeMember[n]
      |                       '-> ShaderType ...
      '-> ResourceBinding[bind_count]   (packed array at bind_offset)

Starting from shader model 5 (major version >= 5) some records have extra
fields, the ones of the ShaderType are only partially understood and are kept as they are.
'''
from ..core import Chunk
from .. import fields
from ..properties import Dependency, RatioDependency, NonZero, AtLeast
from .enum import (
    ProgramType,
    ConstantBufferType,
    ConstantBufferFlags,
    ShaderVariableFlags,
    ShaderVariableClass,
    ShaderVariableType,
    ShaderInputType,
    ShaderInputFlags,
    ResourceReturnType,
    ViewDimension,
)


SM5 = AtLeast('@RdefChunk.major', 5)


def Name(**kwargs):
    '''offset to a null-terminated string'''
    return fields.PointerField(fields.CStringField(), **kwargs)


class ShaderTypeParent(Chunk):
    klass    = fields.StructField('H', enum=ShaderVariableClass)
    reserved = fields.StructField('H')


class ShaderType(Chunk):
    '''Describes the type of a variable; struct types have members, each one
    with its own type, so the nesting can be arbitrarily deep.

    The members are appended to this class after ShaderTypeMember is defined.'''
    klass        = fields.StructField('H', enum=ShaderVariableClass)
    type         = fields.StructField('H', enum=ShaderVariableType)
    rows         = fields.StructField('H')
    columns      = fields.StructField('H')
    elements     = fields.StructField('H')
    member_count = fields.StructField('H')
    member_offset = fields.StructField('I')
    # shader model 5
    parent_type  = fields.PointerField(ShaderTypeParent(), nullable=True, condition=SM5)
    unknown2     = fields.PointerField(fields.StructField('I'), nullable=True, condition=SM5)
    unknown3     = fields.StructField('I', condition=SM5)
    unknown5     = fields.PointerField(fields.StructField('I'), nullable=True, condition=SM5)
    parent_name  = Name(nullable=True, condition=SM5)

    def __str__(self):
        msg = f'{self.klass.value.name} {self.type.value.name}'
        if self.klass.value in (ShaderVariableClass.VECTOR,):
            msg += f'{self.columns.value}'
        elif self.klass.value in (ShaderVariableClass.MATRIX_ROWS, ShaderVariableClass.MATRIX_COLUMNS):
            msg += f'{self.rows.value}x{self.columns.value}'
        if self.elements.value:
            msg += f'[{self.elements.value}]'
        return msg


class ShaderTypeMember(Chunk):
    name   = Name()
    type   = fields.PointerField(ShaderType())
    offset = fields.StructField('I')


ShaderType.add_to_class(
    'members',
    fields.ArrayField(ShaderTypeMember(), n=Dependency('.member_count'), offset=Dependency('.member_offset')),
)


class ShaderVariable(Chunk):
    '''
    The default value is not placed at its offset: when the offset is not zero
    size/4 words follow the fixed part of the record, then (shader model 5) the
    texture and sampler slots used by the variable.
    '''
    name           = Name()
    offset         = fields.StructField('I')
    size           = fields.StructField('I')
    flags          = fields.StructField('I', flags=ShaderVariableFlags)
    type           = fields.PointerField(ShaderType())
    default_offset = fields.StructField('I')
    default_value  = fields.ArrayField(
        fields.StructField('I'),
        n=RatioDependency(4, '.size'),
        default=None,
        condition=NonZero('.default_offset'),
    )
    # shader model 5
    start_texture  = fields.StructField('I', condition=SM5)
    texture_size   = fields.StructField('I', condition=SM5)
    start_sampler  = fields.StructField('I', condition=SM5)
    sampler_size   = fields.StructField('I', condition=SM5)


class ConstantBuffer(Chunk):
    name       = Name()
    var_count  = fields.StructField('I')
    var_offset = fields.StructField('I')
    size       = fields.StructField('I')
    flags      = fields.StructField('I', flags=ConstantBufferFlags)
    type       = fields.StructField('I', enum=ConstantBufferType)
    variables  = fields.ArrayField(ShaderVariable(), n=Dependency('.var_count'), offset=Dependency('.var_offset'))


class ResourceBinding(Chunk):
    name           = Name()
    input_type     = fields.StructField('I', enum=ShaderInputType)
    return_type    = fields.StructField('I', enum=ResourceReturnType)
    view_dimension = fields.StructField('I', enum=ViewDimension)
    sample_count   = fields.StructField('I')
    bind_point     = fields.StructField('I')
    bind_count     = fields.StructField('I')
    input_flags    = fields.StructField('I', flags=ShaderInputFlags)


class RdefChunk(Chunk):
    cb_count     = fields.StructField('I')
    cb_offset    = fields.StructField('I')
    bind_count   = fields.StructField('I')
    bind_offset  = fields.StructField('I')
    minor        = fields.StructField('B')
    major        = fields.StructField('B')
    program_type = fields.StructField('H', enum=ProgramType)
    flags        = fields.StructField('I')
    author       = Name()
    # shader model 5: the marker is usually "RD11" but it's not checked
    rd11_marker  = fields.StringField(4, condition=AtLeast('.major', 5))
    rd11         = fields.ArrayField(fields.StructField('I'), n=7, default=None, condition=AtLeast('.major', 5))
    constant_buffers  = fields.ArrayField(
        ConstantBuffer(), n=Dependency('.cb_count'), offset=Dependency('.cb_offset'))
    resource_bindings = fields.ArrayField(
        ResourceBinding(), n=Dependency('.bind_count'), offset=Dependency('.bind_offset'))

    @property
    def version(self):
        return (self.major.value, self.minor.value)

    def get_constant_buffer(self, name):
        for cb in self.constant_buffers:
            if cb.name.value == name:
                return cb

        raise KeyError(name)

    def get_resource_binding(self, name):
        for binding in self.resource_bindings:
            if binding.name.value == name:
                return binding

        raise KeyError(name)
