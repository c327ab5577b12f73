'''
# Input/output signature chunks (ISGN, OSGN)

They share the same layout: a list of elements describing the registers
that the shader reads from the previous stage or writes to the next one.
'''
from ..core import Chunk
from .. import fields
from ..properties import Dependency
from .enum import SystemValue, RegisterComponentType


class SignatureElement(Chunk):
    name           = fields.PointerField(fields.CStringField())
    semantic_index = fields.StructField('I')
    system_value   = fields.StructField('I', enum=SystemValue)
    component_type = fields.StructField('I', enum=RegisterComponentType)
    register       = fields.StructField('I')
    mask           = fields.StructField('B')
    rw_mask        = fields.StructField('B')
    padding        = fields.StringField(2)

    def __str__(self):
        components = ''.join(c if self.mask.value & (1 << i) else '_' for i, c in enumerate('xyzw'))
        return f'{self.name.value}{self.semantic_index.value} v{self.register.value}.{components} {self.system_value.value.name} {self.component_type.value.name}'


class SignatureChunk(Chunk):
    element_count = fields.StructField('I')
    reserved      = fields.StructField('I')  # always 8
    elements      = fields.ArrayField(SignatureElement(), n=Dependency('.element_count'))
