'''
# Shader bytecode chunk (SHEX, SHDR for shader model 4)

The chunk starts with a version token and the length (in dwords) of the whole
program, followed by the instructions. Only the framing of the instructions is
decoded: each one starts with an opcode token

    31  30      24 23                 11 10        0
    .--.----------.---------------------.-----------.
    |ex|  length  |  opcode specific    |  opcode   |
    '--'----------'---------------------'-----------'

where the length counts the dwords of the instruction, opcode token included.
The "customdata" opcode is the exception: its length is in the following dword.
'''
from bitstring import Bits

from ..core import Chunk
from .. import fields
from ..properties import Dependency
from ..exceptions import ChunkIncorrectException, DecodeEnumFailed
from .enum import ShexProgramType


OPCODE_CUSTOMDATA = 0x35


class VersionToken(fields.StructField):
    '''minor version in bits 0-3, major in bits 4-7, program type in the upper half'''

    def __init__(self, **kw):
        super().__init__('I', **kw)
        self.program_type = None

    @property
    def bits(self):
        return Bits(uint=self.value, length=32)

    @property
    def minor(self):
        return self.bits[28:32].uint

    @property
    def major(self):
        return self.bits[24:28].uint

    def _unpack(self, decoder):
        super()._unpack(decoder)
        self.program_type = self._unpack_program_type(decoder)

    def _unpack_program_type(self, decoder):
        value = self.bits[0:16].uint
        try:
            return ShexProgramType(value)
        except ValueError:
            raise DecodeEnumFailed(decoder.get_offset(absolute=True) - 4, enum=ShexProgramType, value=value)

    def __str__(self):
        return f'{self.program_type.name.lower()[0]}s_{self.major}_{self.minor}'


class ShexHeader(Chunk):
    version            = VersionToken()
    instruction_length = fields.StructField('I')  # in dwords, this header included


class OpcodeToken(fields.StructField):

    def __init__(self, **kw):
        super().__init__('I', **kw)
        self.length = 0

    @property
    def bits(self):
        return Bits(uint=self.value, length=32)

    @property
    def opcode(self):
        return self.bits[21:32].uint

    @property
    def extended(self):
        return self.bits[0]

    @property
    def operand_count(self):
        '''dwords following the token(s) of the opcode'''
        return self.length - (2 if self.opcode == OPCODE_CUSTOMDATA else 1)

    def _unpack(self, decoder):
        super()._unpack(decoder)

        if self.opcode == OPCODE_CUSTOMDATA:
            self.length = decoder.read_u32()
        else:
            self.length = self.bits[1:8].uint

        if self.length == 0 or self.operand_count < 0:
            raise ChunkIncorrectException(
                f'instruction at offset 0x{self.field_offset:x} with invalid length {self.length}')


class SparseInstruction(Chunk):
    '''An instruction whose operands are not interpreted'''
    token    = OpcodeToken()
    operands = fields.ArrayField(fields.StructField('I'), n=Dependency('.token.operand_count'))

    @property
    def opcode(self):
        return self.token.opcode

    @property
    def length(self):
        return self.token.length

    @property
    def extended(self):
        return self.token.extended

    @property
    def words(self):
        return self.operands.values
