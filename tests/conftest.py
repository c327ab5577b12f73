import struct
from pathlib import Path

import pytest

from dxbc.checksum import checksum


class Heap(object):
    '''Zeroed buffer where the records are placed at explicit offsets'''

    def __init__(self, size):
        self.data = bytearray(size)

    def put(self, offset, fmt, *values):
        struct.pack_into('<' + fmt, self.data, offset, *values)

    def put_bytes(self, offset, data):
        self.data[offset:offset + len(data)] = data

    def put_str(self, offset, value):
        self.put_bytes(offset, value.encode('utf-8') + b'\x00')

    def strings(self, offset, *values):
        '''Writes the strings one after the other, returning their offsets'''
        offsets = {}
        for value in values:
            offsets[value] = offset
            self.put_str(offset, value)
            offset += len(value.encode('utf-8')) + 1

        return offsets

    def __bytes__(self):
        return bytes(self.data)


def make_container(*chunks, fix_checksum=True):
    '''Build a container from couples (tag, body)'''
    header_size = 32 + 4 * len(chunks)

    offsets = []
    blobs = b''
    position = header_size
    for tag, body in chunks:
        offsets.append(position)
        blob = tag + struct.pack('<I', len(body)) + bytes(body)
        blobs += blob
        position += len(blob)

    data = bytearray(
        b'DXBC' + b'\x00' * 16 +
        struct.pack('<III', 1, position, len(chunks)) +
        struct.pack('<%dI' % len(chunks), *offsets) +
        blobs
    )

    if fix_checksum:
        struct.pack_into('<4I', data, 4, *checksum(data))

    return bytes(data)


def make_rdef_sm4(author='x', program_type=0xfffe):
    '''The smallest resource definition: no buffers, no bindings'''
    heap = Heap(28 + len(author) + 1)
    heap.put(0, 'IIIIBBHII', 0, 0, 0, 0, 0, 4, program_type, 0, 28)
    heap.put_str(28, author)

    return bytes(heap)


# layout of the shader model 5 resource definition built below
RDEF_CB_OFFSET = 60
RDEF_BIND_OFFSET = 84
RDEF_VAR_OFFSET = 148
RDEF_FLOAT4_OFFSET = 236
RDEF_STRUCT_OFFSET = 272
RDEF_MEMBERS_OFFSET = 308
RDEF_FLOAT_OFFSET = 332
RDEF_PARENT_OFFSET = 368
RDEF_STRINGS_OFFSET = 380


def make_rdef_sm5():
    '''One constant buffer "Globals" with a float4 "color" and a struct "light"
    (with default value) of two floats, a sampler and a texture.'''
    heap = Heap(512)
    s = heap.strings(
        RDEF_STRINGS_OFFSET,
        'Microsoft (R) HLSL Shader Compiler 10.1',
        'Globals', 'samp', 'tex', 'color', 'light', 'float4', 'Light', 'a', 'b',
    )

    # header
    heap.put(0, 'IIIIBBHII',
             1, RDEF_CB_OFFSET, 2, RDEF_BIND_OFFSET,
             0, 5, 0xffff, 0x100, s['Microsoft (R) HLSL Shader Compiler 10.1'])
    heap.put_bytes(28, b'RD11')
    heap.put(32, '7I', 60, 24, 32, 40, 36, 12, 0x20)

    # constant buffer (0x100 is not a known flag)
    heap.put(RDEF_CB_OFFSET, '6I', s['Globals'], 2, RDEF_VAR_OFFSET, 32, 0x101, 0)

    # bindings
    heap.put(RDEF_BIND_OFFSET, '8I', s['samp'], 3, 0, 0, 0, 0, 1, 0)
    heap.put(RDEF_BIND_OFFSET + 32, '8I', s['tex'], 2, 5, 4, 0xffffffff, 0, 1, 0xc)

    # variables: the first without default value
    heap.put(RDEF_VAR_OFFSET, '10I',
             s['color'], 0, 16, 0x2, RDEF_FLOAT4_OFFSET, 0,
             0xffffffff, 0, 0xffffffff, 0)
    heap.put(RDEF_VAR_OFFSET + 40, '12I',
             s['light'], 16, 8, 0x42, RDEF_STRUCT_OFFSET, 1,
             0x3f800000, 0x40000000,
             1, 2, 3, 4)

    # float4
    heap.put(RDEF_FLOAT4_OFFSET, '6HI5I', 1, 3, 1, 4, 0, 0, 0, 0, 0, 0x1234, 0, s['float4'])

    # struct with two members
    heap.put(RDEF_STRUCT_OFFSET, '6HI5I',
             5, 0, 1, 2, 0, 2, RDEF_MEMBERS_OFFSET,
             RDEF_PARENT_OFFSET, RDEF_PARENT_OFFSET + 4, 7, RDEF_PARENT_OFFSET + 8, s['Light'])
    heap.put(RDEF_MEMBERS_OFFSET, '3I', s['a'], RDEF_FLOAT_OFFSET, 0)
    heap.put(RDEF_MEMBERS_OFFSET + 12, '3I', s['b'], RDEF_FLOAT_OFFSET, 4)

    # float, shared by both the members
    heap.put(RDEF_FLOAT_OFFSET, '6HI5I', 0, 3, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0)

    heap.put(RDEF_PARENT_OFFSET, 'HHII', 5, 0xabcd, 0xdeadbeef, 0xcafebabe)

    return bytes(heap)


NESTED_TYPES_OFFSET = 80


def make_rdef_nested(depth):
    '''Shader model 4 resource definition with a single variable whose type is
    a chain of "depth" structs, each one with a single member of the next type;
    the innermost is a float.'''
    heap = Heap(NESTED_TYPES_OFFSET + 28 * depth)
    heap.put(0, 'IIIIBBHII', 1, 32, 0, 0, 0, 4, 0xfffe, 0, 28)
    heap.put_str(28, 'x')

    heap.put(32, '6I', 28, 1, 56, 4, 0, 0)
    heap.put(56, '6I', 28, 0, 4, 0, NESTED_TYPES_OFFSET, 0)

    for level in range(depth):
        offset = NESTED_TYPES_OFFSET + 28 * level
        if level == depth - 1:
            heap.put(offset, '6HI', 0, 3, 1, 1, 0, 0, 0)
            continue

        heap.put(offset, '6HI', 5, 0, 1, 1, 0, 1, offset + 16)
        heap.put(offset + 16, '3I', 28, offset + 28, 0)

    return bytes(heap)


def make_signature(*elements):
    '''Elements are (name, semantic index, system value, component type, register, mask)'''
    count = len(elements)
    strings_offset = 8 + 24 * count

    heap = Heap(strings_offset + sum(len(_[0]) + 1 for _ in elements))
    heap.put(0, 'II', count, 8)

    position = strings_offset
    for idx, (name, index, system_value, component_type, register, mask) in enumerate(elements):
        heap.put(8 + 24 * idx, '5IBB', position, index, system_value, component_type, register, mask, 0)
        heap.put_str(position, name)
        position += len(name) + 1

    return bytes(heap)


MOV = 0x05000036
RET = 0x0100003e
CUSTOMDATA = 0x00000035


def make_shex(*words, version=0x50):
    '''The instruction length is calculated from the words passed'''
    return struct.pack('<II', version, 2 + len(words)) + struct.pack('<%dI' % len(words), *words)


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent


@pytest.fixture
def rdef_sm4():
    return make_rdef_sm4()


@pytest.fixture
def rdef_sm5():
    return make_rdef_sm5()


@pytest.fixture
def container():
    '''A complete pixel shader with all the chunks understood'''
    return make_container(
        (b'RDEF', make_rdef_sm5()),
        (b'ISGN', make_signature(('SV_POSITION', 0, 1, 3, 0, 0xf), ('TEXCOORD', 0, 0, 3, 1, 0x3))),
        (b'OSGN', make_signature(('SV_TARGET', 0, 64, 3, 0, 0xf))),
        (b'SHEX', make_shex(MOV, 0x00102022, 0x00000000, 0x00101e46, 0x00000001, RET)),
        (b'STAT', struct.pack('<37I', *range(37))),
    )
