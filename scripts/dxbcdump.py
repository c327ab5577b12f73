#!/usr/bin/env python3
'''
Dump the content of a DXBC container

 $ dxbcdump.py shader.dxbc
'''
import sys
import os
import logging

from dxbc.container import load, ParseError
from dxbc.checksum import digest_hex


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <dxbc file>' % progname)
    sys.exit(1)


def dump_header(container):
    hdr = container.header
    status = 'OK' if container.checksum_valid else f'MISMATCH (calculated {digest_hex(container.checksum)})'
    print(f'''DXBC Header:
  Checksum:                          {digest_hex(hdr.digest)} {status}
  Size:                              {hdr.size.value} (bytes)
  Number of chunks:                  {hdr.chunk_count.value}''')


def dump_type(ty, indent):
    print(f'{" " * indent}{ty}')
    for member in ty.members:
        print(f'{" " * indent}  +0x{member.offset.value:02x} {member.name.value}:')
        dump_type(member.type.value, indent + 4)


def dump_rdef(rdef):
    print(f'''
Resource definitions:
  Program type:                      {rdef.program_type.value.name}
  Version:                           {rdef.major.value}.{rdef.minor.value}
  Creator:                           {rdef.author.value}
  Flags:                             0x{rdef.flags.value:x}''')

    for cb in rdef.constant_buffers:
        print(f'''
  cbuffer {cb.name.value} ({cb.type.value.name}, {cb.size.value} bytes)''')
        for var in cb.variables:
            print(f'''    [0x{var.offset.value:04x} {var.size.value:4d}] {var.name.value} {var.flags.value}''')
            dump_type(var.type.value, 6)
            if var.default_value.value is not None:
                print(f'''      default: {" ".join("0x%08x" % _ for _ in var.default_value.values)}''')

    if len(rdef.resource_bindings):
        print('''
  Name                           Type                           Format         Dim              Slot Count''')
    for binding in rdef.resource_bindings:
        print(f'''  {binding.name.value:<30} {binding.input_type.value.name:<30} {binding.return_type.value.name:<14} {binding.view_dimension.value.name:<16} {binding.bind_point.value:>4} {binding.bind_count.value:>5}''')


def dump_signature(title, signature):
    print(f'''
{title}:''')
    for element in signature.elements:
        print(f'  {element}')


def dump_stat(stat):
    print('''
Statistics:''')
    for name, field in stat.get_fields():
        if name.startswith('unknown'):
            continue
        print(f'  {name:<34} {field.value}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        container = load(path)
    except ParseError as e:
        logger.error(f'failed to parse \'{path}\': {e}')
        sys.exit(2)

    dump_header(container)

    if container.rdef:
        dump_rdef(container.rdef)
    if container.isgn:
        dump_signature('Input signature', container.isgn)
    if container.osgn:
        dump_signature('Output signature', container.osgn)
    if container.shex:
        print(f'''
Bytecode {container.shex.version}: {len(container.instructions)} instructions''')
    if container.stat:
        dump_stat(container.stat)
