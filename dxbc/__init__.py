"""
# DXBC container parser.

DXBC is the container used for the compiled bytecode of the GPU shaders: a
header with a checksum, followed by a table of offsets to the chunks. Each
chunk has a four letters tag and a length, the ones understood here are

 1. RDEF: resource definitions, i.e. the reflection data (constant buffers, variables and their types, bindings)
 2. ISGN/OSGN: input and output signatures
 3. SHEX/SHDR: the bytecode, decoded only as far as the framing of the instructions goes
 4. STAT: statistics

A record of the format is described declaratively as a Chunk made of Fields
(see dxbc.core and dxbc.fields), all of them unpacked through a Decoder that
never reads past the scope it was given (dxbc.streams). Since the records
refer to each other by offset, a corrupted file fails with an exception
instead of reading the data of a neighbouring chunk.

Two ways to use it:

 1. dxbc.parser.Parser: it calls a hook of a Consumer for each record found, the
    consumer can stop the parsing at any time.
 2. dxbc.container.load(): it returns the whole container.

The checksum of the container can be calculated with dxbc.checksum.checksum().
"""
