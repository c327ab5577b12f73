'''
This module contains the constant values used throughout the DXBC chunks.

Note: use Enum for value that cannot ORed together, Flag for the others;
the former are validated while unpacking, the latter lose the unknown bits.
'''
from enum import Enum, Flag


class ProgramType(Enum):
    PIXEL    = 0xffff
    VERTEX   = 0xfffe
    HULL     = 0x4853
    GEOMETRY = 0x4753
    DOMAIN   = 0x4453
    COMPUTE  = 0x4353


class ConstantBufferType(Enum):
    CBUFFER            = 0
    TBUFFER            = 1
    INTERFACE_POINTERS = 2
    RESOURCE_BIND_INFO = 3


class ConstantBufferFlags(Flag):
    NONE        = 0
    USER_PACKED = 0x1


class ShaderVariableFlags(Flag):
    NONE                = 0
    USER_PACKED         = 0x1
    USED                = 0x2
    INTERFACE_POINTER   = 0x4
    INTERFACE_PARAMETER = 0x8


class ShaderInputFlags(Flag):
    NONE                = 0
    USER_PACKED         = 0x1
    COMPARISON_SAMPLER  = 0x2
    TEXTURE_COMPONENT_0 = 0x4
    TEXTURE_COMPONENT_1 = 0x8
    TEXTURE_COMPONENTS  = 0xc
    UNUSED              = 0x10


class ShaderVariableClass(Enum):
    SCALAR            = 0
    VECTOR            = 1
    MATRIX_ROWS       = 2
    MATRIX_COLUMNS    = 3
    OBJECT            = 4
    STRUCT            = 5
    INTERFACE_CLASS   = 6
    INTERFACE_POINTER = 7


class ShaderVariableType(Enum):
    VOID                           = 0
    BOOL                           = 1
    INT                            = 2
    FLOAT                          = 3
    STRING                         = 4
    TEXTURE                        = 5
    TEXTURE1D                      = 6
    TEXTURE2D                      = 7
    TEXTURE3D                      = 8
    TEXTURECUBE                    = 9
    SAMPLER                        = 10
    SAMPLER1D                      = 11
    SAMPLER2D                      = 12
    SAMPLER3D                      = 13
    SAMPLERCUBE                    = 14
    PIXELSHADER                    = 15
    VERTEXSHADER                   = 16
    PIXELFRAGMENT                  = 17
    VERTEXFRAGMENT                 = 18
    UINT                           = 19
    UINT8                          = 20
    GEOMETRYSHADER                 = 21
    RASTERIZER                     = 22
    DEPTHSTENCIL                   = 23
    BLEND                          = 24
    BUFFER                         = 25
    CBUFFER                        = 26
    TBUFFER                        = 27
    TEXTURE1DARRAY                 = 28
    TEXTURE2DARRAY                 = 29
    RENDERTARGETVIEW               = 30
    DEPTHSTENCILVIEW               = 31
    TEXTURE2DMS                    = 32
    TEXTURE2DMSARRAY               = 33
    TEXTURECUBEARRAY               = 34
    HULLSHADER                     = 35
    DOMAINSHADER                   = 36
    INTERFACE_POINTER              = 37
    COMPUTESHADER                  = 38
    DOUBLE                         = 39
    RWTEXTURE1D                    = 40
    RWTEXTURE1DARRAY               = 41
    RWTEXTURE2D                    = 42
    RWTEXTURE2DARRAY               = 43
    RWTEXTURE3D                    = 44
    RWBUFFER                       = 45
    BYTEADDRESS_BUFFER             = 46
    RWBYTEADDRESS_BUFFER           = 47
    STRUCTURED_BUFFER              = 48
    RWSTRUCTURED_BUFFER            = 49
    APPEND_STRUCTURED_BUFFER       = 50
    CONSUME_STRUCTURED_BUFFER      = 51


class ShaderInputType(Enum):
    CBUFFER                        = 0
    TBUFFER                        = 1
    TEXTURE                        = 2
    SAMPLER                        = 3
    UAV_RWTYPED                    = 4
    STRUCTURED                     = 5
    UAV_RWSTRUCTURED               = 6
    BYTEADDRESS                    = 7
    UAV_RWBYTEADDRESS              = 8
    UAV_APPEND_STRUCTURED          = 9
    UAV_CONSUME_STRUCTURED         = 10
    UAV_RWSTRUCTURED_WITH_COUNTER  = 11


class ResourceReturnType(Enum):
    NOT_APPLICABLE = 0
    UNORM          = 1
    SNORM          = 2
    SINT           = 3
    UINT           = 4
    FLOAT          = 5
    MIXED          = 6
    DOUBLE         = 7
    CONTINUED      = 8


class ViewDimension(Enum):
    UNKNOWN          = 0
    BUFFER           = 1
    TEXTURE1D        = 2
    TEXTURE1DARRAY   = 3
    TEXTURE2D        = 4
    TEXTURE2DARRAY   = 5
    TEXTURE2DMS      = 6
    TEXTURE2DMSARRAY = 7
    TEXTURE3D        = 8
    TEXTURECUBE      = 9
    TEXTURECUBEARRAY = 10
    BUFFEREX         = 11


class ShexProgramType(Enum):
    '''The program type as encoded in the version token of the bytecode'''
    PIXEL    = 0
    VERTEX   = 1
    GEOMETRY = 2
    HULL     = 3
    DOMAIN   = 4
    COMPUTE  = 5


class SystemValue(Enum):
    UNDEFINED                    = 0
    POSITION                     = 1
    CLIP_DISTANCE                = 2
    CULL_DISTANCE                = 3
    RENDER_TARGET_ARRAY_INDEX    = 4
    VIEWPORT_ARRAY_INDEX         = 5
    VERTEX_ID                    = 6
    PRIMITIVE_ID                 = 7
    INSTANCE_ID                  = 8
    IS_FRONT_FACE                = 9
    SAMPLE_INDEX                 = 10
    FINAL_QUAD_EDGE_TESSFACTOR   = 11
    FINAL_QUAD_INSIDE_TESSFACTOR = 12
    FINAL_TRI_EDGE_TESSFACTOR    = 13
    FINAL_TRI_INSIDE_TESSFACTOR  = 14
    FINAL_LINE_DETAIL_TESSFACTOR = 15
    FINAL_LINE_DENSITY_TESSFACTOR = 16
    TARGET                       = 64
    DEPTH                        = 65
    COVERAGE                     = 66
    DEPTH_GREATER_EQUAL          = 67
    DEPTH_LESS_EQUAL             = 68


class RegisterComponentType(Enum):
    UNKNOWN = 0
    UINT32  = 1
    SINT32  = 2
    FLOAT32 = 3
