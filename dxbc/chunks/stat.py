'''
# Statistics chunk (STAT)

Counters computed by the compiler. Shader model 4 writes 29 dwords, shader
model 5 adds the tessellation related ones for a total of 37 dwords.

The slots whose meaning is not known are kept as "unknown".
'''
from ..core import Chunk
from .. import fields


STAT_SIZE_SM4 = 29 * 4
STAT_SIZE_SM5 = 37 * 4


def Counter():
    return fields.StructField('I')


class StatChunk(Chunk):
    instruction_count             = Counter()
    temp_register_count           = Counter()
    def_count                     = Counter()
    dcl_count                     = Counter()
    float_instruction_count       = Counter()
    int_instruction_count         = Counter()
    uint_instruction_count        = Counter()
    static_flow_control_count     = Counter()
    dynamic_flow_control_count    = Counter()
    macro_instruction_count       = Counter()
    temp_array_count              = Counter()
    array_instruction_count       = Counter()
    cut_instruction_count         = Counter()
    emit_instruction_count        = Counter()
    texture_normal_instructions   = Counter()
    texture_load_instructions     = Counter()
    texture_comp_instructions     = Counter()
    texture_bias_instructions     = Counter()
    texture_gradient_instructions = Counter()
    mov_instruction_count         = Counter()
    movc_instruction_count        = Counter()
    conversion_instruction_count  = Counter()
    unknown0                      = Counter()
    input_primitive               = Counter()
    gs_output_topology            = Counter()
    gs_max_output_vertex_count    = Counter()
    unknown1                      = Counter()
    unknown2                      = Counter()
    unknown3                      = Counter()
    # shader model 5
    unknown4                      = Counter()
    control_points                = Counter()
    hs_output_primitive           = Counter()
    hs_partitioning               = Counter()
    tessellator_domain            = Counter()
    unknown5                      = Counter()
    unknown6                      = Counter()
    unknown7                      = Counter()

    SM5_FIELDS = [
        'unknown4',
        'control_points',
        'hs_output_primitive',
        'hs_partitioning',
        'tessellator_domain',
        'unknown5',
        'unknown6',
        'unknown7',
    ]

    def __init__(self, *args, **kwargs):
        self._extended = True
        super().__init__(*args, **kwargs)

    def get_fields(self):
        original_fields = super().get_fields()

        if self._extended:
            return original_fields

        return [_ for _ in original_fields if _[0] not in self.SM5_FIELDS]

    @property
    def is_extended(self):
        return self._extended

    def _unpack(self, decoder):
        # the layout depends on the size of the chunk
        self._extended = decoder.remaining >= STAT_SIZE_SM5
        super()._unpack(decoder)
