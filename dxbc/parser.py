'''
The parser walks the chunks of a container and hands what it finds to a
Consumer, a class with a method ("hook") for each kind of record.

Each hook returns an Action that tells the parser if it has to continue, stop
or abort with an error of the consumer itself.

    class CountInstructions(Consumer):
        def __init__(self):
            self.count = 0

        def consume_instruction(self, offset, instruction):
            self.count += 1
            return Action.CONTINUE

    result = Parser(data, CountInstructions()).parse()
    assert result.state == State.COMPLETE
'''
import logging
from enum import Enum, auto

from .streams import Decoder
from .header import DXBCHeader, ChunkHeader
from .chunks.rdef import RdefChunk
from .chunks.isgn import SignatureChunk
from .chunks.shex import ShexHeader, SparseInstruction
from .chunks.stat import StatChunk
from .exceptions import (
    DecoderException,
    MagicException,
    ChunkIncorrectException,
)


logger = logging.getLogger(__name__)


class ActionType(Enum):
    CONTINUE = auto()
    STOP     = auto()
    ERROR    = auto()


class Action(object):
    '''What a consumer asks to the parser after a hook; use Action.CONTINUE,
    Action.STOP or Action.error(whatever).'''

    def __init__(self, type, error=None):
        self.type = type
        self.error = error

    def __repr__(self):
        if self.type == ActionType.ERROR:
            return f'<{self.__class__.__name__}.error({self.error!r})>'
        return f'<{self.__class__.__name__}.{self.type.name}>'

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.type == other.type and self.error is other.error

    def __hash__(self):
        return hash((self.type, id(self.error)))

    @classmethod
    def error(cls, error):
        return cls(ActionType.ERROR, error=error)


Action.CONTINUE = Action(ActionType.CONTINUE)
Action.STOP = Action(ActionType.STOP)


class State(Enum):
    COMPLETE                = auto()
    CONSUMER_STOP_REQUESTED = auto()
    CONSUMER_ERROR          = auto()
    HEADER_INCORRECT        = auto()
    CHUNK_INCORRECT         = auto()
    DECODER_ERROR           = auto()


class ParseResult(object):
    '''The terminal state of a parse with the error that caused it, if any'''

    def __init__(self, state, error=None):
        self.state = state
        self.error = error

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.state.name}, error={self.error!r})>'

    def __bool__(self):
        return self.state == State.COMPLETE


class ParserTermination(Exception):
    '''Internal: ends the chunk loop carrying the terminal state'''

    def __init__(self, state, error=None):
        self.state = state
        self.error = error
        super().__init__()


class Consumer(object):
    '''Subclass and override the hooks you need; the ones not overridden
    let the parsing continue.'''

    def initialize(self):
        return Action.CONTINUE

    def finalize(self):
        return Action.CONTINUE

    def consume_header(self, header: DXBCHeader):
        return Action.CONTINUE

    def consume_rdef(self, rdef: RdefChunk):
        return Action.CONTINUE

    def consume_isgn(self, isgn: SignatureChunk):
        return Action.CONTINUE

    def consume_osgn(self, osgn: SignatureChunk):
        return Action.CONTINUE

    def consume_shex(self, shex: ShexHeader):
        return Action.CONTINUE

    def consume_stat(self, stat: StatChunk):
        return Action.CONTINUE

    def consume_instruction(self, offset: int, instruction: SparseInstruction):
        return Action.CONTINUE


def try_consume(action):
    if action is None or action.type == ActionType.CONTINUE:
        return

    if action.type == ActionType.STOP:
        raise ParserTermination(State.CONSUMER_STOP_REQUESTED)

    raise ParserTermination(State.CONSUMER_ERROR, error=action.error)


tag2chunk = {
    b'RDEF': (RdefChunk, 'consume_rdef'),
    b'ISGN': (SignatureChunk, 'consume_isgn'),
    b'OSGN': (SignatureChunk, 'consume_osgn'),
    b'SHEX': (ShexHeader, 'consume_shex'),
    b'SHDR': (ShexHeader, 'consume_shex'),
    b'STAT': (StatChunk, 'consume_stat'),
}

BYTECODE_TAGS = (b'SHEX', b'SHDR')


class Parser(object):
    '''Drives a Consumer through the chunks of a container.

    The data can be anything a Decoder accepts; the logger receives the
    diagnostics about the chunks that are not recognized.'''

    def __init__(self, data, consumer: Consumer, logger=None):
        self.decoder = data if isinstance(data, Decoder) else Decoder(data)
        self.consumer = consumer
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def parse(self) -> ParseResult:
        try:
            self._parse()
        except ParserTermination as e:
            return ParseResult(e.state, error=e.error)
        except MagicException as e:
            return ParseResult(State.HEADER_INCORRECT, error=e)
        except ChunkIncorrectException as e:
            self.logger.error(f'chunk incorrect at {e.path}: {e}')
            return ParseResult(State.CHUNK_INCORRECT, error=e)
        except DecoderException as e:
            self.logger.error(f'failed to decode: {e}')
            return ParseResult(State.DECODER_ERROR, error=e)

        return ParseResult(State.COMPLETE)

    def _parse(self):
        try_consume(self.consumer.initialize())

        header = self.parse_header()
        try_consume(self.consumer.consume_header(header))

        for chunk_offset in header.chunk_offsets.values:
            self.parse_chunk(chunk_offset)

        try_consume(self.consumer.finalize())

    def parse_header(self):
        self.decoder.seek_mut(0)

        return DXBCHeader(self.decoder)

    def parse_chunk(self, chunk_offset):
        chunk_header = ChunkHeader(self.decoder.seek_mut(chunk_offset))
        tag = bytes(chunk_header.tag.value)
        length = chunk_header.length.value

        decoder = self.decoder.scoped_decoder(length)

        if tag not in tag2chunk:
            self.logger.warning('%d: Incorrect or unimplemented chunk type %r' % (chunk_offset, tag))
            return

        chunk_cls, hook_name = tag2chunk[tag]

        self.logger.debug('parsing chunk %r at offset 0x%x (length %d)' % (tag, chunk_offset, length))

        try:
            chunk = chunk_cls(decoder)
        except (DecoderException, ChunkIncorrectException) as e:
            e.chain.append(tag.decode('latin1'))
            raise

        try_consume(getattr(self.consumer, hook_name)(chunk))

        if tag in BYTECODE_TAGS:
            # whatever follows the declared length of the program is padding
            self.parse_instructions(decoder.limited(chunk.instruction_length.value * 4), tag)

    def parse_instructions(self, decoder, tag):
        '''The rest of the bytecode chunk is a sequence of variable-length
        instructions; the offset passed to the consumer is relative to the chunk.'''
        while not decoder.eof():
            offset = decoder.get_offset()
            try:
                instruction = SparseInstruction(decoder)
            except (DecoderException, ChunkIncorrectException) as e:
                e.chain.append(f'instruction@0x{offset:x}')
                e.chain.append(tag.decode('latin1'))
                raise

            try_consume(self.consumer.consume_instruction(offset, instruction))


def parse(data, consumer=None, logger=None) -> ParseResult:
    '''Shortcut to parse a container with a Consumer (by default one that does nothing)'''
    return Parser(data, consumer if consumer is not None else Consumer(), logger=logger).parse()
