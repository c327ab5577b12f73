'''
A consumer that keeps everything: useful when you want the whole container
in memory instead of reacting to the single records.
'''
from .parser import Consumer, Action, Parser, State
from .checksum import checksum
from .streams import Decoder
from .exceptions import DXBCException


class DXBCContainer(object):

    def __init__(self):
        self.header = None
        self.rdef = None
        self.isgn = None
        self.osgn = None
        self.shex = None
        self.stat = None
        self.instructions = []
        self.checksum = None
        self.checksum_valid = None

    def __repr__(self):
        chunks = [_ for _ in ('rdef', 'isgn', 'osgn', 'shex', 'stat') if getattr(self, _) is not None]
        return f'<{self.__class__.__name__}(chunks={chunks}, instructions={len(self.instructions)})>'


class ContainerCollector(Consumer):

    def __init__(self):
        self.container = DXBCContainer()

    def consume_header(self, header):
        self.container.header = header
        return Action.CONTINUE

    def consume_rdef(self, rdef):
        self.container.rdef = rdef
        return Action.CONTINUE

    def consume_isgn(self, isgn):
        self.container.isgn = isgn
        return Action.CONTINUE

    def consume_osgn(self, osgn):
        self.container.osgn = osgn
        return Action.CONTINUE

    def consume_shex(self, shex):
        self.container.shex = shex
        return Action.CONTINUE

    def consume_stat(self, stat):
        self.container.stat = stat
        return Action.CONTINUE

    def consume_instruction(self, offset, instruction):
        self.container.instructions.append((offset, instruction))
        return Action.CONTINUE


class ParseError(DXBCException):
    '''The container couldn't be parsed: it wraps the terminal state'''

    def __init__(self, result):
        self.result = result
        super().__init__(chain=getattr(result.error, 'chain', []))

    def __str__(self):
        msg = self.result.state.name
        if self.result.error is not None:
            msg += f': {self.result.error}'
        return msg


def load(data, logger=None):
    '''Parse the whole container; the data is anything a Decoder accepts
    (a path too). It raises ParseError if the parsing doesn't complete.'''
    decoder = data if isinstance(data, Decoder) else Decoder(data)
    collector = ContainerCollector()

    result = Parser(decoder, collector, logger=logger).parse()

    if result.state != State.COMPLETE:
        raise ParseError(result)

    container = collector.container
    container.checksum = checksum(decoder.obj)
    container.checksum_valid = container.header.digest == container.checksum

    return container
