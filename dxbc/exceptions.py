class DXBCException(Exception):
    '''Base class to extend in order to throw exception in dxbc.

    It takes a single argument that represents the chain of the layer that
    caused the exception (innermost field first).
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    @property
    def path(self):
        '''dotted path from the outermost record to the failing field'''
        return '.'.join(str(_) for _ in reversed(self.chain))


class DecoderException(DXBCException):
    '''A read was not possible at the given offset.

    The offset is absolute with respect to the buffer the parsing started from.'''

    def __init__(self, offset, chain=None):
        self.offset = offset
        super().__init__(chain=chain)

    def __str__(self):
        msg = f'{self.__class__.__name__} at offset 0x{self.offset:x}'
        if self.chain:
            msg += f' (field {self.path})'
        return msg


class StreamExpected(DecoderException):
    '''The read would cross the bound of the current scope'''
    pass


class LimitReached(DecoderException):
    '''A slice read asked for more bytes than remaining in scope'''
    pass


class DecodeStrFailed(DecoderException):

    def __init__(self, offset, cause, chain=None):
        self.cause = cause
        super().__init__(offset, chain=chain)

    def __str__(self):
        return f'{super().__str__()}: {self.cause}'


# alias kept for symmetry with owned strings
DecodeStringFailed = DecodeStrFailed


class DecodeEnumFailed(DecoderException):
    '''An integer doesn't map to any member of a validated enumeration.'''

    def __init__(self, offset, enum=None, value=None, chain=None):
        self.enum = enum
        self.value = value
        super().__init__(offset, chain=chain)

    def __str__(self):
        name = self.enum.__name__ if self.enum else 'enum'
        return f'{super().__str__()}: value 0x{self.value:x} is not a valid {name}'


class MagicException(DXBCException):
    pass


class ChunkIncorrectException(DXBCException):
    '''The chunk is readable but structurally not valid.'''

    def __init__(self, reason, chain=None):
        self.reason = reason
        super().__init__(chain=chain)

    def __str__(self):
        return self.reason
