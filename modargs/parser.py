'''
The MIT License (MIT)

See LICENSE.txt
'''
from collections import namedtuple
import string

import logging
log = logging.getLogger(__name__)


Pair = namedtuple('Pair', 'key value')


NEWLINE = 10
EQUAL = 61
BACKSLASH = 92
QUOTES = frozenset(b'"\'')
HORIZONTAL = frozenset(b' \t')
WHITESPACE = frozenset(b' \t\n\x0b\x0c\r')
KEY = frozenset((string.ascii_letters + string.digits + '-_').encode('ascii'))
SIMPLE_STOP = WHITESPACE | QUOTES | {BACKSLASH}

ESCAPES = {
    ord('0'): b'\x00',
    ord('n'): b'\n',
    ord('r'): b'\r',
    ord('t'): b'\t',
    ord('"'): b'"',
    ord("'"): b"'",
    ord('\\'): b'\\',
    ord(' '): b' ',
}


class ArgumentsException(Exception):
    pass


class ParseError(ArgumentsException):

    reason = 'parsing failed'

    def __init__(self, offset):
        self.offset = offset
        super(ParseError, self).__init__(
            '{} at byte {}'.format(self.reason, offset)
        )


class UnexpectedByte(ParseError):
    reason = 'unexpected byte'


class UnterminatedQuote(ParseError):
    reason = 'missing closing quote'


class InvalidEscape(ParseError):
    reason = 'invalid escape sequence'


class TrailingData(ParseError):
    reason = 'unexpected data after end of line'


class InvalidEncoding(ArgumentsException):
    pass


class Cursor(object):
    """ position within a byte buffer

        every grammar production is a method; a production either
        consumes what it recognizes or raises a ParseError
    """

    def __init__(self, data):
        self.data = data
        self.pos = 0

    @property
    def peek(self):
        if self.pos < len(self.data):
            return self.data[self.pos]

    @property
    def is_done(self):
        return self.pos >= len(self.data)

    def skip(self, allowed):
        start = self.pos
        while self.peek in allowed:
            self.pos += 1
        return self.pos - start

    def take(self, allowed):
        start = self.pos
        self.skip(allowed)
        return self.data[start:self.pos]

    def take_until(self, stop):
        start = self.pos
        while not self.is_done and self.data[self.pos] not in stop:
            self.pos += 1
        return self.data[start:self.pos]

    def expect(self, byte):
        if self.peek != byte:
            raise UnexpectedByte(self.pos)
        self.pos += 1

    def line(self):
        self.skip(HORIZONTAL)
        pairs = self.pairs()
        self.skip(HORIZONTAL)
        self.expect(NEWLINE)
        if not self.is_done:
            raise TrailingData(self.pos)
        return pairs

    def pairs(self):
        if self.peek not in KEY:
            return []
        pairs = [self.pair()]
        while True:
            mark = self.pos
            if self.skip(HORIZONTAL) == 0:
                break
            if self.peek not in KEY:
                self.pos = mark  # trailing whitespace, not a separator
                break
            pairs.append(self.pair())
        return pairs

    def pair(self):
        key = self.take(KEY).decode('ascii')
        if self.peek != EQUAL:
            return Pair(key, None)
        self.pos += 1
        return Pair(key, self.value())

    def value(self):
        start = self.pos
        if self.peek in QUOTES:
            raw = self.quoted()
        else:
            raw = self.simple()
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidEncoding(
                'value at byte {} is not valid utf-8'.format(start)
            ) from e

    def simple(self):
        chunks = []
        while True:
            c = self.peek
            if c == BACKSLASH:
                chunks.append(self.escape())
            elif c is None or c in SIMPLE_STOP:
                return b''.join(chunks)
            else:
                chunks.append(self.take_until(SIMPLE_STOP))

    def quoted(self):
        start = self.pos
        quote = self.data[self.pos]
        stop = frozenset((quote, BACKSLASH))
        self.pos += 1
        chunks = []
        while True:
            c = self.peek
            if c is None:
                raise UnterminatedQuote(start)
            if c == quote:
                self.pos += 1
                return b''.join(chunks)
            if c == BACKSLASH:
                chunks.append(self.escape())
            else:
                chunks.append(self.take_until(stop))

    def escape(self):
        start = self.pos
        self.pos += 1
        try:
            decoded = ESCAPES[self.peek]
        except KeyError:
            raise InvalidEscape(start)
        self.pos += 1
        return decoded


def to_bytes(data):
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(
        'expecting bytes or str, not {}'.format(type(data).__name__)
    )


def parse(data):
    """ parse a line of key[=value] tokens into a list of Pairs

        the grammar:

            <white-space>  := [\\t ]
            <key>          := [0-9a-zA-Z_-]+
            <escape>       := "\\" [trn0"'\\ ]
            <simple-value> := ([^ whitespace "'\\] | <escape>)*
            <quoted-value> := '"' ([^"\\] | <escape>)* '"'
                           |  "'" ([^'\\] | <escape>)* "'"
            <key-value>    := <key> ("=" (<quoted-value> | <simple-value>))?
            <line>         := <white-space>* (<key-value>
                              (<white-space>+ <key-value>)*)?
                              <white-space>* "\\n"

        a missing final newline is supplied. a key without '=' has a value
        of None; a key with '=' and nothing after it has a value of ''.

        Raises ParseError (or a subclass) on malformed input and
        InvalidEncoding if a value is not utf-8.
    """
    data = to_bytes(data)
    if not data.endswith(b'\n'):
        data += b'\n'
    pairs = Cursor(data).line()
    log.debug('parsed %d pair(s) from %d byte(s)', len(pairs), len(data))
    return pairs


def _quote(value):
    return '"{}"'.format(value.replace('\\', '\\\\').replace('"', '\\"'))


def render(pairs):
    """ render pairs as a line that parse will map back to the same pairs

        values are always double-quoted, so only backslash and
        double-quote need escaping
    """
    tokens = []
    for key, value in pairs:
        if not isinstance(key, str) or not key or \
                not KEY.issuperset(key.encode('utf-8')):
            raise ValueError('invalid key: {!r}'.format(key))
        if value is None:
            tokens.append(key)
        elif isinstance(value, str):
            tokens.append('{}={}'.format(key, _quote(value)))
        else:
            raise ValueError(
                'value for {} must be str or None, not {}'.format(
                    key, type(value).__name__)
            )
    return (' '.join(tokens) + '\n').encode('utf-8')
