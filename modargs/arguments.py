'''
The MIT License (MIT)

See LICENSE.txt
'''
import operator

from modargs.parser import ArgumentsException, InvalidEncoding, parse, \
    to_bytes

import logging
log = logging.getLogger(__name__)


class UnknownArgumentsKind(ArgumentsException):
    def __init__(self, kind):
        msg = "unknown arguments kind: '{}'".format(kind)
        super(UnknownArgumentsKind, self).__init__(msg)


class RawArguments(object):
    """ unparsed content of an arguments file """

    def __init__(self, text):
        self.text = text

    def __repr__(self):
        return 'RawArguments[{!r}]'.format(self.text)

    def __eq__(self, other):
        return isinstance(other, RawArguments) and self.text == other.text

    @classmethod
    def parse(cls, data):
        try:
            return cls(to_bytes(data).decode('utf-8'))
        except UnicodeDecodeError as e:
            raise InvalidEncoding('arguments are not valid utf-8') from e

    def to_json(self):
        return self.text


class StdArguments(object):
    """ list of key=value pairs, where value is optional

        this is the most common way for a module to interpret its
        arguments.
    """

    def __init__(self, pairs):
        self.pairs = list(pairs)

    def __repr__(self):
        return 'StdArguments[{}]'.format(self.pairs)

    def __eq__(self, other):
        return isinstance(other, StdArguments) and self.pairs == other.pairs

    def __iter__(self):
        return iter(self.pairs)

    def __len__(self):
        return len(self.pairs)

    def __contains__(self, key):
        return any(k == key for k, _ in self.pairs)

    def get(self, key, default=None):
        """ value of the last pair named key """
        for k, v in reversed(self.pairs):
            if k == key:
                return v
        return default

    @classmethod
    def parse(cls, data):
        return cls(parse(data))

    def to_json(self):
        return {key: value for key, value in self.pairs}


KINDS = {
    'raw': RawArguments,
    'std': StdArguments,
}


def parse_arguments(data, kind='std'):
    try:
        cls = KINDS[kind]
    except KeyError:
        raise UnknownArgumentsKind(kind)
    return cls.parse(data)


def read_arguments_file(path, kind='std'):
    """ read and parse an arguments file

        the path is typically passed to a module as a command line
        argument. errors opening or reading the file are not caught.
    """
    with open(path, 'rb') as f:
        data = f.read()
    log.debug('read %d byte(s) from %s', len(data), path)
    return parse_arguments(data, kind)


_TRUE = ('yes', 'true', '1')
_FALSE = ('no', 'false', '0')
_FOLD = str.maketrans(
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ', 'abcdefghijklmnopqrstuvwxyz'
)


def cast_bool(value):
    """ interpret a string value as a bool

        understands yes/no, true/false and 1/0 in any (ascii) case.
        returns None if value is not recognized.
    """
    if not isinstance(value, str):
        return None
    value = value.translate(_FOLD)
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


def from_pairs(fn, pairs, empty, combine=operator.add):
    """ build a value from key-value pairs

        fn is called with (key, value) for each pair, in order, and each
        result is combined with the accumulated value, starting from
        empty. For example, with a Config class that supports '+':

            config = from_pairs(pair_to_config, arguments, Config())

        an exception raised by fn or combine stops the fold and is not
        caught.
    """
    result = empty
    for key, value in pairs:
        result = combine(result, fn(key, value))
    return result
