'''
The MIT License (MIT)

See LICENSE.txt
'''
import argparse
import json
import logging
import logging.config
import sys

from ergaleia.config import Config, validate_bool

from modargs.arguments import read_arguments_file, cast_bool
from modargs.parser import ArgumentsException

log = logging.getLogger(__name__)


def define_config():
    config = Config()
    config._define('log.name', value='MODARGS')
    config._define('log.level', value='warning', env='MODARGS_LOG_LEVEL')
    config._define('output.kind', value='std')
    config._define('output.indent', validator=int)
    config._define('output.sort_keys', value=False, validator=validate_bool)
    return config


def setup_log(config):

    config = config.log
    level = config.level.upper()

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': config.name +
                ' [%(levelname)s] %(name)s:%(lineno)d> %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
                'stream': 'ext://sys.stderr',
            },
        },
        'loggers': {
            '': {
                'handlers': ['console'],
                'level': level,
            },
        },
    })
    log.info('log level set to %s', level)


def build_parser():
    aparser = argparse.ArgumentParser(
        description='parse a key=value arguments file and display it as json',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    aparser.add_argument(
        'path', nargs='?', help='arguments file'
    )
    aparser.add_argument(
        '--config', help='configuration file'
    )
    aparser.add_argument(
        '--raw', dest='raw', default=False, action='store_true',
        help="display the file content without parsing it"
    )
    aparser.add_argument(
        '--bool', dest='bool_key', metavar='KEY',
        help='display the value of KEY interpreted as a boolean'
    )
    aparser.add_argument(
        '-c', '--config-only',
        dest='config_only', action='store_true', default=False,
        help='display config values and exit'
    )
    return aparser


def main(argv=None):
    aparser = build_parser()
    args = aparser.parse_args(argv)

    config = define_config()
    if args.config:
        config._load(args.config)
    setup_log(config)

    if args.config_only:
        print(config)
        return 0

    if args.path is None:
        aparser.error('the following arguments are required: path')

    kind = 'raw' if args.raw else config.output.kind
    if args.bool_key is not None and kind == 'raw':
        aparser.error('--bool cannot be used with raw arguments')

    try:
        arguments = read_arguments_file(args.path, kind)
    except OSError as e:
        log.error('unable to read %s: %s', args.path, e)
        return 2
    except ArgumentsException as e:
        log.error('invalid arguments file %s: %s', args.path, e)
        return 1

    if args.bool_key is not None:
        result = cast_bool(arguments.get(args.bool_key))
    else:
        result = arguments.to_json()

    print(json.dumps(
        result,
        indent=config.output.indent,
        sort_keys=config.output.sort_keys,
    ))
    return 0


if __name__ == '__main__':
    sys.exit(main())
