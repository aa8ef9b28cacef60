"""Command-line interface for the pardu tool."""


import argparse
import logging
import sys
from pardu import report
from pardu._config import ConfigException
from pardu._config import default_config
from pardu._config import read_config
from pardu.walker import ConcurrentWalker
from pardu.walker import RootAccessError
from pardu.walker import SequentialWalker


_DESCRIPTION = """Summarize disk usage of the set of FILES, recursively for
directories. Only the total number of folders, files and bytes is printed.
You MUST specify one of the parameters -s, -p or -b."""

_MODES = {
    'sequential': [('Sequential', SequentialWalker)],
    'parallel': [('Parallel', ConcurrentWalker)],
    'both': [('Parallel', ConcurrentWalker),
             ('Sequential', SequentialWalker)],
}


class _UsageException(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_help()
        raise _UsageException(message)


def _configure_logging(verbose):
    # no-op if the root logger already has handlers
    logging.basicConfig(format='pardu: %(message)s')
    logging.getLogger('pardu').setLevel(
        logging.DEBUG if verbose else logging.WARNING)


def _run(mode, path, errors):
    print(f'{path}\n')
    for i, (label, cls) in enumerate(_MODES[mode]):
        if i:
            print('')
        result, seconds = report.timed_run(cls(errors=errors), path)
        print(report.format_run(label, result, seconds), end='')


def main(args=None):
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.

    A malformed invocation prints the usage info and returns 0.
    """
    parser = _ArgumentParser(description=_DESCRIPTION)
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument('-s', '--sequential', dest='mode',
                       action='store_const', const='sequential',
                       help='run in single threaded mode')
    modes.add_argument('-p', '--parallel', dest='mode',
                       action='store_const', const='parallel',
                       help='run in parallel mode '
                            '(uses all available processors)')
    modes.add_argument('-b', '--both', dest='mode',
                       action='store_const', const='both',
                       help='run in both parallel and single threaded mode; '
                            'runs parallel followed by sequential mode')
    parser.add_argument('-c', '--config', help='path to a TOML config file')
    parser.add_argument('-v', '--verbose', action='store_true', default=None,
                        help='log directories and files that were skipped')
    parser.add_argument('path', help='directory to summarize')

    try:
        args = parser.parse_args(args)
    except _UsageException:
        return 0

    try:
        cfg = read_config(args.config) if args.config else default_config()
    except ConfigException as e:
        print(e, file=sys.stderr)
        return 2

    verbose = cfg['verbose'] if args.verbose is None else args.verbose
    _configure_logging(verbose)

    try:
        _run(args.mode, args.path, cfg['errors'])
    except RootAccessError as e:
        print(f'could not read {e.path}', file=sys.stderr)
        print(e.__cause__, file=sys.stderr)
        return 2
    except OSError as e:
        print(f'walk failed for {args.path}', file=sys.stderr)
        print(e, file=sys.stderr)
        return 2
    return 0
