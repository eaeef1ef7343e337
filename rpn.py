#!/usr/bin/env python
"""The infix-to-postfix command-line interface"""

BANNER = """
Welcome to rpn!
To convert an expression, simply type one in and hit RETURN.
To set a variable, type VAR_NAME=EXPRESSION and hit RETURN.
Type 'quit' to exit.
"""

PROMPT = '>>>> '
QUIT = 'quit'

import argparse
import logging
import sys

from functools import partial
stderr = partial(print, file=sys.stderr)

import rpnlib

logger = logging.getLogger(__name__)

def convert(line):
    """Convert one line of input, printing the result or the error.

    Returns True if the line converted cleanly.
    """
    variable, infix = rpnlib.tokenize(rpnlib.strip_whitespace(line))
    logger.debug("infix tokens: %r", list(infix))
    try:
        postfix = rpnlib.to_rpn(infix)
    except rpnlib.ConversionError as ex:
        stderr('error:', ex)
        return False
    if variable:
        print('%s = %s' % (variable, postfix))
    else:
        print(postfix)
    return True

def repl():
    try:
        while True:
            line = rpnlib.strip_whitespace(input(PROMPT))
            if not line:
                continue
            if line.lower() == QUIT:
                stderr('Exiting...')
                break
            convert(line)
    except EOFError:
        stderr('\ncaught EOF')
    except KeyboardInterrupt:
        stderr('\ninterrupted')

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='rpn',
        description='Convert infix expressions to reverse Polish notation.')
    parser.add_argument('expression', nargs='*',
                        help='expressions to convert; starts the interactive '
                             'prompt when none are given')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help="don't print the banner")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log the infix tokens of every expression')
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.expression:
        ok = [convert(expr) for expr in args.expression]
        return 0 if all(ok) else 1

    if not args.quiet:
        stderr(BANNER)
    repl()
    return 0

if __name__ == '__main__':
    sys.exit(main())
