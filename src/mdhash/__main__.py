"""
mdhash - Command Line Entry Point

Prints digests in coreutils format (``<hex>  <name>``):

    python -m mdhash -a sha1 README.md
    python -m mdhash -s "Hello World"
    cat data.bin | python -m mdhash
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import selftest
from .stream import ALGORITHMS, get_algorithm, hash_file, hash_stream


DEFAULT_ALGORITHM = 'sha256'

logger = logging.getLogger('mdhash')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mdhash',
        description='Compute SHA-1 / SHA-224 / SHA-256 digests.',
    )
    parser.add_argument('-a', '--algorithm', default=DEFAULT_ALGORITHM,
                        choices=sorted(ALGORITHMS),
                        help=f'hash algorithm (default: {DEFAULT_ALGORITHM})')
    parser.add_argument('-u', '--upper', action='store_true',
                        help='print uppercase hex')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log progress to stderr')
    parser.add_argument('--self-test', action='store_true',
                        help='check all algorithms against test vectors and OpenSSL')
    parser.add_argument('-s', '--string', metavar='TEXT',
                        help='hash the UTF-8 encoding of TEXT instead of files')
    parser.add_argument('files', nargs='*', metavar='FILE',
                        help="files to hash; '-' or none reads stdin")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.string is not None and args.files:
        parser.error("-s/--string cannot be combined with FILE arguments")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    if args.self_test:
        failures = selftest.run()
        for failure in failures:
            print(f"FAIL {failure.algorithm} len={failure.length}: "
                  f"expected {failure.expected}, got {failure.actual}", file=sys.stderr)
        print("self-test " + ("failed" if failures else "passed"))
        return 1 if failures else 0

    algorithm = get_algorithm(args.algorithm)
    spec = 'X' if args.upper else 'x'

    if args.string is not None:
        print(f"{algorithm.hash(args.string):{spec}}  \"{args.string}\"")
        return 0

    status = 0
    for name in args.files or ['-']:
        if name == '-':
            digest = hash_stream(algorithm, sys.stdin.buffer)
        else:
            try:
                digest = hash_file(algorithm, name)
            except OSError as e:
                print(f"mdhash: {name}: {e.strerror or e}", file=sys.stderr)
                status = 1
                continue
        print(f"{digest:{spec}}  {name}")

    logger.debug("Hashed %d input(s) with %s", len(args.files) or 1, algorithm.name)
    return status


if __name__ == '__main__':
    sys.exit(main())
