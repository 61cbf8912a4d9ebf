"""Terminal front end for reproducible random data generation.

The seed is read from ``--file`` or, when no file is given, from standard
input. The generated bytes are written to standard output, so the command is
meant to sit in a pipeline::

    echo -n "abc" | rdgen -l100 | xxd -p -c 0

Logging goes to standard error and is only enabled with ``--verbose`` (or
``RDGEN_VERBOSE=1``) so that standard output carries nothing but data.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Sequence

from rdgen import __version__
from rdgen.generator.bounded import Bounded, BoundedEmitter, LengthBound, Unbounded
from rdgen.generator.seed_digest import DataStreamError

VERBOSE_ENV_VAR = "RDGEN_VERBOSE"
EXAMPLE_USAGE = 'echo -n "abc" | rdgen -l100 | xxd -p -c 0'

logger = logging.getLogger(__name__)


class RdgenCliError(RuntimeError):
    """Raised when the command line input cannot be used as a seed source."""


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid length: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"length must be non-negative, got {number}")
    return number


def _env_flag(name: str) -> bool:
    env_value = os.environ.get(name)
    if env_value is None:
        return False
    return env_value.lower() not in {"", "0", "false", "no"}


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rdgen",
        description=(
            "Generate reproducible random data for testing based on a provided seed."
        ),
        epilog=(
            "Pipe some seed into rdgen and specify the length of the output to "
            "generate deterministic, random data of any length you need. "
            f"Example: {EXAMPLE_USAGE}"
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    length_group = parser.add_mutually_exclusive_group(required=True)
    length_group.add_argument(
        "-l",
        "--length",
        type=_non_negative_int,
        metavar="NUMBER",
        help="The length of the data to be output, in bytes",
    )
    length_group.add_argument(
        "--unbounded",
        action="store_true",
        help="Write data forever instead of stopping at a fixed length",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help=(
            "Path of the seed file to read. If not provided, the seed is read"
            " from stdin."
        ),
    )
    parser.add_argument(
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help=f"Log progress to stderr (can also set {VERBOSE_ENV_VAR}=1)",
    )
    parser.add_argument(
        "--quiet",
        dest="verbose",
        action="store_false",
        help="Disable progress logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args([] if argv is None else list(argv))

    if args.file is not None:
        args.file = args.file.expanduser()
    if args.verbose is None:
        args.verbose = _env_flag(VERBOSE_ENV_VAR)

    args.bound = Unbounded() if args.unbounded else Bounded(args.length)
    return args


def _open_seed_file(path: Path) -> BinaryIO:
    if not path.exists():
        raise RdgenCliError(f"File not found: {path}")
    if not path.is_file():
        raise RdgenCliError(f"Path provided is not a file or unreadable: {path}")
    try:
        return path.open("rb")
    except OSError as exc:
        raise RdgenCliError(f"Opening file failed: {path}") from exc


def _build_emitter(
    seed_path: Optional[Path],
    bound: LengthBound,
    stdin: BinaryIO,
) -> BoundedEmitter:
    if seed_path is None:
        logger.info("Reading seed from stdin")
        return BoundedEmitter.from_stream(stdin, bound)

    logger.info("Reading seed from %s", seed_path)
    with _open_seed_file(seed_path) as fh:
        return BoundedEmitter.from_stream(fh, bound)


def run(
    seed_path: Optional[Path],
    bound: LengthBound,
    *,
    stdin: BinaryIO,
    stdout: BinaryIO,
) -> int:
    """Digest the seed source and write the generated data to ``stdout``.

    Returns the number of bytes written.
    """

    emitter = _build_emitter(seed_path, bound, stdin)
    if isinstance(bound, Bounded):
        logger.info("Generating %d bytes", bound.target)
    else:
        logger.info("Generating data until the output is closed")
    written = emitter.write_to(stdout)
    stdout.flush()
    logger.info("Wrote %d bytes", written)
    return written


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = _parse_args(list(argv) if argv is not None else sys.argv[1:])
    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        run(
            args.file,
            args.bound,
            stdin=sys.stdin.buffer,
            stdout=sys.stdout.buffer,
        )
    except (RdgenCliError, DataStreamError) as exc:
        print(f"rdgen: {exc}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        # Downstream closed the pipe (e.g. ``| head -c N``); point stdout at
        # devnull so the interpreter's final flush does not fail again.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
        return 0
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
