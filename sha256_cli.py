"""Command line front end for the pure-Python SHA-256 in `sha256.py`.

Usage:
    python sha256_cli.py "message"          # digest of the UTF-8 encoding
    python sha256_cli.py -f path/to/file    # digest of the file's raw bytes
    python sha256_cli.py -f -               # digest of stdin
    python sha256_cli.py --check [vectors.yaml]
    python sha256_cli.py -- "-message"      # text that starts with '-'

The hex digest is printed to stdout. Usage and I/O errors go to stderr and
exit with status 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from sha256 import BLOCK_SIZE, pad_message, sha256_hex
import vectors


def _read_input(filename: str) -> bytes:
    if filename == "-":
        return sys.stdin.buffer.read()
    with open(filename, "rb") as f:
        return f.read()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256-cli",
        description="Compute SHA-256 digests with a pure-Python implementation",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "message",
        nargs="?",
        help="Text to hash (encoded as UTF-8)",
    )
    mode.add_argument(
        "-f",
        "--file",
        metavar="PATH",
        help="Hash the raw bytes of PATH ('-' for stdin)",
    )
    mode.add_argument(
        "--check",
        nargs="?",
        const=str(vectors.DEFAULT_VECTORS_PATH),
        metavar="VECTORS",
        help="Run known-answer vectors from a YAML file (default: bundled vectors.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report the padded length and block count on stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return 0 if e.code == 0 else 1

    if args.check is not None:
        return vectors.main([args.check])

    if args.file is not None:
        try:
            data = _read_input(args.file)
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
    else:
        data = args.message.encode("utf-8")

    if args.verbose:
        padded_len = len(pad_message(data))
        sys.stderr.write(
            f"input: {len(data):,} bytes, padded: {padded_len:,} bytes, "
            f"blocks: {padded_len // BLOCK_SIZE:,}\n"
        )

    print(sha256_hex(data))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
