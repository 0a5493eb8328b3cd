"""Load SHA-256 known-answer vectors from YAML and check them against `sha256`.

File format (see `vectors.yaml`):

    vectors:
      - name: abc
        message: "abc"            # hashed as UTF-8, or
        message_hex: "616263"     # raw bytes given as hex
        repeat: 1                 # optional, message repeated this many times
        digest: ba7816bf...15ad   # 64 lowercase hex characters

Usage:
    python vectors.py                  # checks the bundled vectors.yaml
    python vectors.py path/to/file.yaml
"""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from sha256 import sha256_hex


DEFAULT_VECTORS_PATH = Path(__file__).with_name("vectors.yaml")

_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


class VectorFormatError(ValueError):
    """A vector file does not have the expected shape."""


@dataclass(frozen=True)
class Vector:
    name: str
    message: bytes
    digest: str


@dataclass(frozen=True)
class VectorResult:
    name: str
    expected: str
    actual: str

    @property
    def passed(self) -> bool:
        return self.expected == self.actual


def _require_str(entry: dict, key: str, name) -> str:
    # YAML turns unquoted 0012 into the integer 10 and an empty value into None.
    value = entry[key]
    if not isinstance(value, str):
        raise VectorFormatError(
            f"vector {name!r}: {key!r} must be a string, got {type(value).__name__} "
            f"({value!r}); quote it in the YAML"
        )
    return value


def _parse_entry(index: int, entry) -> Vector:
    if not isinstance(entry, dict):
        raise VectorFormatError(f"vector #{index}: expected a mapping, got {type(entry).__name__}")

    name = entry.get("name", f"#{index}")
    if "digest" not in entry:
        raise VectorFormatError(f"vector {name!r}: missing 'digest'")

    has_text = "message" in entry
    has_hex = "message_hex" in entry
    if has_text == has_hex:
        raise VectorFormatError(
            f"vector {name!r}: exactly one of 'message' or 'message_hex' is required"
        )

    if has_text:
        message = _require_str(entry, "message", name).encode("utf-8")
    else:
        message_hex = _require_str(entry, "message_hex", name)
        try:
            message = bytes.fromhex(message_hex)
        except ValueError as e:
            raise VectorFormatError(f"vector {name!r}: bad message_hex: {e}") from e

    repeat = entry.get("repeat", 1)
    if not isinstance(repeat, int) or isinstance(repeat, bool) or repeat < 1:
        raise VectorFormatError(f"vector {name!r}: repeat must be a positive integer, got {repeat!r}")

    digest = _require_str(entry, "digest", name)
    if not _DIGEST_RE.match(digest):
        raise VectorFormatError(
            f"vector {name!r}: digest must be 64 lowercase hex characters, "
            f"got {len(digest)} characters"
        )

    return Vector(name=str(name), message=message * repeat, digest=digest)


def load_vectors(path: Path = DEFAULT_VECTORS_PATH) -> List[Vector]:
    """Read and validate every vector in the YAML file at `path`."""
    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if not isinstance(document, dict) or not isinstance(document.get("vectors"), list):
        raise VectorFormatError(f"{path}: expected a top-level 'vectors' list")

    return [_parse_entry(i, entry) for i, entry in enumerate(document["vectors"])]


def check_vectors(vectors: Sequence[Vector]) -> List[VectorResult]:
    """Hash every vector's message and pair the result with the expected digest."""
    return [
        VectorResult(name=v.name, expected=v.digest, actual=sha256_hex(v.message))
        for v in vectors
    ]


def report(results: Sequence[VectorResult]) -> bool:
    """Print one line per vector and a summary; return True if all passed."""
    failed = 0
    for result in results:
        if result.passed:
            print(f"[OK]   {result.name}")
        else:
            failed += 1
            print(f"[FAIL] {result.name}")
            print(f"         expected {result.expected}")
            print(f"         actual   {result.actual}")

    print(f"\n[SUMMARY] {len(results) - failed} passed, {failed} failed")
    return failed == 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check SHA-256 known-answer vectors from a YAML file"
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=DEFAULT_VECTORS_PATH,
        help=f"Vector file (default: {DEFAULT_VECTORS_PATH.name})",
    )
    args = parser.parse_args(argv)

    try:
        vectors = load_vectors(args.path)
    except (OSError, yaml.YAMLError, VectorFormatError) as e:
        sys.stderr.write(f"Error loading vectors from '{args.path}': {e}\n")
        return 1

    return 0 if report(check_vectors(vectors)) else 1


if __name__ == "__main__":
    raise SystemExit(main())
