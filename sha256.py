"""SHA-256 digest of a byte string, built on `compress64` from `compress.py`.

This module provides:

- `sha256(data) -> bytes`: the 32-byte SHA-256 digest of `data`.
- `sha256_hex(data) -> str`: the same digest as 64 lowercase hex characters.

and the individual pipeline stages they are made of:

    pad_message -> split_into_blocks -> compress_block (per block) -> finalize_digest

Every call starts from the fixed initial hash value and keeps all of its
working state local, so concurrent calls need no coordination.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from compress import MASK32, compress64, _rotr


BLOCK_SIZE = 64
DIGEST_SIZE = 32

State = Tuple[int, int, int, int, int, int, int, int]
BytesLike = Union[bytes, bytearray, memoryview]

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
_H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def _small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (_rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)) & MASK32


def _small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (_rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)) & MASK32


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"object supporting the buffer API required, got {type(data).__name__}"
        )
    return bytes(data)


def pad_message(message: BytesLike) -> bytes:
    """Pad `message` to a whole number of 64-byte blocks.

    Appends the terminator byte 0x80, then ``(55 - len) mod 64`` zero bytes,
    then the message length in bits as a 64-bit big-endian integer. The
    result is the smallest multiple of 64 bytes that is at least
    ``len(message) + 9``, so an empty message pads to one block and a
    message with 56..63 bytes left in its last block spills into another.

    Messages of 2**61 bytes or more do not fit the 64-bit length field;
    ``int.to_bytes`` raises ``OverflowError`` for them.
    """
    message = _as_bytes(message)
    ml_bits = len(message) * 8
    zero_fill = (55 - len(message)) % BLOCK_SIZE

    return b"".join(
        (
            message,
            b"\x80",
            bytes(zero_fill),
            ml_bits.to_bytes(8, byteorder="big"),
        )
    )


def split_into_blocks(padded: bytes) -> List[bytes]:
    """Split a padded message into 512-bit (64-byte) blocks, in order.

    The input must come out of `pad_message`; any other length is a bug in
    the padding stage, not something a caller can fix.
    """
    if len(padded) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of {BLOCK_SIZE} bytes, "
            f"got {len(padded)}"
        )
    return [padded[i : i + BLOCK_SIZE] for i in range(0, len(padded), BLOCK_SIZE)]


def expand_message_schedule(w: List[int]) -> List[int]:
    """Extend the first 16 schedule words W[0..15] to the full W[0..63].

    Any words beyond the first 16 are ignored and recomputed. The caller's
    list is not modified.
    """
    if len(w) < 16:
        raise ValueError(
            f"Message schedule must contain at least 16 words, got {len(w)}"
        )

    schedule = [word & MASK32 for word in w[:16]] + [0] * 48
    for i in range(16, 64):
        s0 = _small_sigma0(schedule[i - 15])
        s1 = _small_sigma1(schedule[i - 2])
        schedule[i] = (s1 + schedule[i - 7] + s0 + schedule[i - 16]) & MASK32

    return schedule


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected {BLOCK_SIZE}-byte block, got {len(block)}")

    # First 16 words come directly from the block (big-endian).
    words = [
        int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big")
        for i in range(16)
    ]
    return expand_message_schedule(words)


def update_hash_state(state: State, registers: State) -> State:
    """Fold the post-round registers back into the hash state.

    This is the Davies-Meyer feed-forward:
        H_{i+1}[j] = (H_i[j] + registers[j]) mod 2^32
    """
    if len(state) != 8 or len(registers) != 8:
        raise ValueError(
            f"Hash state and registers must hold 8 words, "
            f"got {len(state)} and {len(registers)}"
        )
    return tuple((h + r) & MASK32 for h, r in zip(state, registers))


def compress_block(state: State, block: bytes) -> State:
    """Run one block through schedule expansion, 64 rounds and feed-forward."""
    schedule = build_message_schedule(block)
    registers = compress64(*state, schedule)
    return update_hash_state(state, registers)


def finalize_digest(state: State) -> bytes:
    """Convert the final hash state into the 32-byte SHA-256 digest."""
    if len(state) != 8:
        raise ValueError(f"Hash state must hold 8 words, got {len(state)}")
    return b"".join((word & MASK32).to_bytes(4, byteorder="big") for word in state)


def sha256(data: BytesLike) -> bytes:
    """Compute the SHA-256 digest of `data`.

    1. Pad the message and cut it into 64-byte blocks.
    2. Thread the hash state through `compress_block`, one block at a time.
    3. Serialize the final state big-endian.
    """
    state = _H0
    for block in split_into_blocks(pad_message(data)):
        state = compress_block(state, block)
    return finalize_digest(state)


def sha256_hex(data: BytesLike) -> str:
    """Return the SHA-256 digest of `data` as 64 lowercase hex characters."""
    return sha256(data).hex()
