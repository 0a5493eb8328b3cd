"""SHA-256 compression: the round function and the 64-round loop.

Given the working registers `(a, b, c, d, e, f, g, h)`, the round constant
`k` and the message schedule word `w`, one round computes:

    T1 = h + S1(e) + ch(e, f, g) + k + w
    T2 = S0(a) + maj(a, b, c)

    a' = T1 + T2        e' = d + T1
    b' = a  c' = b  d' = c
    f' = e  g' = f  h' = g

with

    S0(x)  = (x >>> 2) ^ (x >>> 13) ^ (x >>> 22)
    S1(x)  = (x >>> 6) ^ (x >>> 11) ^ (x >>> 25)
    ch     = (x & y) ^ (~x & z)
    maj    = (x & y) ^ (x & z) ^ (y & z)

All additions are performed modulo 2**32. The feed-forward that adds the
registers back into the hash state lives in `sha256.py`.
"""

from __future__ import annotations

from typing import Sequence, Tuple


MASK32 = 0xFFFFFFFF

# Round constants k[0..63]: first 32 bits of the fractional parts of the
# cube roots of the first 64 primes (FIPS 180-4, section 4.2.2).
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _big_sigma0(x: int) -> int:
    """SHA-256 function Σ0, applied to register a."""
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def _big_sigma1(x: int) -> int:
    """SHA-256 function Σ1, applied to register e."""
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def _ch(x: int, y: int, z: int) -> int:
    """Choose: bits of y where x is set, bits of z elsewhere."""
    return ((x & y) ^ (~x & z)) & MASK32


def _maj(x: int, y: int, z: int) -> int:
    """Bitwise majority of x, y and z."""
    return (x & y) ^ (x & z) ^ (y & z)


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current round registers.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Round registers after one round, all reduced modulo 2**32.
    """
    temp1 = (h + _big_sigma1(e) + _ch(e, f, g) + k + w) & MASK32
    temp2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a & MASK32,
        b & MASK32,
        c & MASK32,
        (d + temp1) & MASK32,
        e & MASK32,
        f & MASK32,
        g & MASK32,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial round registers (a copy of the current hash state).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Round registers after 64 rounds, before the feed-forward.
    """
    if len(ws) != 64:
        raise ValueError(f"compress64 expects 64 message schedule words, got {len(ws)}")

    # Same arithmetic as `compression`, with the registers kept in locals.
    a, b, c, d, e, f, g, h = (x & MASK32 for x in (a, b, c, d, e, f, g, h))
    rotr = _rotr
    for k, w in zip(K_VALUES, ws):
        s1 = rotr(e, 6) ^ rotr(e, 11) ^ rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        temp1 = (h + s1 + ch + k + w) & MASK32
        s0 = rotr(a, 2) ^ rotr(a, 13) ^ rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (s0 + maj) & MASK32

        h = g
        g = f
        f = e
        e = (d + temp1) & MASK32
        d = c
        c = b
        b = a
        a = (temp1 + temp2) & MASK32

    return a, b, c, d, e, f, g, h
