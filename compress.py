"""Forward SHA-1 compression (single round and full 80-round loop).

Given the current working state words `(a, b, c, d, e)`, the round index `t`
and the message schedule word `w`, one round computes:

    f    = ch(b, c, d)      for  0 <= t < 20
         = b ^ c ^ d        for 20 <= t < 40
         = maj(b, c, d)     for 40 <= t < 60
         = b ^ c ^ d        for 60 <= t < 80
    temp = (a <<< 5) + f + e + k[t] + w

    a' = temp
    b' = a
    c' = b <<< 30
    d' = c
    e' = d

All additions are performed modulo 2**32, as in SHA-1.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union


MASK32 = 0xFFFFFFFF

ROUNDS = 80

# SHA-1 round constants from FIPS 180-4, one per 20-round stage.
K_VALUES: Tuple[int, ...] = (
    0x5A827999,
    0x6ED9EBA1,
    0x8F1BBCDC,
    0xCA62C1D6,
)

State = Tuple[int, int, int, int, int]


def _rotl(x: int, n: int) -> int:
    """Left-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x << n) | (x >> (32 - n))) & MASK32


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _check_round(t: int) -> None:
    if not 0 <= t < ROUNDS:
        raise ValueError(f"Round index must be in [0, {ROUNDS - 1}], got {t}")


def round_constant(t: int) -> int:
    """Return the round constant k used by round `t`."""
    _check_round(t)
    return K_VALUES[t // 20]


def round_function(t: int, b: int, c: int, d: int) -> int:
    """Evaluate the nonlinear function f selected by round `t`."""
    _check_round(t)
    if t < 20:
        # ch: b selects between c and d
        return ((b & c) | ((~b) & d)) & MASK32
    if t < 40:
        return (b ^ c ^ d) & MASK32
    if t < 60:
        # maj
        return ((b & c) | (b & d) | (c & d)) & MASK32
    return (b ^ c ^ d) & MASK32


def compression(a: int, b: int, c: int, d: int, e: int, w: int, t: int) -> State:
    """Perform one SHA-1 compression round.

    Parameters
    ----------
    a, b, c, d, e : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[t]`.
    t : int
        Round index in [0, 79]; selects both f and k.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new) : tuple[int, ...]
        Updated working state after one round, all reduced modulo 2**32.
    """
    a &= MASK32
    b &= MASK32
    c &= MASK32
    d &= MASK32
    e &= MASK32
    w &= MASK32

    f = round_function(t, b, c, d)
    k = round_constant(t)

    temp = (_rotl(a, 5) + f + e + k + w) & MASK32

    return temp, a, _rotl(b, 30), c, d


def compress80(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    ws: Sequence[int],
    *,
    track_a: bool = False,
) -> Union[State, Tuple[State, List[int]]]:
    """Run the full 80-round SHA-1 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e : int
        Initial working state words (typically the current hash value).
    ws : Sequence[int]
        The 80-word message schedule `w[0..79]` for this block.
    track_a : bool
        When set, also return the value of register `a` at the start of
        every round.

    Returns
    -------
    (a, b, c, d, e) : tuple[int, ...]
        Final working state words after 80 rounds, or
        ``((a, b, c, d, e), a_values)`` when `track_a` is set.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress80 expects {ROUNDS} message schedule words, got {len(ws)}")

    a_values: List[int] = []
    state: State = (a & MASK32, b & MASK32, c & MASK32, d & MASK32, e & MASK32)
    for t in range(ROUNDS):
        if track_a:
            a_values.append(state[0])
        state = compression(*state, ws[t], t)

    if track_a:
        return state, a_values
    return state
