"""Inverse of the SHA-1 compression

Here we assume the inputs (a, b, c, d, e) are the *post-round* state.
Every SHA-1 round is a bijection on the working state once
the schedule word is known, so the pre-round state is recovered exactly.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from compress import MASK32, ROUNDS, State, _rotl, _rotr, round_constant, round_function


def solve_w(a_next: int, a: int, b: int, c: int, d: int, e: int, t: int) -> int:
    """Given a pre-round state and the desired new `a`, compute w.

    From the equation: a_next = ROTL5(a) + f(b, c, d) + e + k + w
    We solve: w = a_next - ROTL5(a) - f(b, c, d) - e - k
    """
    offset = (_rotl(a, 5) + round_function(t, b, c, d) + e + round_constant(t)) & MASK32
    return (a_next - offset) & MASK32


def compression_inv(a: int, b: int, c: int, d: int, e: int, w: int, t: int) -> State:
    """Invert one SHA-1 round.

    Parameters
    ----------
    a, b, c, d, e : int
        32-bit words representing the *post-round* working state.
    w : int
        Schedule word consumed by this round.
    t : int
        Round index in [0, 79].

    Returns
    -------
    (a_prev, b_prev, c_prev, d_prev, e_prev) : tuple[int, ...]
        The exact pre-round state.
    """
    # From the forward mapping:
    #
    #   b = a_old               => a_old = b
    #   c = ROTL30(b_old)       => b_old = ROTR30(c)
    #   d = c_old               => c_old = d
    #   e = d_old               => d_old = e
    #   a = ROTL5(a_old) + f(b_old, c_old, d_old) + e_old + k + w
    a_prev = b & MASK32
    b_prev = _rotr(c, 30)
    c_prev = d & MASK32
    d_prev = e & MASK32

    f = round_function(t, b_prev, c_prev, d_prev)
    e_prev = (a - _rotl(a_prev, 5) - f - round_constant(t) - w) & MASK32

    return a_prev, b_prev, c_prev, d_prev, e_prev


def compression80_inv(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    ws: Sequence[int],
) -> State:
    """Invert the full 80-round SHA-1 compression loop.

    Walk rounds 79..0 backwards using ``compression_inv``. This mirrors
    ``compress80`` in ``compress.py``.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"ws must have exactly {ROUNDS} elements, got {len(ws)}")

    state: State = (a & MASK32, b & MASK32, c & MASK32, d & MASK32, e & MASK32)
    for t in reversed(range(ROUNDS)):
        state = compression_inv(*state, ws[t], t)
    return state


def recover_schedule(
    states: Sequence[State],
) -> Tuple[int, ...]:
    """Recover the schedule words from a full per-round state trajectory.

    ``states[t]`` is the working state at the start of round t and
    ``states[80]`` the state after the last round.
    """
    if len(states) != ROUNDS + 1:
        raise ValueError(f"states must have exactly {ROUNDS + 1} elements, got {len(states)}")

    ws: List[int] = []
    for t in range(ROUNDS):
        ws.append(solve_w(states[t + 1][0], *states[t], t))
    return tuple(ws)
