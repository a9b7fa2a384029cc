"""SHA-1 implementation using the `compress80` function from `compress.py`.

This module provides:

- `sha1(data: bytes) -> bytes`: compute the SHA-1 digest of arbitrary data.
- CLI usage: `python sha1_cli.py "message"` prints the hex digest of the
  UTF-8 encoding of `"message"`.
"""

from __future__ import annotations

import sys
from typing import Dict, Iterable, List, Sequence, Tuple

import yaml

from compress import MASK32, State, _rotl, compress80, compression


# Initial hash values H0..H4, as per FIPS 180-4.
_H0: State = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
    0xC3D2E1F0,
)

BLOCK_SIZE = 64

# The length field is 64 bits wide; longer messages are rejected.
MAX_MESSAGE_BITS = (1 << 64) - 1


def _check_length(length_bits: int) -> None:
    if length_bits < 0:
        raise ValueError(f"Message length must be non-negative, got {length_bits} bits")
    if length_bits > MAX_MESSAGE_BITS:
        raise ValueError(
            f"Message of {length_bits} bits exceeds the SHA-1 limit of 2**64 - 1 bits"
        )


def _pad_message(message: bytes) -> bytes:
    """Pad the input message according to the SHA-1 specification.

    The result length is a multiple of 64 bytes (512 bits).
    """
    ml_bits = len(message) * 8
    _check_length(ml_bits)

    # Append the '1' bit (0x80), then k zero bytes so that length ≡ 56 mod 64.
    padded = bytearray(message)
    padded.append(0x80)
    padded.extend(b"\x00" * ((56 - len(padded)) % BLOCK_SIZE))

    # Append 64-bit big-endian length in bits.
    padded.extend(ml_bits.to_bytes(8, byteorder="big"))
    return bytes(padded)


def _pad_message_bits(message_bytes: bytes, length_bits: int) -> bytes:
    """Pad a message with explicit bit length.

    The message occupies the high `length_bits` bits of `message_bytes`;
    any bits after it in the last byte are ignored.
    """
    _check_length(length_bits)
    if len(message_bytes) != (length_bits + 7) // 8:
        raise ValueError(
            f"{length_bits} bits need {(length_bits + 7) // 8} bytes, got {len(message_bytes)}"
        )

    remaining_bits = length_bits % 8
    if remaining_bits == 0:
        return _pad_message(message_bytes)

    padded = bytearray(message_bytes)

    # Keep the message bits of the last byte, set the next bit, clear the rest.
    mask = (0xFF << (8 - remaining_bits)) & 0xFF
    padded[-1] = (padded[-1] & mask) | (0x80 >> remaining_bits)

    padded.extend(b"\x00" * ((56 - len(padded)) % BLOCK_SIZE))
    padded.extend(length_bits.to_bytes(8, byteorder="big"))
    return bytes(padded)


def _chunks(data: bytes, size: int) -> Iterable[bytes]:
    """Yield successive `size`-byte chunks from `data`."""
    for i in range(0, len(data), size):
        yield data[i : i + size]


#
# Public pipeline stages
#

def pad_message(message) -> bytes:
    """Pad a raw message to a multiple of 64 bytes (512 bits).

    Accepts ``bytes`` or an iterable of byte values (0–255).
    """
    return _pad_message(bytes(message))


def split_into_blocks(padded) -> List[bytes]:
    """Split a padded message into 512-bit (64-byte) blocks, in order."""
    data = bytes(padded)
    if len(data) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of 64 bytes, got {len(data)}"
        )
    return list(_chunks(data, BLOCK_SIZE))


def block_to_words(block) -> List[int]:
    """Interpret a 64-byte block as sixteen big-endian 32-bit words."""
    block = bytes(block)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")
    return [int.from_bytes(word, byteorder="big") for word in _chunks(block, 4)]


def expand_message_schedule(w: Sequence[int]) -> List[int]:
    """Expand W[0..15] to the 80-word schedule W[0..79].

    Only the first 16 words of `w` are read; the caller's list is left
    untouched.
    """
    if len(w) < 16:
        raise ValueError(
            f"Message schedule must contain at least 16 words, got {len(w)}"
        )

    schedule = [word & MASK32 for word in w[:16]]
    for t in range(16, 80):
        schedule.append(
            _rotl(schedule[t - 3] ^ schedule[t - 8] ^ schedule[t - 14] ^ schedule[t - 16], 1)
        )
    return schedule


def init_message_schedule(M_i) -> List[int]:
    """Build the full 80-word schedule for a 512-bit block `M_i`."""
    return expand_message_schedule(block_to_words(M_i))


def load_hash_state(H_i: State) -> State:
    """Load the 5-word chaining value H_i into working registers a..e."""
    if not isinstance(H_i, tuple) or len(H_i) != 5:
        raise ValueError(
            f"H_i must be a tuple of 5 integers, got {type(H_i)} "
            f"with length {len(H_i) if hasattr(H_i, '__len__') else 'N/A'}"
        )
    return H_i


def update_hash_state(H_i: State, a: int, b: int, c: int, d: int, e: int) -> State:
    """Add the working registers back into the chaining value.

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    h0, h1, h2, h3, h4 = H_i
    return (
        (h0 + a) & MASK32,
        (h1 + b) & MASK32,
        (h2 + c) & MASK32,
        (h3 + d) & MASK32,
        (h4 + e) & MASK32,
    )


def finalize_digest(state: State) -> bytes:
    """Convert a final chaining value H_N into the 20-byte SHA-1 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


#
# High-level helpers
#

def _schedules(padded: bytes) -> List[List[int]]:
    return [init_message_schedule(block) for block in split_into_blocks(padded)]


def sha1_before(data: bytes) -> Tuple[State, List[List[int]]]:
    """Prepare all inputs needed before compression.

    Returns the initial 5-word state and one 80-word schedule per block,
    so a custom compression pipeline can be plugged in:

        state, schedules = sha1_before(data)
        for ws in schedules:
            state = update_hash_state(state, *my_compress80(*state, ws))
        digest = sha1_after(state)
    """
    return _H0, _schedules(_pad_message(data))


def sha1_before_bits(message_bytes: bytes, length_bits: int) -> Tuple[State, List[List[int]]]:
    """Like `sha1_before`, for a message of `length_bits` bits."""
    return _H0, _schedules(_pad_message_bits(message_bytes, length_bits))


def sha1_after(final_state: State) -> bytes:
    """Finalize the digest from the state left after the last block."""
    return finalize_digest(final_state)


def _run(state: State, schedules: List[List[int]]) -> State:
    # Blocks are strictly sequential: each consumes the previous state.
    for ws in schedules:
        state = update_hash_state(state, *compress80(*load_hash_state(state), ws))
    return state


def _run_tracking(state: State, schedules: List[List[int]]) -> Tuple[State, List[List[int]]]:
    all_a_values: List[List[int]] = []
    for ws in schedules:
        work_out, a_values = compress80(*state, ws, track_a=True)
        all_a_values.append(a_values)
        state = update_hash_state(state, *work_out)
    return state, all_a_values


def sha1(data: bytes) -> bytes:
    """Compute the SHA-1 digest of `data`."""
    state, schedules = sha1_before(data)
    return sha1_after(_run(state, schedules))


def sha1_bits(message_bytes: bytes, length_bits: int) -> bytes:
    """Compute SHA-1 for a message with explicit bit length."""
    state, schedules = sha1_before_bits(message_bytes, length_bits)
    return sha1_after(_run(state, schedules))


def sha1_with_a_tracking(data: bytes) -> Tuple[bytes, List[List[int]]]:
    """Compute SHA-1 while tracking register a at each round.

    Returns:
        (digest, a_values_per_block)
        where a_values_per_block[block_idx] is a list of 80 a values
    """
    state, a_values = _run_tracking(*sha1_before(data))
    return sha1_after(state), a_values


def sha1_bits_with_a_tracking(
    message_bytes: bytes,
    length_bits: int,
) -> Tuple[bytes, List[List[int]]]:
    """Bit-level variant of `sha1_with_a_tracking`."""
    state, a_values = _run_tracking(*sha1_before_bits(message_bytes, length_bits))
    return sha1_after(state), a_values


def _hexwords(words: Iterable[int]) -> List[str]:
    return [f"{word:08x}" for word in words]


def sha1_trace(data: bytes) -> Dict:
    """Compute SHA-1 and record every intermediate pipeline stage.

    The result only holds plain strings, ints, lists and dicts so it can be
    dumped as YAML directly.
    """
    padded = _pad_message(data)
    trace: Dict = {
        "message_hex": data.hex(),
        "message_length_bits": len(data) * 8,
        "padded_hex": padded.hex(),
        "blocks": [],
    }

    state = _H0
    for block_idx, block in enumerate(split_into_blocks(padded)):
        ws = init_message_schedule(block)
        rounds = []
        working = state
        for t in range(80):
            working = compression(*working, ws[t], t)
            rounds.append(_hexwords(working))
        next_state = update_hash_state(state, *working)
        trace["blocks"].append(
            {
                "block_index": block_idx,
                "state_in": _hexwords(state),
                "schedule": _hexwords(ws),
                "rounds": rounds,
                "state_out": _hexwords(next_state),
            }
        )
        state = next_state

    trace["digest_hex"] = sha1_after(state).hex()
    return trace


def _hexdigest(data: bytes) -> str:
    """Convenience helper to return the SHA-1 hex digest of `data`."""
    return sha1(data).hex()


_USAGE = (
    "Usage:\n"
    "  python sha1_cli.py \"message\"\n"
    "  python sha1_cli.py -f path/to/file\n"
    "  python sha1_cli.py --trace \"message\"\n"
)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Without flags, the single argument is interpreted as a UTF-8 string and
    hashed. With `-f`, the following argument is treated as a filename whose
    raw bytes are hashed. With `--trace`, every pipeline stage for the
    message is printed as YAML instead of the bare digest.
    """
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        sys.stderr.write(_USAGE)
        return 1

    # File mode: `-f <filename>`
    if argv[0] == "-f":
        if len(argv) != 2:
            sys.stderr.write("Usage: python sha1_cli.py -f path/to/file\n")
            return 1
        filename = argv[1]
        try:
            with open(filename, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{filename}': {e}\n")
            return 1
        print(_hexdigest(data))
        return 0

    if argv[0] == "--trace":
        if len(argv) != 2:
            sys.stderr.write("Usage: python sha1_cli.py --trace \"message\"\n")
            return 1
        trace = sha1_trace(argv[1].encode("utf-8"))
        sys.stdout.write(yaml.dump(trace, default_flow_style=False, sort_keys=False))
        return 0

    if len(argv) != 1:
        sys.stderr.write(_USAGE)
        return 1

    print(_hexdigest(argv[0].encode("utf-8")))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
