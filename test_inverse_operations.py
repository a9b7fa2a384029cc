#!/usr/bin/env python3
"""
Test suite for inverse operations
Tests that standard pipeline stages can be reversed correctly
"""

import pytest

from basic_inv import (
    inv_expand_message_schedule,
    inv_finalize_digest,
    inv_init_message_schedule,
    inv_load_hash_state,
    inv_pad_message,
    inv_split_into_blocks,
    inv_update_hash_state,
    recover_schedule_prefix,
)
from compress import compress80
from sha1_cli import (
    _H0,
    block_to_words,
    finalize_digest,
    init_message_schedule,
    pad_message,
    sha1,
    sha1_before,
    split_into_blocks,
    update_hash_state,
)


MESSAGES = [
    b"",
    b"A",
    b"Hello",
    bytes(range(55)),
    bytes(range(56)),
    bytes(range(64)),
    bytes(range(200)),
]


@pytest.mark.parametrize("message", MESSAGES)
def test_pre_block_chain(message):
    """pad -> split -> merge -> unpad returns the original message."""
    padded = pad_message(message)
    blocks = split_into_blocks(padded)
    merged = inv_split_into_blocks(blocks)

    assert bytes(merged) == padded
    assert bytes(inv_pad_message(merged)) == message


def test_inv_pad_message_rejects_bad_terminator():
    padded = bytearray(pad_message(b"abc"))
    padded[3] = 0x00
    with pytest.raises(ValueError, match="terminator"):
        inv_pad_message(padded)


def test_inv_pad_message_rejects_dirty_fill():
    padded = bytearray(pad_message(b"abc"))
    padded[10] = 0x01
    with pytest.raises(ValueError, match="Non-zero"):
        inv_pad_message(padded)


def test_inv_pad_message_rejects_extra_block():
    padded = pad_message(b"abc") + bytes(64)
    with pytest.raises(ValueError):
        inv_pad_message(padded)


def test_inv_pad_message_rejects_partial_byte_length():
    padded = bytearray(pad_message(b"abc"))
    padded[-1] = 25
    with pytest.raises(ValueError, match="whole number of bytes"):
        inv_pad_message(padded)


@pytest.mark.parametrize("length", [0, 63, 65])
def test_inv_pad_message_rejects_bad_length(length):
    with pytest.raises(ValueError):
        inv_pad_message(bytes(length))


def test_inv_split_into_blocks_rejects_short_block():
    with pytest.raises(ValueError, match="Block 1"):
        inv_split_into_blocks([bytes(64), bytes(63)])


def test_inv_init_message_schedule():
    block = bytes(range(64))
    assert bytes(inv_init_message_schedule(block_to_words(block))) == block


def test_inv_expand_message_schedule():
    block = split_into_blocks(pad_message(b"abc"))[0]
    ws = init_message_schedule(block)

    assert inv_expand_message_schedule(ws) == block_to_words(block)


def test_inv_expand_message_schedule_detects_tampering():
    ws = init_message_schedule(split_into_blocks(pad_message(b"abc"))[0])
    ws[40] ^= 1
    with pytest.raises(ValueError, match="W\\[40\\]"):
        inv_expand_message_schedule(ws)


@pytest.mark.parametrize("start", [0, 1, 37, 64])
def test_recover_schedule_prefix(start):
    ws = init_message_schedule(split_into_blocks(pad_message(b"window"))[0])

    assert recover_schedule_prefix(ws[start:start + 16], start) == ws[:16]


def test_recover_schedule_prefix_validates_window():
    with pytest.raises(ValueError):
        recover_schedule_prefix([0] * 15, 0)
    with pytest.raises(ValueError):
        recover_schedule_prefix([0] * 16, 65)


def test_inv_update_hash_state():
    state, schedules = sha1_before(b"abc")
    work_out = compress80(*state, schedules[0])
    next_state = update_hash_state(state, *work_out)

    assert inv_update_hash_state(next_state, *work_out) == _H0


def test_inv_update_hash_state_validates_input():
    with pytest.raises(ValueError):
        inv_update_hash_state((0, 0, 0, 0), 0, 0, 0, 0, 0)
    with pytest.raises(ValueError):
        inv_update_hash_state((0, 0, 0, 0, 0), 0, 0, 0, 0, 1 << 32)


def test_inv_load_hash_state():
    assert inv_load_hash_state(*_H0) == _H0
    with pytest.raises(ValueError):
        inv_load_hash_state(-1, 0, 0, 0, 0)


@pytest.mark.parametrize(
    "state",
    [
        (0, 0, 0, 0, 0),
        (0xFFFFFFFF,) * 5,
        _H0,
    ],
)
def test_finalize_digest_inverse(state):
    assert inv_finalize_digest(finalize_digest(state)) == state


def test_inv_finalize_digest_of_known_digest():
    assert inv_finalize_digest(sha1(b"abc")) == (
        0xA9993E36, 0x4706816A, 0xBA3E2571, 0x7850C26C, 0x9CD0D89D,
    )
    with pytest.raises(ValueError):
        inv_finalize_digest(bytes(32))
