import hashlib

import pytest
import yaml

import sha1_cli
from sha1_cli import (
    MAX_MESSAGE_BITS,
    _check_length,
    _pad_message_bits,
    block_to_words,
    expand_message_schedule,
    finalize_digest,
    init_message_schedule,
    main,
    pad_message,
    sha1,
    sha1_bits,
    sha1_trace,
    sha1_with_a_tracking,
    split_into_blocks,
    update_hash_state,
)
from compress import _rotl


KNOWN_ANSWERS = [
    (b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
    (b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    (b"Hello World", "0a4d55a8d778e5022fab701977c5d840bbc486d0"),
    (
        b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "84983e441c3bd26ebaae4aa1f95129e5e54670f1",
    ),
    (
        b"The quick brown fox jumps over the lazy dog",
        "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12",
    ),
]


@pytest.mark.parametrize("message,expected_hex", KNOWN_ANSWERS)
def test_known_answers(message, expected_hex):
    assert sha1(message).hex() == expected_hex


@pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 200])
def test_matches_hashlib_around_block_boundaries(length):
    message = bytes((i * 7 + 3) & 0xFF for i in range(length))
    digest = sha1(message)

    assert len(digest) == 20
    assert digest == hashlib.sha1(message).digest()


def test_deterministic():
    message = b"same input, same output"
    assert sha1(message) == sha1(message)


def test_accepts_bytearray_and_memoryview():
    expected = hashlib.sha1(b"abc").digest()
    assert sha1(bytearray(b"abc")) == expected
    assert sha1(memoryview(b"abc")) == expected


def test_single_bit_flip_changes_about_half_the_digest():
    message = bytearray(b"avalanche smoke test message")
    base = int.from_bytes(sha1(bytes(message)), "big")

    for bit in (0, 13, 100, 223):
        flipped = bytearray(message)
        flipped[bit // 8] ^= 0x80 >> (bit % 8)
        changed = bin(base ^ int.from_bytes(sha1(bytes(flipped)), "big")).count("1")
        assert 40 <= changed <= 120


@pytest.mark.parametrize("length,blocks", [(0, 1), (55, 1), (56, 2), (64, 2), (119, 2), (120, 3)])
def test_padding_length(length, blocks):
    padded = pad_message(b"\x61" * length)

    assert len(padded) * 8 % 512 == 0
    assert len(padded) == 64 * blocks
    assert padded[length] == 0x80
    assert not any(padded[length + 1 : -8])
    assert int.from_bytes(padded[-8:], "big") == length * 8


def test_padding_empty_message():
    padded = pad_message(b"")
    assert padded == b"\x80" + b"\x00" * 63


def test_pad_message_accepts_byte_values():
    assert pad_message([0x61, 0x62, 0x63]) == pad_message(b"abc")


def test_bit_padding_sets_terminator_after_last_bit():
    # 5-bit message 10011; trailing bits of the input byte are ignored
    padded = _pad_message_bits(b"\x9f", 5)

    assert len(padded) == 64
    assert padded[0] == 0x9C
    assert int.from_bytes(padded[-8:], "big") == 5
    assert sha1_bits(b"\x98", 5) == sha1_bits(b"\x9f", 5)


def test_sha1_bits_byte_aligned_matches_sha1():
    assert sha1_bits(b"abc", 24) == sha1(b"abc")


def test_sha1_bits_rejects_mismatched_byte_count():
    with pytest.raises(ValueError, match="need 1 bytes"):
        sha1_bits(b"ab", 5)


def test_length_limit_is_rejected():
    _check_length(MAX_MESSAGE_BITS)
    with pytest.raises(ValueError, match="2\\*\\*64 - 1"):
        _check_length(MAX_MESSAGE_BITS + 1)
    with pytest.raises(ValueError):
        _check_length(-1)


def test_split_into_blocks():
    padded = pad_message(b"x" * 100)
    blocks = split_into_blocks(padded)

    assert len(blocks) == 2
    assert all(len(block) == 64 for block in blocks)
    assert b"".join(blocks) == padded


def test_split_into_blocks_rejects_ragged_input():
    with pytest.raises(ValueError, match="multiple of 64"):
        split_into_blocks(b"\x00" * 65)


def test_block_to_words_is_big_endian():
    block = bytes(range(64))
    words = block_to_words(block)

    assert len(words) == 16
    assert words[0] == 0x00010203
    assert words[15] == 0x3C3D3E3F


def test_schedule_recurrence_is_reproducible():
    for block in split_into_blocks(pad_message(b"schedule" * 20)):
        ws = init_message_schedule(block)
        assert len(ws) == 80
        assert ws[:16] == block_to_words(block)
        for t in range(16, 80):
            assert ws[t] == _rotl(ws[t - 3] ^ ws[t - 8] ^ ws[t - 14] ^ ws[t - 16], 1)


def test_expand_leaves_input_untouched():
    words = list(range(16))
    expand_message_schedule(words)
    assert words == list(range(16))

    with pytest.raises(ValueError):
        expand_message_schedule(words[:15])


def test_update_hash_state_wraps():
    state = update_hash_state((0xFFFFFFFF, 1, 2, 3, 4), 1, 1, 1, 1, 0xFFFFFFFF)
    assert state == (0, 2, 3, 4, 3)


def test_finalize_digest_is_big_endian():
    digest = finalize_digest((0x01020304, 0x05060708, 0x090A0B0C, 0x0D0E0F10, 0x11121314))
    assert digest == bytes(range(1, 21))


def test_a_tracking():
    digest, a_values = sha1_with_a_tracking(b"x" * 60)

    assert digest == sha1(b"x" * 60)
    assert len(a_values) == 2
    assert all(len(values) == 80 for values in a_values)
    assert a_values[0][0] == sha1_cli._H0[0]


def test_trace_records_every_stage():
    trace = sha1_trace(b"abc")

    assert trace["digest_hex"] == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert trace["message_length_bits"] == 24
    assert len(trace["blocks"]) == 1

    block = trace["blocks"][0]
    assert block["state_in"] == ["67452301", "efcdab89", "98badcfe", "10325476", "c3d2e1f0"]
    assert block["schedule"][0] == "61626380"
    assert len(block["rounds"]) == 80
    assert "".join(block["state_out"]) == trace["digest_hex"]

    # plain data only
    assert yaml.safe_load(yaml.dump(trace)) == trace


def test_cli_hashes_utf8_argument(capsys):
    assert main(["abc"]) == 0
    assert capsys.readouterr().out.strip() == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_cli_hashes_file(tmp_path, capsys):
    path = tmp_path / "data.bin"
    path.write_bytes(b"Hello World")

    assert main(["-f", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "0a4d55a8d778e5022fab701977c5d840bbc486d0"


def test_cli_missing_file(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "missing")]) == 1
    assert "Error reading file" in capsys.readouterr().err


def test_cli_trace_prints_yaml(capsys):
    assert main(["--trace", ""]) == 0
    trace = yaml.safe_load(capsys.readouterr().out)
    assert trace["digest_hex"] == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.mark.parametrize("argv", [[], ["a", "b"], ["-f"], ["--trace"]])
def test_cli_usage_errors(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().err
