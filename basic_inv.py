
#### Utility functions ####


def int2bytes(x, n=4):
	b = [0] * n
	for i in range(n):
		b[i] = x & 0xFF
		x >>= 8
	return b

def bytes2int(bytes):
	s = 0
	l = len(bytes)
	for i in range(l):
		s <<= 8
		s += bytes[l-1-i]
	return s

def lebe(bytes):
	bytes = list(bytes) # copy
	l = len(bytes)
	for i in range(l >> 1):
		bytes[i], bytes[l-1-i] = bytes[l-1-i], bytes[i]
	return bytes

def rotl(d, n):
	return ((d << n) & 0xFFFFFFFF) | (d >> (0x20 - n))

def rotr(d, n):
	return (d >> n) | ((d << (0x20 - n)) & 0xFFFFFFFF)


def _check_word(name, value):
    if not isinstance(value, int):
        raise ValueError(f"{name} is not an integer: {type(value)}")
    if value < 0 or value > 0xFFFFFFFF:
        raise ValueError(f"{name} is out of 32-bit range: {value}")


#### Post compression ####

# Reversing update_hash_state: Hᵢ₊₁ → Hᵢ

def inv_update_hash_state(H_i_plus_1, a, b, c, d, e):
    """
    Inverse update hash state

    Input: Hᵢ₊₁:160 bits (5×32-bit words as tuple of integers),
           a..e:160 bits (5 working 32-bit registers as integers)
    Output: Hᵢ:160 bits (5×32-bit words as tuple of integers)

    Hᵢ[j] = Hᵢ₊₁[j] - working[j] mod 2³², for j = 0…4
    """
    if not isinstance(H_i_plus_1, tuple) or len(H_i_plus_1) != 5:
        raise ValueError(f"H_i_plus_1 must be a tuple of 5 integers, got {type(H_i_plus_1)} with length {len(H_i_plus_1) if hasattr(H_i_plus_1, '__len__') else 'N/A'}")

    for j, h_val in enumerate(H_i_plus_1):
        _check_word(f"H_i_plus_1 word {j}", h_val)

    for name, value in [('a', a), ('b', b), ('c', c), ('d', d), ('e', e)]:
        _check_word(f"Register {name}", value)

    working = (a, b, c, d, e)
    return tuple((h - w) & 0xFFFFFFFF for h, w in zip(H_i_plus_1, working))


#### Pre compression ####

def inv_load_hash_state(a, b, c, d, e):
    """
    Inverse load hash state

    Pack the 5 working registers back into a tuple representing Hᵢ.
    """
    for name, value in [('a', a), ('b', b), ('c', c), ('d', d), ('e', e)]:
        _check_word(f"Register {name}", value)

    return (a, b, c, d, e)

def inv_init_message_schedule(w):
    """
    Inverse init message schedule

    Input: W₀..W₁₅:512 bits (16×32-bit words as list of integers)
    Output: Mᵢ:512 bits (block as a list of 64 byte values)

    Each word is written as 4 bytes with int2bytes (little-endian) and then
    swapped with lebe() to get the big-endian order SHA-1 reads.
    """
    if not isinstance(w, (list, tuple)):
        raise ValueError(f"Input must be a list or tuple, got {type(w)}")

    if len(w) < 0x10:
        raise ValueError(f"Input must contain at least 16 words (W[0..15]), got {len(w)} words")

    M_i = []
    for j in range(0x10):
        _check_word(f"Word W[{j}]", w[j])
        M_i.extend(lebe(int2bytes(w[j], 4)))

    return M_i

def inv_expand_message_schedule(w):
    """
    Inverse expand message schedule

    Input: W₀..W₇₉:2560 bits (80×32-bit words as list of integers)
    Output: W₀..W₁₅:512 bits (first 16 words as list of integers)

    The expansion is determined by W[0..15], so the inverse returns those
    words after checking that every W[t], t >= 16, satisfies

        W[t] = ROTL1(W[t-3] ^ W[t-8] ^ W[t-14] ^ W[t-16])

    The same recurrence read backwards gives W[t-16] from later words,
    which is what recover_schedule_prefix uses.
    """
    if not isinstance(w, (list, tuple)):
        raise ValueError(f"Input must be a list or tuple, got {type(w)}")

    if len(w) < 0x10:
        raise ValueError(f"Input must contain at least 16 words (W[0..15]), got {len(w)} words")

    for j, word in enumerate(w):
        _check_word(f"Word W[{j}]", word)

    for t in range(0x10, len(w)):
        expected = rotl(w[t-3] ^ w[t-8] ^ w[t-14] ^ w[t-16], 1)
        if w[t] != expected:
            raise ValueError(f"Word W[{t}] breaks the schedule recurrence: {w[t]:08x} != {expected:08x}")

    return list(w[:0x10])

def recover_schedule_prefix(window, start):
    """
    Recover W[0..15] from any 16 consecutive schedule words.

    Input: window = W[start..start+15], 0 <= start <= 64
    Output: W₀..W₁₅

        W[t-16] = ROTR1(W[t]) ^ W[t-3] ^ W[t-8] ^ W[t-14]
    """
    if len(window) != 0x10:
        raise ValueError(f"Window must contain exactly 16 words, got {len(window)}")
    if start < 0 or start > 80 - 0x10:
        raise ValueError(f"Window start must be in [0, 64], got {start}")

    words = list(window)
    for j, word in enumerate(words):
        _check_word(f"Word W[{start + j}]", word)

    # words[0] always holds W[s]; walk s down to 0.
    for s in range(start - 1, -1, -1):
        # recurrence at t = s + 15, i.e. words[15]
        prev = rotr(words[15], 1) ^ words[12] ^ words[7] ^ words[1]
        words = [prev] + words[:15]

    return words


#### Message Processing ####

def inv_pad_message(padded_bytes):
    """
    Inverse padding

    Input: 512·N bits (padded message as a sequence of byte values)
    Output: n bits (raw message as a list of byte values)

    Unlike plain truncation this checks the whole padding structure:
    the 0x80 terminator, the zero fill and a length field that accounts
    for exactly the number of blocks present.
    """
    padded_list = list(padded_bytes)

    if len(padded_list) < 64 or len(padded_list) % 64 != 0:
        raise ValueError("Padded message length must be a non-zero multiple of 64 bytes (512 bits)")

    msglen_bits = int.from_bytes(bytes(padded_list[-8:]), byteorder="big")
    if msglen_bits % 8 != 0:
        raise ValueError(f"Message length of {msglen_bits} bits is not a whole number of bytes")

    original_length_bytes = msglen_bits >> 3

    if original_length_bytes > len(padded_list) - 9:
        raise ValueError(
            f"Invalid message length: {original_length_bytes} bytes exceeds available "
            f"{len(padded_list) - 9} bytes"
        )

    expected_blocks = (original_length_bytes + 9 + 63) // 64
    if expected_blocks != len(padded_list) // 64:
        raise ValueError(
            f"Length field implies {expected_blocks} blocks, got {len(padded_list) // 64}"
        )

    if padded_list[original_length_bytes] != 0x80:
        raise ValueError(f"Missing 0x80 terminator at byte {original_length_bytes}")

    if any(padded_list[original_length_bytes + 1:-8]):
        raise ValueError("Non-zero byte in padding fill")

    return padded_list[:original_length_bytes]

def inv_split_into_blocks(blocks):
    """
    Inverse block splitting

    Input: N blocks × 512 bits
    Output: 512·N bits (padded message as a list of byte values)

    Only the block sizes are checked; whether the result is a valid padded
    message is left to inv_pad_message.
    """
    padded_bytes = []
    for i, block in enumerate(blocks):
        if len(block) != 64:
            raise ValueError(f"Block {i} has invalid length {len(block)} bytes (expected 64 bytes / 512 bits)")
        padded_bytes.extend(block)

    return padded_bytes


#### Finalization ####

def inv_finalize_digest(digest_bytes):
    """
    Inverse finalization

    Input: 160 bits (digest as bytes)
    Output: H_N:160 bits (5×32-bit words as tuple of integers)
    """
    if len(digest_bytes) != 20:
        raise ValueError(f"Digest must be exactly 20 bytes (160 bits), got {len(digest_bytes)} bytes")

    return tuple(bytes2int(lebe(digest_bytes[i:i+4])) for i in range(0, 20, 4))
