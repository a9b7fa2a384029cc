"""Enumerate all possible messages of a given BIT length and record register a at each round.

For small message lengths, this script:
1. Generates all possible messages (2^N for N bits)
2. Computes SHA-1 while tracking the a register at each round
3. Saves results to data/length/N.yaml or N.db (SQLite)

Usage:
    python enumerate_registers.py <message_length_bits>
    python enumerate_registers.py 0      # 1 message (empty)
    python enumerate_registers.py 8      # 256 messages (1 byte)

    # Output to SQLite database instead of YAML
    python enumerate_registers.py 16 --format sqlite

SQLite Schema:
    - metadata: message_length_bits, message_length_bytes, total_messages
    - messages: id, message_bits, message_hex, digest_hex
    - a_values: message_id, block_index, round_index, a_value
"""

from __future__ import annotations

import argparse
import os
import sqlite3
import sys
from typing import Dict, Generator, List, Optional, Tuple

import yaml

from sha1_cli import sha1_bits_with_a_tracking


BATCH_SIZE = 1000


def enumerate_messages_bits(length_bits: int) -> Generator[Tuple[bytes, str], None, None]:
    """Generate all possible messages of the given bit length.

    For non-byte-aligned lengths the message occupies the HIGH bits of the
    last byte.

    Yields:
        (message_bytes, binary_string) tuples
    """
    if length_bits == 0:
        yield b"", ""
        return

    num_bytes = (length_bits + 7) // 8
    shift = (8 - length_bits % 8) % 8

    for value in range(2 ** length_bits):
        message_bytes = (value << shift).to_bytes(num_bytes, byteorder="big")
        yield message_bytes, format(value, f"0{length_bits}b")


def _length_label(length_bits: int) -> str:
    if length_bits % 8 == 0:
        return str(length_bits // 8)
    return f"{length_bits // 8}+{length_bits % 8}bits"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate all messages of a given BIT length and record SHA-1 a register values"
    )
    parser.add_argument(
        "length_bits",
        type=int,
        help="Message length in BITS (WARNING: 2^length messages will be generated)",
    )
    parser.add_argument(
        "--max-messages",
        type=int,
        default=1_000_000,
        help="Maximum number of messages to process (default: 1,000,000)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="data/length",
        help="Output directory (default: data/length)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["yaml", "sqlite"],
        default="yaml",
        help="Output format: yaml or sqlite (default: yaml)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    length_bits = args.length_bits
    if length_bits < 0:
        print(f"ERROR: Message length must be non-negative (got {length_bits})")
        return 1

    total_messages = 2 ** length_bits

    print(f"Message length: {length_bits} bits")
    if length_bits % 8 == 0:
        print(f"  (equivalent to {length_bits // 8} bytes)")
    else:
        print(f"  (non-byte-aligned: {length_bits // 8} complete bytes + {length_bits % 8} bits)")
    print(f"Total possible messages: {total_messages:,}")

    if total_messages > args.max_messages:
        print(f"ERROR: Too many messages ({total_messages:,} > {args.max_messages:,})")
        print("Use --max-messages to increase limit if you really want to proceed")
        return 1

    os.makedirs(args.output_dir, exist_ok=True)

    if args.format == "sqlite":
        _process_to_sqlite(args.output_dir, length_bits, total_messages)
    else:
        _process_to_yaml(args.output_dir, length_bits, total_messages)
    return 0


def _report_progress(idx: int, total_messages: int) -> None:
    if idx > 0 and idx % 10000 == 0:
        print(f"  Progress: {idx:,} / {total_messages:,} ({100*idx/total_messages:.1f}%)")


def _process_to_yaml(output_dir: str, length_bits: int, total_messages: int) -> str:
    """Process messages and save to YAML format."""
    results: Dict = {
        "message_length_bits": length_bits,
        "message_length_bytes": _length_label(length_bits),
        "total_messages": total_messages,
        "messages": [],
    }

    print(f"Processing {total_messages:,} messages...")

    for idx, (message_bytes, binary_str) in enumerate(enumerate_messages_bits(length_bits)):
        _report_progress(idx, total_messages)

        digest, a_values_per_block = sha1_bits_with_a_tracking(message_bytes, length_bits)

        results["messages"].append(
            {
                "message_bits": binary_str,
                "message_hex": message_bytes.hex(),
                "digest_hex": digest.hex(),
                "blocks": [
                    {
                        "block_index": block_idx,
                        "a_values": [f"{a:08x}" for a in a_values],
                    }
                    for block_idx, a_values in enumerate(a_values_per_block)
                ],
            }
        )

    output_path = os.path.join(output_dir, f"{length_bits}.yaml")
    print(f"Writing results to {output_path}...")

    with open(output_path, "w") as f:
        yaml.dump(results, f, default_flow_style=False, sort_keys=False)

    print(f"Done! Saved {total_messages:,} message entries to {output_path}")
    _print_samples(results["messages"][:4])
    return output_path


def _process_to_sqlite(output_dir: str, length_bits: int, total_messages: int) -> str:
    """Process messages and save to SQLite database."""
    output_path = os.path.join(output_dir, f"{length_bits}.db")
    print(f"Processing {total_messages:,} messages to SQLite database...")

    if os.path.exists(output_path):
        os.remove(output_path)

    conn = sqlite3.connect(output_path)
    try:
        cursor = conn.cursor()
        cursor.executescript("""
            CREATE TABLE metadata (
                message_length_bits INTEGER NOT NULL,
                message_length_bytes TEXT NOT NULL,
                total_messages INTEGER NOT NULL
            );

            CREATE TABLE messages (
                id INTEGER PRIMARY KEY,
                message_bits TEXT NOT NULL,
                message_hex TEXT NOT NULL,
                digest_hex TEXT NOT NULL
            );

            CREATE TABLE a_values (
                message_id INTEGER NOT NULL,
                block_index INTEGER NOT NULL,
                round_index INTEGER NOT NULL,
                a_value TEXT NOT NULL,
                FOREIGN KEY (message_id) REFERENCES messages(id)
            );

            CREATE INDEX idx_a_values_message ON a_values(message_id);
            CREATE INDEX idx_a_values_block ON a_values(message_id, block_index);
        """)

        cursor.execute(
            "INSERT INTO metadata VALUES (?, ?, ?)",
            (length_bits, _length_label(length_bits), total_messages),
        )

        message_batch = []
        a_value_batch = []
        sample_entries = []

        for idx, (message_bytes, binary_str) in enumerate(enumerate_messages_bits(length_bits)):
            _report_progress(idx, total_messages)

            digest, a_values_per_block = sha1_bits_with_a_tracking(message_bytes, length_bits)

            message_hex = message_bytes.hex()
            digest_hex = digest.hex()

            message_batch.append((idx, binary_str, message_hex, digest_hex))

            for block_idx, a_values in enumerate(a_values_per_block):
                for round_idx, a_value in enumerate(a_values):
                    a_value_batch.append((idx, block_idx, round_idx, f"{a_value:08x}"))

            if idx < 4:
                sample_entries.append({
                    "message_bits": binary_str,
                    "message_hex": message_hex,
                    "digest_hex": digest_hex,
                })

            if len(message_batch) >= BATCH_SIZE:
                _flush(conn, message_batch, a_value_batch)
                message_batch = []
                a_value_batch = []

        if message_batch:
            _flush(conn, message_batch, a_value_batch)
    finally:
        conn.close()

    print(f"Done! Saved {total_messages:,} message entries to {output_path}")
    _print_samples(sample_entries)
    return output_path


def _flush(conn: sqlite3.Connection, message_batch: List[Tuple], a_value_batch: List[Tuple]) -> None:
    cursor = conn.cursor()
    cursor.executemany("INSERT INTO messages VALUES (?, ?, ?, ?)", message_batch)
    cursor.executemany("INSERT INTO a_values VALUES (?, ?, ?, ?)", a_value_batch)
    conn.commit()


def _print_samples(sample_entries: List[Dict]) -> None:
    """Print sample entries from the results."""
    print("\nSample entries:")
    for i, sample in enumerate(sample_entries):
        print(f"  [{i}] bits={sample['message_bits'] or '(empty)':<16} hex={sample['message_hex'] or '(empty)':<8} digest={sample['digest_hex'][:16]}...")


if __name__ == "__main__":
    sys.exit(main())
