"""Run enumerate_registers.py for a range of message lengths.

Usage:
    python run_enumerate_range.py <start> <end> [--format yaml|sqlite]
    python run_enumerate_range.py 0 8      # Runs for lengths 0, 1, 2, ..., 8
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys


SCRIPT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "enumerate_registers.py")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Run enumerate_registers.py for a range of message lengths"
    )
    parser.add_argument("start", type=int, help="Start message length in bits (inclusive)")
    parser.add_argument("end", type=int, help="End message length in bits (inclusive)")
    parser.add_argument(
        "--format",
        choices=["yaml", "sqlite"],
        default="yaml",
        help="Output format passed through to enumerate_registers.py",
    )
    args = parser.parse_args(argv)

    start = args.start
    end = args.end

    if start < 0:
        print(f"ERROR: Start value must be non-negative (got {start})")
        return 1

    if end < start:
        print(f"ERROR: End value must be >= start (got end={end}, start={start})")
        return 1

    print(f"Running enumerate_registers.py for lengths {start} to {end} (inclusive)")
    print(f"Total runs: {end - start + 1}\n")

    for length in range(start, end + 1):
        print(f"{'='*60}")
        print(f"Processing length: {length} bits")
        print(f"{'='*60}")

        try:
            subprocess.run(
                [sys.executable, SCRIPT, str(length), "--format", args.format],
                check=True,
            )
            print(f"\n✓ Completed length {length}\n")
        except subprocess.CalledProcessError as e:
            print(f"\n✗ Failed for length {length} (exit code {e.returncode})\n")
            return 1
        except KeyboardInterrupt:
            print(f"\n\nInterrupted at length {length}")
            return 1

    print(f"{'='*60}")
    print("All runs completed successfully!")
    print(f"Processed lengths {start} through {end}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
