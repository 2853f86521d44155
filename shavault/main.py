"""
ShaVault - Command Line Entry Point

Usage:
    shavault hash "<text>" [--spaced]
    shavault hash --file PATH
    shavault hmac --key KEY "<text>"
    shavault hmac --key-hex 0b0b0b... --file PATH
    shavault self-test [--samples N]

Text arguments are hashed as their UTF-8 encoding.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .core_crypto.hmac_sha256 import hmac_sha256
from .core_crypto.self_test import DEFAULT_SAMPLES, cross_check, run_known_answer_tests
from .core_crypto.sha256 import format_digest, sha256


logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_SELF_TEST_FAILED = 2


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="shavault",
        description="From-scratch SHA-256 and HMAC-SHA256.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    hash_parser = subparsers.add_parser("hash", help="Print the SHA-256 digest")
    _add_message_arguments(hash_parser)
    hash_parser.add_argument(
        "--spaced", action="store_true",
        help="Separate hex byte pairs with spaces",
    )

    hmac_parser = subparsers.add_parser("hmac", help="Print the HMAC-SHA256 tag")
    _add_message_arguments(hmac_parser)
    key_group = hmac_parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument("--key", help="Key as UTF-8 text")
    key_group.add_argument("--key-hex", help="Key as hexadecimal bytes")

    test_parser = subparsers.add_parser("self-test", help="Run known-answer and cross-check tests")
    test_parser.add_argument(
        "--samples", type=int, default=DEFAULT_SAMPLES,
        help=f"Random cross-check messages (default: {DEFAULT_SAMPLES})",
    )

    return parser


def _add_message_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("text", nargs="?", help="Message text (UTF-8)")
    source.add_argument("--file", type=Path, help="Read the message from a file")


def _read_message(args: argparse.Namespace) -> bytes:
    if args.file is not None:
        return args.file.read_bytes()
    return args.text.encode("utf-8")


def cmd_hash(args: argparse.Namespace) -> int:
    digest = sha256(_read_message(args))
    print(format_digest(digest) if args.spaced else digest.hex())
    return EXIT_SUCCESS


def cmd_hmac(args: argparse.Namespace) -> int:
    if args.key_hex is not None:
        key = bytes.fromhex(args.key_hex)
    else:
        key = args.key.encode("utf-8")
    print(hmac_sha256(key, _read_message(args)).hex())
    return EXIT_SUCCESS


def cmd_self_test(args: argparse.Namespace) -> int:
    results = run_known_answer_tests() + cross_check(samples=args.samples)

    for result in results:
        status = "✓ PASS" if result.passed else "✗ FAIL"
        print(f"  {status}  {result.name}")
        if not result.passed:
            print(f"          expected {result.expected}")
            print(f"          got      {result.actual}")

    failed = sum(1 for r in results if not r.passed)
    print("=" * 60)
    print(f"{len(results) - failed}/{len(results)} checks passed")
    return EXIT_SUCCESS if failed == 0 else EXIT_SELF_TEST_FAILED


COMMANDS = {
    "hash": cmd_hash,
    "hmac": cmd_hmac,
    "self-test": cmd_self_test,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for ShaVault."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        return COMMANDS[args.command](args)
    except OSError as e:
        logger.error("Cannot read input: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        # Malformed --key-hex
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
