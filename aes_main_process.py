"""aes_main_process.py

End-to-end run of the table builder:

    1. generate S-box / inverse S-box / Rcon from GF(2^8) arithmetic
    2. write the 522-byte blob to ``<output_dir>/<file_name>``
    3. read the blob back and decode it
    4. verify bijection, round trip, Rcon derivation and FIPS-197 reference
    5. print the decoded tables as hex

Usage::

    python3 aes_main_process.py --output-dir out --log-dir logs

Exit status: 0 success, 1 generation / I/O / decode failure, 2 a table check
failed.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from aes_hex_dump import dump_tables
from aes_table_codec import read_tables, write_tables
from aes_table_config import DEFAULT_FILE_NAME, TableConfig, setup_logging
from aes_table_errors import TableError
from aes_table_generator import generate_tables
from aes_table_verifier import VerificationReport, verify_all
from aes_tables import AESTables

__all__ = ["RunResult", "run", "build_parser", "main"]

logger = logging.getLogger("aes_tables.main")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass(frozen=True)
class RunResult:
    generated: AESTables
    decoded: AESTables
    report: VerificationReport
    output_path: Path


def run(config: TableConfig) -> RunResult:
    """Generate → write → read → verify → (print).

    Raises
    ------
    TableError
        Any generation, directory, file or decode failure.  Verification
        failures are returned in ``RunResult.report`` instead.
    """
    generated = generate_tables()
    output_path = write_tables(generated, config)
    decoded = read_tables(config)
    report = verify_all(generated, decoded)

    if config.print_tables:
        print(dump_tables(decoded))

    return RunResult(generated, decoded, report, output_path)


def build_parser() -> argparse.ArgumentParser:
    """CLI options mapped one-to-one onto `TableConfig` fields."""
    parser = argparse.ArgumentParser(
        description="Generate, persist and verify the AES S-box, inverse S-box and Rcon"
    )
    parser.add_argument("--output-dir", type=Path, default=Path("output"),
                        help="Directory for the binary table file (created if missing)")
    parser.add_argument("--file-name", default=DEFAULT_FILE_NAME,
                        help="Name of the binary table file")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Also write WARNING+ records to a rotating log file here")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Console log level")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Do not print the hex dump of the tables")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse *argv*, run the pipeline and return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        config = TableConfig(
            output_dir=args.output_dir,
            file_name=args.file_name,
            log_dir=args.log_dir,
            log_level=args.log_level,
            print_tables=not args.quiet,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        setup_logging(config)
    except OSError as exc:
        print(f"Error: cannot set up log file in {config.log_dir}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        result = run(config)
    except TableError as exc:
        logger.error("Error: %s", exc)
        return EXIT_FAILURE

    if not result.report.passed:
        for violation in result.report.violations:
            logger.error("%s: %s", type(violation).__name__, violation)
        return EXIT_VERIFICATION_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
