"""aes_table_codec.py

Binary (de)serialization of `AESTables` plus the file I/O around it.

Layout (522 bytes, no header, no padding, no checksum)
------------------------------------------------------
    [  0, 256)   S-box
    [256, 512)   inverse S-box
    [512, 522)   Rcon

`encode_text` renders a line-wrapped hex form for people to read.  It is not
a storage format and has no parser.
"""
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from aes_table_config import TableConfig
from aes_table_errors import DirectoryCreateFailure, FileOpenFailure, TruncatedInput
from aes_tables import BLOB_SIZE, SBOX_SIZE, AESTables

__all__ = [
    "encode",
    "decode",
    "encode_text",
    "ensure_directory",
    "write_tables",
    "read_tables",
]

logger = logging.getLogger("aes_tables.codec")

_SBOX_END = SBOX_SIZE
_INV_END = 2 * SBOX_SIZE


def encode(tables: AESTables) -> bytes:
    """Concatenate the three tables, one byte per entry."""
    blob = b"".join(table.tobytes() for _, table in tables.named())
    return blob


def decode(blob: bytes | bytearray | memoryview) -> AESTables:
    """Slice *blob* back into tables.

    Raises
    ------
    TruncatedInput
        If fewer than 522 bytes are available.  Nothing is returned in that
        case.
    """
    data = np.frombuffer(bytes(blob), dtype=np.uint8)
    if data.size < BLOB_SIZE:
        raise TruncatedInput(BLOB_SIZE, int(data.size))
    if data.size > BLOB_SIZE:
        logger.debug("Ignoring %d trailing bytes", data.size - BLOB_SIZE)
    return AESTables(
        data[:_SBOX_END],
        data[_SBOX_END:_INV_END],
        data[_INV_END:BLOB_SIZE],
    )


def encode_text(tables: AESTables, per_line: int = 16) -> str:
    """Human-readable dump: a ``# <name>`` header then hex rows per table."""
    lines: list[str] = []
    for name, table in tables.named():
        lines.append(f"# {name}")
        for start in range(0, table.size, per_line):
            lines.append(" ".join(f"{int(v):02X}" for v in table[start:start + per_line]))
    return "\n".join(lines) + "\n"


# -----------------------------------------------------------------------------
# File I/O
# -----------------------------------------------------------------------------


def ensure_directory(path: Path) -> Path:
    """Create *path* (and parents) if it does not exist yet."""
    path = Path(path)
    if path.is_dir():
        return path
    logger.info("Directory does not exist, creating: %s", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateFailure(path, exc.strerror or str(exc)) from exc
    return path


def write_tables(tables: AESTables, config: TableConfig) -> Path:
    """Write the binary blob to ``config.output_path`` in a single call."""
    ensure_directory(config.output_dir)
    path = config.output_path
    blob = encode(tables)
    try:
        with path.open("wb") as fp:
            fp.write(blob)
    except OSError as exc:
        logger.error("Error: Could not open file for writing: %s", path)
        raise FileOpenFailure(path, "writing", exc.strerror or str(exc)) from exc
    logger.info("S-box, Inverse S-box, and Rcon written (%d bytes) to: %s", len(blob), path)
    return path


def read_tables(config: TableConfig) -> AESTables:
    """Read ``config.output_path`` fully and decode it."""
    path = config.output_path
    try:
        with path.open("rb") as fp:
            blob = fp.read()
    except OSError as exc:
        logger.error("Error: Could not open file for reading: %s", path)
        raise FileOpenFailure(path, "reading", exc.strerror or str(exc)) from exc
    try:
        return decode(blob)
    except TruncatedInput:
        logger.error("Error: %s does not contain enough data (%d bytes)", path, len(blob))
        raise
