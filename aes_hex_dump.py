"""aes_hex_dump.py

Console rendering of byte tables: upper-case, zero-padded two-digit hex,
16 values per line.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from aes_tables import AESTables

__all__ = ["format_table", "dump_tables"]


def format_table(values: Sequence[int] | np.ndarray, label: str, per_line: int = 16) -> str:
    """Return ``"<label> (Hexadecimal):"`` followed by *per_line* hex values per row."""
    arr = np.asarray(values, dtype=np.uint8).reshape(-1)
    rows = [
        " ".join(f"{int(v):02X}" for v in arr[start:start + per_line])
        for start in range(0, arr.size, per_line)
    ]
    return "\n".join([f"{label} (Hexadecimal):", *rows])


def dump_tables(tables: AESTables, title_prefix: str = "") -> str:
    """Format all three tables, one block per table."""
    labels = {"Rcon": "Round Constants (Rcon)"}
    prefix = f"{title_prefix} " if title_prefix else ""
    return "\n\n".join(
        format_table(table, prefix + labels.get(name, name)) for name, table in tables.named()
    )
