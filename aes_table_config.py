"""aes_table_config.py

Run configuration and logging setup.

The output location travels as an explicit `TableConfig` value into every
read / write call; nothing in the package keeps a module-level path.
"""
from __future__ import annotations

import logging
import logging.handlers
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

__all__ = [
    "DEFAULT_FILE_NAME",
    "LOGGER_NAME",
    "TableConfig",
    "setup_logging",
]

DEFAULT_FILE_NAME = "Sbox_InvSbox_Rcon.bin"
LOGGER_NAME = "aes_tables"


@dataclass
class TableConfig:
    output_dir: Path = Path("output")
    file_name: str = DEFAULT_FILE_NAME
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    print_tables: bool = True

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)
        if not self.file_name or Path(self.file_name).name != self.file_name:
            raise ValueError(f"file_name must be a bare file name, got {self.file_name!r}")

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.file_name


def setup_logging(config: TableConfig) -> Optional[Path]:
    """Attach console (and optionally rotating file) handlers.

    Returns the log file path when ``config.log_dir`` is set.  Calling it
    again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level.upper())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = None
    if config.log_dir is not None:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = config.log_dir / f"aes_tables_{timestamp}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10*1024*1024, backupCount=5
        )
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info("Logging initialized. Log file: %s", log_file)
    return log_file
