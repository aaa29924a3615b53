"""
Logging Setup
File + console logging shared by the CLI and the MCP server
"""

import os
import logging
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_log_dir() -> Path:
    raw = os.getenv("LSAI_LOG_DIR", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / "logs"


def setup_logging(log_name: str, console_level: int = logging.INFO) -> Optional[Path]:
    """
    Configure the root logger with a file handler and a stderr console handler.

    Args:
        log_name: File name inside the log directory
        console_level: Level for the console handler; the file always gets INFO

    Returns:
        Path of the log file, or None when the log directory is not writable
    """
    log_file = get_log_dir() / log_name

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if console_level <= logging.DEBUG else logging.INFO)

    # Remove any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = None
    file_error = None
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
    except OSError as e:
        file_error = e

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)

    if file_handler is not None:
        root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Keep HTTP client chatter out of the console
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    if file_error is not None:
        logging.getLogger(__name__).warning(f"⚠️ File logging disabled, cannot write {log_file}: {file_error}")
        return None
    return log_file
