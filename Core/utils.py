"""
Shared utilities for logging setup.
"""

import logging
import time
from pathlib import Path
from typing import Optional


def setup_logging(log_type: str, problem_name: str, log_dir: Optional[str] = 'logs', level: int = logging.INFO) -> logging.Logger:
    """Sets up a logger for a planning run.

    Records go to the console and, when `log_dir` is given, to
    `<log_dir>/<log_type>_logs.log` in append mode.
    """
    logger = logging.getLogger(f"{log_type}_{problem_name}_logger")
    logger.setLevel(level)

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        session_id = int(time.time())
        formatter = logging.Formatter(
            f'%(asctime)s - %(levelname)s - [Session: {session_id}]-[Problem: {problem_name}] - %(message)s'
        )

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_dir:
            log_dir_path = Path(log_dir)
            log_dir_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir_path / f"{log_type}_logs.log", mode='a')  # Append mode
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
