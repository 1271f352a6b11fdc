#!/usr/bin/env python3
"""UTF-8-safe logging setup for tracebuild."""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(name: str = "tracebuild",
                 log_level: str = "WARNING",
                 log_file: Optional[Path] = None) -> logging.Logger:
    """
    Set up the tracebuild logger.

    Console output goes to stderr so stdout carries only the build banners.
    The optional file log always records DEBUG detail.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = []  # Clear existing handlers
    logger.propagate = False

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8', errors='replace')
        except OSError as e:
            # Don't fail the build just because logging failed
            logger.warning(f"Could not set up file logging: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(file_handler)

    return logger
