"""
TalentFlow: Logging Setup

This module provides centralised logging configuration and helper
functions for obtaining namespaced loggers.

Key responsibilities:
- Configure root logging handlers and formats
- Provide a helper to obtain module-specific loggers

External dependencies:
- logging: Python standard library logging framework

Database tables accessed:
- None (logging only)

Thread safety: Thread-safe (logging module is process-global and
thread-safe under normal usage)

Author: TalentFlow Team
Created: 2026-10-12
Last Modified: 2026-10-12
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

import logging
import sys
from typing import Optional

from talentflow.core.config import TalentFlowConfig, get_config

# ============================================================================
# Public API
# ============================================================================


def setup_logging(config: Optional[TalentFlowConfig] = None) -> None:
    """Configure application-wide logging.

    This function initialises the root logger and the ``talentflow``
    namespace logger. It is idempotent: calling it multiple times will not
    attach duplicate handlers.

    Args:
        config: Optional configuration object. If omitted, the global
            configuration will be loaded via :func:`get_config`.
    """

    if config is None:
        config = get_config()

    root_logger = logging.getLogger()

    # Avoid attaching duplicate handlers if setup_logging is called again.
    if root_logger.handlers:
        return

    logging_config = config.logging
    log_level = getattr(logging, logging_config.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(logging_config.file)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger("talentflow").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for the given module.

    Module ``__name__`` values that already start with ``talentflow.`` are
    used as-is so package loggers are not double-prefixed.

    Args:
        name: Module-level ``__name__`` or any descriptive logger name.

    Returns:
        A :class:`logging.Logger` instance under the ``talentflow``
        namespace.
    """

    setup_logging()
    if name == "talentflow" or name.startswith("talentflow."):
        return logging.getLogger(name)
    return logging.getLogger(f"talentflow.{name}")
