"""
Logging Setup
=============

Applies a LoggingConfig to the root logger: console output plus an optional
size-rotated log file.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Handlers installed by configure_logging, removed again on reconfiguration
_installed_handlers = []


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the root logger from a LoggingConfig.

    Calling it again replaces the handlers it installed previously, so it is
    safe to call after a config reload.

    Args:
        config: Logging settings (defaults used when None)

    Returns:
        The configured root logger
    """
    config = config or LoggingConfig()
    root = logging.getLogger()

    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    level = getattr(logging, str(config.level).upper(), logging.INFO)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if config.console_enabled:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)
        _installed_handlers.append(console)

    if config.file_enabled:
        try:
            Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                config.file_path,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
            )
        except OSError as e:
            root.warning(f"Cannot open log file {config.file_path}: {e}")
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            _installed_handlers.append(file_handler)

    return root
