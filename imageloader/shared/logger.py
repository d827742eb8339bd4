# imageloader/shared/logger.py
"""
Handles the setup of the application-wide logging system.
Configures Console and File logging destinations. The package itself only ever
creates named loggers; applications opt in to handlers by calling setup_logging().
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_file: Path | str | None = None, force_debug: bool = False):
    """
    Configures the root logger for the application.
    """
    is_debug = force_debug or os.environ.get("IMAGELOADER_DEBUG", "false").lower() in ("1", "true")
    log_level = logging.DEBUG if is_debug else logging.INFO

    verbose_formatter = logging.Formatter(
        "%(asctime)s - %(name)-20s - %(levelname)-8s - [%(funcName)s:%(lineno)d] - %(message)s"
    )

    root_logger = logging.getLogger()

    # Reset existing handlers
    if root_logger.hasHandlers():
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)

    root_logger.setLevel(log_level)

    # --- 3rd Party Library Noise Suppression ---
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(verbose_formatter)
    root_logger.addHandler(console_handler)

    # --- File Handler ---
    if log_file is not None:
        log_file = Path(log_file)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(verbose_formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"[ERROR] Failed to configure file logger at '{log_file}': {e}", file=sys.stderr)

    root_logger.debug(f"Logging system configured. Level: {logging.getLevelName(log_level)}")
