# acl_sweep/pipeline/logger.py
from __future__ import annotations

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


def setup_logger(
    log_dir: Optional[Union[str, Path]] = None,
    *,
    level: int = logging.INFO,
    filename_prefix: str = "acl_sweep",
    console: bool = True,
    rotate: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3,
    force: bool = False,
) -> Optional[Path]:
    """
    Configure root logging: a timestamped file in ``log_dir`` and/or stderr.

    Returns the path to the log file, or None when only console logging was
    requested. Safe to call once at process start.
    """
    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)

    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_path: Optional[Path] = None
    if log_dir is not None:
        d = Path(log_dir).expanduser()
        d.mkdir(parents=True, exist_ok=True)

        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = d / f"{filename_prefix}_{ts}.log"

        if rotate:
            fhandler = RotatingFileHandler(
                log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        else:
            fhandler = logging.FileHandler(log_path, mode="w", encoding="utf-8")

        fhandler.setLevel(level)
        fhandler.setFormatter(fmt)
        root.addHandler(fhandler)

    if console:
        shandler = logging.StreamHandler(sys.stderr)
        shandler.setLevel(level)
        shandler.setFormatter(fmt)
        root.addHandler(shandler)

    # botocore is chatty at DEBUG; keep it one notch quieter than ours.
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))

    if log_path is not None:
        root.info("Logging to: %s", str(log_path))
    return log_path
