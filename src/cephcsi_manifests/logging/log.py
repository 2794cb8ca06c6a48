# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/logging/log.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "cephcsi_manifests"


def default_log_dir() -> Path:
    return Path.home() / ".ceph-csi-manifests" / "logs"


def _open_log_file(base_dir: Path | None, name: str, run_id: str) -> tuple[logging.Handler | None, Path | None, str | None]:
    """
    Returns (handler, path, error); a log file that cannot be created is not fatal.
    """
    try:
        if base_dir is None:
            base_dir = default_log_dir()
        base_dir.mkdir(parents=True, exist_ok=True)

        ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        log_path = base_dir / f"{name}-{ts}-{run_id}.log"
        fh = logging.FileHandler(log_path, encoding="utf-8")
    except (OSError, RuntimeError) as e:
        return None, None, str(e)
    return fh, log_path, None


def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = LOGGER_NAME,
    verbose: bool = False,
) -> tuple[logging.Logger, str, Path | None]:
    """
    Initializes:
      - a DEBUG log file with the full trace of the run
      - console output at INFO (DEBUG with --verbose)
      - returns run_id so observers can reuse it

    log_path is None when the log directory is not writable; the run then
    logs to the console only.
    """
    run_id = str(uuid.uuid4())

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = False

    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(message)s")

    # Console = INFO by default, DEBUG when --verbose is passed
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(file_formatter if verbose else console_formatter)
    logger.addHandler(ch)

    # File = FULL TRACE
    fh, log_path, error = _open_log_file(base_dir, name, run_id)
    if fh is None:
        logger.warning(f"WARNING: no log file for this run ({error}); logging to console only")
    else:
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(file_formatter)
        logger.addHandler(fh)

    logger.debug("=== ceph-csi-manifests run started ===")
    logger.debug(f"run_id={run_id}")
    logger.debug(f"log_file={log_path}")

    return logger, run_id, log_path
