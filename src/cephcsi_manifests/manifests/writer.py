# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/manifests/writer.py

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from cephcsi_manifests.errors import ManifestWriteError
from cephcsi_manifests.observers.dispatcher import EventBus
from cephcsi_manifests.observers.events import ManifestWritten
from .renderer import RenderedManifest

log = logging.getLogger("cephcsi_manifests")

FILE_MODE = 0o644
EXEC_MODE = 0o755


def _write_file(path: Path, content: str, mode: int) -> None:
    # temp file in the target directory so os.replace stays on one filesystem
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def write_manifests(
    rendered: Iterable[RenderedManifest],
    output_dir: Path,
    *,
    bus: Optional[EventBus] = None,
) -> list[Path]:
    """
    Write rendered manifests into *output_dir*, replacing existing files.

    The first OSError aborts the run; files already written are left in place.
    """
    bus = bus or EventBus()
    output_dir = Path(output_dir)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ManifestWriteError(f"cannot create output directory {output_dir}: {e}") from e

    written: list[Path] = []
    for manifest in rendered:
        path = output_dir / manifest.filename
        mode = EXEC_MODE if manifest.spec.executable else FILE_MODE
        try:
            _write_file(path, manifest.content, mode)
        except OSError as e:
            raise ManifestWriteError(f"cannot write {path}: {e}") from e

        log.debug("wrote %s (%d bytes, mode %o)", path, len(manifest.content.encode("utf-8")), mode)
        bus.emit(ManifestWritten(
            name=manifest.filename,
            path=str(path),
            executable=manifest.spec.executable,
            **bus.ctx(),
        ))
        written.append(path)

    return written
