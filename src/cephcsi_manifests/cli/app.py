# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cephcsi_manifests.ceph.secrets import TerminalPrompter
from cephcsi_manifests.errors import GeneratorError
from cephcsi_manifests.generator import run
from cephcsi_manifests.logging.log import init_logging
from cephcsi_manifests.observers.console import ConsoleObserver
from cephcsi_manifests.observers.dispatcher import EventBus
from cephcsi_manifests.observers.logger import LoggerObserver
from cephcsi_manifests.report.summary import render_summary


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(
    help="Generate ceph-csi RBD manifests for OpenShift.",
    add_completion=False,
)


@app.command()
def generate(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug output on the console"
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        envvar="CEPH_CSI_LOG_DIR",
        help="Directory for run logs (default: ~/.ceph-csi-manifests/logs)",
    ),
):
    """
    Render the ceph-csi RBD manifests into OUTPUT_DIR.

    All settings come from environment variables (CEPH_VM, CEPH_MON_IP,
    CEPH_FSID, CEPH_USER_KEY, CSI_VERSION, OUTPUT_DIR, POOL_GENERAL,
    POOL_VMS, sidecar *_VERSION variables, CONTROLLER_REPLICAS, ...).
    CEPH_FSID and CEPH_USER_KEY are read over SSH from CEPH_VM when unset.
    """
    logger, run_id, log_path = init_logging(base_dir=log_dir, verbose=verbose)

    bus = EventBus([ConsoleObserver(), LoggerObserver(logger)], run_id=run_id)

    try:
        result = run(prompter=TerminalPrompter(), bus=bus)
    except GeneratorError as e:
        logger.error(f"ERROR: {e}")
        if log_path:
            logger.error(f"Full log: {log_path}")
        raise typer.Exit(code=e.exit_code)

    typer.echo(render_summary(result.config, result.files))
    if log_path:
        logger.debug(f"Full log: {log_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
