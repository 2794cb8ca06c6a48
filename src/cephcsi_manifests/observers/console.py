# src/cephcsi_manifests/observers/console.py
from __future__ import annotations

import typer

from .events import BaseEvent, ConfigResolved, ManifestWritten, RunStarted


class ConsoleObserver:
    """
    Operator-facing progress lines on stdout.
    """

    def notify(self, event: BaseEvent) -> None:
        if isinstance(event, ManifestWritten):
            typer.echo(f"  ✓ {event.name}")
        elif isinstance(event, RunStarted):
            typer.echo(f"=== Generating manifests in {event.output_dir}/ ===")
        elif isinstance(event, ConfigResolved):
            typer.echo(f"\n{event.settings}\n")
