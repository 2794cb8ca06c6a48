# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/observers/events.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict
import uuid


@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of one invocation

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(run_id: str | None = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
    }


# ----- Run lifecycle -----

@dataclass(frozen=True)
class RunStarted(BaseEvent):
    output_dir: str

@dataclass(frozen=True)
class RunSucceeded(BaseEvent):
    output_dir: str
    files: int

@dataclass(frozen=True)
class RunFailed(BaseEvent):
    error: str


# ----- Secrets -----

@dataclass(frozen=True)
class SecretResolved(BaseEvent):
    name: str
    source: str       # "env" | "ssh" | "prompt"

@dataclass(frozen=True)
class SecretLookupFailed(BaseEvent):
    name: str
    host: str
    error: str


# ----- Manifests -----

@dataclass(frozen=True)
class ManifestWritten(BaseEvent):
    name: str
    path: str
    executable: bool = False

@dataclass(frozen=True)
class ConfigResolved(BaseEvent):
    settings: str     # recap with the user key masked
