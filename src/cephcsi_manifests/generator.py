# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/generator.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from cephcsi_manifests.ceph.secrets import Prompter, ResolverFactory, resolve_secrets
from cephcsi_manifests.config.loader import build_config, load_environment
from cephcsi_manifests.config.models import GeneratorConfig
from cephcsi_manifests.errors import GeneratorError
from cephcsi_manifests.manifests.renderer import render_manifests
from cephcsi_manifests.manifests.writer import write_manifests
from cephcsi_manifests.observers.dispatcher import EventBus
from cephcsi_manifests.observers.events import (
    ConfigResolved,
    RunFailed,
    RunStarted,
    RunSucceeded,
)
from cephcsi_manifests.report.summary import render_settings

log = logging.getLogger("cephcsi_manifests")


@dataclass(frozen=True)
class GenerationResult:
    config: GeneratorConfig
    files: list[Path]


def resolve_config(
    environ: Optional[Mapping[str, str]] = None,
    *,
    prompter: Prompter,
    resolver_factory: Optional[ResolverFactory] = None,
    bus: Optional[EventBus] = None,
) -> GeneratorConfig:
    """
    Environment -> settings -> (fsid, user key) -> immutable GeneratorConfig.
    """
    settings = load_environment(environ)
    fsid, user_key = resolve_secrets(
        settings,
        prompter=prompter,
        resolver_factory=resolver_factory,
        bus=bus,
    )
    return build_config(settings, fsid=fsid, user_key=user_key)


def generate(config: GeneratorConfig, *, bus: Optional[EventBus] = None) -> list[Path]:
    """
    Render all manifests, then write them. Nothing is written if any
    template fails to render.
    """
    bus = bus or EventBus()
    rendered = render_manifests(config)
    log.debug("rendered %d manifests, writing to %s", len(rendered), config.output_dir)
    bus.emit(RunStarted(output_dir=str(config.output_dir), **bus.ctx()))
    return write_manifests(rendered, config.output_dir, bus=bus)


def run(
    environ: Optional[Mapping[str, str]] = None,
    *,
    prompter: Prompter,
    resolver_factory: Optional[ResolverFactory] = None,
    bus: Optional[EventBus] = None,
) -> GenerationResult:
    bus = bus or EventBus()
    try:
        config = resolve_config(
            environ,
            prompter=prompter,
            resolver_factory=resolver_factory,
            bus=bus,
        )
        bus.emit(ConfigResolved(settings=render_settings(config), **bus.ctx()))
        files = generate(config, bus=bus)
    except GeneratorError as e:
        bus.emit(RunFailed(error=str(e), **bus.ctx()))
        raise

    bus.emit(RunSucceeded(output_dir=str(config.output_dir), files=len(files), **bus.ctx()))
    return GenerationResult(config=config, files=files)
