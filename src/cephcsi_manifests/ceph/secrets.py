# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/ceph/secrets.py

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, Protocol, TextIO

import typer

from cephcsi_manifests.ceph.lookup import SecretResolver, SSHSecretResolver
from cephcsi_manifests.config.loader import ceph_host
from cephcsi_manifests.config.models import CEPH_CLIENT_USER, EnvSettings
from cephcsi_manifests.errors import ConfigurationError, RemoteLookupError
from cephcsi_manifests.observers.dispatcher import EventBus
from cephcsi_manifests.observers.events import SecretLookupFailed, SecretResolved

log = logging.getLogger("cephcsi_manifests")


class Prompter(Protocol):
    def ask(self, label: str, *, secret: bool = False) -> str: ...


class TerminalPrompter:
    """
    Line prompt on the controlling terminal.

    Refuses to prompt when stdin is not a TTY so unattended runs fail
    instead of blocking.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin

    def interactive(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def ask(self, label: str, *, secret: bool = False) -> str:
        if not self.interactive():
            raise ConfigurationError(
                f"{label} is not set and there is no terminal to ask for it; "
                f"export {label} and re-run"
            )
        try:
            value = typer.prompt(label, hide_input=secret)
        except typer.Abort as e:
            raise ConfigurationError(f"no value entered for {label}") from e

        value = value.strip()
        if not value:
            raise ConfigurationError(f"no value entered for {label}")
        return value


ResolverFactory = Callable[[], SecretResolver]


def ssh_resolver_factory(settings: EnvSettings) -> ResolverFactory:
    return lambda: SSHSecretResolver(ceph_host(settings), timeout=settings.ssh_timeout)


def _resolve_one(
    *,
    env_var: str,
    lookup: Callable[[], str],
    failure: str,
    secret: bool,
    prompter: Prompter,
    bus: EventBus,
    host: str,
) -> str:
    try:
        value = lookup()
    except RemoteLookupError as e:
        log.error("ERROR: %s", failure)
        log.debug("%s lookup failed: %s", env_var, e)
        bus.emit(SecretLookupFailed(name=env_var, host=host, error=str(e), **bus.ctx()))
        log.info("Set %s as environment variable or enter manually:", env_var)
        value = prompter.ask(env_var, secret=secret)
        bus.emit(SecretResolved(name=env_var, source="prompt", **bus.ctx()))
        return value

    bus.emit(SecretResolved(name=env_var, source="ssh", **bus.ctx()))
    return value


def resolve_secrets(
    settings: EnvSettings,
    *,
    prompter: Prompter,
    resolver_factory: Optional[ResolverFactory] = None,
    bus: Optional[EventBus] = None,
) -> tuple[str, str]:
    """
    Return (fsid, user_key).

    Both in the environment: used as-is, no SSH, no prompt. Otherwise each
    missing value gets one SSH lookup and, if that fails, one prompt.
    """
    bus = bus or EventBus()

    if settings.secrets_from_env:
        log.info("=== Using CEPH_FSID and CEPH_USER_KEY from environment ===")
        bus.emit(SecretResolved(name="CEPH_FSID", source="env", **bus.ctx()))
        bus.emit(SecretResolved(name="CEPH_USER_KEY", source="env", **bus.ctx()))
        return settings.ceph_fsid, settings.ceph_user_key

    host = settings.ceph_vm_host
    log.info("=== Collecting data from Ceph at %s via SSH ===", host)

    factory = resolver_factory or ssh_resolver_factory(settings)
    resolver = factory()
    try:
        fsid = settings.ceph_fsid
        if fsid:
            bus.emit(SecretResolved(name="CEPH_FSID", source="env", **bus.ctx()))
        else:
            fsid = _resolve_one(
                env_var="CEPH_FSID",
                lookup=resolver.fsid,
                failure=f"Could not connect via SSH to '{host}'.",
                secret=False,
                prompter=prompter,
                bus=bus,
                host=host,
            )

        user_key = settings.ceph_user_key
        if user_key:
            bus.emit(SecretResolved(name="CEPH_USER_KEY", source="env", **bus.ctx()))
        else:
            user_key = _resolve_one(
                env_var="CEPH_USER_KEY",
                lookup=lambda: resolver.user_key(CEPH_CLIENT_USER),
                failure=f"Could not get the client.{CEPH_CLIENT_USER} key.",
                secret=True,
                prompter=prompter,
                bus=bus,
                host=host,
            )
    finally:
        resolver.close()

    return fsid, user_key
