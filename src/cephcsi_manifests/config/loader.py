# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/config/loader.py

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import ValidationError

from cephcsi_manifests.ceph.models import CephHost
from cephcsi_manifests.errors import ConfigurationError
from .models import EnvSettings, GeneratorConfig

log = logging.getLogger("cephcsi_manifests")


# field -> environment variables, first non-empty one wins
ENV_VARS: dict[str, tuple[str, ...]] = {
    "ceph_vm_host": ("CEPH_VM", "CEPH_VM_HOST"),
    "ceph_mon_ip": ("CEPH_MON_IP",),
    "ceph_fsid": ("CEPH_FSID",),
    "ceph_user_key": ("CEPH_USER_KEY",),
    "csi_version": ("CSI_VERSION",),
    "output_dir": ("OUTPUT_DIR",),
    "pool_general": ("POOL_GENERAL",),
    "pool_vms": ("POOL_VMS",),
    "provisioner_version": ("PROVISIONER_VERSION",),
    "snapshotter_version": ("SNAPSHOTTER_VERSION",),
    "attacher_version": ("ATTACHER_VERSION",),
    "resizer_version": ("RESIZER_VERSION",),
    "registrar_version": ("REGISTRAR_VERSION",),
    "controller_replicas": ("CONTROLLER_REPLICAS",),
    "ceph_conf_mode": ("CEPH_CONF_MODE",),
    "ssh_user": ("CEPH_SSH_USER",),
    "ssh_port": ("CEPH_SSH_PORT",),
    "ssh_key": ("CEPH_SSH_KEY",),
    "ssh_timeout": ("CEPH_SSH_TIMEOUT",),
}


def _lookup(environ: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    # unset and empty are the same thing, like ${VAR:-default}
    for name in names:
        value = environ.get(name, "")
        if value != "":
            return value
    return None


def _split_target(target: str) -> tuple[Optional[str], str, Optional[str]]:
    """
    Split an ssh-style target ``[user@]host[:port]``.
    """
    user = None
    if "@" in target:
        user, target = target.split("@", 1)

    port = None
    host, sep, tail = target.rpartition(":")
    if sep and tail.isdigit() and ":" not in host:
        target, port = host, tail

    return user or None, target, port


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        field = str(e["loc"][0]) if e["loc"] else "?"
        env_name = ENV_VARS.get(field, (field,))[0]
        if field == "ceph_user_key":
            parts.append(f"{env_name}: {e['msg']}")
        else:
            parts.append(f"{env_name}={e.get('input')!r}: {e['msg']}")
    return "; ".join(parts)


def load_environment(environ: Optional[Mapping[str, str]] = None) -> EnvSettings:
    """
    Read all settings from *environ* (defaults to ``os.environ``).

    Values that are unset or empty fall back to the defaults on EnvSettings.
    Invalid values raise ConfigurationError before anything touches the
    network or the filesystem.
    """
    if environ is None:
        environ = os.environ

    data: dict[str, str] = {}
    for field, names in ENV_VARS.items():
        value = _lookup(environ, names)
        if value is not None:
            data[field] = value

    if "ceph_vm_host" in data:
        user, host, port = _split_target(data["ceph_vm_host"])
        if not host:
            raise ConfigurationError(
                f"invalid configuration: CEPH_VM={data['ceph_vm_host']!r}: no host name"
            )
        data["ceph_vm_host"] = host
        if user and "ssh_user" not in data:
            data["ssh_user"] = user
        if port and "ssh_port" not in data:
            data["ssh_port"] = port

    try:
        settings = EnvSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {_describe(e)}") from e

    log.debug(
        "Loaded settings from environment: %s",
        ", ".join(sorted(k for k in data if k not in ("ceph_fsid", "ceph_user_key"))) or "(defaults)",
    )
    return settings


def build_config(settings: EnvSettings, *, fsid: str, user_key: str) -> GeneratorConfig:
    data = settings.model_dump()
    data.update(ceph_fsid=fsid, ceph_user_key=user_key)
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {_describe(e)}") from e


def ceph_host(settings: EnvSettings) -> CephHost:
    return CephHost(
        address=settings.ceph_vm_host,
        username=settings.ssh_user,
        port=settings.ssh_port,
        pkey_path=str(settings.ssh_key) if settings.ssh_key else None,
    )
