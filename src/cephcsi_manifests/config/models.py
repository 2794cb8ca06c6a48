# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/config/models.py

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fixed identifiers shared by the templates and the summary
NAMESPACE = "openshift-storage"
DRIVER_NAME = "rbd.csi.ceph.com"
CEPH_CLIENT_USER = "openshift"
SECRET_NAME = "csi-rbd-secret"
MON_PORT = 6789
UPSTREAM_CONTROLLER_REPLICAS = 3


class EnvSettings(BaseModel):
    """
    Every setting that can be read from the environment.

    ceph_fsid / ceph_user_key stay None until resolved (env, SSH or prompt).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ceph_vm_host: str = "ceph-standalone"
    ceph_mon_ip: str = "10.X.X.X"
    ceph_fsid: Optional[str] = None
    ceph_user_key: Optional[str] = None
    csi_version: str = "v3.13.0"
    output_dir: Path = Path("./ceph-csi-manifests")
    pool_general: str = "openshift"
    pool_vms: str = "openshift-vms"

    # sidecar versions (upstream master, compatible with v3.13.0+)
    provisioner_version: str = "v6.0.0"
    snapshotter_version: str = "v8.4.0"
    attacher_version: str = "v4.10.0"
    resizer_version: str = "v2.0.0"
    registrar_version: str = "v2.15.0"

    controller_replicas: int = Field(default=2, ge=1)
    ceph_conf_mode: Literal["empty", "populated"] = "empty"

    # SSH lookup of fsid / user key
    ssh_user: Optional[str] = None
    ssh_port: int = Field(default=22, ge=1, le=65535)
    ssh_key: Optional[Path] = None
    ssh_timeout: float = Field(default=20.0, gt=0)

    @property
    def secrets_from_env(self) -> bool:
        return bool(self.ceph_fsid) and bool(self.ceph_user_key)


class GeneratorConfig(EnvSettings):
    """
    Fully resolved configuration for one run. Built once, never mutated.
    """

    ceph_fsid: str
    ceph_user_key: str

    @field_validator("ceph_fsid", "ceph_user_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def monitors(self) -> list[str]:
        return [f"{self.ceph_mon_ip}:{MON_PORT}"]

    @property
    def masked_user_key(self) -> str:
        return f"{self.ceph_user_key[:8]}..."

    def template_context(self) -> dict:
        """
        Values exposed to the manifest templates.
        """
        return {
            "namespace": NAMESPACE,
            "driver_name": DRIVER_NAME,
            "ceph_client_user": CEPH_CLIENT_USER,
            "secret_name": SECRET_NAME,
            "ceph_fsid": self.ceph_fsid,
            "ceph_user_key": self.ceph_user_key,
            "ceph_mon_ip": self.ceph_mon_ip,
            "monitors": self.monitors,
            "csi_version": self.csi_version,
            "pool_general": self.pool_general,
            "pool_vms": self.pool_vms,
            "provisioner_version": self.provisioner_version,
            "snapshotter_version": self.snapshotter_version,
            "attacher_version": self.attacher_version,
            "resizer_version": self.resizer_version,
            "registrar_version": self.registrar_version,
            "controller_replicas": self.controller_replicas,
            "ceph_conf_mode": self.ceph_conf_mode,
        }
