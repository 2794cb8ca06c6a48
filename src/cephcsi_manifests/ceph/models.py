# src/cephcsi_manifests/ceph/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CephHost:
    """
    The Ceph host queried for the cluster fsid and the client key.
    """
    address: str                     # reachable IP/DNS
    username: Optional[str] = None   # None -> paramiko uses the local user
    port: int = 22
    pkey_path: Optional[str] = None  # path to SSH private key file

    @property
    def target(self) -> str:
        user = f"{self.username}@" if self.username else ""
        port = f":{self.port}" if self.port != 22 else ""
        return f"{user}{self.address}{port}"
