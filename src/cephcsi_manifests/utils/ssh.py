# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/utils/ssh.py

from __future__ import annotations

import paramiko

from cephcsi_manifests.ceph.models import CephHost
from cephcsi_manifests.utils.ssh_runner import SSHRunner


def open_ssh(
    host: CephHost,
    *,
    connect_timeout: float = 20.0,
) -> SSHRunner:
    client = paramiko.SSHClient()
    client.load_system_host_keys()
    client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    pkey = None
    if host.pkey_path:
        for key_cls in (
            paramiko.RSAKey,
            paramiko.Ed25519Key,
            paramiko.ECDSAKey,
        ):
            try:
                pkey = key_cls.from_private_key_file(host.pkey_path)
                break
            except paramiko.SSHException:
                continue

    try:
        client.connect(
            hostname=host.address,
            port=host.port,
            username=host.username,
            pkey=pkey,
            timeout=connect_timeout,
            banner_timeout=connect_timeout,
            auth_timeout=connect_timeout,
            allow_agent=True,
            look_for_keys=True,
        )
    except Exception:
        client.close()
        raise

    return SSHRunner(client)
