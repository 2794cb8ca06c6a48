# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/ceph/lookup.py

from __future__ import annotations

import logging
from typing import Optional, Protocol

import paramiko

from cephcsi_manifests.ceph.models import CephHost
from cephcsi_manifests.errors import RemoteLookupError
from cephcsi_manifests.utils.ssh import open_ssh
from cephcsi_manifests.utils.ssh_runner import SSHRunner

log = logging.getLogger("cephcsi_manifests")


class SecretResolver(Protocol):
    def fsid(self) -> str: ...
    def user_key(self, client: str) -> str: ...
    def close(self) -> None: ...


class SSHSecretResolver:
    """
    Reads the cluster fsid and a client key from a Ceph host over SSH.

    The connection is opened on first use. Every failure (connect, auth,
    timeout, non-zero exit, empty output) surfaces as RemoteLookupError;
    nothing is retried.
    """

    def __init__(self, host: CephHost, *, timeout: float = 20.0):
        self.host = host
        self.timeout = timeout
        self._cli: Optional[SSHRunner] = None

    def _connect(self) -> SSHRunner:
        if self._cli is None:
            log.debug("[ssh] connecting to %s (timeout=%ss)", self.host.target, self.timeout)
            try:
                self._cli = open_ssh(self.host, connect_timeout=self.timeout)
            except (paramiko.SSHException, OSError) as e:
                raise RemoteLookupError(
                    f"could not connect via SSH to '{self.host.target}': {e}"
                ) from e
        return self._cli

    def _read(self, cmd: str) -> str:
        cli = self._connect()
        log.debug("[ssh] (%s) $ sudo %s", self.host.address, cmd)
        try:
            rc, out, err = cli.run(cmd, sudo=True, timeout=self.timeout)
        except (paramiko.SSHException, OSError) as e:
            raise RemoteLookupError(f"'{cmd}' on {self.host.address} failed: {e}") from e

        value = out.strip()
        if rc != 0:
            raise RemoteLookupError(
                f"'{cmd}' on {self.host.address} exited {rc}: {err.strip() or value}"
            )
        if not value:
            raise RemoteLookupError(f"'{cmd}' on {self.host.address} returned nothing")
        return value.splitlines()[0].strip()

    def fsid(self) -> str:
        return self._read("ceph fsid")

    def user_key(self, client: str) -> str:
        return self._read(f"ceph auth get-key client.{client}")

    def close(self) -> None:
        if self._cli is not None:
            self._cli.close()
            self._cli = None

    def __enter__(self) -> "SSHSecretResolver":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
