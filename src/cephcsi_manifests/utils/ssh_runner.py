# src/cephcsi_manifests/utils/ssh_runner.py

from __future__ import annotations

import socket
from typing import Optional

import paramiko


class SSHRunner:
    def __init__(self, client: paramiko.SSHClient):
        self.client = client

    def run(
        self,
        cmd: str,
        *,
        sudo: bool = False,
        timeout: Optional[float] = None,
    ) -> tuple[int, str, str]:
        """
        Run *cmd* and return (rc, stdout, stderr).

        *timeout* bounds every blocking read on the channel and the wait for
        the exit status; a stalled command raises socket.timeout (an OSError).
        """
        if sudo:
            cmd = f"sudo {cmd}"

        stdin, stdout, stderr = self.client.exec_command(cmd, timeout=timeout)
        stdin.close()
        out = stdout.read().decode("utf-8", "replace")
        err = stderr.read().decode("utf-8", "replace")
        channel = stdout.channel
        if timeout is not None and not channel.status_event.wait(timeout):
            raise socket.timeout(f"no exit status from '{cmd}' after {timeout}s")
        rc = channel.recv_exit_status()
        return rc, out, err

    def close(self) -> None:
        self.client.close()
