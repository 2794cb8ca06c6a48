# tests/ceph/test_lookup.py
from __future__ import annotations

import socket
import threading
import types

import pytest

from cephcsi_manifests.ceph import lookup as mod
from cephcsi_manifests.ceph.models import CephHost
from cephcsi_manifests.errors import RemoteLookupError
from cephcsi_manifests.utils import ssh as ssh_mod
from cephcsi_manifests.utils.ssh_runner import SSHRunner


# ---- Fakes for paramiko ----

class _FakeChannel:
    def __init__(self, rc=0, exited=True):
        self._rc = rc
        self.status_event = threading.Event()
        if exited:
            self.status_event.set()
    def recv_exit_status(self): return self._rc

class _Buf:
    def __init__(self, s="", exc=None):
        self._s = s
        self._exc = exc
    def read(self):
        if self._exc:
            raise self._exc
        return self._s.encode()

class FakeSSHClient:
    """
    Captures exec_command() calls and returns pre-canned outputs.
    """
    def __init__(self, log, responses=None, read_exc=None, exited=True, connect_exc=None):
        self.log = log
        self._responses = responses or {}
        self._read_exc = read_exc
        self._exited = exited
        self._connect_exc = connect_exc
    def load_system_host_keys(self): pass
    def set_missing_host_key_policy(self, policy): pass
    def connect(self, **kw):
        self.log.append(("connect", kw))
        if self._connect_exc:
            raise self._connect_exc
    def exec_command(self, cmd, timeout=None):
        self.log.append(("exec", cmd, timeout))
        out, err, rc = self._responses.get(cmd, ("", "", 0))
        stdout = _Buf(out, self._read_exc)
        stderr = _Buf(err)
        stdout.channel = _FakeChannel(rc, self._exited)
        stdin = types.SimpleNamespace(close=lambda: None)
        return stdin, stdout, stderr
    def close(self):
        self.log.append(("close",))


def _fake_paramiko(ops, **client_kw):
    class FakeParamikoModule:
        SSHException = Exception
        class AutoAddPolicy: pass
        class RSAKey:
            @staticmethod
            def from_private_key_file(path): return "PKEY"
        Ed25519Key = RSAKey
        ECDSAKey = RSAKey
        @staticmethod
        def SSHClient():
            return FakeSSHClient(ops, **client_kw)
    return FakeParamikoModule


HOST = CephHost(address="ceph-standalone")


def _patch_open(monkeypatch, client, calls=None):
    def fake_open(host, *, connect_timeout):
        if calls is not None:
            calls.append((host, connect_timeout))
        return SSHRunner(client)
    monkeypatch.setattr(mod, "open_ssh", fake_open)


def test_fsid_and_key_are_read_over_one_connection(monkeypatch):
    ops, calls = [], []
    client = FakeSSHClient(ops, {
        "sudo ceph fsid": ("6a1f0c2e-1111-2222-3333-444455556666\n", "", 0),
        "sudo ceph auth get-key client.openshift": ("AQBsecret==", "", 0),
    })
    _patch_open(monkeypatch, client, calls)

    with mod.SSHSecretResolver(HOST, timeout=7) as r:
        assert r.fsid() == "6a1f0c2e-1111-2222-3333-444455556666"
        assert r.user_key("openshift") == "AQBsecret=="

    assert calls == [(HOST, 7)]
    execs = [op for op in ops if op[0] == "exec"]
    assert execs == [
        ("exec", "sudo ceph fsid", 7),
        ("exec", "sudo ceph auth get-key client.openshift", 7),
    ]
    assert ops[-1] == ("close",)


def test_non_zero_exit_is_a_lookup_error(monkeypatch):
    client = FakeSSHClient([], {
        "sudo ceph fsid": ("", "sudo: a password is required", 1),
    })
    _patch_open(monkeypatch, client)

    r = mod.SSHSecretResolver(HOST)
    with pytest.raises(RemoteLookupError) as exc:
        r.fsid()
    assert "password is required" in str(exc.value)


def test_empty_output_is_a_lookup_error(monkeypatch):
    _patch_open(monkeypatch, FakeSSHClient([], {}))
    with pytest.raises(RemoteLookupError):
        mod.SSHSecretResolver(HOST).user_key("openshift")


def test_read_timeout_is_a_lookup_error(monkeypatch):
    _patch_open(monkeypatch, FakeSSHClient([], read_exc=socket.timeout("timed out")))
    with pytest.raises(RemoteLookupError) as exc:
        mod.SSHSecretResolver(HOST, timeout=1).fsid()
    assert "timed out" in str(exc.value)


def test_connection_failure_is_a_lookup_error(monkeypatch):
    def refuse(host, *, connect_timeout):
        raise ConnectionRefusedError("connection refused")
    monkeypatch.setattr(mod, "open_ssh", refuse)

    with pytest.raises(RemoteLookupError) as exc:
        mod.SSHSecretResolver(HOST).fsid()
    assert "ceph-standalone" in str(exc.value)


def test_open_ssh_passes_host_and_timeout(monkeypatch):
    ops = []
    monkeypatch.setattr(ssh_mod, "paramiko", _fake_paramiko(ops))

    host = CephHost(address="10.0.0.5", username="ops", port=2222, pkey_path="/k")
    runner = ssh_mod.open_ssh(host, connect_timeout=3)

    assert isinstance(runner, SSHRunner)
    kind, kw = ops[0]
    assert kind == "connect"
    assert kw["hostname"] == "10.0.0.5"
    assert kw["port"] == 2222
    assert kw["username"] == "ops"
    assert kw["pkey"] == "PKEY"
    assert "password" not in kw
    assert kw["timeout"] == 3


def test_missing_exit_status_is_a_lookup_error(monkeypatch):
    # output drained but the remote side never reports an exit status
    _patch_open(monkeypatch, FakeSSHClient([], {
        "sudo ceph fsid": ("6a1f0c2e-1111-2222-3333-444455556666\n", "", 0),
    }, exited=False))

    with pytest.raises(RemoteLookupError) as exc:
        mod.SSHSecretResolver(HOST, timeout=0.05).fsid()
    assert "no exit status" in str(exc.value)


def test_runner_without_timeout_waits_for_exit_status():
    client = FakeSSHClient([], {"ls": ("a\n", "", 3)})
    assert SSHRunner(client).run("ls") == (3, "a\n", "")


def test_open_ssh_closes_client_when_connect_fails(monkeypatch):
    ops = []
    monkeypatch.setattr(
        ssh_mod, "paramiko",
        _fake_paramiko(ops, connect_exc=socket.timeout("timed out")),
    )

    with pytest.raises(socket.timeout):
        ssh_mod.open_ssh(CephHost(address="10.0.0.5"), connect_timeout=1)

    assert [op[0] for op in ops] == ["connect", "close"]


def test_connect_timeout_through_resolver_closes_client(monkeypatch):
    ops = []
    monkeypatch.setattr(
        ssh_mod, "paramiko",
        _fake_paramiko(ops, connect_exc=socket.timeout("timed out")),
    )

    with pytest.raises(RemoteLookupError) as exc:
        mod.SSHSecretResolver(CephHost(address="10.0.0.5"), timeout=1).fsid()

    assert "10.0.0.5" in str(exc.value)
    assert ops[-1] == ("close",)
