# tests/manifests/test_writer.py
from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from cephcsi_manifests.config.loader import build_config, load_environment
from cephcsi_manifests.errors import ManifestWriteError
from cephcsi_manifests.manifests.catalogue import MANIFEST_NAMES
from cephcsi_manifests.manifests.renderer import render_manifests
from cephcsi_manifests.manifests.writer import write_manifests
from cephcsi_manifests.observers.dispatcher import EventBus
from cephcsi_manifests.observers.events import ManifestWritten


def _rendered():
    cfg = build_config(load_environment({}), fsid="test-fsid", user_key="test-key")
    return render_manifests(cfg)


class Capture:
    def __init__(self): self.events = []
    def notify(self, event): self.events.append(event)


def test_writes_exactly_the_catalogue(tmp_path: Path):
    out = tmp_path / "nested" / "out"
    cap = Capture()

    paths = write_manifests(_rendered(), out, bus=EventBus([cap]))

    assert [p.name for p in paths] == list(MANIFEST_NAMES)
    assert sorted(os.listdir(out)) == sorted(MANIFEST_NAMES)
    assert [e.name for e in cap.events if isinstance(e, ManifestWritten)] == list(MANIFEST_NAMES)


def test_script_is_executable(tmp_path: Path):
    write_manifests(_rendered(), tmp_path)
    script_mode = stat.S_IMODE((tmp_path / "11-apply-scc.sh").stat().st_mode)
    yaml_mode = stat.S_IMODE((tmp_path / "01-namespace.yaml").stat().st_mode)
    assert script_mode == 0o755
    assert yaml_mode == 0o644


def test_existing_files_are_replaced(tmp_path: Path):
    stale = tmp_path / "03-csi-secret.yaml"
    stale.write_text("stale content that is much longer than the rendered secret " * 20)

    write_manifests(_rendered(), tmp_path)

    text = stale.read_text()
    assert "stale" not in text
    assert "userKey: test-key" in text


def test_second_run_is_byte_identical(tmp_path: Path):
    a, b = tmp_path / "a", tmp_path / "b"
    write_manifests(_rendered(), a)
    write_manifests(_rendered(), b)
    for name in MANIFEST_NAMES:
        assert (a / name).read_bytes() == (b / name).read_bytes()


def test_output_dir_is_a_file(tmp_path: Path):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")
    with pytest.raises(ManifestWriteError):
        write_manifests(_rendered(), blocker)


def test_write_failure_aborts_and_keeps_earlier_files(tmp_path: Path, monkeypatch):
    import cephcsi_manifests.manifests.writer as mod

    real = mod._write_file

    def failing(path, content, mode):
        if path.name == "04-rbac-provisioner.yaml":
            raise OSError(28, "No space left on device")
        real(path, content, mode)

    monkeypatch.setattr(mod, "_write_file", failing)

    with pytest.raises(ManifestWriteError) as exc:
        write_manifests(_rendered(), tmp_path)

    assert "No space left on device" in str(exc.value)
    assert sorted(os.listdir(tmp_path)) == [
        "01-namespace.yaml", "02-csi-config.yaml", "03-csi-secret.yaml",
    ]
