from pathlib import Path

from cephcsi_manifests.config.loader import build_config, load_environment
from cephcsi_manifests.manifests.catalogue import MANIFEST_NAMES
from cephcsi_manifests.report.summary import render_settings, render_summary


def _config(env=None):
    return build_config(load_environment(env or {}), fsid="test-fsid", user_key="AQBverysecretkey==")


def test_settings_mask_the_user_key():
    text = render_settings(_config())
    assert "FSID:     test-fsid" in text
    assert "MON IP:   10.X.X.X" in text
    assert "User Key: AQBverys..." in text
    assert "verysecretkey" not in text
    assert "provisioner=v6.0.0" in text


def test_summary_lists_files_and_follow_up_commands():
    cfg = _config({"CONTROLLER_REPLICAS": "3"})
    files = [Path("ceph-csi-manifests") / n for n in MANIFEST_NAMES]

    text = render_summary(cfg, files)

    for name in MANIFEST_NAMES:
        assert f"  {name}" in text
    assert "./ceph-csi-manifests/11-apply-scc.sh" in text
    assert "oc apply -f ceph-csi-manifests/" in text
    assert "oc get pods -n openshift-storage" in text
    assert "oc get sc" in text
    assert "Controller replicas: 3 (upstream default: 3)" in text
    assert "AQBverysecretkey" not in text


def test_absolute_output_dir_is_kept(tmp_path):
    cfg = _config({"OUTPUT_DIR": str(tmp_path / "m")})
    text = render_summary(cfg, [])
    assert f"  {tmp_path / 'm' / '11-apply-scc.sh'}" in text
