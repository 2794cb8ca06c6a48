# src/cephcsi_manifests/report/summary.py

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from cephcsi_manifests.config.models import (
    NAMESPACE,
    UPSTREAM_CONTROLLER_REPLICAS,
    GeneratorConfig,
)
from cephcsi_manifests.manifests.catalogue import MANIFESTS


def _shell_path(path: Path) -> str:
    # a bare relative path would be looked up on $PATH by the shell
    s = str(path)
    if path.is_absolute() or s.startswith("."):
        return s
    return f"./{s}"


def render_settings(config: GeneratorConfig) -> str:
    """
    The resolved values, user key masked.
    """
    return "\n".join([
        f"  FSID:     {config.ceph_fsid}",
        f"  MON IP:   {config.ceph_mon_ip}",
        f"  User Key: {config.masked_user_key}",
        f"  CSI:      {config.csi_version}",
        f"  Sidecars: provisioner={config.provisioner_version} snapshotter={config.snapshotter_version}",
        f"            attacher={config.attacher_version} resizer={config.resizer_version}",
        f"            registrar={config.registrar_version}",
        f"  Pools:    general={config.pool_general} vms={config.pool_vms}",
    ])


def render_summary(config: GeneratorConfig, files: Iterable[Path]) -> str:
    out = config.output_dir
    scc_script = _shell_path(out / MANIFESTS[-1].filename)

    lines = [
        "",
        "=== Manifests generated successfully! ===",
        "",
        "Configuration used:",
        render_settings(config),
        "",
        f"Files in {out}/:",
        *(f"  {Path(f).name}" for f in files),
        "",
        "=== Changes from upstream ===",
        f"  - Namespace: {NAMESPACE} (upstream uses 'default')",
        f"  - ceph-csi image: {config.csi_version} (upstream uses 'canary')",
        "  - ceph-config volume: emptyDir (v3.13.0 keyring write workaround)",
        f"  - Controller replicas: {config.controller_replicas} "
        f"(upstream default: {UPSTREAM_CONTROLLER_REPLICAS})",
        "",
        "=== To apply ===",
        "",
        "  # 1. Apply SCCs (required on OpenShift - do this FIRST):",
        f"  {scc_script}",
        "",
        "  # 2. Apply all manifests:",
        f"  oc apply -f {out}/",
        "",
        "  # 3. Verify:",
        f"  oc get pods -n {NAMESPACE}",
        "  oc get sc",
        "",
    ]
    return "\n".join(lines)
