# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/manifests/catalogue.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ManifestSpec:
    filename: str
    description: str
    executable: bool = False

    @property
    def template(self) -> str:
        return f"{self.filename}.j2"

    @property
    def is_yaml(self) -> bool:
        return self.filename.endswith(".yaml")


# Order is for numbering only; no file depends on another.
MANIFESTS: tuple[ManifestSpec, ...] = (
    ManifestSpec("01-namespace.yaml", "Namespace with privileged pod-security labels"),
    ManifestSpec("02-csi-config.yaml", "ConfigMaps: ceph-csi-config, KMS config, ceph-config"),
    ManifestSpec("03-csi-secret.yaml", "Secret with the Ceph client credentials"),
    ManifestSpec("04-rbac-provisioner.yaml", "RBAC for the provisioner service account"),
    ManifestSpec("05-rbac-node.yaml", "RBAC for the node plugin service account"),
    ManifestSpec("06-csidriver.yaml", "CSIDriver registration"),
    ManifestSpec("07-csi-rbd-controller.yaml", "Controller Deployment and metrics Service"),
    ManifestSpec("08-csi-rbd-node.yaml", "Node plugin DaemonSet and metrics Service"),
    ManifestSpec("09-storageclass.yaml", "Default StorageClass (RWO, filesystem)"),
    ManifestSpec("10-storageclass-vms.yaml", "StorageClass for VMs (RWX, block)"),
    ManifestSpec("11-apply-scc.sh", "OpenShift SCC helper script", executable=True),
)

MANIFEST_NAMES: tuple[str, ...] = tuple(m.filename for m in MANIFESTS)
