# tests/conftest.py
from __future__ import annotations

import logging

import pytest

from cephcsi_manifests.config.loader import ENV_VARS


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("cephcsi_manifests")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the generator reads from the real environment."""
    for names in ENV_VARS.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("CEPH_CSI_LOG_DIR", raising=False)
    return monkeypatch
