# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/errors.py


class GeneratorError(RuntimeError):
    """Base class for manifest generation failures."""

    exit_code = 1


class ConfigurationError(GeneratorError):
    """Raised when a setting is invalid or a required value cannot be obtained."""

    exit_code = 2


class RemoteLookupError(GeneratorError):
    """Raised when a value cannot be read from the Ceph host over SSH."""


class ManifestRenderError(GeneratorError):
    """Raised when a template fails to render or produces invalid YAML."""


class ManifestWriteError(GeneratorError):
    """Raised when the output directory or a manifest file cannot be written."""
