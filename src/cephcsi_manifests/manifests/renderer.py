# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/cephcsi_manifests/manifests/renderer.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import yaml
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from cephcsi_manifests.config.models import GeneratorConfig
from cephcsi_manifests.errors import ManifestRenderError
from .catalogue import MANIFESTS, ManifestSpec

log = logging.getLogger("cephcsi_manifests")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class RenderedManifest:
    spec: ManifestSpec
    content: str

    @property
    def filename(self) -> str:
        return self.spec.filename


class ManifestRenderer:
    def __init__(self, templates_dir: Optional[Path] = None):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, spec: ManifestSpec, context: dict) -> RenderedManifest:
        try:
            tmpl = self.env.get_template(spec.template)
        except TemplateNotFound as e:
            raise ManifestRenderError(f"Missing template: {spec.template}") from e

        try:
            text = tmpl.render(**context)
        except TemplateError as e:
            raise ManifestRenderError(f"{spec.filename}: {e}") from e

        if spec.is_yaml:
            _check_yaml(spec.filename, text)

        return RenderedManifest(spec=spec, content=text)


def _check_yaml(filename: str, text: str) -> None:
    """
    Make sure the interpolated values did not break the document.
    """
    try:
        docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as e:
        raise ManifestRenderError(f"{filename} is not valid YAML after rendering: {e}") from e
    if not docs:
        raise ManifestRenderError(f"{filename} rendered to an empty document")


def render_manifests(
    config: GeneratorConfig,
    *,
    specs: Iterable[ManifestSpec] = MANIFESTS,
    renderer: Optional[ManifestRenderer] = None,
) -> list[RenderedManifest]:
    """
    Render every manifest in catalogue order. Pure: same config, same bytes.
    """
    renderer = renderer or ManifestRenderer()
    context = config.template_context()
    log.debug("Rendering manifests from %s", TEMPLATES_DIR)
    return [renderer.render(spec, context) for spec in specs]
