"""Shared fixtures: small JavaScript/TypeScript projects built in tmp_path."""
import json
from pathlib import Path

import pytest

from depsweep.config import AuditConfig


def write_tree(root: Path, files: dict) -> None:
    """Write {relative_path: text} under root, creating directories."""
    for rel_path, text in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')


@pytest.fixture
def make_project(tmp_path):
    """Build a project with a src/ tree and an optional package.json.

    Returns a factory taking (files, manifest) and returning an AuditConfig
    rooted at the project.
    """
    def _make(files: dict, manifest: dict = None, **config_fields) -> AuditConfig:
        write_tree(tmp_path / 'src', files)
        if manifest is not None:
            (tmp_path / 'package.json').write_text(json.dumps(manifest), encoding='utf-8')
        return AuditConfig(project_root=tmp_path, **config_fields)

    return _make
