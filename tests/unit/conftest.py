"""Shared fixtures for extension store tests."""

import json
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def install_root():
    """Empty extension install root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "extensions"
        root.mkdir()
        yield root


@pytest.fixture
def install(install_root):
    """
    Create a version directory with a manifest.

    By default the manifest declares the extension id and the version part
    of the directory name, which makes it a valid candidate.
    """

    def _install(extension_id, version_string, manifest=None, **fields):
        version_dir = install_root / extension_id / version_string
        version_dir.mkdir(parents=True)
        if manifest is None:
            manifest = {
                "wavebox_extension_id": extension_id,
                "version": version_string.split("_", 1)[0],
                "name": extension_id,
            }
        manifest.update(fields)
        (version_dir / "manifest.json").write_text(json.dumps(manifest))
        return version_dir

    return _install
