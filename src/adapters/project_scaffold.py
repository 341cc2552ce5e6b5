"""Templates for the throwaway crate that gets published.

`cargo new` creates the layout; these helpers overwrite the two files whose
content has to carry the bumped version.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.version import Version
from core.errors import ScaffoldError

README_IMAGE_URL = "https://media1.giphy.com/media/Ju7l5y9osyymQ/200.gif"

MANIFEST_TEMPLATE = """\
[package]
name = "{name}"
version = "{version}"
edition = "2018"
license = "MIT"
description = "test crate"
"""

README_TEMPLATE = """\
# {name} v{version}

![]({image_url})
"""


def render_manifest(*, crate_name: str, version: Version) -> str:
    return MANIFEST_TEMPLATE.format(name=crate_name, version=version)


def render_readme(*, crate_name: str, version: Version) -> str:
    return README_TEMPLATE.format(name=crate_name, version=version, image_url=README_IMAGE_URL)


def _write(path: Path, content: str) -> Path:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(f"Failed to write `{path.name}` file content") from exc
    return path


def write_manifest(project_path: Path, *, crate_name: str, version: Version) -> Path:
    """Overwrite `Cargo.toml` in `project_path`."""

    return _write(project_path / "Cargo.toml", render_manifest(crate_name=crate_name, version=version))


def write_readme(project_path: Path, *, crate_name: str, version: Version) -> Path:
    """Create or overwrite `README.md` in `project_path`."""

    return _write(project_path / "README.md", render_readme(crate_name=crate_name, version=version))
