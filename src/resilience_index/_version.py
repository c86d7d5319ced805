"""Version of the ``resilience-index`` distribution.

The version comes from, in order: the release override environment
variable, the installed distribution metadata, or the newest ``## vX.Y.Z``
heading of ``CHANGELOG.md`` in a source checkout. Whatever the source it
must be a plain three-component release.
"""

from __future__ import annotations

import os
import re
from importlib import metadata
from pathlib import Path
from typing import Iterable, Optional

from packaging.version import InvalidVersion, Version

_DISTRIBUTION_NAME = "resilience-index"
_VERSION_OVERRIDE_ENV = "PYTHON_SEMANTIC_RELEASE_VERSION"
_CHANGELOG_HEADING = re.compile(r"^## v(?P<version>\d+\.\d+\.\d+)\b")


def _changelog_roots() -> list[Path]:
    # src/resilience_index/_version.py -> src/ and the checkout root.
    parents = Path(__file__).resolve().parents
    return [parents[index] for index in (1, 2) if len(parents) > index]


def _version_from_changelog(roots: Optional[Iterable[Path]] = None) -> str:
    """Return the newest release listed in the first ``CHANGELOG.md`` found."""

    for root in _changelog_roots() if roots is None else roots:
        changelog = Path(root) / "CHANGELOG.md"
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = _CHANGELOG_HEADING.match(line)
            if match:
                return match.group("version")

    raise RuntimeError(
        f"No installed metadata and no CHANGELOG.md release heading for {_DISTRIBUTION_NAME}"
    )


def _checked_release(raw_version: str) -> str:
    try:
        release = Version(raw_version).release
    except InvalidVersion as exc:
        raise RuntimeError(
            f"{_DISTRIBUTION_NAME} version {raw_version!r} is not a valid version"
        ) from exc
    if len(release) != 3:
        raise RuntimeError(
            f"{_DISTRIBUTION_NAME} version {raw_version!r} must have exactly "
            "three release components"
        )
    return raw_version


def _load_version() -> str:
    override = os.environ.get(_VERSION_OVERRIDE_ENV)
    if override:
        return _checked_release(override)
    try:
        return _checked_release(metadata.version(_DISTRIBUTION_NAME))
    except metadata.PackageNotFoundError:
        return _checked_release(_version_from_changelog())


__version__ = _load_version()

__all__ = ["__version__"]
