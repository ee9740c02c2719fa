"""Repository-level integrity checks."""

from __future__ import annotations

import re
from pathlib import Path

CONFLICT_PATTERN = re.compile(r"^(<<<<<<<|=======|>>>>>>>)", re.MULTILINE)
EMBEDDED_KEY_PATTERN = re.compile(r"api_key=[A-Za-z0-9]{24,}")
IGNORED_PARTS = {".git", "__pycache__", ".mypy_cache", ".pytest_cache", ".venv"}
REPO_ROOT = Path(__file__).resolve().parents[1]


def _repository_files() -> list[tuple[Path, str]]:
    files: list[tuple[Path, str]] = []
    for path in REPO_ROOT.rglob("*"):
        if not path.is_file():
            continue
        if any(part in IGNORED_PARTS for part in path.parts):
            continue
        try:
            contents = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            contents = path.read_text(encoding="utf-8", errors="ignore")
        files.append((path.relative_to(REPO_ROOT), contents))
    return files


def test_repository_has_no_merge_conflict_markers() -> None:
    """Ensure no files in the repo still contain git conflict markers."""

    offending_files = [
        path for path, contents in _repository_files() if CONFLICT_PATTERN.search(contents)
    ]

    assert not offending_files, (
        "The following files still contain git conflict markers: "
        + ", ".join(str(path) for path in offending_files)
    )


def test_repository_has_no_embedded_giphy_keys() -> None:
    """The Giphy key must come from the environment, never from source."""

    offending_files = [
        path
        for path, contents in _repository_files()
        if path.suffix == ".py" and EMBEDDED_KEY_PATTERN.search(contents)
    ]

    assert not offending_files, "Hard-coded API keys found in: " + ", ".join(
        str(path) for path in offending_files
    )
