"""
JSON file storage for bookmarks.

This module provides functions for resolving the path of the backing
file (``get_data_path``), reading it (``read_bookmarks``) and replacing
it (``write_bookmarks``).  The file holds a single pretty‑printed JSON
array of bookmark objects.  Writes go to a temporary file in the same
directory which is then renamed over the target, so a reader never
observes a partially written document.

When no backing file exists yet the store is seeded with
``SEED_BOOKMARKS``, a fixed set of illustrative records.
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import settings
from .errors import PersistenceError


SEED_BOOKMARKS: List[Dict[str, Any]] = [
    {
        "id": "seed1",
        "url": "https://github.com",
        "title": "GitHub: Where the world builds software",
        "description": "GitHub is where over 100 million developers shape the future of software, together.",
        "tags": ["development", "git", "coding"],
        "createdAt": "2026-02-14T10:00:00.000Z",
    },
    {
        "id": "seed2",
        "url": "https://stackoverflow.com",
        "title": "Stack Overflow - Where Developers Learn, Share, & Build Careers",
        "description": (
            "Stack Overflow is the largest, most trusted online community for developers "
            "to learn and share their programming knowledge."
        ),
        "tags": ["development", "community", "programming"],
        "createdAt": "2026-02-14T11:00:00.000Z",
    },
    {
        "id": "seed3",
        "url": "https://developer.mozilla.org",
        "title": "MDN Web Docs",
        "description": (
            "The MDN Web Docs site provides information about Open Web technologies including "
            "HTML, CSS, and APIs for both Web sites and progressive web apps."
        ),
        "tags": ["documentation", "web", "reference"],
        "createdAt": "2026-02-14T12:00:00.000Z",
    },
    {
        "id": "seed4",
        "url": "https://www.python.org",
        "title": "Welcome to Python.org",
        "description": "The official home of the Python Programming Language.",
        "tags": ["python", "language", "reference"],
        "createdAt": "2026-02-14T13:00:00.000Z",
    },
    {
        "id": "seed5",
        "url": "https://pypi.org",
        "title": "PyPI · The Python Package Index",
        "description": "The Python Package Index is a repository of software for the Python programming language.",
        "tags": ["python", "packages", "tools"],
        "createdAt": "2026-02-14T14:00:00.000Z",
    },
    {
        "id": "seed6",
        "url": "https://fastapi.tiangolo.com",
        "title": "FastAPI",
        "description": "FastAPI framework, high performance, easy to learn, fast to code, ready for production.",
        "tags": ["python", "framework", "backend"],
        "createdAt": "2026-02-14T15:00:00.000Z",
    },
    {
        "id": "seed7",
        "url": "https://code.visualstudio.com",
        "title": "Visual Studio Code",
        "description": "Visual Studio Code is a lightweight but powerful source code editor which runs on your desktop.",
        "tags": ["editor", "development", "tools"],
        "createdAt": "2026-02-14T16:00:00.000Z",
    },
]


def get_data_path(data_file: Optional[str] = None) -> Path:
    """Compute the path to the backing JSON file.

    ``data_file`` defaults to ``settings.data_file``.  An absolute path
    is used as is; a relative one is resolved against the package root.
    """
    data_file = data_file or settings.data_file
    if os.path.isabs(data_file):
        return Path(data_file)
    base_dir = Path(__file__).resolve().parent.parent.parent  # bookmark_manager_api/
    return (base_dir / data_file).resolve()


def read_bookmarks(path: Path) -> List[Dict[str, Any]]:
    """Load the list of raw bookmark objects from ``path``.

    Raises ``PersistenceError`` if the file cannot be read, is not
    valid JSON or does not hold a JSON array of objects.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise PersistenceError(f"Could not read {path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise PersistenceError(f"{path} does not contain a list of bookmarks")
    return data


def write_bookmarks(path: Path, bookmarks: List[Dict[str, Any]]) -> None:
    """Replace the contents of ``path`` with ``bookmarks``.

    The document is written to a sibling temporary file and moved into
    place with ``os.replace``, keeping the permissions of the file it
    replaces (a new file gets the usual umask default).  Raises
    ``PersistenceError`` on failure; the temporary file is removed in
    that case.
    """
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(bookmarks, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PersistenceError(f"Could not write {path}: {exc}") from exc


def _file_mode(path: Path) -> int:
    """Permission bits for a rewrite of ``path``.

    ``mkstemp`` creates files as 0600; an existing file keeps its mode
    and a new one gets ``0666`` minus the process umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
