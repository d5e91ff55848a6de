"""Path helpers shared by settings and image refs (no Qt here)."""

from __future__ import annotations

from pathlib import Path


def abs_path(path: str | Path) -> Path:
    """Absolute path; the target need not exist."""
    p = Path(path).expanduser()
    try:
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def abs_path_str(path: str | Path) -> str:
    return str(abs_path(path))


def abs_dir_str(path: str | Path) -> str:
    """Absolute folder for `path`; an existing file maps to its parent."""
    p = abs_path(path)
    return str(p.parent if p.is_file() else p)


def file_uri(path: str | Path) -> str:
    return abs_path(path).as_uri()
