from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import List


def ensure_dir(path: Path) -> Path:
    """mkdir -p; returns ``path``."""
    if not path.is_dir():
        path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """Replace ``path`` with ``text`` in one rename.

    The content is staged in a hidden sibling file, so readers see either the
    old file or the complete new one. The staging file never outlives the call.
    """
    parent = ensure_dir(path.parent)
    staged = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(parent),
        prefix=f".{path.name}.",
        suffix=".partial",
        delete=False,
    )
    staged_path = Path(staged.name)
    try:
        with staged:
            staged.write(text)
            staged.flush()
            os.fsync(staged.fileno())
        os.replace(staged_path, path)
    except Exception:
        staged_path.unlink(missing_ok=True)
        raise
    return path


def copy_dir_contents(src: Path, dst: Path) -> List[Path]:
    """Copy every entry of ``src`` into ``dst`` (like ``cp -r src/* dst/``).

    Returns the destination paths of the top-level entries copied.
    """
    ensure_dir(dst)
    copied: List[Path] = []
    for entry in sorted(src.iterdir()):
        target = dst / entry.name
        if entry.is_dir() and not entry.is_symlink():
            if target.exists():
                shutil.rmtree(target)
            shutil.copytree(entry, target, symlinks=True)
        else:
            shutil.copy2(entry, target, follow_symlinks=False)
        copied.append(target)
    return copied


def remove_path(path: Path) -> bool:
    """Remove a file or directory tree. Returns False when nothing was there."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return True
    if path.exists() or path.is_symlink():
        path.unlink()
        return True
    return False
