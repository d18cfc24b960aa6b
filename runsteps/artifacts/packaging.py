from __future__ import annotations

import gzip
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from ..errors import NotFoundError
from ..utils.hashing import sha256_file


@dataclass(frozen=True)
class TarEntry:
    arcname: str
    source_path: Path


def _normalize(info: tarfile.TarInfo) -> tarfile.TarInfo:
    # Identical inputs must produce identical archives.
    info.mtime = 0
    info.uid = 0
    info.gid = 0
    info.uname = ""
    info.gname = ""
    return info


def collect_entries(root_dir: Path, arc_root: str = "") -> List[TarEntry]:
    """List ``root_dir`` and everything under it, sorted, as archive entries.

    ``arc_root`` is the archive name of ``root_dir`` itself (defaults to its basename).
    """
    if not root_dir.is_dir():
        raise NotFoundError(f"archive source directory not found: {root_dir}")
    top = arc_root or root_dir.name
    entries = [TarEntry(arcname=top, source_path=root_dir)]
    for p in sorted(root_dir.rglob("*")):
        rel = p.relative_to(root_dir).as_posix()
        entries.append(TarEntry(arcname=f"{top}/{rel}", source_path=p))
    return entries


def create_tar_gz(*, archive_path: Path, entries: Iterable[TarEntry]) -> Tuple[str, int]:
    """Create a gzip-compressed tarball deterministically.

    Directories are added without recursion; callers pass every entry
    explicitly (see ``collect_entries``).

    Returns:
        (sha256, bytes_size)
    """
    archive_path.parent.mkdir(parents=True, exist_ok=True)

    with archive_path.open("wb") as raw:
        with gzip.GzipFile(filename="", mode="wb", fileobj=raw, mtime=0) as gz:
            with tarfile.open(fileobj=gz, mode="w") as tf:
                for e in entries:
                    src = e.source_path
                    if not src.exists() and not src.is_symlink():
                        raise NotFoundError(f"archive entry source not found: {src}")
                    tf.add(str(src), arcname=e.arcname, recursive=False, filter=_normalize)

    digest = sha256_file(archive_path)
    size = int(archive_path.stat().st_size)
    return digest, size


def tar_gz_directory(*, archive_path: Path, root_dir: Path) -> Tuple[str, int]:
    """Archive ``root_dir`` (like ``tar -zcf archive ./root_dir``)."""
    return create_tar_gz(archive_path=archive_path, entries=collect_entries(root_dir))
