from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from ..artifacts.packaging import tar_gz_directory
from ..dispatch.models import ActionOutcome
from ..errors import CommandError
from ..utils.fs import copy_dir_contents, remove_path
from .base import BaseAction
from .commands import Command


class DebugAction(BaseAction):
    name = "debug"
    description = "cargo build (debug profile)"

    def commands(self) -> List[Command]:
        return [Command(argv=(*self.config.cargo, "build"), cwd=self.config.project_dir)]

    def run(self) -> ActionOutcome:
        try:
            self.execute_all(self.commands())
        except CommandError as e:
            return self.command_failure(e)
        return ActionOutcome.success()


class ReleaseAction(BaseAction):
    """Release build packaged as ``<name>-<version>-<target>.tar.gz``.

    The archive holds one top-level directory with the contents of
    ``target/release`` plus the configured extra files (LICENSE, README.md).
    The staging directory is removed whether or not packaging succeeds.
    """

    name = "release"
    description = "cargo build --release and package a tarball"

    def build_command(self) -> Command:
        return Command(argv=(*self.config.cargo, "build", "--release"), cwd=self.config.project_dir)

    @property
    def release_dir(self) -> Path:
        return self.config.project_dir / "target" / "release"

    def run(self) -> ActionOutcome:
        cfg = self.config
        try:
            self.execute(self.build_command())
        except CommandError as e:
            return self.command_failure(e)

        release_dir = self.release_dir
        if not release_dir.is_dir() or not any(release_dir.iterdir()):
            return ActionOutcome.failure(f"release output not found or empty: {release_dir}")

        missing = [f for f in cfg.extra_files if not (cfg.project_dir / f).is_file()]
        if missing:
            return ActionOutcome.failure(f"release files missing: {', '.join(missing)}", missing=missing)

        staging = cfg.staging_dir
        if remove_path(staging):
            self.log(f"removed stale staging dir {staging}")

        self.log(f"staging {release_dir} -> {staging}")
        try:
            copy_dir_contents(release_dir, staging)
            for f in cfg.extra_files:
                shutil.copy2(cfg.project_dir / f, staging / Path(f).name)
            digest, size = tar_gz_directory(archive_path=cfg.archive_path, root_dir=staging)
        finally:
            remove_path(staging)

        self.log(f"wrote {cfg.archive_path} sha256={digest} bytes={size}")
        return ActionOutcome.success(archive=str(cfg.archive_path), sha256=digest, bytes=size)


class CleanAction(BaseAction):
    """cargo clean, then remove the release archive.

    The archive is removed even when ``cargo clean`` fails; the failure is
    still reported.
    """

    name = "clean"
    description = "cargo clean and remove the release tarball"

    def run(self) -> ActionOutcome:
        cfg = self.config
        err = None
        try:
            self.execute(Command(argv=(*cfg.cargo, "clean"), cwd=cfg.project_dir))
        except CommandError as e:
            err = e

        removed = False
        if cfg.archive_path.is_file():
            removed = remove_path(cfg.archive_path)
            self.log(f"removed {cfg.archive_path}")

        if err is not None:
            return self.command_failure(err, archive_removed=removed)
        return ActionOutcome.success(archive_removed=removed)
