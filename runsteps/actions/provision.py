from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Dict, List, Tuple

from ..dispatch.models import ActionOutcome
from ..errors import CommandError
from ..utils.fs import atomic_write_text, ensure_dir
from .base import BaseAction
from .commands import Command, shell_pipeline

# (action name, description) for every host the provisioning actions support.
TARGET_OS: Tuple[Tuple[str, str], ...] = (
    ("ubuntu", "Ubuntu 20.04 LTS"),
)


class ListAction(BaseAction):
    name = "list"
    description = "show the supported target OS list"

    def run(self) -> ActionOutcome:
        print("Target OS List")
        for os_name, label in TARGET_OS:
            print(f"- {os_name}: {label}")
        return ActionOutcome.success(targets=[n for n, _ in TARGET_OS])


class UbuntuAction(BaseAction):
    """Provision an Ubuntu host with the Rust toolchain and a project checkout.

    Steps, stopping at the first failure:
      apt update / [apt upgrade -y] / apt install -y <packages>
      rustup installer (curl | sh), rustup toolchain add + default
      git clone into <clone_dir>/<name>, create temp/profile.fsh, list checkout
    """

    name = "ubuntu"
    description = "install toolchain and clone the repository (Ubuntu 20.04)"

    def cargo_env(self) -> Dict[str, str]:
        # Equivalent of sourcing $HOME/.cargo/env for the rustup commands.
        cargo_bin = Path.home() / ".cargo" / "bin"
        return {"PATH": f"{cargo_bin}{os.pathsep}{os.environ.get('PATH', '')}"}

    def toolchain_commands(self) -> List[Command]:
        cfg = self.config
        cmds = [Command(argv=("apt", "update"))]
        if cfg.upgrade:
            cmds.append(Command(argv=("apt", "upgrade", "-y")))
        cmds.append(Command(argv=("apt", "install", "-y", *cfg.apt_packages)))
        installer = f"curl --proto '=https' --tlsv1.2 -sSf {shlex.quote(cfg.rustup_url)} | sh -s -- -y"
        cmds.append(Command(argv=shell_pipeline(installer)))
        env = self.cargo_env()
        cmds.append(Command(argv=("rustup", "toolchain", "add", cfg.toolchain), env=env))
        cmds.append(Command(argv=("rustup", "default", cfg.toolchain), env=env))
        return cmds

    def clone_command(self) -> Command:
        return Command(argv=("git", "clone", self.config.repo_url, str(self.config.checkout_dir)))

    def profile_path(self) -> Path:
        return self.config.checkout_dir / "temp" / "profile.fsh"

    def write_profile(self) -> Path:
        path = self.profile_path()
        ensure_dir(path.parent)
        prompt = self.config.prompt.replace("'", "\\'")
        atomic_write_text(path, f"$FSH_PROMPT = '{prompt}'\n")
        self.log(f"wrote {path}")
        return path

    def run(self) -> ActionOutcome:
        cfg = self.config
        try:
            self.execute_all(self.toolchain_commands())
            ensure_dir(cfg.clone_root)
            self.execute(self.clone_command())
            profile = self.write_profile()
            self.execute(Command(argv=("ls", str(cfg.checkout_dir))))
        except CommandError as e:
            return self.command_failure(e)
        return ActionOutcome.success(checkout=str(cfg.checkout_dir), profile=str(profile))
