from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import jsonschema

from .errors import NotFoundError, ValidationError
from .utils.yamlio import read_yaml


DEFAULT_CONFIG_NAME = "runsteps.yml"

DEFAULT_APT_PACKAGES: Tuple[str, ...] = ("curl", "git", "vim", "build-essential")
DEFAULT_EXTRA_FILES: Tuple[str, ...] = ("LICENSE", "README.md")


@dataclass(frozen=True)
class RunConfig:
    """Settings read by the build and provisioning actions.

    The dispatcher never sees these; they only shape what each action does.
    """

    project_dir: Path
    name: str = "fsh"
    version: str = "0.0.1"
    target: str = "aarch64-linux"
    cargo: Tuple[str, ...] = ("cargo",)
    extra_files: Tuple[str, ...] = DEFAULT_EXTRA_FILES
    toolchain: str = "1.77.2"
    repo_url: str = "git@github.com:flucium/fsh.git"
    clone_dir: str = "~/repos"
    prompt: str = "$ "
    apt_packages: Tuple[str, ...] = DEFAULT_APT_PACKAGES
    upgrade: bool = False
    rustup_url: str = "https://sh.rustup.rs"
    source_path: str = ""

    @property
    def package_basename(self) -> str:
        return f"{self.name}-{self.version}-{self.target}"

    @property
    def staging_dir(self) -> Path:
        return self.project_dir / self.package_basename

    @property
    def archive_path(self) -> Path:
        return self.project_dir / f"{self.package_basename}.tar.gz"

    @property
    def clone_root(self) -> Path:
        return Path(self.clone_dir).expanduser()

    @property
    def checkout_dir(self) -> Path:
        return self.clone_root / self.name


def _string_list_schema() -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string", "minLength": 1}}


def _config_schema() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "version": {"type": "string", "minLength": 1},
            "target": {"type": "string", "minLength": 1},
            "cargo": {**_string_list_schema(), "minItems": 1},
            "extra_files": _string_list_schema(),
            "toolchain": {"type": "string", "minLength": 1},
            "repo_url": {"type": "string", "minLength": 1},
            "clone_dir": {"type": "string", "minLength": 1},
            "prompt": {"type": "string"},
            "apt_packages": _string_list_schema(),
            "upgrade": {"type": "boolean"},
            "rustup_url": {"type": "string", "minLength": 1},
        },
        "additionalProperties": False,
    }


def validate_config_dict(data: Dict[str, Any]) -> None:
    try:
        jsonschema.validate(instance=data, schema=_config_schema())
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ValidationError(f"config schema validation failed at {where}: {e.message}") from e


def resolve_project_dir(cli_path: Optional[str] = None) -> Path:
    """Resolve the project directory.

    Precedence:
      1) CLI flag --project-dir
      2) RUNSTEPS_PROJECT_DIR
      3) current working directory
    """
    if cli_path and str(cli_path).strip():
        return Path(str(cli_path).strip()).expanduser().resolve()

    env_path = str(os.environ.get("RUNSTEPS_PROJECT_DIR", "") or "").strip()
    if env_path:
        return Path(env_path).expanduser().resolve()

    return Path.cwd().resolve()


def resolve_config_path(project_dir: Path, cli_path: Optional[str] = None) -> Tuple[Path, bool]:
    """Resolve the config YAML path. Returns (path, explicit).

    Precedence:
      1) CLI flag --config
      2) RUNSTEPS_CONFIG
      3) <project_dir>/runsteps.yml

    An explicit path must exist; the default path is optional.
    """
    if cli_path and str(cli_path).strip():
        return Path(str(cli_path).strip()).expanduser().resolve(), True

    env_path = str(os.environ.get("RUNSTEPS_CONFIG", "") or "").strip()
    if env_path:
        return Path(env_path).expanduser().resolve(), True

    return (project_dir / DEFAULT_CONFIG_NAME).resolve(), False


def config_from_dict(data: Dict[str, Any], *, project_dir: Path, source_path: str = "") -> RunConfig:
    validate_config_dict(data)

    kwargs: Dict[str, Any] = {}
    for key in ("name", "version", "target", "toolchain", "repo_url", "clone_dir", "prompt", "rustup_url"):
        if key in data:
            kwargs[key] = str(data[key])
    for key in ("cargo", "extra_files", "apt_packages"):
        if key in data:
            kwargs[key] = tuple(str(v) for v in data[key])
    if "upgrade" in data:
        kwargs["upgrade"] = bool(data["upgrade"])

    return RunConfig(project_dir=project_dir, source_path=source_path, **kwargs)


def load_config(project_dir: Optional[Path] = None, cli_path: Optional[str] = None) -> RunConfig:
    """Load and validate the runsteps config.

    Environment overrides:
      - RUNSTEPS_PROJECT_DIR (project directory, when ``project_dir`` is None)
      - RUNSTEPS_CONFIG (config file path)
    """
    root = Path(project_dir).resolve() if project_dir is not None else resolve_project_dir()
    path, explicit = resolve_config_path(root, cli_path)

    if not path.exists():
        if explicit:
            raise NotFoundError(f"config not found: {path}")
        return RunConfig(project_dir=root)

    data = read_yaml(path)
    return config_from_dict(data, project_dir=root, source_path=str(path))
