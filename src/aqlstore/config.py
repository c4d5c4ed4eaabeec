"""AqlConfig: project-local config for the flat-file person store.

Default layout (all relative to the project root):

    aql.toml              # project config (git-tracked)
    .env                  # optional: AQL_STORE_PATH, AQL_STRICT
    .aql/
        people.aql        # the store file

aql.toml example:

    [store]
    path = ".aql/people.aql"
    strict = false          # reject records with a non-positive id instead of skipping them
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_CONFIG_FILENAME = "aql.toml"
_DEFAULT_STORE_PATH = ".aql/people.aql"
_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class StoreConfig:
    path: Path = field(default_factory=lambda: Path(_DEFAULT_STORE_PATH))
    strict: bool = False


@dataclass
class AqlConfig:
    """Resolved configuration for a store project."""

    root: Path                      # directory that contains aql.toml
    store: StoreConfig = field(default_factory=StoreConfig)

    @property
    def store_path(self) -> Path:
        return self.store.path


def _load_env(root: Path) -> dict[str, str]:
    """Parse a simple KEY=VALUE .env file (no external dependency)."""
    env_file = root / ".env"
    if not env_file.exists():
        return {}
    env: dict[str, str] = {}
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            k, _, v = line.partition("=")
            env[k.strip()] = v.strip().strip('"').strip("'")
    return env


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def load_config(root: Path | str | None = None) -> AqlConfig:
    """Load aql.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    # .env overrides aql.toml
    env = _load_env(root_path)
    store_section = raw.get("store", {})

    store_rel = env.get("AQL_STORE_PATH") or str(store_section.get("path", _DEFAULT_STORE_PATH))
    strict = _as_bool(env["AQL_STRICT"]) if "AQL_STRICT" in env else _as_bool(store_section.get("strict", False))

    return AqlConfig(
        root=root_path,
        store=StoreConfig(
            path=root_path / store_rel,
            strict=strict,
        ),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for aql.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path) -> Path:
    """Write a default aql.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"aql.toml already exists at {config_path}"
        raise FileExistsError(msg)

    content = f"""\
[store]
path = "{_DEFAULT_STORE_PATH}"
# strict = false   # true: records with a missing or non-positive id are an error
                   # (or set AQL_STORE_PATH / AQL_STRICT in .env)
"""
    root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content)
    return config_path
