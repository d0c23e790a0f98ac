"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from forktrack_core.errors import InvalidConfig

from .models import ForktrackConfig


def load_config(cli_path: str | None = None) -> ForktrackConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./forktrack.yaml"),
        Path.home() / ".forktrack" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise InvalidConfig(path, "top level must be a mapping")
                raw = _expand_env_vars(raw)
                return ForktrackConfig(**raw)
            except yaml.YAMLError as e:
                raise InvalidConfig(path, f"invalid YAML: {e}") from e
            except ValidationError as e:
                raise InvalidConfig(path, str(e)) from e

    return ForktrackConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `forktrack config init`
DEFAULT_CONFIG_TEMPLATE = """\
# forktrack.yaml

# Git invocation
git:
  executable: "git"
  timeout: 120                 # seconds per git command
  head_remote: "origin"        # remote whose HEAD names the default branch

# forktrack setup
setup:
  gitmodules: ".gitmodules"
  remote_name: "upstream"

# forktrack status
status:
  remote: "upstream"
  pattern: "*"                 # glob, e.g. "feature/*"
  format: "table"              # table | json | csv
  max_workers: 1               # > 1 checks repositories in parallel

# Logging
log_level: "warn"              # debug | info | warn | error
log_format: "text"             # text | json
"""
