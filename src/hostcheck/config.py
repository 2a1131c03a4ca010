from __future__ import annotations

import re
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

_TARGET_RE = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$")


def is_target(value: str) -> bool:
    """True if ``value`` looks like ``package.module:function``."""
    return bool(_TARGET_RE.match(value))


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    tests: list[str]
    search_paths: list[str] = []
    print_error_messages: bool = True

    @field_validator("tests")
    @classmethod
    def tests_must_be_targets(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("tests must not be empty")
        bad = [t for t in v if not is_target(t)]
        if bad:
            raise ValueError(
                f"tests must be given as 'module:function', got: {', '.join(bad)}"
            )
        return v

    @field_validator("search_paths")
    @classmethod
    def search_paths_must_expand(cls, v: list[str]) -> list[str]:
        """Expand ${VAR} and ${VAR:-default}, reporting every unset variable at once."""
        expanded: list[str] = []
        missing: list[str] = []
        for entry in v:
            try:
                expanded.append(expandvars(entry, nounset=True))
            except Exception:
                # Variable is unset and has no default
                missing.append(f"  {entry}")
        if missing:
            details = "\n".join(missing)
            raise ValueError(
                f"search_paths reference unset environment variables:\n{details}"
            )
        return expanded


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = RunConfig(**raw)

    # Resolve relative search paths relative to config file location
    resolved = []
    for entry in config.search_paths:
        entry_path = Path(entry)
        if not entry_path.is_absolute():
            entry_path = (config_dir / entry_path).resolve()
        resolved.append(str(entry_path))
    config.search_paths = resolved

    return config
