"""Configuration models and helpers for the DA backup action."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

CONFIG_FILENAME = "config.yaml"
DA_ADMIN_API = "https://admin.da.live"
RESERVED_ITEMS = ("tools", "block-collection")


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


@dataclass
class ActionInputs:
    org: str = ""
    repo: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        self.org = (self.org or "").strip()
        self.repo = (self.repo or "").strip()
        self.path = (self.path or "").strip()

    def validate(self) -> None:
        if not self.org or not self.repo:
            raise ConfigError("Both org and repo inputs are required")

    def describe(self) -> str:
        text = f"org: {self.org}, repo: {self.repo}"
        if self.path:
            text += f", path: {self.path}"
        return text


@dataclass
class Settings:
    inputs: ActionInputs = field(default_factory=ActionInputs)
    base_url: str = DA_ADMIN_API
    timeout: Optional[float] = None
    reserved_items: List[str] = field(default_factory=lambda: list(RESERVED_ITEMS))
    extra: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "Settings":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        known_keys = {"org", "repo", "path", "base_url", "timeout", "reserved_items"}
        reserved = data.get("reserved_items")
        if reserved is None:
            reserved = list(RESERVED_ITEMS)
        elif not isinstance(reserved, list) or not all(isinstance(item, str) for item in reserved):
            raise ConfigError("'reserved_items' must be a list of names.")
        extra = {key: value for key, value in data.items() if key not in known_keys}
        return cls(
            inputs=ActionInputs(
                org=_safe_str(data.get("org")),
                repo=_safe_str(data.get("repo")),
                path=_safe_str(data.get("path")),
            ),
            base_url=(data.get("base_url") or DA_ADMIN_API).rstrip("/"),
            timeout=_safe_float(data.get("timeout")),
            reserved_items=reserved,
            extra=extra,
        )

    def to_dict(self) -> Dict:
        result: Dict[str, object] = {
            "org": self.inputs.org,
            "repo": self.inputs.repo,
            "path": self.inputs.path,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "reserved_items": self.reserved_items,
        }
        result.update(self.extra)
        return {key: value for key, value in result.items() if value not in (None, "")}


# ---------------------------------------------------------------------------
def _safe_str(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigError(f"Value '{value}' must be a string.")
    return str(value)


def _safe_float(value) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Value '{value}' cannot be converted to a number.")


# ---------------------------------------------------------------------------
def load_config(path: Path = Path(CONFIG_FILENAME)) -> Settings:
    path = Path(path)
    if not path.exists():
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
    return Settings.from_dict(data)


def inputs_from_env(environ: Optional[Mapping[str, str]] = None) -> ActionInputs:
    """Read action inputs the way the Actions runner exposes them.

    The runner upper-cases input names and prefixes them with ``INPUT_``.
    """

    environ = os.environ if environ is None else environ
    return ActionInputs(
        org=environ.get("INPUT_ORG", ""),
        repo=environ.get("INPUT_REPO", ""),
        path=environ.get("INPUT_PATH", ""),
    )


def resolve_inputs(*sources: ActionInputs) -> ActionInputs:
    """Merge inputs field by field, the first non-empty value wins."""

    resolved = ActionInputs()
    for name in ("org", "repo", "path"):
        for source in sources:
            value = getattr(source, name)
            if value:
                setattr(resolved, name, value)
                break
    return resolved


__all__ = [
    "ActionInputs",
    "ConfigError",
    "DA_ADMIN_API",
    "RESERVED_ITEMS",
    "Settings",
    "inputs_from_env",
    "load_config",
    "resolve_inputs",
]
