# === FILE: keyscout/config.py ===
"""
Loading and validation of KeyScout configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ScanConfig(BaseModel):
    """Settings shared by the ``find`` and ``crawl`` commands."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(30.0, gt=0, description="Timeout for a single request (seconds).")
    user_agent: str = Field("KeyScout/0.1", min_length=1, description="User-Agent header.")
    concurrency: int = Field(4, ge=1, description="Scripts fetched and scanned at the same time.")
    context: int = Field(0, ge=0, description="Characters of surrounding context, 0 disables it.")
    unique: bool = Field(False, description="Keep only the first occurrence of each (url, key) pair.")
    output_dir: Path = Field(Path("captures"), description="Directory for capture files.")
    template_dir: Optional[Path] = Field(None, description="Directory with Jinja2 templates.")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> ScanConfig:
    """
    Read YAML or JSON and return a validated ScanConfig.

    Without an explicit *path* the default file is used when it exists,
    otherwise the built-in defaults. An explicit path that does not exist
    raises FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return ScanConfig()
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScanConfig(**data)


def with_overrides(cfg: ScanConfig, **overrides: Any) -> ScanConfig:
    """Return a copy of *cfg* with every non-None override applied and re-validated."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return cfg
    return ScanConfig(**{**cfg.model_dump(), **changes})


__all__ = ["ScanConfig", "load_config", "with_overrides", "DEFAULT_CONFIG_PATH", "ValidationError"]
