"""
Configuration loading: YAML file, then keyword overrides, validated as a whole
by the pydantic schema
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError
from rich.console import Console

from ..exceptions import InvalidInput
from .schema import AppConfig

console = Console()

PathLike = Union[str, Path]


def read_yaml(path: PathLike) -> Dict[str, Any]:
    """Parse a YAML mapping; an empty file gives an empty mapping"""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput(
            f"Config file {path} must hold a mapping, got {type(data).__name__}"
        )
    return data


def merge_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge overrides into a raw config mapping

    Sub-config dicts are merged key by key, so fusion={"k": 30} keeps the
    other fusion settings. None values are skipped.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[PathLike] = None, **overrides: Any) -> AppConfig:
    """
    Build a validated configuration

    Args:
        path: YAML config file; None starts from the schema defaults
        **overrides: Top-level values or sub-config dicts applied on top of
            the file, e.g. seed=3 or cluster={"n_clusters": 4}. None values
            are ignored so unset CLI options can be passed through as is.

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If the merged values fail validation
    """
    source = str(path) if path is not None else "defaults"
    data = read_yaml(path) if path is not None else {}
    data = merge_overrides(data, overrides)

    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]✗ Invalid configuration ({source}):[/red] {e.error_count()} error(s)")
        raise

    applied = sorted(key for key, value in overrides.items() if value is not None)
    suffix = f" with overrides: {', '.join(applied)}" if applied else ""
    console.print(f"[dim]Using config: {source}{suffix}[/dim]")
    return config


def save_config(config: AppConfig, path: PathLike) -> Path:
    """
    Write a configuration as YAML that load_config reads back unchanged

    Args:
        config: AppConfig instance
        path: Output path; parent directories are created

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)

    console.print(f"[dim]Config written: {path}[/dim]")
    return path
