"""Configuration for geomatch.

Rules, the dataset path and logging live in a single JSON file so rule
sets can be edited without touching Python. ``.env`` and the environment
can point at another config file or override the dataset path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from typing import Any, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from geomatch.core.errors import ConfigError

DEFAULT_CONFIG_NAME = "config.json"

CONFIG_ENV = "GEOMATCH_CONFIG"
DATASET_ENV = "GEOMATCH_DATASET"


@dataclass(frozen=True)
class Settings:
    """Resolved settings used by the CLI."""

    config_path: Optional[str] = None
    dataset: Optional[str] = None
    rules: Tuple[str, ...] = ()
    logging: dict = field(default_factory=dict)


def _load_json_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigError(f"config file not readable: {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config file is not valid JSON: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a JSON object: {path}")
    return data


def _normalize_rules(raw_rules: Any) -> Tuple[str, ...]:
    if raw_rules is None:
        return ()
    if not isinstance(raw_rules, list) or not all(isinstance(rule, str) for rule in raw_rules):
        raise ConfigError("rules must be a list of strings")
    # Empty strings are left in place so the builder reports them.
    return tuple(rule.strip() for rule in raw_rules)


def _resolve_path(path: str, base_dir: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load settings from JSON, ``.env`` and the environment.

    A missing default ``config.json`` yields empty settings; a config file
    that was asked for explicitly (argument or GEOMATCH_CONFIG) must exist.
    """

    load_dotenv(find_dotenv(usecwd=True))

    path = config_path or os.getenv(CONFIG_ENV)
    explicit = path is not None
    if path is None:
        path = os.path.join(os.getcwd(), DEFAULT_CONFIG_NAME)

    if os.path.exists(path):
        config = _load_json_config(path)
    elif explicit:
        raise ConfigError(f"config file not found: {path}")
    else:
        config = {}
        path = None

    base_dir = os.path.dirname(os.path.abspath(path)) if path else os.getcwd()

    env_dataset = os.getenv(DATASET_ENV)
    if env_dataset:
        dataset = os.path.abspath(env_dataset)
    else:
        dataset = config.get("dataset")
        if dataset is not None and not isinstance(dataset, str):
            raise ConfigError("dataset must be a path string")
        if dataset:
            dataset = _resolve_path(dataset, base_dir)

    logging_config = config.get("logging", {}) or {}
    if not isinstance(logging_config, dict):
        raise ConfigError("logging must be an object")

    return Settings(
        config_path=path,
        dataset=dataset or None,
        rules=_normalize_rules(config.get("rules")),
        logging=logging_config,
    )
