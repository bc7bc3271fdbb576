from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from crm_browser.config.model import DEFAULT_COUNTS, GeneratorConfig, GlobalConfig
from crm_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

VALID_SOURCES = ("demo", "real")


def _resolve_path(root: Path, raw: Optional[str], default: str) -> Path:
    # Absolute paths are used as-is; relative ones resolve against the config root
    path = Path(raw) if raw else Path(default)
    return path if path.is_absolute() else (root / path).resolve()


def _parse_generator(raw: Any) -> GeneratorConfig:
    if raw is None:
        return GeneratorConfig()
    if not isinstance(raw, dict):
        raise ConfigError("'generator' must be an object")

    seed = raw.get("seed", 123)
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigError(f"'generator.seed' must be an integer or null, got {seed!r}")

    counts = dict(DEFAULT_COUNTS)
    raw_counts = raw.get("counts") or {}
    if not isinstance(raw_counts, dict):
        raise ConfigError("'generator.counts' must be an object")
    for kind, value in raw_counts.items():
        if kind not in DEFAULT_COUNTS:
            raise ConfigError(f"'generator.counts' has unknown collection '{kind}'")
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigError(f"'generator.counts.{kind}' must be a non-negative integer")
        counts[kind] = value

    return GeneratorConfig(seed=seed, counts=counts)


def load_global_config(root: Path | str, env: Optional[Mapping[str, str]] = None) -> GlobalConfig:
    """
    Load app configuration from `root/global.json`, then apply env overrides.

    Expected structure:

        root/
            global.json

    Keys (all optional): ui_title, subtitle, data_root, api_base_url,
    default_source ("demo" | "real"), request_timeout, generator.seed,
    generator.counts.{customers,tasks,sales}

    Env overrides: CRM_API_BASE_URL, CRM_DATA_SOURCE.

    :param root: Directory containing 'global.json'.
    :param env: Environment mapping (defaults to os.environ).
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is malformed or holds invalid values.
    """
    root = Path(root)
    env = os.environ if env is None else env

    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if global_path.is_file():
        try:
            with global_path.open() as f:
                raw: Dict[str, Any] = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{global_path} must hold a JSON object")
    else:
        logger.warning(
            "global.json not found; using defaults",
            extra={"config_root": str(root)},
        )
        raw = {}

    defaults = GlobalConfig()

    default_source = env.get("CRM_DATA_SOURCE") or raw.get("default_source", defaults.default_source)
    if default_source not in VALID_SOURCES:
        raise ConfigError(f"default_source must be one of {VALID_SOURCES}, got {default_source!r}")

    timeout = raw.get("request_timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0):
        raise ConfigError(f"request_timeout must be a positive number or null, got {timeout!r}")

    return GlobalConfig(
        ui_title=raw.get("ui_title", defaults.ui_title),
        subtitle=raw.get("subtitle", defaults.subtitle),
        data_root=_resolve_path(root, raw.get("data_root"), str(defaults.data_root)),
        api_base_url=env.get("CRM_API_BASE_URL") or raw.get("api_base_url", defaults.api_base_url),
        default_source=default_source,
        request_timeout=float(timeout) if timeout is not None else None,
        generator=_parse_generator(raw.get("generator")),
    )
