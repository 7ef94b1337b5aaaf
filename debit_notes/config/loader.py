from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..mapping.header_map import FIELD_CANDIDATES, merge_candidates
from ..services.aggregator import UNKNOWN_SUPPLIER
from ..services.currency import CurrencySettings

"""Config loader.

Responsibilities:
- Load the optional YAML config (default config/debit_notes.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults and environment overrides (DEBIT_NOTES_*)
"""

__all__ = [
    "AppConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "apply_env_overrides",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/debit_notes.yml")

ENV_CURRENCY = "DEBIT_NOTES_CURRENCY"
ENV_LOCALE = "DEBIT_NOTES_LOCALE"
ENV_SYMBOL = "DEBIT_NOTES_CURRENCY_SYMBOL"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    currency: CurrencySettings = field(default_factory=CurrencySettings)
    unknown_supplier: str = UNKNOWN_SUPPLIER
    na_strings: tuple[str, ...] = ()
    field_candidates: tuple[tuple[str, tuple[str, ...]], ...] = FIELD_CANDIDATES
    export_format: str = "csv"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: the schema file is missing / not valid JSON, or the data
            violates the schema (unknown keys, wrong types, unknown fields).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def apply_env_overrides(cfg: AppConfig, environ: Mapping[str, str] | None = None) -> AppConfig:
    """Environment variables win over file values for the currency settings."""
    env = os.environ if environ is None else environ
    cur = cfg.currency
    overridden = replace(
        cur,
        code=env.get(ENV_CURRENCY) or cur.code,
        locale=env.get(ENV_LOCALE) or cur.locale,
        symbol=env.get(ENV_SYMBOL) or cur.symbol,
    )
    if overridden == cur:
        return cfg
    return replace(cfg, currency=overridden)


def load_config(path: Path | None = None) -> AppConfig:
    """Load and validate a config file.

    ``path=None`` uses DEFAULT_CONFIG_PATH when it exists and plain defaults
    otherwise; an explicit path must exist.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AppConfig()
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    cur_raw = data.get("currency", {})
    defaults = CurrencySettings()
    currency = CurrencySettings(
        code=cur_raw.get("code", defaults.code),
        locale=cur_raw.get("locale", defaults.locale),
        symbol=cur_raw.get("symbol", defaults.symbol),
    )
    try:
        candidates = merge_candidates(data.get("field_candidates"))
    except ValueError as e:  # pragma: no cover (schema rejects unknown fields first)
        raise ConfigError(str(e)) from e
    for name, cands in candidates:
        if not cands:
            raise ConfigError(f"field_candidates.{name}: no usable candidates")

    return AppConfig(
        currency=currency,
        unknown_supplier=data.get("unknown_supplier", UNKNOWN_SUPPLIER),
        na_strings=tuple(data.get("na_strings", ())),
        field_candidates=candidates,
        export_format=data.get("export", {}).get("format", "csv"),
    )
