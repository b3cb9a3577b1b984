"""Runtime configuration for the Stepwise interpreter.

Flags use the ``key=value`` form, separated by semicolons or commas:

    STEPWISE_FLAGS="max_call_depth=100; yield_interval=0; trace_positions=on"

Values accept booleans, ints, floats, or strings.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, Mapping, Optional

from .errors import ConfigError

ENV_VAR = "STEPWISE_FLAGS"


@dataclass(frozen=True)
class RuntimeConfig:
    max_call_depth: int = 500
    yield_interval: int = 64
    trace_positions: bool = False

    def updated(self, flags: Mapping[str, Any]) -> "RuntimeConfig":
        known = {f.name: f.type for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in flags.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration flag: {key!r}")
            changes[key] = _check_type(key, known[key], value)
        return replace(self, **changes)


def _check_type(key: str, type_name: str, value: Any) -> Any:
    if type_name == "bool":
        if not isinstance(value, bool):
            raise ConfigError(f"Flag {key!r} expects a boolean, got {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Flag {key!r} expects an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"Flag {key!r} must not be negative")
    return value


def parse_flags(directive: str) -> Dict[str, Any]:
    flags: Dict[str, Any] = {}
    if not directive:
        return flags

    for part in re.split(r"[;,]", directive):
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            raise ConfigError(f"Malformed flag {part!r}; expected key=value")
        key, raw_val = part.split("=", 1)
        flags[key.strip()] = _parse_value(raw_val.strip())

    return flags


def _parse_value(raw: str) -> Any:
    if not raw:
        return raw
    lowered = raw.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    # numbers
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        pass
    # quoted string
    if (raw.startswith("\"") and raw.endswith("\"")) or (raw.startswith("'") and raw.endswith("'")):
        return raw[1:-1]
    return raw


def load_config(
    overrides: Optional[Iterable[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RuntimeConfig:
    """Defaults, then ``STEPWISE_FLAGS``, then each override string in order."""
    environ = os.environ if environ is None else environ
    config = RuntimeConfig().updated(parse_flags(environ.get(ENV_VAR, "")))
    for directive in overrides or ():
        config = config.updated(parse_flags(directive))
    return config
