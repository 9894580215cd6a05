"""Scalar value resolution and parsing for configuration blocks."""

import os
import re
from typing import Dict

from kubegen.errors import ConfigError, EnvironmentVariableError


ENV_REFERENCE = "$env{"
ENV_PATTERN = re.compile(r"\$env\{([^}]*)\}")
LIST_SEPARATOR = re.compile(r"\s*,\s*")

TRUE_VALUES = {"true"}
FALSE_VALUES = {"false"}
LIVENESS_VALUES = {"enable": True, "true": True, "disable": False, "false": False}


def resolve_value(variable: str) -> str:
    """Resolve ``$env{NAME}`` references from the process environment.

    Whitespace is stripped from values that carry a reference. Values
    without a reference are returned unchanged.
    """
    if ENV_REFERENCE not in variable:
        return variable

    variable = re.sub(r"\s+", "", variable)

    def substitute(match):
        name = match.group(1)
        value = os.environ.get(name)
        if value is None:
            raise EnvironmentVariableError(
                f"error resolving value: {name} is not set in the environment."
            )
        return value

    return ENV_PATTERN.sub(substitute, variable)


def normalize_name(name: str) -> str:
    """Lowercase a name and replace underscores with dashes."""
    return name.lower().replace("_", "-")


def parse_key_values(value: str) -> Dict[str, str]:
    """Parse ``"a:1, b:2"`` into ``{"a": "1", "b": "2"}``.

    A segment without a colon maps to an empty string. Empty segments left
    by stray commas are skipped.
    """
    value = value.strip()
    if not value:
        return {}

    result = {}
    for segment in LIST_SEPARATOR.split(value):
        if not segment:
            continue
        key, _, item = segment.partition(":")
        result[key] = item
    return result


def parse_labels(value: str) -> Dict[str, str]:
    """Parse a label string."""
    return parse_key_values(value)


def parse_env(value: str) -> Dict[str, str]:
    """Parse an environment variable string."""
    return parse_key_values(value)


def parse_bool(value: str, key: str) -> bool:
    """Parse ``true``/``false`` (case-insensitive)."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value for {key}: {value}")


def parse_int(value: str, key: str) -> int:
    """Parse a base-10 integer."""
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigError(f"Invalid integer value for {key}: {value}") from e


def parse_liveness(value: str, key: str) -> bool:
    """Parse the liveness switch (``enable``/``disable`` or a boolean)."""
    lowered = value.strip().lower()
    if lowered not in LIVENESS_VALUES:
        raise ConfigError(f"Invalid value for {key}: {value}")
    return LIVENESS_VALUES[lowered]
