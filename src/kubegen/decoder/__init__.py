"""Configuration decoding: raw key/value blocks to typed models."""

from kubegen.decoder.config import ConfigDecoder, ResourceKind
from kubegen.decoder.source import ConfigSource, iter_pairs
from kubegen.decoder.values import normalize_name, parse_labels, resolve_value

__all__ = [
    "ConfigDecoder",
    "ConfigSource",
    "ResourceKind",
    "iter_pairs",
    "normalize_name",
    "parse_labels",
    "resolve_value",
]
