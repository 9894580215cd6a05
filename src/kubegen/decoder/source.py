"""The configuration source boundary.

A configuration block arrives as an ordered sequence of ``(key, value)``
pairs. A value is a scalar, a nested block or an array of blocks and
scalars. Mappings are accepted too and iterated in insertion order.
"""

from typing import Any, Iterable, Iterator, Mapping, Tuple, Union

from kubegen.errors import ConfigError


ConfigSource = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def iter_pairs(source: ConfigSource) -> Iterator[Tuple[str, Any]]:
    """Yield the ``(key, value)`` pairs of a block in declaration order."""
    if source is None:
        return
    if isinstance(source, Mapping):
        yield from ((str(key), value) for key, value in source.items())
        return
    if isinstance(source, (str, bytes)):
        raise ConfigError(f"Expected a configuration block, got: {source!r}")
    for pair in source:
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            raise ConfigError(f"Expected a (key, value) pair, got: {pair!r}")
        yield str(pair[0]), pair[1]


def as_text(key: str, value: Any) -> str:
    """Render a scalar value as the string form the decoder works with."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"Expected a scalar value for {key}, got: {type(value).__name__}")


def as_array(key: str, value: Any) -> list:
    """Return an array value, rejecting scalars and blocks."""
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigError(f"Expected an array value for {key}, got: {type(value).__name__}")
