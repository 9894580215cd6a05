"""Tests for value resolution and parsing."""

import pytest

from kubegen.decoder.source import as_array, as_text, iter_pairs
from kubegen.decoder.values import (
    normalize_name,
    parse_bool,
    parse_env,
    parse_int,
    parse_labels,
    parse_liveness,
    resolve_value,
)
from kubegen.errors import ConfigError, EnvironmentVariableError


class TestResolveValue:
    """Test environment reference resolution."""

    def test_plain_value_unchanged(self):
        """Test values without a reference are returned as-is."""
        assert resolve_value("hello world") == "hello world"

    def test_resolves_reference(self, monkeypatch):
        """Test a single reference is substituted."""
        monkeypatch.setenv("KUBEGEN_TEST_IMAGE", "registry.io/hello")
        assert resolve_value("$env{KUBEGEN_TEST_IMAGE}") == "registry.io/hello"

    def test_resolves_embedded_references(self, monkeypatch):
        """Test references inside a larger value."""
        monkeypatch.setenv("KUBEGEN_TEST_REPO", "registry.io")
        monkeypatch.setenv("KUBEGEN_TEST_TAG", "1.0")
        value = "$env{KUBEGEN_TEST_REPO}/hello:$env{KUBEGEN_TEST_TAG}"
        assert resolve_value(value) == "registry.io/hello:1.0"

    def test_strips_whitespace_when_referencing(self, monkeypatch):
        """Test whitespace is removed from values that carry a reference."""
        monkeypatch.setenv("KUBEGEN_TEST_PORT", "9090")
        assert resolve_value(" $env{ KUBEGEN_TEST_PORT } ") == "9090"

    def test_unset_variable(self, monkeypatch):
        """Test an unset variable fails resolution."""
        monkeypatch.delenv("KUBEGEN_TEST_MISSING", raising=False)

        with pytest.raises(EnvironmentVariableError) as exc_info:
            resolve_value("$env{KUBEGEN_TEST_MISSING}")

        assert str(exc_info.value) == (
            "error resolving value: KUBEGEN_TEST_MISSING is not set in the environment."
        )


class TestNormalizeName:
    """Test name normalization."""

    def test_lowercases_and_dashes(self):
        """Test underscores become dashes and case is lowered."""
        assert normalize_name("My_Service") == "my-service"

    @pytest.mark.parametrize("name", ["My_Service", "helloEP", "a_b_C", "already-normal"])
    def test_idempotent(self, name):
        """Test normalizing twice equals normalizing once."""
        assert normalize_name(normalize_name(name)) == normalize_name(name)


class TestParsers:
    """Test scalar parsers."""

    def test_parse_labels(self):
        """Test label string parsing."""
        assert parse_labels("a:1, b:2") == {"a": "1", "b": "2"}

    def test_parse_labels_without_colon(self):
        """Test a segment without a colon maps to an empty value."""
        assert parse_labels("a") == {"a": ""}

    def test_parse_labels_skips_empty_segments(self):
        """Test stray commas do not add an empty label."""
        assert parse_labels("a:1, b:2,") == {"a": "1", "b": "2"}
        assert parse_labels("a:1,,b:2") == {"a": "1", "b": "2"}
        assert parse_env("LOG_LEVEL:DEBUG, ") == {"LOG_LEVEL": "DEBUG"}

    def test_parse_labels_empty(self):
        """Test an empty label string gives no labels."""
        assert parse_labels("") == {}
        assert parse_labels("   ") == {}

    def test_parse_env(self):
        """Test environment variable string parsing."""
        assert parse_env("LOG_LEVEL:DEBUG,MODE:prod") == {"LOG_LEVEL": "DEBUG", "MODE": "prod"}

    @pytest.mark.parametrize("value,expected", [
        ("true", True),
        ("TRUE", True),
        ("false", False),
        ("False", False),
    ])
    def test_parse_bool(self, value, expected):
        """Test boolean parsing is case-insensitive."""
        assert parse_bool(value, "push") is expected

    def test_parse_bool_invalid(self):
        """Test an invalid boolean is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            parse_bool("yes", "push")

        assert "push" in str(exc_info.value)

    def test_parse_int(self):
        """Test integer parsing."""
        assert parse_int(" 9090 ", "port") == 9090

    def test_parse_int_invalid(self):
        """Test an invalid integer is rejected."""
        with pytest.raises(ConfigError):
            parse_int("ninety", "port")

    @pytest.mark.parametrize("value,expected", [
        ("enable", True),
        ("true", True),
        ("disable", False),
        ("false", False),
    ])
    def test_parse_liveness(self, value, expected):
        """Test the liveness switch."""
        assert parse_liveness(value, "enableLiveness") is expected

    def test_parse_liveness_invalid(self):
        """Test an invalid liveness value is rejected."""
        with pytest.raises(ConfigError):
            parse_liveness("sometimes", "enableLiveness")


class TestConfigSource:
    """Test the key/value source helpers."""

    def test_iter_pairs_mapping(self):
        """Test mappings are iterated in insertion order."""
        assert list(iter_pairs({"b": 1, "a": 2})) == [("b", 1), ("a", 2)]

    def test_iter_pairs_sequence(self):
        """Test pair sequences are accepted."""
        assert list(iter_pairs([("name", "x"), ["port", 1]])) == [("name", "x"), ("port", 1)]

    def test_iter_pairs_none(self):
        """Test a missing block yields nothing."""
        assert list(iter_pairs(None)) == []

    def test_iter_pairs_rejects_scalar(self):
        """Test a scalar is not a block."""
        with pytest.raises(ConfigError):
            list(iter_pairs("name"))

    def test_iter_pairs_rejects_bad_pair(self):
        """Test malformed pairs are rejected."""
        with pytest.raises(ConfigError):
            list(iter_pairs([("name",)]))

    def test_as_text(self):
        """Test scalar rendering."""
        assert as_text("push", True) == "true"
        assert as_text("push", False) == "false"
        assert as_text("port", 8080) == "8080"
        assert as_text("name", "hello") == "hello"

    def test_as_text_rejects_block(self):
        """Test blocks are not scalars."""
        with pytest.raises(ConfigError):
            as_text("name", {"a": 1})

    def test_as_array(self):
        """Test array values."""
        assert as_array("data", ("a", "b")) == ["a", "b"]
        with pytest.raises(ConfigError):
            as_array("data", "a")
