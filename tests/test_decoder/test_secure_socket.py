"""Tests for secured transport secret extraction."""

import base64
from pathlib import PurePosixPath

import pytest

from kubegen.decoder.secure_socket import (
    process_secure_socket,
    read_config_map_file,
    read_secret_file,
    resolve_mount_path,
)
from kubegen.errors import ArtifactIOError, EnvironmentVariableError
from kubegen.models.config import GeneratorConfig


@pytest.fixture
def config():
    """Create generator config without a runtime home."""
    return GeneratorConfig()


@pytest.fixture
def security_dir(tmp_path):
    """Create a directory holding a key store and a trust store."""
    directory = tmp_path / "security"
    directory.mkdir()
    (directory / "ballerinaKeystore.p12").write_bytes(b"\x00keystore\xff")
    (directory / "ballerinaTruststore.p12").write_bytes(b"\x00truststore\xff")
    return directory


def _socket(key_store, trust_store):
    block = {}
    if key_store:
        block["keyStore"] = {"filePath": str(key_store), "password": "ballerina"}
    if trust_store:
        block["trustStore"] = {"filePath": str(trust_store), "password": "ballerina"}
    return block


class TestProcessSecureSocket:
    """Test key and trust store secrets."""

    def test_same_parent_gives_one_secret(self, config, security_dir):
        """Test stores sharing a directory collapse into one secret."""
        key_store = security_dir / "ballerinaKeystore.p12"
        trust_store = security_dir / "ballerinaTruststore.p12"

        secrets = process_secure_socket("hello_EP", _socket(key_store, trust_store), config)

        assert len(secrets) == 1
        secret = secrets[0]
        assert secret.name == "hello-ep-secure-socket"
        assert secret.mount_path == str(PurePosixPath(str(key_store)).parent)
        assert set(secret.data) == {"ballerinaKeystore.p12", "ballerinaTruststore.p12"}
        assert base64.b64decode(secret.data["ballerinaKeystore.p12"]) == b"\x00keystore\xff"

    def test_different_parents_give_two_secrets(self, config, security_dir, tmp_path):
        """Test stores in different directories produce one secret each."""
        other_dir = tmp_path / "trust"
        other_dir.mkdir()
        trust_store = other_dir / "ballerinaTruststore.p12"
        trust_store.write_bytes(b"trust")

        secrets = process_secure_socket(
            "helloEP",
            _socket(security_dir / "ballerinaKeystore.p12", trust_store),
            config,
        )

        assert [secret.name for secret in secrets] == ["helloep-keystore", "helloep-truststore"]
        assert secrets[0].mount_path == str(security_dir)
        assert secrets[1].mount_path == str(other_dir)
        assert base64.b64decode(secrets[1].data["ballerinaTruststore.p12"]) == b"trust"

    def test_key_store_only(self, config, security_dir):
        """Test a single store gives a single secret."""
        secrets = process_secure_socket(
            "helloEP", _socket(security_dir / "ballerinaKeystore.p12", None), config
        )

        assert len(secrets) == 1
        assert secrets[0].name == "helloep-keystore"

    def test_no_stores(self, config):
        """Test a block without stores gives no secrets."""
        assert process_secure_socket("helloEP", {"protocol": {"name": "TLS"}}, config) == []

    def test_runtime_home_placeholder(self, tmp_path):
        """Test the placeholder is resolved locally for reading and in-container for mounting."""
        security_dir = tmp_path / "bre" / "security"
        security_dir.mkdir(parents=True)
        (security_dir / "ballerinaKeystore.p12").write_bytes(b"ks")
        (security_dir / "ballerinaTruststore.p12").write_bytes(b"ts")
        config = GeneratorConfig(ballerina_home=str(tmp_path))

        secrets = process_secure_socket(
            "helloEP",
            _socket(
                "${ballerina.home}/bre/security/ballerinaKeystore.p12",
                "${ballerina.home}/bre/security/ballerinaTruststore.p12",
            ),
            config,
        )

        assert len(secrets) == 1
        assert secrets[0].mount_path == "/ballerina/runtime/bre/security"
        assert base64.b64decode(secrets[0].data["ballerinaTruststore.p12"]) == b"ts"

    def test_placeholder_without_runtime_home(self, config):
        """Test the placeholder cannot be read without a runtime home."""
        with pytest.raises(EnvironmentVariableError):
            process_secure_socket(
                "helloEP",
                _socket("${ballerina.home}/bre/security/ballerinaKeystore.p12", None),
                config,
            )

    def test_missing_store_file(self, config, tmp_path):
        """Test a missing store file fails."""
        with pytest.raises(ArtifactIOError):
            process_secure_socket("helloEP", _socket(tmp_path / "missing.p12", None), config)


class TestFileContent:
    """Test secret and config map file encodings."""

    def test_secret_round_trip(self, config, tmp_path):
        """Test secret data decodes to the original bytes."""
        content = bytes(range(256))
        path = tmp_path / "blob.bin"
        path.write_bytes(content)

        assert base64.b64decode(read_secret_file(str(path), config)) == content

    def test_config_map_round_trip(self, config, tmp_path):
        """Test config map data equals the original text."""
        text = "[b7a.users]\nname = \"héllo\"\n"
        path = tmp_path / "ballerina.conf"
        path.write_text(text, encoding="utf-8")

        assert read_config_map_file(str(path), config) == text

    def test_config_map_rejects_binary(self, config, tmp_path):
        """Test non UTF-8 content is rejected."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ArtifactIOError):
            read_config_map_file(str(path), config)

    def test_mount_path_is_parent(self, config):
        """Test the mount path is the file's parent directory."""
        assert resolve_mount_path("/home/ballerina/conf/ballerina.conf", config) == "/home/ballerina/conf"
