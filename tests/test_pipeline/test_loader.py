"""Tests for the YAML configuration loader."""

import textwrap

import pytest

from kubegen.errors import ArtifactIOError, ConfigError
from kubegen.pipeline.loader import ConfigLoader
from kubegen.pipeline.registry import ModelRegistry


@pytest.fixture
def loader():
    """Create loader instance."""
    return ConfigLoader()


@pytest.fixture
def config_file(tmp_path):
    """Create a build description."""
    path = tmp_path / "kubegen.yaml"
    path.write_text(textwrap.dedent("""
        deployment:
          name: hello_world
          replicas: 2
          enableLiveness: enable
          labels: "team:core"
        podAutoscaler:
          cpuPercentage: 70
        endpoints:
          helloEP:
            port: 9090
            service:
              serviceType: NodePort
          adminEP:
            port: 9091
        ingresses:
          helloEP:
            config:
              hostname: abc.com
              path: /hello
    """))
    return path


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_load_file(self, loader, config_file):
        """Test every section is decoded into the registry."""
        registry = loader.load_file(config_file)

        deployment = registry.deployment_model
        assert deployment.name == "hello-world"
        assert deployment.replicas == 2
        assert deployment.enable_liveness is True
        assert deployment.labels == {"team": "core"}

        assert registry.pod_autoscaler_model.cpu_percentage == 70
        assert registry.ports == [9090, 9091]
        assert registry.endpoint_ports == {"helloEP": 9090, "adminEP": 9091}

        service = registry.get_service("helloEP")
        assert service.name == "helloep-svc"
        assert service.service_type == "NodePort"
        assert registry.get_service("adminEP") is None

        ingress, endpoints = registry.ingress_to_endpoints[0]
        assert ingress.name == "helloep-ingress"
        assert ingress.hostname == "abc.com"
        assert ingress.path == "/hello"
        assert endpoints == ["helloEP"]

    def test_load_into_existing_registry(self, loader):
        """Test loading fills a registry the caller provides."""
        registry = ModelRegistry()

        result = loader.load({"endpoints": {"helloEP": {"port": 9090}}}, registry)

        assert result is registry
        assert registry.ports == [9090]

    def test_ingress_with_explicit_endpoints(self, loader):
        """Test an ingress can be bound to named endpoints."""
        registry = loader.load({
            "ingresses": {"public": {"endpoints": ["helloEP", "adminEP"], "config": {}}},
        })

        ingress, endpoints = registry.ingress_to_endpoints[0]
        assert ingress.name == "public-ingress"
        assert endpoints == ["helloEP", "adminEP"]

    def test_secure_socket(self, loader, tmp_path):
        """Test secured endpoints register secrets they own."""
        (tmp_path / "ballerinaKeystore.p12").write_bytes(b"ks")
        (tmp_path / "ballerinaTruststore.p12").write_bytes(b"ts")

        registry = loader.load({
            "endpoints": {
                "helloEP": {
                    "port": 9095,
                    "secureSocket": {
                        "keyStore": {"filePath": str(tmp_path / "ballerinaKeystore.p12")},
                        "trustStore": {"filePath": str(tmp_path / "ballerinaTruststore.p12")},
                    },
                },
            },
        })

        assert [s.name for s in registry.secrets] == ["helloep-secure-socket"]
        assert registry.get_endpoint_secrets("helloEP") == registry.secrets

    def test_volume_sections(self, loader, tmp_path):
        """Test secret, config map and claim sections."""
        conf = tmp_path / "ballerina.conf"
        conf.write_text("mode=prod\n")

        registry = loader.load({
            "secrets": {"secrets": [{"name": "private", "mountPath": "/private", "data": [str(conf)]}]},
            "configMaps": {"configMaps": [{"name": "conf", "mountPath": "/conf", "data": [str(conf)]}]},
            "volumeClaims": {"volumeClaims": [{"name": "data", "mountPath": "/data", "volumeClaimSize": "1Gi"}]},
        })

        assert [s.name for s in registry.secrets] == ["private"]
        assert registry.get_endpoint_secrets("private") == []
        assert registry.config_maps[0].data == {"ballerina.conf": "mode=prod\n"}
        assert registry.volume_claims[0].volume_claim_size == "1Gi"

    def test_unknown_section(self, loader):
        """Test an unknown section fails."""
        with pytest.raises(ConfigError) as exc_info:
            loader.load({"services": {}})

        assert "services" in str(exc_info.value)

    def test_unknown_endpoint_key(self, loader):
        """Test an unknown endpoint key fails."""
        with pytest.raises(ConfigError):
            loader.load({"endpoints": {"helloEP": {"host": "0.0.0.0"}}})

    def test_empty_file(self, loader, tmp_path):
        """Test an empty file gives an empty registry."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        registry = loader.load_file(path)

        assert registry.deployment_model is None
        assert registry.ports == []

    def test_invalid_yaml(self, loader, tmp_path):
        """Test malformed YAML is a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("deployment: [unclosed\n")

        with pytest.raises(ConfigError):
            loader.load_file(path)

    def test_missing_file(self, loader, tmp_path):
        """Test a missing file is an I/O error."""
        with pytest.raises(ArtifactIOError):
            loader.load_file(tmp_path / "missing.yaml")
