"""Tests for the model registry."""

import logging

from kubegen.models.service import IngressModel, ServiceModel
from kubegen.models.volume import SecretModel
from kubegen.pipeline.registry import ModelRegistry


class TestModelRegistry:
    """Test ModelRegistry."""

    def test_empty_registry(self):
        """Test a new registry holds nothing."""
        registry = ModelRegistry()

        assert registry.deployment_model is None
        assert registry.pod_autoscaler_model is None
        assert registry.ports == []
        assert registry.linked is False

    def test_ports_keep_order_without_repeats(self):
        """Test ports are ordered and unique."""
        registry = ModelRegistry()
        registry.add_port(9090)
        registry.add_port(8080)
        registry.add_port(9090)

        assert registry.ports == [9090, 8080]

    def test_endpoint_port(self):
        """Test endpoint ports are recorded and added to the port list."""
        registry = ModelRegistry()
        registry.add_endpoint_port("helloEP", 9090)

        assert registry.endpoint_ports == {"helloEP": 9090}
        assert registry.ports == [9090]

    def test_service_replacement_warns(self, caplog):
        """Test replacing an endpoint's service logs a warning."""
        registry = ModelRegistry()
        registry.add_service("helloEP", ServiceModel(name="first"))

        with caplog.at_level(logging.WARNING):
            registry.add_service("helloEP", ServiceModel(name="second"))

        assert registry.get_service("helloEP").name == "second"
        assert "Replacing service for endpoint helloEP" in caplog.text

    def test_ingress_bindings(self):
        """Test ingresses are bound to endpoint lists."""
        registry = ModelRegistry()
        ingress = IngressModel(name="hello-ingress")
        registry.add_ingress(ingress, ("helloEP",))

        assert registry.ingress_to_endpoints == [(ingress, ["helloEP"])]

    def test_endpoint_secrets(self):
        """Test secrets owned by an endpoint are tracked separately."""
        registry = ModelRegistry()
        owned = SecretModel(name="helloep-keystore", mount_path="/a")
        shared = SecretModel(name="private", mount_path="/b")
        registry.add_secrets([owned], endpoint_name="helloEP")
        registry.add_secrets([shared])

        assert registry.secrets == [owned, shared]
        assert registry.get_endpoint_secrets("helloEP") == [owned]
        assert registry.get_endpoint_secrets("otherEP") == []
