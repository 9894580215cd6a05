"""YAML configuration source feeding the model registry."""

import logging
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubegen.decoder.config import ConfigDecoder
from kubegen.decoder.source import ConfigSource, as_array, as_text, iter_pairs
from kubegen.decoder.values import parse_int, resolve_value
from kubegen.errors import ArtifactIOError, ConfigError
from kubegen.pipeline.registry import ModelRegistry


logger = logging.getLogger(__name__)


class ConfigLoader:
    """Reads a YAML build description and decodes it into a registry.

    Layout::

        deployment: {...}
        podAutoscaler: {...}
        secrets: {secrets: [...]}
        configMaps: {configMaps: [...]}
        volumeClaims: {volumeClaims: [...]}
        endpoints:
          <endpoint>: {port: 9090, service: {...}, secureSocket: {...}}
        ingresses:
          <name>: {endpoints: [<endpoint>], config: {...}}
    """

    def __init__(self, decoder: Optional[ConfigDecoder] = None):
        """Initialize loader."""
        self.decoder = decoder or ConfigDecoder()
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self._sections = {
            "deployment": self._load_deployment,
            "podAutoscaler": self._load_autoscaler,
            "secrets": self._load_secrets,
            "configMaps": self._load_config_maps,
            "volumeClaims": self._load_volume_claims,
            "endpoints": self._load_endpoints,
            "ingresses": self._load_ingresses,
        }

    def load_file(self, config_file: Path, registry: Optional[ModelRegistry] = None) -> ModelRegistry:
        """Load a YAML file into a registry."""
        config_file = Path(config_file)
        logger.info(f"Loading configuration from {config_file}")
        try:
            data = self.yaml.load(config_file.read_text(encoding="utf-8"))
        except OSError as e:
            raise ArtifactIOError(f"Unable to read configuration file {config_file}") from e
        except YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        return self.load(data or {}, registry)

    def load(self, source: ConfigSource, registry: Optional[ModelRegistry] = None) -> ModelRegistry:
        """Decode every section of a build description."""
        registry = registry if registry is not None else ModelRegistry()
        for key, value in iter_pairs(source):
            section = self._sections.get(key)
            if section is None:
                raise ConfigError(f"Unknown configuration section: {key}")
            section(registry, value)
        logger.debug(
            f"Loaded {len(registry.endpoint_to_service)} service(s), "
            f"{len(registry.ingress_to_endpoints)} ingress(es), {len(registry.secrets)} secret(s)"
        )
        return registry

    def _load_deployment(self, registry: ModelRegistry, value: Any) -> None:
        registry.set_deployment_model(self.decoder.decode_deployment(value))

    def _load_autoscaler(self, registry: ModelRegistry, value: Any) -> None:
        registry.set_pod_autoscaler_model(self.decoder.decode_autoscaler(value))

    def _load_secrets(self, registry: ModelRegistry, value: Any) -> None:
        registry.add_secrets(self.decoder.decode_secrets(value))

    def _load_config_maps(self, registry: ModelRegistry, value: Any) -> None:
        registry.add_config_maps(self.decoder.decode_config_maps(value))

    def _load_volume_claims(self, registry: ModelRegistry, value: Any) -> None:
        registry.add_volume_claims(self.decoder.decode_volume_claims(value))

    def _load_endpoints(self, registry: ModelRegistry, value: Any) -> None:
        """Each endpoint may carry a listener port, a service and a secured transport."""
        for endpoint_name, endpoint in iter_pairs(value):
            for key, item in iter_pairs(endpoint):
                if key == "port":
                    port = parse_int(resolve_value(as_text(key, item)), key)
                    registry.add_endpoint_port(endpoint_name, port)
                elif key == "service":
                    registry.add_service(endpoint_name, self.decoder.decode_service(endpoint_name, item))
                elif key == "secureSocket":
                    secrets = self.decoder.decode_secure_socket(endpoint_name, item)
                    registry.add_secrets(secrets, endpoint_name=endpoint_name)
                else:
                    raise ConfigError(f"Unknown key {key} for endpoint {endpoint_name}")

    def _load_ingresses(self, registry: ModelRegistry, value: Any) -> None:
        """Each ingress binds a config block to endpoints, defaulting to its own name."""
        for name, binding in iter_pairs(value):
            endpoint_names = [name]
            config: Any = {}
            for key, item in iter_pairs(binding):
                if key == "endpoints":
                    endpoint_names = [as_text(key, endpoint) for endpoint in as_array(key, item)]
                elif key == "config":
                    config = item
                else:
                    raise ConfigError(f"Unknown key {key} for ingress {name}")
            registry.add_ingress(self.decoder.decode_ingress(name, config), endpoint_names)
