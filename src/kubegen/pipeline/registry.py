"""Build-scoped store of decoded models."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from kubegen.models.autoscaler import PodAutoscalerModel
from kubegen.models.deployment import DeploymentModel
from kubegen.models.service import IngressModel, ServiceModel
from kubegen.models.volume import ConfigMapModel, PersistentVolumeClaimModel, SecretModel


logger = logging.getLogger(__name__)


class ModelRegistry:
    """Holds every model decoded for one build.

    The registry is created by the caller, filled while decoding, and then
    handed to the linker exactly once. It is not shared between builds.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self.deployment_model: Optional[DeploymentModel] = None
        self.pod_autoscaler_model: Optional[PodAutoscalerModel] = None
        self.endpoint_to_service: Dict[str, ServiceModel] = {}
        self.endpoint_ports: Dict[str, int] = {}
        self.ingress_to_endpoints: List[Tuple[IngressModel, List[str]]] = []
        self.endpoint_secrets: Dict[str, List[SecretModel]] = {}
        self.secrets: List[SecretModel] = []
        self.config_maps: List[ConfigMapModel] = []
        self.volume_claims: List[PersistentVolumeClaimModel] = []
        self.ports: List[int] = []
        self.linked = False

    def set_deployment_model(self, deployment: DeploymentModel) -> None:
        """Set the declared deployment."""
        self.deployment_model = deployment

    def set_pod_autoscaler_model(self, autoscaler: PodAutoscalerModel) -> None:
        """Set the declared autoscaler."""
        self.pod_autoscaler_model = autoscaler

    def add_port(self, port: int) -> None:
        """Record a listener port, keeping declaration order and dropping repeats."""
        if port not in self.ports:
            self.ports.append(port)

    def add_endpoint_port(self, endpoint_name: str, port: int) -> None:
        """Record the listener port of an endpoint."""
        self.endpoint_ports[endpoint_name] = port
        self.add_port(port)

    def add_service(self, endpoint_name: str, service: ServiceModel) -> None:
        """Attach a service to an endpoint."""
        if endpoint_name in self.endpoint_to_service:
            logger.warning(f"Replacing service for endpoint {endpoint_name}")
        self.endpoint_to_service[endpoint_name] = service

    def add_ingress(self, ingress: IngressModel, endpoint_names: Iterable[str]) -> None:
        """Bind an ingress to one or more endpoints."""
        self.ingress_to_endpoints.append((ingress, list(endpoint_names)))

    def add_secrets(self, secrets: Iterable[SecretModel], endpoint_name: Optional[str] = None) -> None:
        """Add secrets, optionally owned by an endpoint."""
        secrets = list(secrets)
        self.secrets.extend(secrets)
        if endpoint_name is not None:
            self.endpoint_secrets.setdefault(endpoint_name, []).extend(secrets)

    def add_config_maps(self, config_maps: Iterable[ConfigMapModel]) -> None:
        """Add config maps."""
        self.config_maps.extend(config_maps)

    def add_volume_claims(self, volume_claims: Iterable[PersistentVolumeClaimModel]) -> None:
        """Add persistent volume claims."""
        self.volume_claims.extend(volume_claims)

    def get_service(self, endpoint_name: str) -> Optional[ServiceModel]:
        """Get the service attached to an endpoint."""
        return self.endpoint_to_service.get(endpoint_name)

    def get_endpoint_secrets(self, endpoint_name: str) -> List[SecretModel]:
        """Get the secrets owned by an endpoint."""
        return self.endpoint_secrets.get(endpoint_name, [])
