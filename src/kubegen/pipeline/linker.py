"""Cross-reference resolution and defaulting between decoded models."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from kubegen.constants import (
    DEPLOYMENT_POSTFIX,
    DOCKER_LATEST_TAG,
    HPA_POSTFIX,
    INGRESS_HOSTNAME_POSTFIX,
    INGRESS_POSTFIX,
    KUBERNETES_SELECTOR_KEY,
)
from kubegen.decoder.values import normalize_name
from kubegen.errors import ConfigError
from kubegen.models.autoscaler import PodAutoscalerModel
from kubegen.models.deployment import DeploymentModel
from kubegen.models.service import IngressModel, ServiceModel
from kubegen.models.volume import ConfigMapModel, PersistentVolumeClaimModel, SecretModel
from kubegen.pipeline.registry import ModelRegistry


logger = logging.getLogger(__name__)


@dataclass
class LinkedModels:
    """Models ready for rendering, in render order."""
    deployment: DeploymentModel
    services: List[ServiceModel] = field(default_factory=list)
    ingresses: List[IngressModel] = field(default_factory=list)
    secrets: List[SecretModel] = field(default_factory=list)
    config_maps: List[ConfigMapModel] = field(default_factory=list)
    volume_claims: List[PersistentVolumeClaimModel] = field(default_factory=list)
    pod_autoscaler: Optional[PodAutoscalerModel] = None


def default_deployment_model(artifact_name: str) -> DeploymentModel:
    """Deployment used when none was declared."""
    return DeploymentModel(
        name=normalize_name(artifact_name) + DEPLOYMENT_POSTFIX,
        labels={KUBERNETES_SELECTOR_KEY: artifact_name},
        image=artifact_name + DOCKER_LATEST_TAG,
    )


class ModelLinker:
    """Resolves references between the models of one registry.

    Values already present on a model are never overwritten; only absent
    fields are filled in.
    """

    def __init__(self, registry: ModelRegistry, artifact_name: str):
        """Initialize linker."""
        self.registry = registry
        self.artifact_name = artifact_name

    def link(self) -> LinkedModels:
        """Run the single linking pass for this registry."""
        if self.registry.linked:
            raise ConfigError("Models of this build have already been linked")
        self.registry.linked = True

        try:
            deployment = self.link_deployment()
            services = self.link_services()
            ingresses = self.link_ingresses()
            pod_autoscaler = self.link_autoscaler(deployment)
        except ValidationError as e:
            raise ConfigError(f"Invalid value while linking: {e.errors()[0].get('msg', e)}") from e

        self._check_volumes()
        return LinkedModels(
            deployment=deployment,
            services=services,
            ingresses=ingresses,
            secrets=list(self.registry.secrets),
            config_maps=list(self.registry.config_maps),
            volume_claims=list(self.registry.volume_claims),
            pod_autoscaler=pod_autoscaler,
        )

    def link_deployment(self) -> DeploymentModel:
        """Default the deployment and attach every model it aggregates."""
        deployment = self.registry.deployment_model
        if deployment is None:
            logger.debug("No deployment declared, using defaults")
            deployment = default_deployment_model(self.artifact_name)
            self.registry.set_deployment_model(deployment)

        if not deployment.name:
            deployment.name = normalize_name(self.artifact_name) + DEPLOYMENT_POSTFIX
        if not deployment.image:
            deployment.image = self.artifact_name + DOCKER_LATEST_TAG
        deployment.labels[KUBERNETES_SELECTOR_KEY] = self.artifact_name

        deployment.ports = list(self.registry.ports)
        deployment.pod_autoscaler = self.registry.pod_autoscaler_model
        deployment.secrets = list(self.registry.secrets)
        deployment.config_maps = list(self.registry.config_maps)
        deployment.volume_claims = list(self.registry.volume_claims)

        if deployment.enable_liveness and deployment.liveness_port == 0:
            if not deployment.ports:
                raise ConfigError(
                    f"Liveness probe enabled for {deployment.name} but no ports are declared"
                )
            deployment.liveness_port = deployment.ports[0]
        return deployment

    def link_services(self) -> List[ServiceModel]:
        """Point every service at the deployment's pods."""
        services = []
        for endpoint_name, service in self.registry.endpoint_to_service.items():
            service.labels[KUBERNETES_SELECTOR_KEY] = self.artifact_name
            if not service.selector:
                service.selector = self.artifact_name
            if service.port == 0:
                service.port = self.registry.endpoint_ports.get(endpoint_name, 0)
            if service.port == 0:
                raise ConfigError(f"Service {service.name} of endpoint {endpoint_name} has no port")
            services.append(service)
        return services

    def link_ingresses(self) -> List[IngressModel]:
        """Route each ingress to its endpoints' services.

        The registry's ingress bindings are read, not consumed; the linked
        ingresses are returned in declaration order. An ingress without a
        name or hostname takes them from its first endpoint.
        """
        linked = []
        for ingress, endpoint_names in list(self.registry.ingress_to_endpoints):
            if endpoint_names:
                owner = normalize_name(endpoint_names[0])
                if not ingress.name:
                    ingress.name = owner + INGRESS_POSTFIX
                if not ingress.hostname:
                    ingress.hostname = owner + INGRESS_HOSTNAME_POSTFIX
            for endpoint_name in endpoint_names:
                service = self.registry.get_service(endpoint_name)
                if service is None:
                    raise ConfigError(
                        f"Ingress {ingress.name} is bound to endpoint {endpoint_name} which has no service"
                    )
                ingress.service_name = service.name
                ingress.service_port = service.port
                if self.registry.get_endpoint_secrets(endpoint_name):
                    ingress.enable_tls = True
            ingress.labels[KUBERNETES_SELECTOR_KEY] = self.artifact_name
            linked.append(ingress)
        return linked

    def link_autoscaler(self, deployment: DeploymentModel) -> Optional[PodAutoscalerModel]:
        """Attach the declared autoscaler to the deployment."""
        autoscaler = self.registry.pod_autoscaler_model
        if autoscaler is None:
            return None

        autoscaler.labels[KUBERNETES_SELECTOR_KEY] = self.artifact_name
        autoscaler.deployment = deployment.name
        if autoscaler.max_replicas == 0:
            autoscaler.max_replicas = deployment.replicas + 1
        if autoscaler.min_replicas == 0:
            autoscaler.min_replicas = deployment.replicas
        if not autoscaler.name:
            autoscaler.name = normalize_name(self.artifact_name) + HPA_POSTFIX
        return autoscaler

    def _check_volumes(self) -> None:
        """Every mounted volume needs a name and a mount path."""
        volumes = [*self.registry.secrets, *self.registry.config_maps, *self.registry.volume_claims]
        for volume in volumes:
            kind = type(volume).__name__
            if not volume.name:
                raise ConfigError(f"{kind} declared without a name")
            if not volume.mount_path:
                raise ConfigError(f"{kind} {volume.name} declared without a mount path")
