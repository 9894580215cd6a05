"""Pydantic models for decoded resource configuration."""

from kubegen.models.autoscaler import PodAutoscalerModel
from kubegen.models.config import GeneratorConfig
from kubegen.models.deployment import DeploymentModel
from kubegen.models.docker import DockerModel
from kubegen.models.service import IngressModel, ServiceModel
from kubegen.models.volume import ConfigMapModel, PersistentVolumeClaimModel, SecretModel

__all__ = [
    "GeneratorConfig",
    "DeploymentModel",
    "ServiceModel",
    "IngressModel",
    "SecretModel",
    "ConfigMapModel",
    "PersistentVolumeClaimModel",
    "PodAutoscalerModel",
    "DockerModel",
]
