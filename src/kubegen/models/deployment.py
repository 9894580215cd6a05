"""Deployment specification models."""

import re
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, validator

from kubegen.constants import (
    DEFAULT_BASE_IMAGE,
    DEPLOYMENT_IMAGE_PULL_POLICY_DEFAULT,
    DEPLOYMENT_NAMESPACE_DEFAULT,
)
from kubegen.models.autoscaler import PodAutoscalerModel
from kubegen.models.volume import (
    ConfigMapModel,
    PersistentVolumeClaimModel,
    SecretModel,
)


DNS_1123_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")


class DeploymentModel(BaseModel):
    """Deployment specification."""
    name: Optional[str] = Field(None, description="Deployment name")
    namespace: str = Field(default=DEPLOYMENT_NAMESPACE_DEFAULT)
    labels: Dict[str, str] = Field(default_factory=dict)
    replicas: int = Field(default=1, ge=0)
    enable_liveness: bool = Field(default=False)
    liveness_port: int = Field(default=0, ge=0, description="0 means first declared port")
    initial_delay_seconds: int = Field(default=10, ge=0)
    period_seconds: int = Field(default=5, ge=0)
    image_pull_policy: Literal["Always", "IfNotPresent", "Never"] = Field(
        default=DEPLOYMENT_IMAGE_PULL_POLICY_DEFAULT
    )
    image: Optional[str] = Field(None, description="Target image reference")
    env: Dict[str, str] = Field(default_factory=dict)
    base_image: str = Field(default=DEFAULT_BASE_IMAGE)
    build_image: bool = Field(default=True)
    push: bool = Field(default=False)
    username: Optional[str] = None
    password: Optional[str] = None
    docker_host: Optional[str] = None
    docker_cert_path: Optional[str] = None

    # Filled in while linking
    ports: List[int] = Field(default_factory=list)
    pod_autoscaler: Optional[PodAutoscalerModel] = None
    secrets: List[SecretModel] = Field(default_factory=list)
    config_maps: List[ConfigMapModel] = Field(default_factory=list)
    volume_claims: List[PersistentVolumeClaimModel] = Field(default_factory=list)

    @validator("name")
    def validate_name(cls, v):
        """Validate deployment name is a DNS-1123 subdomain."""
        if v is not None and (len(v) > 253 or not DNS_1123_PATTERN.match(v)):
            raise ValueError(f"Invalid deployment name: {v}")
        return v

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True
