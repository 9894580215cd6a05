"""Service and ingress models."""

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field


class ServiceModel(BaseModel):
    """Kubernetes service specification for one endpoint."""
    name: Optional[str] = Field(None, description="Service name")
    labels: Dict[str, str] = Field(default_factory=dict)
    service_type: Literal["ClusterIP", "NodePort", "LoadBalancer", "ExternalName"] = Field(
        default="ClusterIP"
    )
    port: int = Field(default=0, ge=0, description="0 means endpoint listener port")
    selector: Optional[str] = None

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True


class IngressModel(BaseModel):
    """Ingress specification."""
    name: Optional[str] = Field(None, description="Ingress name")
    labels: Dict[str, str] = Field(default_factory=dict)
    hostname: Optional[str] = None
    path: str = Field(default="/")
    target_path: Optional[str] = None
    ingress_class: str = Field(default="nginx")
    enable_tls: bool = Field(default=False)

    # Resolved from the bound endpoint's service
    service_name: Optional[str] = None
    service_port: int = Field(default=0, ge=0)

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True
