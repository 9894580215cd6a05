"""Horizontal pod autoscaler model."""

from typing import Dict, Optional
from pydantic import BaseModel, Field


class PodAutoscalerModel(BaseModel):
    """Pod autoscaler specification."""
    name: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    min_replicas: int = Field(default=0, ge=0, description="0 means deployment replicas")
    max_replicas: int = Field(default=0, ge=0, description="0 means deployment replicas + 1")
    cpu_percentage: int = Field(default=50, ge=1, le=100)
    deployment: Optional[str] = Field(None, description="Scaled deployment name")

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True
