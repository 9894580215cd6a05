"""Volume-backed resource models: secrets, config maps and volume claims."""

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field


class SecretModel(BaseModel):
    """Secret mounted into the deployment.

    ``data`` maps a file name to the base64 encoding of that file's bytes.
    """
    name: Optional[str] = None
    mount_path: Optional[str] = None
    data: Dict[str, str] = Field(default_factory=dict)
    read_only: bool = Field(default=True)

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True


class ConfigMapModel(BaseModel):
    """Config map mounted into the deployment.

    ``data`` maps a file name to the raw UTF-8 text of that file.
    """
    name: Optional[str] = None
    mount_path: Optional[str] = None
    data: Dict[str, str] = Field(default_factory=dict)
    read_only: bool = Field(default=True)

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True


class PersistentVolumeClaimModel(BaseModel):
    """Persistent volume claim mounted into the deployment."""
    name: Optional[str] = None
    mount_path: Optional[str] = None
    access_mode: Literal["ReadWriteOnce", "ReadOnlyMany", "ReadWriteMany"] = Field(
        default="ReadWriteOnce"
    )
    volume_claim_size: Optional[str] = Field(None, description="Storage request, e.g. 1Gi")
    read_only: bool = Field(default=False)

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True
