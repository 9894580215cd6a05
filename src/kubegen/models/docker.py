"""Docker image build model."""

from typing import List, Optional
from pydantic import BaseModel, Field

from kubegen.constants import DEFAULT_BASE_IMAGE, DEFAULT_DEBUG_PORT


class DockerModel(BaseModel):
    """Docker build and push specification derived from a deployment."""
    base_image: str = Field(default=DEFAULT_BASE_IMAGE)
    name: str = Field(..., description="Full image reference")
    tag: str = Field(default="latest")
    username: Optional[str] = None
    password: Optional[str] = None
    push: bool = Field(default=False)
    build_image: bool = Field(default=True)
    balx_file_name: str = Field(..., description="Staged binary file name")
    ports: List[int] = Field(default_factory=list)
    service: bool = Field(default=True)
    enable_debug: bool = Field(default=False)
    debug_port: int = Field(default=DEFAULT_DEBUG_PORT)
    docker_host: Optional[str] = None
    docker_cert_path: Optional[str] = None

    class Config:
        """Pydantic config."""
        extra = "forbid"
