"""Generator configuration models."""

from typing import Optional
from pydantic import BaseModel, Field, validator

from kubegen.constants import CONTAINER_BALLERINA_HOME


class GeneratorConfig(BaseModel):
    """Settings for one artifact generation run."""
    log_level: str = Field(default="INFO")
    ballerina_home: Optional[str] = Field(
        None, description="Local runtime home substituted for ${ballerina.home} when reading files"
    )
    container_ballerina_home: str = Field(default=CONTAINER_BALLERINA_HOME)
    docker_binary: str = Field(default="docker")
    debug_port: Optional[int] = Field(
        None, ge=1, le=65535, description="Start the runtime in debug mode on this port"
    )

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    class Config:
        """Pydantic config."""
        extra = "ignore"
