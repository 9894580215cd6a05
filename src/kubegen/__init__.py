"""
kubegen - Kubernetes and Docker artifact generation.

Turns per-service configuration blocks into deployment manifests, a
Dockerfile and a built (and optionally pushed) container image.
"""

__version__ = "1.0.0"
__author__ = "kubegen Development Team"

# Re-export key components for easier access
from kubegen.decoder import ConfigDecoder
from kubegen.models.config import GeneratorConfig
from kubegen.pipeline import ArtifactPipeline, ConfigLoader, ModelRegistry

__all__ = [
    "ArtifactPipeline",
    "ConfigDecoder",
    "ConfigLoader",
    "GeneratorConfig",
    "ModelRegistry",
]
