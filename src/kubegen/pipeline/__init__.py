"""Build pipeline: registry, linking and artifact generation."""

from kubegen.pipeline.engine import ArtifactPipeline, GenerationResult
from kubegen.pipeline.linker import LinkedModels, ModelLinker
from kubegen.pipeline.loader import ConfigLoader
from kubegen.pipeline.registry import ModelRegistry

__all__ = [
    "ArtifactPipeline",
    "ConfigLoader",
    "GenerationResult",
    "LinkedModels",
    "ModelLinker",
    "ModelRegistry",
]
